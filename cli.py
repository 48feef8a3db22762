#!/usr/bin/env python3
"""
Command-line interface for the kitchen order relay.

Usage:
    uv run python cli.py [command] [options]

Commands:
    serve       Start the API server
    test        Run the test suite

Examples:
    uv run python cli.py serve
    uv run python cli.py serve --port 8080 --reload
    uv run python cli.py test -v
"""

import argparse
import subprocess
import sys
from typing import Optional

import uvicorn

from shared.config import get_settings


def run_tests(pytest_args: list[str]) -> int:
    """Run the test suite with this interpreter and return pytest's exit code."""
    cmd = [sys.executable, "-m", "pytest", *pytest_args]
    return subprocess.run(cmd).returncode


def run_server(host: str, port: int, reload: bool) -> None:
    """Start the API server."""
    print(f"Starting server at http://{host}:{port}")
    print(f"API docs available at http://{host}:{port}/docs")
    uvicorn.run("api.main:app", host=host, port=port, reload=reload)


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        description="Kitchen Order Relay CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s serve
  %(prog)s serve --port 8080 --reload
  %(prog)s test -v
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Test command: every argument after "test" goes to pytest untouched
    subparsers.add_parser(
        "test",
        help="Run the test suite (extra arguments are passed to pytest)",
        add_help=False,
    )

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Start the API server")
    serve_parser.add_argument("--host", default=settings.host, help="Host to bind to")
    serve_parser.add_argument("--port", type=int, default=settings.port, help="Port to bind to")
    serve_parser.add_argument("--reload", action="store_true", help="Enable auto-reload")

    return parser


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments, forwarding pytest options verbatim."""
    argv = sys.argv[1:] if argv is None else list(argv)
    parser = build_parser()
    args, extra = parser.parse_known_args(argv)

    if args.command == "test":
        args.pytest_args = argv[argv.index("test") + 1:]
    elif extra:
        parser.error(f"unrecognized arguments: {' '.join(extra)}")
    return args


def main(argv: Optional[list[str]] = None) -> None:
    """Main CLI entry point."""
    args = parse_args(argv)

    if args.command == "test":
        sys.exit(run_tests(args.pytest_args))
    elif args.command == "serve":
        run_server(args.host, args.port, args.reload)
    else:
        build_parser().print_help()


if __name__ == "__main__":
    main()
