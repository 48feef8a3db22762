"""
Runtime configuration read from the environment.

A `.env` file in the working directory is loaded first, so local setups
can keep the webhook URL out of the shell history.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

DEFAULT_PORT = 3000
DEFAULT_HOST = "127.0.0.1"
DEFAULT_TIMEZONE = "Europe/London"
DEFAULT_STOREFRONT_PAGE = Path(__file__).parent.parent / "static" / "index.html"


def _split_origins(raw: str) -> list[str]:
    origins = [origin.strip() for origin in raw.split(",") if origin.strip()]
    return origins or ["*"]


@dataclass
class Settings:
    """Everything the server needs from its environment."""
    port: int = DEFAULT_PORT
    host: str = DEFAULT_HOST
    discord_webhook_url: str = ""
    display_timezone: str = DEFAULT_TIMEZONE
    cors_allowed_origins: list[str] = field(default_factory=lambda: ["*"])
    storefront_page: Path = DEFAULT_STOREFRONT_PAGE

    @property
    def webhook_configured(self) -> bool:
        return bool(self.discord_webhook_url)

    @classmethod
    def from_env(cls, environ: Optional[dict[str, str]] = None) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            environ: Mapping to read from. Defaults to os.environ.

        Raises:
            ValueError: If PORT is not an integer
        """
        env = os.environ if environ is None else environ
        return cls(
            port=int(env.get("PORT") or DEFAULT_PORT),
            host=env.get("HOST") or DEFAULT_HOST,
            discord_webhook_url=(env.get("DISCORD_WEBHOOK_URL") or "").strip(),
            display_timezone=env.get("DISPLAY_TIMEZONE") or DEFAULT_TIMEZONE,
            cors_allowed_origins=_split_origins(env.get("CORS_ALLOWED_ORIGINS", "")),
            storefront_page=Path(env.get("STOREFRONT_PAGE") or DEFAULT_STOREFRONT_PAGE),
        )


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the settings for this process, reading the environment once."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings
