"""
FastAPI application for the kitchen order relay.

This application provides:
1. The storefront page (/)
2. Order intake (/api/orders), which records the order and pings Discord
3. A health check (/health)

Run with:
    uv run uvicorn api.main:app --reload

Then visit http://localhost:8000/docs for interactive API documentation.
"""

import logging
from contextlib import asynccontextmanager
from functools import lru_cache
from pathlib import Path
from typing import Optional

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import BaseModel

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(name)-24s | %(levelname)-5s | %(message)s",
    datefmt="%H:%M:%S",
)

from services.ordering import OrderingService
from shared.config import get_settings
from shared.models import OrderSubmission
from shared.order_store import OrderStore, get_order_store
from shared.webhook import DiscordWebhook

logger = logging.getLogger("api")


# Response models
class OrderAccepted(BaseModel):
    """Acknowledgment returned once an order is recorded."""
    success: bool = True
    orderId: str
    message: str = "Order received successfully"


class OrderFailed(BaseModel):
    """Body returned when an order could not be processed."""
    success: bool = False
    message: str = "Error processing order"


# Module-level instances (would use proper DI in production)
_store: Optional[OrderStore] = None
_webhook: Optional[DiscordWebhook] = None


def get_store() -> OrderStore:
    """Get the order store instance."""
    global _store
    if _store is None:
        _store = get_order_store()
    return _store


def get_webhook() -> DiscordWebhook:
    """Get the Discord webhook instance."""
    global _webhook
    if _webhook is None:
        settings = get_settings()
        _webhook = DiscordWebhook(
            url=settings.discord_webhook_url,
            display_timezone=settings.display_timezone,
        )
    return _webhook


def reset_api_state(
    store: Optional[OrderStore] = None,
    webhook: Optional[DiscordWebhook] = None,
) -> None:
    """Reset API state (for testing)."""
    global _store, _webhook
    _store = store
    _webhook = webhook


def get_ordering_service(
    store: OrderStore = Depends(get_store),
    webhook: DiscordWebhook = Depends(get_webhook),
) -> OrderingService:
    return OrderingService(order_store=store, webhook=webhook)


@lru_cache(maxsize=4)
def load_storefront_page(path: Path) -> str:
    """Read the storefront HTML once per path."""
    return path.read_text(encoding="utf-8")


# Application lifespan
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown."""
    settings = get_settings()
    logger.info(f"🚀 Server running on port {settings.port}")
    logger.info(f"📱 Website: http://localhost:{settings.port}")
    logger.info(
        f"🔔 Discord Webhook: {'✅ Configured' if settings.webhook_configured else '❌ Not configured'}"
    )
    yield
    logger.info("Shutting down")


# Create the FastAPI app
app = FastAPI(
    title="Kitchen Order Relay",
    description="""
    Receives orders from the storefront page and relays them to the kitchen's Discord channel.

    ## Endpoints

    - `/` - Storefront page
    - `/api/orders` - Submit an order
    - `/health` - Health check
    """,
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_allowed_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Health Check
# =============================================================================

@app.get("/health", tags=["Health"])
def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "kitchen-order-relay"}


# =============================================================================
# Storefront
# =============================================================================

@app.get("/", response_class=HTMLResponse, tags=["Storefront"])
def storefront():
    """Serve the storefront page as-is."""
    return HTMLResponse(load_storefront_page(get_settings().storefront_page))


# =============================================================================
# Orders
# =============================================================================

@app.post(
    "/api/orders",
    response_model=OrderAccepted,
    responses={500: {"model": OrderFailed}},
    tags=["Orders"],
)
async def create_order(
    submission: OrderSubmission,
    service: OrderingService = Depends(get_ordering_service),
):
    """
    Submit an order.

    The order is recorded and the kitchen is notified before responding.
    A failed notification does not fail the order.
    """
    try:
        order = await service.place_order(submission)
    except Exception:
        logger.exception("Error processing order")
        return JSONResponse(status_code=500, content=OrderFailed().model_dump())

    return OrderAccepted(orderId=order.id)


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port)
