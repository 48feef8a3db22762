"""
Shared infrastructure for the kitchen order relay.

This package contains:
- Domain models (OrderSubmission, OrderRecord, ...)
- The in-memory order store
- Discord embed rendering and the webhook notifier
- Runtime configuration
"""

from shared.models import (
    OrderItem,
    CustomerInfo,
    PickupDetails,
    OrderSubmission,
    OrderRecord,
    OrderStatus,
)
from shared.order_store import OrderStore
from shared.webhook import DiscordWebhook, NotificationResult

__all__ = [
    "OrderItem",
    "CustomerInfo",
    "PickupDetails",
    "OrderSubmission",
    "OrderRecord",
    "OrderStatus",
    "OrderStore",
    "DiscordWebhook",
    "NotificationResult",
]
