"""
Discord webhook notifier for new orders.

Posts the rendered order embed to the kitchen's Discord channel. Delivery
is best effort: one attempt per order, failures are logged and reported
back as a result, never raised.

Design decisions:
- One POST per order, no retry, no queue
- Missing webhook URL disables sending without touching order recording
- The HTTP client can be injected so tests can swap the transport
- Only the most recent results are kept, for test assertions and debugging
"""

import logging
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

import httpx

from shared.embeds import build_webhook_payload
from shared.models import OrderRecord

logger = logging.getLogger("notifications")

HISTORY_LIMIT = 100


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class NotificationResult:
    """
    Result of a webhook delivery attempt.

    Captures success/failure for logging at the call site and for testing.
    """
    success: bool
    order_id: str
    skipped: bool = False
    status_code: Optional[int] = None
    error: Optional[str] = None
    timestamp: datetime = field(default_factory=_utcnow)

    def __str__(self) -> str:
        if self.skipped:
            return f"- WEBHOOK skipped for order {self.order_id}"
        status = "✓" if self.success else "✗"
        detail = f" ({self.error})" if self.error else ""
        return f"{status} WEBHOOK for order {self.order_id}{detail}"


class DiscordWebhook:
    """
    Sends order notifications to a Discord webhook.

    Example:
        webhook = DiscordWebhook("https://discord.com/api/webhooks/...")
        result = await webhook.notify(record)
    """

    def __init__(
        self,
        url: Optional[str] = None,
        display_timezone: str = "Europe/London",
        client: Optional[httpx.AsyncClient] = None,
        history_limit: int = HISTORY_LIMIT,
    ):
        """
        Initialize the notifier.

        Args:
            url: Webhook URL. Empty or None disables sending.
            display_timezone: Zone used for the "Order Placed" text
            client: HTTP client to send with. A short-lived client is
                    created per send when omitted.
            history_limit: How many recent results to keep
        """
        self.url = url or ""
        self.display_timezone = display_timezone
        self.client = client
        self.results: deque[NotificationResult] = deque(maxlen=history_limit)

    @property
    def configured(self) -> bool:
        return bool(self.url)

    async def notify(self, order: OrderRecord) -> NotificationResult:
        """
        Send the notification for an order.

        Never raises: every failure is logged and returned as a result.
        """
        if not self.configured:
            logger.info("Discord webhook not configured")
            result = NotificationResult(success=False, skipped=True, order_id=order.id)
        else:
            result = await self._send(order)
        self.results.append(result)
        return result

    async def _send(self, order: OrderRecord) -> NotificationResult:
        try:
            payload = build_webhook_payload(order, self.display_timezone)
            response = await self._post(payload)
        except Exception as e:
            logger.error(f"Error sending Discord notification for order {order.id}: {e!r}")
            return NotificationResult(success=False, order_id=order.id, error=str(e) or repr(e))

        if response.is_success:
            logger.info(f"Discord notification sent successfully for order {order.id}")
            return NotificationResult(
                success=True,
                order_id=order.id,
                status_code=response.status_code,
            )

        logger.error(
            f"Failed to send Discord notification for order {order.id}: "
            f"{response.status_code} {response.reason_phrase}"
        )
        return NotificationResult(
            success=False,
            order_id=order.id,
            status_code=response.status_code,
            error=response.reason_phrase,
        )

    async def _post(self, payload: dict) -> httpx.Response:
        if self.client is not None:
            return await self.client.post(self.url, json=payload)
        async with httpx.AsyncClient() as client:
            return await client.post(self.url, json=payload)

    def get_sent_count(self) -> int:
        """Number of successful deliveries among the kept results."""
        return sum(1 for r in self.results if r.success)

    def clear_history(self):
        """Clear delivery history (useful between tests)."""
        self.results.clear()
