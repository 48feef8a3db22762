"""
Ordering service: records submissions and notifies the kitchen.

This is the whole request flow behind POST /api/orders:
1. Turn the submission into a canonical OrderRecord
2. Append it to the order store
3. Send the Discord notification and wait for the attempt to finish

The notification outcome never affects whether the order is accepted.
Unexpected errors while building or storing the record propagate to the
caller, which reports them as a server error.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from shared.models import OrderRecord, OrderStatus, OrderSubmission, format_timestamp
from shared.order_store import OrderStore, get_order_store
from shared.webhook import DiscordWebhook

logger = logging.getLogger("ordering_service")

# Keys owned by the recorder, in both wire and Python spelling
RECORDER_FIELDS = ("id", "status", "createdAt", "created_at")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def order_id_for(moment: datetime) -> str:
    """Order IDs are the recording time in milliseconds since epoch."""
    return str(int(moment.timestamp()) * 1000 + moment.microsecond // 1000)


def build_order_record(submission: OrderSubmission, now: datetime) -> OrderRecord:
    """
    Merge a submission with the recorder-owned fields.

    Whatever the caller sent as id/status/createdAt is discarded; the
    recorder values are applied last.
    """
    data = {
        key: value
        for key, value in submission.model_dump(by_alias=True, exclude_unset=True).items()
        if key not in RECORDER_FIELDS
    }
    data.update(
        id=order_id_for(now),
        status=OrderStatus.PENDING,
        createdAt=format_timestamp(now),
    )
    return OrderRecord.model_validate(data)


class OrderingService:
    """
    Accepts orders and relays them to the kitchen channel.

    Example:
        service = OrderingService(order_store, webhook)
        record = await service.place_order(submission)
    """

    def __init__(
        self,
        order_store: Optional[OrderStore] = None,
        webhook: Optional[DiscordWebhook] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        # OrderStore defines __len__, so an empty store is falsy
        self.order_store = order_store if order_store is not None else get_order_store()
        self.webhook = webhook if webhook is not None else DiscordWebhook()
        self.clock = clock

    def record(self, submission: OrderSubmission) -> OrderRecord:
        """Create the canonical record for a submission and store it."""
        order = build_order_record(submission, self.clock())
        self.order_store.add(order)
        return order

    async def place_order(self, submission: OrderSubmission) -> OrderRecord:
        """
        Record an order and notify the kitchen.

        The notification attempt is awaited but its outcome is only logged.
        """
        order = self.record(submission)

        result = await self.webhook.notify(order)
        if not result.success and not result.skipped:
            logger.warning(f"Order {order.id} accepted without kitchen notification: {result.error}")

        logger.info(f"New order received: {order.to_wire()}")
        return order
