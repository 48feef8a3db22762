"""
In-memory order store.

Orders live for the lifetime of the process. The store is the only owner
of the underlying list so a persistent backend can replace it later without
touching the recorder or the notification code.

Design decisions:
- Append and read only, there is no removal operation
- Insertion order is preserved
- Callers get copies of the list, never the list itself
- Module-level singleton for the running app, fresh instances in tests
"""

import logging
from typing import Optional

from shared.models import OrderRecord

logger = logging.getLogger("orders")


class OrderStore:
    """
    Process-lifetime collection of recorded orders.

    Example:
        store = OrderStore()
        store.add(record)
        store.list_orders()  # [record]
    """

    def __init__(self):
        self._orders: list[OrderRecord] = []

    def add(self, order: OrderRecord) -> OrderRecord:
        """Append an order and return it."""
        self._orders.append(order)
        logger.debug(f"Stored order {order.id} ({len(self._orders)} total)")
        return order

    def list_orders(self) -> list[OrderRecord]:
        """Get all orders in the order they were received."""
        return list(self._orders)

    def get(self, order_id: str) -> Optional[OrderRecord]:
        """
        Get an order by ID.

        IDs may collide when two orders land in the same millisecond; the
        earliest match is returned.
        """
        for order in self._orders:
            if order.id == order_id:
                return order
        return None

    def count(self) -> int:
        """Number of orders received so far."""
        return len(self._orders)

    def __len__(self) -> int:
        return len(self._orders)


_default_store: Optional[OrderStore] = None


def get_order_store() -> OrderStore:
    """Get the default order store singleton."""
    global _default_store
    if _default_store is None:
        _default_store = OrderStore()
    return _default_store
