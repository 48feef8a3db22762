"""
Domain services for the kitchen order relay.

- OrderingService: records orders and notifies the kitchen
"""

from services.ordering import OrderingService, build_order_record

__all__ = ["OrderingService", "build_order_record"]
