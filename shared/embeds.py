"""
Discord embed rendering for order notifications.

This module turns a recorded order into the JSON document the kitchen's
Discord channel displays. The output is consumed by people reading a chat
channel, so the wording, emoji and field order are fixed.

Design decisions:
- Rendering is pure: same order and timezone in, same document out
- Field values use Discord markdown (**bold**) and newlines
- Unknown payment/contact methods fall back to a default label
- Missing submission fields render as a placeholder instead of failing

Example payload:
    {
        "content": "🔔 **NEW ORDER ALERT!** 🔔",
        "embeds": [{"title": "🆕 New Order Received!", "color": 16766720, ...}]
    }
"""

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Any, Optional
from zoneinfo import ZoneInfo

from shared.models import (
    ContactMethod,
    OrderItem,
    OrderRecord,
    PaymentMethod,
    format_timestamp,
)


# =============================================================================
# Fixed Text
# =============================================================================

ALERT_CONTENT = "🔔 **NEW ORDER ALERT!** 🔔"
EMBED_TITLE = "🆕 New Order Received!"
EMBED_COLOR = 0xFFD700  # Gold
FOOTER_TEXT = "Farha's Kitchen Order System"
NO_ITEMS_TEXT = "No items"
MISSING_VALUE = "N/A"
CURRENCY_SYMBOL = "£"
PENNY = Decimal("0.01")
FIXED_NOTATION_LIMIT = 1e21
MONEY_PRECISION = 40

PAYMENT_LABELS = {
    PaymentMethod.PAYPAL.value: "PayPal",
}
DEFAULT_PAYMENT_LABEL = "Pay at Pickup"

CONTACT_LABELS = {
    ContactMethod.WHATSAPP.value: "✅ WhatsApp",
}
DEFAULT_CONTACT_LABEL = "📧 Email"


@dataclass
class EmbedField:
    """A single name/value row of a Discord embed."""
    name: str
    value: str
    inline: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "value": self.value, "inline": self.inline}


# =============================================================================
# Value Formatting
# =============================================================================

def _as_number(value: Any) -> Optional[float]:
    """Read a JSON value as a number, the way the storefront's script would."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int) and abs(value) >= FIXED_NOTATION_LIMIT:
        try:
            return float(value)
        except OverflowError:
            return math.copysign(math.inf, value)
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _js_number_text(value: float) -> str:
    """Text of a number too large or not finite for fixed notation."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    return repr(float(value))


def format_money(amount: Any) -> str:
    """
    Format an amount in pounds with two decimals, e.g. 9 -> '9.00'.

    Exact ties round away from zero (0.125 -> '0.13'); binary floats just
    under a tie round down (1.005 -> '1.00'). Amounts of 1e21 and above,
    and non-finite ones, keep their plain number text ('1e+27', 'Infinity').
    Anything that is not a number counts as zero.
    """
    number = _as_number(amount) or 0
    if not math.isfinite(number) or abs(number) >= FIXED_NOTATION_LIMIT:
        return _js_number_text(number)
    with localcontext() as ctx:
        ctx.prec = MONEY_PRECISION
        return str(Decimal(number).quantize(PENNY, rounding=ROUND_HALF_UP))


def format_quantity(quantity: Any) -> str:
    """Format a quantity without a trailing '.0' for whole numbers."""
    if quantity is None:
        return MISSING_VALUE
    if isinstance(quantity, float) and quantity.is_integer():
        return str(int(quantity))
    return _text(quantity)


def _text(value: Any) -> str:
    if value is None or value == "":
        return MISSING_VALUE
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def format_item_line(item: OrderItem) -> str:
    """Format one basket line, e.g. '2x Curry - £9.00'."""
    return (
        f"{format_quantity(item.quantity)}x {_text(item.name)} "
        f"- {CURRENCY_SYMBOL}{format_money(item.total)}"
    )


def format_item_list(items: list[OrderItem]) -> str:
    """
    Format the basket, one line per item.

    Returns:
        Newline-joined lines, or 'No items' for an empty basket
    """
    lines = [format_item_line(item) for item in items]
    return "\n".join(lines) or NO_ITEMS_TEXT


def payment_label(payment_method: Any) -> str:
    """Map a payment method to its display label."""
    if not isinstance(payment_method, str):
        return DEFAULT_PAYMENT_LABEL
    return PAYMENT_LABELS.get(payment_method, DEFAULT_PAYMENT_LABEL)


def contact_label(contact_method: Any) -> str:
    """Map a contact method to its display label."""
    if not isinstance(contact_method, str):
        return DEFAULT_CONTACT_LABEL
    return CONTACT_LABELS.get(contact_method, DEFAULT_CONTACT_LABEL)


def format_placed_at(created_at: datetime, display_timezone: str) -> str:
    """
    Render a timestamp in British English long form.

    Full date style with a short time, e.g. 'Monday 1 January 2024 at 12:00'.
    """
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    local = created_at.astimezone(ZoneInfo(display_timezone))
    return f"{local:%A} {local.day} {local:%B %Y} at {local:%H:%M}"


# =============================================================================
# Embed Construction
# =============================================================================

def build_order_fields(order: OrderRecord, display_timezone: str) -> list[EmbedField]:
    """Build the embed fields for an order, in display order."""
    customer = order.customer
    pickup = order.pickup
    return [
        EmbedField(
            name="📦 Order Details",
            value=f"**Order ID:** {order.id}\n**Status:** {order.status}",
        ),
        EmbedField(
            name="🍽️ Items Ordered",
            value=format_item_list(order.items),
        ),
        EmbedField(
            name="💰 Total Amount",
            value=f"**{CURRENCY_SYMBOL}{format_money(order.total)}**",
            inline=True,
        ),
        EmbedField(
            name="💳 Payment Method",
            value=payment_label(order.payment_method),
            inline=True,
        ),
        EmbedField(
            name="👤 Customer Information",
            value=(
                f"**Name:** {_text(customer.name)}\n"
                f"**Email:** {_text(customer.email)}\n"
                f"**Phone:** {_text(customer.phone)}"
            ),
        ),
        EmbedField(
            name="📱 Contact Preference",
            value=contact_label(customer.contact_method),
            inline=True,
        ),
        EmbedField(
            name="📅 Pickup Required On",
            value=f"**Date:** {_text(pickup.date)}\n**Time:** {_text(pickup.time)}",
        ),
        EmbedField(
            name="🕐 Order Placed",
            value=format_placed_at(order.created_at, display_timezone),
        ),
    ]


def build_order_embed(order: OrderRecord, display_timezone: str = "Europe/London") -> dict[str, Any]:
    """Render the Discord embed for a recorded order."""
    return {
        "title": EMBED_TITLE,
        "color": EMBED_COLOR,
        "fields": [f.to_dict() for f in build_order_fields(order, display_timezone)],
        "footer": {"text": FOOTER_TEXT},
        "timestamp": format_timestamp(order.created_at),
    }


def build_webhook_payload(order: OrderRecord, display_timezone: str = "Europe/London") -> dict[str, Any]:
    """Render the full webhook body: alert text plus one embed."""
    return {
        "content": ALERT_CONTENT,
        "embeds": [build_order_embed(order, display_timezone)],
    }
