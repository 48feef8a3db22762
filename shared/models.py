"""
Domain models for the kitchen order relay.

These models describe what the storefront page submits and what the
server keeps after recording an order.

Design decisions:
- Using Pydantic for parsing and serialization
- Submissions are untrusted: every field is optional, any JSON value is kept
- Field names are snake_case in Python and camelCase on the wire
- Payment and contact methods stay open strings, mapped to labels at render time
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel


# =============================================================================
# Enums - Values with special meaning to the formatter
# =============================================================================

class OrderStatus(str, Enum):
    """
    Order lifecycle states.
    Only the initial state is assigned by this service.
    """
    PENDING = "pending"           # Order received, awaiting the kitchen


class PaymentMethod(str, Enum):
    """Payment methods with a dedicated label. Anything else is paid at pickup."""
    PAYPAL = "paypal"


class ContactMethod(str, Enum):
    """Contact methods with a dedicated label. Anything else means email."""
    WHATSAPP = "whatsapp"


def format_timestamp(value: datetime) -> str:
    """
    Format a timestamp as ISO-8601 UTC with millisecond precision.

    Example: 2024-01-01T12:00:00.000Z
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    utc = value.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


# =============================================================================
# Submission Models
# =============================================================================

class WireModel(BaseModel):
    """Base for models exchanged as camelCase JSON."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )


def _object_or_empty(value: Any) -> Any:
    """Anything that is not a JSON object reads as an empty one."""
    if isinstance(value, (dict, BaseModel)):
        return value
    return {}


class OrderItem(WireModel):
    """A single line of the basket."""
    name: Any = Field(default=None, description="Dish name")
    quantity: Any = Field(default=None, description="Portions ordered")
    total: Any = Field(default=None, description="Line total in pounds")


class CustomerInfo(WireModel):
    """Who placed the order and how they want to be contacted."""
    name: Any = None
    email: Any = None
    phone: Any = None
    contact_method: Any = Field(
        default=None,
        description="'whatsapp' or anything else for email"
    )


class PickupDetails(WireModel):
    """When the customer will collect the order."""
    date: Any = None
    time: Any = None


class OrderSubmission(WireModel):
    """
    Raw order payload posted by the storefront.

    Nothing is enforced beyond shape defaults: leaf values are kept as sent,
    and nested objects that are missing, null or not objects become empty
    ones so the formatter always has something to read.
    """
    items: list[OrderItem] = Field(default_factory=list)
    total: Any = Field(default=None, description="Order total in pounds")
    payment_method: Any = Field(
        default=None,
        description="'paypal' or anything else for pay at pickup"
    )
    customer: CustomerInfo = Field(default_factory=CustomerInfo)
    pickup: PickupDetails = Field(default_factory=PickupDetails)

    @field_validator("items", mode="before")
    @classmethod
    def _coerce_items(cls, value: Any) -> Any:
        if not isinstance(value, list):
            return []
        return [_object_or_empty(item) for item in value]

    @field_validator("customer", "pickup", mode="before")
    @classmethod
    def _coerce_object(cls, value: Any) -> Any:
        return _object_or_empty(value)


# =============================================================================
# Recorded Order
# =============================================================================

class OrderRecord(OrderSubmission):
    """
    A submission after the recorder has accepted it.

    `id`, `status` and `created_at` are owned by the recorder and are never
    taken from the caller.
    """
    id: str = Field(..., description="Milliseconds since epoch at recording time")
    status: OrderStatus = Field(default=OrderStatus.PENDING)
    created_at: datetime = Field(..., description="When the order was recorded (UTC)")

    model_config = ConfigDict(use_enum_values=True, frozen=True)

    @field_serializer("created_at")
    def _serialize_created_at(self, value: datetime) -> str:
        return format_timestamp(value)

    def to_wire(self) -> dict:
        """
        Serialize with camelCase keys, as the storefront sent it.

        Fields the storefront never sent stay absent.
        """
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)
