"""
Shared pytest fixtures for the kitchen order relay tests.

These fixtures provide consistent order data, a fake Discord endpoint and
fresh state for every test.
"""

from datetime import datetime, timezone
from typing import Optional

import httpx
import pytest

from shared.models import OrderSubmission
from shared.order_store import OrderStore
from shared.webhook import DiscordWebhook


WEBHOOK_URL = "https://discord.example/api/webhooks/123/abc"


class FakeDiscord:
    """
    Stand-in for the Discord webhook endpoint.

    Records every request it receives and answers with a fixed status.
    Set `error` to make every request fail at the transport level.
    """

    def __init__(self, status_code: int = 204):
        self.status_code = status_code
        self.error: Optional[Exception] = None
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))

    @property
    def call_count(self) -> int:
        return len(self.requests)


@pytest.fixture
def webhook_url() -> str:
    """URL the fake Discord endpoint answers on."""
    return WEBHOOK_URL


@pytest.fixture
def order_store() -> OrderStore:
    """Fresh OrderStore for each test."""
    return OrderStore()


@pytest.fixture
def fake_discord() -> FakeDiscord:
    """Fake Discord endpoint that accepts everything."""
    return FakeDiscord()


@pytest.fixture
def webhook(fake_discord: FakeDiscord) -> DiscordWebhook:
    """Webhook notifier pointed at the fake Discord endpoint."""
    return DiscordWebhook(url=WEBHOOK_URL, client=fake_discord.client())


@pytest.fixture
def unconfigured_webhook(fake_discord: FakeDiscord) -> DiscordWebhook:
    """Notifier with no URL, wired to the fake so stray calls would be counted."""
    return DiscordWebhook(url="", client=fake_discord.client())


# =============================================================================
# Order Fixtures
# =============================================================================

@pytest.fixture
def curry_order_payload() -> dict:
    """
    Order for two curries, paid by PayPal.
    Matches the storefront's JSON shape.
    """
    return {
        "items": [{"name": "Curry", "quantity": 2, "total": 9.0}],
        "total": 18.0,
        "paymentMethod": "paypal",
        "customer": {"name": "A", "email": "a@b.com", "phone": "123"},
        "pickup": {"date": "2024-01-01", "time": "12:00"},
    }


@pytest.fixture
def curry_submission(curry_order_payload: dict) -> OrderSubmission:
    """The curry order, parsed."""
    return OrderSubmission.model_validate(curry_order_payload)


@pytest.fixture
def new_year_noon() -> datetime:
    """A fixed recording time: Monday 1 January 2024, 12:00 UTC."""
    return datetime(2024, 1, 1, 12, 0, 0, 123000, tzinfo=timezone.utc)
