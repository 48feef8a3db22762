"""
Tests for the ordering service.

These tests verify how submissions become order records and that the
kitchen notification never decides whether an order is accepted.
"""

import asyncio
import logging
from datetime import datetime, timedelta, timezone

import pytest

from services.ordering import OrderingService, build_order_record, order_id_for
from shared.models import OrderSubmission


@pytest.fixture
def service(order_store, webhook, new_year_noon) -> OrderingService:
    """Ordering service with a fixed clock and the fake Discord endpoint."""
    return OrderingService(order_store=order_store, webhook=webhook, clock=lambda: new_year_noon)


class TestBuildOrderRecord:
    """Tests for turning a submission into a record."""

    def test_assigns_recorder_fields(self, curry_submission, new_year_noon):
        record = build_order_record(curry_submission, new_year_noon)

        assert record.id == "1704110400123"
        assert record.status == "pending"
        assert record.created_at == new_year_noon
        assert record.to_wire()["createdAt"] == "2024-01-01T12:00:00.123Z"

    def test_keeps_submission_fields(self, curry_submission, new_year_noon):
        record = build_order_record(curry_submission, new_year_noon)

        assert record.items[0].name == "Curry"
        assert record.total == 18.0
        assert record.payment_method == "paypal"
        assert record.customer.phone == "123"
        assert record.pickup.date == "2024-01-01"

    def test_caller_cannot_set_recorder_fields(self, curry_order_payload, new_year_noon):
        """Test that id, status and createdAt from the caller are overwritten."""
        submission = OrderSubmission.model_validate({
            **curry_order_payload,
            "id": "forged",
            "status": "delivered",
            "createdAt": "1999-12-31T23:59:59.000Z",
            "created_at": "1999-12-31T23:59:59.000Z",
        })

        record = build_order_record(submission, new_year_noon)

        assert record.id == "1704110400123"
        assert record.status == "pending"
        assert record.created_at == new_year_noon

    def test_unknown_fields_pass_through(self, new_year_noon):
        submission = OrderSubmission.model_validate({"notes": "no onions"})

        record = build_order_record(submission, new_year_noon)

        assert record.to_wire()["notes"] == "no onions"

    def test_empty_submission(self, new_year_noon):
        """Test that a submission with nothing in it still records."""
        record = build_order_record(OrderSubmission(), new_year_noon)

        assert record.items == []
        assert record.status == "pending"
        assert set(record.to_wire()) == {"id", "status", "createdAt"}

    def test_partial_nested_objects_stay_partial(self, new_year_noon):
        """Test that only the keys the storefront sent are logged back."""
        submission = OrderSubmission.model_validate({"customer": {"phone": 7700900123}})

        wire = build_order_record(submission, new_year_noon).to_wire()

        assert wire["customer"] == {"phone": 7700900123}
        assert "pickup" not in wire


class TestOrderIds:
    """Tests for time-derived order IDs."""

    def test_id_is_epoch_millis(self, new_year_noon):
        assert order_id_for(new_year_noon) == "1704110400123"

    def test_ids_are_digits(self):
        assert order_id_for(datetime.now(timezone.utc)).isdigit()

    def test_one_millisecond_apart_gives_distinct_ids(self, new_year_noon):
        later = new_year_noon + timedelta(milliseconds=1)

        assert order_id_for(new_year_noon) != order_id_for(later)
        assert int(order_id_for(later)) == int(order_id_for(new_year_noon)) + 1


class TestRecord:
    """Tests for OrderingService.record."""

    def test_appends_to_store(self, service, order_store, curry_submission):
        record = service.record(curry_submission)

        assert order_store.list_orders() == [record]

    def test_records_in_arrival_order(self, order_store, webhook, curry_submission, new_year_noon):
        ticks = iter([new_year_noon, new_year_noon + timedelta(seconds=1)])
        service = OrderingService(order_store=order_store, webhook=webhook, clock=lambda: next(ticks))

        first = service.record(curry_submission)
        second = service.record(curry_submission)

        assert order_store.list_orders() == [first, second]
        assert first.id != second.id


class TestPlaceOrder:
    """Tests for the full record-then-notify flow."""

    def test_records_and_notifies(self, service, order_store, fake_discord, curry_submission):
        record = asyncio.run(service.place_order(curry_submission))

        assert order_store.get(record.id) is record
        assert fake_discord.call_count == 1

    def test_webhook_failure_keeps_order(self, service, order_store, fake_discord, curry_submission, caplog):
        """Test that a failed notification does not roll back the order."""
        fake_discord.status_code = 500

        with caplog.at_level(logging.WARNING):
            record = asyncio.run(service.place_order(curry_submission))

        assert order_store.get(record.id) is record
        assert "accepted without kitchen notification" in caplog.text

    def test_unconfigured_webhook(self, order_store, unconfigured_webhook, fake_discord, curry_submission):
        service = OrderingService(order_store=order_store, webhook=unconfigured_webhook)

        record = asyncio.run(service.place_order(curry_submission))

        assert record.status == "pending"
        assert order_store.count() == 1
        assert fake_discord.call_count == 0
