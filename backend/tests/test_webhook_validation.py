# backend/tests/test_webhook_validation.py

import pytest

from app.webhook.schemas import EventType
from app.webhook.validation import EventValidationError, parse_event, validate_event


def test_validate_event_success(event_body):
    event_body["expires"] = 1_700_000_000_000
    event_body["updates"] = {"price": "120", "quantity": 2, "expires": 1_700_000_100_000}

    result = validate_event("update", event_body)

    assert result.ok
    assert result.errors == []
    assert result.event_type == EventType.UPDATE
    assert result.event.updates.quantity == 2


@pytest.mark.parametrize("event_type", ["listed", "", "SOLD", None, ["list"]])
def test_validate_event_rejects_unknown_type(event_type, event_body):
    result = validate_event(event_type, event_body)

    assert not result.ok
    assert [e.loc for e in result.errors] == ["type"]


def test_validate_event_reports_missing_and_wrong_type_fields(event_body):
    del event_body["name"]
    event_body["quantity"] = "3"
    event_body["price"] = 100

    result = validate_event("list", event_body)

    assert not result.ok
    locs = {e.loc for e in result.errors}
    assert locs == {"name", "quantity", "price"}


def test_validate_event_reports_nested_update_fields(event_body):
    event_body["updates"] = {"price": "120", "quantity": 2}

    result = validate_event("update", event_body)

    assert not result.ok
    assert [e.loc for e in result.errors] == ["updates.expires"]


def test_validate_event_rejects_non_object_body():
    result = validate_event("list", ["not", "an", "object"])

    assert not result.ok
    assert result.errors[0].loc == "body"


def test_parse_event_raises_with_field_errors(event_body):
    del event_body["user"]

    with pytest.raises(EventValidationError) as excinfo:
        parse_event("sold", event_body)

    assert [e.loc for e in excinfo.value.errors] == ["user"]
    assert "user" in str(excinfo.value)


def test_parse_event_returns_typed_values(event_body):
    event_type, event = parse_event("sold", event_body)

    assert event_type == EventType.SOLD
    assert event.expires is None
    assert event.updates is None


def test_parse_event_update_with_updates_returns_non_optional_values(event_body):
    event_body["updates"] = {"price": "120", "quantity": 2, "expires": 1_700_000_100_000}

    event_type, event = parse_event("update", event_body)

    assert event_type is EventType.UPDATE
    assert event is not None
    assert event.updates.price == "120"
