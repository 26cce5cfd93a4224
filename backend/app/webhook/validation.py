# backend/app/webhook/validation.py

"""
受信イベントの検証。

validate_event() は例外を投げずに結果オブジェクトを返す。
parse_event() は失敗時に EventValidationError を投げる（router 側ではこちらを使う）。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

from pydantic import ValidationError

from .schemas import EventType, MarketplaceEvent


@dataclass(frozen=True)
class FieldError:
    """検証エラー 1件分。loc は "updates.price" のようなドット区切り。"""

    loc: str
    message: str


@dataclass
class EventValidationResult:
    ok: bool
    event_type: Optional[EventType] = None
    event: Optional[MarketplaceEvent] = None
    errors: List[FieldError] = field(default_factory=list)


class EventValidationError(ValueError):
    """受信ペイロードがスキーマに合わない場合の例外。"""

    def __init__(self, errors: List[FieldError]) -> None:
        details = "; ".join(f"{e.loc}: {e.message}" for e in errors)
        super().__init__(f"Invalid webhook event: {details}")
        self.errors = errors


def _validate_type(event_type: Any) -> Tuple[Optional[EventType], List[FieldError]]:
    allowed = ", ".join(repr(t.value) for t in EventType)

    if not isinstance(event_type, str):
        return None, [FieldError("type", f"Required, expected one of {allowed}")]

    try:
        return EventType(event_type), []
    except ValueError:
        return None, [
            FieldError(
                "type",
                f"Invalid enum value {event_type!r}, expected one of {allowed}",
            )
        ]


def _validate_body(body: Any) -> Tuple[Optional[MarketplaceEvent], List[FieldError]]:
    if not isinstance(body, dict):
        return None, [FieldError("body", "Expected a JSON object")]

    try:
        return MarketplaceEvent.model_validate(body), []
    except ValidationError as exc:
        errors = [
            FieldError(
                ".".join(str(part) for part in err["loc"]) or "body",
                err["msg"],
            )
            for err in exc.errors()
        ]
        return None, errors


def validate_event(event_type: Any, body: Any) -> EventValidationResult:
    """
    イベント種別とボディをまとめて検証する。

    種別とボディの両方にエラーがある場合は、両方のエラーを返す。
    """
    parsed_type, type_errors = _validate_type(event_type)
    event, body_errors = _validate_body(body)

    errors = type_errors + body_errors
    if errors:
        return EventValidationResult(ok=False, errors=errors)

    return EventValidationResult(ok=True, event_type=parsed_type, event=event)


def parse_event(event_type: Any, body: Any) -> Tuple[EventType, MarketplaceEvent]:
    """
    validate_event() の結果を取り出す。失敗時は EventValidationError。
    """
    result = validate_event(event_type, body)
    event_type_value = result.event_type
    event = result.event
    if not result.ok or event_type_value is None or event is None:
        raise EventValidationError(result.errors)

    return event_type_value, event
