# backend/app/webhook/service.py

"""
受信イベントから Discord 互換の embed を組み立てるサービス層。

- format_update: 旧値と新値を同じフォーマッタで整形し、違う場合だけ『旧 → 新』にする
- build_embed: フィールド順・タイトル・色・フッターを決めて Embed を返す
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, List, Optional, TypeVar

from app.utils.formatting import (
    format_distance_to_now,
    format_locale_date,
    format_price,
)

from .schemas import (
    Embed,
    EmbedField,
    EmbedFooter,
    EmbedThumbnail,
    EventType,
    MarketplaceEvent,
    WebhookPayload,
)

T = TypeVar("T")

MARKETPLACE_URL = "https://marketplace.treasure.lol"
FOOTER_ICON_URL = f"{MARKETPLACE_URL}/favicon-32x32.png"
CURRENCY_SUFFIX = "$MAGIC"

COLOR_UPDATE = 0x663399
COLOR_DEFAULT = 0xEF4444

_TITLES = {
    EventType.LIST: "Item Listed!",
    EventType.UPDATE: "Item Updated!",
    EventType.SOLD: "Item Sold!",
}

_FOOTER_VERBS = {
    EventType.LIST: "Listed",
    EventType.UPDATE: "Updated",
    EventType.SOLD: "Sold",
}


def format_update(
    old_raw: T,
    new_raw: T,
    field: EmbedField,
    format_value: Callable[[T], str] = str,
) -> EmbedField:
    """
    旧値・新値を format_value で整形して比較し、差分があれば『旧 → 新』の行を返す。

    生の値同士は比較しない。"100" と "100.0" のように整形後に同じになる値は
    変更なしとして扱い、field をそのまま返す。
    """
    old = format_value(old_raw)
    new = format_value(new_raw)

    if old == new:
        return field

    return field.model_copy(update={"value": f"{old} → {new}"})


def format_price_with_currency(price: str) -> str:
    return f"{format_price(price)} {CURRENCY_SUFFIX}"


def _collection_link(collection: str, address: str) -> str:
    return f"[{collection}]({MARKETPLACE_URL}/collection/{address})"


def _present(fields: List[Optional[EmbedField]]) -> List[EmbedField]:
    """
    None の行と value が None の行を取り除く（順序は維持）。
    """
    return [f for f in fields if f is not None and f.value is not None]


def build_fields(
    event_type: EventType,
    event: MarketplaceEvent,
    now: datetime,
) -> List[EmbedField]:
    """
    embed の行を固定順で組み立てる。

    Name / Collection / Price / Quantity / Expires in / Seller(Buyer)
    """
    updates = event.updates

    def format_expires(value: int) -> str:
        return format_distance_to_now(value, now=now)

    price_field = EmbedField(
        name="Sale Price" if event_type == EventType.SOLD else "Listing Price",
        value=format_price_with_currency(event.price),
    )
    quantity_field = EmbedField(name="Quantity", value=event.quantity)

    if updates is not None:
        price_field = format_update(
            event.price,
            updates.price,
            price_field,
            format_price_with_currency,
        )
        quantity_field = format_update(event.quantity, updates.quantity, quantity_field)

    # 期限は受信ペイロードに expires がある場合だけ表示する（updates だけでは出さない）
    expires_field: Optional[EmbedField] = None
    if event.expires is not None:
        expires_field = EmbedField(
            name="Expires in",
            value=format_expires(event.expires),
        )
        if updates is not None:
            expires_field = format_update(
                event.expires,
                updates.expires,
                expires_field,
                format_expires,
            )

    return _present(
        [
            EmbedField(name="Name", value=event.name),
            EmbedField(
                name="Collection",
                value=_collection_link(event.collection, event.address),
            ),
            price_field,
            quantity_field,
            expires_field,
            EmbedField(
                name="Buyer" if event_type == EventType.SOLD else "Seller",
                value=event.user,
            ),
        ]
    )


def build_embed(
    event_type: EventType,
    event: MarketplaceEvent,
    now: Optional[datetime] = None,
) -> Embed:
    """
    受信イベントから Embed を組み立てる。

    :param now: 相対時間・フッター日付の基準時刻。省略時は現在の UTC 時刻。
    """
    now = now or datetime.now(timezone.utc)

    return Embed(
        color=COLOR_UPDATE if event_type == EventType.UPDATE else COLOR_DEFAULT,
        title=_TITLES[event_type],
        thumbnail=EmbedThumbnail(url=event.image),
        fields=build_fields(event_type, event, now),
        footer=EmbedFooter(
            text=(
                f"{_FOOTER_VERBS[event_type]} on Treasure Marketplace • "
                f"{format_locale_date(now)}"
            ),
            icon_url=FOOTER_ICON_URL,
        ),
    )


def build_payload(
    event_type: EventType,
    event: MarketplaceEvent,
    now: Optional[datetime] = None,
) -> WebhookPayload:
    """
    送信先 Webhook に POST するボディ（embed 1件）を返す。
    """
    return WebhookPayload(embeds=[build_embed(event_type, event, now=now)])
