# backend/app/webhook/schemas.py

"""
Webhook 中継で扱うスキーマ定義。

- 受信側: マーケットプレイスから届くイベント（list / sold / update）
- 送信側: Discord 互換の embed ペイロード

受信スキーマは型を厳密に扱う（"5" を 5 に変換したりはしない）。
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, Field, StrictInt, StrictStr


class EventType(str, Enum):
    """
    マーケットプレイスのイベント種別。

    - LIST: 新規出品
    - SOLD: 購入成立
    - UPDATE: 既存出品の価格・数量・期限の変更
    """

    LIST = "list"
    SOLD = "sold"
    UPDATE = "update"


class ListingUpdates(BaseModel):
    """
    update イベントで送られてくる「変更後」の値。
    """

    price: StrictStr = Field(..., description="変更後の価格（10進文字列）")
    quantity: StrictInt = Field(..., description="変更後の数量")
    expires: StrictInt = Field(..., description="変更後の期限（エポックミリ秒）")


class MarketplaceEvent(BaseModel):
    """
    受信イベント 1件分。イベント種別はパス / クエリ側で受け取る。
    """

    address: StrictStr = Field(..., description="コレクションのコントラクトアドレス")
    collection: StrictStr = Field(..., description="コレクション名")
    image: StrictStr = Field(..., description="サムネイル画像 URL")
    name: StrictStr = Field(..., description="アイテム名")
    price: StrictStr = Field(..., description="価格（10進文字列）")
    quantity: StrictInt = Field(..., description="数量")
    user: StrictStr = Field(..., description="出品者 / 購入者のアドレス")
    expires: Optional[StrictInt] = Field(
        None,
        description="出品期限（エポックミリ秒）",
    )
    updates: Optional[ListingUpdates] = Field(
        None,
        description="変更後の値。存在する場合は各フィールドを『旧 → 新』で表示する。",
    )


class EmbedField(BaseModel):
    """
    embed の 1 行。value が None の行は送信前に取り除く。
    """

    name: str
    value: Union[str, int, None] = None


class EmbedThumbnail(BaseModel):
    url: str


class EmbedFooter(BaseModel):
    text: str
    icon_url: str


class Embed(BaseModel):
    """
    Discord 互換の embed 1件分。
    """

    color: int
    title: str
    thumbnail: EmbedThumbnail
    fields: List[EmbedField] = Field(default_factory=list)
    footer: EmbedFooter


class WebhookPayload(BaseModel):
    """
    送信先 Webhook に POST するボディ全体。
    """

    embeds: List[Embed]


class WebhookAck(BaseModel):
    """
    受信側への固定レスポンス。送信成否に関わらず ok=True。
    """

    ok: bool = True
