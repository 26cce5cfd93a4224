# backend/app/webhook/router.py

from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import APIRouter, Request, Response, status

from .client import WebhookClient
from .config import ConfigurationError, WebhookSettings, get_webhook_settings
from .schemas import WebhookAck
from .service import build_payload
from .validation import parse_event

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/webhook", tags=["webhook"])

_ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def get_webhook_client(settings: WebhookSettings) -> WebhookClient:
    """
    WebhookClient を生成する。テストではここを差し替えて外部 HTTP を防ぐ。
    """
    return WebhookClient(settings)


async def _read_json_body(request: Request) -> Any:
    try:
        return await request.json()
    except ValueError:
        # JSON として読めないボディは検証側で "Expected a JSON object" にする
        return None


async def _handle_event(request: Request, event_type: Optional[str]) -> Response:
    """
    受信イベント 1件を処理する。

    - POST 以外 → 405（ボディなし）
    - 送信先 URL 未設定 → 500（ボディなし）
    - 検証エラー → EventValidationError をそのまま投げる（フレームワーク既定の 500）
    - 送信失敗 → ログに残すだけで 200 {"ok": true}
    """
    if request.method.upper() != "POST":
        return Response(status_code=status.HTTP_405_METHOD_NOT_ALLOWED)

    try:
        settings = get_webhook_settings()
    except ConfigurationError as exc:
        logger.error("Webhook destinations are not configured: %s", exc)
        return Response(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    body = await _read_json_body(request)
    parsed_type, event = parse_event(event_type, body)

    payload = build_payload(parsed_type, event)
    client = get_webhook_client(settings)
    result = await client.dispatch(settings.destination_for(parsed_type), payload)

    # 送信失敗は呼び出し元に返さない（リトライもしない）
    if not result.ok:
        logger.error(
            "Failed to post %s webhook to %s: status_code=%s error=%s",
            parsed_type.value,
            result.destination,
            result.status_code,
            result.error,
        )

    return Response(
        content=WebhookAck().model_dump_json(),
        media_type="application/json",
        status_code=status.HTTP_200_OK,
    )


@router.api_route(
    "/{event_type}",
    methods=_ALL_METHODS,
    summary="マーケットプレイスのイベントを Webhook へ中継",
    description="list / sold / update イベントを embed に整形し、種別ごとの Webhook に送信する。",
)
async def relay_event(request: Request, event_type: str) -> Response:
    return await _handle_event(request, event_type)


@router.api_route(
    "",
    methods=_ALL_METHODS,
    summary="マーケットプレイスのイベントを Webhook へ中継（?type= 指定）",
)
async def relay_event_by_query(request: Request) -> Response:
    return await _handle_event(request, request.query_params.get("type"))
