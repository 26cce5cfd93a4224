# backend/app/webhook/client.py

"""
送信先 Webhook（Discord 互換）への HTTP クライアント。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

import httpx

from .config import WebhookSettings, redact_url
from .schemas import WebhookPayload

logger = logging.getLogger(__name__)


class WebhookDispatchError(Exception):
    """Webhook 送信全般の基底例外。"""


class WebhookHTTPError(WebhookDispatchError):
    """送信先が 2xx 以外を返した場合の例外。"""

    def __init__(self, status_code: int, body: Any | None = None) -> None:
        super().__init__(f"Webhook error: status_code={status_code}")
        self.status_code = status_code
        self.body = body


class WebhookConnectionError(WebhookDispatchError):
    """接続エラー・タイムアウト時の例外。"""


@dataclass(frozen=True)
class DispatchResult:
    """
    dispatch() の結果。失敗時も例外にはせず、この値で返す。
    """

    ok: bool
    destination: str
    status_code: Optional[int] = None
    error: Optional[str] = None


class WebhookClient:
    """
    embed ペイロードを送信先 Webhook に POST するクライアント。

    transport はテストで httpx.MockTransport を差し込むためのもの。
    """

    def __init__(
        self,
        settings: WebhookSettings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._transport = transport

    @property
    def timeout(self) -> int:
        return self._settings.timeout_seconds

    async def send(self, url: str, payload: WebhookPayload) -> httpx.Response:
        """
        payload を url に POST する。

        :raises WebhookHTTPError: 送信先が 4xx/5xx を返した場合。
        :raises WebhookConnectionError: 接続エラーやタイムアウト時。
        """
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                response = await client.post(
                    url,
                    json=payload.model_dump(mode="json"),
                )
        except httpx.RequestError as exc:
            raise WebhookConnectionError(str(exc) or exc.__class__.__name__) from exc

        if response.status_code // 100 != 2:
            try:
                body = response.json()
            except ValueError:
                body = response.text
            raise WebhookHTTPError(status_code=response.status_code, body=body)

        return response

    async def dispatch(self, url: str, payload: WebhookPayload) -> DispatchResult:
        """
        send() を呼び、成否を DispatchResult で返す。

        送信失敗は呼び出し元のリクエストを失敗させない方針なので、
        WebhookDispatchError はここで握りつぶして結果に詰める。
        """
        destination = redact_url(url)

        try:
            response = await self.send(url, payload)
        except WebhookHTTPError as exc:
            return DispatchResult(
                ok=False,
                destination=destination,
                status_code=exc.status_code,
                error=f"{exc} body={exc.body!r}",
            )
        except WebhookDispatchError as exc:
            return DispatchResult(ok=False, destination=destination, error=str(exc))

        logger.info("Webhook posted successfully to %s", destination)
        return DispatchResult(
            ok=True,
            destination=destination,
            status_code=response.status_code,
        )
