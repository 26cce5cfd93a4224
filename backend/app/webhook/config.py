# backend/app/webhook/config.py

"""
Webhook 中継に必要な設定値をまとめるモジュール。
"""

from dataclasses import dataclass
from urllib.parse import urlsplit

from app.utils.config import EnvVarMissingError, get_env, get_env_int

from .schemas import EventType

DEFAULT_TIMEOUT_SECONDS = 10


class ConfigurationError(EnvVarMissingError):
    """送信先 Webhook URL が設定されていない場合の例外。"""


@dataclass(frozen=True)
class WebhookSettings:
    """
    送信先 Webhook の設定値コンテナ。

    - list_webhook_url: list / update イベントの送信先
    - sold_webhook_url: sold イベントの送信先
    """

    list_webhook_url: str
    sold_webhook_url: str
    timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS

    def destination_for(self, event_type: EventType) -> str:
        """
        イベント種別に応じた送信先 URL を返す。
        """
        if event_type == EventType.SOLD:
            return self.sold_webhook_url
        return self.list_webhook_url


def redact_url(url: str) -> str:
    """
    ログ出力用に URL を scheme://host だけに縮める。

    Discord の Webhook URL はパス部分にトークンを含むため。
    """
    parts = urlsplit(url)
    if not parts.scheme or not parts.netloc:
        return "<invalid-url>"
    return f"{parts.scheme}://{parts.netloc}"


def get_webhook_settings() -> WebhookSettings:
    """
    環境変数から Webhook 設定を読み込む。

    必須:
      - LIST_WEBHOOK
      - SOLD_WEBHOOK

    任意:
      - WEBHOOK_TIMEOUT_SECONDS（デフォルト 10秒）

    リクエストごとに呼ばれる前提なのでキャッシュはしない。
    """
    try:
        list_webhook_url = get_env("LIST_WEBHOOK")
        sold_webhook_url = get_env("SOLD_WEBHOOK")
    except EnvVarMissingError as exc:
        raise ConfigurationError(exc.name) from exc

    timeout_seconds = get_env_int(
        "WEBHOOK_TIMEOUT_SECONDS",
        default=DEFAULT_TIMEOUT_SECONDS,
    )
    if timeout_seconds <= 0:
        timeout_seconds = DEFAULT_TIMEOUT_SECONDS

    return WebhookSettings(
        list_webhook_url=list_webhook_url,
        sold_webhook_url=sold_webhook_url,
        timeout_seconds=timeout_seconds,
    )
