# backend/app/main.py

"""
バックエンドアプリケーションのエントリーポイント。

主な責務:
- /api/webhook/{type} エンドポイントを公開する
- /health エンドポイントを公開する
"""

from fastapi import FastAPI

from app.webhook.router import router as webhook_router


def create_app() -> FastAPI:
    """
    FastAPI アプリケーションファクトリ。

    - マーケットプレイス Webhook 中継エンドポイント (/api/webhook/{type})
    - ヘルスチェックエンドポイント (/health)
    """
    app = FastAPI(title="Treasure Marketplace Webhook Relay")

    # ルーター登録
    app.include_router(webhook_router)

    @app.get("/health", tags=["health"])
    def health_check() -> dict:
        """
        簡易ヘルスチェックエンドポイント。
        モニタリングや動作確認用。
        """
        return {"status": "ok"}

    return app


# uvicorn 実行時のエントリーポイント
app = create_app()
