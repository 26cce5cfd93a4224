# backend/app/webhook/__init__.py

"""
Treasure Marketplace のイベント通知を Discord 形式の Webhook へ中継するモジュール群。

構成:
- config: 送信先 Webhook URL などの設定値
- schemas: 受信イベント・送信 embed のスキーマ
- validation: 受信ペイロードの検証
- service: 差分表示付きフィールド整形と embed 組み立て
- client: 送信先 Webhook への HTTP クライアント
- router: /api/webhook エンドポイント
"""
