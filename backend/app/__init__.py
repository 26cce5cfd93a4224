# backend/app/__init__.py
"""
Treasure Marketplace webhook relay application package.

This package contains:
- main: FastAPI application entrypoint
- webhook: marketplace event validation, embed formatting and forwarding
- utils: environment config and display formatting helpers
"""
