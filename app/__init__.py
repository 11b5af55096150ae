"""
Fraudlr application-specific code.

This package contains the Fraudlr API surface over the fraudlr library:
- repositories: User persistence (MongoDB)
- services: Account workflows (signup, login, password reset)
- schemas: Request/response models
- routers: HTTP endpoints
- config: Application settings
"""

from app.config import settings

__all__ = ["settings"]
