"""Public auth exports for gdrivedl."""

from __future__ import annotations

from .service_account import ServiceAccountClient

__all__ = ["ServiceAccountClient"]
