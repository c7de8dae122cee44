from __future__ import annotations

from src.web.app import CACHE_CONTROL, create_app

__all__: list[str] = ["CACHE_CONTROL", "create_app"]
