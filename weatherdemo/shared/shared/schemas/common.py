"""Common schemas used by both weather services."""

from __future__ import annotations

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Liveness response served at ``/health``."""

    status: str = "ok"
