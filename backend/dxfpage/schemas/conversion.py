from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel, Field


class PagePayload(BaseModel):
    """Respuesta con la página convertida y sus ítems serializados."""

    width: float
    height: float
    entity_count: int = Field(0, ge=0)
    item_count: int = Field(0, ge=0)
    items: List[Dict[str, Any]] = Field(default_factory=list)


__all__ = ["PagePayload"]
