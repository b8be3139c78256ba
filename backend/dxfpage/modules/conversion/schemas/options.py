from __future__ import annotations

from typing import Callable, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from dxfpage.core.config import settings

POINTS_PER_INCH = 72.0
MM_PER_INCH = 25.4

ContentResolver = Callable[[str], Optional[bytes]]
TextWidthPolicy = Callable[[str, float], float]


def points_from_mm(value_mm: float) -> float:
    return value_mm * POINTS_PER_INCH / MM_PER_INCH


def points_from_inches(value_in: float) -> float:
    return value_in * POINTS_PER_INCH


class SourceRect(BaseModel):
    """Rectángulo en unidades del dibujo de origen."""

    model_config = ConfigDict(frozen=True)

    left: float
    bottom: float
    width: float = Field(..., gt=0)
    height: float = Field(..., gt=0)


class PageRect(BaseModel):
    """Rectángulo de destino en puntos de la página."""

    model_config = ConfigDict(frozen=True)

    left: float
    bottom: float
    width: float = Field(..., gt=0)
    height: float = Field(..., gt=0)


class ConverterOptions(BaseModel):
    """Opciones de una conversión DXF -> página.

    O se usa ``scale`` (relativo al viewport activo) o se entregan juntos
    ``source_rect`` y ``destination_rect``; entregar sólo uno es un error.
    """

    model_config = ConfigDict(frozen=True)

    page_width: float = Field(default_factory=lambda: settings.default_page_width, gt=0)
    page_height: float = Field(default_factory=lambda: settings.default_page_height, gt=0)
    scale: float = Field(1.0, gt=0)
    source_rect: Optional[SourceRect] = None
    destination_rect: Optional[PageRect] = None
    font: str = Field(default_factory=lambda: settings.default_font)
    text_width_factor: float = Field(default_factory=lambda: settings.text_width_factor, gt=0)
    text_width_policy: Optional[TextWidthPolicy] = None
    content_resolver: Optional[ContentResolver] = None

    @model_validator(mode="after")
    def check_rect_pair(self) -> "ConverterOptions":
        if (self.source_rect is None) != (self.destination_rect is None):
            raise ValueError("source_rect y destination_rect deben entregarse juntos")
        return self

    @property
    def uses_explicit_rects(self) -> bool:
        return self.source_rect is not None and self.destination_rect is not None

    def resolve_content(self, path: str) -> bytes | None:
        if self.content_resolver is None:
            return None
        return self.content_resolver(path)


__all__ = [
    "ContentResolver",
    "ConverterOptions",
    "MM_PER_INCH",
    "POINTS_PER_INCH",
    "PageRect",
    "SourceRect",
    "TextWidthPolicy",
    "points_from_inches",
    "points_from_mm",
]
