from .options import (
    ContentResolver,
    ConverterOptions,
    MM_PER_INCH,
    POINTS_PER_INCH,
    PageRect,
    SourceRect,
    TextWidthPolicy,
    points_from_inches,
    points_from_mm,
)

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
