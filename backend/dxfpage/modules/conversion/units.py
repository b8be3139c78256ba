from __future__ import annotations

import math
from enum import Enum, IntEnum

from dxfpage.modules.conversion.errors import InvalidUnitEnumerationError


class SourceDrawingUnits(IntEnum):
    """Valores de ``$MEASUREMENT`` en el encabezado DXF."""

    ENGLISH = 0
    METRIC = 1


class SourceUnitFormat(IntEnum):
    """Valores de formato de unidades lineales del DXF."""

    SCIENTIFIC = 1
    DECIMAL = 2
    ENGINEERING = 3
    ARCHITECTURAL_STACKED = 4
    FRACTIONAL_STACKED = 5
    ARCHITECTURAL = 6
    FRACTIONAL = 7


class DrawingUnits(str, Enum):
    ENGLISH = "english"
    METRIC = "metric"


class UnitFormat(str, Enum):
    DECIMAL = "decimal"
    ARCHITECTURAL = "architectural"
    FRACTIONAL = "fractional"


_UNIT_FORMAT_MAP = {
    SourceUnitFormat.ARCHITECTURAL: UnitFormat.ARCHITECTURAL,
    SourceUnitFormat.ARCHITECTURAL_STACKED: UnitFormat.ARCHITECTURAL,
    SourceUnitFormat.DECIMAL: UnitFormat.DECIMAL,
    SourceUnitFormat.ENGINEERING: UnitFormat.DECIMAL,
    SourceUnitFormat.SCIENTIFIC: UnitFormat.DECIMAL,
    SourceUnitFormat.FRACTIONAL: UnitFormat.FRACTIONAL,
    SourceUnitFormat.FRACTIONAL_STACKED: UnitFormat.FRACTIONAL,
}


def to_unit_format(value: int) -> UnitFormat:
    try:
        return _UNIT_FORMAT_MAP[SourceUnitFormat(value)]
    except (ValueError, KeyError) as exc:
        raise InvalidUnitEnumerationError("unit_format", value) from exc


def to_drawing_units(value: int) -> DrawingUnits:
    try:
        source = SourceDrawingUnits(value)
    except ValueError as exc:
        raise InvalidUnitEnumerationError("drawing_units", value) from exc
    return DrawingUnits.METRIC if source is SourceDrawingUnits.METRIC else DrawingUnits.ENGLISH


def format_decimal(value: float, precision: int) -> str:
    text = f"{value:.{max(precision, 0)}f}"
    if text.startswith("-") and float(text) == 0.0:
        return text[1:]
    return text


def _split_fraction(value: float, precision: int) -> tuple[int, int, int]:
    """Parte entera, numerador y denominador (reducido) con denominador 2**precision."""
    denominator = 2 ** max(precision, 0)
    whole = math.floor(value)
    numerator = round((value - whole) * denominator)
    if numerator == denominator:
        whole += 1
        numerator = 0
    if numerator == 0:
        return whole, 0, 1
    divisor = math.gcd(numerator, denominator)
    return whole, numerator // divisor, denominator // divisor


def _fraction_text(value: float, precision: int) -> str:
    whole, numerator, denominator = _split_fraction(value, precision)
    if numerator == 0:
        return f"{whole}"
    if whole == 0:
        return f"{numerator}/{denominator}"
    return f"{whole} {numerator}/{denominator}"


def format_fractional(value: float, precision: int) -> str:
    sign = "-" if value < 0 else ""
    text = _fraction_text(abs(value), precision)
    if text == "0":
        sign = ""
    return f'{sign}{text}"'


def format_architectural(value: float, precision: int) -> str:
    sign = "-" if value < 0 else ""
    magnitude = abs(value)
    feet = int(magnitude // 12)
    inches = magnitude - feet * 12
    whole, numerator, denominator = _split_fraction(inches, precision)
    if whole >= 12:
        feet += 1
        whole -= 12
    inches_text = f"{whole}" if numerator == 0 else f"{whole} {numerator}/{denominator}"
    if feet == 0 and whole == 0 and numerator == 0:
        sign = ""
    return f"{sign}{feet}'-{inches_text}\""


def format_units(value: float, drawing_units: DrawingUnits, unit_format: UnitFormat, precision: int) -> str:
    if drawing_units is DrawingUnits.METRIC:
        return format_decimal(value, precision)
    if unit_format is UnitFormat.ARCHITECTURAL:
        return format_architectural(value, precision)
    if unit_format is UnitFormat.FRACTIONAL:
        return format_fractional(value, precision)
    return format_decimal(value, precision)


__all__ = [
    "DrawingUnits",
    "SourceDrawingUnits",
    "SourceUnitFormat",
    "UnitFormat",
    "format_architectural",
    "format_decimal",
    "format_fractional",
    "format_units",
    "to_drawing_units",
    "to_unit_format",
]
