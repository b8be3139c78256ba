from __future__ import annotations

from ezdxf import colors as dxf_colors

from dxfpage.modules.conversion.domain import (
    LINEWEIGHT_BY_LAYER,
    SourceColor,
    SourceEntity,
    SourceLayer,
)
from dxfpage.modules.conversion.page import BLACK, Color, StreamState
from dxfpage.modules.conversion.schemas import points_from_mm

SMALLEST_STROKE_WIDTH = 1.0  # puntos


def rgb_to_color(r: int, g: int, b: int) -> Color:
    # El índice 7 del DXF es blanco y negro a la vez; blanco sobre papel no se ve
    if r == 255 and g == 255 and b == 255:
        return BLACK
    return Color(r / 255.0, g / 255.0, b / 255.0)


def true_color_to_color(value: int) -> Color:
    r, g, b = dxf_colors.int2rgb(value)
    return rgb_to_color(r, g, b)


def index_to_color(index: int) -> Color:
    r, g, b = dxf_colors.aci2rgb(index)
    return rgb_to_color(r, g, b)


def final_source_color(entity: SourceEntity, layer: SourceLayer) -> SourceColor | None:
    color = entity.color
    if color is None or color.is_by_layer:
        return layer.color
    if color.is_index:
        return color
    # por bloque: no hay bloque contenedor del cual heredar
    return None


def resolve_color(entity: SourceEntity, layer: SourceLayer) -> Color:
    if entity.true_color is not None:
        return true_color_to_color(entity.true_color)
    color = final_source_color(entity, layer)
    if color is not None and color.is_index:
        return index_to_color(color.index)
    return BLACK


def resolve_stroke_width(entity: SourceEntity, layer: SourceLayer) -> float | None:
    """Grosor en puntos; ``None`` deja el trazo en línea fina."""
    weight = entity.line_weight
    if weight == LINEWEIGHT_BY_LAYER:
        weight = layer.line_weight
    if weight == 0:
        return None
    if weight < 0:
        return SMALLEST_STROKE_WIDTH
    # centésimas de milímetro (1 mm => 100)
    return points_from_mm(weight / 100.0)


def stream_state_for(entity: SourceEntity, layer: SourceLayer) -> StreamState:
    return StreamState(
        stroke_color=resolve_color(entity, layer),
        stroke_width=resolve_stroke_width(entity, layer),
    )


__all__ = [
    "SMALLEST_STROKE_WIDTH",
    "final_source_color",
    "index_to_color",
    "resolve_color",
    "resolve_stroke_width",
    "rgb_to_color",
    "stream_state_for",
    "true_color_to_color",
]
