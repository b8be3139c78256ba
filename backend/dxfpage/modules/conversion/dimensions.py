from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from dxfpage.modules.conversion.colors import resolve_color
from dxfpage.modules.conversion.domain import (
    DimensionEntity,
    DimensionStyle,
    DimensionType,
    LineEntity,
    SourceHeader,
    SourceLayer,
    TextEntity,
)
from dxfpage.modules.conversion.geometry import AffineTransform, Vector
from dxfpage.modules.conversion.page import (
    FilledPolygonItem,
    Page,
    PathBuilder,
    StreamState,
    to_page_point,
)
from dxfpage.modules.conversion.primitives import convert_line, convert_text
from dxfpage.modules.conversion.schemas import TextWidthPolicy
from dxfpage.modules.conversion.units import format_units, to_drawing_units, to_unit_format

logger = logging.getLogger(__name__)

AUTO_TEXT_MARKER = "<>"
SUPPRESSED_TEXT = " "
ARROW_WIDTH_RATIO = 1.0 / 6.0
DEFAULT_TEXT_WIDTH_FACTOR = 0.6
_EPS = 1e-12

Segment = Tuple[Vector, Vector]
Triangle = Tuple[Vector, Vector, Vector]


@dataclass(frozen=True, slots=True)
class DimensionSettings:
    text_height: float
    extension_line_offset: float
    extension_line_extension: float
    dimension_line_gap: float
    arrow_size: float
    tick_size: float

    @classmethod
    def from_style(cls, style: DimensionStyle) -> "DimensionSettings":
        return cls(
            text_height=style.text_height,
            extension_line_offset=style.extension_line_offset,
            extension_line_extension=style.extension_line_extension,
            dimension_line_gap=style.dimension_line_gap,
            arrow_size=style.arrow_size,
            tick_size=style.tick_size,
        )


@dataclass(slots=True)
class LinearDimensionProperties:
    """Geometría de una cota lineal, en coordenadas del dibujo de origen."""

    dimension_length: float
    dimension_line_angle: float
    text_location: Vector
    dimension_line_segments: List[Segment] = field(default_factory=list)
    dimension_triangles: List[Triangle] = field(default_factory=list)


def heuristic_text_width(text: str, text_height: float, width_factor: float = DEFAULT_TEXT_WIDTH_FACTOR) -> float:
    """Ancho aproximado sin métricas de fuente: alto x caracteres x factor."""
    return text_height * len(text) * width_factor


def _reading_direction(direction: Vector) -> Vector:
    # la cota se lee de izquierda a derecha o de abajo hacia arriba
    if direction.x < -_EPS or (abs(direction.x) <= _EPS and direction.y < 0):
        return -direction
    return direction


def _dimension_direction(origin1: Vector, origin2: Vector, is_aligned: bool, rotation_angle: float) -> Vector:
    if is_aligned:
        delta = Vector(origin2.x - origin1.x, origin2.y - origin1.y, 0.0)
        if delta.length > _EPS:
            return _reading_direction(delta.normalize())
        return Vector(1.0, 0.0, 0.0)
    # cota rotada: el eje lo fija el ángulo del DXF (grupo 50), en grados
    radians = math.radians(rotation_angle)
    return _reading_direction(Vector(math.cos(radians), math.sin(radians), 0.0))


def _project_onto_line(point: Vector, line_point: Vector, direction: Vector) -> Vector:
    offset = Vector(point.x - line_point.x, point.y - line_point.y, 0.0)
    return Vector(line_point.x, line_point.y, 0.0) + direction * offset.dot(direction)


def _extension_line(origin: Vector, foot: Vector, normal: Vector, dim_settings: DimensionSettings) -> Segment:
    start = Vector(origin.x, origin.y, 0.0)
    toward = foot - start
    unit = toward.normalize() if toward.length > _EPS else normal
    return (
        start + unit * dim_settings.extension_line_offset,
        foot + unit * dim_settings.extension_line_extension,
    )


def build_linear_dimension(
    origin1: Vector,
    origin2: Vector,
    placement: Vector,
    is_aligned: bool,
    text: str | None,
    text_width: float,
    dim_settings: DimensionSettings,
    rotation_angle: float = 0.0,
) -> LinearDimensionProperties:
    """Calcula líneas de extensión, línea de cota, flechas y ubicación del texto.

    ``origin1``/``origin2`` son los orígenes de las líneas de extensión y
    ``placement`` un punto sobre la línea de cota. Con ``is_aligned`` la
    dirección sigue la recta entre orígenes; si no, la fija ``rotation_angle``
    (grados, 0 horizontal y 90 vertical).
    """
    direction = _dimension_direction(origin1, origin2, is_aligned, rotation_angle)
    normal = direction.perpendicular()

    foot1 = _project_onto_line(origin1, placement, direction)
    foot2 = _project_onto_line(origin2, placement, direction)
    if (foot2 - foot1).dot(direction) < 0:
        origin1, origin2 = origin2, origin1
        foot1, foot2 = foot2, foot1

    line_length = (foot2 - foot1).length
    segments: List[Segment] = [
        _extension_line(origin1, foot1, normal, dim_settings),
        _extension_line(origin2, foot2, normal, dim_settings),
    ]

    middle = foot1.midpoint(foot2)
    gap = text_width + 2.0 * dim_settings.dimension_line_gap
    if text and gap < line_length:
        half_gap = gap / 2.0
        segments.append((foot1, middle - direction * half_gap))
        segments.append((middle + direction * half_gap, foot2))
    else:
        segments.append((foot1, foot2))
    # el texto se ancla sobre la línea, separado por el gap
    text_location = middle - direction * (text_width / 2.0) + normal * dim_settings.dimension_line_gap

    triangles: List[Triangle] = []
    if dim_settings.tick_size > 0:
        tick = (direction + normal).normalize() * (dim_settings.tick_size / 2.0)
        for foot in (foot1, foot2):
            segments.append((foot - tick, foot + tick))
    elif dim_settings.arrow_size > 0:
        half_width = dim_settings.arrow_size * ARROW_WIDTH_RATIO
        for tip, inward in ((foot1, direction), (foot2, -direction)):
            base = tip + inward * dim_settings.arrow_size
            triangles.append((tip, base + normal * half_width, base - normal * half_width))

    return LinearDimensionProperties(
        dimension_length=line_length,
        dimension_line_angle=direction.angle,
        text_location=text_location,
        dimension_line_segments=segments,
        dimension_triangles=triangles,
    )


def generate_linear_dimension_text(length: float, header: SourceHeader) -> str:
    drawing_units = to_drawing_units(header.drawing_units)
    unit_format = to_unit_format(header.unit_format)
    return format_units(length, drawing_units, unit_format, header.unit_precision)


def resolve_dimension_settings(
    style_name: str,
    dimension_styles: Dict[str, DimensionStyle],
) -> DimensionSettings:
    # los nombres de tabla DXF no distinguen mayúsculas
    style = dimension_styles.get(style_name.casefold())
    if style is None:
        logger.warning("Estilo de cota %s no encontrado; se usan valores por defecto", style_name)
        style = DimensionStyle(name=style_name)
    return DimensionSettings.from_style(style)


def _definition_points(dimension: DimensionEntity) -> tuple[Vector, Vector, Vector, bool] | None:
    if dimension.dimension_type is DimensionType.ALIGNED:
        is_aligned = True
    elif dimension.dimension_type is DimensionType.ROTATED_HORIZONTAL_OR_VERTICAL:
        is_aligned = False
    else:
        return None
    return (
        dimension.definition_point2,
        dimension.definition_point3,
        dimension.definition_point1,
        is_aligned,
    )


def convert_dimension(
    dimension: DimensionEntity,
    layer: SourceLayer,
    dimension_styles: Dict[str, DimensionStyle],
    header: SourceHeader,
    transform: AffineTransform,
    builder: PathBuilder,
    page: Page,
    *,
    font: str,
    text_width_policy: TextWidthPolicy | None = None,
    text_width_factor: float = DEFAULT_TEXT_WIDTH_FACTOR,
) -> bool:
    points = _definition_points(dimension)
    if points is None:
        return False
    origin1, origin2, placement, is_aligned = points

    dim_settings = resolve_dimension_settings(dimension.dimension_style_name, dimension_styles)
    text = dimension.text
    if text is None or text == AUTO_TEXT_MARKER:
        measured = build_linear_dimension(
            origin1, origin2, placement, is_aligned, None, 0.0, dim_settings, dimension.rotation_angle
        )
        text = generate_linear_dimension_text(measured.dimension_length, header)
    elif text == SUPPRESSED_TEXT:
        text = ""

    if text_width_policy is not None:
        text_width = text_width_policy(text, dim_settings.text_height)
    else:
        text_width = heuristic_text_width(text, dim_settings.text_height, text_width_factor)
    properties = build_linear_dimension(
        origin1, origin2, placement, is_aligned, text, text_width, dim_settings, dimension.rotation_angle
    )

    for start, end in properties.dimension_line_segments:
        line = LineEntity(
            layer=dimension.layer,
            color=dimension.color,
            true_color=dimension.true_color,
            line_weight=dimension.line_weight,
            p1=start,
            p2=end,
        )
        builder.extend(list(convert_line(line, layer, transform)))

    color = resolve_color(dimension, layer)
    for triangle in properties.dimension_triangles:
        corners = tuple(to_page_point(transform.transform(corner)) for corner in triangle)
        builder.add(FilledPolygonItem(corners, StreamState(stroke_color=color, stroke_width=1.0, fill_color=color)))

    dimension_text = TextEntity(
        layer=dimension.layer,
        color=dimension.color,
        true_color=dimension.true_color,
        location=properties.text_location,
        text_height=dim_settings.text_height,
        value=text,
        rotation=math.degrees(properties.dimension_line_angle),
    )
    page.flush(builder)
    page.add_item(convert_text(dimension_text, layer, transform, font))
    return True


__all__ = [
    "AUTO_TEXT_MARKER",
    "DEFAULT_TEXT_WIDTH_FACTOR",
    "DimensionSettings",
    "LinearDimensionProperties",
    "SUPPRESSED_TEXT",
    "build_linear_dimension",
    "convert_dimension",
    "generate_linear_dimension_text",
    "heuristic_text_width",
    "resolve_dimension_settings",
]
