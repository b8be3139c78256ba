from __future__ import annotations

from typing import Iterator, Sequence

from dxfpage.modules.conversion.bulge import convert_bulge_segment
from dxfpage.modules.conversion.colors import resolve_color, stream_state_for
from dxfpage.modules.conversion.domain import (
    ArcEntity,
    CircleEntity,
    LineEntity,
    LwPolylineEntity,
    ModelPointEntity,
    PolylineEntity,
    SolidEntity,
    SourceLayer,
    TextEntity,
)
from dxfpage.modules.conversion.geometry import DEGREES_TO_RADIANS, AffineTransform, Vector
from dxfpage.modules.conversion.page import (
    EllipseItem,
    FilledPolygonItem,
    LineItem,
    PathItem,
    StreamState,
    TextItem,
    to_page_point,
)

MIN_POINT_THICKNESS = 1.0  # puntos


def convert_line(line: LineEntity, layer: SourceLayer, transform: AffineTransform) -> Iterator[PathItem]:
    p1 = to_page_point(transform.transform(line.p1))
    p2 = to_page_point(transform.transform(line.p2))
    yield LineItem(p1, p2, stream_state_for(line, layer))


def convert_point(point: ModelPointEntity, layer: SourceLayer, transform: AffineTransform) -> Iterator[PathItem]:
    center = to_page_point(transform.transform(point.location))
    thickness = transform.transform_scale(Vector(point.thickness, 0.0, 0.0)).x
    if thickness < MIN_POINT_THICKNESS:
        thickness = MIN_POINT_THICKNESS
    # Sin relleno: el punto se simula con el grosor del trazo
    state = StreamState(stroke_color=resolve_color(point, layer), stroke_width=thickness)
    yield EllipseItem(center=center, radius_x=thickness / 2.0, radius_y=thickness / 2.0, state=state)


def convert_circle(circle: CircleEntity, layer: SourceLayer, transform: AffineTransform) -> Iterator[PathItem]:
    # con escala no uniforme el círculo queda como elipse
    center = to_page_point(transform.transform(circle.center))
    radius = transform.transform_scale(Vector(circle.radius, circle.radius, circle.radius))
    yield EllipseItem(
        center=center,
        radius_x=radius.x,
        radius_y=radius.y,
        state=stream_state_for(circle, layer),
    )


def convert_arc(arc: ArcEntity, layer: SourceLayer, transform: AffineTransform) -> Iterator[PathItem]:
    center = to_page_point(transform.transform(arc.center))
    radius = transform.transform_scale(Vector(arc.radius, arc.radius, arc.radius))
    yield EllipseItem(
        center=center,
        radius_x=radius.x,
        radius_y=radius.y,
        rotation=0.0,
        start_angle=arc.start_angle * DEGREES_TO_RADIANS,
        end_angle=arc.end_angle * DEGREES_TO_RADIANS,
        state=stream_state_for(arc, layer),
    )


def convert_solid(solid: SolidEntity, layer: SourceLayer, transform: AffineTransform) -> Iterator[PathItem]:
    corners = (
        solid.first_corner,
        solid.second_corner,
        solid.fourth_corner,
        solid.third_corner,
    )
    points = tuple(to_page_point(transform.transform(corner)) for corner in corners)
    state = stream_state_for(solid, layer)
    yield FilledPolygonItem(points, StreamState(state.stroke_color, state.stroke_width, state.stroke_color))


def _convert_vertex_chain(
    vertices: Sequence[tuple[Vector, float]],
    is_closed: bool,
    transform: AffineTransform,
    state: StreamState,
) -> Iterator[PathItem]:
    if not vertices:
        return
    location, bulge = vertices[0]
    for next_location, next_bulge in vertices[1:]:
        yield convert_bulge_segment(location, next_location, bulge, transform, state)
        location, bulge = next_location, next_bulge
    if is_closed:
        yield convert_bulge_segment(location, vertices[0][0], bulge, transform, state)


def convert_lwpolyline(
    polyline: LwPolylineEntity,
    layer: SourceLayer,
    transform: AffineTransform,
) -> Iterator[PathItem]:
    vertices = [(Vector(v.x, v.y, 0.0), v.bulge) for v in polyline.vertices]
    yield from _convert_vertex_chain(vertices, polyline.is_closed, transform, stream_state_for(polyline, layer))


def convert_polyline(
    polyline: PolylineEntity,
    layer: SourceLayer,
    transform: AffineTransform,
) -> Iterator[PathItem]:
    vertices = [(Vector(v.location.x, v.location.y, 0.0), v.bulge) for v in polyline.vertices]
    yield from _convert_vertex_chain(vertices, polyline.is_closed, transform, stream_state_for(polyline, layer))


def convert_text(text: TextEntity, layer: SourceLayer, transform: AffineTransform, font: str) -> TextItem:
    # TODO: justificación horizontal/vertical requiere medir el texto
    rotation = text.rotation * DEGREES_TO_RADIANS
    font_size = transform.transform_scale(Vector(0.0, text.text_height, 0.0)).y
    location = to_page_point(transform.transform(text.location))
    return TextItem(
        value=text.value,
        font=font,
        font_size=font_size,
        location=location,
        rotation=rotation,
        state=StreamState(stroke_color=resolve_color(text, layer)),
    )


__all__ = [
    "MIN_POINT_THICKNESS",
    "convert_arc",
    "convert_circle",
    "convert_line",
    "convert_lwpolyline",
    "convert_point",
    "convert_polyline",
    "convert_solid",
    "convert_text",
]
