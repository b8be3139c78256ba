from __future__ import annotations

import math

from dxfpage.modules.conversion.geometry import (
    DEFAULT_TOLERANCE,
    AffineTransform,
    Vector,
    is_close_to,
)
from dxfpage.modules.conversion.page import (
    EllipseItem,
    LineItem,
    PathItem,
    StreamState,
    to_page_point,
)

MIN_CHORD_LENGTH = 1e-10


def bulge_arc_geometry(start: Vector, end: Vector, bulge: float) -> tuple[Vector, float, float, float] | None:
    """Centro, radio y ángulos (radianes) del arco codificado por ``bulge``.

    Los ángulos siempre describen un barrido antihorario de inicio a fin; en
    los arcos horarios (bulge negativo) se intercambian. Devuelve ``None``
    cuando el segmento debe dibujarse recto.
    """
    if is_close_to(bulge, 0.0, DEFAULT_TOLERANCE):
        return None

    dx = end.x - start.x
    dy = end.y - start.y
    length = math.sqrt(dx * dx + dy * dy)
    if length < MIN_CHORD_LENGTH:
        return None

    alpha = 4.0 * math.atan(bulge)
    radius = length / (2.0 * abs(math.sin(alpha * 0.5)))

    bulge_factor = math.copysign(1.0, bulge) * math.cos(alpha * 0.5) * radius
    normal_x = -(dy / length) * bulge_factor
    normal_y = +(dx / length) * bulge_factor

    cx = (start.x + end.x) / 2.0 + normal_x
    cy = (start.y + end.y) / 2.0 + normal_y
    if bulge > 0:
        start_angle = math.atan2(start.y - cy, start.x - cx)
        end_angle = math.atan2(end.y - cy, end.x - cx)
    else:
        start_angle = math.atan2(end.y - cy, end.x - cx)
        end_angle = math.atan2(start.y - cy, start.x - cx)

    return Vector(cx, cy, 0.0), radius, start_angle, end_angle


def convert_bulge_segment(
    start: Vector,
    end: Vector,
    bulge: float,
    transform: AffineTransform,
    state: StreamState,
) -> PathItem:
    p1 = to_page_point(transform.transform(Vector(start.x, start.y, 0.0)))
    p2 = to_page_point(transform.transform(Vector(end.x, end.y, 0.0)))
    geometry = bulge_arc_geometry(start, end, bulge)
    if geometry is None:
        return LineItem(p1, p2, state)

    center, radius, start_angle, end_angle = geometry
    page_center = to_page_point(transform.transform(center))
    page_radius = transform.transform_scale(Vector(radius, radius, radius))
    return EllipseItem(
        center=page_center,
        radius_x=page_radius.x,
        radius_y=page_radius.y,
        rotation=0.0,
        start_angle=start_angle,
        end_angle=end_angle,
        state=state,
    )


__all__ = ["MIN_CHORD_LENGTH", "bulge_arc_geometry", "convert_bulge_segment"]
