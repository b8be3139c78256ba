"""Tests for the affine transform and the transform builder."""
import math

import pytest

from dxfpage.modules.conversion.domain import (
    ArcEntity,
    CircleEntity,
    LineEntity,
    LwPolylineEntity,
    LwPolylineVertex,
    SolidEntity,
    ViewPort,
)
from dxfpage.modules.conversion.geometry import AffineTransform, Vector
from dxfpage.modules.conversion.primitives import (
    convert_arc,
    convert_circle,
    convert_line,
    convert_lwpolyline,
    convert_solid,
)
from dxfpage.modules.conversion.schemas import ConverterOptions, PageRect, SourceRect
from dxfpage.modules.conversion.transform import create_transformation


# --- AffineTransform ---

def test_composition_applies_right_operand_first():
    t = AffineTransform.translation(10, 0) @ AffineTransform.scaling(2, 2)
    p = t.transform(Vector(1, 1))
    assert (p.x, p.y) == pytest.approx((12, 2))


def test_transform_scale_drops_translation():
    t = AffineTransform.translation(100, 100) @ AffineTransform.scaling(3, 4)
    v = t.transform_scale(Vector(1, 1))
    assert (v.x, v.y) == pytest.approx((3, 4))


def test_rotation_z_quarter_turn():
    p = AffineTransform.rotation_z(90).transform(Vector(1, 0))
    assert (p.x, p.y) == pytest.approx((0, 1), abs=1e-12)


def test_as_matrix_order():
    t = AffineTransform.translation(5, 6) @ AffineTransform.scaling(2, 3)
    assert t.as_matrix() == pytest.approx((2, 0, 0, 3, 5, 6))


# --- create_transformation ---

def test_uniform_scale_uses_72_points_per_unit():
    options = ConverterOptions(page_width=100, page_height=100, scale=0.5)
    t = create_transformation(ViewPort(lower_left=Vector(1, 2)), options)
    p = t.transform(Vector(3, 4))
    assert (p.x, p.y) == pytest.approx((72.0, 72.0))


def test_explicit_rects_stretch_axes_independently():
    options = ConverterOptions(
        page_width=500,
        page_height=500,
        source_rect=SourceRect(left=10, bottom=20, width=10, height=5),
        destination_rect=PageRect(left=50, bottom=60, width=100, height=100),
    )
    t = create_transformation(ViewPort(), options)
    origin = t.transform(Vector(10, 20))
    corner = t.transform(Vector(20, 25))
    assert (origin.x, origin.y) == pytest.approx((50, 60))
    assert (corner.x, corner.y) == pytest.approx((150, 160))
    radius = t.transform_scale(Vector(1, 1))
    assert (radius.x, radius.y) == pytest.approx((10, 20))


def _equivalent_transforms():
    scale = 0.25
    viewport = ViewPort(lower_left=Vector(-3, 2))
    uniform = ConverterOptions(page_width=300, page_height=300, scale=scale)
    factor = scale * 72.0
    rects = ConverterOptions(
        page_width=300,
        page_height=300,
        source_rect=SourceRect(left=-3, bottom=2, width=40, height=30),
        destination_rect=PageRect(left=0, bottom=0, width=40 * factor, height=30 * factor),
    )
    return create_transformation(viewport, uniform), create_transformation(viewport, rects)


def _flatten(item):
    values = []
    for name in item.__slots__:
        value = getattr(item, name)
        if isinstance(value, tuple):
            for part in value:
                values.extend(part if isinstance(part, tuple) else (part,))
        elif isinstance(value, float):
            values.append(value)
    return values


@pytest.mark.parametrize(
    "converter, entity",
    [
        (convert_line, LineEntity(p1=Vector(0, 0), p2=Vector(5, 7))),
        (convert_circle, CircleEntity(center=Vector(2, 3), radius=1.5)),
        (convert_arc, ArcEntity(center=Vector(2, 3), radius=1.5, start_angle=10, end_angle=200)),
        (
            convert_solid,
            SolidEntity(
                first_corner=Vector(0, 0),
                second_corner=Vector(1, 0),
                third_corner=Vector(0, 1),
                fourth_corner=Vector(1, 1),
            ),
        ),
        (
            convert_lwpolyline,
            LwPolylineEntity(
                vertices=[LwPolylineVertex(0, 0, 0.5), LwPolylineVertex(4, 0), LwPolylineVertex(4, 4)],
                is_closed=True,
            ),
        ),
    ],
)
def test_uniform_and_rect_paths_produce_same_geometry(layer, converter, entity):
    uniform, rects = _equivalent_transforms()
    a_items = list(converter(entity, layer, uniform))
    b_items = list(converter(entity, layer, rects))
    assert len(a_items) == len(b_items)
    for a, b in zip(a_items, b_items):
        assert type(a) is type(b)
        assert _flatten(a) == pytest.approx(_flatten(b), abs=1e-9)


def test_uniform_scale_keeps_circles_round(layer):
    uniform, _ = _equivalent_transforms()
    (item,) = convert_circle(CircleEntity(center=Vector(0, 0), radius=2.0), layer, uniform)
    assert item.radius_x == pytest.approx(item.radius_y)
    assert item.radius_x == pytest.approx(2.0 * 0.25 * 72.0)
    assert item.end_angle - item.start_angle == pytest.approx(2 * math.pi)
