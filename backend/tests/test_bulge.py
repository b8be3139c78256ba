"""Tests for arc reconstruction from polyline bulge values."""
import math

import pytest

from dxfpage.modules.conversion.bulge import bulge_arc_geometry, convert_bulge_segment
from dxfpage.modules.conversion.geometry import AffineTransform, Vector
from dxfpage.modules.conversion.page import EllipseItem, LineItem, StreamState

QUARTER_BULGE = math.tan(math.pi / 8)


def test_zero_bulge_is_straight_line(identity):
    item = convert_bulge_segment(Vector(0, 0), Vector(1, 0), 0.0, identity, StreamState())
    assert isinstance(item, LineItem)
    assert item.p1 == (0, 0)
    assert item.p2 == (1, 0)


def test_tiny_bulge_is_straight_line(identity):
    item = convert_bulge_segment(Vector(0, 0), Vector(1, 0), 1e-12, identity, StreamState())
    assert isinstance(item, LineItem)


def test_degenerate_chord_falls_back_to_line(identity):
    item = convert_bulge_segment(Vector(2, 2), Vector(2, 2), 1.0, identity, StreamState())
    assert isinstance(item, LineItem)


def test_half_circle_bulge(identity):
    item = convert_bulge_segment(Vector(0, 0), Vector(1, 0), 1.0, identity, StreamState())
    assert isinstance(item, EllipseItem)
    assert item.radius_x == pytest.approx(0.5)
    assert item.radius_y == pytest.approx(0.5)
    assert item.center == pytest.approx((0.5, 0.0), abs=1e-12)
    assert item.end_angle - item.start_angle == pytest.approx(math.pi)
    assert item.rotation == 0.0


def test_negative_half_circle_bulge_swaps_angles(identity):
    item = convert_bulge_segment(Vector(0, 0), Vector(1, 0), -1.0, identity, StreamState())
    assert item.start_angle == pytest.approx(0.0, abs=1e-12)
    assert item.end_angle == pytest.approx(math.pi)


def test_quarter_arc_center_and_angles():
    center, radius, start, end = bulge_arc_geometry(Vector(0, 0), Vector(1, 0), QUARTER_BULGE)
    assert (center.x, center.y) == pytest.approx((0.5, 0.5))
    assert radius == pytest.approx(math.sqrt(0.5))
    assert start == pytest.approx(-3 * math.pi / 4)
    assert end == pytest.approx(-math.pi / 4)


def test_negative_quarter_arc_mirrors_center():
    center, radius, start, end = bulge_arc_geometry(Vector(0, 0), Vector(1, 0), -QUARTER_BULGE)
    assert (center.x, center.y) == pytest.approx((0.5, -0.5))
    assert radius == pytest.approx(math.sqrt(0.5))
    # horario: inicio y fin intercambiados para barrer en sentido antihorario
    assert start == pytest.approx(math.pi / 4)
    assert end == pytest.approx(3 * math.pi / 4)


def test_arc_radius_uses_magnitude_transform():
    transform = AffineTransform.translation(100, 200) @ AffineTransform.scaling(2, 3)
    item = convert_bulge_segment(Vector(0, 0), Vector(1, 0), QUARTER_BULGE, transform, StreamState())
    assert item.center == pytest.approx((101.0, 201.5))
    assert item.radius_x == pytest.approx(2 * math.sqrt(0.5))
    assert item.radius_y == pytest.approx(3 * math.sqrt(0.5))
