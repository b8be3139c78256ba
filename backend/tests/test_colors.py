"""Tests for color and stroke width resolution."""
import pytest

from dxfpage.modules.conversion.colors import (
    SMALLEST_STROKE_WIDTH,
    resolve_color,
    resolve_stroke_width,
    rgb_to_color,
)
from dxfpage.modules.conversion.domain import (
    LINEWEIGHT_BY_BLOCK,
    LINEWEIGHT_BY_LAYER,
    LineEntity,
    SourceColor,
    SourceLayer,
)
from dxfpage.modules.conversion.page import BLACK, Color


# --- resolve_color ---

def test_true_color_wins_over_index_and_layer(layer):
    entity = LineEntity(color=SourceColor(5), true_color=0x00FF00)
    assert resolve_color(entity, layer) == Color(0.0, 1.0, 0.0)


def test_index_color_is_used_when_no_true_color(layer):
    entity = LineEntity(color=SourceColor(5))
    assert resolve_color(entity, layer) == Color(0.0, 0.0, 1.0)


def test_by_layer_uses_layer_color(layer):
    entity = LineEntity(color=SourceColor.by_layer())
    assert resolve_color(entity, layer) == Color(1.0, 0.0, 0.0)


def test_missing_color_uses_layer_color(layer):
    assert resolve_color(LineEntity(color=None), layer) == Color(1.0, 0.0, 0.0)


def test_white_index_renders_black(layer):
    entity = LineEntity(color=SourceColor(7))
    assert resolve_color(entity, layer) == BLACK


def test_white_rgb_collapses_to_black():
    assert rgb_to_color(255, 255, 255) == BLACK
    assert rgb_to_color(255, 255, 254) != BLACK


def test_by_block_defaults_to_black(layer):
    entity = LineEntity(color=SourceColor.by_block())
    assert resolve_color(entity, layer) == BLACK


# --- resolve_stroke_width ---

def test_entity_weight_converted_from_hundredths_of_mm(layer):
    entity = LineEntity(line_weight=100)
    assert resolve_stroke_width(entity, layer) == pytest.approx(72.0 / 25.4)


def test_by_layer_weight_uses_layer_weight():
    layer = SourceLayer(name="0", line_weight=50)
    entity = LineEntity(line_weight=LINEWEIGHT_BY_LAYER)
    assert resolve_stroke_width(entity, layer) == pytest.approx(0.5 * 72.0 / 25.4)


def test_zero_weight_is_hairline(layer):
    assert resolve_stroke_width(LineEntity(line_weight=0), layer) is None


def test_negative_weight_is_smallest_width(layer):
    assert resolve_stroke_width(LineEntity(line_weight=LINEWEIGHT_BY_BLOCK), layer) == SMALLEST_STROKE_WIDTH


def test_by_layer_with_default_layer_weight_is_smallest_width(layer):
    # la capa del fixture conserva el valor por defecto (-3)
    assert resolve_stroke_width(LineEntity(), layer) == SMALLEST_STROKE_WIDTH
