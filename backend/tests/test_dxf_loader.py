"""Tests for reading DXF files through ezdxf."""
import io
import math

import ezdxf
import pytest
from ezdxf.colors import rgb2int

from dxfpage.modules.conversion import convert_document
from dxfpage.modules.conversion.domain import (
    CircleEntity,
    DimensionEntity,
    DimensionType,
    LineEntity,
    LwPolylineEntity,
    TextEntity,
    UnsupportedEntity,
)
from dxfpage.modules.conversion.dxf_loader import (
    from_ezdxf,
    list_supported_kinds,
    load_source_document,
)
from dxfpage.modules.conversion.errors import DxfLoadError
from dxfpage.modules.conversion.schemas import ConverterOptions


@pytest.fixture
def dxf_doc():
    doc = ezdxf.new()
    doc.header["$MEASUREMENT"] = 1
    doc.header["$LUNITS"] = 2
    doc.header["$LUPREC"] = 3
    hidden = doc.layers.add("OCULTA", color=3)
    hidden.off()
    msp = doc.modelspace()
    msp.add_line((0, 0), (10, 0))
    colored = msp.add_line((0, 0), (0, 10), dxfattribs={"layer": "OCULTA", "color": 5})
    colored.rgb = (0, 255, 0)
    msp.add_circle((5, 5), radius=2)
    msp.add_lwpolyline([(0, 0, 0.5), (4, 0, 0), (4, 4, 0)], format="xyb", close=True)
    msp.add_text("Hola", height=2.5, rotation=30, dxfattribs={"insert": (1, 2)})
    msp.add_ellipse((0, 0), major_axis=(2, 0), ratio=0.5)
    msp.add_linear_dim(base=(0, 2), p1=(0, 0), p2=(5, 0), dimstyle="Standard").render()
    return doc


def _first(document, entity_type):
    return next(entity for entity in document.entities if isinstance(entity, entity_type))


def test_header_values(dxf_doc):
    header = from_ezdxf(dxf_doc).header
    assert header.drawing_units == 1
    assert header.unit_format == 2
    assert header.unit_precision == 3
    assert header.current_layer == "0"


def test_layers_keep_color_and_visibility(dxf_doc):
    layers = {layer.name: layer for layer in from_ezdxf(dxf_doc).layers}
    assert layers["0"].is_on
    assert not layers["OCULTA"].is_on
    assert layers["OCULTA"].color.index == 3


def test_entity_attributes(dxf_doc):
    document = from_ezdxf(dxf_doc)
    plain, colored = [entity for entity in document.entities if isinstance(entity, LineEntity)]
    assert plain.color.is_by_layer
    assert plain.true_color is None
    assert (plain.p2.x, plain.p2.y) == (10, 0)
    assert colored.layer == "OCULTA"
    assert colored.color.index == 5
    assert colored.true_color == rgb2int((0, 255, 0))

    circle = _first(document, CircleEntity)
    assert circle.radius == 2

    polyline = _first(document, LwPolylineEntity)
    assert polyline.is_closed
    assert [v.bulge for v in polyline.vertices] == [0.5, 0, 0]

    text = _first(document, TextEntity)
    assert text.value == "Hola"
    assert text.text_height == 2.5
    assert text.rotation == 30
    assert (text.location.x, text.location.y) == (1, 2)


def test_unknown_kinds_become_unsupported(dxf_doc):
    document = from_ezdxf(dxf_doc)
    unsupported = [entity for entity in document.entities if isinstance(entity, UnsupportedEntity)]
    assert [entity.kind for entity in unsupported] == ["ELLIPSE"]


def test_linear_dimension_definition_points(dxf_doc):
    dimension = _first(from_ezdxf(dxf_doc), DimensionEntity)
    assert dimension.dimension_type is DimensionType.ROTATED_HORIZONTAL_OR_VERTICAL
    assert (dimension.definition_point2.x, dimension.definition_point2.y) == pytest.approx((0, 0))
    assert (dimension.definition_point3.x, dimension.definition_point3.y) == pytest.approx((5, 0))
    assert dimension.definition_point1.y == pytest.approx(2)
    assert dimension.dimension_style_name == "Standard"
    assert dimension.rotation_angle == pytest.approx(0.0)


def test_vertical_linear_dimension_keeps_rotation():
    doc = ezdxf.new()
    doc.header["$MEASUREMENT"] = 1
    doc.header["$LUNITS"] = 2
    doc.header["$LUPREC"] = 2
    doc.modelspace().add_linear_dim(base=(3, 5), p1=(0, 0), p2=(5, 10), angle=90).render()
    document = from_ezdxf(doc)

    dimension = _first(document, DimensionEntity)
    assert dimension.rotation_angle == pytest.approx(90.0)

    page = convert_document(document, ConverterOptions(page_width=400, page_height=400, scale=1 / 72))
    text = page.items[-1]
    assert text.value == "10.00"
    assert text.rotation == pytest.approx(math.pi / 2)


def test_dimension_styles_are_loaded(dxf_doc):
    styles = from_ezdxf(dxf_doc).dimension_style_map()
    # clave sin distinción de mayúsculas
    assert "standard" in styles
    assert styles["standard"].text_height > 0


def test_load_from_bytes_and_convert(dxf_doc):
    stream = io.StringIO()
    dxf_doc.write(stream)
    document = load_source_document(stream.getvalue().encode("utf8"))
    assert len(document.entities) == 7

    page = convert_document(document, ConverterOptions(page_width=400, page_height=400, scale=1 / 72))
    kinds = [type(item).__name__ for item in page.items]
    # la línea de la capa oculta no aparece; texto y cota parten los grupos
    assert kinds == ["PathGroup", "TextItem", "PathGroup", "TextItem"]
    assert page.items[-1].value == "5.000"


def test_load_from_path(dxf_doc, tmp_path):
    path = tmp_path / "plano.dxf"
    dxf_doc.saveas(path)
    document = load_source_document(path)
    assert any(isinstance(entity, CircleEntity) for entity in document.entities)


def test_missing_file_raises_load_error(tmp_path):
    with pytest.raises(DxfLoadError):
        load_source_document(tmp_path / "no_existe.dxf")


def test_supported_kinds():
    kinds = list_supported_kinds()
    assert kinds == sorted(kinds)
    assert {"LINE", "LWPOLYLINE", "DIMENSION", "IMAGE"} <= set(kinds)
