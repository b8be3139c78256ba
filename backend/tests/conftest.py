"""Fixtures compartidos para las pruebas del motor de conversión."""
import pytest

from dxfpage.modules.conversion.domain import (
    DimensionStyle,
    SourceColor,
    SourceDocument,
    SourceHeader,
    SourceLayer,
)
from dxfpage.modules.conversion.geometry import AffineTransform
from dxfpage.modules.conversion.schemas import ConverterOptions


@pytest.fixture
def layer():
    """Capa visible en rojo (índice 1) con grosor por defecto."""
    return SourceLayer(name="0", color=SourceColor(1))


@pytest.fixture
def identity():
    return AffineTransform.identity()


@pytest.fixture
def options():
    """Opciones con escala 1/72 para que una unidad DXF sea un punto."""
    return ConverterOptions(page_width=600, page_height=400, scale=1.0 / 72.0)


@pytest.fixture
def dim_style():
    return DimensionStyle(
        name="STANDARD",
        text_height=1.0,
        extension_line_offset=0.5,
        extension_line_extension=1.0,
        dimension_line_gap=0.25,
        arrow_size=1.0,
        tick_size=0.0,
    )


@pytest.fixture
def document(layer, dim_style):
    return SourceDocument(
        header=SourceHeader(drawing_units=1, unit_format=2, unit_precision=2),
        layers=[layer],
        dimension_styles=[dim_style],
    )
