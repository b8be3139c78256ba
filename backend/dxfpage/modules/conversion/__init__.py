"""Motor de conversión de documentos DXF a páginas de dibujo vectorial."""

from .converter import DxfToPageConverter, convert_document
from .dxf_loader import load_source_document
from .errors import ConversionError, DxfLoadError, InvalidUnitEnumerationError
from .page import Page, serialize_page
from .schemas.options import ConverterOptions, PageRect, SourceRect

__all__ = [
    "ConversionError",
    "ConverterOptions",
    "DxfLoadError",
    "DxfToPageConverter",
    "InvalidUnitEnumerationError",
    "Page",
    "PageRect",
    "SourceRect",
    "convert_document",
    "load_source_document",
    "serialize_page",
]
