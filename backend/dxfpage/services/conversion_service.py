from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping

from dxfpage.core.config import settings
from dxfpage.modules.conversion import (
    ConverterOptions,
    DxfToPageConverter,
    Page,
    load_source_document,
    serialize_page,
)
from dxfpage.modules.conversion.domain import SourceDocument

logger = logging.getLogger(__name__)
if not logger.handlers:
    handler = logging.StreamHandler()
    formatter = logging.Formatter("[%(asctime)s] %(levelname)s %(name)s - %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)
logger.setLevel(settings.log_level)
logger.propagate = False


@dataclass(slots=True)
class ConversionResult:
    page: Page
    entity_count: int
    item_count: int


def build_options(
    *,
    page_width: float | None = None,
    page_height: float | None = None,
    scale: float = 1.0,
    images: Mapping[str, bytes] | None = None,
) -> ConverterOptions:
    resolver = None
    if images:
        resolver = mapping_resolver(images)
    return ConverterOptions(
        page_width=page_width or settings.default_page_width,
        page_height=page_height or settings.default_page_height,
        scale=scale,
        content_resolver=resolver,
    )


def mapping_resolver(images: Mapping[str, bytes]):
    """Resuelve imágenes por ruta completa o por nombre de archivo."""
    by_name: Dict[str, bytes] = {Path(key.replace("\\", "/")).name: value for key, value in images.items()}

    def resolve(path: str) -> bytes | None:
        if path in images:
            return images[path]
        return by_name.get(Path(path.replace("\\", "/")).name)

    return resolve


def directory_resolver(base_dir: Path):
    """Resuelve imágenes relativas a la carpeta del DXF."""

    def resolve(path: str) -> bytes | None:
        candidate = base_dir / Path(path.replace("\\", "/")).name
        try:
            return candidate.read_bytes()
        except OSError:
            logger.info("Imagen %s no encontrada en %s", path, base_dir)
            return None

    return resolve


def convert_source(source: SourceDocument, options: ConverterOptions) -> ConversionResult:
    page = DxfToPageConverter().convert(source, options)
    item_count = sum(1 for _ in page.iter_drawables())
    logger.info(
        "Documento convertido: %d entidades -> %d elementos dibujables",
        len(source.entities),
        item_count,
    )
    return ConversionResult(page=page, entity_count=len(source.entities), item_count=item_count)


def convert_dxf_bytes(data: bytes, options: ConverterOptions) -> ConversionResult:
    source = load_source_document(data)
    return convert_source(source, options)


def convert_dxf_file(path: Path, options: ConverterOptions | None = None) -> ConversionResult:
    if options is None:
        options = ConverterOptions(content_resolver=directory_resolver(path.parent))
    source = load_source_document(path)
    return convert_source(source, options)


def page_payload(result: ConversionResult) -> dict:
    payload = serialize_page(result.page)
    payload["entity_count"] = result.entity_count
    payload["item_count"] = result.item_count
    return payload


__all__ = [
    "ConversionResult",
    "build_options",
    "convert_dxf_bytes",
    "convert_dxf_file",
    "convert_source",
    "directory_resolver",
    "mapping_resolver",
    "page_payload",
]
