from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable

from dxfpage.modules.conversion.dimensions import convert_dimension
from dxfpage.modules.conversion.domain import (
    ArcEntity,
    CircleEntity,
    DimensionEntity,
    DimensionStyle,
    ImageEntity,
    LineEntity,
    LwPolylineEntity,
    ModelPointEntity,
    PolylineEntity,
    SolidEntity,
    SourceDocument,
    SourceEntity,
    SourceHeader,
    SourceLayer,
    TextEntity,
)
from dxfpage.modules.conversion.geometry import AffineTransform
from dxfpage.modules.conversion.images import try_convert_image
from dxfpage.modules.conversion.page import Page, PathBuilder, PathItem
from dxfpage.modules.conversion.primitives import (
    convert_arc,
    convert_circle,
    convert_line,
    convert_lwpolyline,
    convert_point,
    convert_polyline,
    convert_solid,
    convert_text,
)
from dxfpage.modules.conversion.schemas import ConverterOptions
from dxfpage.modules.conversion.transform import create_transformation

logger = logging.getLogger(__name__)

_PATH_CONVERTERS = (
    (LineEntity, convert_line),
    (ModelPointEntity, convert_point),
    (ArcEntity, convert_arc),
    (CircleEntity, convert_circle),
    (LwPolylineEntity, convert_lwpolyline),
    (PolylineEntity, convert_polyline),
    (SolidEntity, convert_solid),
)


@dataclass(slots=True)
class ConversionContext:
    """Estado de una única conversión; el builder y la página no se comparten."""

    options: ConverterOptions
    header: SourceHeader
    dimension_styles: Dict[str, DimensionStyle]
    transform: AffineTransform
    builder: PathBuilder
    page: Page

    def add_paths(self, items: Iterable[PathItem]) -> None:
        for item in items:
            self.builder.add(item)


class DxfToPageConverter:
    def convert(self, source: SourceDocument, options: ConverterOptions) -> Page:
        transform = create_transformation(source.active_viewport, options)
        page = Page(width=options.page_width, height=options.page_height)
        context = ConversionContext(
            options=options,
            header=source.header,
            dimension_styles=source.dimension_style_map(),
            transform=transform,
            builder=PathBuilder(),
            page=page,
        )
        layers = source.visible_layers()
        skipped = 0

        # primero las imágenes para que líneas y textos queden encima
        for layer in layers:
            for entity in source.entities:
                if isinstance(entity, ImageEntity) and entity.layer == layer.name:
                    if not self.try_convert_entity(entity, layer, context):
                        skipped += 1

        for layer in layers:
            for entity in source.entities:
                if entity.layer != layer.name or isinstance(entity, ImageEntity):
                    continue
                if not self.try_convert_entity(entity, layer, context):
                    skipped += 1

        page.flush(context.builder)
        logger.debug("Conversión terminada: %d ítems en página, %d entidades omitidas", len(page.items), skipped)
        return page

    def try_convert_entity(self, entity: SourceEntity, layer: SourceLayer, context: ConversionContext) -> bool:
        transform = context.transform
        if isinstance(entity, DimensionEntity):
            converted = convert_dimension(
                entity,
                layer,
                context.dimension_styles,
                context.header,
                transform,
                context.builder,
                context.page,
                font=context.options.font,
                text_width_policy=context.options.text_width_policy,
                text_width_factor=context.options.text_width_factor,
            )
            if not converted:
                logger.debug("Cota de tipo %s no soportada; se omite", entity.dimension_type.value)
            return converted

        if isinstance(entity, TextEntity):
            context.page.flush(context.builder)
            context.page.add_item(convert_text(entity, layer, transform, context.options.font))
            return True

        if isinstance(entity, ImageEntity):
            image_item = try_convert_image(entity, layer, transform, context.options.resolve_content)
            if image_item is None:
                return False
            context.page.flush(context.builder)
            context.page.add_item(image_item)
            return True

        for entity_type, converter in _PATH_CONVERTERS:
            if isinstance(entity, entity_type):
                context.add_paths(converter(entity, layer, transform))
                return True

        logger.debug("Entidad %s no soportada; se omite", type(entity).__name__)
        return False


def convert_document(source: SourceDocument, options: ConverterOptions) -> Page:
    return DxfToPageConverter().convert(source, options)


__all__ = ["ConversionContext", "DxfToPageConverter", "convert_document"]
