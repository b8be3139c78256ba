from __future__ import annotations

import logging
import math
from pathlib import PurePath

from dxfpage.modules.conversion.domain import ImageEntity, SourceLayer
from dxfpage.modules.conversion.geometry import AffineTransform, Vector
from dxfpage.modules.conversion.page import ImageItem, ImageObject
from dxfpage.modules.conversion.schemas import ContentResolver

logger = logging.getLogger(__name__)

# Sólo JPEG pasa tal cual; PNG exigiría recodificar los píxeles
PASS_THROUGH_FILTERS = {
    ".jpg": ("DCTDecode",),
    ".jpeg": ("DCTDecode",),
}
DEFAULT_COLOR_SPACE = "DeviceRGB"
DEFAULT_BITS_PER_COMPONENT = 8


def image_filters(file_path: str) -> tuple[str, ...] | None:
    # las rutas guardadas en el DXF pueden traer separadores de Windows
    suffix = PurePath(file_path.replace("\\", "/")).suffix.lower()
    return PASS_THROUGH_FILTERS.get(suffix)


def image_placement(image: ImageEntity, transform: AffineTransform) -> AffineTransform:
    size = Vector(
        image.u_vector.length * image.image_size.x,
        image.v_vector.length * image.image_size.y,
        0.0,
    )
    size_on_page = transform.transform_scale(size)
    degrees = math.degrees(math.atan2(image.u_vector.y, image.u_vector.x))
    location = transform.transform(Vector(image.location.x, image.location.y, 0.0))
    return (
        AffineTransform.translation(location.x, location.y)
        @ AffineTransform.scaling(size_on_page.x, size_on_page.y, 1.0)
        @ AffineTransform.rotation_z(degrees)
    )


def try_convert_image(
    image: ImageEntity,
    layer: SourceLayer,
    transform: AffineTransform,
    resolver: ContentResolver,
) -> ImageItem | None:
    filters = image_filters(image.file_path)
    if filters is None:
        logger.debug("Imagen %s con formato no soportado; se omite", image.file_path)
        return None

    data = resolver(image.file_path)
    if not data:
        logger.debug("No se pudo resolver el contenido de la imagen %s", image.file_path)
        return None

    # TODO: leer espacio de color y profundidad desde el encabezado JPEG
    image_object = ImageObject(
        width=int(image.image_size.x),
        height=int(image.image_size.y),
        color_space=DEFAULT_COLOR_SPACE,
        bits_per_component=DEFAULT_BITS_PER_COMPONENT,
        data=bytes(data),
        filters=filters,
    )
    return ImageItem(image=image_object, matrix=image_placement(image, transform).as_matrix())


__all__ = [
    "DEFAULT_BITS_PER_COMPONENT",
    "DEFAULT_COLOR_SPACE",
    "PASS_THROUGH_FILTERS",
    "image_filters",
    "image_placement",
    "try_convert_image",
]
