from __future__ import annotations

from dxfpage.core.config import settings
from dxfpage.modules.conversion.domain import ViewPort
from dxfpage.modules.conversion.geometry import AffineTransform
from dxfpage.modules.conversion.schemas import ConverterOptions


def create_transformation(
    viewport: ViewPort,
    options: ConverterOptions,
    *,
    points_per_unit: float | None = None,
) -> AffineTransform:
    """Construye la transformación absoluta DXF -> página.

    Con rectángulos explícitos se mapea origen -> destino con escala
    independiente por eje. Sin ellos se usa la escala del usuario sobre el
    viewport activo, asumiendo pulgadas (72 puntos por unidad). Las
    longitudes relativas se transforman con ``transform_scale`` de la misma
    matriz.
    """
    if options.source_rect is not None and options.destination_rect is not None:
        source = options.source_rect
        destination = options.destination_rect
        scale_x = destination.width / source.width
        scale_y = destination.height / source.height
        return (
            AffineTransform.translation(destination.left, destination.bottom)
            @ AffineTransform.scaling(scale_x, scale_y, 0.0)
            @ AffineTransform.translation(-source.left, -source.bottom)
        )

    # TODO: leer la unidad real del encabezado ($INSUNITS) en lugar de asumir pulgadas
    factor = options.scale * (points_per_unit if points_per_unit is not None else settings.points_per_unit)
    lower_left = viewport.lower_left
    return AffineTransform.scaling(factor, factor, 0.0) @ AffineTransform.translation(-lower_left.x, -lower_left.y)


__all__ = ["create_transformation"]
