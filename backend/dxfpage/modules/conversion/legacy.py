"""Copia estructural de dibujos en formato binario heredado al documento de origen.

Sólo se copian capas (nombre y color), la capa actual y las entidades de
arco, círculo y línea del espacio modelo. El resto se descarta sin aviso.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence

from dxfpage.modules.conversion.domain import (
    ArcEntity,
    CircleEntity,
    LineEntity,
    SourceColor,
    SourceDocument,
    SourceHeader,
    SourceLayer,
)
from dxfpage.modules.conversion.geometry import Vector

DEFAULT_TARGET_VERSION = "AC1015"


@dataclass(frozen=True, slots=True)
class LegacyLayer:
    name: str
    color: int = 7


@dataclass(frozen=True)
class LegacyEntity:
    layer: str = "0"


@dataclass(frozen=True)
class LegacyLine(LegacyEntity):
    p1: Vector = field(default_factory=Vector)
    p2: Vector = field(default_factory=Vector)


@dataclass(frozen=True)
class LegacyCircle(LegacyEntity):
    center: Vector = field(default_factory=Vector)
    radius: float = 1.0


@dataclass(frozen=True)
class LegacyArc(LegacyEntity):
    center: Vector = field(default_factory=Vector)
    radius: float = 1.0
    start_angle: float = 0.0
    end_angle: float = 360.0


@dataclass(frozen=True)
class LegacyBlockReference(LegacyEntity):
    name: str = ""
    location: Vector = field(default_factory=Vector)


@dataclass
class LegacyDrawing:
    layers: List[LegacyLayer] = field(default_factory=list)
    current_layer: str = "0"
    model_space: Sequence[LegacyEntity] = field(default_factory=list)


def copy_legacy_drawing(drawing: LegacyDrawing, target_version: str = DEFAULT_TARGET_VERSION) -> SourceDocument:
    document = SourceDocument(
        header=SourceHeader(version=target_version, current_layer=drawing.current_layer),
        layers=[SourceLayer(name=layer.name, color=SourceColor(layer.color)) for layer in drawing.layers],
    )

    # TODO: copiar estilos, tipos de línea y referencias a bloque
    for entity in drawing.model_space:
        if isinstance(entity, LegacyArc):
            document.add_entity(
                ArcEntity(
                    layer=entity.layer,
                    center=entity.center,
                    radius=entity.radius,
                    start_angle=entity.start_angle,
                    end_angle=entity.end_angle,
                )
            )
        elif isinstance(entity, LegacyCircle):
            document.add_entity(CircleEntity(layer=entity.layer, center=entity.center, radius=entity.radius))
        elif isinstance(entity, LegacyLine):
            document.add_entity(LineEntity(layer=entity.layer, p1=entity.p1, p2=entity.p2))
    return document


__all__ = [
    "DEFAULT_TARGET_VERSION",
    "LegacyArc",
    "LegacyBlockReference",
    "LegacyCircle",
    "LegacyDrawing",
    "LegacyEntity",
    "LegacyLayer",
    "LegacyLine",
    "copy_legacy_drawing",
]
