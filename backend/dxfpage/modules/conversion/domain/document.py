from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Sequence

from dxfpage.modules.conversion.geometry import Vector

COLOR_BY_BLOCK = 0
COLOR_BY_LAYER = 256

LINEWEIGHT_BY_LAYER = -1
LINEWEIGHT_BY_BLOCK = -2
LINEWEIGHT_DEFAULT = -3


@dataclass(frozen=True, slots=True)
class SourceColor:
    """Color indexado con la semántica del DXF (0 = por bloque, 256 = por capa)."""

    index: int = COLOR_BY_LAYER

    @property
    def is_by_layer(self) -> bool:
        return self.index == COLOR_BY_LAYER

    @property
    def is_by_block(self) -> bool:
        return self.index == COLOR_BY_BLOCK

    @property
    def is_index(self) -> bool:
        return 1 <= self.index <= 255

    @classmethod
    def by_layer(cls) -> "SourceColor":
        return cls(COLOR_BY_LAYER)

    @classmethod
    def by_block(cls) -> "SourceColor":
        return cls(COLOR_BY_BLOCK)


@dataclass(slots=True)
class SourceLayer:
    name: str
    color: SourceColor = field(default_factory=lambda: SourceColor(7))
    line_weight: int = LINEWEIGHT_DEFAULT
    is_on: bool = True


@dataclass(slots=True)
class SourceHeader:
    # Los valores crudos se validan al formatear cotas (ver units.py)
    drawing_units: int = 0
    unit_format: int = 2
    unit_precision: int = 4
    version: str = "AC1015"
    current_layer: str = "0"


@dataclass(slots=True)
class ViewPort:
    lower_left: Vector = field(default_factory=Vector)


@dataclass(slots=True)
class DimensionStyle:
    """Estilo de cota con los valores por defecto del DXF."""

    name: str
    text_height: float = 0.18
    extension_line_offset: float = 0.0625
    extension_line_extension: float = 0.18
    dimension_line_gap: float = 0.09
    arrow_size: float = 0.18
    tick_size: float = 0.0


@dataclass
class SourceEntity:
    layer: str = "0"
    color: SourceColor | None = None
    true_color: int | None = None
    line_weight: int = LINEWEIGHT_BY_LAYER


@dataclass
class LineEntity(SourceEntity):
    p1: Vector = field(default_factory=Vector)
    p2: Vector = field(default_factory=Vector)


@dataclass
class ModelPointEntity(SourceEntity):
    location: Vector = field(default_factory=Vector)
    thickness: float = 0.0


@dataclass
class CircleEntity(SourceEntity):
    center: Vector = field(default_factory=Vector)
    radius: float = 1.0


@dataclass
class ArcEntity(SourceEntity):
    center: Vector = field(default_factory=Vector)
    radius: float = 1.0
    start_angle: float = 0.0
    end_angle: float = 360.0


@dataclass(frozen=True, slots=True)
class LwPolylineVertex:
    x: float
    y: float
    bulge: float = 0.0


@dataclass
class LwPolylineEntity(SourceEntity):
    vertices: Sequence[LwPolylineVertex] = field(default_factory=list)
    is_closed: bool = False


@dataclass(frozen=True, slots=True)
class PolylineVertex:
    location: Vector
    bulge: float = 0.0


@dataclass
class PolylineEntity(SourceEntity):
    vertices: Sequence[PolylineVertex] = field(default_factory=list)
    is_closed: bool = False


@dataclass
class SolidEntity(SourceEntity):
    """Cuadrilátero relleno; el DXF guarda las esquinas 3 y 4 intercambiadas."""

    first_corner: Vector = field(default_factory=Vector)
    second_corner: Vector = field(default_factory=Vector)
    third_corner: Vector = field(default_factory=Vector)
    fourth_corner: Vector = field(default_factory=Vector)


@dataclass
class TextEntity(SourceEntity):
    location: Vector = field(default_factory=Vector)
    text_height: float = 1.0
    value: str = ""
    rotation: float = 0.0


@dataclass
class ImageEntity(SourceEntity):
    location: Vector = field(default_factory=Vector)
    u_vector: Vector = field(default_factory=lambda: Vector(1.0, 0.0, 0.0))
    v_vector: Vector = field(default_factory=lambda: Vector(0.0, 1.0, 0.0))
    image_size: Vector = field(default_factory=Vector)
    file_path: str = ""


class DimensionType(str, Enum):
    ROTATED_HORIZONTAL_OR_VERTICAL = "rotated"
    ALIGNED = "aligned"
    ANGULAR = "angular"
    DIAMETER = "diameter"
    RADIUS = "radius"
    ANGULAR_THREE_POINT = "angular_3p"
    ORDINATE = "ordinate"


@dataclass
class DimensionEntity(SourceEntity):
    """Cota genérica.

    Para las cotas lineales ``definition_point1`` es el punto de ubicación de
    la línea de cota y ``definition_point2``/``definition_point3`` son los
    orígenes de las líneas de extensión.
    """

    dimension_type: DimensionType = DimensionType.ALIGNED
    definition_point1: Vector = field(default_factory=Vector)
    definition_point2: Vector = field(default_factory=Vector)
    definition_point3: Vector = field(default_factory=Vector)
    dimension_style_name: str = "STANDARD"
    text: str | None = None
    rotation_angle: float = 0.0  # grados; sólo aplica a cotas rotadas


@dataclass
class UnsupportedEntity(SourceEntity):
    kind: str = "UNKNOWN"


@dataclass
class SourceDocument:
    """Documento vectorial de entrada, independiente del lector que lo produjo."""

    header: SourceHeader = field(default_factory=SourceHeader)
    layers: List[SourceLayer] = field(default_factory=list)
    entities: List[SourceEntity] = field(default_factory=list)
    dimension_styles: List[DimensionStyle] = field(default_factory=list)
    active_viewport: ViewPort = field(default_factory=ViewPort)

    def add_entity(self, entity: SourceEntity) -> None:
        self.entities.append(entity)

    def extend(self, new_entities: Sequence[SourceEntity]) -> None:
        self.entities.extend(new_entities)

    def visible_layers(self) -> List[SourceLayer]:
        return [layer for layer in self.layers if layer.is_on]

    def dimension_style_map(self) -> Dict[str, DimensionStyle]:
        # clave en minúsculas: los nombres de tabla DXF no distinguen mayúsculas
        return {style.name.casefold(): style for style in self.dimension_styles}


__all__ = [
    "COLOR_BY_BLOCK",
    "COLOR_BY_LAYER",
    "LINEWEIGHT_BY_BLOCK",
    "LINEWEIGHT_BY_LAYER",
    "LINEWEIGHT_DEFAULT",
    "ArcEntity",
    "CircleEntity",
    "DimensionEntity",
    "DimensionStyle",
    "DimensionType",
    "ImageEntity",
    "LineEntity",
    "LwPolylineEntity",
    "LwPolylineVertex",
    "ModelPointEntity",
    "PolylineEntity",
    "PolylineVertex",
    "SolidEntity",
    "SourceColor",
    "SourceDocument",
    "SourceEntity",
    "SourceHeader",
    "SourceLayer",
    "TextEntity",
    "UnsupportedEntity",
    "ViewPort",
]
