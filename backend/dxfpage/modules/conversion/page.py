from __future__ import annotations

import base64
import math
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Sequence, Tuple, Union

from dxfpage.modules.conversion.geometry import Matrix, Vector

PagePoint = Tuple[float, float]


def to_page_point(vector: Vector) -> PagePoint:
    return (vector.x, vector.y)


@dataclass(frozen=True, slots=True)
class Color:
    r: float = 0.0
    g: float = 0.0
    b: float = 0.0


BLACK = Color(0.0, 0.0, 0.0)


@dataclass(frozen=True, slots=True)
class StreamState:
    """Estado de pintura: ``stroke_width`` en ``None`` equivale a línea fina."""

    stroke_color: Color = BLACK
    stroke_width: float | None = None
    fill_color: Color | None = None


@dataclass(frozen=True, slots=True)
class LineItem:
    p1: PagePoint
    p2: PagePoint
    state: StreamState = field(default_factory=StreamState)


@dataclass(frozen=True, slots=True)
class EllipseItem:
    """Arco elíptico; con ángulos 0..2π representa la elipse completa."""

    center: PagePoint
    radius_x: float
    radius_y: float
    rotation: float = 0.0
    start_angle: float = 0.0
    end_angle: float = 2.0 * math.pi
    state: StreamState = field(default_factory=StreamState)

    @property
    def is_full(self) -> bool:
        return math.isclose(abs(self.end_angle - self.start_angle), 2.0 * math.pi)


@dataclass(frozen=True, slots=True)
class FilledPolygonItem:
    points: Tuple[PagePoint, ...]
    state: StreamState = field(default_factory=StreamState)


PathItem = Union[LineItem, EllipseItem, FilledPolygonItem]


@dataclass(frozen=True, slots=True)
class TextItem:
    value: str
    font: str
    font_size: float
    location: PagePoint
    rotation: float = 0.0
    state: StreamState = field(default_factory=StreamState)


@dataclass(frozen=True, slots=True)
class ImageObject:
    """Bloque de bytes opaco, etiquetado con los filtros que lo decodifican."""

    width: int
    height: int
    color_space: str
    bits_per_component: int
    data: bytes
    filters: Tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class ImageItem:
    image: ImageObject
    matrix: Matrix


@dataclass(frozen=True, slots=True)
class PathGroup:
    items: Tuple[PathItem, ...]


PageItem = Union[PathGroup, TextItem, ImageItem]


class PathBuilder:
    """Acumula ítems de trayectoria hasta que se vuelcan a la página."""

    def __init__(self) -> None:
        self._items: List[PathItem] = []

    def __len__(self) -> int:
        return len(self._items)

    def add(self, item: PathItem) -> None:
        self._items.append(item)

    def extend(self, items: Sequence[PathItem]) -> None:
        self._items.extend(items)

    def to_path(self) -> PathGroup:
        return PathGroup(items=tuple(self._items))

    def clear(self) -> None:
        self._items.clear()


@dataclass
class Page:
    width: float
    height: float
    items: List[PageItem] = field(default_factory=list)

    def add_item(self, item: PageItem) -> None:
        self.items.append(item)

    def flush(self, builder: PathBuilder) -> None:
        """Vuelca el contenido del builder como un grupo y lo deja vacío."""
        if len(builder) == 0:
            return
        self.items.append(builder.to_path())
        builder.clear()

    def iter_drawables(self):
        for item in self.items:
            if isinstance(item, PathGroup):
                yield from item.items
            else:
                yield item


def serialize_page(page: Page) -> dict:
    def serialize_item(item: Any) -> Dict[str, Any]:
        if isinstance(item, PathGroup):
            return {"type": "PathGroup", "items": [serialize_item(child) for child in item.items]}
        if isinstance(item, ImageItem):
            image = item.image
            return {
                "type": "ImageItem",
                "matrix": list(item.matrix),
                "image": {
                    "width": image.width,
                    "height": image.height,
                    "color_space": image.color_space,
                    "bits_per_component": image.bits_per_component,
                    "filters": list(image.filters),
                    "data": base64.b64encode(image.data).decode("ascii"),
                },
            }
        data = asdict(item)
        data["type"] = item.__class__.__name__
        return data

    return {
        "width": page.width,
        "height": page.height,
        "items": [serialize_item(item) for item in page.items],
    }


__all__ = [
    "BLACK",
    "Color",
    "EllipseItem",
    "FilledPolygonItem",
    "ImageItem",
    "ImageObject",
    "LineItem",
    "Page",
    "PageItem",
    "PagePoint",
    "PathBuilder",
    "PathGroup",
    "PathItem",
    "StreamState",
    "TextItem",
    "serialize_page",
    "to_page_point",
]
