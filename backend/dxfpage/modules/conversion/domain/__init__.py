from .document import (
    COLOR_BY_BLOCK,
    COLOR_BY_LAYER,
    LINEWEIGHT_BY_BLOCK,
    LINEWEIGHT_BY_LAYER,
    LINEWEIGHT_DEFAULT,
    ArcEntity,
    CircleEntity,
    DimensionEntity,
    DimensionStyle,
    DimensionType,
    ImageEntity,
    LineEntity,
    LwPolylineEntity,
    LwPolylineVertex,
    ModelPointEntity,
    PolylineEntity,
    PolylineVertex,
    SolidEntity,
    SourceColor,
    SourceDocument,
    SourceEntity,
    SourceHeader,
    SourceLayer,
    TextEntity,
    UnsupportedEntity,
    ViewPort,
)

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
