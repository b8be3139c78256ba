from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Any, Callable, Dict, List

import ezdxf
from ezdxf import recover
from ezdxf.lldxf.const import DXFError, DXFTableEntryError

from dxfpage.modules.conversion.domain import (
    COLOR_BY_LAYER,
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
from dxfpage.modules.conversion.errors import DxfLoadError
from dxfpage.modules.conversion.geometry import Vector

logger = logging.getLogger(__name__)

_DIMENSION_TYPES = {
    0: DimensionType.ROTATED_HORIZONTAL_OR_VERTICAL,
    1: DimensionType.ALIGNED,
    2: DimensionType.ANGULAR,
    3: DimensionType.DIAMETER,
    4: DimensionType.RADIUS,
    5: DimensionType.ANGULAR_THREE_POINT,
    6: DimensionType.ORDINATE,
}


def load_source_document(source: str | Path | bytes) -> SourceDocument:
    """Lee un DXF (ruta o bytes) con ezdxf y lo traduce al documento de origen."""
    try:
        if isinstance(source, (bytes, bytearray)):
            dxf_doc, auditor = recover.read(io.BytesIO(source))
            if auditor.has_errors:
                logger.warning("El DXF recuperado reporta %d errores", len(auditor.errors))
        else:
            dxf_doc = ezdxf.readfile(source)
    except (OSError, DXFError) as exc:
        raise DxfLoadError(f"No se pudo leer el DXF: {exc}") from exc
    return from_ezdxf(dxf_doc)


def from_ezdxf(dxf_doc: Any) -> SourceDocument:
    header = dxf_doc.header
    document = SourceDocument(
        header=SourceHeader(
            drawing_units=header.get("$MEASUREMENT", 0),
            unit_format=header.get("$LUNITS", 2),
            unit_precision=header.get("$LUPREC", 4),
            version=header.get("$ACADVER", "AC1015"),
            current_layer=header.get("$CLAYER", "0"),
        ),
        layers=[_convert_layer(layer) for layer in dxf_doc.layers],
        dimension_styles=[_convert_dimstyle(style) for style in dxf_doc.dimstyles],
        active_viewport=_active_viewport(dxf_doc),
    )
    for dxf_entity in dxf_doc.modelspace():
        document.add_entity(convert_dxf_entity(dxf_entity))
    return document


def convert_dxf_entity(dxf_entity: Any) -> SourceEntity:
    kind = dxf_entity.dxftype()
    builder = _ENTITY_BUILDERS.get(kind)
    common = _common_attribs(dxf_entity)
    if builder is None:
        logger.debug("Entidad DXF %s sin equivalente; se marca como no soportada", kind)
        return UnsupportedEntity(kind=kind, **common)
    return builder(dxf_entity, common)


def _vector(value: Any) -> Vector:
    x, y, *rest = value
    return Vector(float(x), float(y), float(rest[0]) if rest else 0.0)


def _common_attribs(dxf_entity: Any) -> Dict[str, Any]:
    dxf = dxf_entity.dxf
    true_color = dxf.get("true_color")
    return {
        "layer": dxf.get("layer", "0"),
        "color": SourceColor(dxf.get("color", COLOR_BY_LAYER)),
        "true_color": int(true_color) if true_color is not None else None,
        "line_weight": dxf.get("lineweight", LINEWEIGHT_BY_LAYER),
    }


def _convert_layer(layer: Any) -> SourceLayer:
    return SourceLayer(
        name=layer.dxf.name,
        color=SourceColor(layer.color),
        line_weight=layer.dxf.get("lineweight", LINEWEIGHT_DEFAULT),
        is_on=layer.is_on(),
    )


def _convert_dimstyle(style: Any) -> DimensionStyle:
    dxf = style.dxf
    return DimensionStyle(
        name=dxf.name,
        text_height=dxf.get("dimtxt", 0.18),
        extension_line_offset=dxf.get("dimexo", 0.0625),
        extension_line_extension=dxf.get("dimexe", 0.18),
        dimension_line_gap=dxf.get("dimgap", 0.09),
        arrow_size=dxf.get("dimasz", 0.18),
        tick_size=dxf.get("dimtsz", 0.0),
    )


def _active_viewport(dxf_doc: Any) -> ViewPort:
    try:
        configs = dxf_doc.viewports.get_config("*Active")
    except DXFTableEntryError:
        return ViewPort()
    if not configs:
        return ViewPort()
    return ViewPort(lower_left=_vector(configs[0].dxf.get("lower_left", (0.0, 0.0))))


def _line(entity: Any, common: Dict[str, Any]) -> SourceEntity:
    return LineEntity(p1=_vector(entity.dxf.start), p2=_vector(entity.dxf.end), **common)


def _point(entity: Any, common: Dict[str, Any]) -> SourceEntity:
    return ModelPointEntity(
        location=_vector(entity.dxf.location),
        thickness=entity.dxf.get("thickness", 0.0),
        **common,
    )


def _circle(entity: Any, common: Dict[str, Any]) -> SourceEntity:
    return CircleEntity(center=_vector(entity.dxf.center), radius=entity.dxf.radius, **common)


def _arc(entity: Any, common: Dict[str, Any]) -> SourceEntity:
    return ArcEntity(
        center=_vector(entity.dxf.center),
        radius=entity.dxf.radius,
        start_angle=entity.dxf.start_angle,
        end_angle=entity.dxf.end_angle,
        **common,
    )


def _lwpolyline(entity: Any, common: Dict[str, Any]) -> SourceEntity:
    vertices = [LwPolylineVertex(x, y, bulge) for x, y, bulge in entity.get_points("xyb")]
    return LwPolylineEntity(vertices=vertices, is_closed=bool(entity.closed), **common)


def _polyline(entity: Any, common: Dict[str, Any]) -> SourceEntity:
    if entity.is_polygon_mesh or entity.is_poly_face_mesh:
        return UnsupportedEntity(kind="POLYLINE", **common)
    vertices = [
        PolylineVertex(location=_vector(vertex.dxf.location), bulge=vertex.dxf.get("bulge", 0.0))
        for vertex in entity.vertices
    ]
    return PolylineEntity(vertices=vertices, is_closed=bool(entity.is_closed), **common)


def _solid(entity: Any, common: Dict[str, Any]) -> SourceEntity:
    dxf = entity.dxf
    vtx3 = dxf.get("vtx3", dxf.vtx2)
    return SolidEntity(
        first_corner=_vector(dxf.vtx0),
        second_corner=_vector(dxf.vtx1),
        third_corner=_vector(dxf.vtx2),
        fourth_corner=_vector(vtx3),
        **common,
    )


def _text(entity: Any, common: Dict[str, Any]) -> SourceEntity:
    dxf = entity.dxf
    return TextEntity(
        location=_vector(dxf.insert),
        text_height=dxf.get("height", 1.0),
        value=dxf.get("text", ""),
        rotation=dxf.get("rotation", 0.0),
        **common,
    )


def _image(entity: Any, common: Dict[str, Any]) -> SourceEntity:
    dxf = entity.dxf
    image_def = entity.image_def
    file_path = image_def.dxf.get("filename", "") if image_def is not None else ""
    return ImageEntity(
        location=_vector(dxf.insert),
        u_vector=_vector(dxf.u_pixel),
        v_vector=_vector(dxf.v_pixel),
        image_size=_vector(dxf.image_size),
        file_path=file_path,
        **common,
    )


def _dimension(entity: Any, common: Dict[str, Any]) -> SourceEntity:
    dxf = entity.dxf
    dimension_type = _DIMENSION_TYPES.get(entity.dimtype)
    if dimension_type is None:
        return UnsupportedEntity(kind="DIMENSION", **common)
    # texto vacío en el DXF equivale a la medida automática
    text = dxf.get("text") or None
    return DimensionEntity(
        dimension_type=dimension_type,
        definition_point1=_vector(dxf.get("defpoint", (0.0, 0.0, 0.0))),
        definition_point2=_vector(dxf.get("defpoint2", (0.0, 0.0, 0.0))),
        definition_point3=_vector(dxf.get("defpoint3", (0.0, 0.0, 0.0))),
        dimension_style_name=dxf.get("dimstyle", "Standard"),
        text=text,
        rotation_angle=dxf.get("angle", 0.0),
        **common,
    )


_ENTITY_BUILDERS: Dict[str, Callable[[Any, Dict[str, Any]], SourceEntity]] = {
    "LINE": _line,
    "POINT": _point,
    "CIRCLE": _circle,
    "ARC": _arc,
    "LWPOLYLINE": _lwpolyline,
    "POLYLINE": _polyline,
    "SOLID": _solid,
    "TEXT": _text,
    "IMAGE": _image,
    "DIMENSION": _dimension,
}


def list_supported_kinds() -> List[str]:
    return sorted(_ENTITY_BUILDERS)


__all__ = ["convert_dxf_entity", "from_ezdxf", "list_supported_kinds", "load_source_document"]
