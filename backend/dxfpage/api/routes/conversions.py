from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, File, Form, HTTPException, UploadFile, status

from dxfpage.core.config import settings
from dxfpage.modules.conversion import ConversionError
from dxfpage.modules.conversion.dxf_loader import list_supported_kinds
from dxfpage.schemas.conversion import PagePayload
from dxfpage.services import conversion_service

router = APIRouter(prefix="/conversions", tags=["conversions"])


@router.get("/entity-kinds", response_model=list[str])
def list_entity_kinds():
    return list_supported_kinds()


@router.post("/dxf", response_model=PagePayload)
async def convert_dxf(
    file: UploadFile = File(...),
    images: Optional[List[UploadFile]] = File(None),
    page_width: Optional[float] = Form(None, gt=0),
    page_height: Optional[float] = Form(None, gt=0),
    scale: float = Form(1.0, gt=0),
):
    data = await file.read()
    if not data:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="El archivo DXF está vacío.")
    if len(data) > settings.max_upload_bytes:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail="El archivo DXF supera el tamaño permitido.",
        )

    image_map = {}
    for image in images or []:
        image_map[image.filename or ""] = await image.read()

    options = conversion_service.build_options(
        page_width=page_width,
        page_height=page_height,
        scale=scale,
        images=image_map,
    )
    try:
        result = conversion_service.convert_dxf_bytes(data, options)
    except ConversionError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
    return conversion_service.page_payload(result)
