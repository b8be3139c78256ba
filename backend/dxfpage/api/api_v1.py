from fastapi import APIRouter

from dxfpage.api.routes import conversions

api_router = APIRouter()
api_router.include_router(conversions.router)
