from fastapi import APIRouter

from .endpoints import data, health

api_router = APIRouter()
api_router.include_router(health.router)
api_router.include_router(data.router, prefix="/v1")
