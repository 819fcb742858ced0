from fastapi import APIRouter

from wordrace.api.endpoints import room

api_router = APIRouter()

api_router.include_router(room.router, prefix="/rooms", tags=["rooms"])
