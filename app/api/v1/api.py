from fastapi import APIRouter

from app.api.v1.endpoints import ndvi

api_router = APIRouter()

api_router.include_router(ndvi.router, prefix="/ndvi", tags=["ndvi"])

# This is the main API router that includes all endpoint routers
