from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from app.schemas.gee import Coordinate, ErrorResponse, NDVIResponse
from app.services.gee_service import NDVIService, get_ndvi_service

router = APIRouter()


@router.get(
    "",
    response_model=NDVIResponse,
    status_code=status.HTTP_200_OK,
    summary="NDVI de la imagen Sentinel-2 más reciente sin nubes",
    description="Busca la última escena con < 10% de nubes en 120 días y devuelve su NDVI en el punto",
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def get_ndvi(
    lat: Optional[str] = Query(None, description="Latitud en grados decimales"),
    lon: Optional[str] = Query(None, description="Longitud en grados decimales"),
    service: NDVIService = Depends(get_ndvi_service),
):
    info = service.load_credentials()
    coordinate = Coordinate.parse(lat, lon)
    return await service.run(coordinate, info)
