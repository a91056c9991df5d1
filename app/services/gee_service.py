# app/services/gee_service.py
from __future__ import annotations
import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

import ee
from fastapi import Depends
from google.auth.credentials import Credentials
from google.auth.transport.requests import Request as GoogleAuthRequest
from google.oauth2 import service_account
from starlette.concurrency import run_in_threadpool

from app.core.config import Settings, get_settings
from app.exceptions.errors import (
    AuthenticationError,
    EvaluationError,
    NoDataError,
    NoImageFoundError,
)
from app.schemas.gee import Coordinate

logger = logging.getLogger(__name__)

# ee.Initialize guarda la sesión en estado de módulo
_EE_LOCK = threading.Lock()

EE_SCOPES = [
    "https://www.googleapis.com/auth/earthengine",
]

# ---- Parámetros fijos de la consulta ----
LOOKBACK_DAYS = 120
MAX_CLOUDY_PIXEL_PERCENTAGE = 10
CLOUD_PROPERTY = "CLOUDY_PIXEL_PERCENTAGE"
TIME_PROPERTY = "system:time_start"
INDEX_PROPERTY = "system:index"
NIR_BAND = "B8"
RED_BAND = "B4"
NDVI_BAND = "NDVI"
SCALE_METERS = 10
DATE_FORMAT = "YYYY-MM-dd"


@dataclass(frozen=True)
class GEESession:
    """
    Prueba de que el handshake terminó. La sesión real vive en el estado
    de módulo de `ee` que deja ee.Initialize; aquí sólo queda el proyecto.
    """
    project: Optional[str]


# ---------- Autenticación ----------
def _refresh_credentials(info: Dict[str, Any]) -> Credentials:
    creds = service_account.Credentials.from_service_account_info(info, scopes=EE_SCOPES)
    creds.refresh(GoogleAuthRequest())
    return creds

def _initialize_ee(creds: Credentials, project: Optional[str]) -> None:
    with _EE_LOCK:
        ee.Initialize(credentials=creds, project=project)

async def authenticate(info: Dict[str, Any], project: Optional[str]) -> GEESession:
    """
    Handshake en dos pasos: primero la clave privada (token OAuth),
    luego ee.Initialize. El segundo nunca corre si falla el primero.
    """
    try:
        creds = await run_in_threadpool(_refresh_credentials, info)
    except Exception as e:
        raise AuthenticationError(f"GEE Authentication failed: {e}") from e

    try:
        await run_in_threadpool(_initialize_ee, creds, project)
    except Exception as e:
        raise AuthenticationError(f"GEE Initialization failed: {e}") from e

    logger.info("Earth Engine initialized, project=%s", project)
    return GEESession(project=project)


# ---------- Helpers GEE puros ----------
def make_point(coordinate: Coordinate) -> ee.Geometry:
    return ee.Geometry.Point([coordinate.lon, coordinate.lat])

def recent_cloud_free_image(collection_id: str, aoi: ee.Geometry, now_ms: int) -> ee.Image:
    end = ee.Date(now_ms)
    start = end.advance(-LOOKBACK_DAYS, "day")
    coll = (
        ee.ImageCollection(collection_id)
        .filterBounds(aoi)
        .filterDate(start, end)
        .filter(ee.Filter.lt(CLOUD_PROPERTY, MAX_CLOUDY_PIXEL_PERCENTAGE))
    )
    return ee.Image(coll.sort(TIME_PROPERTY, False).first())

def ndvi_at_point(img: ee.Image, aoi: ee.Geometry) -> ee.Dictionary:
    ndvi = img.normalizedDifference([NIR_BAND, RED_BAND]).rename(NDVI_BAND)
    date = ee.Date(img.get(TIME_PROPERTY)).format(DATE_FORMAT)
    value = ndvi.reduceRegion(
        reducer=ee.Reducer.mean(),
        geometry=aoi,
        scale=SCALE_METERS,
    ).get(NDVI_BAND)
    return ee.Dictionary({"date": date, "ndvi": value})

async def evaluate(obj: Any) -> Any:
    """getInfo() bloqueante como una única tarea awaitable."""
    return await run_in_threadpool(obj.getInfo)


# ---------- Servicio de alto nivel ----------
class NDVIService:
    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    def load_credentials(self) -> Dict[str, Any]:
        # Se valida antes que las coordenadas y antes de cualquier llamada de red
        return self.settings.get_gee_credentials_info()

    async def authenticate(self, info: Dict[str, Any]) -> GEESession:
        return await authenticate(info, self.settings.get_gee_project(info))

    async def latest_ndvi(self, session: GEESession, coordinate: Coordinate) -> Dict[str, Any]:
        """
        Devuelve {date, ndvi} de la imagen más reciente con < 10% de nubes
        en los últimos 120 días que cubra el punto.
        """
        aoi = make_point(coordinate)
        now_ms = int(time.time() * 1000)
        img = recent_cloud_free_image(self.settings.S2_COLLECTION, aoi, now_ms)

        try:
            image_id = await evaluate(img.get(INDEX_PROPERTY))
        except Exception as e:
            logger.warning("Image lookup failed: %s", e)
            raise NoImageFoundError() from e
        if not image_id:
            raise NoImageFoundError()
        logger.info(
            "Using image %s for (%s, %s), project=%s",
            image_id, coordinate.lat, coordinate.lon, session.project,
        )

        try:
            result = await evaluate(ndvi_at_point(img, aoi))
        except Exception as e:
            raise EvaluationError(f"GEE Evaluation Error: {e}") from e

        if not result or result.get("ndvi") is None:
            raise NoDataError()
        if not result.get("date"):
            raise EvaluationError("GEE Evaluation Error: image has no acquisition date")
        return {"date": result["date"], "ndvi": result["ndvi"]}

    async def run(self, coordinate: Coordinate, info: Dict[str, Any]) -> Dict[str, Any]:
        session = await self.authenticate(info)
        return await self.latest_ndvi(session, coordinate)

def get_ndvi_service(settings: Settings = Depends(get_settings)) -> NDVIService:
    return NDVIService(settings)
