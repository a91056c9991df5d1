# app/main.py
from fastapi import FastAPI
import logging
from contextlib import asynccontextmanager

from app.core.config import settings
from app.api.v1.api import api_router
from app.exceptions.errors import ConfigurationError
from app.exceptions.handlers import add_exception_handlers
from app.middlewares.setup import setup_middlewares

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting up the application...")

    # Sólo se valida la credencial; la autenticación ocurre en cada request
    try:
        settings.get_gee_credentials_info()
        logger.info("Earth Engine credentials found")
    except ConfigurationError as e:
        # No bloquees el arranque; las rutas devuelven el error de configuración
        logger.warning("%s", e.message)

    yield
    logger.info("Shutting down the application...")

app = FastAPI(
    title="NDVI Point API",
    description="NDVI de la escena Sentinel-2 más reciente sin nubes para un punto",
    version="0.1.0",
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    lifespan=lifespan,
)

add_exception_handlers(app)
setup_middlewares(app)

app.include_router(prefix=settings.API_V1_STR, router=api_router)

@app.get("/", tags=["health"])
def root():
    return {
        "status": "ok",
        "message": "API is running",
        "earth_engine": "configured" if settings.has_gee_credentials else "not-configured",
    }
