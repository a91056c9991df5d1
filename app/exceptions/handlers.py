# app/exceptions/handlers.py
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.exceptions.errors import InvalidInputError, NDVIServiceError
from app.middlewares.setup import CORS_HEADERS

logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=dict(CORS_HEADERS))


async def ndvi_service_error_handler(request: Request, exc: NDVIServiceError) -> JSONResponse:
    logger.error("Error: %s", exc.message)
    return error_response(exc.status_code, exc.message)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Errores de FastAPI en query params se reportan igual que coordenadas inválidas
    message = InvalidInputError().message
    logger.error("Error: %s", message)
    return error_response(status.HTTP_400_BAD_REQUEST, message)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Error: %s", exc, exc_info=exc)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc) or exc.__class__.__name__)


def add_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(NDVIServiceError, ndvi_service_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
