# app/middlewares/setup.py
from fastapi import FastAPI, Request, Response

CORS_HEADERS = {"Access-Control-Allow-Origin": "*"}


def setup_middlewares(app: FastAPI) -> None:
    @app.middleware("http")
    async def cors_middleware(request: Request, call_next):
        # Pre-flight: 200 sin cuerpo, no llega a las rutas
        if request.method == "OPTIONS":
            response = Response(status_code=200)
        else:
            response = await call_next(request)
        response.headers.update(CORS_HEADERS)
        return response
