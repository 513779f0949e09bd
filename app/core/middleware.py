from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from app.config.settings import Settings
import time
import logging

logger = logging.getLogger(__name__)

PROCESS_TIME_HEADER = "X-Process-Time"


def setup_middleware(app: FastAPI, settings: Settings):
    """CORS para el frontend configurado + log de cada solicitud"""

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Accept", "Origin"],
        expose_headers=[PROCESS_TIME_HEADER],
        max_age=3600
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start_time = time.perf_counter()

        response = await call_next(request)

        process_time = time.perf_counter() - start_time
        response.headers[PROCESS_TIME_HEADER] = f"{process_time:.4f}"

        # 5xx a nivel ERROR
        level = logging.ERROR if response.status_code >= 500 else logging.INFO
        client = request.client.host if request.client else "-"
        logger.log(
            level,
            f"{request.method} {request.url.path} - "
            f"Status: {response.status_code} - "
            f"Time: {process_time:.4f}s - Client: {client}"
        )

        return response
