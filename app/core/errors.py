import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Error procesando la solicitud"
INVALID_REQUEST_MESSAGE = "Datos de la solicitud inválidos"


def setup_exception_handlers(app: FastAPI):
    """
    Errores fuera de la taxonomía 404/400 se devuelven como 500 genérico.

    Los errores de validación de entrada no exponen detalle por campo al
    cliente; el detalle queda en el log del servidor.
    """

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.error(f"❌ Solicitud inválida {request.method} {request.url.path}: {exc.errors()}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": INVALID_REQUEST_MESSAGE}
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(f"❌ Error no controlado en {request.method} {request.url.path}: {exc}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": GENERIC_ERROR_MESSAGE}
        )
