# app/modules/setup/router.py
import logging
from fastapi import APIRouter, Depends, HTTPException, Request

from app.config.settings import Settings
from app.core.dependencies import get_app_settings
from .service import SetupService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/init-db", tags=["Setup - Inicialización"])

@router.api_route("", methods=["GET", "POST"])
async def initialize_database(
    request: Request,
    settings: Settings = Depends(get_app_settings)
):
    """
    Crear tablas, vista, trigger de stock y datos iniciales.
    Se puede ejecutar varias veces sin duplicar datos.
    """
    service = SetupService(request.app.state.database, settings)

    try:
        seeded = service.initialize()
    except Exception as e:
        logger.error(f"❌ Error inicializando base de datos: {e}")
        raise HTTPException(status_code=500, detail="Error inicializando base de datos")

    return {
        "success": True,
        "message": "Base de datos inicializada con éxito",
        "seeded": seeded
    }
