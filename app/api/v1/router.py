# app/api/v1/router.py
import logging
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from app.modules.sales import sales_router
from app.modules.customers import customers_router
from app.modules.sellers import sellers_router
from app.modules.products import products_router
from app.modules.payment_methods import payment_methods_router
from app.modules.reports import reports_router
from app.modules.setup import setup_router

logger = logging.getLogger(__name__)

# Crear router principal de la API v1
api_router = APIRouter()

# ==================== MÓDULOS ====================

api_router.include_router(customers_router)
api_router.include_router(sellers_router)
api_router.include_router(products_router)
api_router.include_router(payment_methods_router)
api_router.include_router(sales_router)
api_router.include_router(reports_router)
api_router.include_router(setup_router)

# ==================== ENDPOINTS RAÍZ ====================

@api_router.get("/")
async def api_root():
    """Root endpoint de la API"""
    return {
        "message": "TechStore API v1",
        "status": "active",
        "available_endpoints": {
            "customers": "/api/v1/customers",
            "sellers": "/api/v1/sellers",
            "products": "/api/v1/products",
            "payment_methods": "/api/v1/payment-methods",
            "sales": "/api/v1/sales",
            "reports": "/api/v1/reports",
            "init_db": "/api/v1/init-db"
        }
    }

@api_router.get("/health")
async def health_check(request: Request):
    """Health check con verificación de la base de datos"""
    settings = request.app.state.settings
    try:
        request.app.state.database.ping()
    except Exception as e:
        logger.error(f"❌ Health check: base de datos no disponible: {e}")
        return JSONResponse(
            status_code=503,
            content={"status": "unhealthy", "database": "unavailable", "version": settings.version}
        )

    return {
        "status": "healthy",
        "service": settings.app_name,
        "version": settings.version,
        "database": request.app.state.database.dialect_name
    }
