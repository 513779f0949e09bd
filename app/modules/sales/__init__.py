# app/modules/sales/__init__.py
"""
Módulo de Ventas

- Registro de ventas con cliente, items y actualización de inventario
  en una única transacción
- Cotización del carrito (descuento por preferencias del cliente)
- Consulta de ventas y detalle

Arquitectura:
- router.py: Endpoints FastAPI
- service.py: Lógica de negocio
- repository.py: Acceso a datos
- schemas.py: Modelos Pydantic de request/response
"""

from .router import router as sales_router
from .service import SalesService
from .repository import SalesRepository

__all__ = [
    "sales_router",
    "SalesService",
    "SalesRepository"
]
