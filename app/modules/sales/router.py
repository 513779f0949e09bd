# app/modules/sales/router.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from app.config.database import get_db
from app.config.settings import Settings
from app.core.dependencies import get_app_settings
from .service import SalesService
from .schemas import (
    SaleCreateRequest, SaleCreatedResponse,
    SaleQuoteRequest, SaleQuoteResponse,
    SaleListItemResponse, SaleDetailResponse, SaleProductResponse
)

router = APIRouter(prefix="/sales", tags=["Sales - Ventas"])


def get_sales_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings)
) -> SalesService:
    return SalesService(db, settings)

# ==================== CONSULTA DE VENTAS ====================

@router.get("", response_model=List[SaleListItemResponse])
async def list_sales(service: SalesService = Depends(get_sales_service)):
    """
    Listado de ventas (más recientes primero) con nombres de cliente,
    vendedor y forma de pago
    """
    return await service.get_sales()

@router.get("/{sale_id}/details", response_model=SaleDetailResponse)
async def get_sale_details(sale_id: int, service: SalesService = Depends(get_sales_service)):
    """
    Cabecera de la venta + items
    """
    return await service.get_sale_details(sale_id)

@router.get("/{sale_id}/products", response_model=List[SaleProductResponse])
async def get_sale_products(sale_id: int, service: SalesService = Depends(get_sales_service)):
    return await service.get_sale_products(sale_id)

# ==================== REGISTRO DE VENTAS ====================

@router.post("", response_model=SaleCreatedResponse, status_code=201)
async def create_sale(
    sale_data: SaleCreateRequest,
    service: SalesService = Depends(get_sales_service)
):
    """
    Registrar venta completa

    Incluye:
    - Cliente existente (customer_id) o nuevo/identificado por email
    - Cabecera con total y descuento
    - Items de la venta
    - Actualización de inventario
    Todo en una única transacción.
    """
    return await service.create_sale(sale_data)

@router.post("/quote", response_model=SaleQuoteResponse)
async def quote_sale(
    quote_data: SaleQuoteRequest,
    service: SalesService = Depends(get_sales_service)
):
    """
    Calcular subtotal, descuento por preferencias y total del carrito
    """
    return await service.quote_sale(quote_data)
