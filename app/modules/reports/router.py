# app/modules/reports/router.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from app.config.database import get_db
from app.config.settings import Settings
from app.core.dependencies import get_app_settings
from .service import ReportsService
from .schemas import (
    SellerReportRow, ProductReportRow, CustomerReportRow,
    RelationshipsReport, MonthlySalesRow
)

router = APIRouter(prefix="/reports", tags=["Reports - Reportes"])


def get_reports_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings)
) -> ReportsService:
    return ReportsService(db, settings)

@router.get("/sellers", response_model=List[SellerReportRow])
async def sellers_report(service: ReportsService = Depends(get_reports_service)):
    """
    Ventas por vendedor: cantidad, valor total, ticket medio y comisión.
    Ordenado por valor total descendente.
    """
    return await service.get_sellers_report()

@router.get("/products", response_model=List[ProductReportRow])
async def products_report(service: ReportsService = Depends(get_reports_service)):
    """
    Cantidad y valor vendido por producto, con stock actual.
    Ordenado por cantidad vendida y luego valor, descendente.
    """
    return await service.get_products_report()

@router.get("/customers", response_model=List[CustomerReportRow])
async def customers_report(service: ReportsService = Depends(get_reports_service)):
    """
    Mejores clientes por valor total y cantidad de compras
    """
    return await service.get_customers_report()

@router.get("/relationships", response_model=RelationshipsReport)
async def relationships_report(service: ReportsService = Depends(get_reports_service)):
    """
    Relación vendedor-cliente: clientes por vendedor y principales pares
    """
    return await service.get_relationships_report()

@router.get("/sales-by-month", response_model=List[MonthlySalesRow])
async def sales_by_month_report(service: ReportsService = Depends(get_reports_service)):
    """
    Ventas por vendedor y mes, ordenado por vendedor, año y mes
    """
    return await service.get_sales_by_month_report()
