# app/modules/reports/service.py
import logging
from typing import List, Dict, Any
from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config.settings import Settings
from .repository import ReportsRepository

logger = logging.getLogger(__name__)

MONTH_NAMES = [
    "Janeiro", "Fevereiro", "Março", "Abril", "Maio", "Junho",
    "Julho", "Agosto", "Setembro", "Outubro", "Novembro", "Dezembro"
]


def month_label(year: int, month: int) -> str:
    return f"{MONTH_NAMES[month - 1]} {year}"


class ReportsService:
    """
    Reportes agregados (solo lectura). Sin datos devuelven listas vacías.
    """

    def __init__(self, db: Session, settings: Settings):
        self.db = db
        self.settings = settings
        self.repository = ReportsRepository(db)

    def _run(self, report_name: str, builder):
        try:
            return builder()
        except SQLAlchemyError as e:
            logger.error(f"❌ Error generando reporte {report_name}: {e}")
            raise HTTPException(status_code=500, detail="Error generando reporte")

    async def get_sellers_report(self) -> List[Dict[str, Any]]:
        rows = self._run("vendedores", self.repository.get_sellers_report)

        rate = self.settings.seller_commission_rate
        for row in rows:
            row["commission"] = round(row["total_value"] * rate, 2)
        return rows

    async def get_products_report(self) -> List[Dict[str, Any]]:
        return self._run("productos", self.repository.get_products_report)

    async def get_customers_report(self) -> List[Dict[str, Any]]:
        return self._run(
            "clientes",
            lambda: self.repository.get_customers_report(self.settings.customer_report_limit)
        )

    async def get_relationships_report(self) -> Dict[str, List[Dict[str, Any]]]:
        return self._run("relacionamientos", lambda: {
            "seller_customer": self.repository.get_seller_customer_report(),
            "top_relationships": self.repository.get_top_relationships(
                self.settings.top_relationships_limit
            )
        })

    async def get_sales_by_month_report(self) -> List[Dict[str, Any]]:
        rows = self._run("ventas por mes", self.repository.get_monthly_sales_by_seller)

        for row in rows:
            row["month_label"] = month_label(row["year"], row["month"])
        return rows
