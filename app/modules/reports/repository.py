# app/modules/reports/repository.py
from typing import List, Dict, Any
from sqlalchemy.orm import Session, aliased
from sqlalchemy import case, desc, distinct, extract, func, select
from sqlalchemy.sql import Select

from app.shared.database.models import Sale, SaleItem, Product, Seller, Customer


def monthly_sales_by_seller_select() -> Select:
    """
    Agregado mensual por vendedor.

    Lo usan el reporte de ventas por mes y la vista vw_vendas_por_vendedor.
    """
    year = extract("year", Sale.sold_at)
    month = extract("month", Sale.sold_at)

    return select(
        Sale.seller_id.label("seller_id"),
        Seller.name.label("seller_name"),
        func.count(Sale.id).label("total_sales"),
        func.sum(Sale.total).label("total_value"),
        func.avg(Sale.total).label("average_ticket"),
        year.label("year"),
        month.label("month")
    ).join(
        Seller, Sale.seller_id == Seller.id
    ).group_by(
        Sale.seller_id, Seller.name, year, month
    ).order_by(
        Seller.name, year, month
    )


def _money(value) -> float:
    return float(value) if value is not None else 0.0


class ReportsRepository:
    """
    Consultas de solo lectura para reportes. Cada reporte es una única
    consulta agregada sobre el contenido actual de las tablas.
    """

    def __init__(self, db: Session):
        self.db = db

    def get_sellers_report(self) -> List[Dict[str, Any]]:
        """Ventas por vendedor, mayor valor total primero"""
        results = self.db.query(
            Sale.seller_id,
            Seller.name,
            func.count(Sale.id).label("total_sales"),
            func.sum(Sale.total).label("total_value"),
            func.avg(Sale.total).label("average_ticket")
        ).join(
            Seller, Sale.seller_id == Seller.id
        ).group_by(
            Sale.seller_id, Seller.name
        ).order_by(desc("total_value")).all()

        return [
            {
                "seller_id": seller_id,
                "seller_name": seller_name,
                "total_sales": total_sales,
                "total_value": _money(total_value),
                "average_ticket": _money(average_ticket)
            }
            for seller_id, seller_name, total_sales, total_value, average_ticket in results
        ]

    def get_products_report(self) -> List[Dict[str, Any]]:
        """Todos los productos con cantidad y valor vendido"""
        results = self.db.query(
            Product.id,
            Product.name,
            Product.category,
            func.coalesce(func.sum(SaleItem.quantity), 0).label("quantity_sold"),
            func.coalesce(func.sum(SaleItem.subtotal), 0).label("total_value"),
            Product.stock
        ).outerjoin(
            SaleItem, Product.id == SaleItem.product_id
        ).group_by(
            Product.id, Product.name, Product.category, Product.stock
        ).order_by(
            desc("quantity_sold"), desc("total_value")
        ).all()

        return [
            {
                "id": product_id,
                "name": name,
                "category": category,
                "quantity_sold": int(quantity_sold),
                "total_value": _money(total_value),
                "current_stock": stock
            }
            for product_id, name, category, quantity_sold, total_value, stock in results
        ]

    def get_customers_report(self, limit: int) -> List[Dict[str, Any]]:
        """Mejores clientes por valor comprado"""
        results = self.db.query(
            Customer.id,
            Customer.name,
            func.count(Sale.id).label("total_purchases"),
            func.coalesce(func.sum(Sale.total), 0).label("total_value"),
            func.max(Sale.sold_at).label("last_purchase")
        ).outerjoin(
            Sale, Customer.id == Sale.customer_id
        ).group_by(
            Customer.id, Customer.name
        ).order_by(
            desc("total_value"), desc("total_purchases")
        ).limit(limit).all()

        return [
            {
                "id": customer_id,
                "name": name,
                "total_purchases": total_purchases,
                "total_value": _money(total_value),
                "last_purchase": last_purchase
            }
            for customer_id, name, total_purchases, total_value, last_purchase in results
        ]

    def get_seller_customer_report(self) -> List[Dict[str, Any]]:
        """
        Por vendedor: clientes distintos, clientes recurrentes (más de una
        compra con ese vendedor) y ticket medio
        """
        repeat_sale = aliased(Sale)
        purchases_with_seller = select(
            func.count(repeat_sale.id)
        ).where(
            repeat_sale.seller_id == Seller.id,
            repeat_sale.customer_id == Customer.id
        ).scalar_subquery()

        results = self.db.query(
            Seller.id,
            Seller.name,
            func.count(distinct(Customer.id)).label("total_customers"),
            func.count(distinct(case((purchases_with_seller > 1, Customer.id)))).label("recurring_customers"),
            func.round(func.avg(Sale.total), 2).label("average_ticket")
        ).join(
            Sale, Seller.id == Sale.seller_id
        ).join(
            Customer, Sale.customer_id == Customer.id
        ).group_by(
            Seller.id, Seller.name
        ).order_by(desc("total_customers")).all()

        return [
            {
                "seller_id": seller_id,
                "seller_name": seller_name,
                "total_customers": total_customers,
                "recurring_customers": recurring_customers,
                "average_ticket": _money(average_ticket)
            }
            for seller_id, seller_name, total_customers, recurring_customers, average_ticket in results
        ]

    def get_top_relationships(self, limit: int) -> List[Dict[str, Any]]:
        """Pares vendedor-cliente con mayor valor vendido"""
        results = self.db.query(
            Seller.name.label("seller_name"),
            Customer.name.label("customer_name"),
            func.count(Sale.id).label("total_interactions"),
            func.sum(Sale.total).label("total_value"),
            func.max(Sale.sold_at).label("last_interaction")
        ).select_from(Sale).join(
            Seller, Sale.seller_id == Seller.id
        ).join(
            Customer, Sale.customer_id == Customer.id
        ).group_by(
            Seller.name, Customer.name
        ).order_by(desc("total_value")).limit(limit).all()

        return [
            {
                "seller_name": seller_name,
                "customer_name": customer_name,
                "total_interactions": total_interactions,
                "total_value": _money(total_value),
                "last_interaction": last_interaction
            }
            for seller_name, customer_name, total_interactions, total_value, last_interaction in results
        ]

    def get_monthly_sales_by_seller(self) -> List[Dict[str, Any]]:
        rows = self.db.execute(monthly_sales_by_seller_select()).mappings().all()

        return [
            {
                "seller_id": row["seller_id"],
                "seller_name": row["seller_name"],
                "total_sales": row["total_sales"],
                "total_value": _money(row["total_value"]),
                "average_ticket": _money(row["average_ticket"]),
                "year": int(row["year"]),
                "month": int(row["month"])
            }
            for row in rows
        ]
