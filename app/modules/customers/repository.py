# app/modules/customers/repository.py
from typing import List, Optional, Dict, Any
from sqlalchemy.orm import Session
from sqlalchemy import desc, func, or_

from app.shared.database.models import Customer, Sale, SaleItem, Product, Seller, PaymentMethod

class CustomerRepository:
    """
    Repositorio de clientes
    """

    def __init__(self, db: Session):
        self.db = db

    def get_customers(self, search: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        Clientes con total de compras, valor total y última compra
        """
        query = self.db.query(
            Customer,
            func.count(Sale.id).label("total_purchases"),
            func.coalesce(func.sum(Sale.total), 0).label("total_value"),
            func.max(Sale.sold_at).label("last_purchase")
        ).outerjoin(Sale, Customer.id == Sale.customer_id)

        if search:
            pattern = f"%{search}%"
            query = query.filter(or_(
                Customer.name.ilike(pattern),
                Customer.email.ilike(pattern),
                Customer.phone.ilike(pattern)
            ))

        results = query.group_by(Customer.id).order_by(Customer.name).all()

        customers = []
        for customer, total_purchases, total_value, last_purchase in results:
            customers.append({
                "id": customer.id,
                "name": customer.name,
                "email": customer.email,
                "phone": customer.phone,
                "supports_flamengo": bool(customer.supports_flamengo),
                "watches_one_piece": bool(customer.watches_one_piece),
                "from_sousa": bool(customer.from_sousa),
                "created_at": customer.created_at,
                "total_purchases": total_purchases,
                "total_value": float(total_value or 0),
                "last_purchase": last_purchase
            })

        return customers

    def get_customer(self, customer_id: int) -> Optional[Customer]:
        return self.db.query(Customer).filter(Customer.id == customer_id).first()

    def create_customer(self, customer_data: dict) -> Customer:
        customer = Customer(**customer_data)
        self.db.add(customer)
        self.db.commit()
        self.db.refresh(customer)
        return customer

    def update_customer(self, customer_id: int, update_data: dict) -> Optional[Customer]:
        customer = self.get_customer(customer_id)
        if not customer:
            return None

        for field, value in update_data.items():
            setattr(customer, field, value)

        self.db.commit()
        self.db.refresh(customer)
        return customer

    def delete_customer(self, customer_id: int) -> bool:
        deleted = self.db.query(Customer).filter(Customer.id == customer_id).delete(synchronize_session=False)
        self.db.commit()
        return deleted > 0

    def count_sales(self, customer_id: int) -> int:
        return self.db.query(func.count(Sale.id)).filter(Sale.customer_id == customer_id).scalar() or 0

    def get_customer_sales(self, customer_id: int) -> List[Dict[str, Any]]:
        """
        Ventas del cliente (más recientes primero) con nombres de productos
        """
        results = self.db.query(
            Sale,
            PaymentMethod.name.label("payment_method"),
            Seller.name.label("seller_name")
        ).join(
            PaymentMethod, Sale.payment_method_id == PaymentMethod.id
        ).join(
            Seller, Sale.seller_id == Seller.id
        ).filter(
            Sale.customer_id == customer_id
        ).order_by(desc(Sale.sold_at), desc(Sale.id)).all()

        sale_ids = [sale.id for sale, _, _ in results]
        products_by_sale = {sale_id: [] for sale_id in sale_ids}

        if sale_ids:
            items = self.db.query(SaleItem.sale_id, Product.name).join(
                Product, SaleItem.product_id == Product.id
            ).filter(
                SaleItem.sale_id.in_(sale_ids)
            ).order_by(SaleItem.id).all()

            for sale_id, product_name in items:
                products_by_sale[sale_id].append(product_name)

        return [
            {
                "id": sale.id,
                "sold_at": sale.sold_at,
                "total": float(sale.total),
                "discount": float(sale.discount or 0),
                "payment_method": payment_method,
                "seller_name": seller_name,
                "products": products_by_sale[sale.id]
            }
            for sale, payment_method, seller_name in results
        ]
