# app/modules/sellers/repository.py
from typing import List, Optional, Dict, Any
from sqlalchemy.orm import Session
from sqlalchemy import func

from app.shared.database.models import Seller, Sale

class SellerRepository:
    """
    Repositorio de vendedores
    """

    def __init__(self, db: Session):
        self.db = db

    def get_sellers(self) -> List[Dict[str, Any]]:
        """
        Vendedores con cantidad y valor de ventas, ordenados por nombre
        """
        results = self.db.query(
            Seller,
            func.count(Sale.id).label("total_sales"),
            func.coalesce(func.sum(Sale.total), 0).label("sales_value")
        ).outerjoin(
            Sale, Seller.id == Sale.seller_id
        ).group_by(Seller.id).order_by(Seller.name).all()

        return [
            {
                "id": seller.id,
                "name": seller.name,
                "email": seller.email,
                "phone": seller.phone,
                "status": seller.status,
                "hired_at": seller.created_at,
                "total_sales": total_sales,
                "sales_value": float(sales_value or 0)
            }
            for seller, total_sales, sales_value in results
        ]

    def get_seller(self, seller_id: int) -> Optional[Seller]:
        return self.db.query(Seller).filter(Seller.id == seller_id).first()

    def create_seller(self, seller_data: dict) -> Seller:
        seller = Seller(**seller_data)
        self.db.add(seller)
        self.db.commit()
        self.db.refresh(seller)
        return seller

    def update_seller(self, seller_id: int, update_data: dict) -> Optional[Seller]:
        seller = self.get_seller(seller_id)
        if not seller:
            return None

        for field, value in update_data.items():
            setattr(seller, field, value)

        self.db.commit()
        self.db.refresh(seller)
        return seller

    def delete_seller(self, seller_id: int) -> bool:
        deleted = self.db.query(Seller).filter(Seller.id == seller_id).delete(synchronize_session=False)
        self.db.commit()
        return deleted > 0

    def count_sales(self, seller_id: int) -> int:
        return self.db.query(func.count(Sale.id)).filter(Sale.seller_id == seller_id).scalar() or 0
