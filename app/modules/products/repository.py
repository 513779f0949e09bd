# app/modules/products/repository.py
from decimal import Decimal
from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy import desc, func

from app.shared.database.models import Product, SaleItem

class ProductRepository:
    """
    Repositorio de productos
    """

    def __init__(self, db: Session):
        self.db = db

    def search_products(
        self,
        name: Optional[str] = None,
        category: Optional[str] = None,
        min_price: Optional[Decimal] = None,
        max_price: Optional[Decimal] = None,
        origin: Optional[str] = None
    ) -> List[Product]:
        """
        Filtros combinados con AND, más recientes primero
        """
        query = self.db.query(Product)

        if name:
            query = query.filter(Product.name.ilike(f"%{name}%"))
        if category:
            query = query.filter(Product.category == category)
        if min_price is not None:
            query = query.filter(Product.price >= min_price)
        if max_price is not None:
            query = query.filter(Product.price <= max_price)
        if origin:
            query = query.filter(Product.origin == origin)

        return query.order_by(desc(Product.id)).all()

    def get_product(self, product_id: int) -> Optional[Product]:
        return self.db.query(Product).filter(Product.id == product_id).first()

    def create_product(self, product_data: dict) -> Product:
        product = Product(**product_data)
        self.db.add(product)
        self.db.commit()
        self.db.refresh(product)
        return product

    def update_product(self, product_id: int, update_data: dict) -> Optional[Product]:
        product = self.get_product(product_id)
        if not product:
            return None

        for field, value in update_data.items():
            setattr(product, field, value)

        self.db.commit()
        self.db.refresh(product)
        return product

    def delete_product(self, product_id: int) -> bool:
        deleted = self.db.query(Product).filter(Product.id == product_id).delete(synchronize_session=False)
        self.db.commit()
        return deleted > 0

    def count_sale_items(self, product_id: int) -> int:
        return self.db.query(func.count(SaleItem.id)).filter(SaleItem.product_id == product_id).scalar() or 0
