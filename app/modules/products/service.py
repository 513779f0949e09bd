# app/modules/products/service.py
import logging
from typing import List, Dict
from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.shared.database.models import Product
from .repository import ProductRepository
from .schemas import ProductCreate, ProductUpdate, PRODUCT_CATEGORIES, PRODUCT_ORIGINS

logger = logging.getLogger(__name__)

PRODUCT_ALREADY_SOLD = "No es posible eliminar un producto que ya fue vendido"

class ProductService:
    """
    Servicio de productos
    """

    def __init__(self, db: Session):
        self.db = db
        self.repository = ProductRepository(db)

    async def search_products(self, **filters) -> List[Product]:
        return self.repository.search_products(**filters)

    async def get_options(self) -> Dict[str, List[str]]:
        return {"categories": PRODUCT_CATEGORIES, "origins": PRODUCT_ORIGINS}

    async def get_product(self, product_id: int) -> Product:
        product = self.repository.get_product(product_id)
        if not product:
            raise HTTPException(status_code=404, detail="Producto no encontrado")
        return product

    async def create_product(self, product_data: ProductCreate) -> Product:
        try:
            product = self.repository.create_product(product_data.model_dump())
            logger.info(f"✅ Producto {product.id} creado")
            return product
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Error creando producto: {e}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Error creando producto"
            )

    async def update_product(self, product_id: int, product_data: ProductUpdate) -> Product:
        try:
            product = self.repository.update_product(product_id, product_data.model_dump())
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Error actualizando producto {product_id}: {e}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Error actualizando producto"
            )

        if not product:
            raise HTTPException(status_code=404, detail="Producto no encontrado")
        return product

    async def delete_product(self, product_id: int) -> Dict[str, str]:
        """
        Eliminar producto; bloqueado si ya fue vendido
        """
        try:
            if self.repository.count_sale_items(product_id) > 0:
                raise HTTPException(status_code=400, detail=PRODUCT_ALREADY_SOLD)

            deleted = self.repository.delete_product(product_id)
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"⚠️ Producto {product_id} ya vendido, no eliminado: {e}")
            raise HTTPException(status_code=400, detail=PRODUCT_ALREADY_SOLD)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Error eliminando producto {product_id}: {e}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Error eliminando producto"
            )

        if not deleted:
            raise HTTPException(status_code=404, detail="Producto no encontrado")

        logger.info(f"🗑️ Producto {product_id} eliminado")
        return {"message": "Producto eliminado con éxito"}
