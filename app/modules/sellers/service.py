# app/modules/sellers/service.py
import logging
from typing import List, Dict, Any
from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.shared.database.models import Seller
from .repository import SellerRepository
from .schemas import SellerCreate, SellerUpdate, SellerStatus

logger = logging.getLogger(__name__)

SELLER_HAS_SALES = "No es posible eliminar un vendedor con ventas asociadas"

class SellerService:
    """
    Servicio de vendedores
    """

    def __init__(self, db: Session):
        self.db = db
        self.repository = SellerRepository(db)

    async def get_sellers(self) -> List[Dict[str, Any]]:
        return self.repository.get_sellers()

    async def get_seller(self, seller_id: int) -> Seller:
        seller = self.repository.get_seller(seller_id)
        if not seller:
            raise HTTPException(status_code=404, detail="Vendedor no encontrado")
        return seller

    async def create_seller(self, seller_data: SellerCreate) -> Seller:
        try:
            seller = self.repository.create_seller(seller_data.model_dump())
            logger.info(f"✅ Vendedor {seller.id} creado")
            return seller
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Error creando vendedor: {e}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Error creando vendedor"
            )

    async def update_seller(self, seller_id: int, seller_data: SellerUpdate) -> Seller:
        return self._update(seller_id, seller_data.model_dump(), "Error actualizando vendedor")

    async def update_status(self, seller_id: int, new_status: str) -> Seller:
        """
        Activar / desactivar vendedor
        """
        if new_status not in {s.value for s in SellerStatus}:
            raise HTTPException(status_code=400, detail="Estado inválido")

        return self._update(seller_id, {"status": new_status}, "Error actualizando estado del vendedor")

    def _update(self, seller_id: int, update_data: dict, error_message: str) -> Seller:
        try:
            seller = self.repository.update_seller(seller_id, update_data)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ {error_message} {seller_id}: {e}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=error_message
            )

        if not seller:
            raise HTTPException(status_code=404, detail="Vendedor no encontrado")
        return seller

    async def delete_seller(self, seller_id: int) -> Dict[str, str]:
        """
        Eliminar vendedor; bloqueado si tiene ventas asociadas
        """
        try:
            if self.repository.count_sales(seller_id) > 0:
                raise HTTPException(status_code=400, detail=SELLER_HAS_SALES)

            deleted = self.repository.delete_seller(seller_id)
        except IntegrityError as e:
            # venta registrada entre la verificación y el DELETE
            self.db.rollback()
            logger.warning(f"⚠️ Vendedor {seller_id} con ventas, no eliminado: {e}")
            raise HTTPException(status_code=400, detail=SELLER_HAS_SALES)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Error eliminando vendedor {seller_id}: {e}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Error eliminando vendedor"
            )

        if not deleted:
            raise HTTPException(status_code=404, detail="Vendedor no encontrado")

        logger.info(f"🗑️ Vendedor {seller_id} eliminado")
        return {"message": "Vendedor eliminado con éxito"}
