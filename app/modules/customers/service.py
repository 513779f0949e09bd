# app/modules/customers/service.py
import logging
from typing import List, Optional, Dict, Any
from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.shared.database.models import Customer
from .repository import CustomerRepository
from .schemas import CustomerCreate, CustomerUpdate

logger = logging.getLogger(__name__)

CUSTOMER_HAS_SALES = "No es posible eliminar un cliente con ventas asociadas"

class CustomerService:
    """
    Servicio de clientes
    """

    def __init__(self, db: Session):
        self.db = db
        self.repository = CustomerRepository(db)

    async def get_customers(self, search: Optional[str] = None) -> List[Dict[str, Any]]:
        return self.repository.get_customers(search)

    async def get_customer(self, customer_id: int) -> Customer:
        customer = self.repository.get_customer(customer_id)
        if not customer:
            raise HTTPException(status_code=404, detail="Cliente no encontrado")
        return customer

    async def create_customer(self, customer_data: CustomerCreate) -> Customer:
        try:
            customer = self.repository.create_customer(customer_data.model_dump())
            logger.info(f"✅ Cliente {customer.id} creado")
            return customer
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Error creando cliente: {e}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Error creando cliente"
            )

    async def update_customer(self, customer_id: int, customer_data: CustomerUpdate) -> Customer:
        try:
            customer = self.repository.update_customer(customer_id, customer_data.model_dump())
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Error actualizando cliente {customer_id}: {e}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Error actualizando cliente"
            )

        if not customer:
            raise HTTPException(status_code=404, detail="Cliente no encontrado")
        return customer

    async def delete_customer(self, customer_id: int) -> Dict[str, str]:
        """
        Eliminar cliente; bloqueado si tiene ventas asociadas
        """
        try:
            if self.repository.count_sales(customer_id) > 0:
                raise HTTPException(status_code=400, detail=CUSTOMER_HAS_SALES)

            deleted = self.repository.delete_customer(customer_id)
        except IntegrityError as e:
            # venta registrada entre la verificación y el DELETE
            self.db.rollback()
            logger.warning(f"⚠️ Cliente {customer_id} con ventas, no eliminado: {e}")
            raise HTTPException(status_code=400, detail=CUSTOMER_HAS_SALES)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Error eliminando cliente {customer_id}: {e}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Error eliminando cliente"
            )

        if not deleted:
            raise HTTPException(status_code=404, detail="Cliente no encontrado")

        logger.info(f"🗑️ Cliente {customer_id} eliminado")
        return {"message": "Cliente eliminado con éxito"}

    async def get_customer_sales(self, customer_id: int) -> List[Dict[str, Any]]:
        if not self.repository.get_customer(customer_id):
            raise HTTPException(status_code=404, detail="Cliente no encontrado")
        return self.repository.get_customer_sales(customer_id)
