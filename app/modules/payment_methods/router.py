# app/modules/payment_methods/router.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from typing import List
import logging

from app.config.database import get_db
from app.shared.database.models import PaymentMethod
from .schemas import PaymentMethodResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/payment-methods", tags=["Payment methods - Formas de pago"])


@router.get("", response_model=List[PaymentMethodResponse])
async def list_payment_methods(db: Session = Depends(get_db)):
    """
    Formas de pago (tabla de referencia sembrada en la inicialización)
    """
    try:
        return db.query(PaymentMethod).order_by(PaymentMethod.name).all()
    except SQLAlchemyError as e:
        logger.error(f"❌ Error consultando formas de pago: {e}")
        raise HTTPException(status_code=500, detail="Error consultando formas de pago")
