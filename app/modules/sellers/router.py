# app/modules/sellers/router.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from app.config.database import get_db
from app.shared.schemas import MessageResponse
from .service import SellerService
from .schemas import (
    SellerCreate, SellerUpdate, SellerStatusUpdate,
    SellerResponse, SellerSummaryResponse
)

router = APIRouter(prefix="/sellers", tags=["Sellers - Vendedores"])

@router.get("", response_model=List[SellerSummaryResponse])
async def list_sellers(db: Session = Depends(get_db)):
    """
    Vendedores con fecha de contratación, cantidad y valor de ventas
    """
    service = SellerService(db)
    return await service.get_sellers()

@router.post("", response_model=SellerResponse, status_code=201)
async def create_seller(seller_data: SellerCreate, db: Session = Depends(get_db)):
    service = SellerService(db)
    return await service.create_seller(seller_data)

@router.get("/{seller_id}", response_model=SellerResponse)
async def get_seller(seller_id: int, db: Session = Depends(get_db)):
    service = SellerService(db)
    return await service.get_seller(seller_id)

@router.put("/{seller_id}", response_model=SellerResponse)
async def update_seller(seller_id: int, seller_data: SellerUpdate, db: Session = Depends(get_db)):
    service = SellerService(db)
    return await service.update_seller(seller_id, seller_data)

@router.patch("/{seller_id}/status", response_model=SellerResponse)
async def update_seller_status(
    seller_id: int,
    status_data: SellerStatusUpdate,
    db: Session = Depends(get_db)
):
    """
    Cambiar estado del vendedor: active | inactive
    """
    service = SellerService(db)
    return await service.update_status(seller_id, status_data.status)

@router.delete("/{seller_id}", response_model=MessageResponse)
async def delete_seller(seller_id: int, db: Session = Depends(get_db)):
    """
    Eliminar vendedor (400 si tiene ventas asociadas)
    """
    service = SellerService(db)
    return await service.delete_seller(seller_id)
