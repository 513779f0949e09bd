# app/modules/products/router.py
from decimal import Decimal
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from app.config.database import get_db
from app.shared.schemas import MessageResponse
from .service import ProductService
from .schemas import ProductCreate, ProductUpdate, ProductResponse, ProductOptionsResponse

router = APIRouter(prefix="/products", tags=["Products - Productos"])

@router.get("", response_model=List[ProductResponse])
async def list_products(
    name: Optional[str] = Query(None, description="Parte del nombre (sin distinguir mayúsculas)"),
    category: Optional[str] = Query(None),
    min_price: Optional[Decimal] = Query(None, ge=0),
    max_price: Optional[Decimal] = Query(None, ge=0),
    origin: Optional[str] = Query(None, description="Lugar de fabricación"),
    db: Session = Depends(get_db)
):
    """
    Buscar productos con filtros opcionales
    """
    service = ProductService(db)
    return await service.search_products(
        name=name,
        category=category,
        min_price=min_price,
        max_price=max_price,
        origin=origin
    )

@router.get("/options", response_model=ProductOptionsResponse)
async def get_product_options(db: Session = Depends(get_db)):
    """
    Sugerencias de categoría y lugar de fabricación para los formularios
    """
    service = ProductService(db)
    return await service.get_options()

@router.post("", response_model=ProductResponse, status_code=201)
async def create_product(product_data: ProductCreate, db: Session = Depends(get_db)):
    service = ProductService(db)
    return await service.create_product(product_data)

@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: int, db: Session = Depends(get_db)):
    service = ProductService(db)
    return await service.get_product(product_id)

@router.put("/{product_id}", response_model=ProductResponse)
async def update_product(product_id: int, product_data: ProductUpdate, db: Session = Depends(get_db)):
    service = ProductService(db)
    return await service.update_product(product_id, product_data)

@router.delete("/{product_id}", response_model=MessageResponse)
async def delete_product(product_id: int, db: Session = Depends(get_db)):
    """
    Eliminar producto (400 si ya fue vendido)
    """
    service = ProductService(db)
    return await service.delete_product(product_id)
