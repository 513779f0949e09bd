# app/modules/customers/router.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from app.config.database import get_db
from app.shared.schemas import MessageResponse
from .service import CustomerService
from .schemas import (
    CustomerCreate, CustomerUpdate, CustomerResponse,
    CustomerSummaryResponse, CustomerSaleResponse
)

router = APIRouter(prefix="/customers", tags=["Customers - Clientes"])

@router.get("", response_model=List[CustomerSummaryResponse])
async def list_customers(
    search: Optional[str] = Query(None, description="Busca en nombre, email o teléfono"),
    db: Session = Depends(get_db)
):
    """
    Clientes ordenados por nombre, con total de compras y última compra
    """
    service = CustomerService(db)
    return await service.get_customers(search)

@router.post("", response_model=CustomerResponse, status_code=201)
async def create_customer(customer_data: CustomerCreate, db: Session = Depends(get_db)):
    service = CustomerService(db)
    return await service.create_customer(customer_data)

@router.get("/{customer_id}", response_model=CustomerResponse)
async def get_customer(customer_id: int, db: Session = Depends(get_db)):
    service = CustomerService(db)
    return await service.get_customer(customer_id)

@router.put("/{customer_id}", response_model=CustomerResponse)
async def update_customer(customer_id: int, customer_data: CustomerUpdate, db: Session = Depends(get_db)):
    service = CustomerService(db)
    return await service.update_customer(customer_id, customer_data)

@router.delete("/{customer_id}", response_model=MessageResponse)
async def delete_customer(customer_id: int, db: Session = Depends(get_db)):
    """
    Eliminar cliente (400 si tiene ventas asociadas)
    """
    service = CustomerService(db)
    return await service.delete_customer(customer_id)

@router.get("/{customer_id}/sales", response_model=List[CustomerSaleResponse])
async def get_customer_sales(customer_id: int, db: Session = Depends(get_db)):
    """
    Historial de compras del cliente con los productos de cada venta
    """
    service = CustomerService(db)
    return await service.get_customer_sales(customer_id)
