from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from decimal import Decimal

from app.shared.schemas import ApiBaseModel

# Sugerencias del formulario; la columna acepta cualquier valor
PRODUCT_CATEGORIES = ["smartphones", "tablets", "notebooks", "acessorios", "smartwatches"]
PRODUCT_ORIGINS = ["mari", "outros"]

# ==================== REQUEST SCHEMAS ====================

class ProductCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, description="Nombre del producto")
    description: Optional[str] = None
    price: Decimal = Field(..., ge=0, description="Precio unitario")
    category: Optional[str] = Field(None, max_length=50)
    stock: int = Field(0, description="Cantidad en inventario")
    origin: Optional[str] = Field(None, max_length=50, description="Lugar de fabricación")

class ProductUpdate(ProductCreate):
    pass

# ==================== RESPONSE SCHEMAS ====================

class ProductResponse(ApiBaseModel):
    id: int
    name: str
    description: Optional[str]
    price: float
    category: Optional[str]
    stock: int
    origin: Optional[str]
    created_at: Optional[datetime]

class ProductOptionsResponse(BaseModel):
    categories: List[str]
    origins: List[str]
