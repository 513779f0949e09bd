from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime
from enum import Enum

from app.shared.schemas import ApiBaseModel, empty_to_none

# ==================== ENUMS ====================

class SellerStatus(str, Enum):
    active = "active"
    inactive = "inactive"

# ==================== REQUEST SCHEMAS ====================

class SellerCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, description="Nombre del vendedor")
    email: Optional[str] = Field(None, max_length=100)
    phone: Optional[str] = Field(None, max_length=20)

    @field_validator("email", "phone", mode="before")
    @classmethod
    def blank_as_none(cls, v):
        return empty_to_none(v)

class SellerUpdate(SellerCreate):
    pass

class SellerStatusUpdate(BaseModel):
    # str y no SellerStatus: un valor inválido es 400, no un error de validación
    status: str

# ==================== RESPONSE SCHEMAS ====================

class SellerResponse(ApiBaseModel):
    id: int
    name: str
    email: Optional[str]
    phone: Optional[str]
    status: Optional[str]
    created_at: Optional[datetime]

class SellerSummaryResponse(ApiBaseModel):
    id: int
    name: str
    email: Optional[str]
    phone: Optional[str]
    status: Optional[str]
    hired_at: Optional[datetime]
    total_sales: int
    sales_value: float
