from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import datetime

from app.shared.schemas import ApiBaseModel, empty_to_none

# ==================== REQUEST SCHEMAS ====================

class CustomerCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, description="Nombre del cliente")
    email: Optional[str] = Field(None, max_length=100)
    phone: Optional[str] = Field(None, max_length=20)
    supports_flamengo: bool = False
    watches_one_piece: bool = False
    from_sousa: bool = False

    @field_validator("email", "phone", mode="before")
    @classmethod
    def blank_as_none(cls, v):
        return empty_to_none(v)

class CustomerUpdate(CustomerCreate):
    pass

# ==================== RESPONSE SCHEMAS ====================

class CustomerResponse(ApiBaseModel):
    id: int
    name: str
    email: Optional[str]
    phone: Optional[str]
    supports_flamengo: bool
    watches_one_piece: bool
    from_sousa: bool
    created_at: Optional[datetime]

class CustomerSummaryResponse(CustomerResponse):
    total_purchases: int
    total_value: float
    last_purchase: Optional[datetime]

class CustomerSaleResponse(ApiBaseModel):
    id: int
    sold_at: Optional[datetime]
    total: float
    discount: float
    payment_method: str
    seller_name: str
    products: List[str]
