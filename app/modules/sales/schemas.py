from pydantic import BaseModel, Field, field_validator, model_validator
from typing import List, Optional
from datetime import datetime
from decimal import Decimal

from app.shared.schemas import ApiBaseModel, empty_to_none

CENTS = Decimal("0.01")

# ==================== REQUEST SCHEMAS ====================

class SaleCustomerRequest(BaseModel):
    """Datos del cliente capturados en el formulario de venta"""
    name: str = Field(..., min_length=1, description="Nombre del cliente")
    email: Optional[str] = Field(None, description="Email (identifica a un cliente existente)")
    phone: Optional[str] = Field(None, description="Teléfono")
    supports_flamengo: bool = False
    watches_one_piece: bool = False
    from_sousa: bool = False

    @field_validator("email", "phone", mode="before")
    @classmethod
    def blank_as_none(cls, v):
        return empty_to_none(v)

    @property
    def preference_flags(self):
        return (self.supports_flamengo, self.watches_one_piece, self.from_sousa)

class SaleItemRequest(BaseModel):
    product_id: int = Field(..., description="ID del producto")
    quantity: int = Field(..., ge=1, description="Cantidad")
    unit_price: Decimal = Field(..., ge=0, description="Precio unitario al momento de la venta")
    subtotal: Optional[Decimal] = Field(None, description="quantity * unit_price")

    @model_validator(mode="after")
    def validate_subtotal(self):
        expected = (self.unit_price * self.quantity).quantize(CENTS)
        if self.subtotal is None:
            self.subtotal = expected
        elif self.subtotal.quantize(CENTS) != expected:
            raise ValueError(
                f"Subtotal {self.subtotal} no coincide con cantidad x precio ({expected})"
            )
        return self

class SaleQuoteRequest(BaseModel):
    items: List[SaleItemRequest] = Field(..., min_length=1, description="Items de la venta")
    customer: Optional[SaleCustomerRequest] = None
    customer_id: Optional[int] = None

class SaleCreateRequest(SaleQuoteRequest):
    seller_id: int = Field(..., description="ID del vendedor")
    payment_method_id: int = Field(..., description="ID de la forma de pago")
    total: Optional[Decimal] = Field(None, ge=0, description="Monto total (subtotal - descuento)")
    discount: Optional[Decimal] = Field(None, ge=0, description="Descuento aplicado")

    @model_validator(mode="after")
    def validate_customer(self):
        if self.customer_id is None and self.customer is None:
            raise ValueError("Se requiere customer o customer_id")
        return self

    @model_validator(mode="after")
    def validate_totals(self):
        subtotal = sum((item.subtotal for item in self.items), Decimal("0"))

        if self.discount is not None and self.discount > subtotal:
            raise ValueError(f"Descuento {self.discount} mayor que el subtotal ({subtotal})")

        if self.total is not None and self.discount is not None:
            expected = (subtotal - self.discount).quantize(CENTS)
            if self.total.quantize(CENTS) != expected:
                raise ValueError(f"Total {self.total} no coincide con subtotal - descuento ({expected})")
        return self

# ==================== RESPONSE SCHEMAS ====================

class SaleCreatedResponse(BaseModel):
    id: int

class SaleQuoteResponse(BaseModel):
    subtotal: float
    discount_rate: float
    discount: float
    total: float

class SaleListItemResponse(ApiBaseModel):
    id: int
    customer_id: Optional[int]
    seller_id: int
    payment_method_id: int
    total: float
    discount: float
    sold_at: Optional[datetime]
    customer_name: Optional[str]
    seller_name: str
    payment_method: str

class SaleDetailItemResponse(ApiBaseModel):
    id: int
    product_name: str
    quantity: int
    unit_price: float
    subtotal: float

class SaleDetailResponse(ApiBaseModel):
    id: int
    sold_at: Optional[datetime]
    total: float
    discount: float
    customer_name: Optional[str]
    customer_email: Optional[str]
    seller_name: str
    payment_method: str
    items: List[SaleDetailItemResponse]

class SaleProductResponse(ApiBaseModel):
    id: int
    name: str
    quantity: int
    unit_price: float
    subtotal: float
