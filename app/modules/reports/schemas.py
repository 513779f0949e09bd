from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime

# ==================== RESPONSE SCHEMAS ====================

class SellerReportRow(BaseModel):
    seller_id: int
    seller_name: str
    total_sales: int
    total_value: float
    average_ticket: float
    commission: float

class ProductReportRow(BaseModel):
    id: int
    name: str
    category: Optional[str]
    quantity_sold: int
    total_value: float
    current_stock: Optional[int]

class CustomerReportRow(BaseModel):
    id: int
    name: str
    total_purchases: int
    total_value: float
    last_purchase: Optional[datetime]

class SellerCustomerRow(BaseModel):
    seller_id: int
    seller_name: str
    total_customers: int
    recurring_customers: int
    average_ticket: float

class TopRelationshipRow(BaseModel):
    seller_name: str
    customer_name: str
    total_interactions: int
    total_value: float
    last_interaction: Optional[datetime]

class RelationshipsReport(BaseModel):
    seller_customer: List[SellerCustomerRow]
    top_relationships: List[TopRelationshipRow]

class MonthlySalesRow(BaseModel):
    seller_id: int
    seller_name: str
    total_sales: int
    total_value: float
    average_ticket: float
    year: int
    month: int
    month_label: str
