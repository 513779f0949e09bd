from typing import Optional
from datetime import datetime

from app.shared.schemas import ApiBaseModel

# ==================== RESPONSE SCHEMAS ====================

class PaymentMethodResponse(ApiBaseModel):
    id: int
    name: str
    created_at: Optional[datetime]
