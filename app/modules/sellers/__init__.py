from .router import router as sellers_router
from .service import SellerService
from .repository import SellerRepository

__all__ = [
    "sellers_router",
    "SellerService",
    "SellerRepository"
]
