from .router import router as reports_router
from .service import ReportsService
from .repository import ReportsRepository

__all__ = [
    "reports_router",
    "ReportsService",
    "ReportsRepository"
]
