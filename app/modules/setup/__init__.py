from .router import router as setup_router
from .service import SetupService

__all__ = [
    "setup_router",
    "SetupService"
]
