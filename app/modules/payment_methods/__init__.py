from .router import router as payment_methods_router

__all__ = ["payment_methods_router"]
