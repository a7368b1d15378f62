# routers/__init__.py
from .auth import router as auth_router
from .visits import router as visits_router
from .payments import router as payments_router

__all__ = ["auth_router", "visits_router", "payments_router"]
