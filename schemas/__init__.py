# schemas/__init__.py
from .account import (
     SignupRequest,
     LoginRequest,
     MessageResponse,
     LoginResponse,
     ProfileResponse,
)
from .visit import VisitCreate, VisitCreatedResponse
from .payment import (
     CreateOrderRequest,
     CreateOrderResponse,
     PaymentVerifyRequest,
     PaymentVerifyResponse,
)

__all__ = [
     "SignupRequest",
     "LoginRequest",
     "MessageResponse",
     "LoginResponse",
     "ProfileResponse",
     "VisitCreate",
     "VisitCreatedResponse",
     "CreateOrderRequest",
     "CreateOrderResponse",
     "PaymentVerifyRequest",
     "PaymentVerifyResponse",
]
