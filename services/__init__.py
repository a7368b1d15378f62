# services/__init__.py
from .account_service import AccountService, build_password_context
from .visit_service import VisitService
from .payment_service import PaymentService
from .signature import compute_payment_signature, signature_matches

__all__ = [
     "AccountService",
     "build_password_context",
     "VisitService",
     "PaymentService",
     "compute_payment_signature",
     "signature_matches",
]
