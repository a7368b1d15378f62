# models/__init__.py
from .base import Base
from .account import Account
from .visit import Visit, PaymentStatus
from .payment_ledger import PaymentLedgerEntry

__all__ = [
     "Base",
     "Account",
     "Visit",
     "PaymentStatus",
     "PaymentLedgerEntry",
]
