# models/visit.py
import enum
import uuid

from sqlalchemy import Column, String, Text, DateTime, Enum, JSON, func
from sqlalchemy.orm import relationship
from .base import Base


class PaymentStatus(str, enum.Enum):
     """Payment state of a visit request."""
     PENDING = "PENDING"
     PAID = "PAID"


def _new_visit_id() -> str:
     return str(uuid.uuid4())


class Visit(Base):
     """
     Visit model - a prospective buyer's request to visit a property.

     A visit is created PENDING and moves to PAID exactly once, when the
     booking fee payment callback is verified. It never goes back.
     """
     __tablename__ = "visits"

     id = Column(String(36), primary_key=True, default=_new_visit_id)

     # Visitor / visit details
     name = Column(String(255), nullable=False)
     email = Column(String(255), nullable=False)
     phone = Column(String(50), nullable=False)
     date = Column(String(50), nullable=False)
     time_slot = Column(String(50), nullable=False)
     contact_methods = Column(JSON, nullable=False, default=list)
     message = Column(Text, nullable=False, default="")
     property_id = Column(String(100), nullable=True)

     # Payment details
     payment_status = Column(
          Enum(PaymentStatus, name="payment_status", create_constraint=True),
          default=PaymentStatus.PENDING,
          nullable=False,
          index=True
     )
     payment_id = Column(String(100), nullable=True)
     order_id = Column(String(100), nullable=True, index=True)

     # Timestamps
     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, onupdate=func.now(), nullable=True)

     # Relationships
     payment_ledger_entry = relationship("PaymentLedgerEntry", back_populates="visit", uselist=False)

     def __repr__(self):
          return f"<Visit(id={self.id}, date={self.date}, slot={self.time_slot}, status='{self.payment_status.value}')>"

     @property
     def is_paid(self) -> bool:
          return self.payment_status == PaymentStatus.PAID
