# models/payment_ledger.py
"""
PaymentLedgerEntry model - immutable record of a confirmed gateway payment.

One row per gateway payment id; the unique constraint on payment_id is what
rejects a replayed payment callback, even under concurrent submissions.
Records are append-only; modification is prevented at the application layer.
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint, func
from sqlalchemy.orm import relationship
from .base import Base


class PaymentLedgerEntry(Base):
     """
     Immutable payment ledger entry. Created when a payment callback signature
     is verified. Linked to the visit it paid for, when there is one.
     """
     __tablename__ = "payment_ledger"
     __table_args__ = (
          UniqueConstraint("payment_id", name="uq_payment_ledger_payment_id"),
     )

     id = Column(Integer, primary_key=True, autoincrement=True)
     amount = Column(Integer, nullable=False)  # smallest currency unit, e.g. paise
     currency = Column(String(10), nullable=False, default="INR")
     payment_id = Column(String(100), nullable=False, index=True)
     order_id = Column(String(100), nullable=False, index=True)
     payment_method = Column(String(50), nullable=False, default="UPI")
     status = Column(String(20), nullable=False, default="PAID")
     visit_id = Column(
          String(36),
          ForeignKey("visits.id", ondelete="RESTRICT"),  # Prevent delete if ledger exists
          nullable=True,
          index=True
     )
     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     # Relationships
     visit = relationship("Visit", back_populates="payment_ledger_entry")

     def __repr__(self):
          return f"<PaymentLedgerEntry(id={self.id}, payment_id='{self.payment_id}', order_id='{self.order_id}')>"
