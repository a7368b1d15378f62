# services/payment_service.py
"""
Payment Service - booking fee orders and payment confirmation.

Flow:
1. create_payment_order: ask the gateway for an order; when a visit id is
   given, the order id is stored on the visit so the callback can find it.
2. verify_payment: recompute the callback signature (HMAC-SHA256 over
   ``order_id|payment_id``), then in ONE transaction append the ledger entry
   and move the visit from PENDING to PAID.

A replayed callback is stopped by the unique constraint on the ledger's
payment_id, not by a read-then-insert check.
"""
import logging
import uuid
from typing import Optional

from sqlalchemy import or_, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from models import Visit, PaymentStatus, PaymentLedgerEntry
from services.errors import (
     DuplicatePayment,
     GatewayError,
     NotFound,
     PersistenceFailure,
     SignatureMismatch,
     ValidationError,
     VisitAlreadyPaid,
)
from services.signature import signature_matches

logger = logging.getLogger(__name__)

DEFAULT_PAYMENT_METHOD = "UPI"


class PaymentService:
     """
     Service class for the visit payment flow.

     Args:
          db: SQLAlchemy session
          gateway: client exposing ``create_order`` and ``fetch_payment``
               (see utils.gateway.RazorpayClient)
          key_secret: secret shared with the gateway, used only to verify
               callback signatures
     """

     def __init__(self, db: Session, gateway, key_secret: Optional[str]):
          self.db = db
          self.gateway = gateway
          self.key_secret = key_secret

     def _get_visit(self, visit_id: str) -> Visit:
          try:
               visit = self.db.get(Visit, visit_id)
          except SQLAlchemyError as e:
               raise PersistenceFailure() from e
          if visit is None:
               raise NotFound(f"Visit {visit_id} not found")
          return visit

     def _find_visit_for_order(self, order_id: str) -> Optional[Visit]:
          try:
               return self.db.query(Visit).filter(Visit.order_id == order_id).first()
          except SQLAlchemyError as e:
               raise PersistenceFailure() from e

     def create_payment_order(self, amount: int, currency: str, visit_id: Optional[str] = None) -> dict:
          """
          Create a gateway order for ``amount`` (smallest currency unit).

          A visit has at most one order: once an order is attached to a
          PENDING visit, later calls return that same order (fetched from the
          gateway) instead of opening a second one. The stored order id is
          never overwritten.

          Returns the gateway's order object unchanged.

          Raises:
               ValidationError: non-positive amount.
               NotFound: ``visit_id`` given but no such visit.
               VisitAlreadyPaid: the visit has already been paid.
               GatewayError: the gateway failed, timed out or is not configured.
          """
          if amount is None or amount <= 0:
               raise ValidationError("Amount must be positive")

          visit = None
          if visit_id:
               visit = self._get_visit(visit_id)
               if visit.is_paid:
                    raise VisitAlreadyPaid()
               if visit.order_id:
                    logger.info("Reusing open order %s for visit %s", visit.order_id, visit.id)
                    return self.gateway.fetch_order(visit.order_id)

          if visit is not None:
               receipt = visit.id
               notes = {"visit_id": visit.id}
          else:
               receipt = f"rcpt_{uuid.uuid4().hex[:16]}"
               notes = None

          order = self.gateway.create_order(amount, currency, receipt=receipt, notes=notes)
          order_id = order.get("id") if isinstance(order, dict) else None
          if not order_id:
               logger.error("Gateway order response has no id: %r", order)
               raise GatewayError()

          if visit is not None:
               try:
                    result = self.db.execute(
                         update(Visit)
                         .where(Visit.id == visit.id, Visit.order_id.is_(None))
                         .values(order_id=order_id)
                         .execution_options(synchronize_session=False)
                    )
                    self.db.commit()
               except SQLAlchemyError as e:
                    self.db.rollback()
                    logger.error("Could not attach order %s to visit %s: %s", order_id, visit.id, e)
                    raise PersistenceFailure() from e
               self.db.refresh(visit)

               if result.rowcount != 1:
                    # A concurrent request attached its order first; that one wins
                    logger.warning("Order %s discarded, visit %s already has order %s",
                                   order_id, visit.id, visit.order_id)
                    if visit.is_paid:
                         raise VisitAlreadyPaid()
                    return self.gateway.fetch_order(visit.order_id)

          logger.info("Order created order_id=%s visit_id=%s amount=%s %s",
                      order_id, visit.id if visit else None, amount, currency)
          return order

     def verify_payment(
          self,
          order_id: Optional[str],
          payment_id: Optional[str],
          signature: Optional[str],
          visit_id: Optional[str] = None,
     ) -> PaymentLedgerEntry:
          """
          Confirm a payment callback.

          1. Recompute the signature and compare in constant time.
          2. Fetch amount and method of the payment from the gateway.
          3. Insert the ledger entry and mark the correlated visit PAID,
             committed together.

          The visit is the one the order was created for. An explicit
          ``visit_id`` must agree with it; it can only name a different visit
          for an order created without one. Without either, only the ledger
          entry is stored.

          Raises:
               ValidationError: a callback field is missing, or the order does
                    not belong to the given visit.
               SignatureMismatch: signature does not match; nothing is stored.
               DuplicatePayment: this payment id is already recorded.
               VisitAlreadyPaid: the visit was paid by another payment.
               GatewayError: secret not configured, payment lookup failed or
                    the gateway reported no amount.
               PersistenceFailure: the transaction could not be committed.
          """
          if not order_id or not payment_id or not signature:
               raise ValidationError("razorpay_order_id, razorpay_payment_id and razorpay_signature are required")

          if not self.key_secret:
               logger.error("Payment verification attempted without RAZORPAY_KEY_SECRET")
               raise GatewayError("Payment gateway is not configured")

          if not signature_matches(order_id, payment_id, signature, self.key_secret):
               logger.warning("Signature mismatch for order_id=%s payment_id=%s", order_id, payment_id)
               raise SignatureMismatch()

          owner = self._find_visit_for_order(order_id)
          if visit_id:
               visit = self._get_visit(visit_id)
               if owner is not None and owner.id != visit.id:
                    logger.warning("Order %s belongs to visit %s, not %s", order_id, owner.id, visit.id)
                    raise ValidationError("Order does not belong to this visit")
               if owner is None and visit.order_id and visit.order_id != order_id:
                    raise ValidationError("Order does not belong to this visit")
          else:
               visit = owner

          if visit is not None and visit.is_paid:
               if visit.payment_id == payment_id:
                    raise DuplicatePayment()
               raise VisitAlreadyPaid()

          payment = self.gateway.fetch_payment(payment_id)
          try:
               amount = int(payment.get("amount"))
          except (TypeError, ValueError):
               amount = 0
          if amount <= 0:
               logger.error("Gateway payment %s has no usable amount: %r", payment_id, payment.get("amount"))
               raise GatewayError()

          entry = PaymentLedgerEntry(
               amount=amount,
               currency=(payment.get("currency") or "INR").upper(),
               payment_id=payment_id,
               order_id=order_id,
               payment_method=(payment.get("method") or DEFAULT_PAYMENT_METHOD).upper(),
               status=PaymentStatus.PAID.value,
               visit_id=visit.id if visit is not None else None,
          )

          try:
               self.db.add(entry)
               self.db.flush()
               if visit is not None:
                    result = self.db.execute(
                         update(Visit)
                         .where(
                              Visit.id == visit.id,
                              Visit.payment_status == PaymentStatus.PENDING,
                              or_(Visit.order_id.is_(None), Visit.order_id == order_id),
                         )
                         .values(payment_status=PaymentStatus.PAID, payment_id=payment_id, order_id=order_id)
                         .execution_options(synchronize_session=False)
                    )
                    if result.rowcount != 1:
                         self.db.rollback()
                         self.db.refresh(visit)
                         if visit.is_paid:
                              raise VisitAlreadyPaid()
                         raise ValidationError("Order does not belong to this visit")
               self.db.commit()
          except IntegrityError as e:
               self.db.rollback()
               logger.warning("Duplicate payment callback payment_id=%s", payment_id)
               raise DuplicatePayment() from e
          except SQLAlchemyError as e:
               self.db.rollback()
               logger.error("Could not record payment %s: %s", payment_id, e)
               raise PersistenceFailure() from e

          if visit is not None:
               self.db.refresh(visit)
          logger.info("Payment recorded payment_id=%s order_id=%s visit_id=%s",
                      payment_id, order_id, entry.visit_id)
          return entry
