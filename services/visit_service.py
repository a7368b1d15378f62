# services/visit_service.py
"""
Visit Service - property visit booking.

A booking is stored PENDING; only PaymentService moves it to PAID.
Slots are not reserved: two bookings for the same date and time slot are
both accepted.
"""
import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models import Visit, PaymentStatus
from services.errors import NotFound, PersistenceFailure, ValidationError

logger = logging.getLogger(__name__)


def _is_blank(value) -> bool:
     return value is None or (isinstance(value, str) and not value.strip())


class VisitService:
     """Service class for visit bookings."""

     def __init__(self, db: Session):
          self.db = db

     def book_visit(
          self,
          name: Optional[str],
          email: Optional[str],
          phone: Optional[str],
          date: Optional[str],
          time_slot: Optional[str],
          contact_methods: Optional[List[str]] = None,
          message: Optional[str] = None,
          property_id: Optional[str] = None,
     ) -> Visit:
          """
          Store a new visit request with payment status PENDING.

          Args:
               name, email, phone, date, time_slot: required, non-blank
               contact_methods: preferred ways to be contacted (default: none)
               message: free text (default: "")
               property_id: property the visit is for, if any

          Returns:
               The created Visit; its ``id`` correlates later payment calls.

          Raises:
               ValidationError: a required field is missing or blank (nothing is written).
               PersistenceFailure: the visit could not be stored.
          """
          required = {
               "name": name,
               "email": email,
               "phone": phone,
               "date": date,
               "timeSlot": time_slot,
          }
          missing = [field for field, value in required.items() if _is_blank(value)]
          if missing:
               raise ValidationError(f"Missing required fields: {', '.join(missing)}")

          visit = Visit(
               name=name.strip(),
               email=email.strip(),
               phone=phone.strip(),
               date=date.strip(),
               time_slot=time_slot.strip(),
               contact_methods=list(contact_methods or []),
               message=message or "",
               property_id=property_id or None,
               payment_status=PaymentStatus.PENDING,
          )
          try:
               self.db.add(visit)
               self.db.commit()
          except SQLAlchemyError as e:
               self.db.rollback()
               logger.error("Visit booking failed: %s", e)
               raise PersistenceFailure() from e

          logger.info("Visit booked id=%s date=%s slot=%s", visit.id, visit.date, visit.time_slot)
          return visit

     def get_visit(self, visit_id: str) -> Visit:
          try:
               visit = self.db.get(Visit, visit_id)
          except SQLAlchemyError as e:
               raise PersistenceFailure() from e
          if visit is None:
               raise NotFound(f"Visit {visit_id} not found")
          return visit
