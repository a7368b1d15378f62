# routers/visits.py
"""
Visit booking API.

POST /submit-visit: store a visit request (payment status PENDING).
"""
from fastapi import APIRouter, Depends, status

from dependencies import get_visit_service
from schemas.visit import VisitCreate, VisitCreatedResponse
from services import VisitService

router = APIRouter(tags=["visits"])


@router.post(
     "/submit-visit",
     response_model=VisitCreatedResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Book a property visit",
)
def submit_visit(
     body: VisitCreate,
     visits: VisitService = Depends(get_visit_service),
):
     """
     Book a visit.

     - **name**, **email**, **phone**, **date**, **timeSlot**: required
     - **contactMethods**, **message**, **propertyId**: optional

     The returned **visitId** can be passed to /create-order and
     /verify-payment to tie the booking fee to this visit.
     """
     visit = visits.book_visit(
          name=body.name,
          email=body.email,
          phone=body.phone,
          date=body.date,
          time_slot=body.timeSlot,
          contact_methods=body.contactMethods,
          message=body.message,
          property_id=body.propertyId,
     )
     return VisitCreatedResponse(success=True, visitId=visit.id)
