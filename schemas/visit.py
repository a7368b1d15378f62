# schemas/visit.py
"""
Pydantic schemas for visit booking.

Required fields are checked by VisitService so that a missing field and a
blank one are reported the same way.
"""
from typing import List, Optional
from pydantic import BaseModel, ConfigDict


class VisitCreate(BaseModel):
     """Request body for POST /submit-visit."""
     name: Optional[str] = None
     email: Optional[str] = None
     phone: Optional[str] = None
     date: Optional[str] = None
     timeSlot: Optional[str] = None
     contactMethods: Optional[List[str]] = None
     message: Optional[str] = None
     propertyId: Optional[str] = None

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "name": "Asha Rao",
                    "email": "asha@example.com",
                    "phone": "+91 9000000000",
                    "date": "2024-01-01",
                    "timeSlot": "10:00",
                    "contactMethods": ["phone", "whatsapp"],
                    "message": "Interested in the 3 BHK",
                    "propertyId": "skyline-tower-a",
               }
          }
     )


class VisitCreatedResponse(BaseModel):
     success: bool = True
     visitId: str
