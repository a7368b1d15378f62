# schemas/account.py
"""
Pydantic schemas for signup, login and profile.
"""
from typing import Optional
from pydantic import BaseModel, ConfigDict


class SignupRequest(BaseModel):
     """Request body for POST /signup."""
     name: Optional[str] = None
     email: Optional[str] = None
     password: Optional[str] = None
     phone: Optional[str] = None
     address: Optional[str] = None

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "name": "Asha Rao",
                    "email": "asha@example.com",
                    "password": "s3cret-pass",
                    "phone": "+91 9000000000",
                    "address": "12 MG Road, Pune",
               }
          }
     )


class LoginRequest(BaseModel):
     """Request body for POST /login."""
     email: Optional[str] = None
     password: Optional[str] = None


class MessageResponse(BaseModel):
     message: str


class LoginResponse(BaseModel):
     message: str
     name: Optional[str] = None


class ProfileResponse(BaseModel):
     """Public profile; never includes the password hash."""
     name: Optional[str] = None
     email: str
     phone: Optional[str] = None
     address: Optional[str] = None

     model_config = ConfigDict(from_attributes=True)
