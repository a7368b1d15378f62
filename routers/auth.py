# routers/auth.py
"""
Account API: signup, login and profile lookup.

Login answers with the display name only; no session token is issued.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from dependencies import get_account_service
from schemas.account import (
     SignupRequest,
     LoginRequest,
     MessageResponse,
     LoginResponse,
     ProfileResponse,
)
from services import AccountService

router = APIRouter(tags=["accounts"])


@router.post("/signup", response_model=MessageResponse, summary="Create an account")
def signup(
     body: SignupRequest,
     accounts: AccountService = Depends(get_account_service),
):
     accounts.register(
          name=body.name,
          email=body.email,
          password=body.password,
          phone=body.phone,
          address=body.address,
     )
     return MessageResponse(message="Account created successfully!")


@router.post("/login", response_model=LoginResponse, summary="Log in with email and password")
def login(
     body: LoginRequest,
     accounts: AccountService = Depends(get_account_service),
):
     account = accounts.authenticate(body.email, body.password)
     return LoginResponse(message="Login successful", name=account.name)


@router.get("/user/profile", response_model=ProfileResponse, summary="Fetch a user profile by email")
def get_profile(
     email: Optional[str] = Query(None, description="Email of the account"),
     accounts: AccountService = Depends(get_account_service),
):
     account = accounts.fetch_profile(email)
     return ProfileResponse.model_validate(account)
