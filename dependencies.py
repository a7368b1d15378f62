# dependencies.py
"""
FastAPI dependencies shared by the routers.

Long-lived collaborators (settings, password context, gateway client) are
built at startup and kept on ``app.state``; services are built per request
around the request's database session.
"""
from fastapi import Depends, Request
from sqlalchemy.orm import Session

from config import Settings
from database import get_session
from services import AccountService, VisitService, PaymentService


def get_settings(request: Request) -> Settings:
     return request.app.state.settings


def get_gateway(request: Request):
     return request.app.state.gateway


def get_account_service(request: Request, db: Session = Depends(get_session)) -> AccountService:
     return AccountService(db, request.app.state.pwd_context)


def get_visit_service(db: Session = Depends(get_session)) -> VisitService:
     return VisitService(db)


def get_payment_service(
     db: Session = Depends(get_session),
     gateway=Depends(get_gateway),
     settings: Settings = Depends(get_settings),
) -> PaymentService:
     return PaymentService(db, gateway, settings.razorpay_key_secret)
