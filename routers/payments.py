# routers/payments.py
"""
Payment API.

POST /create-order: create a gateway order for the visit booking fee.
POST /verify-payment: verify the gateway's signed callback, record the
payment in the ledger and mark the visit PAID.
"""
from typing import Optional

from fastapi import APIRouter, Depends

from config import Settings
from dependencies import get_payment_service, get_settings
from schemas.payment import (
     CreateOrderRequest,
     CreateOrderResponse,
     PaymentVerifyRequest,
     PaymentVerifyResponse,
)
from services import PaymentService

router = APIRouter(tags=["payments"])


@router.post("/create-order", response_model=CreateOrderResponse, summary="Create a payment order")
def create_order(
     body: Optional[CreateOrderRequest] = None,
     payments: PaymentService = Depends(get_payment_service),
     settings: Settings = Depends(get_settings),
):
     """
     Amount and currency come from configuration (VISIT_FEE_AMOUNT,
     PAYMENT_CURRENCY); the gateway's order object is returned as is.
     """
     visit_id = body.visitId if body else None
     order = payments.create_payment_order(
          settings.visit_fee_amount,
          settings.payment_currency,
          visit_id=visit_id,
     )
     return CreateOrderResponse(success=True, order=order)


@router.post("/verify-payment", response_model=PaymentVerifyResponse, summary="Verify a payment callback")
def verify_payment(
     body: PaymentVerifyRequest,
     payments: PaymentService = Depends(get_payment_service),
):
     entry = payments.verify_payment(
          order_id=body.razorpay_order_id,
          payment_id=body.razorpay_payment_id,
          signature=body.razorpay_signature,
          visit_id=body.visitId,
     )
     return PaymentVerifyResponse(success=True, paymentId=entry.payment_id, visitId=entry.visit_id)
