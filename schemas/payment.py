# schemas/payment.py
"""
Pydantic schemas for order creation and payment verification.
"""
from typing import Optional
from pydantic import BaseModel, ConfigDict


class CreateOrderRequest(BaseModel):
     """Request body for POST /create-order. May be empty."""
     visitId: Optional[str] = None


class CreateOrderResponse(BaseModel):
     success: bool = True
     order: dict


class PaymentVerifyRequest(BaseModel):
     """Callback payload the client forwards after checkout completes."""
     razorpay_order_id: Optional[str] = None
     razorpay_payment_id: Optional[str] = None
     razorpay_signature: Optional[str] = None
     visitId: Optional[str] = None

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "razorpay_order_id": "order_NXa1b2c3d4e5f6",
                    "razorpay_payment_id": "pay_NXa9z8y7x6w5v4",
                    "razorpay_signature": "5f1c...e9",
                    "visitId": "7d3c7a3e-2b1f-4c84-9a39-5b0f7e1f2a10",
               }
          }
     )


class PaymentVerifyResponse(BaseModel):
     success: bool = True
     paymentId: str
     visitId: Optional[str] = None
