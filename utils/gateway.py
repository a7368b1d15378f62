# utils/gateway.py
"""
Razorpay REST client.

Only the calls the booking flow needs: create and fetch an order, fetch a
payment. Any transport error, timeout or non-2xx answer is raised as
GatewayError.

Timeouts: ``timeout`` is handed to requests, which applies it to the
connect and to each socket read separately, not to the call as a whole.
A gateway that keeps sending a byte just under every ``timeout`` seconds
can hold a call open longer than ``timeout``. Razorpay answers these calls
with small single-chunk JSON bodies, so in practice one call waits at most
about one connect plus one read timeout.
"""
import logging
from typing import Optional

import requests

from services.errors import GatewayError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.razorpay.com/v1"
DEFAULT_TIMEOUT = 20.0


class RazorpayClient:

     def __init__(
          self,
          key_id: Optional[str],
          key_secret: Optional[str],
          base_url: str = DEFAULT_BASE_URL,
          timeout: float = DEFAULT_TIMEOUT,
          session: Optional[requests.Session] = None,
     ):
          self.key_id = key_id
          self.key_secret = key_secret
          self.base_url = base_url.rstrip("/")
          self.timeout = timeout
          self.session = session or requests.Session()
          if key_id and key_secret:
               self.session.auth = (key_id, key_secret)

     @property
     def configured(self) -> bool:
          return bool(self.key_id and self.key_secret)

     def _request(self, method: str, path: str, **kwargs) -> dict:
          if not self.configured:
               raise GatewayError("Payment gateway is not configured")

          url = f"{self.base_url}{path}"
          try:
               response = self.session.request(method, url, timeout=self.timeout, **kwargs)
          except requests.Timeout as e:
               logger.error("Razorpay %s %s timed out after %ss", method, path, self.timeout)
               raise GatewayError() from e
          except requests.RequestException as e:
               logger.error("Razorpay %s %s failed: %s", method, path, e)
               raise GatewayError() from e

          if response.status_code not in (200, 201):
               logger.error("Razorpay %s %s returned %s: %s", method, path, response.status_code, response.text)
               raise GatewayError()

          try:
               return response.json()
          except ValueError as e:
               logger.error("Razorpay %s %s returned a non-JSON body", method, path)
               raise GatewayError() from e

     def create_order(
          self,
          amount: int,
          currency: str,
          receipt: Optional[str] = None,
          notes: Optional[dict] = None,
     ) -> dict:
          """
          Create an order for ``amount`` (smallest currency unit).

          Returns the gateway's order object, e.g.
          {"id": "order_...", "amount": 50000, "currency": "INR", "status": "created", ...}
          """
          payload = {"amount": amount, "currency": currency}
          if receipt:
               payload["receipt"] = receipt
          if notes:
               payload["notes"] = notes
          return self._request("POST", "/orders", json=payload)

     def fetch_order(self, order_id: str) -> dict:
          """Return the gateway's order object for an order created earlier."""
          return self._request("GET", f"/orders/{order_id}")

     def fetch_payment(self, payment_id: str) -> dict:
          """Return the gateway's payment object (amount, currency, method, order_id, status)."""
          return self._request("GET", f"/payments/{payment_id}")

     def close(self) -> None:
          self.session.close()
