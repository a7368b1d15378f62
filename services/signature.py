# services/signature.py
"""
Payment callback signatures.

The gateway signs a completed payment as the hex HMAC-SHA256 of
``order_id|payment_id`` keyed with the merchant's key secret. The secret
never leaves the server; it is only used to recompute the signature here.
"""
import hashlib
import hmac


def compute_payment_signature(order_id: str, payment_id: str, secret: str) -> str:
     """Return the 64-char hex signature the gateway issues for this payment."""
     payload = f"{order_id}|{payment_id}"
     return hmac.new(secret.encode("utf-8"), payload.encode("utf-8"), hashlib.sha256).hexdigest()


def signature_matches(order_id: str, payment_id: str, signature: str, secret: str) -> bool:
     """Constant-time comparison of a supplied signature with the expected one."""
     expected = compute_payment_signature(order_id, payment_id, secret)
     return hmac.compare_digest(expected.encode("utf-8"), signature.encode("utf-8"))
