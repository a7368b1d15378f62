# services/errors.py
"""
Error kinds raised by the services.

Each kind carries the HTTP status the API layer answers with; the services
themselves never build HTTP responses.
"""


class ServiceError(Exception):
     """Base class for all service-level failures."""
     status_code = 500
     default_message = "Internal server error"

     def __init__(self, message=None):
          self.message = message or self.default_message
          super().__init__(self.message)

     @property
     def kind(self) -> str:
          return type(self).__name__


class ValidationError(ServiceError):
     status_code = 400
     default_message = "Invalid request"


class AuthError(ServiceError):
     status_code = 400
     default_message = "Authentication failed"


class AlreadyRegistered(AuthError):
     default_message = "Email already registered"


class InvalidCredentials(AuthError):
     default_message = "Invalid email or password"


class NotFound(ServiceError):
     status_code = 404
     default_message = "Not found"


class SignatureMismatch(ServiceError):
     status_code = 400
     default_message = "Payment verification failed"


class DuplicatePayment(ServiceError):
     status_code = 409
     default_message = "Payment already recorded"


class VisitAlreadyPaid(DuplicatePayment):
     default_message = "Visit is already paid"


class PersistenceFailure(ServiceError):
     status_code = 500
     default_message = "Storage is temporarily unavailable"


class GatewayError(ServiceError):
     status_code = 500
     default_message = "Payment service is temporarily unavailable"
