# services/account_service.py
"""
Account Service - signup, login and profile lookup.

Passwords are hashed with bcrypt (passlib); the plaintext is never stored
or returned. Unknown email and wrong password fail the same way so a login
attempt does not reveal which emails are registered.
"""
import logging
from typing import Optional

from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from models import Account
from services.errors import (
     AlreadyRegistered,
     InvalidCredentials,
     NotFound,
     PersistenceFailure,
     ValidationError,
)

logger = logging.getLogger(__name__)


def build_password_context(rounds: int = 10) -> CryptContext:
     """Bcrypt context; ``rounds`` is the log2 cost factor."""
     return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


class AccountService:
     """Service class for account-related business logic."""

     def __init__(self, db: Session, pwd_context: CryptContext):
          self.db = db
          self.pwd_context = pwd_context

     def _find_by_email(self, email: str) -> Optional[Account]:
          try:
               return self.db.query(Account).filter(Account.email == email).first()
          except SQLAlchemyError as e:
               logger.error("Account lookup failed: %s", e)
               raise PersistenceFailure() from e

     def register(
          self,
          name: Optional[str],
          email: Optional[str],
          password: Optional[str],
          phone: Optional[str] = None,
          address: Optional[str] = None,
     ) -> Account:
          """
          Create an account.

          Raises:
               ValidationError: email or password missing.
               AlreadyRegistered: an account with this exact email exists.
               PersistenceFailure: the account could not be stored.
          """
          if not email or not password:
               raise ValidationError("Email and password are required")

          if self._find_by_email(email) is not None:
               raise AlreadyRegistered()

          account = Account(
               name=name,
               email=email,
               password=self.pwd_context.hash(password),
               phone=phone,
               address=address,
          )
          try:
               self.db.add(account)
               self.db.commit()
          except IntegrityError as e:
               # Lost a race with a concurrent signup for the same email
               self.db.rollback()
               raise AlreadyRegistered() from e
          except SQLAlchemyError as e:
               self.db.rollback()
               logger.error("Signup failed: %s", e)
               raise PersistenceFailure() from e

          logger.info("Account created id=%s", account.id)
          return account

     def authenticate(self, email: Optional[str], password: Optional[str]) -> Account:
          """
          Check a login attempt.

          Raises:
               ValidationError: email or password missing.
               InvalidCredentials: no such email, or the password does not match.
          """
          if not email or not password:
               raise ValidationError("Email and password are required")

          account = self._find_by_email(email)
          if account is None:
               raise InvalidCredentials()

          if not self.pwd_context.verify(password, account.password):
               raise InvalidCredentials()

          return account

     def fetch_profile(self, email: Optional[str]) -> Account:
          if not email:
               raise ValidationError("Email query parameter is required")

          account = self._find_by_email(email)
          if account is None:
               raise NotFound("User not found")
          return account
