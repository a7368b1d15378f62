# models/account.py
from sqlalchemy import Column, Integer, String, DateTime, UniqueConstraint, func
from .base import Base

# SQL Server's default collation is case-insensitive; email is a case-sensitive key
EMAIL_TYPE = String(255).with_variant(String(255, collation="Latin1_General_CS_AS"), "mssql")


class Account(Base):
     """
     Account model - site users who sign up with email and password.
     Only the bcrypt hash of the password is ever stored.
     """
     __tablename__ = "accounts"
     __table_args__ = (
          UniqueConstraint("email", name="uq_accounts_email"),
     )

     id = Column(Integer, primary_key=True, autoincrement=True)
     email = Column(EMAIL_TYPE, nullable=False, index=True)
     password = Column(String(255), nullable=False)
     name = Column(String(255), nullable=True)
     phone = Column(String(50), nullable=True)
     address = Column(String(500), nullable=True)
     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     def __repr__(self):
          return f"<Account(id={self.id}, email='{self.email}')>"
