# backend/modules/customers/models/customer_models.py

from sqlalchemy import Column, Date, String
from sqlalchemy.orm import relationship

from core.database import Base
from core.mixins import TimestampMixin, UUIDPrimaryKeyMixin


class Customer(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """Registered customer; owns the sales recorded with their token"""
    __tablename__ = "customers"

    name = Column(String(255), nullable=False)
    # Unique index: duplicate registrations surface as DuplicateEmailError
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    birth_date = Column(Date, nullable=True)

    sales = relationship(
        "Sale",
        back_populates="customer",
        cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<Customer(id={self.id}, email='{self.email}')>"
