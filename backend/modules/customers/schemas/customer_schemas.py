# backend/modules/customers/schemas/customer_schemas.py

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from core.validation import IsoDate


class CustomerPublicProfile(BaseModel):
    """Display fields used to decorate statistics results"""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str


class Customer(CustomerPublicProfile):
    """Schema for customer response (never includes the password hash)"""

    birth_date: Optional[date] = None
    created_at: datetime
    updated_at: datetime


class CustomerCreate(BaseModel):
    """Schema used internally when registering a customer"""

    name: str = Field(..., min_length=3, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    birth_date: IsoDate


class CustomerUpdate(BaseModel):
    """Schema for updating a customer; unknown fields are rejected"""

    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(None, min_length=3, max_length=255)
    email: Optional[EmailStr] = None
    birth_date: Optional[IsoDate] = None


class CustomerData(BaseModel):
    customer: Customer


class CustomerListData(BaseModel):
    results: int
    customers: List[Customer]
