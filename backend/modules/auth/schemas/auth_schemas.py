# backend/modules/auth/schemas/auth_schemas.py

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from core.validation import IsoDate
from modules.customers.schemas.customer_schemas import Customer


class RegisterRequest(BaseModel):
    """Registration payload"""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    name: str = Field(..., min_length=3, max_length=255)
    birth_date: IsoDate = Field(..., alias="birthDate")


class LoginRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    email: EmailStr
    password: str = Field(..., min_length=1)


class AuthData(BaseModel):
    """Customer profile plus a freshly issued bearer token"""

    customer: Customer
    token: str
