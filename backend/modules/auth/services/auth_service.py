# backend/modules/auth/services/auth_service.py

"""
Registration and login for customers.

Both flows end by issuing an identity token for the customer; nothing is
stored server side, so "logging out" is simply discarding the token.
"""

from typing import Tuple
import logging

from sqlalchemy.orm import Session

from core.auth import verify_password
from core.exceptions import InvalidCredentialError
from core.token_codec import IdentityTokenCodec
from modules.customers.models.customer_models import Customer
from modules.customers.schemas.customer_schemas import CustomerCreate
from modules.customers.services.customer_service import CustomerService
from ..schemas.auth_schemas import LoginRequest, RegisterRequest

logger = logging.getLogger(__name__)

INVALID_LOGIN_MESSAGE = "Invalid email or password"


class AuthService:
    def __init__(self, db: Session, codec: IdentityTokenCodec):
        self.customers = CustomerService(db)
        self.codec = codec

    def register(self, payload: RegisterRequest) -> Tuple[Customer, str]:
        """Create a customer and return it with a token; duplicate email raises 409"""
        customer = self.customers.create_customer(
            CustomerCreate(
                name=payload.name,
                email=payload.email,
                password=payload.password,
                birth_date=payload.birth_date,
            )
        )
        token = self.codec.issue(customer.id, customer.email)
        logger.info(f"Registered customer {customer.id}")
        return customer, token

    def login(self, payload: LoginRequest) -> Tuple[Customer, str]:
        """Check credentials and return the customer with a new token"""
        customer = self.customers.get_customer_by_email(payload.email)
        if customer is None or not verify_password(
            payload.password, customer.password_hash
        ):
            logger.warning(f"Failed login attempt for {payload.email}")
            raise InvalidCredentialError(INVALID_LOGIN_MESSAGE)

        token = self.codec.issue(customer.id, customer.email)
        logger.info(f"Customer {customer.id} logged in")
        return customer, token
