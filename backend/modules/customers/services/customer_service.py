# backend/modules/customers/services/customer_service.py

from typing import List, Optional
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from core.auth import get_password_hash
from core.auth_context import AuthenticatedIdentity
from core.exceptions import (
    DuplicateEmailError,
    ForbiddenError,
    InternalFaultError,
    NotFoundError,
)
from ..models.customer_models import Customer
from ..schemas.customer_schemas import (
    CustomerCreate,
    CustomerPublicProfile,
    CustomerUpdate,
)


logger = logging.getLogger(__name__)


class CustomerService:
    """Customer directory: profile lookups and profile management"""

    def __init__(self, db: Session):
        self.db = db

    def create_customer(self, customer_data: CustomerCreate) -> Customer:
        """Create a new customer profile with a hashed password"""
        if self.get_customer_by_email(customer_data.email):
            raise DuplicateEmailError(customer_data.email)

        customer = Customer(
            name=customer_data.name,
            email=customer_data.email,
            password_hash=get_password_hash(customer_data.password),
            birth_date=customer_data.birth_date,
        )
        self.db.add(customer)
        self._commit(email=customer_data.email)
        self.db.refresh(customer)

        logger.info(f"Created new customer: {customer.id}")
        return customer

    def get_customer(self, customer_id: str) -> Customer:
        """Get customer by ID or raise NotFoundError"""
        customer = self.db.query(Customer).filter(Customer.id == customer_id).first()
        if customer is None:
            raise NotFoundError("Customer not found")
        return customer

    def get_customer_by_email(self, email: str) -> Optional[Customer]:
        """Get customer by email (exact, case-sensitive match)"""
        return self.db.query(Customer).filter(Customer.email == email).first()

    def find_public_profile(self, customer_id: str) -> Optional[CustomerPublicProfile]:
        """Public display fields for a customer, or None when unknown"""
        row = (
            self.db.query(Customer.id, Customer.name, Customer.email)
            .filter(Customer.id == customer_id)
            .first()
        )
        if row is None:
            return None
        return CustomerPublicProfile(id=row.id, name=row.name, email=row.email)

    def list_customers(self) -> List[Customer]:
        return self.db.query(Customer).order_by(Customer.created_at, Customer.id).all()

    def update_customer(
        self,
        identity: AuthenticatedIdentity,
        customer_id: str,
        update_data: CustomerUpdate,
    ) -> Customer:
        """Update name, email or birth date of the caller's own profile"""
        customer = self.get_customer(customer_id)
        self._ensure_owner(identity, customer)

        changes = update_data.model_dump(exclude_unset=True, exclude_none=True)
        new_email = changes.get("email")
        if new_email and new_email != customer.email:
            existing = self.get_customer_by_email(new_email)
            if existing is not None and existing.id != customer.id:
                raise DuplicateEmailError(new_email)

        for field, value in changes.items():
            setattr(customer, field, value)

        self._commit(email=new_email)
        self.db.refresh(customer)

        logger.info(f"Updated customer {customer.id}: {sorted(changes)}")
        return customer

    def delete_customer(self, identity: AuthenticatedIdentity, customer_id: str) -> None:
        """Delete the caller's own profile together with its sales"""
        customer = self.get_customer(customer_id)
        self._ensure_owner(identity, customer)

        self.db.delete(customer)
        self._commit()
        logger.info(f"Deleted customer {customer_id}")

    @staticmethod
    def _ensure_owner(identity: AuthenticatedIdentity, customer: Customer) -> None:
        if identity.customer_id != customer.id:
            logger.warning(
                f"Customer {identity.customer_id} attempted to modify customer {customer.id}"
            )
            raise ForbiddenError("Customers may only modify their own profile")

    def _commit(self, email: Optional[str] = None) -> None:
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            # The only unique constraint on customers is the email index
            raise DuplicateEmailError(email)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Database error while saving customer: {e}")
            raise InternalFaultError()
