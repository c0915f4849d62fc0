# backend/modules/sales/tests/conftest.py

from datetime import date
from decimal import Decimal

import pytest

from modules.customers.schemas.customer_schemas import CustomerCreate
from modules.customers.services.customer_service import CustomerService
from modules.sales.services.sales_ledger import SalesLedger


@pytest.fixture
def make_customer(db_session):
    def _make(name: str, email: str):
        return CustomerService(db_session).create_customer(
            CustomerCreate(
                name=name,
                email=email,
                password="secret1",
                birth_date=date(1990, 1, 1),
            )
        )

    return _make


@pytest.fixture
def alice(make_customer):
    return make_customer("Alice", "alice@example.com")


@pytest.fixture
def bob(make_customer):
    return make_customer("Bob Builder", "bob@example.com")


@pytest.fixture
def ledger(db_session):
    return SalesLedger(db_session)


@pytest.fixture
def record(ledger):
    """Insert a sale directly into the ledger."""

    def _record(customer, value, sale_date=date(2024, 1, 15)):
        return ledger.insert(customer.id, sale_date, Decimal(str(value)))

    return _record
