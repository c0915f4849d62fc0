# backend/modules/customers/routers/customer_router.py

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from core.auth import get_current_identity
from core.auth_context import AuthenticatedIdentity
from core.database import get_db
from core.response_models import ErrorEnvelope, ResponseEnvelope
from ..schemas.customer_schemas import (
    Customer as CustomerSchema,
    CustomerData,
    CustomerListData,
    CustomerUpdate,
)
from ..services.customer_service import CustomerService


router = APIRouter(
    prefix="/api/customers",
    tags=["customers"],
    responses={401: {"model": ErrorEnvelope}, 404: {"model": ErrorEnvelope}},
)


@router.get("/me", response_model=ResponseEnvelope[CustomerData])
async def get_my_profile(
    db: Session = Depends(get_db),
    identity: AuthenticatedIdentity = Depends(get_current_identity),
):
    """Profile of the customer the bearer token belongs to"""
    customer = CustomerService(db).get_customer(identity.customer_id)
    return ResponseEnvelope[CustomerData](
        message="Customer profile retrieved successfully",
        data=CustomerData(customer=CustomerSchema.model_validate(customer)),
    )


@router.get("", response_model=ResponseEnvelope[CustomerListData])
async def list_customers(
    db: Session = Depends(get_db),
    identity: AuthenticatedIdentity = Depends(get_current_identity),
):
    customers = CustomerService(db).list_customers()
    return ResponseEnvelope[CustomerListData](
        message="Customers retrieved successfully",
        data=CustomerListData(
            results=len(customers),
            customers=[CustomerSchema.model_validate(c) for c in customers],
        ),
    )


@router.get("/{customer_id}", response_model=ResponseEnvelope[CustomerData])
async def get_customer(
    customer_id: str,
    db: Session = Depends(get_db),
    identity: AuthenticatedIdentity = Depends(get_current_identity),
):
    customer = CustomerService(db).get_customer(customer_id)
    return ResponseEnvelope[CustomerData](
        message="Customer retrieved successfully",
        data=CustomerData(customer=CustomerSchema.model_validate(customer)),
    )


@router.put("/{customer_id}", response_model=ResponseEnvelope[CustomerData])
async def update_customer(
    customer_id: str,
    update_data: CustomerUpdate,
    db: Session = Depends(get_db),
    identity: AuthenticatedIdentity = Depends(get_current_identity),
):
    """
    Update the caller's own profile.

    Only `name`, `email` and `birth_date` may be changed; any other field is
    rejected with 400. Updating another customer's profile returns 403.
    """
    customer = CustomerService(db).update_customer(identity, customer_id, update_data)
    return ResponseEnvelope[CustomerData](
        message="Customer updated successfully",
        data=CustomerData(customer=CustomerSchema.model_validate(customer)),
    )


@router.delete("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_customer(
    customer_id: str,
    db: Session = Depends(get_db),
    identity: AuthenticatedIdentity = Depends(get_current_identity),
):
    """Delete the caller's own profile and all of its sales"""
    CustomerService(db).delete_customer(identity, customer_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
