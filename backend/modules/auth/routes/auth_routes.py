"""
Authentication routes.

Registration and login both answer with the customer profile and a JWT
bearer token to be sent as ``Authorization: Bearer <token>``.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from core.auth import get_token_codec
from core.database import get_db
from core.response_models import ResponseEnvelope
from core.token_codec import IdentityTokenCodec
from modules.customers.schemas.customer_schemas import Customer as CustomerSchema
from ..schemas.auth_schemas import AuthData, LoginRequest, RegisterRequest
from ..services.auth_service import AuthService


router = APIRouter(prefix="/api/auth", tags=["Authentication"])


@router.post(
    "/register",
    response_model=ResponseEnvelope[AuthData],
    status_code=status.HTTP_201_CREATED,
)
async def register(
    payload: RegisterRequest,
    db: Session = Depends(get_db),
    codec: IdentityTokenCodec = Depends(get_token_codec),
):
    """
    Register a new customer.

    ## Request Body
    - **email**: unique email address
    - **password**: at least 6 characters
    - **name**: at least 3 characters
    - **birthDate**: date as `YYYY-MM-DD`

    Returns 409 when the email is already registered.
    """
    customer, token = AuthService(db, codec).register(payload)
    return ResponseEnvelope[AuthData](
        message="Customer registered successfully",
        data=AuthData(customer=CustomerSchema.model_validate(customer), token=token),
    )


@router.post("/login", response_model=ResponseEnvelope[AuthData])
async def login(
    payload: LoginRequest,
    db: Session = Depends(get_db),
    codec: IdentityTokenCodec = Depends(get_token_codec),
):
    """Authenticate with email and password and receive a bearer token"""
    customer, token = AuthService(db, codec).login(payload)
    return ResponseEnvelope[AuthData](
        message="Login successful",
        data=AuthData(customer=CustomerSchema.model_validate(customer), token=token),
    )
