"""
Standard API Response Models

Provides one response envelope for all API endpoints. Every body has a
``status`` tag (``success`` / ``fail`` / ``error``) and a human readable
``message``; successful responses carry ``data``, failed ones carry an
``error_code`` and optionally ``errors`` / ``details``.
"""

from decimal import Decimal
from typing import Annotated, Any, Dict, Generic, List, Literal, Optional, TypeVar

from pydantic import BaseModel, Field, PlainSerializer


T = TypeVar("T")

# Exact Decimal inside the application, plain JSON number on the wire
MoneyAmount = Annotated[
    Decimal, PlainSerializer(float, return_type=float, when_used="json")
]


class ResponseEnvelope(BaseModel, Generic[T]):
    """
    Standard success envelope

    Usage:
        return ResponseEnvelope[CustomerData](message="...", data=CustomerData(...))
    """

    status: Literal["success"] = Field(default="success", description="Outcome tag")
    message: str = Field(description="Human-readable status message")
    data: Optional[T] = Field(None, description="Response payload")


class ErrorEnvelope(BaseModel):
    """Standard failure envelope (documentation model for OpenAPI)"""

    status: Literal["fail", "error"] = Field(
        description="'fail' for client errors, 'error' for server faults"
    )
    message: str
    error_code: str = Field(description="Error code for programmatic handling")
    details: Optional[Dict[str, Any]] = None
    errors: Optional[List[Dict[str, str]]] = None


def error_envelope(
    status_code: int,
    message: str,
    error_code: str,
    details: Optional[Dict[str, Any]] = None,
    errors: Optional[List[Dict[str, str]]] = None,
) -> Dict[str, Any]:
    """Build the JSON body of a failed response"""
    body: Dict[str, Any] = {
        "status": "fail" if status_code < 500 else "error",
        "message": message,
        "error_code": error_code,
    }
    if details:
        body["details"] = details
    if errors:
        body["errors"] = errors
    return body
