# backend/modules/customers/models/__init__.py

from .customer_models import Customer

__all__ = ["Customer"]
