# backend/modules/sales/models/__init__.py

from .sale_models import Sale

__all__ = ["Sale"]
