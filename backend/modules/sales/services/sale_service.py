# backend/modules/sales/services/sale_service.py

from datetime import datetime, timezone
from typing import Optional
import logging

from sqlalchemy.orm import Session

from core.auth import require_identity
from core.auth_context import AuthenticatedIdentity
from ..models.sale_models import Sale
from ..schemas.sale_schemas import SaleCreate
from .sales_ledger import SalesLedger


logger = logging.getLogger(__name__)


class SaleService:
    """Records sales on behalf of the authenticated customer"""

    def __init__(self, db: Session):
        self.db = db
        self.ledger = SalesLedger(db)

    def record_sale(
        self, identity: Optional[AuthenticatedIdentity], sale_data: SaleCreate
    ) -> Sale:
        """Create a sale owned by the token's customer; sale_date defaults to today (UTC)"""
        identity = require_identity(identity)

        sale_date = sale_data.sale_date or datetime.now(timezone.utc).date()
        sale = self.ledger.insert(
            customer_id=identity.customer_id,
            sale_date=sale_date,
            value=sale_data.value,
        )

        logger.info(f"Recorded sale {sale.id} for customer {identity.customer_id}")
        return sale
