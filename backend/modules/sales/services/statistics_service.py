# backend/modules/sales/services/statistics_service.py

"""
Aggregation engine behind the sales statistics endpoints.

* Daily totals are always scoped to the caller's own sales.
* The three "top customer" rankings deliberately scan the whole ledger and
  act as a cross-customer leaderboard; they still require an authenticated
  caller but never filter by that caller.

All amounts stay ``Decimal`` here; conversion to JSON numbers happens in
the response schemas.
"""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from core.auth import require_identity
from core.auth_context import AuthenticatedIdentity
from modules.customers.services.customer_service import CustomerService
from ..schemas.sale_schemas import (
    DailySalesTotal,
    TopAverageCustomer,
    TopFrequencyCustomer,
    TopVolumeCustomer,
)
from .sales_ledger import AggregateOp, CustomerAggregate, SalesLedger

logger = logging.getLogger(__name__)


class StatisticsService:
    """Read-only grouped statistics over the sales ledger"""

    def __init__(self, db: Session):
        self.db = db
        self.ledger = SalesLedger(db)
        self.directory = CustomerService(db)

    def daily_statistics(
        self, identity: Optional[AuthenticatedIdentity]
    ) -> List[DailySalesTotal]:
        """Caller's sales summed per day, oldest day first"""
        identity = require_identity(identity)

        return [
            DailySalesTotal(date=entry.day.isoformat(), total_sales=entry.total)
            for entry in self.ledger.group_by_day(identity.customer_id)
        ]

    def top_by_volume(
        self, identity: Optional[AuthenticatedIdentity]
    ) -> Optional[TopVolumeCustomer]:
        """Customer with the highest summed sales value, or None on an empty ledger"""
        require_identity(identity)

        top = self._top(AggregateOp.SUM)
        if top is None:
            return None
        return TopVolumeCustomer(
            customer=self.directory.find_public_profile(top.customer_id),
            total_sales_volume=top.result,
        )

    def top_by_average(
        self, identity: Optional[AuthenticatedIdentity]
    ) -> Optional[TopAverageCustomer]:
        """Customer with the highest mean sale value among customers with sales"""
        require_identity(identity)

        top = self._top(AggregateOp.AVG)
        if top is None:
            return None
        return TopAverageCustomer(
            customer=self.directory.find_public_profile(top.customer_id),
            average_sale_value=top.result,
        )

    def top_by_frequency(
        self, identity: Optional[AuthenticatedIdentity]
    ) -> Optional[TopFrequencyCustomer]:
        """Customer with the most recorded sales"""
        require_identity(identity)

        top = self._top(AggregateOp.COUNT)
        if top is None:
            return None
        return TopFrequencyCustomer(
            customer=self.directory.find_public_profile(top.customer_id),
            purchase_count=top.result,
        )

    def _top(self, op: AggregateOp) -> Optional[CustomerAggregate]:
        ranked = self.ledger.group_by_customer(op, limit=1)
        if not ranked:
            logger.debug(f"No sales recorded; no top customer by {op.value}")
            return None
        return ranked[0]
