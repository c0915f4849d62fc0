# backend/modules/sales/services/sales_ledger.py

"""
Sales ledger: the append-only record of sale events and the grouped
aggregate queries the statistics layer is built on.

Money columns are read back as ``Decimal`` (see ``core.types.Money``), so
every sum and average in here stays in exact decimal space.
"""

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import List, Optional, Union

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from core.exceptions import InternalFaultError, NotFoundError
from ..models.sale_models import Sale

logger = logging.getLogger(__name__)


class AggregateOp(str, Enum):
    """Per-customer aggregate used to rank customers"""

    SUM = "sum"
    AVG = "avg"
    COUNT = "count"


@dataclass(frozen=True)
class DailyTotal:
    day: date
    total: Decimal


@dataclass(frozen=True)
class CustomerAggregate:
    customer_id: str
    result: Union[Decimal, int]


class SalesLedger:
    """Persistence gateway for sales with tenant-scoped and global groupings"""

    def __init__(self, db: Session):
        self.db = db

    def insert(self, customer_id: str, sale_date: date, value: Decimal) -> Sale:
        """Append a sale owned by ``customer_id``"""
        if value <= 0:
            # Schemas reject this before it gets here
            raise ValueError("Sale value must be positive")

        sale = Sale(customer_id=customer_id, sale_date=sale_date, value=value)
        self.db.add(sale)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            logger.warning(f"Rejected sale for unknown customer {customer_id}")
            raise NotFoundError("Customer not found")
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Database error while recording sale: {e}")
            raise InternalFaultError()

        self.db.refresh(sale)
        return sale

    def group_by_day(self, customer_id: str) -> List[DailyTotal]:
        """Sum of ``customer_id``'s sales per ``sale_date``, ascending by day"""
        try:
            rows = (
                self.db.query(
                    Sale.sale_date.label("day"),
                    func.sum(Sale.value).label("total"),
                )
                .filter(Sale.customer_id == customer_id)
                .group_by(Sale.sale_date)
                .order_by(Sale.sale_date.asc())
                .all()
            )
        except SQLAlchemyError as e:
            logger.error(f"Error grouping sales by day: {e}")
            raise InternalFaultError()

        return [DailyTotal(day=row.day, total=row.total) for row in rows]

    def group_by_customer(
        self, op: AggregateOp, limit: Optional[int] = None
    ) -> List[CustomerAggregate]:
        """
        Rank customers by an aggregate over all of their sales.

        Rows are ordered by the aggregate descending; ties are broken by
        customer id ascending so repeated calls return the same order.
        Customers without sales have no group and therefore never appear.
        """
        total = func.sum(Sale.value).label("total")
        purchases = func.count(Sale.id).label("purchases")
        ranking = {
            AggregateOp.SUM: total,
            AggregateOp.AVG: func.avg(Sale.value),
            AggregateOp.COUNT: purchases,
        }[op]

        query = (
            self.db.query(Sale.customer_id, total, purchases)
            .group_by(Sale.customer_id)
            .order_by(ranking.desc(), Sale.customer_id.asc())
        )
        if limit is not None:
            query = query.limit(limit)

        try:
            rows = query.all()
        except SQLAlchemyError as e:
            logger.error(f"Error grouping sales by customer ({op.value}): {e}")
            raise InternalFaultError()

        return [
            CustomerAggregate(customer_id=row.customer_id, result=self._result(op, row))
            for row in rows
        ]

    @staticmethod
    def _result(op: AggregateOp, row) -> Union[Decimal, int]:
        if op is AggregateOp.SUM:
            return row.total
        if op is AggregateOp.COUNT:
            return int(row.purchases)
        # Exact mean; SQL AVG is only used for ordering
        return row.total / row.purchases
