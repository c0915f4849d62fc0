# backend/modules/sales/models/sale_models.py

from sqlalchemy import CheckConstraint, Column, Date, DateTime, ForeignKey, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from core.database import Base
from core.mixins import UUIDPrimaryKeyMixin
from core.types import Money


class Sale(Base, UUIDPrimaryKeyMixin):
    """A single, immutable sale event in the ledger"""
    __tablename__ = "sales"

    customer_id = Column(
        String(36),
        ForeignKey("customers.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    sale_date = Column(Date, nullable=False, index=True)
    value = Column(Money, nullable=False)
    created_at = Column(DateTime, default=func.now(), nullable=False)

    customer = relationship("Customer", back_populates="sales")

    __table_args__ = (
        CheckConstraint("value > 0", name="ck_sales_value_positive"),
    )

    def __repr__(self):
        return f"<Sale(id={self.id}, customer_id={self.customer_id}, value={self.value})>"
