# backend/modules/sales/schemas/sale_schemas.py

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from core.response_models import MoneyAmount
from core.validation import IsoDate
from modules.customers.schemas.customer_schemas import CustomerPublicProfile


class SaleCreate(BaseModel):
    """Schema for recording a sale; the owner always comes from the token"""

    model_config = ConfigDict(extra="forbid")

    sale_date: Optional[IsoDate] = None
    value: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)


class Sale(BaseModel):
    """Schema for sale response"""

    model_config = ConfigDict(from_attributes=True)

    id: str
    customer_id: str
    sale_date: date
    value: MoneyAmount
    created_at: datetime
    customer: Optional[CustomerPublicProfile] = None


class SaleData(BaseModel):
    sale: Sale


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class DailySalesTotal(_CamelModel):
    """Sum of one customer's sales on a single calendar day"""

    date: str = Field(description="ISO 8601 calendar date")
    total_sales: MoneyAmount = Field(alias="totalSales")


class TopVolumeCustomer(_CamelModel):
    customer: Optional[CustomerPublicProfile]
    total_sales_volume: MoneyAmount = Field(alias="totalSalesVolume")


class TopAverageCustomer(_CamelModel):
    customer: Optional[CustomerPublicProfile]
    average_sale_value: MoneyAmount = Field(alias="averageSaleValue")


class TopFrequencyCustomer(_CamelModel):
    customer: Optional[CustomerPublicProfile]
    purchase_count: int = Field(alias="purchaseCount")


class DailyStatisticsData(BaseModel):
    statistics: List[DailySalesTotal]


class TopVolumeData(_CamelModel):
    top_customer: Optional[TopVolumeCustomer] = Field(alias="topCustomer")


class TopAverageData(_CamelModel):
    top_customer: Optional[TopAverageCustomer] = Field(alias="topCustomer")


class TopFrequencyData(_CamelModel):
    top_customer: Optional[TopFrequencyCustomer] = Field(alias="topCustomer")
