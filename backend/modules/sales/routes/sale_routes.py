# backend/modules/sales/routes/sale_routes.py

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from core.auth import get_current_identity
from core.auth_context import AuthenticatedIdentity
from core.database import get_db
from core.response_models import ErrorEnvelope, ResponseEnvelope
from ..schemas.sale_schemas import (
    DailyStatisticsData,
    Sale as SaleSchema,
    SaleCreate,
    SaleData,
    TopAverageData,
    TopFrequencyData,
    TopVolumeData,
)
from ..services.sale_service import SaleService
from ..services.statistics_service import StatisticsService


router = APIRouter(
    prefix="/api/sales",
    tags=["Sales"],
    responses={401: {"model": ErrorEnvelope}, 400: {"model": ErrorEnvelope}},
)


@router.post(
    "",
    response_model=ResponseEnvelope[SaleData],
    status_code=status.HTTP_201_CREATED,
)
async def create_sale(
    sale_data: SaleCreate,
    db: Session = Depends(get_db),
    identity: AuthenticatedIdentity = Depends(get_current_identity),
):
    """
    Record a sale for the authenticated customer.

    The owner is always the customer in the bearer token; the body cannot
    name another customer.
    """
    sale = SaleService(db).record_sale(identity, sale_data)

    return ResponseEnvelope[SaleData](
        message="Sale recorded successfully",
        data=SaleData(sale=SaleSchema.model_validate(sale)),
    )


@router.get("/statistics/daily", response_model=ResponseEnvelope[DailyStatisticsData])
async def get_daily_sales_statistics(
    db: Session = Depends(get_db),
    identity: AuthenticatedIdentity = Depends(get_current_identity),
):
    """Total sales per day for the authenticated customer, oldest first"""
    statistics = StatisticsService(db).daily_statistics(identity)
    return ResponseEnvelope[DailyStatisticsData](
        message="Daily sales statistics retrieved successfully",
        data=DailyStatisticsData(statistics=statistics),
    )


@router.get(
    "/statistics/top-volume-customer", response_model=ResponseEnvelope[TopVolumeData]
)
async def get_top_volume_customer(
    db: Session = Depends(get_db),
    identity: AuthenticatedIdentity = Depends(get_current_identity),
):
    """Customer with the highest total sales volume across all customers"""
    top_customer = StatisticsService(db).top_by_volume(identity)
    return ResponseEnvelope[TopVolumeData](
        message="Top volume customer retrieved successfully",
        data=TopVolumeData(top_customer=top_customer),
    )


@router.get(
    "/statistics/top-avg-value-customer", response_model=ResponseEnvelope[TopAverageData]
)
async def get_top_average_value_customer(
    db: Session = Depends(get_db),
    identity: AuthenticatedIdentity = Depends(get_current_identity),
):
    """Customer with the highest average sale value across all customers"""
    top_customer = StatisticsService(db).top_by_average(identity)
    return ResponseEnvelope[TopAverageData](
        message="Top average value customer retrieved successfully",
        data=TopAverageData(top_customer=top_customer),
    )


@router.get(
    "/statistics/top-frequency-customer",
    response_model=ResponseEnvelope[TopFrequencyData],
)
async def get_top_frequency_customer(
    db: Session = Depends(get_db),
    identity: AuthenticatedIdentity = Depends(get_current_identity),
):
    """Customer with the most purchases across all customers"""
    top_customer = StatisticsService(db).top_by_frequency(identity)
    return ResponseEnvelope[TopFrequencyData](
        message="Top frequency customer retrieved successfully",
        data=TopFrequencyData(top_customer=top_customer),
    )
