# backoffice/dashboard.py
from fastapi import APIRouter, Depends

from .database import Gateway, get_gateway
from .models import Brand, Category, Feedback, Product, User
from .schemas import DashboardStats

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


async def collect_stats(gateway: Gateway) -> DashboardStats:
    return DashboardStats(
        users=await gateway.count(User),
        products=await gateway.count(Product),
        categories=await gateway.count(Category),
        brands=await gateway.count(Brand),
        feedbacks=await gateway.count(Feedback),
    )


@router.get("/stats", response_model=DashboardStats)
async def stats(gateway: Gateway = Depends(get_gateway)):
    """Row counts per entity for the admin header."""
    return await collect_stats(gateway)
