# backoffice/pages.py
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from .dashboard import collect_stats
from .database import Gateway, get_gateway
from .models import Brand, Category, Feedback, Product, User

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
router = APIRouter(include_in_schema=False)

LATEST_REVIEWS = 6


def average_rating(product) -> Optional[float]:
    if not product.feedbacks:
        return None
    return round(sum(f.rating for f in product.feedbacks) / len(product.feedbacks), 1)


@router.get("/")
async def home_page():
    return RedirectResponse(url="/landing")


# Витрина магазина
@router.get("/landing", response_class=HTMLResponse)
async def landing_page(request: Request, category: Optional[str] = None, gateway: Gateway = Depends(get_gateway)):
    categories = await gateway.find_many(Category)
    products = await gateway.find_many(Product, include=("category", "feedbacks"))
    feedbacks = await gateway.find_many(Feedback, include=("author", "product"))

    # unknown or malformed filters show the whole catalogue
    selected = int(category) if category and category.isdigit() else None
    if selected is not None:
        products = [p for p in products if p.category_id == selected]

    ctx = {
        "categories": categories,
        "products": [(p, average_rating(p)) for p in products],
        "feedbacks": list(reversed(feedbacks))[:LATEST_REVIEWS],
        "selected": selected,
    }
    return templates.TemplateResponse(request, "landing.html", ctx)


@router.get("/admin", response_class=HTMLResponse)
async def admin_page(request: Request, gateway: Gateway = Depends(get_gateway)):
    ctx = {
        "stats": await collect_stats(gateway),
        "users": await gateway.find_many(User),
        "categories": await gateway.find_many(Category),
        "brands": await gateway.find_many(Brand),
        "products": await gateway.find_many(Product, include=("category",)),
        "feedbacks": await gateway.find_many(Feedback, include=("author", "product")),
    }
    return templates.TemplateResponse(request, "admin.html", ctx)
