# backoffice/main.py
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi
from fastapi.staticfiles import StaticFiles
from loguru import logger

from . import brands, categories, dashboard, feedbacks, pages, products, users
from .config import Settings, configure_logging
from .database import Gateway
from .errors import register_error_handlers

STATIC_DIR = Path(__file__).resolve().parent / "static"

TAGS = [
    {"name": "users", "description": "Store customers; a user writes feedbacks"},
    {"name": "products", "description": "Catalogue items, each in one category"},
    {"name": "categories", "description": "Product categories"},
    {"name": "brands", "description": "Brands"},
    {"name": "feedbacks", "description": "Product reviews rated 0-5"},
    {"name": "dashboard", "description": "Admin dashboard summary"},
]


def create_app(settings: Optional[Settings] = None, gateway: Optional[Gateway] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    gateway = gateway or Gateway(settings.database_url, echo=settings.db_echo)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await gateway.open()
        yield
        await gateway.close()

    app = FastAPI(
        title=settings.title,
        description="CRUD API and admin dashboard for users, products, categories, brands and feedbacks",
        version=settings.version,
        lifespan=lifespan,
    )
    app.state.gateway = gateway
    app.state.settings = settings

    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    # ✅ CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    # ✅ Роутеры
    app.include_router(users.router)
    app.include_router(products.router)
    app.include_router(categories.router)
    app.include_router(brands.router)
    app.include_router(feedbacks.router)
    app.include_router(dashboard.router)
    app.include_router(pages.router)

    @app.get("/health", include_in_schema=False)
    async def health():
        return {"status": "ok"}

    def custom_openapi():
        if app.openapi_schema:
            return app.openapi_schema
        schema = get_openapi(
            title=app.title,
            version=app.version,
            description=app.description,
            routes=app.routes,
            tags=TAGS,
            servers=[{"url": settings.server_url, "description": "Development server"}],
        )
        app.openapi_schema = schema
        return app.openapi_schema

    app.openapi = custom_openapi

    @app.get("/api/docs", include_in_schema=False)
    async def api_docs(request: Request):
        return request.app.openapi()

    return app


def run() -> None:
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    logger.info("Starting {} v{}", settings.title, settings.version)
    uvicorn.run("backoffice.main:create_app", factory=True, host="0.0.0.0", port=8000)


if __name__ == "__main__":
    run()
