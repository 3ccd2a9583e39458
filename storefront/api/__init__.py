# storefront/api/__init__.py
from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from storefront.api.errors import register_error_handlers
from storefront.api.routers import carts, health, products, realtime, views

STATIC_DIR = Path(__file__).resolve().parent.parent / "static"


def register_api(app: FastAPI) -> FastAPI:
    app.include_router(health.router)
    app.include_router(products.router)
    app.include_router(carts.router)
    app.include_router(realtime.router)
    app.include_router(views.router)

    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")
    register_error_handlers(app)
    return app
