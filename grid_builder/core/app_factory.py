"""Application factory for creating and configuring the FastAPI app."""

from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from grid_builder import __version__
from grid_builder.config import get_settings
from grid_builder.core.lifespan import lifespan
from grid_builder.core.middleware import setup_middleware
from grid_builder.middleware.error_handlers import register_error_handlers
from grid_builder.routers import (
    grids_router,
    health_router,
    products_router,
    templates_router,
    view_router,
)

STATIC_DIR = Path(__file__).parent.parent / "static"


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    settings = get_settings()

    app = FastAPI(
        title="Grid Builder API",
        description="""
        **Grid Builder** - lay out products into rows and save the layout

        ## Storage endpoint
        - `GET /products?ids=prod_001,prod_002` - products by id
        - `GET /templates` - the LEFT / CENTER / RIGHT alignment templates
        - `GET /grids` / `POST /grids` - saved grids

        ## Builder UI
        Open `/?productIds=prod_001,prod_002,prod_003&rows=2` in a browser.
        Products and rows can be dragged; each row holds 1-3 products.

        ## Health
        - `/health` - basic health check
        """,
        version=__version__,
        lifespan=lifespan,
        license_info={
            "name": "MIT",
        },
    )

    setup_middleware(app, settings)
    register_error_handlers(app)

    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    # View routes (HTML page and HTMX fragments)
    app.include_router(view_router.router, tags=["views"])

    app.include_router(health_router.router, tags=["health"])

    # Storage endpoint
    app.include_router(products_router.router, tags=["products"])
    app.include_router(templates_router.router, tags=["templates"])
    app.include_router(grids_router.router, tags=["grids"])

    return app
