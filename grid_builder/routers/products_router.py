"""Product lookup routes."""

from fastapi import APIRouter, Depends, Query

from grid_builder.dependencies import get_grid_store
from grid_builder.models import ErrorResponse, Product
from grid_builder.protocols import GridStoreProtocol
from grid_builder.services import grid_service

router = APIRouter()


@router.get(
    "/products",
    response_model=list[Product],
    summary="Get products by id",
    description="""
    Returns the catalog products matching a comma-separated id list.

    Unknown ids are silently omitted.
    """,
    responses={
        200: {
            "description": "Matching products",
            "content": {
                "application/json": {
                    "example": [
                        {
                            "id": "prod_001",
                            "name": "Blue Jean",
                            "image": "https://images.unsplash.com/photo-1542272604-787c3835535d?w=400",
                            "price": {"amount": 36.87, "currency": "EUR"},
                        }
                    ]
                }
            },
        },
        400: {"model": ErrorResponse, "description": "Missing ids parameter"},
    },
)
async def get_products(
    ids: str | None = Query(default=None, description="Comma-separated product ids"),
    store: GridStoreProtocol = Depends(get_grid_store),
):
    """Get products by id."""
    return await grid_service.get_products(store, ids)
