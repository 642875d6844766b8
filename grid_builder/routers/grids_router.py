"""Saved grid routes."""

from typing import Any

from fastapi import APIRouter, Body, Depends, Request, status
from slowapi import Limiter
from slowapi.util import get_remote_address

from grid_builder.dependencies import get_grid_store
from grid_builder.models import ErrorResponse, Grid
from grid_builder.protocols import GridStoreProtocol
from grid_builder.services import grid_service

router = APIRouter()
limiter = Limiter(key_func=get_remote_address)


@router.get("/grids", response_model=list[Grid], summary="List saved grids")
async def list_grids(store: GridStoreProtocol = Depends(get_grid_store)):
    """Return all saved grids in creation order."""
    return await store.list_grids()


@router.post(
    "/grids",
    response_model=Grid,
    status_code=status.HTTP_201_CREATED,
    summary="Save a grid",
    description="""
    Stores a named grid. Each row references a template id and 1-3 product ids.

    The grid gets a fresh id; rows without an id get one too.

    **Rate Limited:** 30 requests/minute
    """,
    responses={
        201: {
            "description": "Grid saved",
            "content": {
                "application/json": {
                    "example": {
                        "id": "0b6f0f8e-3f0a-4d55-9c3e-6c1f4f3b2a10",
                        "name": "Summer collection",
                        "rows": [{"id": "row-1", "templateId": "template_002", "products": ["prod_001", "prod_002"]}],
                    }
                }
            },
        },
        400: {
            "model": ErrorResponse,
            "description": "Missing name or rows, or a row without templateId / with 0 or more than 3 products",
        },
    },
)
@limiter.limit("30/minute")
async def create_grid(
    request: Request,
    payload: Any = Body(default=None),
    store: GridStoreProtocol = Depends(get_grid_store),
):
    """Validate and store a new grid."""
    return await grid_service.create_grid(store, payload)
