"""Alignment template routes."""

from fastapi import APIRouter, Depends

from grid_builder.dependencies import get_grid_store
from grid_builder.models import Template
from grid_builder.protocols import GridStoreProtocol

router = APIRouter()


@router.get("/templates", response_model=list[Template], summary="List alignment templates")
async def list_templates(store: GridStoreProtocol = Depends(get_grid_store)):
    """Return the fixed LEFT / CENTER / RIGHT templates."""
    return await store.list_templates()
