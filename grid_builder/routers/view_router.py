"""Page/view routes for the grid builder page and its HTMX fragments."""

from typing import Literal

import httpx
from fastapi import APIRouter, Depends, Form, Query, Request, Response, status
from fastapi.responses import HTMLResponse

from grid_builder.config import Settings, get_settings
from grid_builder.dependencies import get_http_client, get_workspace_manager
from grid_builder.exceptions import GridSaveException, GridValidationException
from grid_builder.logging_config import get_logger, log_with_context
from grid_builder.models import Alignment
from grid_builder.services import grid_persistence
from grid_builder.services.grid_params import parse_grid_params
from grid_builder.state_managers import WorkspaceManager
from grid_builder.views.template_renderer import TemplateRenderer

router = APIRouter()
logger = get_logger(__name__)


@router.get("/", response_class=HTMLResponse)
async def index(
    request: Request,
    product_ids: str | None = Query(default=None, alias="productIds"),
    rows: str | None = Query(default=None),
    client: httpx.AsyncClient = Depends(get_http_client),
    manager: WorkspaceManager = Depends(get_workspace_manager),
    settings: Settings = Depends(get_settings),
):
    """Render the grid builder for ?productIds=...&rows=N."""
    params = parse_grid_params(product_ids, rows)
    return await TemplateRenderer.render_index(request, params, client, manager, settings)


# Product drag and drop


@router.post("/workspaces/{workspace_id}/products/drag-start", status_code=status.HTTP_204_NO_CONTENT)
async def product_drag_start(
    workspace_id: str,
    product_id: str = Form(...),
    row_id: str = Form(...),
    manager: WorkspaceManager = Depends(get_workspace_manager),
):
    """Record the product being dragged."""
    workspace = await manager.get(workspace_id)
    product = workspace.get_product(row_id, product_id)
    workspace.product_drag.start(product, row_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/workspaces/{workspace_id}/products/drop", response_class=HTMLResponse)
async def product_drop(
    request: Request,
    workspace_id: str,
    row_id: str = Form(...),
    position: int | None = Form(default=None),
    product_id: str | None = Form(default=None),
    source_row_id: str | None = Form(default=None),
    manager: WorkspaceManager = Depends(get_workspace_manager),
):
    """Drop the dragged product on a row, optionally at a position.

    The browser may send the dragged product along with the drop so the drop
    does not depend on the earlier drag-start request having arrived first.
    """
    workspace = await manager.get(workspace_id)
    if product_id and source_row_id:
        workspace.product_drag.start(workspace.get_product(source_row_id, product_id), source_row_id)
    workspace.product_drag.drop(workspace.rows, row_id, position)
    return TemplateRenderer.render_grid(request, workspace)


@router.post("/workspaces/{workspace_id}/products/drag-end", status_code=status.HTTP_204_NO_CONTENT)
async def product_drag_end(
    workspace_id: str,
    manager: WorkspaceManager = Depends(get_workspace_manager),
):
    """Cancel the product drag."""
    workspace = await manager.get(workspace_id)
    workspace.product_drag.end()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# Row drag and drop


@router.post("/workspaces/{workspace_id}/rows/drag-start", status_code=status.HTTP_204_NO_CONTENT)
async def row_drag_start(
    workspace_id: str,
    row_id: str = Form(...),
    manager: WorkspaceManager = Depends(get_workspace_manager),
):
    """Record the row being dragged."""
    workspace = await manager.get(workspace_id)
    workspace.get_row(row_id)
    workspace.row_drag.start(row_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/workspaces/{workspace_id}/rows/drop", response_class=HTMLResponse)
async def row_drop(
    request: Request,
    workspace_id: str,
    row_id: str = Form(...),
    source_row_id: str | None = Form(default=None),
    manager: WorkspaceManager = Depends(get_workspace_manager),
):
    """Move the dragged row to the position of ``row_id``."""
    workspace = await manager.get(workspace_id)
    if source_row_id:
        workspace.row_drag.start(source_row_id)
    workspace.row_drag.drop(workspace.rows, row_id)
    return TemplateRenderer.render_grid(request, workspace)


@router.post("/workspaces/{workspace_id}/rows/drag-end", status_code=status.HTTP_204_NO_CONTENT)
async def row_drag_end(
    workspace_id: str,
    manager: WorkspaceManager = Depends(get_workspace_manager),
):
    """Cancel the row drag."""
    workspace = await manager.get(workspace_id)
    workspace.row_drag.end()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# Row alignment and zoom


@router.post("/workspaces/{workspace_id}/rows/{row_id}/alignment", response_class=HTMLResponse)
async def update_row_alignment(
    request: Request,
    workspace_id: str,
    row_id: str,
    alignment: Alignment = Form(...),
    manager: WorkspaceManager = Depends(get_workspace_manager),
):
    """Change a row's alignment template."""
    workspace = await manager.get(workspace_id)
    workspace.update_row_alignment(row_id, alignment)
    return TemplateRenderer.render_grid(request, workspace)


@router.post("/workspaces/{workspace_id}/zoom", response_class=HTMLResponse)
async def zoom(
    request: Request,
    workspace_id: str,
    action: Literal["in", "out", "reset"] = Form(...),
    manager: WorkspaceManager = Depends(get_workspace_manager),
):
    """Zoom the grid in, out or back to 100%."""
    workspace = await manager.get(workspace_id)
    if action == "in":
        workspace.zoom.zoom_in()
    elif action == "out":
        workspace.zoom.zoom_out()
    else:
        workspace.zoom.reset()
    return TemplateRenderer.render_grid(request, workspace)


# Save


@router.post("/workspaces/{workspace_id}/save", response_class=HTMLResponse)
async def save(
    request: Request,
    workspace_id: str,
    name: str = Form(default=""),
    client: httpx.AsyncClient = Depends(get_http_client),
    manager: WorkspaceManager = Depends(get_workspace_manager),
    settings: Settings = Depends(get_settings),
):
    """Validate and save the workspace's grid, re-rendering the save dialog."""
    workspace = await manager.get(workspace_id)

    try:
        saved_grid = await grid_persistence.save_grid(client, name, workspace.rows, settings)
    except GridValidationException as e:
        return TemplateRenderer.render_save_dialog(request, workspace, grid_name=name, save_errors=e.errors)
    except GridSaveException as e:
        log_with_context(
            logger,
            "warning",
            "Saving grid failed",
            workspace_id=workspace_id,
            error=e.message,
            event_type="grid_save_failed",
        )
        return TemplateRenderer.render_save_dialog(request, workspace, grid_name=name, save_error=e.message)

    workspace.saved_grid_id = saved_grid.id
    return TemplateRenderer.render_save_dialog(request, workspace, grid_name=name, saved_grid=saved_grid)


# Workspace lifecycle


@router.post("/workspaces/{workspace_id}/discard", status_code=status.HTTP_204_NO_CONTENT)
async def discard_workspace(
    workspace_id: str,
    manager: WorkspaceManager = Depends(get_workspace_manager),
):
    """Forget the workspace when its page unloads; unknown ids are ignored."""
    await manager.discard(workspace_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
