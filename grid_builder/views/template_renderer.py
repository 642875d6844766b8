"""Template rendering utilities for HTML views."""

from pathlib import Path
from typing import Any, Literal

import httpx
from fastapi import Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from grid_builder.config import Settings
from grid_builder.exceptions import ProductFetchException
from grid_builder.logging_config import get_logger, log_with_context
from grid_builder.models import Alignment, Grid
from grid_builder.services import product_service
from grid_builder.services.grid_params import GridParams
from grid_builder.services.workspace import GridWorkspace
from grid_builder.state_managers import WorkspaceManager

logger = get_logger(__name__)

TEMPLATES_DIR = Path(__file__).parent.parent / "templates"
templates = Jinja2Templates(directory=TEMPLATES_DIR)

CARD_WIDTH_CLASSES = {1: "card-full", 2: "card-half", 3: "card-third"}


def _zoom_style(workspace: GridWorkspace) -> str:
    return "; ".join(f"{prop}: {value}" for prop, value in workspace.zoom.zoom_style().items())


def _grid_context(workspace: GridWorkspace) -> dict[str, Any]:
    return {
        "workspace": workspace,
        "rows": workspace.rows,
        "stats": workspace.stats(),
        "alignments": list(Alignment),
        "card_width_classes": CARD_WIDTH_CLASSES,
        "zoom_percent": workspace.zoom.percent,
        "zoom_style": _zoom_style(workspace),
        "product_drag": workspace.product_drag.state,
        "row_drag": workspace.row_drag.state,
    }


class TemplateRenderer:
    """Handles rendering of Jinja2 templates for all grid builder views."""

    @staticmethod
    def render_state(
        request: Request,
        state: Literal["error", "empty"],
        message: str | None = None,
        status_code: int = 200,
    ) -> HTMLResponse:
        """Render the full-page error or empty state.

        Args:
            request: FastAPI request object
            state: "error" or "empty"
            message: Message shown in the state panel
            status_code: HTTP status of the page
        """
        return templates.TemplateResponse(
            request,
            "state.html",
            {"state": state, "message": message},
            status_code=status_code,
        )

    @staticmethod
    async def render_index(
        request: Request,
        params: GridParams,
        client: httpx.AsyncClient,
        manager: WorkspaceManager,
        settings: Settings,
    ) -> HTMLResponse:
        """Render the grid builder page for the URL parameters.

        Args:
            request: FastAPI request object
            params: Parsed productIds / rows parameters
            client: HTTP client for storage endpoint calls
            manager: Workspace registry receiving the new workspace
            settings: Settings instance (must be provided by router via Depends)

        Returns:
            Grid page, or an error / empty state page
        """
        if params.error or not params.product_ids:
            return TemplateRenderer.render_state(request, "error", params.error, status_code=400)

        try:
            products = await product_service.fetch_products(client, params.product_ids, settings)
        except ProductFetchException as e:
            log_with_context(
                logger,
                "warning",
                "Failed to load products for grid",
                error=e.message,
                product_ids=params.product_ids,
                event_type="grid_products_error",
            )
            return TemplateRenderer.render_state(request, "error", e.message, status_code=502)

        if not products:
            return TemplateRenderer.render_state(request, "empty")

        workspace = await manager.create(products, params.row_count)
        return templates.TemplateResponse(
            request,
            "index.html",
            {**_grid_context(workspace), "save_errors": [], "save_error": None, "saved_grid": None, "grid_name": ""},
        )

    @staticmethod
    def render_grid(request: Request, workspace: GridWorkspace) -> HTMLResponse:
        """Render the grid fragment (stats, rows, zoom) for HTMX swaps."""
        return templates.TemplateResponse(request, "partials/grid.html", _grid_context(workspace))

    @staticmethod
    def render_save_dialog(
        request: Request,
        workspace: GridWorkspace,
        grid_name: str = "",
        save_errors: list[str] | None = None,
        save_error: str | None = None,
        saved_grid: Grid | None = None,
    ) -> HTMLResponse:
        """Render the save dialog fragment.

        Args:
            request: FastAPI request object
            workspace: Workspace being saved
            grid_name: Name to keep in the input
            save_errors: Validation messages, shown as a list
            save_error: Storage endpoint error message
            saved_grid: Saved grid on success
        """
        return templates.TemplateResponse(
            request,
            "partials/save_dialog.html",
            {
                "workspace": workspace,
                "grid_name": grid_name,
                "save_errors": save_errors or [],
                "save_error": save_error,
                "saved_grid": saved_grid,
            },
        )
