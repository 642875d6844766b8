"""Main FastAPI application entry point."""

from pathlib import Path

from dotenv import load_dotenv
from fastapi.responses import Response

from grid_builder.config import get_settings
from grid_builder.core.app_factory import create_app
from grid_builder.logging_config import setup_logging

# Load environment variables from .env file
load_dotenv(Path(__file__).parent.parent / ".env")

# Configure structured logging (JSON to file + console)
_settings = get_settings()
setup_logging(_settings.log_level, _settings.log_dir)

# Create application
app = create_app()


@app.get("/favicon.ico", include_in_schema=False)
async def favicon():
    """Return empty favicon to prevent 404 errors."""
    return Response(content=b"", media_type="image/x-icon")


def run() -> None:
    """Run the development server."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "grid_builder.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True,
    )


if __name__ == "__main__":
    run()
