"""Product query against the storage endpoint.

One fetch path for every caller; caching and retries are expressed as a
QueryPolicy rather than separate fetch variants.
"""

import httpx
from pydantic import BaseModel, Field, ValidationError

from grid_builder.cache import get_cache
from grid_builder.config import Settings, get_settings
from grid_builder.exceptions import ProductFetchException
from grid_builder.logging_config import get_logger, log_with_context
from grid_builder.models.catalog import Product

logger = get_logger(__name__)


class QueryPolicy(BaseModel):
    """How product lists are fetched and cached."""

    enabled: bool = True
    stale_seconds: int = Field(default=0, ge=0, description="Serve cached results this long, 0 disables caching")
    retry_count: int = Field(default=1, ge=0, description="Extra attempts after a failed request")

    @classmethod
    def from_settings(cls, settings: Settings) -> "QueryPolicy":
        return cls(
            enabled=settings.products_query_enabled,
            stale_seconds=settings.products_stale_seconds,
            retry_count=settings.products_retry_count,
        )


def products_cache_key(product_ids: list[str]) -> str:
    return "products:" + ",".join(product_ids)


async def fetch_products(
    client: httpx.AsyncClient,
    product_ids: list[str],
    settings: Settings | None = None,
    policy: QueryPolicy | None = None,
) -> list[Product]:
    """Fetch products by id from the storage endpoint.

    Args:
        client: Shared HTTP client
        product_ids: Ids to fetch; unknown ids are simply absent from the result
        settings: Settings instance (defaults to singleton)
        policy: Cache/retry policy (defaults to the one configured in settings)

    Returns:
        Products in the order the endpoint returned them

    Raises:
        ProductFetchException: If every attempt failed or the payload is malformed
    """
    if settings is None:
        settings = get_settings()
    if policy is None:
        policy = QueryPolicy.from_settings(settings)

    if not policy.enabled or not product_ids:
        return []

    url = f"{settings.api_base_url}/products"
    ids_param = ",".join(product_ids)

    async def fetch() -> list[Product]:
        """Fetch fresh products, retrying failed requests."""
        attempts = policy.retry_count + 1
        last_error: httpx.HTTPError | None = None

        for attempt in range(1, attempts + 1):
            try:
                response = await client.get(url, params={"ids": ids_param}, timeout=settings.http_timeout_seconds)
                response.raise_for_status()
                data = response.json()
                break
            except httpx.HTTPError as e:
                last_error = e
                log_with_context(
                    logger,
                    "warning",
                    "Product fetch failed",
                    attempt=attempt,
                    attempts=attempts,
                    error=str(e),
                    error_type=type(e).__name__,
                    event_type="product_fetch_failed",
                )
            except ValueError as e:
                raise ProductFetchException(
                    details={"product_ids": product_ids, "error_type": "parsing_error"},
                ) from e
        else:
            raise ProductFetchException(
                details={"product_ids": product_ids, "error": str(last_error)},
            ) from last_error

        if not isinstance(data, list):
            log_with_context(
                logger,
                "warning",
                "Storage endpoint returned non-list product data",
                payload_type=type(data).__name__,
                event_type="product_fetch_unexpected_payload",
            )
            return []

        try:
            return [Product.model_validate(item) for item in data]
        except ValidationError as e:
            raise ProductFetchException(
                details={"product_ids": product_ids, "error_type": "parsing_error"},
            ) from e

    if policy.stale_seconds > 0:
        return await get_cache().get_or_fetch(products_cache_key(product_ids), policy.stale_seconds, fetch)
    return await fetch()
