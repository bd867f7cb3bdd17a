"""
Read/write helpers against the hosted product store.

Every function takes the Supabase client explicitly so routers can inject it
with ``Depends(get_supabase_client)`` and tests can hand in a fake. Each call
issues a single query; failures are logged once and re-raised as one of the
``CatalogError`` types.
"""
from datetime import datetime, timezone
from typing import Any, Iterable

from supabase import Client

from ..config import get_settings
from ..exceptions import ProductFetchError, ProductNotFound, ReviewWriteError
from ..schemas.product import ProductOut, ProductPage, ProductQuery
from ..schemas.reviews import ReviewCreate
from ..utils.logging import get_logger

logger = get_logger(__name__)


def _name_of(product: Any) -> str:
    if isinstance(product, dict):
        value = product.get("name") or product.get("title")
    else:
        value = getattr(product, "name", None) or getattr(product, "title", None)
    return value or ""


def filter_by_name(products: Iterable[Any] | None, query: str | None) -> list:
    """
    Case-insensitive substring match on each product's name over an
    already-fetched list. Anything that is not a list yields [].
    """
    if not isinstance(products, (list, tuple)):
        return []
    needle = (query or "").lower()
    return [product for product in products if needle in _name_of(product).lower()]


def _escape_like(text: str) -> str:
    """Escape the LIKE wildcards in user text so it matches literally."""
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def fetch_products(client: Client, params: ProductQuery, page_size: int | None = None) -> ProductPage:
    """Return one page of products plus whether another page follows."""
    settings = get_settings()
    page_size = page_size or settings.PAGE_SIZE

    if params.page < 1:
        return ProductPage(products=[], page=params.page, has_more=False)

    offset = (params.page - 1) * page_size
    query = client.table(settings.PRODUCTS_TABLE).select("*")
    if params.category:
        query = query.eq("category", params.category)
    if params.query:
        query = query.ilike("title", f"%{_escape_like(params.query)}%")
    query = query.order(params.sort_by, desc=params.sort_order == "desc")
    if params.sort_by != "id":
        # Equal prices have no stable order across ranged reads.
        query = query.order("id")

    # One extra row tells us about has_more.
    query = query.range(offset, offset + page_size)

    logger.debug(
        "Fetching products page={} query={!r} sort={} {} category={!r}",
        params.page, params.query, params.sort_by, params.sort_order, params.category,
    )
    try:
        response = query.execute()
    except Exception as exc:
        logger.exception("Failed to load products")
        raise ProductFetchError("Failed to load products") from exc

    rows = response.data or []
    return ProductPage(
        products=[ProductOut.model_validate(row) for row in rows[:page_size]],
        page=params.page,
        has_more=len(rows) > page_size,
    )


def fetch_product(client: Client, product_id: str) -> ProductOut:
    settings = get_settings()
    try:
        response = (
            client.table(settings.PRODUCTS_TABLE)
            .select(f"*, {settings.REVIEWS_TABLE}(*)")
            .eq("id", product_id)
            .order("created_at", desc=True, foreign_table=settings.REVIEWS_TABLE)
            .maybe_single()
            .execute()
        )
    except Exception as exc:
        logger.exception("Failed to load product {}", product_id)
        raise ProductFetchError(f"Failed to load product {product_id}") from exc

    # maybe_single() hands back None, not an empty response, when no row matches.
    if response is None or not response.data:
        logger.warning("Product {} not found", product_id)
        raise ProductNotFound(product_id)

    row = dict(response.data)
    row["reviews"] = row.pop(settings.REVIEWS_TABLE, None) or []
    return ProductOut.model_validate(row)


def list_reviews(client: Client, product_id: str) -> list[dict]:
    """Reviews for one product, newest first."""
    settings = get_settings()
    try:
        response = (
            client.table(settings.REVIEWS_TABLE)
            .select("*")
            .eq("product_id", product_id)
            .order("created_at", desc=True)
            .execute()
        )
    except Exception as exc:
        logger.exception("Failed to load reviews for {}", product_id)
        raise ProductFetchError(f"Failed to load reviews for {product_id}") from exc
    return response.data or []


def _ensure_product_exists(client: Client, product_id: str) -> None:
    settings = get_settings()
    try:
        response = (
            client.table(settings.PRODUCTS_TABLE)
            .select("id")
            .eq("id", product_id)
            .maybe_single()
            .execute()
        )
    except Exception as exc:
        logger.exception("Failed to look up product {}", product_id)
        raise ProductFetchError(f"Failed to load product {product_id}") from exc
    if response is None or not response.data:
        raise ProductNotFound(product_id)


def add_review(client: Client, review: ReviewCreate) -> dict:
    """
    Store a review for an existing product and return the inserted row.

    The reviewer's name and email must already be filled in; the caller
    resolves them from the payload or the signed-in user.
    """
    settings = get_settings()
    _ensure_product_exists(client, review.product_id)

    review_data = review.model_dump()
    review_data["created_at"] = datetime.now(timezone.utc).isoformat()

    try:
        response = client.table(settings.REVIEWS_TABLE).insert(review_data).execute()
    except Exception as exc:
        logger.exception("Failed to add review for {}", review.product_id)
        raise ReviewWriteError("Failed to add review") from exc

    if not response.data:
        raise ReviewWriteError("Failed to add review")

    logger.info("Review added for product {} by {}", review.product_id, review.reviewer_email)
    return response.data[0]
