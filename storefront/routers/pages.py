from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from supabase import Client

from ..config import get_settings
from ..exceptions import ProductFetchError, ProductNotFound
from ..presenters import page_metadata, present_product
from ..schemas.product import ProductQuery
from ..services.catalog import fetch_product, fetch_products
from ..supabase_client import get_supabase_client

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))

router = APIRouter(tags=["pages"], include_in_schema=False)

LISTING_ERROR = "Failed to load products. Please try again later."
DETAIL_ERROR = "There was an issue loading the page. Please try again later."
NOT_FOUND_ERROR = "Product not found."


@router.get("/", response_class=HTMLResponse)
def products_page(
    request: Request,
    page: str | None = None,
    query: str | None = None,
    sort: str | None = None,
    order: str | None = None,
    category: str | None = None,
    supabase: Client = Depends(get_supabase_client),
):
    """Product grid with search, category filter, price sort and pagination."""
    settings = get_settings()
    params = ProductQuery.from_params(page, query, sort, order, category)

    products = []
    has_more = False
    error = None
    try:
        result = fetch_products(supabase, params)
        products = [present_product(product) for product in result.products]
        has_more = result.has_more
    except ProductFetchError:
        error = LISTING_ERROR

    prev_url = None
    if params.page > 1:
        prev_url = str(request.url.include_query_params(page=params.page - 1))
    next_url = None
    if has_more:
        next_url = str(request.url.include_query_params(page=params.page + 1))

    return templates.TemplateResponse(
        request,
        "products.html",
        {
            "title": "Products",
            "params": params,
            "categories": settings.CATEGORIES,
            "products": products,
            "error": error,
            "prev_url": prev_url,
            "next_url": next_url,
        },
        status_code=503 if error else 200,
    )


def _error_page(request: Request, message: str, status_code: int, metadata: dict | None = None):
    metadata = metadata or {"title": "Error", "description": message}
    return templates.TemplateResponse(
        request,
        "error.html",
        {"title": metadata["title"], "description": metadata["description"], "message": message},
        status_code=status_code,
    )


@router.get("/{product_id}", response_class=HTMLResponse)
def product_page(request: Request, product_id: str, supabase: Client = Depends(get_supabase_client)):
    try:
        product = fetch_product(supabase, product_id)
    except ProductNotFound:
        return _error_page(request, NOT_FOUND_ERROR, 404, page_metadata(None))
    except ProductFetchError:
        return _error_page(request, DETAIL_ERROR, 503)

    metadata = page_metadata(product)
    return templates.TemplateResponse(
        request,
        "product.html",
        {
            "title": metadata["title"],
            "description": metadata["description"],
            "product": present_product(product),
        },
    )
