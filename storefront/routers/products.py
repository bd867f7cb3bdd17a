from fastapi import APIRouter, Depends, HTTPException, Query
from supabase import Client

from ..config import get_settings
from ..exceptions import ProductFetchError, ProductNotFound
from ..schemas.product import ProductOut, ProductPage, ProductQuery
from ..services.catalog import fetch_product, fetch_products
from ..supabase_client import get_supabase_client

router = APIRouter(prefix="/products", tags=["products"])


@router.get("", response_model=ProductPage)
def list_products(
    page: str | None = Query(None, description="1-based page number; junk or 0 means the first page"),
    query: str | None = Query(None, description="Case-insensitive match on the product name"),
    sort: str | None = Query(None, description="'price' to sort by price, anything else sorts by id"),
    order: str | None = Query(None, description="'asc' or 'desc', direction of the price sort"),
    category: str | None = Query(None, description="Only products in this category"),
    supabase: Client = Depends(get_supabase_client),
):
    """List one page of products. Pages past the end come back empty."""
    params = ProductQuery.from_params(page, query, sort, order, category)
    try:
        return fetch_products(supabase, params)
    except ProductFetchError as exc:
        raise HTTPException(status_code=502, detail="Failed to load products. Please try again later.") from exc


@router.get("/categories", response_model=list[str])
def list_categories():
    """Categories offered by the listing filter."""
    return get_settings().CATEGORIES


@router.get("/{product_id}", response_model=ProductOut)
def get_product(product_id: str, supabase: Client = Depends(get_supabase_client)):
    try:
        return fetch_product(supabase, product_id)
    except ProductNotFound as exc:
        raise HTTPException(status_code=404, detail="Product not found") from exc
    except ProductFetchError as exc:
        raise HTTPException(status_code=502, detail="Failed to load product. Please try again later.") from exc
