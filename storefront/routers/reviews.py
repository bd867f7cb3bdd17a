from fastapi import APIRouter, Depends, HTTPException, status
from supabase import Client

from ..dependencies import get_current_user_optional
from ..exceptions import ProductFetchError, ProductNotFound, ReviewWriteError
from ..schemas.reviews import ReviewAdded, ReviewCreate, ReviewOut
from ..services.catalog import add_review, list_reviews
from ..supabase_client import get_supabase_client

router = APIRouter(
    prefix="/reviews",
    tags=["reviews"]
)


@router.get("/{product_id}", response_model=list[ReviewOut])
def get_product_reviews(product_id: str, supabase: Client = Depends(get_supabase_client)):
    try:
        return list_reviews(supabase, product_id)
    except ProductFetchError as exc:
        raise HTTPException(status_code=502, detail="Failed to load reviews") from exc


@router.post("/addReview", response_model=ReviewAdded, status_code=status.HTTP_201_CREATED)
def create_review(
    review: ReviewCreate,
    current_user: dict | None = Depends(get_current_user_optional),
    supabase: Client = Depends(get_supabase_client),
):
    """
    Add a review to a product. The reviewer is taken from the payload, or from
    the signed-in user when the payload leaves it out.
    """
    if current_user:
        review.reviewer_name = review.reviewer_name or current_user.get("name") or None
        review.reviewer_email = review.reviewer_email or current_user.get("email")

    if not review.reviewer_name or not review.reviewer_email:
        raise HTTPException(status_code=400, detail="Reviewer name and email are required")

    try:
        created_review = add_review(supabase, review)
    except ProductNotFound as exc:
        raise HTTPException(status_code=404, detail="Product not found") from exc
    except (ProductFetchError, ReviewWriteError) as exc:
        raise HTTPException(status_code=502, detail="Failed to add review") from exc

    return {"message": "Review added successfully", "review": created_review}
