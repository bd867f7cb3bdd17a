from typing import Literal, Optional
from pydantic import BaseModel, field_validator

from .reviews import ReviewOut


class ProductOut(BaseModel):
    id: str
    title: str = ""
    description: Optional[str] = None
    price: Optional[float] = None
    category: Optional[str] = None
    tags: list[str] = []
    images: list[str] = []
    stock: int = 0
    rating: Optional[float] = None
    reviews: list[ReviewOut] = []

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, value):
        return str(value)

    @field_validator("title", mode="before")
    @classmethod
    def blank_title(cls, value):
        return value or ""

    @field_validator("tags", "images", "reviews", mode="before")
    @classmethod
    def missing_as_empty(cls, value):
        return value or []

    @field_validator("stock", mode="before")
    @classmethod
    def non_negative_stock(cls, value):
        return max(int(value or 0), 0)

    class Config:
        from_attributes = True


class ProductQuery(BaseModel):
    """Listing parameters as they arrive on the query string."""

    page: int = 1
    query: str = ""
    sort: str = "default"
    order: Literal["asc", "desc"] = "asc"
    category: str = ""

    @classmethod
    def from_params(
        cls,
        page: str | None = None,
        query: str | None = None,
        sort: str | None = None,
        order: str | None = None,
        category: str | None = None,
    ) -> "ProductQuery":
        """Parse raw query strings leniently; junk falls back to defaults."""
        try:
            parsed_page = int(page) if page is not None else 1
        except ValueError:
            parsed_page = 1
        return cls(
            page=parsed_page or 1,
            query=(query or "").strip(),
            sort=sort or "default",
            order=order if order in ("asc", "desc") else "asc",
            category=category or "",
        )

    @property
    def sort_by(self) -> str:
        return "price" if self.sort == "price" else "id"

    @property
    def sort_order(self) -> str:
        # Only the price sort honours the requested direction.
        return self.order if self.sort == "price" else "asc"


class ProductPage(BaseModel):
    products: list[ProductOut] = []
    page: int = 1
    has_more: bool = False
