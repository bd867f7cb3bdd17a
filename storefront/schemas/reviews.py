from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class ReviewBase(BaseModel):
    rating: int = Field(..., ge=1, le=5)
    comment: str = Field("", max_length=1000)


class ReviewCreate(ReviewBase):
    # The storefront's own client posts camelCase keys.
    model_config = ConfigDict(populate_by_name=True)

    product_id: str = Field(..., alias="productId", min_length=1)
    reviewer_name: Optional[str] = Field(None, alias="reviewerName", max_length=100)
    reviewer_email: Optional[EmailStr] = Field(None, alias="reviewerEmail")


class ReviewOut(BaseModel):
    id: Optional[str] = None
    product_id: str
    rating: int
    comment: Optional[str] = None
    reviewer_name: Optional[str] = None
    reviewer_email: Optional[str] = None
    created_at: Optional[datetime] = None

    @field_validator("id", "product_id", mode="before")
    @classmethod
    def stringify_ids(cls, value):
        return None if value is None else str(value)

    class Config:
        from_attributes = True


class ReviewAdded(BaseModel):
    message: str = "Review added successfully"
    review: ReviewOut
