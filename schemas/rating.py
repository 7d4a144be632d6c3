from datetime import datetime
from typing import Optional, List, Dict
from pydantic import BaseModel, Field, validator

from core.config import settings

# Review Schemas
class ReviewCreate(BaseModel):
    rating: int = Field(..., ge=1, le=5, description="Rating from 1 to 5 stars")
    comment: Optional[str] = Field(
        None,
        max_length=settings.REVIEW_COMMENT_MAX_LENGTH,
        description="Optional review text"
    )

    @validator('comment')
    def validate_comment(cls, v):
        if v is not None:
            return v.strip() or None
        return v

class ReviewResponse(BaseModel):
    id: str
    shop_id: str
    reviewer_id: str
    rating: int
    comment: Optional[str]
    created_at: datetime

    class Config:
        from_attributes = True

# Shop Rating Statistics
class ShopRatingStats(BaseModel):
    average_rating: float
    total_reviews: int
    rating_distribution: Dict[int, int]  # {1: count, 2: count, ...}

# Paginated responses
class PaginatedReviews(BaseModel):
    reviews: List[ReviewResponse]
    total: int
    page: int
    page_size: int
    total_pages: int
    has_next: bool
    has_prev: bool
