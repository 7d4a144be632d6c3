from sqlalchemy.orm import Session
from sqlalchemy import desc

from core.config import settings
from core.exceptions import ValidationError
from models.rating import Review
from schemas.rating import ReviewCreate, ReviewResponse, ShopRatingStats, PaginatedReviews
from services.shop import get_shop_by_id

class RatingService:

    @staticmethod
    def add_review(
        db: Session,
        shop_id: str,
        reviewer_id: str,
        review_data: ReviewCreate
    ) -> Review:
        """Submit a review for a shop and refresh its rating summary"""
        shop = get_shop_by_id(db, shop_id)
        return shop.add_review(
            db,
            reviewer_id=reviewer_id,
            rating=review_data.rating,
            comment=review_data.comment
        )

    @staticmethod
    def get_shop_rating_stats(db: Session, shop_id: str) -> ShopRatingStats:
        """Get rating statistics for a shop"""
        shop = get_shop_by_id(db, shop_id)

        return ShopRatingStats(
            average_rating=shop.average_rating,
            total_reviews=shop.total_reviews,
            rating_distribution=Review.get_rating_distribution(db, shop_id)
        )

    @staticmethod
    def get_shop_reviews(
        db: Session,
        shop_id: str,
        page: int = 1,
        page_size: int = None,
        sort_by: str = "newest"
    ) -> PaginatedReviews:
        """Get paginated reviews for a shop"""
        get_shop_by_id(db, shop_id)
        page_size = page_size or settings.DEFAULT_PAGE_SIZE

        if page < 1:
            raise ValidationError("Page must be 1 or greater", field="page")
        if page_size < 1:
            raise ValidationError("Page size must be 1 or greater", field="page_size")

        query = db.query(Review).filter(Review.shop_id == shop_id)

        # Apply sorting
        if sort_by == "newest":
            query = query.order_by(desc(Review.position))
        elif sort_by == "oldest":
            query = query.order_by(Review.position)
        elif sort_by == "highest":
            query = query.order_by(desc(Review.rating), desc(Review.position))
        elif sort_by == "lowest":
            query = query.order_by(Review.rating, desc(Review.position))
        else:
            raise ValidationError(f"Unsupported sort order: {sort_by}", field="sort_by")

        # Get total count
        total = query.count()

        # Apply pagination
        offset = (page - 1) * page_size
        reviews = query.offset(offset).limit(page_size).all()

        total_pages = (total + page_size - 1) // page_size

        return PaginatedReviews(
            reviews=[ReviewResponse.model_validate(review) for review in reviews],
            total=total,
            page=page,
            page_size=page_size,
            total_pages=total_pages,
            has_next=page < total_pages,
            has_prev=page > 1
        )
