import uuid
from datetime import datetime
from sqlalchemy import Column, String, Integer, Text, DateTime, ForeignKey, CheckConstraint, func
from sqlalchemy.orm import relationship, Session
from database.base import Base

class Review(Base):
    __tablename__ = "shop_reviews"
    __table_args__ = (
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_shop_reviews_rating_range"),
    )

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()), index=True)
    shop_id = Column(String, ForeignKey("shops.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    reviewer_id = Column(String, nullable=False, index=True)  # opaque user id
    rating = Column(Integer, nullable=False)  # 1-5 stars
    comment = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    shop = relationship("Shop", back_populates="reviews")

    def __init__(self, **kwargs):
        kwargs.setdefault("id", str(uuid.uuid4()))
        kwargs.setdefault("created_at", datetime.utcnow())
        super().__init__(**kwargs)

    def __repr__(self):
        return f"<Review(id={self.id}, reviewer_id={self.reviewer_id}, shop_id={self.shop_id}, rating={self.rating})>"

    @classmethod
    def get_rating_distribution(cls, db: Session, shop_id: str):
        """Get rating distribution (how many 1-star, 2-star, etc.)"""
        result = db.query(
            cls.rating,
            func.count(cls.id).label('count')
        ).filter(
            cls.shop_id == shop_id
        ).group_by(cls.rating).all()

        distribution = {i: 0 for i in range(1, 6)}
        for rating, count in result:
            distribution[rating] = count

        return distribution
