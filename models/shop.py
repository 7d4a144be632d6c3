import enum
import logging
import uuid
from datetime import datetime
from typing import Optional
from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, Text, Float, Integer, Enum, JSON, Index
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy.orm import relationship, Session
from database.base import Base
from core.exceptions import ValidationError, NotFoundError, InsufficientStockError
from models.product import Product
from models.rating import Review

logger = logging.getLogger(__name__)


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class ShopType(str, enum.Enum):
    FEED = "feed"
    EQUIPMENT = "equipment"
    MEDICINE = "medicine"
    GENERAL = "general"


class Weekday(str, enum.Enum):
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"


class PaymentMethod(str, enum.Enum):
    CASH = "cash"
    CREDIT_CARD = "credit_card"
    DEBIT_CARD = "debit_card"
    MOBILE_PAYMENT = "mobile_payment"


# Indexed by datetime.weekday(), Monday == 0
WEEKDAYS = list(Weekday)


def normalize_clock(value: str) -> str:
    """Pad an ``HH:MM`` clock string to ``HH:MM:SS``."""
    return f"{value}:00" if len(value) == 5 else value


class OpeningHours(Base):
    __tablename__ = "shop_opening_hours"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()), index=True)
    shop_id = Column(String, ForeignKey("shops.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    day = Column(Enum(Weekday, name="weekday", values_callable=_enum_values), nullable=False)
    open_time = Column(String(8), nullable=True)  # "HH:MM" or "HH:MM:SS"
    close_time = Column(String(8), nullable=True)
    is_closed = Column(Boolean, nullable=False, default=False)

    shop = relationship("Shop", back_populates="opening_hours")

    def __init__(self, **kwargs):
        kwargs.setdefault("id", str(uuid.uuid4()))
        kwargs.setdefault("is_closed", False)
        super().__init__(**kwargs)

    def __repr__(self):
        return f"<OpeningHours(day={self.day}, open={self.open_time}, close={self.close_time}, closed={self.is_closed})>"


class Shop(Base):
    __tablename__ = "shops"
    __table_args__ = (
        Index("ix_shops_location", "longitude", "latitude"),
    )

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()), index=True)
    owner_id = Column(String, nullable=False, index=True)  # opaque user id
    name = Column(String, nullable=False)
    email = Column(String, nullable=False, unique=True, index=True)
    phone = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    type = Column(Enum(ShopType, name="shop_type", values_callable=_enum_values), nullable=False, index=True)

    # Address
    street = Column(String, nullable=True)
    city = Column(String, nullable=True)
    state = Column(String, nullable=True)
    country = Column(String, nullable=True)
    postal_code = Column(String, nullable=True)

    # Location, default is the origin
    longitude = Column(Float, nullable=False, default=0.0)
    latitude = Column(Float, nullable=False, default=0.0)

    images = Column(JSON, nullable=False, default=list)
    is_verified = Column(Boolean, default=False)
    is_open = Column(Boolean, default=True, index=True)
    payment_methods = Column(JSON, nullable=False, default=lambda: [PaymentMethod.CASH.value])

    # Delivery
    has_delivery = Column(Boolean, default=False)
    delivery_radius = Column(Float, default=0.0)
    delivery_fee = Column(Float, default=0.0)

    # Review summary, maintained by add_review
    average_rating = Column(Float, default=0.0)
    total_reviews = Column(Integer, default=0)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    opening_hours = relationship(
        "OpeningHours",
        back_populates="shop",
        order_by="OpeningHours.position",
        collection_class=ordering_list("position"),
        cascade="all, delete-orphan"
    )
    products = relationship(
        "Product",
        back_populates="shop",
        order_by="Product.position",
        collection_class=ordering_list("position"),
        cascade="all, delete-orphan"
    )
    reviews = relationship(
        "Review",
        back_populates="shop",
        order_by="Review.position",
        collection_class=ordering_list("position"),
        cascade="all, delete-orphan"
    )

    def __init__(self, **kwargs):
        kwargs.setdefault("id", str(uuid.uuid4()))
        kwargs.setdefault("longitude", 0.0)
        kwargs.setdefault("latitude", 0.0)
        kwargs.setdefault("images", [])
        kwargs.setdefault("is_verified", False)
        kwargs.setdefault("is_open", True)
        kwargs.setdefault("payment_methods", [PaymentMethod.CASH.value])
        kwargs.setdefault("has_delivery", False)
        kwargs.setdefault("delivery_radius", 0.0)
        kwargs.setdefault("delivery_fee", 0.0)
        kwargs.setdefault("average_rating", 0.0)
        kwargs.setdefault("total_reviews", 0)
        now = datetime.utcnow()
        kwargs.setdefault("created_at", now)
        kwargs.setdefault("updated_at", now)
        super().__init__(**kwargs)

    def __repr__(self):
        return f"<Shop(id={self.id}, name={self.name}, type={self.type})>"

    @property
    def rating(self) -> dict:
        return {"average": self.average_rating, "count": self.total_reviews}

    def get_product(self, product_id: str) -> Optional[Product]:
        return next((p for p in self.products if p.id == product_id), None)

    def get_opening_hours(self, day: Weekday) -> Optional[OpeningHours]:
        return next((h for h in self.opening_hours if h.day == day), None)

    def compute_average_rating(self) -> float:
        """Mean of the review ratings, 0 when there are none."""
        if not self.reviews:
            return 0.0
        return sum(review.rating for review in self.reviews) / len(self.reviews)

    def is_open_at(self, instant: datetime) -> bool:
        """
        Check the weekly schedule against the wall-clock time of ``instant``.

        The instant is read as given; converting it to the shop's local time
        is up to the caller. Boundaries are inclusive and a window whose
        opening time is later than its closing time never matches.
        """
        entry = self.get_opening_hours(WEEKDAYS[instant.weekday()])
        if entry is None or entry.is_closed:
            return False
        if not entry.open_time or not entry.close_time:
            return False

        clock = instant.strftime("%H:%M:%S")
        return normalize_clock(entry.open_time) <= clock <= normalize_clock(entry.close_time)

    def add_review(self, db: Session, reviewer_id: str, rating: int, comment: Optional[str] = None) -> Review:
        """Append a review, refresh the rating summary and persist the shop."""
        if isinstance(rating, bool) or not isinstance(rating, int) or not 1 <= rating <= 5:
            raise ValidationError("Rating must be an integer between 1 and 5", field="rating")
        if not reviewer_id:
            raise ValidationError("Reviewer is required", field="reviewer_id")

        review = Review(reviewer_id=reviewer_id, rating=rating, comment=comment)
        self.reviews.append(review)
        self.average_rating = self.compute_average_rating()
        self.total_reviews = len(self.reviews)
        self.updated_at = datetime.utcnow()

        self.save(db)
        logger.info(f"Review {review.id} added to shop {self.id} (average {self.average_rating:.2f})")
        return review

    def update_stock(self, db: Session, product_id: str, delta: int) -> Product:
        """Apply a stock change to one product and persist the shop."""
        if isinstance(delta, bool) or not isinstance(delta, int):
            raise ValidationError("Stock change must be an integer", field="delta")

        product = self.get_product(product_id)
        if product is None:
            raise NotFoundError("Product", product_id)

        new_stock = product.stock + delta
        if new_stock < 0:
            raise InsufficientStockError(product_id, available=product.stock, requested=delta)

        now = datetime.utcnow()
        product.stock = new_stock
        product.is_available = new_stock > 0
        product.updated_at = now
        self.updated_at = now

        self.save(db)
        logger.info(f"Stock of product {product_id} in shop {self.id} changed by {delta} to {new_stock}")
        return product

    def save(self, db: Session) -> "Shop":
        shop_id = self.id
        try:
            db.add(self)
            db.commit()
            db.refresh(self)
        except Exception as e:
            db.rollback()
            logger.error(f"Error saving shop {shop_id}: {str(e)}")
            raise
        return self
