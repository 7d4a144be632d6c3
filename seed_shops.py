#!/usr/bin/env python3
"""
Seed script to create sample shops with catalogs, schedules and reviews
"""
import logging
import os
import sys
sys.path.insert(0, os.path.dirname(__file__))

from sqlalchemy.orm import Session
from core.config import settings
from database.connection import SessionLocal, create_tables
from schemas.shop import ShopCreate
from schemas.rating import ReviewCreate
from services.shop import create_shop, get_shop_by_email
from services.rating import RatingService

logging.basicConfig(level=settings.LOG_LEVEL, format=settings.LOG_FORMAT)
logger = logging.getLogger(__name__)

WEEKDAY_HOURS = [
    {"day": day, "open_time": "08:00", "close_time": "18:00"}
    for day in ("monday", "tuesday", "wednesday", "thursday", "friday")
] + [
    {"day": "saturday", "open_time": "09:00", "close_time": "13:00"},
    {"day": "sunday", "is_closed": True},
]

SAMPLE_SHOPS = [
    {
        "owner_id": "seed-owner-1",
        "name": "Green Pasture Feeds",
        "email": "orders@greenpasture.example",
        "phone": "+1 555 010 0001",
        "type": "feed",
        "description": "Cattle, poultry and pig feed by the bag or in bulk",
        "street": "12 Mill Road",
        "city": "Ames",
        "state": "IA",
        "country": "US",
        "postal_code": "50010",
        "longitude": -93.6198,
        "latitude": 42.0308,
        "payment_methods": ["cash", "debit_card"],
        "has_delivery": True,
        "delivery_radius": 25.0,
        "delivery_fee": 15.0,
        "opening_hours": WEEKDAY_HOURS,
        "products": [
            {"name": "Layer pellets", "price": "18.50", "category": "poultry", "stock": 40, "unit": "25 kg bag"},
            {"name": "Calf starter", "price": "32.00", "category": "cattle", "stock": 12, "unit": "25 kg bag"},
        ],
    },
    {
        "owner_id": "seed-owner-2",
        "name": "Field & Tool Supply",
        "email": "hello@fieldtool.example",
        "phone": "+1 555 010 0002",
        "type": "equipment",
        "description": "Fencing, troughs and hand tools",
        "city": "Boone",
        "state": "IA",
        "country": "US",
        "longitude": -93.8802,
        "latitude": 42.0597,
        "payment_methods": ["cash", "credit_card", "mobile_payment"],
        "opening_hours": WEEKDAY_HOURS,
        "products": [
            {"name": "Electric fence energizer", "price": "149.99", "category": "fencing", "stock": 3, "unit": "unit"},
            {"name": "Water trough 100 gal", "price": "89.00", "category": "watering", "stock": 0, "unit": "unit"},
        ],
    },
    {
        "owner_id": "seed-owner-3",
        "name": "Prairie Vet Pharmacy",
        "email": "pharmacy@prairievet.example",
        "phone": "+1 555 010 0003",
        "type": "medicine",
        "description": "Livestock vaccines and dewormers",
        "city": "Nevada",
        "state": "IA",
        "country": "US",
        "longitude": -93.4522,
        "latitude": 42.0227,
        "opening_hours": WEEKDAY_HOURS,
        "products": [
            {"name": "Ivermectin pour-on", "price": "54.25", "category": "dewormer", "stock": 20, "unit": "1 L bottle"},
        ],
    },
]

SAMPLE_REVIEWS = {
    "orders@greenpasture.example": [("seed-customer-1", 5, "Fresh feed, quick loading"), ("seed-customer-2", 4, None)],
    "hello@fieldtool.example": [("seed-customer-1", 3, "Trough was out of stock")],
}

def seed_shops(db: Session):
    """Create the sample shops that are not present yet"""
    created = []
    for shop_data in SAMPLE_SHOPS:
        if get_shop_by_email(db, shop_data["email"]):
            logger.info(f"Shop already exists: {shop_data['name']}")
            continue

        shop = create_shop(db, ShopCreate(**shop_data))
        for reviewer_id, rating, comment in SAMPLE_REVIEWS.get(shop.email, []):
            RatingService.add_review(db, shop.id, reviewer_id, ReviewCreate(rating=rating, comment=comment))
        created.append(shop)

    return created

def create_sample_shops():
    """Create tables and sample shops"""
    create_tables()
    db = SessionLocal()

    try:
        created = seed_shops(db)
        logger.info(f"Successfully created {len(created)} shops")
        for shop in created:
            logger.info(
                f"{shop.name} ({shop.type.value}) - {len(shop.products)} products, "
                f"rating {shop.average_rating:.1f} from {shop.total_reviews} reviews"
            )
    except Exception as e:
        logger.error(f"Error during seeding: {str(e)}")
        db.rollback()
        raise
    finally:
        db.close()

if __name__ == "__main__":
    logger.info("Starting shop data seeding...")
    create_sample_shops()
