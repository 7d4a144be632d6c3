from sqlalchemy import select
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from typing import List, Optional, Tuple
from datetime import datetime
import logging
import math

from core.config import settings
from core.exceptions import BusinessLogicError, NotFoundError
from models.shop import Shop, ShopType, OpeningHours
from models.product import Product
from schemas.shop import ShopCreate, ShopUpdate, OpeningHoursUpdate, OpeningHoursEntry

logger = logging.getLogger(__name__)

EARTH_RADIUS_KM = 6371.0088
KM_PER_DEGREE_LATITUDE = 111.32

CLEARABLE_FIELDS = ('description', 'street', 'city', 'state', 'country', 'postal_code')


def haversine_km(lon1: float, lat1: float, lon2: float, lat2: float) -> float:
    """Great-circle distance between two longitude/latitude points, in km."""
    lon1, lat1, lon2, lat2 = map(math.radians, (lon1, lat1, lon2, lat2))
    a = (
        math.sin((lat2 - lat1) / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin((lon2 - lon1) / 2) ** 2
    )
    return 2 * EARTH_RADIUS_KM * math.asin(min(1.0, math.sqrt(a)))


def _build_opening_hours(entries: List[OpeningHoursEntry]) -> List[OpeningHours]:
    return [
        OpeningHours(
            day=entry.day,
            open_time=entry.open_time,
            close_time=entry.close_time,
            is_closed=entry.is_closed
        )
        for entry in entries
    ]


def _ensure_email_available(db: Session, email: str, shop_id: Optional[str] = None):
    query = db.query(Shop).filter(Shop.email == email)
    if shop_id:
        query = query.filter(Shop.id != shop_id)
    if query.first():
        logger.warning(f"Attempt to use an email already registered to another shop: {email}")
        raise BusinessLogicError("Email already in use", details={"field": "email"})


def create_shop(db: Session, shop_data: ShopCreate) -> Shop:
    """Create a new shop with its schedule and initial catalog."""
    _ensure_email_available(db, shop_data.email)

    fields = shop_data.model_dump(exclude={"opening_hours", "products"})
    fields["payment_methods"] = [method.value for method in shop_data.payment_methods]

    db_shop = Shop(**fields)
    db_shop.opening_hours = _build_opening_hours(shop_data.opening_hours)
    db_shop.products = [Product(**product.model_dump()) for product in shop_data.products]

    try:
        db_shop.save(db)
    except IntegrityError as e:
        logger.error(f"Database integrity error creating shop: {str(e)}")
        if "email" in str(e).lower():
            raise BusinessLogicError("Email already in use", details={"field": "email"})
        raise BusinessLogicError("Database constraint violation")

    logger.info(f"Shop created successfully: {db_shop.name} by owner {db_shop.owner_id}")
    return db_shop


def get_shop_by_id(db: Session, shop_id: str) -> Shop:
    """Load a shop by ID, raising NotFoundError when it does not exist."""
    shop = db.query(Shop).filter(Shop.id == shop_id).first()
    if not shop:
        raise NotFoundError("Shop", shop_id)
    return shop


def save_shop(db: Session, shop: Shop) -> Shop:
    shop.updated_at = datetime.utcnow()
    return shop.save(db)


def get_shop_by_email(db: Session, email: str) -> Optional[Shop]:
    return db.query(Shop).filter(Shop.email == email.strip().lower()).first()


def get_shops_by_owner_id(db: Session, owner_id: str) -> List[Shop]:
    return db.query(Shop).filter(Shop.owner_id == owner_id).order_by(Shop.created_at).all()


def get_shops_by_type(db: Session, shop_type: ShopType, skip: int = 0, limit: int = None) -> List[Shop]:
    """Get shops of one type with pagination."""
    limit = limit or settings.DEFAULT_PAGE_SIZE
    return db.query(Shop).filter(
        Shop.type == ShopType(shop_type)
    ).order_by(Shop.created_at).offset(skip).limit(limit).all()


def get_open_shops(db: Session, skip: int = 0, limit: int = None) -> List[Shop]:
    """Get shops currently flagged as open with pagination."""
    limit = limit or settings.DEFAULT_PAGE_SIZE
    return db.query(Shop).filter(
        Shop.is_open == True
    ).order_by(Shop.created_at).offset(skip).limit(limit).all()


def get_shops_by_product_category(db: Session, category: str, skip: int = 0, limit: int = None) -> List[Shop]:
    """Get shops that list at least one product in the given category."""
    limit = limit or settings.DEFAULT_PAGE_SIZE
    matching = select(Product.shop_id).where(Product.category == category.strip().lower())
    return db.query(Shop).filter(
        Shop.id.in_(matching)
    ).order_by(Shop.created_at).offset(skip).limit(limit).all()


def get_shops_near(
    db: Session,
    longitude: float,
    latitude: float,
    max_distance_km: float = None,
    limit: int = None
) -> List[Tuple[Shop, float]]:
    """
    Get shops within ``max_distance_km`` of a point, nearest first.

    A bounding box on the location index narrows the candidates in SQL and the
    exact great-circle distance is computed for each candidate.
    """
    max_distance_km = settings.NEARBY_SHOPS_MAX_DISTANCE_KM if max_distance_km is None else max_distance_km
    limit = limit or settings.NEARBY_SHOPS_LIMIT

    lat_delta = max_distance_km / KM_PER_DEGREE_LATITUDE
    query = db.query(Shop).filter(
        Shop.latitude >= latitude - lat_delta,
        Shop.latitude <= latitude + lat_delta
    )

    cos_lat = math.cos(math.radians(latitude))
    if cos_lat > 1e-6:
        lon_delta = max_distance_km / (KM_PER_DEGREE_LATITUDE * cos_lat)
        # Skip the longitude bound when the box wraps the antimeridian
        if longitude - lon_delta >= -180 and longitude + lon_delta <= 180:
            query = query.filter(
                Shop.longitude >= longitude - lon_delta,
                Shop.longitude <= longitude + lon_delta
            )

    results = []
    for shop in query.all():
        distance = haversine_km(longitude, latitude, shop.longitude, shop.latitude)
        if distance <= max_distance_km:
            results.append((shop, distance))

    results.sort(key=lambda item: item[1])
    return results[:limit]


def update_shop(db: Session, shop_id: str, shop_data: ShopUpdate) -> Shop:
    """Partially update a shop profile."""
    db_shop = get_shop_by_id(db, shop_id)
    update_data = shop_data.model_dump(exclude_unset=True)

    if update_data.get('email'):
        _ensure_email_available(db, update_data['email'], shop_id=shop_id)
    if update_data.get('payment_methods') is not None:
        update_data['payment_methods'] = [method.value for method in shop_data.payment_methods]

    for field, value in update_data.items():
        # Only free-text profile fields can be cleared
        if value is None and field not in CLEARABLE_FIELDS:
            continue
        setattr(db_shop, field, value)

    try:
        save_shop(db, db_shop)
    except IntegrityError as e:
        logger.error(f"Database integrity error updating shop {shop_id}: {str(e)}")
        if "email" in str(e).lower():
            raise BusinessLogicError("Email already in use", details={"field": "email"})
        raise BusinessLogicError("Database constraint violation")

    logger.info(f"Shop updated successfully: {shop_id}")
    return db_shop


def set_opening_hours(db: Session, shop_id: str, hours: OpeningHoursUpdate) -> Shop:
    """Replace the weekly schedule of a shop."""
    db_shop = get_shop_by_id(db, shop_id)
    db_shop.opening_hours = _build_opening_hours(hours.entries)

    save_shop(db, db_shop)
    logger.info(f"Opening hours replaced for shop {shop_id} ({len(hours.entries)} entries)")
    return db_shop


def verify_shop(db: Session, shop_id: str) -> Shop:
    """Verify a shop (admin function)."""
    db_shop = get_shop_by_id(db, shop_id)
    db_shop.is_verified = True

    save_shop(db, db_shop)
    logger.info(f"Shop verified successfully: {shop_id}")
    return db_shop
