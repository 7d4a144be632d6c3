from pydantic import BaseModel, Field, validator
from typing import Optional, List
from datetime import datetime
import re

from models.shop import ShopType, Weekday, PaymentMethod
from schemas.product import ProductCreate, ProductResponse

CLOCK_PATTERN = re.compile(r'^([01]\d|2[0-3]):[0-5]\d(:[0-5]\d)?$')
EMAIL_PATTERN = re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$')


def clean_phone(v: str) -> str:
    # Remove all non-digit characters
    digits = re.sub(r'\D', '', v)
    if len(digits) < 9 or len(digits) > 15:
        raise ValueError('Phone number must contain 9 to 15 digits (letters and symbols are not allowed)')
    return digits


def clean_email(v: str) -> str:
    v = v.strip()
    if not EMAIL_PATTERN.match(v):
        raise ValueError('Invalid email format')
    return v.lower()


def unique_payment_methods(v: List[PaymentMethod]) -> List[PaymentMethod]:
    seen = []
    for method in v:
        if method not in seen:
            seen.append(method)
    return seen


def reject_duplicate_days(entries: List["OpeningHoursEntry"]) -> List["OpeningHoursEntry"]:
    days = [entry.day for entry in entries]
    duplicates = sorted({day.value for day in days if days.count(day) > 1})
    if duplicates:
        raise ValueError(f"Opening hours listed more than once for: {', '.join(duplicates)}")
    return entries


# Opening Hours Schemas
class OpeningHoursEntry(BaseModel):
    day: Weekday
    is_closed: bool = False
    open_time: Optional[str] = Field(None, description="HH:MM or HH:MM:SS, 24-hour clock")
    close_time: Optional[str] = Field(None, description="HH:MM or HH:MM:SS, 24-hour clock")

    @validator('open_time', 'close_time')
    def validate_clock(cls, v):
        if v is not None and not CLOCK_PATTERN.match(v):
            raise ValueError('Time must be a zero-padded 24-hour HH:MM or HH:MM:SS value')
        return v

    @validator('close_time', always=True)
    def validate_window(cls, v, values):
        if values.get('is_closed'):
            return v
        if 'open_time' not in values:
            # open_time already failed validation
            return v
        if values.get('open_time') is None or v is None:
            raise ValueError('Open and close times are required unless the day is closed')
        return v

class OpeningHoursUpdate(BaseModel):
    entries: List[OpeningHoursEntry] = Field(default_factory=list)

    @validator('entries')
    def validate_entries(cls, v):
        return reject_duplicate_days(v)

class OpeningHoursResponse(BaseModel):
    day: Weekday
    open_time: Optional[str]
    close_time: Optional[str]
    is_closed: bool

    class Config:
        from_attributes = True


# Base Shop Schema
class ShopBase(BaseModel):
    name: str = Field(..., min_length=2, max_length=100)
    email: str = Field(..., max_length=100)
    phone: str = Field(..., max_length=20)
    type: ShopType
    description: Optional[str] = Field(None, max_length=500)
    street: Optional[str] = Field(None, max_length=200)
    city: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = Field(None, max_length=100)
    country: Optional[str] = Field(None, max_length=100)
    postal_code: Optional[str] = Field(None, max_length=20)
    longitude: float = Field(0.0, ge=-180, le=180)
    latitude: float = Field(0.0, ge=-90, le=90)
    images: List[str] = Field(default_factory=list)
    is_open: bool = True
    payment_methods: List[PaymentMethod] = Field(default_factory=lambda: [PaymentMethod.CASH])
    has_delivery: bool = False
    delivery_radius: float = Field(0.0, ge=0)
    delivery_fee: float = Field(0.0, ge=0)

# Shop Creation Schema
class ShopCreate(ShopBase):
    owner_id: str = Field(..., min_length=1)
    opening_hours: List[OpeningHoursEntry] = Field(default_factory=list)
    products: List[ProductCreate] = Field(default_factory=list)

    @validator('name')
    def validate_name(cls, v):
        if not v or len(v.strip()) < 2:
            raise ValueError('Shop name must be at least 2 characters long')
        return v.strip()

    @validator('phone')
    def validate_phone(cls, v):
        return clean_phone(v)

    @validator('email')
    def validate_email(cls, v):
        return clean_email(v)

    @validator('payment_methods')
    def validate_payment_methods(cls, v):
        return unique_payment_methods(v)

    @validator('opening_hours')
    def validate_opening_hours(cls, v):
        return reject_duplicate_days(v)

# Shop Update Schema
class ShopUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=2, max_length=100)
    email: Optional[str] = Field(None, max_length=100)
    phone: Optional[str] = Field(None, max_length=20)
    type: Optional[ShopType] = None
    description: Optional[str] = Field(None, max_length=500)
    street: Optional[str] = Field(None, max_length=200)
    city: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = Field(None, max_length=100)
    country: Optional[str] = Field(None, max_length=100)
    postal_code: Optional[str] = Field(None, max_length=20)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    images: Optional[List[str]] = None
    is_open: Optional[bool] = None
    payment_methods: Optional[List[PaymentMethod]] = None
    has_delivery: Optional[bool] = None
    delivery_radius: Optional[float] = Field(None, ge=0)
    delivery_fee: Optional[float] = Field(None, ge=0)

    @validator('name')
    def validate_name(cls, v):
        return v.strip() if v else v

    @validator('phone')
    def validate_phone(cls, v):
        return clean_phone(v) if v is not None else v

    @validator('email')
    def validate_email(cls, v):
        return clean_email(v) if v is not None else v

    @validator('payment_methods')
    def validate_payment_methods(cls, v):
        return unique_payment_methods(v) if v is not None else v

# Shop Response Schema
class ShopResponse(BaseModel):
    id: str
    owner_id: str
    name: str
    email: str
    phone: str
    type: ShopType
    description: Optional[str]
    street: Optional[str]
    city: Optional[str]
    state: Optional[str]
    country: Optional[str]
    postal_code: Optional[str]
    longitude: float
    latitude: float
    images: List[str]
    is_verified: bool
    is_open: bool
    payment_methods: List[PaymentMethod]
    has_delivery: bool
    delivery_radius: float
    delivery_fee: float
    average_rating: float
    total_reviews: int
    opening_hours: List[OpeningHoursResponse]
    products: List[ProductResponse]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

# Shop with distance from a search point
class NearbyShop(BaseModel):
    shop: ShopResponse
    distance_km: float
