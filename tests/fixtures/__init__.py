"""
Test fixtures package
"""
from .sample_data import (
    MONDAY,
    SUNDAY,
    SAMPLE_OPENING_HOURS,
    SAMPLE_PRODUCTS,
    SAMPLE_SHOP,
    GEO_SHOPS
)

__all__ = [
    "MONDAY",
    "SUNDAY",
    "SAMPLE_OPENING_HOURS",
    "SAMPLE_PRODUCTS",
    "SAMPLE_SHOP",
    "GEO_SHOPS"
]
