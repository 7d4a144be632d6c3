from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from core.exceptions import NotFoundError, InsufficientStockError
from models.product import Product
from schemas.product import ProductCreate
from services.shop import get_shop_by_id, save_shop

logger = logging.getLogger(__name__)

def add_product(db: Session, shop_id: str, product_data: ProductCreate) -> Product:
    """Append a product to a shop catalog"""
    shop = get_shop_by_id(db, shop_id)

    product = Product(**product_data.model_dump())
    shop.products.append(product)
    save_shop(db, shop)

    logger.info(f"Product created: {product.name} in shop {shop_id}")
    return product

def update_stock(db: Session, shop_id: str, product_id: str, delta: int) -> Product:
    """Change the stock of one product of a shop by a signed amount"""
    shop = get_shop_by_id(db, shop_id)
    try:
        return shop.update_stock(db, product_id, delta)
    except (NotFoundError, InsufficientStockError) as e:
        logger.warning(f"Stock update rejected for shop {shop_id}: {e.message}")
        raise

def get_shop_products(
    db: Session,
    shop_id: str,
    category: Optional[str] = None,
    available_only: bool = False
) -> List[Product]:
    """Get the catalog of a shop in catalog order"""
    get_shop_by_id(db, shop_id)

    query = db.query(Product).filter(Product.shop_id == shop_id)

    if category:
        query = query.filter(Product.category == category.strip().lower())

    if available_only:
        query = query.filter(Product.is_available == True)

    return query.order_by(Product.position).all()
