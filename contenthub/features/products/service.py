import logging
from typing import List, Optional
from sqlalchemy.orm import Session
from contenthub.common import slug as slugs
from contenthub.common.enums import MediaType
from contenthub.common.exceptions import BadRequestException, ConflictException, NotFoundException
from contenthub.models.catalog import Brand, Product, ProductCategory, ProductMedia

logger = logging.getLogger(__name__)

MAX_IMAGES = 10
MAX_VIDEOS = 5

def _require_category(db: Session, category_id: str):
    if not db.query(ProductCategory).filter(ProductCategory.id == category_id, ProductCategory.live()).first():
        raise NotFoundException("Product category not found")

def _require_brand(db: Session, brand_id: str):
    if not db.query(Brand).filter(Brand.id == brand_id, Brand.live()).first():
        raise NotFoundException("Brand not found")

def _ensure_unique(db: Session, slug: str, product_code: Optional[str], exclude_id: str = None):
    query = db.query(Product).filter(Product.slug == slug)
    if exclude_id:
        query = query.filter(Product.id != exclude_id)
    if query.first():
        raise ConflictException("A product with this slug already exists")
    if product_code:
        query = db.query(Product).filter(Product.product_code == product_code)
        if exclude_id:
            query = query.filter(Product.id != exclude_id)
        if query.first():
            raise ConflictException("A product with this code already exists")

def _build_media(media: list) -> List[ProductMedia]:
    images = sum(1 for item in media if item["type"] == MediaType.IMAGE.value)
    videos = sum(1 for item in media if item["type"] == MediaType.VIDEO.value)
    if images > MAX_IMAGES:
        raise BadRequestException(f"A product can have at most {MAX_IMAGES} images")
    if videos > MAX_VIDEOS:
        raise BadRequestException(f"A product can have at most {MAX_VIDEOS} videos")
    return [ProductMedia(**{"sort_order": position, **item}) for position, item in enumerate(media)]

def create_product(db: Session, data: dict) -> Product:
    _require_category(db, data["category_id"])
    if data.get("brand_id"):
        _require_brand(db, data["brand_id"])
    media = _build_media(data.pop("media", None) or [])
    data["slug"] = slugs.generate(data.get("slug") or data["name"])
    _ensure_unique(db, data["slug"], data["product_code"])

    product = Product(**data)
    product.media = media
    db.add(product)
    db.commit()
    db.refresh(product)
    logger.info("Created product %s", product.product_code)
    return product

def list_products(
    db: Session,
    category_id: Optional[str] = None,
    brand_id: Optional[str] = None,
    in_stock: Optional[bool] = None,
    active_only: bool = False,
):
    query = db.query(Product).filter(Product.live())
    if active_only:
        query = query.filter(Product.is_active.is_(True))
    if category_id:
        query = query.filter(Product.category_id == category_id)
    if brand_id:
        query = query.filter(Product.brand_id == brand_id)
    if in_stock is True:
        query = query.filter(Product.available_stock > Product.stock_limit)
    elif in_stock is False:
        query = query.filter(Product.available_stock <= Product.stock_limit)
    return query.order_by(Product.created_at.desc()).all()

def get_product(db: Session, product_id: str, active_only: bool = False) -> Product:
    query = db.query(Product).filter(Product.id == product_id, Product.live())
    if active_only:
        query = query.filter(Product.is_active.is_(True))
    product = query.first()
    if not product:
        raise NotFoundException("Product not found")
    return product

def get_product_by_slug(db: Session, slug: str, active_only: bool = False) -> Product:
    query = db.query(Product).filter(Product.slug == slug, Product.live())
    if active_only:
        query = query.filter(Product.is_active.is_(True))
    product = query.first()
    if not product:
        raise NotFoundException("Product not found")
    return product

def update_product(db: Session, product: Product, changes: dict) -> Product:
    if changes.get("category_id"):
        _require_category(db, changes["category_id"])
    if changes.get("brand_id"):
        _require_brand(db, changes["brand_id"])
    if changes.get("slug") or changes.get("product_code"):
        new_slug = slugs.generate(changes["slug"]) if changes.get("slug") else product.slug
        changes["slug"] = new_slug
        _ensure_unique(db, new_slug, changes.get("product_code"), exclude_id=product.id)
    if "media" in changes:
        product.media = _build_media(changes.pop("media") or [])

    for field, value in changes.items():
        setattr(product, field, value)
    db.commit()
    db.refresh(product)
    return product

def update_stock(db: Session, product: Product, available_stock: int, stock_limit: Optional[int] = None) -> Product:
    product.available_stock = available_stock
    if stock_limit is not None:
        product.stock_limit = stock_limit
    db.commit()
    db.refresh(product)
    logger.info("Stock for %s set to %d", product.product_code, product.available_stock)
    return product

def delete_product(db: Session, product: Product):
    product.soft_delete()
    db.commit()
    logger.info("Deleted product %s", product.product_code)
