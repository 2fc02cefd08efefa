import logging
from typing import List
from sqlalchemy.orm import Session
from contenthub.common import slug as slugs
from contenthub.common.exceptions import ConflictException, NotFoundException
from contenthub.models.catalog import Brand, ProductCategory

logger = logging.getLogger(__name__)

def _load_categories(db: Session, category_ids: List[str]) -> List[ProductCategory]:
    if not category_ids:
        return []
    categories = db.query(ProductCategory).filter(
        ProductCategory.id.in_(category_ids),
        ProductCategory.live(),
    ).all()
    if len(categories) != len(set(category_ids)):
        raise NotFoundException("One or more categories not found")
    return categories

def _ensure_slug_available(db: Session, slug: str, exclude_id: str = None):
    query = db.query(Brand).filter(Brand.slug == slug)
    if exclude_id:
        query = query.filter(Brand.id != exclude_id)
    if query.first():
        raise ConflictException("A brand with this slug already exists")

def create_brand(db: Session, data: dict) -> Brand:
    # Categories are resolved before anything is added to the session
    categories = _load_categories(db, data.pop("category_ids", None) or [])
    data["slug"] = slugs.generate(data.get("slug") or data["name"])
    _ensure_slug_available(db, data["slug"])

    brand = Brand(**data)
    brand.categories = categories
    db.add(brand)
    db.commit()
    db.refresh(brand)
    logger.info("Created brand %s", brand.slug)
    return brand

def list_brands(db: Session, active_only: bool = False):
    query = db.query(Brand).filter(Brand.live())
    if active_only:
        query = query.filter(Brand.is_active.is_(True))
    return query.order_by(Brand.sort_order, Brand.name).all()

def list_brands_by_category(db: Session, category_id: str):
    return db.query(Brand).filter(
        Brand.categories.any(ProductCategory.id == category_id),
        Brand.is_active.is_(True),
        Brand.live(),
    ).order_by(Brand.sort_order, Brand.name).all()

def get_brand(db: Session, brand_id: str) -> Brand:
    brand = db.query(Brand).filter(Brand.id == brand_id, Brand.live()).first()
    if not brand:
        raise NotFoundException("Brand not found")
    return brand

def get_brand_by_slug(db: Session, slug: str, active_only: bool = False) -> Brand:
    query = db.query(Brand).filter(Brand.slug == slug, Brand.live())
    if active_only:
        query = query.filter(Brand.is_active.is_(True))
    brand = query.first()
    if not brand:
        raise NotFoundException("Brand not found")
    return brand

def update_brand(db: Session, brand: Brand, changes: dict) -> Brand:
    if "category_ids" in changes:
        brand.categories = _load_categories(db, changes.pop("category_ids") or [])
    if changes.get("slug"):
        changes["slug"] = slugs.generate(changes["slug"])
        _ensure_slug_available(db, changes["slug"], exclude_id=brand.id)

    for field, value in changes.items():
        setattr(brand, field, value)
    db.commit()
    db.refresh(brand)
    return brand

def add_categories(db: Session, brand: Brand, category_ids: List[str]) -> Brand:
    current = {category.id for category in brand.categories}
    for category in _load_categories(db, category_ids):
        if category.id not in current:
            brand.categories.append(category)
    db.commit()
    db.refresh(brand)
    return brand

def remove_categories(db: Session, brand: Brand, category_ids: List[str]) -> Brand:
    to_remove = set(category_ids)
    brand.categories = [category for category in brand.categories if category.id not in to_remove]
    db.commit()
    db.refresh(brand)
    return brand

def delete_brand(db: Session, brand: Brand):
    brand.soft_delete()
    db.commit()
    logger.info("Deleted brand %s", brand.slug)
