import logging
from typing import Optional
from sqlalchemy.orm import Session
from contenthub.common import slug
from contenthub.common.exceptions import NotFoundException
from contenthub.common.translations import (
    build_translations,
    existing_slugs,
    replace_translations,
    unique_roots,
    with_translations,
)
from contenthub.models.category import Category, CategoryTranslation

logger = logging.getLogger(__name__)

def _make_translation(payload, language) -> CategoryTranslation:
    return CategoryTranslation(
        language=language,
        name=payload.name,
        description=payload.description,
        slug=slug.generate(payload.name),
        seo_title=payload.seo_title,
        seo_description=payload.seo_description,
        seo_keywords=payload.seo_keywords,
    )

def create_category(db: Session, data: dict, translations: list) -> Category:
    category = Category(**data)
    category.slug = slug.generate_unique(translations[0].name, existing_slugs(db, Category))
    category.translations = build_translations(db, translations, _make_translation, "category")
    db.add(category)
    db.commit()
    logger.info("Created category %s", category.slug)
    return get_category(db, category.id)

def list_categories(db: Session, language: Optional[str] = None, active_only: bool = False):
    query = db.query(Category).filter(Category.live())
    if active_only:
        query = query.filter(Category.is_active.is_(True))
    query = with_translations(query, Category.translations, CategoryTranslation, language)
    return unique_roots(query.order_by(Category.slug).all())

def get_category(db: Session, category_id: str, language: Optional[str] = None) -> Category:
    query = db.query(Category).filter(Category.id == category_id, Category.live())
    category = with_translations(query, Category.translations, CategoryTranslation, language).first()
    if not category:
        raise NotFoundException("Category not found")
    return category

def get_category_by_slug(db: Session, category_slug: str, language: Optional[str] = None, active_only: bool = False) -> Category:
    query = db.query(Category).filter(Category.slug == category_slug, Category.live())
    if active_only:
        query = query.filter(Category.is_active.is_(True))
    category = with_translations(query, Category.translations, CategoryTranslation, language).first()
    if not category:
        raise NotFoundException("Category not found")
    return category

def update_category(db: Session, category: Category, changes: dict, translations: Optional[list] = None) -> Category:
    for field, value in changes.items():
        setattr(category, field, value)
    if translations:
        rows = build_translations(db, translations, _make_translation, "category")
        replace_translations(db, category.translations, rows)
    db.commit()
    return get_category(db, category.id)

def delete_category(db: Session, category: Category):
    category.soft_delete()
    db.commit()
    logger.info("Deleted category %s", category.slug)
