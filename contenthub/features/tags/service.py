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
from contenthub.models.tag import Tag, TagTranslation

logger = logging.getLogger(__name__)

def _make_translation(payload, language) -> TagTranslation:
    return TagTranslation(
        language=language,
        name=payload.name,
        description=payload.description,
        slug=slug.generate(payload.name),
    )

def create_tag(db: Session, data: dict, translations: list) -> Tag:
    tag = Tag(**data)
    tag.slug = slug.generate_unique(translations[0].name, existing_slugs(db, Tag))
    tag.translations = build_translations(db, translations, _make_translation, "tag")
    db.add(tag)
    db.commit()
    logger.info("Created tag %s", tag.slug)
    return get_tag(db, tag.id)

def list_tags(db: Session, language: Optional[str] = None, active_only: bool = False):
    query = db.query(Tag).filter(Tag.live())
    if active_only:
        query = query.filter(Tag.is_active.is_(True))
    query = with_translations(query, Tag.translations, TagTranslation, language)
    return unique_roots(query.order_by(Tag.slug).all())

def get_tag(db: Session, tag_id: str, language: Optional[str] = None) -> Tag:
    query = db.query(Tag).filter(Tag.id == tag_id, Tag.live())
    tag = with_translations(query, Tag.translations, TagTranslation, language).first()
    if not tag:
        raise NotFoundException("Tag not found")
    return tag

def get_tag_by_slug(db: Session, tag_slug: str, language: Optional[str] = None, active_only: bool = False) -> Tag:
    query = db.query(Tag).filter(Tag.slug == tag_slug, Tag.live())
    if active_only:
        query = query.filter(Tag.is_active.is_(True))
    tag = with_translations(query, Tag.translations, TagTranslation, language).first()
    if not tag:
        raise NotFoundException("Tag not found")
    return tag

def update_tag(db: Session, tag: Tag, changes: dict, translations: Optional[list] = None) -> Tag:
    for field, value in changes.items():
        setattr(tag, field, value)
    if translations:
        rows = build_translations(db, translations, _make_translation, "tag")
        replace_translations(db, tag.translations, rows)
    db.commit()
    return get_tag(db, tag.id)

def delete_tag(db: Session, tag: Tag):
    tag.soft_delete()
    db.commit()
    logger.info("Deleted tag %s", tag.slug)
