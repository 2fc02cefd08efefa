"""Shared plumbing for root entities that own one translation row per language.

Articles, categories and tags all follow the same rules: languages are
resolved in one query, translations naming an unknown language are dropped
(and logged), the root slug comes from the first translation, and an update
that carries translations replaces the whole set.
"""
import logging
from typing import Callable, Dict, Iterable, List, Optional, Set
from sqlalchemy.orm import Query, Session, contains_eager, selectinload
from contenthub.models.language import Language

logger = logging.getLogger(__name__)

def resolve_languages(db: Session, language_ids: Iterable[str]) -> Dict[str, Language]:
    ids = set(language_ids)
    if not ids:
        return {}
    languages = db.query(Language).filter(Language.id.in_(ids), Language.live()).all()
    return {language.id: language for language in languages}

def existing_slugs(db: Session, model) -> Set[str]:
    # Soft-deleted rows still hold their slug under the unique constraint
    return {slug for (slug,) in db.query(model.slug).all()}

def build_translations(db: Session, payloads: list, make: Callable, entity: str) -> list:
    """Calls `make(payload, language)` for every payload whose language exists."""
    languages = resolve_languages(db, [payload.language_id for payload in payloads])
    rows = []
    for payload in payloads:
        language = languages.get(payload.language_id)
        if language is None:
            logger.warning(
                "Skipping %s translation for unknown language %s", entity, payload.language_id
            )
            continue
        rows.append(make(payload, language))
    return rows

def replace_translations(db: Session, collection: list, rows: list):
    # Old rows must be gone before the new ones hit the (root, language) unique constraint
    collection.clear()
    db.flush()
    collection.extend(rows)

def with_translations(query: Query, relationship, translation_model, language: Optional[str] = None) -> Query:
    """Eager-loads translations; with `language`, keeps only roots (and rows) in that language."""
    if language:
        return (
            query.join(relationship)
            .join(translation_model.language)
            .filter(Language.code == language)
            .options(contains_eager(relationship).contains_eager(translation_model.language))
            .populate_existing()
        )
    return query.options(selectinload(relationship)).populate_existing()

def unique_roots(rows: List) -> List:
    return list(dict.fromkeys(rows))
