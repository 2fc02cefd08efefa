import logging
from datetime import datetime
from typing import List, Optional
from sqlalchemy.orm import Session
from contenthub.common import seo, slug
from contenthub.common.enums import ArticleStatus
from contenthub.common.exceptions import NotFoundException
from contenthub.common.translations import (
    build_translations,
    existing_slugs,
    replace_translations,
    unique_roots,
    with_translations,
)
from contenthub.config.settings import settings
from contenthub.models.article import Article, ArticleTranslation
from contenthub.models.blog import Blog
from contenthub.models.category import Category
from contenthub.models.tag import Tag
from contenthub.models.user import User

logger = logging.getLogger(__name__)

def _require_user(db: Session, user_id: str, label: str) -> User:
    user = db.query(User).filter(User.id == user_id, User.live()).first()
    if not user:
        raise NotFoundException(f"{label} not found")
    return user

def _require_blog(db: Session, blog_id: str) -> Blog:
    blog = db.query(Blog).filter(Blog.id == blog_id, Blog.live()).first()
    if not blog:
        raise NotFoundException("Blog not found")
    return blog

def _load_all(db: Session, model, ids: List[str], label: str) -> list:
    if not ids:
        return []
    rows = db.query(model).filter(model.id.in_(ids), model.live()).all()
    if len(rows) != len(set(ids)):
        raise NotFoundException(f"One or more {label} not found")
    return rows

def _json_ld(article: Article, translation: ArticleTranslation, author: Optional[User]) -> dict:
    return seo.generate_json_ld(
        title=translation.seo_title or translation.title,
        description=translation.seo_description or seo.generate_description(translation.content),
        url=f"{settings.APP_URL}/{translation.slug}",
        image=article.featured_image,
        author=author.full_name if author else None,
        date_published=article.published_at,
        date_modified=article.updated_at,
    )

def _translation_factory(article: Article, author: Optional[User]):
    def make(payload, language) -> ArticleTranslation:
        translation = ArticleTranslation(
            language=language,
            title=payload.title,
            short_description=payload.short_description,
            content=payload.content,
            slug=slug.generate(payload.title),
            seo_title=payload.seo_title,
            seo_description=payload.seo_description,
            seo_keywords=payload.seo_keywords,
        )
        translation.seo_json_ld = _json_ld(article, translation, author)
        return translation
    return make

def create_article(db: Session, data: dict, translations: list) -> Article:
    _require_blog(db, data["blog_id"])
    author = _require_user(db, data["author_id"], "Author")
    if data.get("editor_id"):
        _require_user(db, data["editor_id"], "Editor")

    category_ids = data.pop("category_ids", None) or []
    tag_ids = data.pop("tag_ids", None) or []

    article = Article(**data)
    article.slug = slug.generate_unique(translations[0].title, existing_slugs(db, Article))
    if article.status == ArticleStatus.PUBLISHED.value:
        article.published_at = datetime.utcnow()
    article.categories = _load_all(db, Category, category_ids, "categories")
    article.tags = _load_all(db, Tag, tag_ids, "tags")
    article.translations = build_translations(db, translations, _translation_factory(article, author), "article")

    db.add(article)
    db.commit()
    logger.info("Created article %s with %d translations", article.slug, len(article.translations))
    return get_article(db, article.id)

def list_articles(
    db: Session,
    status: Optional[str] = None,
    blog_id: Optional[str] = None,
    author_id: Optional[str] = None,
    language: Optional[str] = None,
):
    query = db.query(Article).filter(Article.live())
    if status:
        query = query.filter(Article.status == status)
    if blog_id:
        query = query.filter(Article.blog_id == blog_id)
    if author_id:
        query = query.filter(Article.author_id == author_id)
    query = with_translations(query, Article.translations, ArticleTranslation, language)
    return unique_roots(query.order_by(Article.created_at.desc()).all())

def list_published_articles(db: Session, language: Optional[str] = None, blog_id: Optional[str] = None):
    return list_articles(db, status=ArticleStatus.PUBLISHED.value, blog_id=blog_id, language=language)

def get_article(db: Session, article_id: str, language: Optional[str] = None) -> Article:
    query = db.query(Article).filter(Article.id == article_id, Article.live())
    article = with_translations(query, Article.translations, ArticleTranslation, language).first()
    if not article:
        raise NotFoundException("Article not found")
    return article

def get_article_by_slug(db: Session, article_slug: str, language: Optional[str] = None, published_only: bool = False) -> Article:
    query = db.query(Article).filter(Article.slug == article_slug, Article.live())
    if published_only:
        query = query.filter(Article.status == ArticleStatus.PUBLISHED.value)
    article = with_translations(query, Article.translations, ArticleTranslation, language).first()
    if not article:
        raise NotFoundException("Article not found")
    return article

def update_article(db: Session, article: Article, changes: dict, translations: Optional[list] = None) -> Article:
    if "blog_id" in changes:
        _require_blog(db, changes["blog_id"])
    if changes.get("editor_id"):
        _require_user(db, changes["editor_id"], "Editor")
    if "category_ids" in changes:
        article.categories = _load_all(db, Category, changes.pop("category_ids") or [], "categories")
    if "tag_ids" in changes:
        article.tags = _load_all(db, Tag, changes.pop("tag_ids") or [], "tags")

    status = changes.pop("status", None)
    for field, value in changes.items():
        setattr(article, field, value)
    if status is not None:
        _apply_status(article, status)

    author = db.query(User).filter(User.id == article.author_id).first()
    if translations:
        rows = build_translations(db, translations, _translation_factory(article, author), "article")
        replace_translations(db, article.translations, rows)
    else:
        # Media or dates may have changed
        for translation in article.translations:
            translation.seo_json_ld = _json_ld(article, translation, author)

    db.commit()
    return get_article(db, article.id)

def _apply_status(article: Article, status: str):
    if status == ArticleStatus.PUBLISHED.value and article.status != ArticleStatus.PUBLISHED.value:
        article.published_at = datetime.utcnow()
    article.status = status

def update_status(db: Session, article: Article, status: str) -> Article:
    _apply_status(article, status)
    db.commit()
    return get_article(db, article.id)

def delete_article(db: Session, article: Article):
    article.soft_delete()
    db.commit()
    logger.info("Deleted article %s", article.slug)
