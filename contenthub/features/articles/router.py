from datetime import datetime
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Any, Dict, List, Optional
from pydantic import Field
from contenthub.common.enums import ArticleStatus
from contenthub.common.schemas import MessageResponse, ORMModel, RequestModel
from contenthub.config.database import get_db
from contenthub.features.articles import service
from contenthub.features.auth.dependencies import get_current_user
from contenthub.features.languages.router import LanguageResponse
from contenthub.models.user import User

router = APIRouter(prefix="/articles", tags=["Articles"])
admin_router = APIRouter(prefix="/admin/articles", tags=["Articles"])

class ArticleTranslationIn(RequestModel):
    language_id: str
    title: str = Field(min_length=1, max_length=255)
    short_description: Optional[str] = None
    content: str
    seo_title: Optional[str] = Field(default=None, max_length=255)
    seo_description: Optional[str] = None
    seo_keywords: Optional[str] = None

class ArticleCreate(RequestModel):
    blog_id: str
    author_id: Optional[str] = None # defaults to the caller
    editor_id: Optional[str] = None
    status: ArticleStatus = ArticleStatus.DRAFT.value
    featured_image: Optional[str] = None
    scheduled_at: Optional[datetime] = None
    category_ids: List[str] = []
    tag_ids: List[str] = []
    translations: List[ArticleTranslationIn] = Field(min_length=1)

class ArticleUpdate(RequestModel):
    blog_id: Optional[str] = None
    editor_id: Optional[str] = None
    status: Optional[ArticleStatus] = None
    featured_image: Optional[str] = None
    scheduled_at: Optional[datetime] = None
    category_ids: Optional[List[str]] = None
    tag_ids: Optional[List[str]] = None
    translations: Optional[List[ArticleTranslationIn]] = None

class ArticleStatusUpdate(RequestModel):
    status: ArticleStatus

class TaxonomySummary(ORMModel):
    id: str
    slug: str

class ArticleTranslationResponse(ORMModel):
    id: str
    language: LanguageResponse
    title: str
    short_description: Optional[str] = None
    content: str
    slug: str
    seo_title: Optional[str] = None
    seo_description: Optional[str] = None
    seo_keywords: Optional[str] = None
    seo_json_ld: Optional[Dict[str, Any]] = None

class ArticleResponse(ORMModel):
    id: str
    slug: str
    status: str
    featured_image: Optional[str] = None
    published_at: Optional[datetime] = None
    scheduled_at: Optional[datetime] = None
    blog_id: str
    author_id: str
    editor_id: Optional[str] = None
    categories: List[TaxonomySummary] = []
    tags: List[TaxonomySummary] = []
    translations: List[ArticleTranslationResponse] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

# Public

@router.get("/", response_model=List[ArticleResponse])
def read_published_articles(lang: Optional[str] = None, blog_id: Optional[str] = None, db: Session = Depends(get_db)):
    return service.list_published_articles(db, language=lang, blog_id=blog_id)

@router.get("/{slug}", response_model=ArticleResponse)
def read_published_article(slug: str, lang: Optional[str] = None, db: Session = Depends(get_db)):
    return service.get_article_by_slug(db, slug, language=lang, published_only=True)

# Admin

@admin_router.post("/", response_model=ArticleResponse, status_code=201)
def create_article(article: ArticleCreate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    data = article.model_dump(exclude={"translations"})
    data["author_id"] = data["author_id"] or current_user.id
    return service.create_article(db, data, article.translations)

@admin_router.get("/", response_model=List[ArticleResponse])
def read_articles(
    status: Optional[ArticleStatus] = None,
    blog_id: Optional[str] = None,
    author_id: Optional[str] = None,
    lang: Optional[str] = Query(default=None, max_length=5),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return service.list_articles(
        db,
        status=status.value if status else None,
        blog_id=blog_id,
        author_id=author_id,
        language=lang,
    )

@admin_router.get("/slug/{slug}", response_model=ArticleResponse)
def read_article_by_slug(slug: str, lang: Optional[str] = None, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return service.get_article_by_slug(db, slug, language=lang)

@admin_router.get("/{article_id}", response_model=ArticleResponse)
def read_article(article_id: str, lang: Optional[str] = None, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return service.get_article(db, article_id, language=lang)

@admin_router.patch("/{article_id}", response_model=ArticleResponse)
def update_article(article_id: str, changes: ArticleUpdate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    article = service.get_article(db, article_id)
    data = changes.model_dump(exclude_unset=True, exclude={"translations"})
    return service.update_article(db, article, data, changes.translations)

@admin_router.patch("/{article_id}/status", response_model=ArticleResponse)
def update_article_status(article_id: str, payload: ArticleStatusUpdate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    article = service.get_article(db, article_id)
    return service.update_status(db, article, payload.status)

@admin_router.delete("/{article_id}", response_model=MessageResponse)
def delete_article(article_id: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    article = service.get_article(db, article_id)
    service.delete_article(db, article)
    return {"detail": "Article deleted"}
