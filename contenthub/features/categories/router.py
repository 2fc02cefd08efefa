from datetime import datetime
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Optional
from pydantic import Field
from contenthub.common.schemas import MessageResponse, ORMModel, RequestModel
from contenthub.config.database import get_db
from contenthub.features.auth.dependencies import get_current_user
from contenthub.features.categories import service
from contenthub.features.languages.router import LanguageResponse
from contenthub.models.user import User

router = APIRouter(prefix="/categories", tags=["Categories"])
admin_router = APIRouter(prefix="/admin/categories", tags=["Categories"])

class CategoryTranslationIn(RequestModel):
    language_id: str
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    seo_title: Optional[str] = Field(default=None, max_length=255)
    seo_description: Optional[str] = None
    seo_keywords: Optional[str] = None

class CategoryCreate(RequestModel):
    featured_image: Optional[str] = None
    is_active: bool = True
    translations: List[CategoryTranslationIn] = Field(min_length=1)

class CategoryUpdate(RequestModel):
    featured_image: Optional[str] = None
    is_active: Optional[bool] = None
    translations: Optional[List[CategoryTranslationIn]] = None

class CategoryTranslationResponse(ORMModel):
    id: str
    language: LanguageResponse
    name: str
    description: Optional[str] = None
    slug: str
    seo_title: Optional[str] = None
    seo_description: Optional[str] = None
    seo_keywords: Optional[str] = None

class CategoryResponse(ORMModel):
    id: str
    slug: str
    featured_image: Optional[str] = None
    is_active: bool
    translations: List[CategoryTranslationResponse] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

# Public

@router.get("/", response_model=List[CategoryResponse])
def read_active_categories(lang: Optional[str] = None, db: Session = Depends(get_db)):
    return service.list_categories(db, language=lang, active_only=True)

@router.get("/{slug}", response_model=CategoryResponse)
def read_active_category(slug: str, lang: Optional[str] = None, db: Session = Depends(get_db)):
    return service.get_category_by_slug(db, slug, language=lang, active_only=True)

# Admin

@admin_router.post("/", response_model=CategoryResponse, status_code=201)
def create_category(category: CategoryCreate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return service.create_category(db, category.model_dump(exclude={"translations"}), category.translations)

@admin_router.get("/", response_model=List[CategoryResponse])
def read_categories(lang: Optional[str] = None, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return service.list_categories(db, language=lang)

@admin_router.get("/slug/{slug}", response_model=CategoryResponse)
def read_category_by_slug(slug: str, lang: Optional[str] = None, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return service.get_category_by_slug(db, slug, language=lang)

@admin_router.get("/{category_id}", response_model=CategoryResponse)
def read_category(category_id: str, lang: Optional[str] = None, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return service.get_category(db, category_id, language=lang)

@admin_router.patch("/{category_id}", response_model=CategoryResponse)
def update_category(category_id: str, changes: CategoryUpdate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    category = service.get_category(db, category_id)
    data = changes.model_dump(exclude_unset=True, exclude={"translations"})
    return service.update_category(db, category, data, changes.translations)

@admin_router.delete("/{category_id}", response_model=MessageResponse)
def delete_category(category_id: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    category = service.get_category(db, category_id)
    service.delete_category(db, category)
    return {"detail": "Category deleted"}
