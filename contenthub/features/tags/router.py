from datetime import datetime
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Optional
from pydantic import Field
from contenthub.common.schemas import MessageResponse, ORMModel, RequestModel
from contenthub.config.database import get_db
from contenthub.features.auth.dependencies import get_current_user
from contenthub.features.languages.router import LanguageResponse
from contenthub.features.tags import service
from contenthub.models.user import User

router = APIRouter(prefix="/tags", tags=["Tags"])
admin_router = APIRouter(prefix="/admin/tags", tags=["Tags"])

class TagTranslationIn(RequestModel):
    language_id: str
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None

class TagCreate(RequestModel):
    is_active: bool = True
    translations: List[TagTranslationIn] = Field(min_length=1)

class TagUpdate(RequestModel):
    is_active: Optional[bool] = None
    translations: Optional[List[TagTranslationIn]] = None

class TagTranslationResponse(ORMModel):
    id: str
    language: LanguageResponse
    name: str
    description: Optional[str] = None
    slug: str

class TagResponse(ORMModel):
    id: str
    slug: str
    is_active: bool
    translations: List[TagTranslationResponse] = []
    created_at: Optional[datetime] = None

@router.get("/", response_model=List[TagResponse])
def read_active_tags(lang: Optional[str] = None, db: Session = Depends(get_db)):
    return service.list_tags(db, language=lang, active_only=True)

@router.get("/{slug}", response_model=TagResponse)
def read_active_tag(slug: str, lang: Optional[str] = None, db: Session = Depends(get_db)):
    return service.get_tag_by_slug(db, slug, language=lang, active_only=True)

@admin_router.post("/", response_model=TagResponse, status_code=201)
def create_tag(tag: TagCreate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return service.create_tag(db, tag.model_dump(exclude={"translations"}), tag.translations)

@admin_router.get("/", response_model=List[TagResponse])
def read_tags(lang: Optional[str] = None, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return service.list_tags(db, language=lang)

@admin_router.get("/slug/{slug}", response_model=TagResponse)
def read_tag_by_slug(slug: str, lang: Optional[str] = None, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return service.get_tag_by_slug(db, slug, language=lang)

@admin_router.get("/{tag_id}", response_model=TagResponse)
def read_tag(tag_id: str, lang: Optional[str] = None, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return service.get_tag(db, tag_id, language=lang)

@admin_router.patch("/{tag_id}", response_model=TagResponse)
def update_tag(tag_id: str, changes: TagUpdate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    tag = service.get_tag(db, tag_id)
    data = changes.model_dump(exclude_unset=True, exclude={"translations"})
    return service.update_tag(db, tag, data, changes.translations)

@admin_router.delete("/{tag_id}", response_model=MessageResponse)
def delete_tag(tag_id: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    tag = service.get_tag(db, tag_id)
    service.delete_tag(db, tag)
    return {"detail": "Tag deleted"}
