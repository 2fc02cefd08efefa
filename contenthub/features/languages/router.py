from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Optional
from pydantic import Field
from contenthub.common.schemas import MessageResponse, ORMModel, RequestModel
from contenthub.config.database import get_db
from contenthub.features.auth.dependencies import get_current_user
from contenthub.features.languages import service
from contenthub.models.user import User

router = APIRouter(prefix="/languages", tags=["Languages"])
admin_router = APIRouter(prefix="/admin/languages", tags=["Languages"])

class LanguageCreate(RequestModel):
    code: str = Field(min_length=2, max_length=5)
    name: str = Field(min_length=1, max_length=100)
    is_default: bool = False
    is_active: bool = True

class LanguageUpdate(RequestModel):
    code: Optional[str] = Field(default=None, min_length=2, max_length=5)
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    is_default: Optional[bool] = None
    is_active: Optional[bool] = None

class LanguageResponse(ORMModel):
    id: str
    code: str
    name: str
    is_default: bool
    is_active: bool

# Public

@router.get("/", response_model=List[LanguageResponse])
def read_active_languages(db: Session = Depends(get_db)):
    return service.list_active_languages(db)

@router.get("/default", response_model=LanguageResponse)
def read_default_language(db: Session = Depends(get_db)):
    return service.get_default_language(db)

# Admin

@admin_router.post("/", response_model=LanguageResponse, status_code=201)
def create_language(language: LanguageCreate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return service.create_language(db, language.model_dump())

@admin_router.get("/", response_model=List[LanguageResponse])
def read_languages(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return service.list_languages(db)

@admin_router.get("/{language_id}", response_model=LanguageResponse)
def read_language(language_id: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return service.get_language(db, language_id)

@admin_router.patch("/{language_id}", response_model=LanguageResponse)
def update_language(language_id: str, changes: LanguageUpdate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    language = service.get_language(db, language_id)
    return service.update_language(db, language, changes.model_dump(exclude_unset=True))

@admin_router.delete("/{language_id}", response_model=MessageResponse)
def delete_language(language_id: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    language = service.get_language(db, language_id)
    service.delete_language(db, language)
    return {"detail": "Language deleted"}
