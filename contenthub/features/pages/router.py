from datetime import datetime
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, field_validator
from contenthub.common.enums import MenuType, PageStatus
from contenthub.common.schemas import MessageResponse, ORMModel, RequestModel
from contenthub.config.database import get_db
from contenthub.features.auth.dependencies import get_current_user
from contenthub.features.pages import service
from contenthub.models.user import User

router = APIRouter(prefix="/pages", tags=["Pages"])
admin_router = APIRouter(prefix="/admin/pages", tags=["Pages"])

class PageCreate(RequestModel):
    title: str = Field(min_length=1, max_length=255)
    subtitle: Optional[str] = Field(default=None, max_length=500)
    content: str
    slug: Optional[str] = Field(default=None, max_length=255) # generated from the title when omitted
    status: PageStatus = PageStatus.DRAFT.value
    seo_title: Optional[str] = Field(default=None, max_length=255)
    seo_description: Optional[str] = Field(default=None, max_length=500)
    seo_keywords: Optional[str] = None
    seo_json_ld: Optional[Dict[str, Any]] = None
    show_in_home_menu: bool = False
    show_in_footer_menu: bool = False
    menu_order: int = 0
    main_image: Optional[str] = None
    main_video: Optional[str] = None
    scheduled_at: Optional[datetime] = None
    parent_id: Optional[str] = None
    is_active: bool = True

class PageUpdate(RequestModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    subtitle: Optional[str] = Field(default=None, max_length=500)
    content: Optional[str] = None
    slug: Optional[str] = Field(default=None, max_length=255)
    status: Optional[PageStatus] = None
    seo_title: Optional[str] = Field(default=None, max_length=255)
    seo_description: Optional[str] = Field(default=None, max_length=500)
    seo_keywords: Optional[str] = None
    seo_json_ld: Optional[Dict[str, Any]] = None
    show_in_home_menu: Optional[bool] = None
    show_in_footer_menu: Optional[bool] = None
    menu_order: Optional[int] = None
    main_image: Optional[str] = None
    main_video: Optional[str] = None
    scheduled_at: Optional[datetime] = None
    parent_id: Optional[str] = None # null moves the page to the root
    is_active: Optional[bool] = None

    @field_validator("title", "content", "slug", "status", "show_in_home_menu", "show_in_footer_menu", "menu_order", "is_active")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("may be omitted but not null")
        return value

class PageResponse(ORMModel):
    id: str
    title: str
    subtitle: Optional[str] = None
    content: str
    slug: str
    status: str
    seo_title: Optional[str] = None
    seo_description: Optional[str] = None
    seo_keywords: Optional[str] = None
    seo_json_ld: Optional[Dict[str, Any]] = None
    show_in_home_menu: bool
    show_in_footer_menu: bool
    menu_order: int
    main_image: Optional[str] = None
    main_video: Optional[str] = None
    published_at: Optional[datetime] = None
    scheduled_at: Optional[datetime] = None
    parent_id: Optional[str] = None
    author_id: str
    view_count: int
    is_active: bool
    is_published: bool
    has_children: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class PageNode(BaseModel):
    id: str
    title: str
    slug: str
    status: str
    menu_order: int
    parent_id: Optional[str] = None
    children: List["PageNode"] = []

# Public

@router.get("/", response_model=List[PageResponse])
def read_published_pages(db: Session = Depends(get_db)):
    return service.list_published_pages(db)

@router.get("/menu/{menu_type}", response_model=List[PageNode])
def read_menu(menu_type: MenuType, db: Session = Depends(get_db)):
    return service.get_menu_structure(db, menu_type)

@router.get("/{slug}", response_model=PageResponse)
def read_published_page(slug: str, db: Session = Depends(get_db)):
    page = service.get_page_by_slug(db, slug, published_only=True)
    return service.increment_view_count(db, page)

# Admin

@admin_router.post("/", response_model=PageResponse, status_code=201)
def create_page(page: PageCreate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return service.create_page(db, page.model_dump(), author=current_user)

@admin_router.get("/", response_model=List[PageResponse])
def read_pages(include_inactive: bool = False, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return service.list_pages(db, include_inactive=include_inactive)

@admin_router.get("/published", response_model=List[PageResponse])
def read_published_pages_admin(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return service.list_published_pages(db)

@admin_router.get("/status/{status}", response_model=List[PageResponse])
def read_pages_by_status(status: PageStatus, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return service.list_pages_by_status(db, status.value)

@admin_router.get("/roots", response_model=List[PageResponse])
def read_root_pages(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return service.list_root_pages(db)

@admin_router.get("/hierarchy", response_model=List[PageNode])
def read_hierarchy(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return service.get_hierarchy(db)

@admin_router.get("/menu/{menu_type}", response_model=List[PageNode])
def read_menu_admin(menu_type: MenuType, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return service.get_menu_structure(db, menu_type)

@admin_router.get("/slug/{slug}", response_model=PageResponse)
def read_page_by_slug(slug: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return service.get_page_by_slug(db, slug)

@admin_router.get("/{page_id}/children", response_model=List[PageResponse])
def read_children(page_id: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return service.list_children(db, page_id)

@admin_router.get("/{page_id}", response_model=PageResponse)
def read_page(page_id: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return service.get_page(db, page_id)

@admin_router.patch("/{page_id}", response_model=PageResponse)
def update_page(page_id: str, changes: PageUpdate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    page = service.get_page(db, page_id)
    return service.update_page(db, page, changes.model_dump(exclude_unset=True))

@admin_router.delete("/{page_id}", response_model=MessageResponse)
def delete_page(page_id: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    page = service.get_page(db, page_id)
    service.delete_page(db, page)
    return {"detail": "Page deleted"}
