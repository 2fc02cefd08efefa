from datetime import datetime
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import Any, Dict, List, Optional
from pydantic import Field
from contenthub.common.schemas import MessageResponse, ORMModel, RequestModel
from contenthub.config.database import get_db
from contenthub.features.auth.dependencies import get_current_user
from contenthub.features.blogs import service
from contenthub.models.user import User

router = APIRouter(prefix="/blogs", tags=["Blogs"])
admin_router = APIRouter(prefix="/admin/blogs", tags=["Blogs"])

class BlogCreate(RequestModel):
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    seo_title: Optional[str] = Field(default=None, max_length=255)
    seo_description: Optional[str] = None
    seo_keywords: Optional[str] = None
    featured_image: Optional[str] = None
    is_active: bool = True
    owner_id: Optional[str] = None # defaults to the caller

class BlogUpdate(RequestModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    seo_title: Optional[str] = Field(default=None, max_length=255)
    seo_description: Optional[str] = None
    seo_keywords: Optional[str] = None
    featured_image: Optional[str] = None
    is_active: Optional[bool] = None
    owner_id: Optional[str] = None

class BlogResponse(ORMModel):
    id: str
    name: str
    description: Optional[str] = None
    slug: str
    seo_title: Optional[str] = None
    seo_description: Optional[str] = None
    seo_keywords: Optional[str] = None
    seo_json_ld: Optional[Dict[str, Any]] = None
    featured_image: Optional[str] = None
    is_active: bool
    owner_id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

# Public

@router.get("/", response_model=List[BlogResponse])
def read_active_blogs(db: Session = Depends(get_db)):
    return service.list_active_blogs(db)

@router.get("/{slug}", response_model=BlogResponse)
def read_blog_by_slug(slug: str, db: Session = Depends(get_db)):
    return service.get_blog_by_slug(db, slug, active_only=True)

# Admin

@admin_router.post("/", response_model=BlogResponse, status_code=201)
def create_blog(blog: BlogCreate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    data = blog.model_dump()
    data["owner_id"] = data["owner_id"] or current_user.id
    return service.create_blog(db, data)

@admin_router.get("/", response_model=List[BlogResponse])
def read_blogs(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return service.list_blogs(db)

@admin_router.get("/slug/{slug}", response_model=BlogResponse)
def read_blog_by_slug_admin(slug: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return service.get_blog_by_slug(db, slug)

@admin_router.get("/{blog_id}", response_model=BlogResponse)
def read_blog(blog_id: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return service.get_blog(db, blog_id)

@admin_router.patch("/{blog_id}", response_model=BlogResponse)
def update_blog(blog_id: str, changes: BlogUpdate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    blog = service.get_blog(db, blog_id)
    return service.update_blog(db, blog, changes.model_dump(exclude_unset=True))

@admin_router.delete("/{blog_id}", response_model=MessageResponse)
def delete_blog(blog_id: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    blog = service.get_blog(db, blog_id)
    service.delete_blog(db, blog)
    return {"detail": "Blog deleted"}
