from datetime import datetime
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Optional
from pydantic import Field
from contenthub.common.schemas import MessageResponse, ORMModel, RequestModel
from contenthub.config.database import get_db
from contenthub.features.auth.dependencies import get_current_user
from contenthub.features.brands import service
from contenthub.features.product_categories.router import ProductCategoryResponse
from contenthub.models.user import User

router = APIRouter(prefix="/public/brands", tags=["Brands"])
admin_router = APIRouter(prefix="/admin/brands", tags=["Brands"])

class BrandCreate(RequestModel):
    name: str = Field(min_length=1, max_length=100)
    slug: Optional[str] = Field(default=None, max_length=100)
    description: Optional[str] = None
    logo_url: Optional[str] = None
    website_url: Optional[str] = None
    is_active: bool = True
    sort_order: int = 0
    country_of_origin: Optional[str] = Field(default=None, max_length=100)
    founded_year: Optional[int] = Field(default=None, ge=1000, le=9999)
    category_ids: List[str] = []

class BrandUpdate(RequestModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    slug: Optional[str] = Field(default=None, max_length=100)
    description: Optional[str] = None
    logo_url: Optional[str] = None
    website_url: Optional[str] = None
    is_active: Optional[bool] = None
    sort_order: Optional[int] = None
    country_of_origin: Optional[str] = Field(default=None, max_length=100)
    founded_year: Optional[int] = Field(default=None, ge=1000, le=9999)
    category_ids: Optional[List[str]] = None

class BrandCategories(RequestModel):
    category_ids: List[str] = Field(min_length=1)

class BrandPublicResponse(ORMModel):
    id: str
    name: str
    slug: str
    description: Optional[str] = None
    logo_url: Optional[str] = None
    website_url: Optional[str] = None
    country_of_origin: Optional[str] = None
    founded_year: Optional[int] = None
    categories: List[ProductCategoryResponse] = []
    active_products_count: int

class BrandResponse(BrandPublicResponse):
    is_active: bool
    sort_order: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

# Public

@router.get("/", response_model=List[BrandPublicResponse])
def read_active_brands(db: Session = Depends(get_db)):
    return service.list_brands(db, active_only=True)

@router.get("/slug/{slug}", response_model=BrandPublicResponse)
def read_brand_by_slug(slug: str, db: Session = Depends(get_db)):
    return service.get_brand_by_slug(db, slug, active_only=True)

@router.get("/category/{category_id}", response_model=List[BrandPublicResponse])
def read_brands_by_category(category_id: str, db: Session = Depends(get_db)):
    return service.list_brands_by_category(db, category_id)

# Admin

@admin_router.post("/", response_model=BrandResponse, status_code=201)
def create_brand(brand: BrandCreate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return service.create_brand(db, brand.model_dump())

@admin_router.get("/", response_model=List[BrandResponse])
def read_brands(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return service.list_brands(db)

@admin_router.get("/{brand_id}", response_model=BrandResponse)
def read_brand(brand_id: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return service.get_brand(db, brand_id)

@admin_router.patch("/{brand_id}", response_model=BrandResponse)
def update_brand(brand_id: str, changes: BrandUpdate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    brand = service.get_brand(db, brand_id)
    return service.update_brand(db, brand, changes.model_dump(exclude_unset=True))

@admin_router.post("/{brand_id}/categories", response_model=BrandResponse)
def add_brand_categories(brand_id: str, payload: BrandCategories, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    brand = service.get_brand(db, brand_id)
    return service.add_categories(db, brand, payload.category_ids)

@admin_router.delete("/{brand_id}/categories", response_model=BrandResponse)
def remove_brand_categories(brand_id: str, payload: BrandCategories, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    brand = service.get_brand(db, brand_id)
    return service.remove_categories(db, brand, payload.category_ids)

@admin_router.delete("/{brand_id}", response_model=MessageResponse)
def delete_brand(brand_id: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    brand = service.get_brand(db, brand_id)
    service.delete_brand(db, brand)
    return {"detail": "Brand deleted"}
