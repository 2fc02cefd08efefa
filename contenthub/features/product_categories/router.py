from datetime import datetime
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Optional
from pydantic import Field
from contenthub.common import slug as slugs
from contenthub.common.exceptions import ConflictException, NotFoundException
from contenthub.common.schemas import MessageResponse, ORMModel, RequestModel
from contenthub.config.database import get_db
from contenthub.features.auth.dependencies import get_current_user
from contenthub.models.catalog import ProductCategory
from contenthub.models.user import User

router = APIRouter(prefix="/product-categories", tags=["Product Categories"])
admin_router = APIRouter(prefix="/admin/product-categories", tags=["Product Categories"])

class ProductCategoryCreate(RequestModel):
    name: str = Field(min_length=1, max_length=255)
    slug: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = None
    image_url: Optional[str] = None
    is_active: bool = True
    sort_order: int = 0

class ProductCategoryUpdate(RequestModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    slug: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = None
    image_url: Optional[str] = None
    is_active: Optional[bool] = None
    sort_order: Optional[int] = None

class ProductCategoryResponse(ORMModel):
    id: str
    name: str
    slug: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    is_active: bool
    sort_order: int
    created_at: Optional[datetime] = None

def _ensure_slug_available(db: Session, slug: str, exclude_id: str = None):
    query = db.query(ProductCategory).filter(ProductCategory.slug == slug)
    if exclude_id:
        query = query.filter(ProductCategory.id != exclude_id)
    if query.first():
        raise ConflictException("A product category with this slug already exists")

def get_product_category_or_404(db: Session, category_id: str, active_only: bool = False) -> ProductCategory:
    query = db.query(ProductCategory).filter(ProductCategory.id == category_id, ProductCategory.live())
    if active_only:
        query = query.filter(ProductCategory.is_active.is_(True))
    category = query.first()
    if not category:
        raise NotFoundException("Product category not found")
    return category

def _ordered(query):
    return query.order_by(ProductCategory.sort_order, ProductCategory.name).all()

# Public

@router.get("/", response_model=List[ProductCategoryResponse])
def read_active_product_categories(db: Session = Depends(get_db)):
    return _ordered(db.query(ProductCategory).filter(ProductCategory.live(), ProductCategory.is_active.is_(True)))

@router.get("/slug/{slug}", response_model=ProductCategoryResponse)
def read_product_category_by_slug(slug: str, db: Session = Depends(get_db)):
    category = db.query(ProductCategory).filter(
        ProductCategory.slug == slug,
        ProductCategory.live(),
        ProductCategory.is_active.is_(True),
    ).first()
    if not category:
        raise NotFoundException("Product category not found")
    return category

@router.get("/{category_id}", response_model=ProductCategoryResponse)
def read_active_product_category(category_id: str, db: Session = Depends(get_db)):
    return get_product_category_or_404(db, category_id, active_only=True)

# Admin

@admin_router.post("/", response_model=ProductCategoryResponse, status_code=201)
def create_product_category(category: ProductCategoryCreate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    data = category.model_dump()
    data["slug"] = slugs.generate(data["slug"] or data["name"])
    _ensure_slug_available(db, data["slug"])

    new_category = ProductCategory(**data)
    db.add(new_category)
    db.commit()
    db.refresh(new_category)
    return new_category

@admin_router.get("/", response_model=List[ProductCategoryResponse])
def read_product_categories(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return _ordered(db.query(ProductCategory).filter(ProductCategory.live()))

@admin_router.get("/{category_id}", response_model=ProductCategoryResponse)
def read_product_category(category_id: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return get_product_category_or_404(db, category_id)

@admin_router.patch("/{category_id}", response_model=ProductCategoryResponse)
def update_product_category(category_id: str, changes: ProductCategoryUpdate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    category = get_product_category_or_404(db, category_id)
    data = changes.model_dump(exclude_unset=True)
    if data.get("slug"):
        data["slug"] = slugs.generate(data["slug"])
        _ensure_slug_available(db, data["slug"], exclude_id=category.id)

    for field, value in data.items():
        setattr(category, field, value)
    db.commit()
    db.refresh(category)
    return category

@admin_router.delete("/{category_id}", response_model=MessageResponse)
def delete_product_category(category_id: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    category = get_product_category_or_404(db, category_id)
    category.soft_delete()
    db.commit()
    return {"detail": "Product category deleted"}
