from datetime import datetime
from decimal import Decimal
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Optional
from pydantic import Field
from contenthub.common.enums import MediaType
from contenthub.common.schemas import MessageResponse, ORMModel, RequestModel
from contenthub.config.database import get_db
from contenthub.features.auth.dependencies import get_current_user
from contenthub.features.products import service
from contenthub.models.user import User

router = APIRouter(prefix="/products", tags=["Products"])
admin_router = APIRouter(prefix="/admin/products", tags=["Products"])

class ProductMediaIn(RequestModel):
    type: MediaType = MediaType.IMAGE.value
    url: str = Field(min_length=1, max_length=500)
    thumbnail_small: Optional[str] = None
    thumbnail_medium: Optional[str] = None
    thumbnail_large: Optional[str] = None
    alt_text: Optional[str] = Field(default=None, max_length=255)
    sort_order: Optional[int] = None
    is_active: bool = True

class ProductCreate(RequestModel):
    name: str = Field(min_length=1, max_length=255)
    product_code: str = Field(min_length=1, max_length=100)
    slug: Optional[str] = Field(default=None, max_length=255)
    long_description: str
    short_description: str = Field(max_length=500)
    sale_price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    offer_price: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    is_offer_active: bool = False
    purchase_price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    available_stock: int = Field(default=0, ge=0)
    stock_limit: int = Field(default=0, ge=0)
    weight: Optional[Decimal] = Field(default=None, ge=0)
    size: Optional[str] = Field(default=None, max_length=100)
    has_shipping: bool = True
    has_pickup: bool = True
    is_active: bool = True
    main_image_url: Optional[str] = None
    main_video_url: Optional[str] = None
    thumbnail_small: Optional[str] = None
    thumbnail_medium: Optional[str] = None
    thumbnail_large: Optional[str] = None
    category_id: str
    brand_id: Optional[str] = None
    media: List[ProductMediaIn] = []

class ProductUpdate(RequestModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    product_code: Optional[str] = Field(default=None, min_length=1, max_length=100)
    slug: Optional[str] = Field(default=None, max_length=255)
    long_description: Optional[str] = None
    short_description: Optional[str] = Field(default=None, max_length=500)
    sale_price: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    offer_price: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    is_offer_active: Optional[bool] = None
    purchase_price: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    available_stock: Optional[int] = Field(default=None, ge=0)
    stock_limit: Optional[int] = Field(default=None, ge=0)
    weight: Optional[Decimal] = Field(default=None, ge=0)
    size: Optional[str] = Field(default=None, max_length=100)
    has_shipping: Optional[bool] = None
    has_pickup: Optional[bool] = None
    is_active: Optional[bool] = None
    main_image_url: Optional[str] = None
    main_video_url: Optional[str] = None
    thumbnail_small: Optional[str] = None
    thumbnail_medium: Optional[str] = None
    thumbnail_large: Optional[str] = None
    category_id: Optional[str] = None
    brand_id: Optional[str] = None
    media: Optional[List[ProductMediaIn]] = None

class StockUpdate(RequestModel):
    available_stock: int = Field(ge=0)
    stock_limit: Optional[int] = Field(default=None, ge=0)

class ProductMediaResponse(ORMModel):
    id: str
    type: str
    url: str
    thumbnail_small: Optional[str] = None
    thumbnail_medium: Optional[str] = None
    thumbnail_large: Optional[str] = None
    alt_text: Optional[str] = None
    sort_order: int
    is_active: bool

class ProductPublicResponse(ORMModel):
    id: str
    name: str
    product_code: str
    slug: str
    long_description: str
    short_description: str
    sale_price: float
    offer_price: Optional[float] = None
    is_offer_active: bool
    available_stock: int
    weight: Optional[float] = None
    size: Optional[str] = None
    has_shipping: bool
    has_pickup: bool
    main_image_url: Optional[str] = None
    main_video_url: Optional[str] = None
    thumbnail_small: Optional[str] = None
    thumbnail_medium: Optional[str] = None
    thumbnail_large: Optional[str] = None
    category_id: str
    brand_id: Optional[str] = None
    media: List[ProductMediaResponse] = []
    is_in_stock: bool
    current_price: float
    is_on_sale: bool

class ProductResponse(ProductPublicResponse):
    purchase_price: float
    stock_limit: int
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

def _media_payload(media: Optional[List[ProductMediaIn]]):
    if media is None:
        return None
    return [item.model_dump(exclude_none=True) for item in media]

# Public

@router.get("/", response_model=List[ProductPublicResponse])
def read_active_products(
    category_id: Optional[str] = None,
    brand_id: Optional[str] = None,
    in_stock: Optional[bool] = None,
    db: Session = Depends(get_db),
):
    return service.list_products(db, category_id=category_id, brand_id=brand_id, in_stock=in_stock, active_only=True)

@router.get("/category/{category_id}", response_model=List[ProductPublicResponse])
def read_products_by_category(category_id: str, db: Session = Depends(get_db)):
    return service.list_products(db, category_id=category_id, active_only=True)

@router.get("/brand/{brand_id}", response_model=List[ProductPublicResponse])
def read_products_by_brand(brand_id: str, db: Session = Depends(get_db)):
    return service.list_products(db, brand_id=brand_id, active_only=True)

@router.get("/slug/{slug}", response_model=ProductPublicResponse)
def read_product_by_slug(slug: str, db: Session = Depends(get_db)):
    return service.get_product_by_slug(db, slug, active_only=True)

@router.get("/{product_id}", response_model=ProductPublicResponse)
def read_active_product(product_id: str, db: Session = Depends(get_db)):
    return service.get_product(db, product_id, active_only=True)

# Admin

@admin_router.post("/", response_model=ProductResponse, status_code=201)
def create_product(product: ProductCreate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    data = product.model_dump(exclude={"media"})
    data["media"] = _media_payload(product.media)
    return service.create_product(db, data)

@admin_router.get("/", response_model=List[ProductResponse])
def read_products(
    category_id: Optional[str] = None,
    brand_id: Optional[str] = None,
    in_stock: Optional[bool] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return service.list_products(db, category_id=category_id, brand_id=brand_id, in_stock=in_stock)

@admin_router.get("/category/{category_id}", response_model=List[ProductResponse])
def read_products_by_category_admin(category_id: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return service.list_products(db, category_id=category_id)

@admin_router.get("/brand/{brand_id}", response_model=List[ProductResponse])
def read_products_by_brand_admin(brand_id: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return service.list_products(db, brand_id=brand_id)

@admin_router.get("/slug/{slug}", response_model=ProductResponse)
def read_product_by_slug_admin(slug: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return service.get_product_by_slug(db, slug)

@admin_router.get("/{product_id}", response_model=ProductResponse)
def read_product(product_id: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return service.get_product(db, product_id)

@admin_router.patch("/{product_id}", response_model=ProductResponse)
def update_product(product_id: str, changes: ProductUpdate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    product = service.get_product(db, product_id)
    data = changes.model_dump(exclude_unset=True, exclude={"media"})
    if "media" in changes.model_fields_set:
        data["media"] = _media_payload(changes.media) or []
    return service.update_product(db, product, data)

@admin_router.patch("/{product_id}/stock", response_model=ProductResponse)
def update_product_stock(product_id: str, payload: StockUpdate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    product = service.get_product(db, product_id)
    return service.update_stock(db, product, payload.available_stock, payload.stock_limit)

@admin_router.delete("/{product_id}", response_model=MessageResponse)
def delete_product(product_id: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    product = service.get_product(db, product_id)
    service.delete_product(db, product)
    return {"detail": "Product deleted"}
