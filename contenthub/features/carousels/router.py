from datetime import datetime
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Literal, Optional
from pydantic import Field
from contenthub.common.schemas import MessageResponse, ORMModel, RequestModel
from contenthub.config.database import get_db
from contenthub.features.auth.dependencies import get_current_user
from contenthub.features.carousels import service
from contenthub.models.user import User

router = APIRouter(prefix="/carousels", tags=["Carousels"])
admin_router = APIRouter(prefix="/admin/carousels", tags=["Carousels"])

LinkTarget = Literal["_self", "_blank", "_parent", "_top"]

class SlideIn(RequestModel):
    image_url: str = Field(min_length=1, max_length=500)
    title: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = None
    link_url: Optional[str] = Field(default=None, max_length=500)
    link_target: LinkTarget = "_self"
    order: Optional[int] = None # list position when omitted
    is_active: bool = True
    alt_text: Optional[str] = Field(default=None, max_length=255)

class CarouselCreate(RequestModel):
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    is_active: bool = True
    autoplay_delay: int = Field(default=0, ge=0)
    show_indicators: bool = True
    show_navigation: bool = True
    article_id: Optional[str] = None
    page_id: Optional[str] = None
    slides: List[SlideIn] = []

class CarouselUpdate(RequestModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    is_active: Optional[bool] = None
    autoplay_delay: Optional[int] = Field(default=None, ge=0)
    show_indicators: Optional[bool] = None
    show_navigation: Optional[bool] = None
    article_id: Optional[str] = None
    page_id: Optional[str] = None
    slides: Optional[List[SlideIn]] = None

class SlideReorder(RequestModel):
    slide_ids: List[str]

class SlideResponse(ORMModel):
    id: str
    image_url: str
    title: Optional[str] = None
    description: Optional[str] = None
    link_url: Optional[str] = None
    link_target: str
    order: int
    is_active: bool
    alt_text: Optional[str] = None

class CarouselResponse(ORMModel):
    id: str
    name: str
    description: Optional[str] = None
    is_active: bool
    autoplay_delay: int
    show_indicators: bool
    show_navigation: bool
    article_id: Optional[str] = None
    page_id: Optional[str] = None
    slides: List[SlideResponse] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

def _slides_payload(slides: Optional[List[SlideIn]]):
    if slides is None:
        return None
    return [slide.model_dump(exclude_none=True) for slide in slides]

# Public

@router.get("/", response_model=List[CarouselResponse])
def read_active_carousels(db: Session = Depends(get_db)):
    return service.list_carousels(db, active_only=True)

@router.get("/article/{article_id}", response_model=List[CarouselResponse])
def read_article_carousels(article_id: str, db: Session = Depends(get_db)):
    return service.list_by_article(db, article_id)

@router.get("/page/{page_id}", response_model=List[CarouselResponse])
def read_page_carousels(page_id: str, db: Session = Depends(get_db)):
    return service.list_by_page(db, page_id)

@router.get("/{carousel_id}", response_model=CarouselResponse)
def read_active_carousel(carousel_id: str, db: Session = Depends(get_db)):
    return service.get_carousel(db, carousel_id, active_only=True)

# Admin

@admin_router.post("/", response_model=CarouselResponse, status_code=201)
def create_carousel(carousel: CarouselCreate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    data = carousel.model_dump(exclude={"slides"})
    data["slides"] = _slides_payload(carousel.slides)
    return service.create_carousel(db, data)

@admin_router.get("/", response_model=List[CarouselResponse])
def read_carousels(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return service.list_carousels(db)

@admin_router.get("/{carousel_id}", response_model=CarouselResponse)
def read_carousel(carousel_id: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return service.get_carousel(db, carousel_id)

@admin_router.patch("/{carousel_id}", response_model=CarouselResponse)
def update_carousel(carousel_id: str, changes: CarouselUpdate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    carousel = service.get_carousel(db, carousel_id)
    data = changes.model_dump(exclude_unset=True, exclude={"slides"})
    if "slides" in changes.model_fields_set:
        data["slides"] = _slides_payload(changes.slides) or []
    return service.update_carousel(db, carousel, data)

@admin_router.patch("/{carousel_id}/reorder", response_model=CarouselResponse)
def reorder_carousel_slides(carousel_id: str, payload: SlideReorder, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    carousel = service.get_carousel(db, carousel_id)
    return service.reorder_slides(db, carousel, payload.slide_ids)

@admin_router.delete("/{carousel_id}", response_model=MessageResponse)
def delete_carousel(carousel_id: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    carousel = service.get_carousel(db, carousel_id)
    service.delete_carousel(db, carousel)
    return {"detail": "Carousel deleted"}
