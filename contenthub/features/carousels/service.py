import logging
from typing import List, Optional
from sqlalchemy.orm import Session
from contenthub.common.exceptions import BadRequestException, NotFoundException
from contenthub.models.article import Article
from contenthub.models.carousel import Carousel, CarouselSlide
from contenthub.models.page import Page

logger = logging.getLogger(__name__)

def _check_links(db: Session, article_id: Optional[str], page_id: Optional[str]):
    if article_id and not db.query(Article).filter(Article.id == article_id, Article.live()).first():
        raise NotFoundException("Article not found")
    if page_id and not db.query(Page).filter(Page.id == page_id, Page.live()).first():
        raise NotFoundException("Page not found")

def _build_slides(slides: list) -> List[CarouselSlide]:
    return [
        CarouselSlide(**{"order": position, **slide})
        for position, slide in enumerate(slides)
    ]

def create_carousel(db: Session, data: dict) -> Carousel:
    _check_links(db, data.get("article_id"), data.get("page_id"))
    slides = data.pop("slides", None) or []
    carousel = Carousel(**data)
    carousel.slides = _build_slides(slides)
    db.add(carousel)
    db.commit()
    db.refresh(carousel)
    logger.info("Created carousel %s with %d slides", carousel.id, len(carousel.slides))
    return carousel

def list_carousels(db: Session, active_only: bool = False):
    query = db.query(Carousel).filter(Carousel.live())
    if active_only:
        query = query.filter(Carousel.is_active.is_(True))
    return query.order_by(Carousel.created_at.desc()).all()

def list_by_article(db: Session, article_id: str):
    return db.query(Carousel).filter(
        Carousel.article_id == article_id,
        Carousel.is_active.is_(True),
        Carousel.live(),
    ).all()

def list_by_page(db: Session, page_id: str):
    return db.query(Carousel).filter(
        Carousel.page_id == page_id,
        Carousel.is_active.is_(True),
        Carousel.live(),
    ).all()

def get_carousel(db: Session, carousel_id: str, active_only: bool = False) -> Carousel:
    query = db.query(Carousel).filter(Carousel.id == carousel_id, Carousel.live())
    if active_only:
        query = query.filter(Carousel.is_active.is_(True))
    carousel = query.first()
    if not carousel:
        raise NotFoundException("Carousel not found")
    return carousel

def update_carousel(db: Session, carousel: Carousel, changes: dict) -> Carousel:
    _check_links(db, changes.get("article_id"), changes.get("page_id"))
    slides = changes.pop("slides", None)
    for field, value in changes.items():
        setattr(carousel, field, value)
    if slides is not None:
        carousel.slides = _build_slides(slides)
    db.commit()
    db.refresh(carousel)
    return carousel

def reorder_slides(db: Session, carousel: Carousel, slide_ids: List[str]) -> Carousel:
    slides = {slide.id: slide for slide in carousel.slides}
    if set(slide_ids) != set(slides) or len(slide_ids) != len(slides):
        raise BadRequestException("Slide ids must list every slide of the carousel exactly once")
    for position, slide_id in enumerate(slide_ids):
        slides[slide_id].order = position
    db.commit()
    db.expire(carousel, ["slides"])
    db.refresh(carousel)
    return carousel

def delete_carousel(db: Session, carousel: Carousel):
    carousel.soft_delete()
    db.commit()
    logger.info("Deleted carousel %s", carousel.id)
