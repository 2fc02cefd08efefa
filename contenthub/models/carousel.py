from sqlalchemy import Column, String, Boolean, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship
from contenthub.config.database import Base
from contenthub.models.mixins import SoftDeleteMixin, TimestampMixin, new_id

class Carousel(TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = "carousels"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    autoplay_delay = Column(Integer, default=0, nullable=False) # milliseconds, 0 = no autoplay
    show_indicators = Column(Boolean, default=True, nullable=False)
    show_navigation = Column(Boolean, default=True, nullable=False)
    article_id = Column(String(36), ForeignKey("articles.id", ondelete="SET NULL"), nullable=True, index=True)
    page_id = Column(String(36), ForeignKey("pages.id", ondelete="SET NULL"), nullable=True, index=True)

    slides = relationship(
        "CarouselSlide",
        back_populates="carousel",
        cascade="all, delete-orphan",
        order_by="CarouselSlide.order",
        lazy="selectin",
    )

class CarouselSlide(TimestampMixin, Base):
    __tablename__ = "carousel_slides"

    id = Column(String(36), primary_key=True, default=new_id)
    carousel_id = Column(String(36), ForeignKey("carousels.id", ondelete="CASCADE"), nullable=False, index=True)
    image_url = Column(String(500), nullable=False)
    title = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    link_url = Column(String(500), nullable=True)
    link_target = Column(String(10), default="_self", nullable=False) # _self, _blank, _parent, _top
    order = Column(Integer, default=0, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    alt_text = Column(String(255), nullable=True)

    carousel = relationship("Carousel", back_populates="slides")
