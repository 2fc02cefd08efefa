from sqlalchemy import Column, String, Boolean, ForeignKey, Text, UniqueConstraint
from sqlalchemy.orm import relationship
from contenthub.config.database import Base
from contenthub.models.mixins import SoftDeleteMixin, TimestampMixin, new_id

class Category(TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = "categories"

    id = Column(String(36), primary_key=True, default=new_id)
    slug = Column(String(255), unique=True, index=True, nullable=False)
    featured_image = Column(String(500), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    translations = relationship(
        "CategoryTranslation",
        back_populates="category",
        cascade="all, delete-orphan",
    )

class CategoryTranslation(TimestampMixin, Base):
    __tablename__ = "category_translations"
    __table_args__ = (UniqueConstraint("category_id", "language_id", name="uq_category_translation_language"),)

    id = Column(String(36), primary_key=True, default=new_id)
    category_id = Column(String(36), ForeignKey("categories.id", ondelete="CASCADE"), nullable=False, index=True)
    language_id = Column(String(36), ForeignKey("languages.id"), nullable=False)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    slug = Column(String(255), nullable=False)
    seo_title = Column(String(255), nullable=True)
    seo_description = Column(Text, nullable=True)
    seo_keywords = Column(Text, nullable=True)

    category = relationship("Category", back_populates="translations")
    language = relationship("Language", lazy="joined")
