from sqlalchemy import Column, String, Boolean, ForeignKey, Text, UniqueConstraint
from sqlalchemy.orm import relationship
from contenthub.config.database import Base
from contenthub.models.mixins import SoftDeleteMixin, TimestampMixin, new_id

class Tag(TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = "tags"

    id = Column(String(36), primary_key=True, default=new_id)
    slug = Column(String(255), unique=True, index=True, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    translations = relationship(
        "TagTranslation",
        back_populates="tag",
        cascade="all, delete-orphan",
    )

class TagTranslation(TimestampMixin, Base):
    __tablename__ = "tag_translations"
    __table_args__ = (UniqueConstraint("tag_id", "language_id", name="uq_tag_translation_language"),)

    id = Column(String(36), primary_key=True, default=new_id)
    tag_id = Column(String(36), ForeignKey("tags.id", ondelete="CASCADE"), nullable=False, index=True)
    language_id = Column(String(36), ForeignKey("languages.id"), nullable=False)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    slug = Column(String(255), nullable=False)

    tag = relationship("Tag", back_populates="translations")
    language = relationship("Language", lazy="joined")
