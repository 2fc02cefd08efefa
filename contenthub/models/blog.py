from sqlalchemy import Column, String, Boolean, ForeignKey, JSON, Text
from sqlalchemy.orm import relationship
from contenthub.config.database import Base
from contenthub.models.mixins import SoftDeleteMixin, TimestampMixin, new_id

class Blog(TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = "blogs"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    slug = Column(String(255), unique=True, index=True, nullable=False)
    seo_title = Column(String(255), nullable=True)
    seo_description = Column(Text, nullable=True)
    seo_keywords = Column(Text, nullable=True)
    seo_json_ld = Column(JSON, nullable=True)
    featured_image = Column(String(500), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    owner_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)

    owner = relationship("User", lazy="joined")
