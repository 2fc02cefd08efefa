from sqlalchemy import Column, String, Boolean, ForeignKey, Integer, JSON
from contenthub.config.database import Base
from contenthub.models.mixins import SoftDeleteMixin, TimestampMixin, new_id

class File(TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = "files"

    id = Column(String(36), primary_key=True, default=new_id)
    filename = Column(String(255), nullable=False)
    original_name = Column(String(255), nullable=False)
    path = Column(String(500), nullable=False, index=True) # relative to the uploads root
    url = Column(String(1000), nullable=False)
    size = Column(Integer, nullable=False)
    mime_type = Column(String(255), nullable=False)
    type = Column(String(20), nullable=False, index=True)
    format = Column(String(10), nullable=False)
    blog_id = Column(String(36), ForeignKey("blogs.id"), nullable=True, index=True)
    uploaded_by_id = Column(String(36), ForeignKey("users.id"), nullable=True, index=True)
    processed_versions = Column(JSON, default=list)
    file_metadata = Column("metadata", JSON, default=dict) # "metadata" is reserved on declarative classes
    folder = Column(String(255), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
