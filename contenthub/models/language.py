from sqlalchemy import Column, String, Boolean
from contenthub.config.database import Base
from contenthub.models.mixins import SoftDeleteMixin, TimestampMixin, new_id

class Language(TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = "languages"

    id = Column(String(36), primary_key=True, default=new_id)
    code = Column(String(5), unique=True, index=True, nullable=False) # e.g. 'en', 'es', 'fr'
    name = Column(String(100), nullable=False)
    is_default = Column(Boolean, default=False, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
