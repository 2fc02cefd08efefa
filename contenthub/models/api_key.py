from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, Index, JSON, Text, text
from sqlalchemy.orm import relationship
from contenthub.config.database import Base
from contenthub.models.mixins import SoftDeleteMixin, TimestampMixin, new_id

class ApiKey(TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = "api_keys"
    __table_args__ = (
        Index(
            "uq_api_keys_user_name_live",
            "user_id",
            "name",
            unique=True,
            sqlite_where=text("deleted_at IS NULL"),
            postgresql_where=text("deleted_at IS NULL"),
        ),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    token = Column(String(64), unique=True, nullable=False) # sha-256 hex of the signed token, never the token itself
    name = Column(String(100), nullable=False) # e.g. "Mobile App", "Admin Panel"
    expires_at = Column(DateTime, nullable=True)
    last_used_at = Column(DateTime, nullable=True)
    last_used_ip = Column(String(64), nullable=True)
    user_agent = Column(String(255), nullable=True)
    scopes = Column(JSON, default=list, nullable=False) # e.g. ['read:users', 'write:articles']
    is_active = Column(Boolean, default=True, nullable=False)
    notes = Column(Text, nullable=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    user = relationship("User", lazy="joined")
