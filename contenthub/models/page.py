from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, Integer, JSON, Text, exists
from sqlalchemy.orm import object_session, relationship
from contenthub.config.database import Base
from contenthub.common.enums import PageStatus
from contenthub.models.mixins import SoftDeleteMixin, TimestampMixin, new_id

class Page(TimestampMixin, SoftDeleteMixin, Base):
    """A CMS page. The tree is stored as a plain `parent_id` column; services
    build parent/child views from an id-indexed map instead of ORM back-references."""

    __tablename__ = "pages"

    id = Column(String(36), primary_key=True, default=new_id)
    title = Column(String(255), nullable=False)
    subtitle = Column(String(500), nullable=True)
    content = Column(Text, nullable=False)
    slug = Column(String(255), unique=True, index=True, nullable=False)
    status = Column(String(20), default=PageStatus.DRAFT.value, nullable=False, index=True)

    # SEO
    seo_title = Column(String(255), nullable=True)
    seo_description = Column(String(500), nullable=True)
    seo_keywords = Column(Text, nullable=True)
    seo_json_ld = Column(JSON, nullable=True)

    # Menus
    show_in_home_menu = Column(Boolean, default=False, nullable=False, index=True)
    show_in_footer_menu = Column(Boolean, default=False, nullable=False, index=True)
    menu_order = Column(Integer, default=0, nullable=False)

    main_image = Column(String(500), nullable=True)
    main_video = Column(String(500), nullable=True)
    published_at = Column(DateTime, nullable=True)
    scheduled_at = Column(DateTime, nullable=True)

    parent_id = Column(String(36), ForeignKey("pages.id"), nullable=True, index=True)
    author_id = Column(String(36), ForeignKey("users.id"), nullable=False)

    view_count = Column(Integer, default=0, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    author = relationship("User", lazy="joined")

    @property
    def is_published(self) -> bool:
        return self.status == PageStatus.PUBLISHED.value and self.is_active

    @property
    def has_children(self) -> bool:
        session = object_session(self)
        if session is None:
            return False
        return session.query(
            exists().where(Page.parent_id == self.id, Page.deleted_at.is_(None))
        ).scalar()
