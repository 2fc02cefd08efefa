from sqlalchemy import Column, String, DateTime, ForeignKey, JSON, Table, Text, UniqueConstraint
from sqlalchemy.orm import relationship
from contenthub.config.database import Base
from contenthub.common.enums import ArticleStatus
from contenthub.models.mixins import SoftDeleteMixin, TimestampMixin, new_id

article_categories = Table(
    "article_categories",
    Base.metadata,
    Column("article_id", String(36), ForeignKey("articles.id", ondelete="CASCADE"), primary_key=True),
    Column("category_id", String(36), ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True),
)

article_tags = Table(
    "article_tags",
    Base.metadata,
    Column("article_id", String(36), ForeignKey("articles.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", String(36), ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
)

class Article(TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = "articles"

    id = Column(String(36), primary_key=True, default=new_id)
    slug = Column(String(255), unique=True, index=True, nullable=False)
    status = Column(String(20), default=ArticleStatus.DRAFT.value, nullable=False)
    featured_image = Column(String(500), nullable=True)
    published_at = Column(DateTime, nullable=True)
    scheduled_at = Column(DateTime, nullable=True)
    blog_id = Column(String(36), ForeignKey("blogs.id"), nullable=False, index=True)
    author_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    editor_id = Column(String(36), ForeignKey("users.id"), nullable=True)

    blog = relationship("Blog", lazy="joined")
    author = relationship("User", foreign_keys=[author_id], lazy="joined")
    editor = relationship("User", foreign_keys=[editor_id], lazy="joined")
    categories = relationship("Category", secondary=article_categories, lazy="selectin")
    tags = relationship("Tag", secondary=article_tags, lazy="selectin")
    translations = relationship(
        "ArticleTranslation",
        back_populates="article",
        cascade="all, delete-orphan",
    )

class ArticleTranslation(TimestampMixin, Base):
    __tablename__ = "article_translations"
    __table_args__ = (UniqueConstraint("article_id", "language_id", name="uq_article_translation_language"),)

    id = Column(String(36), primary_key=True, default=new_id)
    article_id = Column(String(36), ForeignKey("articles.id", ondelete="CASCADE"), nullable=False, index=True)
    language_id = Column(String(36), ForeignKey("languages.id"), nullable=False)
    title = Column(String(255), nullable=False)
    short_description = Column(Text, nullable=True)
    content = Column(Text, nullable=False)
    slug = Column(String(255), nullable=False) # per-language, not globally unique
    seo_title = Column(String(255), nullable=True)
    seo_description = Column(Text, nullable=True)
    seo_keywords = Column(Text, nullable=True)
    seo_json_ld = Column(JSON, nullable=True)

    article = relationship("Article", back_populates="translations")
    language = relationship("Language", lazy="joined")
