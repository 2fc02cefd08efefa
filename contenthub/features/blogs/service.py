import logging
from sqlalchemy.orm import Session
from contenthub.common import seo, slug
from contenthub.common.exceptions import NotFoundException
from contenthub.common.translations import existing_slugs
from contenthub.config.settings import settings
from contenthub.models.blog import Blog
from contenthub.models.user import User

logger = logging.getLogger(__name__)

def _blog_json_ld(blog: Blog, owner: User) -> dict:
    return seo.generate_json_ld(
        title=blog.seo_title or blog.name,
        description=blog.seo_description or blog.description,
        url=f"{settings.APP_URL}/blogs/{blog.slug}",
        image=blog.featured_image,
        author=owner.full_name if owner else None,
        type="WebPage",
    )

def list_blogs(db: Session):
    return db.query(Blog).filter(Blog.live()).order_by(Blog.created_at.desc()).all()

def list_active_blogs(db: Session):
    return db.query(Blog).filter(Blog.live(), Blog.is_active.is_(True)).order_by(Blog.name).all()

def get_blog(db: Session, blog_id: str) -> Blog:
    blog = db.query(Blog).filter(Blog.id == blog_id, Blog.live()).first()
    if not blog:
        raise NotFoundException("Blog not found")
    return blog

def get_blog_by_slug(db: Session, blog_slug: str, active_only: bool = False) -> Blog:
    query = db.query(Blog).filter(Blog.slug == blog_slug, Blog.live())
    if active_only:
        query = query.filter(Blog.is_active.is_(True))
    blog = query.first()
    if not blog:
        raise NotFoundException("Blog not found")
    return blog

def create_blog(db: Session, data: dict) -> Blog:
    owner = db.query(User).filter(User.id == data["owner_id"], User.live()).first()
    if not owner:
        raise NotFoundException("Owner not found")

    blog = Blog(**data)
    blog.slug = slug.generate_unique(blog.name, existing_slugs(db, Blog))
    blog.seo_json_ld = _blog_json_ld(blog, owner)
    db.add(blog)
    db.commit()
    db.refresh(blog)
    logger.info("Created blog %s", blog.slug)
    return blog

def update_blog(db: Session, blog: Blog, changes: dict) -> Blog:
    if "owner_id" in changes:
        owner = db.query(User).filter(User.id == changes["owner_id"], User.live()).first()
        if not owner:
            raise NotFoundException("Owner not found")
    if "name" in changes and changes["name"] != blog.name:
        taken = existing_slugs(db, Blog) - {blog.slug}
        blog.slug = slug.generate_unique(changes["name"], taken)

    for field, value in changes.items():
        setattr(blog, field, value)
    owner = db.query(User).filter(User.id == blog.owner_id).first()
    blog.seo_json_ld = _blog_json_ld(blog, owner)
    db.commit()
    db.refresh(blog)
    return blog

def delete_blog(db: Session, blog: Blog):
    blog.soft_delete()
    db.commit()
    logger.info("Deleted blog %s", blog.slug)
