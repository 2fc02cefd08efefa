import logging
from datetime import datetime
from typing import Dict, List, Optional
from sqlalchemy.orm import Session
from contenthub.common import seo, slug
from contenthub.common.enums import MenuType, PageStatus
from contenthub.common.exceptions import BadRequestException, ConflictException, NotFoundException
from contenthub.config.settings import settings
from contenthub.models.page import Page
from contenthub.models.user import User

logger = logging.getLogger(__name__)

MENU_FLAGS = {
    MenuType.HOME: Page.show_in_home_menu,
    MenuType.FOOTER: Page.show_in_footer_menu,
}

class PageTree:
    """Id-indexed view of a set of pages. Nodes never hold references to each other."""

    def __init__(self, pages: List[Page]):
        self.index: Dict[str, Page] = {page.id: page for page in pages}
        self.children: Dict[Optional[str], List[Page]] = {}
        for page in pages:
            # Pages whose parent is outside the set are treated as roots
            parent_id = page.parent_id if page.parent_id in self.index else None
            self.children.setdefault(parent_id, []).append(page)
        for siblings in self.children.values():
            siblings.sort(key=lambda page: (page.menu_order, page.title))

    def build(self, parent_id: Optional[str] = None, serialize=None) -> List[dict]:
        nodes = []
        for page in self.children.get(parent_id, []):
            node = serialize(page) if serialize else {"id": page.id}
            node["children"] = self.build(page.id, serialize)
            nodes.append(node)
        return nodes

def creates_cycle(parent_index: Dict[str, Optional[str]], page_id: str, new_parent_id: str) -> bool:
    """Walks up from `new_parent_id`; True when `page_id` is met on the way."""
    current = new_parent_id
    for _ in range(len(parent_index) + 1):
        if current is None:
            return False
        if current == page_id:
            return True
        current = parent_index.get(current)
    # Only reachable when the stored tree already holds a loop
    return True

def _parent_index(db: Session) -> Dict[str, Optional[str]]:
    return dict(db.query(Page.id, Page.parent_id).all())

def _page_json_ld(page: Page, author: Optional[User]) -> dict:
    return seo.generate_json_ld(
        title=page.seo_title or page.title,
        description=page.seo_description or seo.generate_description(page.content),
        url=f"{settings.APP_URL}/{page.slug}",
        image=page.main_image,
        author=author.full_name if author else None,
        date_published=page.published_at,
        date_modified=page.updated_at,
        type="WebPage",
    )

def _normalize_slug(value: str) -> str:
    page_slug = slug.generate(value)
    if not page_slug:
        raise BadRequestException("Slug must contain at least one letter or digit")
    return page_slug

def _ensure_slug_available(db: Session, page_slug: str, exclude_id: str = None):
    query = db.query(Page).filter(Page.slug == page_slug)
    if exclude_id:
        query = query.filter(Page.id != exclude_id)
    if query.first():
        raise ConflictException("A page with this slug already exists")

def _ensure_parent_exists(db: Session, parent_id: str):
    if not db.query(Page).filter(Page.id == parent_id, Page.live()).first():
        raise NotFoundException("Parent page not found")

def _live_query(db: Session, include_inactive: bool = True):
    query = db.query(Page).filter(Page.live())
    if not include_inactive:
        query = query.filter(Page.is_active.is_(True))
    return query

def create_page(db: Session, data: dict, author: User) -> Page:
    data["slug"] = _normalize_slug(data.get("slug") or data["title"])
    _ensure_slug_available(db, data["slug"])
    if data.get("parent_id"):
        _ensure_parent_exists(db, data["parent_id"])

    generate_json_ld = data.get("seo_json_ld") is None
    page = Page(**data)
    page.author_id = author.id
    if page.status == PageStatus.PUBLISHED.value and page.published_at is None:
        page.published_at = datetime.utcnow()
    if generate_json_ld:
        page.seo_json_ld = _page_json_ld(page, author)

    db.add(page)
    db.commit()
    db.refresh(page)
    logger.info("Created page %s", page.slug)
    return page

def update_page(db: Session, page: Page, changes: dict) -> Page:
    if "slug" in changes:
        changes["slug"] = _normalize_slug(changes["slug"])
        _ensure_slug_available(db, changes["slug"], exclude_id=page.id)

    if changes.get("parent_id"):
        new_parent_id = changes["parent_id"]
        if new_parent_id == page.id:
            raise BadRequestException("A page cannot be its own parent")
        _ensure_parent_exists(db, new_parent_id)
        if creates_cycle(_parent_index(db), page.id, new_parent_id):
            raise BadRequestException("Cannot create circular page hierarchy")

    status = changes.pop("status", None)
    if status == PageStatus.PUBLISHED.value and page.status != PageStatus.PUBLISHED.value:
        page.published_at = datetime.utcnow()
    if status is not None:
        page.status = status

    regenerate_json_ld = "seo_json_ld" not in changes
    for field, value in changes.items():
        setattr(page, field, value)
    if regenerate_json_ld:
        page.seo_json_ld = _page_json_ld(page, page.author)

    db.commit()
    db.refresh(page)
    return page

def delete_page(db: Session, page: Page):
    if db.query(Page).filter(Page.parent_id == page.id, Page.live()).first():
        raise BadRequestException("Cannot delete page that has child pages")
    page.soft_delete()
    db.commit()
    logger.info("Deleted page %s", page.slug)

def get_page(db: Session, page_id: str) -> Page:
    page = db.query(Page).filter(Page.id == page_id, Page.live()).first()
    if not page:
        raise NotFoundException("Page not found")
    return page

def get_page_by_slug(db: Session, page_slug: str, published_only: bool = False) -> Page:
    query = db.query(Page).filter(Page.slug == page_slug, Page.live())
    if published_only:
        query = query.filter(Page.status == PageStatus.PUBLISHED.value, Page.is_active.is_(True))
    page = query.first()
    if not page:
        raise NotFoundException("Page not found")
    return page

def increment_view_count(db: Session, page: Page) -> Page:
    page.view_count = Page.view_count + 1
    db.commit()
    db.refresh(page)
    return page

def list_pages(db: Session, include_inactive: bool = False):
    return _live_query(db, include_inactive).order_by(Page.menu_order, Page.title).all()

def list_published_pages(db: Session):
    return _live_query(db, include_inactive=False).filter(
        Page.status == PageStatus.PUBLISHED.value,
    ).order_by(Page.menu_order, Page.title).all()

def list_pages_by_status(db: Session, status: str):
    return _live_query(db).filter(Page.status == status).order_by(Page.menu_order, Page.title).all()

def list_root_pages(db: Session):
    return _live_query(db).filter(Page.parent_id.is_(None)).order_by(Page.menu_order, Page.title).all()

def list_children(db: Session, parent_id: str):
    get_page(db, parent_id)
    return _live_query(db).filter(Page.parent_id == parent_id).order_by(Page.menu_order, Page.title).all()

def _node(page: Page) -> dict:
    return {
        "id": page.id,
        "title": page.title,
        "slug": page.slug,
        "status": page.status,
        "menu_order": page.menu_order,
        "parent_id": page.parent_id,
    }

def get_hierarchy(db: Session) -> List[dict]:
    return PageTree(_live_query(db).all()).build(serialize=_node)

def get_menu_structure(db: Session, menu: MenuType) -> List[dict]:
    pages = _live_query(db, include_inactive=False).filter(
        MENU_FLAGS[MenuType(menu)].is_(True),
        Page.status == PageStatus.PUBLISHED.value,
    ).all()
    return PageTree(pages).build(serialize=_node)
