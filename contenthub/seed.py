import logging
from sqlalchemy.orm import Session
from contenthub.common.enums import RoleType
from contenthub.config.settings import settings
from contenthub.models.language import Language
from contenthub.models.user import Role, User
from contenthub.utils.security import get_password_hash

logger = logging.getLogger(__name__)

DEFAULT_ROLES = {
    RoleType.ADMIN.value: "Administrator with full access",
    RoleType.AUTHOR.value: "Content author",
    RoleType.EDITOR.value: "Content editor",
    RoleType.TRANSLATOR.value: "Content translator",
}

DEFAULT_LANGUAGES = [
    {"code": "es", "name": "Español", "is_default": True},
    {"code": "en", "name": "English", "is_default": False},
]

def seed_roles(db: Session):
    for name, description in DEFAULT_ROLES.items():
        if not db.query(Role).filter(Role.name == name).first():
            db.add(Role(name=name, description=description, permissions=[]))
            logger.info("Created role %s", name)
    db.commit()

def seed_languages(db: Session):
    # Never steal the default from a language an admin already chose
    has_default = db.query(Language).filter(Language.is_default.is_(True), Language.live()).first() is not None
    for data in DEFAULT_LANGUAGES:
        if db.query(Language).filter(Language.code == data["code"]).first():
            continue
        db.add(Language(
            code=data["code"],
            name=data["name"],
            is_default=data["is_default"] and not has_default,
        ))
        logger.info("Created language %s", data["code"])
    db.commit()

def seed_admin(db: Session):
    if not settings.ADMIN_PASSWORD:
        logger.info("ADMIN_PASSWORD is empty, skipping admin account")
        return

    email = settings.ADMIN_EMAIL.strip().lower()
    if db.query(User).filter(User.email == email, User.live()).first():
        logger.info("Admin user already exists")
        return

    admin_role = db.query(Role).filter(Role.name == RoleType.ADMIN.value).first()
    admin = User(
        email=email,
        first_name="Admin",
        last_name="User",
        hashed_password=get_password_hash(settings.ADMIN_PASSWORD),
        roles=[admin_role] if admin_role else [],
    )
    db.add(admin)
    db.commit()
    logger.info("Created admin user %s", email)

def run_seed(db: Session):
    seed_roles(db)
    seed_languages(db)
    seed_admin(db)
