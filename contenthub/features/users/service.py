import logging
from typing import List, Optional
from sqlalchemy.orm import Session
from contenthub.common.exceptions import ConflictException, NotFoundException
from contenthub.features.auth.service import find_live_user_by_email, normalize_email
from contenthub.models.user import Role, User
from contenthub.utils.security import get_password_hash

logger = logging.getLogger(__name__)

def _load_roles(db: Session, role_ids: List[str]) -> List[Role]:
    if not role_ids:
        return []
    roles = db.query(Role).filter(Role.id.in_(role_ids)).all()
    if len(roles) != len(set(role_ids)):
        raise NotFoundException("One or more roles not found")
    return roles

def list_users(db: Session, skip: int = 0, limit: int = 100):
    return db.query(User).filter(User.live()).order_by(User.created_at).offset(skip).limit(limit).all()

def get_user(db: Session, user_id: str) -> User:
    user = db.query(User).filter(User.id == user_id, User.live()).first()
    if not user:
        raise NotFoundException("User not found")
    return user

def create_user(db: Session, data: dict) -> User:
    email = normalize_email(data["email"])
    if find_live_user_by_email(db, email):
        raise ConflictException("Email already registered")

    user = User(
        email=email,
        hashed_password=get_password_hash(data["password"]),
        first_name=data["first_name"],
        last_name=data["last_name"],
        username=data.get("username"),
        is_active=data.get("is_active", True),
    )
    user.roles = _load_roles(db, data.get("role_ids") or [])
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Created user %s", user.email)
    return user

def update_user(db: Session, user: User, changes: dict) -> User:
    if "email" in changes:
        email = normalize_email(changes.pop("email"))
        existing = find_live_user_by_email(db, email)
        if existing and existing.id != user.id:
            raise ConflictException("Email already registered")
        user.email = email
    if "password" in changes:
        user.hashed_password = get_password_hash(changes.pop("password"))
    role_ids: Optional[List[str]] = changes.pop("role_ids", None)
    if role_ids is not None:
        user.roles = _load_roles(db, role_ids)

    for field, value in changes.items():
        setattr(user, field, value)
    db.commit()
    db.refresh(user)
    return user

def delete_user(db: Session, user: User):
    user.soft_delete()
    db.commit()
    logger.info("Deleted user %s", user.email)
