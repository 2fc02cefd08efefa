import logging
from datetime import timedelta
from sqlalchemy.orm import Session
from contenthub.common.enums import RoleType
from contenthub.common.exceptions import ConflictException
from contenthub.models.user import Role, User
from contenthub.utils.security import verify_password, get_password_hash, create_access_token
from contenthub.config.settings import settings

logger = logging.getLogger(__name__)

SESSION_TOKEN_TYPE = "user_session"

def normalize_email(email: str) -> str:
    return email.strip().lower()

def find_live_user_by_email(db: Session, email: str):
    return db.query(User).filter(User.email == normalize_email(email), User.live()).first()

def authenticate_user(db: Session, email: str, password: str):
    # Every failure looks the same to the caller
    user = find_live_user_by_email(db, email)
    if not user or not user.is_active:
        return None
    if not verify_password(password, user.hashed_password):
        return None
    return user

def create_user_token(user: User) -> str:
    access_token_expires = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    return create_access_token(
        data={"sub": user.id, "email": user.email, "type": SESSION_TOKEN_TYPE},
        expires_delta=access_token_expires,
    )

def register_user(db: Session, email: str, password: str, first_name: str, last_name: str, username: str = None) -> User:
    email = normalize_email(email)
    if find_live_user_by_email(db, email):
        raise ConflictException("Email already registered")

    user = User(
        email=email,
        hashed_password=get_password_hash(password),
        first_name=first_name,
        last_name=last_name,
        username=username,
    )
    # Self-registered accounts start as authors; elevated roles are granted by an admin
    author_role = db.query(Role).filter(Role.name == RoleType.AUTHOR.value).first()
    if author_role:
        user.roles = [author_role]

    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Registered user %s", user.email)
    return user
