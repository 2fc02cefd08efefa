import logging
from datetime import datetime, timedelta
from typing import List, Optional
from jose import JWTError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from contenthub.common.exceptions import ConflictException, NotFoundException
from contenthub.config.database import SessionLocal
from contenthub.config.settings import settings
from contenthub.models.api_key import ApiKey
from contenthub.models.mixins import new_id
from contenthub.models.user import User
from contenthub.utils.security import create_access_token, decode_token, hash_token

logger = logging.getLogger(__name__)

API_KEY_TOKEN_TYPE = "api_key"

def _ensure_name_available(db: Session, user_id: str, name: str, exclude_id: str = None):
    query = db.query(ApiKey).filter(ApiKey.user_id == user_id, ApiKey.name == name, ApiKey.live())
    if exclude_id:
        query = query.filter(ApiKey.id != exclude_id)
    if query.first():
        raise ConflictException(f"An API key named '{name}' already exists for this user")

def create_api_key(
    db: Session,
    user_id: str,
    name: str,
    expires_at: Optional[datetime] = None,
    scopes: Optional[List[str]] = None,
    notes: Optional[str] = None,
):
    """Creates a key and returns `(row, plain_token)`. The plain token is never stored."""
    owner = db.query(User).filter(User.id == user_id, User.live()).first()
    if not owner:
        raise NotFoundException("User not found")
    _ensure_name_available(db, user_id, name)

    # The token is issued with the row's initial expiry
    if expires_at is None:
        expires_at = datetime.utcnow() + timedelta(days=settings.API_KEY_DEFAULT_EXPIRE_DAYS)

    key_id = new_id()
    scopes = scopes or []
    plain_token = create_access_token(
        data={"sub": owner.id, "type": API_KEY_TOKEN_TYPE, "key_id": key_id, "scopes": scopes},
        expires_delta=expires_at - datetime.utcnow(),
    )

    api_key = ApiKey(
        id=key_id,
        token=hash_token(plain_token),
        name=name,
        expires_at=expires_at,
        scopes=scopes,
        notes=notes,
        user_id=owner.id,
    )
    db.add(api_key)
    db.commit()
    db.refresh(api_key)
    logger.info("Created API key %s for user %s", api_key.id, owner.id)
    return api_key, plain_token

def validate_api_key(db: Session, token: str):
    """Returns the live key behind `token`, or None when it does not authenticate."""
    api_key = db.query(ApiKey).filter(
        ApiKey.token == hash_token(token),
        ApiKey.is_active.is_(True),
        ApiKey.live(),
    ).first()
    if not api_key:
        return None
    if api_key.expires_at and api_key.expires_at < datetime.utcnow():
        return None

    # The row's expires_at is authoritative and may be changed after issue
    try:
        payload = decode_token(token, verify_exp=False)
    except JWTError:
        return None
    if payload.get("type") != API_KEY_TOKEN_TYPE or payload.get("sub") != api_key.user_id:
        return None

    owner = api_key.user
    if owner is None or owner.is_deleted or not owner.is_active:
        return None
    return api_key

def touch_last_used(key_id: str, ip: Optional[str] = None):
    """Runs after the response; a failure here must never fail the request."""
    db = SessionLocal()
    try:
        db.query(ApiKey).filter(ApiKey.id == key_id).update(
            {ApiKey.last_used_at: datetime.utcnow(), ApiKey.last_used_ip: ip},
            synchronize_session=False,
        )
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.warning("Could not record last use of API key %s", key_id, exc_info=True)
    finally:
        db.close()

def list_api_keys(db: Session):
    return db.query(ApiKey).filter(ApiKey.live()).order_by(ApiKey.created_at.desc()).all()

def list_user_api_keys(db: Session, user_id: str):
    return db.query(ApiKey).filter(
        ApiKey.user_id == user_id,
        ApiKey.live(),
    ).order_by(ApiKey.created_at.desc()).all()

def get_api_key(db: Session, key_id: str) -> ApiKey:
    api_key = db.query(ApiKey).filter(ApiKey.id == key_id, ApiKey.live()).first()
    if not api_key:
        raise NotFoundException("API key not found")
    return api_key

def update_api_key(db: Session, api_key: ApiKey, changes: dict) -> ApiKey:
    if "name" in changes and changes["name"] != api_key.name:
        _ensure_name_available(db, api_key.user_id, changes["name"], exclude_id=api_key.id)
    for field, value in changes.items():
        setattr(api_key, field, value)
    db.commit()
    db.refresh(api_key)
    return api_key

def deactivate_api_key(db: Session, api_key: ApiKey) -> ApiKey:
    api_key.is_active = False
    db.commit()
    db.refresh(api_key)
    logger.info("Deactivated API key %s", api_key.id)
    return api_key

def delete_api_key(db: Session, api_key: ApiKey):
    api_key.soft_delete()
    db.commit()
    logger.info("Deleted API key %s", api_key.id)

def cleanup_expired_keys(db: Session) -> int:
    expired = db.query(ApiKey).filter(
        ApiKey.expires_at.isnot(None),
        ApiKey.expires_at < datetime.utcnow(),
        ApiKey.live(),
    ).all()
    for api_key in expired:
        api_key.soft_delete()
    db.commit()
    if expired:
        logger.info("Removed %d expired API keys", len(expired))
    return len(expired)
