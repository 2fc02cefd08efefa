from datetime import datetime, timezone
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Optional
from pydantic import Field, field_validator
from contenthub.common.enums import RoleType
from contenthub.common.exceptions import ForbiddenException
from contenthub.common.schemas import MessageResponse, ORMModel, RequestModel
from contenthub.config.database import get_db
from contenthub.features.api_keys import service
from contenthub.features.auth.dependencies import get_current_user, require_roles
from contenthub.models.api_key import ApiKey
from contenthub.models.user import User

router = APIRouter(prefix="/api-keys", tags=["API Keys"])

def _to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    # Stored timestamps are naive UTC
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value

class ApiKeyCreate(RequestModel):
    name: str = Field(min_length=1, max_length=100)
    user_id: Optional[str] = None # defaults to the caller
    expires_at: Optional[datetime] = None
    scopes: List[str] = []
    notes: Optional[str] = None

    @field_validator("expires_at")
    @classmethod
    def normalize_expiry(cls, value):
        return _to_naive_utc(value)

class ApiKeyUpdate(RequestModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    expires_at: Optional[datetime] = None
    scopes: Optional[List[str]] = None
    notes: Optional[str] = None
    is_active: Optional[bool] = None

    @field_validator("expires_at")
    @classmethod
    def normalize_expiry(cls, value):
        # null clears the expiry
        return _to_naive_utc(value)

    @field_validator("name", "scopes", "is_active")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("may be omitted but not null")
        return value

class ApiKeyResponse(ORMModel):
    id: str
    name: str
    user_id: str
    expires_at: Optional[datetime] = None
    last_used_at: Optional[datetime] = None
    last_used_ip: Optional[str] = None
    scopes: List[str] = []
    is_active: bool
    notes: Optional[str] = None
    created_at: Optional[datetime] = None

class ApiKeyCreatedResponse(ApiKeyResponse):
    plain_token: str # shown once

def get_owned_key(key_id: str, db: Session, current_user: User) -> ApiKey:
    api_key = service.get_api_key(db, key_id)
    if api_key.user_id != current_user.id and not current_user.has_role(RoleType.ADMIN.value):
        raise ForbiddenException("Not authorized to manage this API key")
    return api_key

@router.post("/", response_model=ApiKeyCreatedResponse, status_code=201)
def create_api_key(payload: ApiKeyCreate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    owner_id = payload.user_id or current_user.id
    if owner_id != current_user.id and not current_user.has_role(RoleType.ADMIN.value):
        raise ForbiddenException("Not authorized to create API keys for other users")

    api_key, plain_token = service.create_api_key(
        db,
        user_id=owner_id,
        name=payload.name,
        expires_at=payload.expires_at,
        scopes=payload.scopes,
        notes=payload.notes,
    )
    response = ApiKeyResponse.model_validate(api_key).model_dump()
    return {**response, "plain_token": plain_token}

@router.get("/", response_model=List[ApiKeyResponse])
def read_api_keys(db: Session = Depends(get_db), admin: User = Depends(require_roles(RoleType.ADMIN.value))):
    return service.list_api_keys(db)

@router.get("/my-keys", response_model=List[ApiKeyResponse])
def read_my_api_keys(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return service.list_user_api_keys(db, current_user.id)

@router.post("/cleanup")
def cleanup_expired_api_keys(db: Session = Depends(get_db), admin: User = Depends(require_roles(RoleType.ADMIN.value))):
    return {"removed": service.cleanup_expired_keys(db)}

@router.get("/{key_id}", response_model=ApiKeyResponse)
def read_api_key(key_id: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return get_owned_key(key_id, db, current_user)

@router.patch("/{key_id}", response_model=ApiKeyResponse)
def update_api_key(key_id: str, changes: ApiKeyUpdate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    api_key = get_owned_key(key_id, db, current_user)
    return service.update_api_key(db, api_key, changes.model_dump(exclude_unset=True))

@router.patch("/{key_id}/deactivate", response_model=ApiKeyResponse)
def deactivate_api_key(key_id: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    api_key = get_owned_key(key_id, db, current_user)
    return service.deactivate_api_key(db, api_key)

@router.delete("/{key_id}", response_model=MessageResponse)
def delete_api_key(key_id: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    api_key = get_owned_key(key_id, db, current_user)
    service.delete_api_key(db, api_key)
    return {"detail": "API key deleted"}
