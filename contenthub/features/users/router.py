from datetime import datetime
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Optional
from pydantic import EmailStr, Field
from contenthub.common.enums import RoleType
from contenthub.common.exceptions import BadRequestException
from contenthub.common.schemas import MessageResponse, ORMModel, RequestModel
from contenthub.config.database import get_db
from contenthub.features.auth.dependencies import require_roles
from contenthub.features.users import service
from contenthub.models.user import User

router = APIRouter(prefix="/users", tags=["Users"])

class RoleSummary(ORMModel):
    id: str
    name: str
    description: Optional[str] = None

class UserResponse(ORMModel):
    id: str
    email: EmailStr
    first_name: str
    last_name: str
    username: Optional[str] = None
    is_active: bool
    roles: List[RoleSummary] = []
    created_at: Optional[datetime] = None

class UserCreate(RequestModel):
    email: EmailStr
    password: str = Field(min_length=6)
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    username: Optional[str] = None
    is_active: bool = True
    role_ids: List[str] = []

class UserUpdate(RequestModel):
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(default=None, min_length=6)
    first_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    username: Optional[str] = None
    is_active: Optional[bool] = None
    role_ids: Optional[List[str]] = None

get_admin_user = require_roles(RoleType.ADMIN.value)

@router.post("/", response_model=UserResponse, status_code=201)
def create_user(user: UserCreate, db: Session = Depends(get_db), admin: User = Depends(get_admin_user)):
    return service.create_user(db, user.model_dump())

@router.get("/", response_model=List[UserResponse])
def read_users(skip: int = 0, limit: int = 100, db: Session = Depends(get_db), admin: User = Depends(get_admin_user)):
    return service.list_users(db, skip=skip, limit=limit)

@router.get("/{user_id}", response_model=UserResponse)
def read_user(user_id: str, db: Session = Depends(get_db), admin: User = Depends(get_admin_user)):
    return service.get_user(db, user_id)

@router.patch("/{user_id}", response_model=UserResponse)
def update_user(user_id: str, changes: UserUpdate, db: Session = Depends(get_db), admin: User = Depends(get_admin_user)):
    user = service.get_user(db, user_id)
    return service.update_user(db, user, changes.model_dump(exclude_unset=True))

@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(user_id: str, db: Session = Depends(get_db), admin: User = Depends(get_admin_user)):
    user = service.get_user(db, user_id)
    if user.id == admin.id:
        raise BadRequestException("Cannot delete yourself")
    service.delete_user(db, user)
    return {"detail": "User deleted"}
