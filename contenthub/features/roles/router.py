from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Optional
from pydantic import Field
from contenthub.common.enums import RoleType
from contenthub.common.exceptions import ConflictException, NotFoundException
from contenthub.common.schemas import MessageResponse, ORMModel, RequestModel
from contenthub.config.database import get_db
from contenthub.features.auth.dependencies import require_roles
from contenthub.models.user import Role, User

router = APIRouter(prefix="/roles", tags=["Roles"])

class RoleCreate(RequestModel):
    name: str = Field(min_length=1, max_length=50)
    description: Optional[str] = None
    permissions: List[str] = []

class RoleUpdate(RequestModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    description: Optional[str] = None
    permissions: Optional[List[str]] = None

class RoleResponse(ORMModel):
    id: str
    name: str
    description: Optional[str] = None
    permissions: List[str] = []

get_admin_user = require_roles(RoleType.ADMIN.value)

def get_role_or_404(db: Session, role_id: str) -> Role:
    role = db.query(Role).filter(Role.id == role_id).first()
    if not role:
        raise NotFoundException("Role not found")
    return role

@router.post("/", response_model=RoleResponse, status_code=201)
def create_role(role: RoleCreate, db: Session = Depends(get_db), admin: User = Depends(get_admin_user)):
    if db.query(Role).filter(Role.name == role.name).first():
        raise ConflictException("Role already exists")

    new_role = Role(**role.model_dump())
    db.add(new_role)
    db.commit()
    db.refresh(new_role)
    return new_role

@router.get("/", response_model=List[RoleResponse])
def read_roles(db: Session = Depends(get_db), admin: User = Depends(get_admin_user)):
    return db.query(Role).order_by(Role.name).all()

@router.get("/{role_id}", response_model=RoleResponse)
def read_role(role_id: str, db: Session = Depends(get_db), admin: User = Depends(get_admin_user)):
    return get_role_or_404(db, role_id)

@router.patch("/{role_id}", response_model=RoleResponse)
def update_role(role_id: str, changes: RoleUpdate, db: Session = Depends(get_db), admin: User = Depends(get_admin_user)):
    role = get_role_or_404(db, role_id)
    data = changes.model_dump(exclude_unset=True)
    if "name" in data and data["name"] != role.name:
        if db.query(Role).filter(Role.name == data["name"]).first():
            raise ConflictException("Role already exists")

    for field, value in data.items():
        setattr(role, field, value)
    db.commit()
    db.refresh(role)
    return role

@router.delete("/{role_id}", response_model=MessageResponse)
def delete_role(role_id: str, db: Session = Depends(get_db), admin: User = Depends(get_admin_user)):
    role = get_role_or_404(db, role_id)
    db.delete(role)
    db.commit()
    return {"detail": "Role deleted"}
