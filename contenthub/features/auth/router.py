from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import Optional
from pydantic import BaseModel, EmailStr, Field
from contenthub.common.exceptions import UnauthorizedException
from contenthub.common.schemas import RequestModel
from contenthub.config.database import get_db
from contenthub.features.auth.dependencies import get_current_user
from contenthub.features.auth.service import authenticate_user, create_user_token, register_user
from contenthub.features.users.router import UserResponse
from contenthub.models.user import User

router = APIRouter(prefix="/auth", tags=["Auth"])

class RegisterRequest(RequestModel):
    email: EmailStr
    password: str = Field(min_length=6)
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    username: Optional[str] = None

class LoginRequest(RequestModel):
    email: EmailStr
    password: str

class AuthResponse(BaseModel):
    user: UserResponse
    access_token: str
    token_type: str = "bearer"

@router.post("/register", response_model=AuthResponse, status_code=201)
def register(payload: RegisterRequest, db: Session = Depends(get_db)):
    user = register_user(
        db,
        email=payload.email,
        password=payload.password,
        first_name=payload.first_name,
        last_name=payload.last_name,
        username=payload.username,
    )
    return {"user": user, "access_token": create_user_token(user)}

@router.post("/login", response_model=AuthResponse)
def login(credentials: LoginRequest, db: Session = Depends(get_db)):
    user = authenticate_user(db, credentials.email, credentials.password)
    if not user:
        raise UnauthorizedException("Invalid credentials")
    return {"user": user, "access_token": create_user_token(user)}

@router.get("/profile", response_model=UserResponse)
def read_profile(current_user: User = Depends(get_current_user)):
    return current_user
