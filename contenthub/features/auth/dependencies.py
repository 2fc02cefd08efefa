"""Request authentication.

A bearer token is either a session token issued at login or an API key. The
authenticators below are tried in `AUTH_CHAIN` order and the first one that
recognises the token wins. Public routes simply do not depend on
`get_auth_context`.
"""
import enum
from dataclasses import dataclass
from typing import Optional
from fastapi import BackgroundTasks, Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.orm import Session
from contenthub.common.exceptions import ForbiddenException, UnauthorizedException
from contenthub.config.database import get_db
from contenthub.features.api_keys import service as api_key_service
from contenthub.features.auth.service import SESSION_TOKEN_TYPE
from contenthub.models.api_key import ApiKey
from contenthub.models.user import User
from contenthub.utils.security import decode_token

bearer_scheme = HTTPBearer(auto_error=False)

@dataclass
class AuthContext:
    user: User
    api_key: Optional[ApiKey] = None

class Authenticator:
    def authenticate(self, token: str, request: Request, db: Session, background_tasks: BackgroundTasks) -> Optional[AuthContext]:
        raise NotImplementedError

class SessionTokenAuthenticator(Authenticator):
    def authenticate(self, token, request, db, background_tasks):
        try:
            payload = decode_token(token)
        except JWTError:
            return None
        if payload.get("type") != SESSION_TOKEN_TYPE:
            return None

        user = db.query(User).filter(
            User.id == payload.get("sub"),
            User.is_active.is_(True),
            User.live(),
        ).first()
        if user is None:
            return None
        return AuthContext(user=user)

class ApiKeyAuthenticator(Authenticator):
    def authenticate(self, token, request, db, background_tasks):
        api_key = api_key_service.validate_api_key(db, token)
        if api_key is None:
            return None

        client_ip = request.client.host if request.client else None
        background_tasks.add_task(api_key_service.touch_last_used, api_key.id, client_ip)
        return AuthContext(user=api_key.user, api_key=api_key)

class AuthMethod(str, enum.Enum):
    SESSION = "session"
    API_KEY = "api_key"

AUTHENTICATORS = {
    AuthMethod.SESSION: SessionTokenAuthenticator(),
    AuthMethod.API_KEY: ApiKeyAuthenticator(),
}

AUTH_CHAIN = (AuthMethod.SESSION, AuthMethod.API_KEY)

def get_auth_context(
    request: Request,
    background_tasks: BackgroundTasks,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> AuthContext:
    if credentials is None or not credentials.credentials:
        raise UnauthorizedException("Not authenticated")

    for method in AUTH_CHAIN:
        context = AUTHENTICATORS[method].authenticate(credentials.credentials, request, db, background_tasks)
        if context is not None:
            request.state.auth = context
            return context
    raise UnauthorizedException()

def get_current_user(context: AuthContext = Depends(get_auth_context)) -> User:
    return context.user

def require_roles(*role_names: str):
    def checker(current_user: User = Depends(get_current_user)) -> User:
        if not current_user.has_role(*role_names):
            raise ForbiddenException()
        return current_user
    return checker
