"""Cookie session authentication with JWT tokens"""
from typing import List, Optional
from fastapi import Depends, HTTPException, Request, Response, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from passlib.context import CryptContext
from datetime import datetime, timedelta
import logging

from ..config import (
    JWT_SECRET_KEY, JWT_ALGORITHM, ACCESS_TOKEN_EXPIRE_MINUTES,
    AUTH_COOKIE_NAME, COOKIE_SECURE
)
from ..models import User
from ..storage.managers import DocumentStore
from .dependencies import get_store

logger = logging.getLogger(__name__)

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# The browser extension sends the session token as a bearer header
security = HTTPBearer(auto_error=False)

def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash"""
    if not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)

def get_password_hash(password: str) -> str:
    """Hash a password"""
    return pwd_context.hash(password)

def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT access token"""
    to_encode = data.copy()
    expire = datetime.utcnow() + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, JWT_SECRET_KEY, algorithm=JWT_ALGORITHM)

def verify_token(token: str) -> Optional[str]:
    """Verify and decode a JWT token, returning the user id"""
    try:
        payload = jwt.decode(token, JWT_SECRET_KEY, algorithms=[JWT_ALGORITHM])
    except JWTError:
        return None
    return payload.get("sub")

def set_session_cookie(response: Response, user: User):
    """Issue a session token for the user and store it in the auth cookie"""
    token = create_access_token({"sub": user.id})
    response.set_cookie(
        key=AUTH_COOKIE_NAME,
        value=token,
        httponly=True,
        secure=COOKIE_SECURE,
        samesite="strict",
        max_age=ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )

def clear_session_cookie(response: Response):
    response.delete_cookie(AUTH_COOKIE_NAME, httponly=True, secure=COOKIE_SECURE, samesite="strict")

def _candidate_tokens(request: Request, credentials: Optional[HTTPAuthorizationCredentials]) -> List[str]:
    tokens = []
    cookie_token = request.cookies.get(AUTH_COOKIE_NAME)
    if cookie_token:
        tokens.append(cookie_token)
    if credentials is not None and credentials.credentials:
        tokens.append(credentials.credentials)
    return tokens

def _resolve_user_id(request: Request, credentials: Optional[HTTPAuthorizationCredentials]) -> Optional[str]:
    """The cookie is tried first; a bearer token is used when the cookie does not decode"""
    for token in _candidate_tokens(request, credentials):
        user_id = verify_token(token)
        if user_id:
            return user_id
        logger.warning(f"❌ Invalid authentication token: {token[:10]}...")
    return None

async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    store: DocumentStore = Depends(get_store)
) -> User:
    """Resolve the session cookie (or bearer token) to a stored user"""
    user_id = _resolve_user_id(request, credentials)
    if not user_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")

    user = await store.get_user_by_id(user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user

async def get_optional_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    store: DocumentStore = Depends(get_store)
) -> Optional[User]:
    """Like get_current_user, but None instead of an error"""
    user_id = _resolve_user_id(request, credentials)
    if not user_id:
        return None
    return await store.get_user_by_id(user_id)

def log_security_event(event_type: str, user_id: str, details: dict):
    """Log security events for monitoring"""
    logger.warning(f"SECURITY_EVENT: {event_type} | User: {user_id} | Details: {details} | Time: {datetime.utcnow()}")
