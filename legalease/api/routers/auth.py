"""Sign-up, sign-in and session endpoints"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response

from ...models import User, SignUpRequest, SignInRequest, UserResponse
from ...core.dependencies import get_store
from ...core.security import (
    get_optional_user, get_password_hash, verify_password,
    set_session_cookie, clear_session_cookie, log_security_event
)
from ...storage.managers import DocumentStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=UserResponse)
async def signup(
    payload: SignUpRequest,
    response: Response,
    store: DocumentStore = Depends(get_store)
):
    if not payload.email or not payload.password or not payload.name:
        raise HTTPException(status_code=400, detail="Email, password and name are required")

    email = payload.email.strip().lower()
    if await store.get_user_by_email(email):
        raise HTTPException(status_code=409, detail="User already exists")

    user = await store.create_user(email, payload.name.strip(), get_password_hash(payload.password))
    set_session_cookie(response, user)
    return UserResponse(user=user)


@router.post("/signin", response_model=UserResponse)
async def signin(
    payload: SignInRequest,
    response: Response,
    store: DocumentStore = Depends(get_store)
):
    if not payload.email or not payload.password:
        raise HTTPException(status_code=400, detail="Email and password are required")

    user = await store.get_user_by_email(payload.email.strip().lower())
    if user is None or not verify_password(payload.password, user.password_hash):
        log_security_event("failed_signin", payload.email, {})
        raise HTTPException(status_code=401, detail="Invalid credentials")

    set_session_cookie(response, user)
    logger.info(f"User {user.id} signed in")
    return UserResponse(user=user)


@router.get("/me", response_model=UserResponse)
async def me(current_user: Optional[User] = Depends(get_optional_user)):
    return UserResponse(user=current_user)


@router.post("/signout")
async def signout(response: Response):
    clear_session_cookie(response)
    return {"success": True}
