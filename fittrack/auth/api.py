# -*- coding: utf-8 -*-
"""Auth: API endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Response

from ..config import settings
from .models import AuthResponse, SignInRequest, SignUpRequest, UserPublic
from .security import TOKEN_COOKIE_NAME, create_access_token, get_current_user, sign_in, sign_up

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


def user_public(row: dict) -> UserPublic:
    return UserPublic(id=row["id"], email=row["email"], created_at=row["created_at"])


def _issue(resp: Response, user: dict) -> AuthResponse:
    token = create_access_token(user_id=user["id"], email=user["email"])
    resp.set_cookie(
        TOKEN_COOKIE_NAME,
        token,
        httponly=True,
        secure=bool(settings.cookie_secure),
        samesite="lax",
        max_age=int(settings.token_ttl_days) * 24 * 60 * 60,
        path="/",
    )
    return AuthResponse(user=user_public(user), token=token)


@router.post("/register", response_model=AuthResponse, summary="Sign up")
def register(request: SignUpRequest, response: Response):
    user = sign_up(email=request.email, password=request.password)
    logger.info("user registered: %s", user["id"])
    return _issue(response, user)


@router.post("/login", response_model=AuthResponse, summary="Sign in")
def login(request: SignInRequest, response: Response):
    user = sign_in(email=request.email, password=request.password)
    return _issue(response, user)


@router.post("/logout", summary="Sign out")
def logout(response: Response):
    response.delete_cookie(TOKEN_COOKIE_NAME, path="/")
    return {"status": "ok"}


@router.get("/me", response_model=UserPublic, summary="Current user")
def me(user: dict = Depends(get_current_user)):
    return user_public(user)
