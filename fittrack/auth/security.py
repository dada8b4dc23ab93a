# -*- coding: utf-8 -*-
"""Auth: password hashing, signed tokens and FastAPI helpers."""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
import os
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from fastapi import Depends, HTTPException, Request

from ..config import settings
from .storage import create_user, get_user_by_email, get_user_by_id

TOKEN_COOKIE_NAME = "fittrack_token"

_PBKDF2_ALG = "sha256"
_PBKDF2_ITERATIONS = 200_000


def _b64url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def _b64url_decode(data: str) -> bytes:
    pad = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode((data + pad).encode("ascii"))


def hash_password(password: str) -> str:
    salt = os.urandom(16)
    dk = hashlib.pbkdf2_hmac(_PBKDF2_ALG, password.encode("utf-8"), salt, _PBKDF2_ITERATIONS)
    return f"pbkdf2_{_PBKDF2_ALG}${_PBKDF2_ITERATIONS}${_b64url_encode(salt)}${_b64url_encode(dk)}"


def verify_password(password: str, password_hash: str) -> bool:
    try:
        scheme, iter_s, salt_b64, dk_b64 = password_hash.split("$", 3)
    except ValueError:
        return False
    if not scheme.startswith("pbkdf2_"):
        return False
    alg = scheme.split("_", 1)[1]
    actual = hashlib.pbkdf2_hmac(alg, password.encode("utf-8"), _b64url_decode(salt_b64), int(iter_s))
    return hmac.compare_digest(actual, _b64url_decode(dk_b64))


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _sign(signing_input: bytes, secret: str) -> bytes:
    return hmac.new(secret.encode("utf-8"), signing_input, hashlib.sha256).digest()


def create_access_token(*, user_id: str, email: str) -> str:
    """HS256 JWT carrying the user id as ``sub``."""
    now = _utc_now()
    payload = {
        "sub": user_id,
        "email": email,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(days=int(settings.token_ttl_days))).timestamp()),
    }
    header = {"alg": "HS256", "typ": "JWT"}
    segments = [
        _b64url_encode(json.dumps(part, separators=(",", ":")).encode("utf-8"))
        for part in (header, payload)
    ]
    signing_input = ".".join(segments).encode("ascii")
    return f"{segments[0]}.{segments[1]}.{_b64url_encode(_sign(signing_input, settings.jwt_secret))}"


def decode_token(token: str) -> Dict[str, Any]:
    parts = token.split(".")
    if len(parts) != 3:
        raise HTTPException(status_code=401, detail="Invalid token")
    header_b64, payload_b64, sig_b64 = parts
    expected = _sign(f"{header_b64}.{payload_b64}".encode("ascii"), settings.jwt_secret)
    try:
        valid = hmac.compare_digest(expected, _b64url_decode(sig_b64))
        payload = json.loads(_b64url_decode(payload_b64).decode("utf-8"))
    except (ValueError, UnicodeDecodeError) as exc:
        raise HTTPException(status_code=401, detail="Invalid token") from exc
    if not valid or not isinstance(payload, dict):
        raise HTTPException(status_code=401, detail="Invalid token")
    exp = int(payload.get("exp") or 0)
    if exp and exp < int(_utc_now().timestamp()):
        raise HTTPException(status_code=401, detail="Token expired")
    return payload


def sign_up(*, email: str, password: str) -> Dict[str, Any]:
    if get_user_by_email(email):
        raise HTTPException(status_code=400, detail="Email already registered")
    return create_user(email=email, password_hash=hash_password(password))


def sign_in(*, email: str, password: str) -> Dict[str, Any]:
    user = get_user_by_email(email)
    if not user or not verify_password(password, user["password_hash"]):
        raise HTTPException(status_code=401, detail="Invalid email or password")
    return user


def get_token_from_request(request: Request) -> Optional[str]:
    auth = request.headers.get("authorization") or ""
    if auth.lower().startswith("bearer "):
        token = auth.split(" ", 1)[1].strip()
        return token or None
    return request.cookies.get(TOKEN_COOKIE_NAME) or None


def get_current_user_from_request(request: Request) -> Dict[str, Any]:
    user = getattr(request.state, "user", None)
    if user:
        return user

    token = get_token_from_request(request)
    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated")

    user_id = str(decode_token(token).get("sub") or "")
    if not user_id:
        raise HTTPException(status_code=401, detail="Invalid token")

    user_row = get_user_by_id(user_id)
    if not user_row:
        raise HTTPException(status_code=401, detail="User not found")

    request.state.user = user_row
    return user_row


def get_current_user(user: Dict[str, Any] = Depends(get_current_user_from_request)) -> Dict[str, Any]:
    return user
