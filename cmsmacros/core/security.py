#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Security utilities
==================
- JWT access token creation/verification
- FastAPI dependencies for extracting the acting user id

User accounts live in the wider CMS; this service only needs the numeric
user id carried in the token's ``sub`` claim, which is written to the audit
log for every mutation.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt


# -----------------------------------------------------------------------------

from .config import get_settings

# --------------------------------------------------------------------------- #
# JWT tokens
# --------------------------------------------------------------------------- #

_oauth2_scheme = OAuth2PasswordBearer(tokenUrl=get_settings().token_url)


# -----------------------------------------------------------------------------

def create_access_token(subject: str | int, extra: dict | None = None) -> str:
    s = get_settings()
    expire = datetime.now(tz=timezone.utc) + timedelta(minutes=s.access_token_expire_minutes)
    payload: dict[str, Any] = {
        "sub": str(subject),
        "exp": expire,
        "type": "access",
    }
    if extra:
        payload.update(extra)
    return jwt.encode(payload, s.secret_key, algorithm=s.algorithm)


# -----------------------------------------------------------------------------

def decode_token(token: str) -> dict[str, Any]:
    s = get_settings()
    try:
        payload = jwt.decode(token, s.secret_key, algorithms=[s.algorithm])
    except JWTError:
        raise _credentials_error()
    if payload.get("sub") is None:
        raise _credentials_error()
    return payload


# -----------------------------------------------------------------------------

def _credentials_error() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )


# --------------------------------------------------------------------------- #
# FastAPI dependencies
# --------------------------------------------------------------------------- #

async def get_current_user_id(token: str = Depends(_oauth2_scheme)) -> int:
    payload = decode_token(token)
    if payload.get("type") != "access":
        raise _credentials_error()
    try:
        return int(payload["sub"])
    except (TypeError, ValueError):
        raise _credentials_error()


# -----------------------------------------------------------------------------
