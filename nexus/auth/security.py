import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from ..config import settings
from ..schemas.records import UserPublic, UserRole


http_bearer = HTTPBearer(auto_error=False)


def create_session_token(user: UserPublic, ttl_seconds: Optional[int] = None) -> str:
    """Sign a session token that carries the public user record.

    The record is trusted as-is until ``exp``; it is not re-read from the store.
    """
    now = datetime.now(tz=timezone.utc)
    ttl = settings.session_ttl_seconds if ttl_seconds is None else ttl_seconds
    payload = {
        "sub": user.id,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(seconds=ttl)).timestamp()),
        "jti": str(uuid.uuid4()),
        "user": UserPublic(**user.model_dump(include=set(UserPublic.model_fields))).to_document(),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> dict:
    try:
        return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Session expired")
    except jwt.InvalidTokenError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid session")


def get_current_session(
    creds: Optional[HTTPAuthorizationCredentials] = Depends(http_bearer),
) -> UserPublic:
    if creds is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    payload = decode_token(creds.credentials)
    record = payload.get("user")
    if not isinstance(record, dict) or record.get("id") != payload.get("sub"):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid session")
    return UserPublic(**record)


def require_admin(user: UserPublic = Depends(get_current_session)) -> UserPublic:
    if user.role != UserRole.ADMIN:
        raise HTTPException(status_code=403, detail="Only administrators can perform this action")
    return user


def require_superadmin(user: UserPublic = Depends(get_current_session)) -> UserPublic:
    # Identity check on the bootstrap account; the role field alone does not grant this
    if not user.is_superadmin:
        raise HTTPException(status_code=403, detail="Forbidden")
    return user
