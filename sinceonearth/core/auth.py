from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any

import bcrypt
from fastapi import Depends, Header, HTTPException
from jose import jwt, JWTError
from loguru import logger

from sinceonearth.core.config import JWT_SECRET, JWT_ALGORITHM, JWT_EXPIRES_DAYS

BCRYPT_ROUNDS = 10


@dataclass(frozen=True)
class CurrentUser:
    user_id: str
    email: str
    username: str
    name: Optional[str] = None
    country: Optional[str] = None
    alien: Optional[str] = None
    is_admin: bool = False


# ------------------------------------------------------------
# Passwords
# ------------------------------------------------------------
def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: Optional[str]) -> bool:
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # malformed hash in the table
        return False


# ------------------------------------------------------------
# Tokens
# ------------------------------------------------------------
def create_access_token(user) -> str:
    now = datetime.now(timezone.utc)
    claims = {
        "userId": user.id,
        "email": user.email,
        "username": user.username,
        "name": user.name,
        "isAdmin": bool(user.is_admin),
        "alien": user.alien,
        "country": user.country,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(days=JWT_EXPIRES_DAYS)).timestamp()),
    }
    return jwt.encode(claims, JWT_SECRET, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str) -> Dict[str, Any]:
    try:
        return jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
    except JWTError:
        raise HTTPException(status_code=401, detail="Invalid or expired token")


def _get_bearer_token(authorization: Optional[str]) -> str:
    if not authorization:
        raise HTTPException(status_code=401, detail="Missing Authorization header")

    parts = authorization.split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise HTTPException(status_code=401, detail="Invalid Authorization header format")

    token = parts[1].strip()
    if not token:
        raise HTTPException(status_code=401, detail="Missing token")

    return token


# ------------------------------------------------------------
# Dependencies
# ------------------------------------------------------------
def get_current_user(
    authorization: Optional[str] = Header(default=None),
) -> CurrentUser:
    token = _get_bearer_token(authorization)
    payload = decode_access_token(token)

    user_id = payload.get("userId")
    if not user_id:
        raise HTTPException(status_code=401, detail="Token missing userId claim")

    logger.debug(f"[auth] user_id={user_id} admin={payload.get('isAdmin', False)}")

    return CurrentUser(
        user_id=str(user_id),
        email=payload.get("email", ""),
        username=payload.get("username", ""),
        name=payload.get("name"),
        country=payload.get("country"),
        alien=payload.get("alien"),
        is_admin=bool(payload.get("isAdmin", False)),
    )


def require_admin(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    if not user.is_admin:
        raise HTTPException(status_code=403, detail="Admins only")
    return user
