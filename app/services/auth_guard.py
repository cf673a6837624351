# app/services/auth_guard.py
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import jwt

from app.utils.settings import JWT_SECRET, JWT_ALGORITHM, JWT_EXPIRES_SECONDS

CREDENTIAL_MISSING = "credential missing"
CREDENTIAL_INVALID = "credential invalid or expired"


@dataclass
class AuthResult:
    authenticated: bool
    user: Dict[str, Any] | None = None
    error: str | None = None

    @property
    def user_id(self) -> str | None:
        return (self.user or {}).get("userId")


def issue_token(user_id: str, email: str | None = None, expires_in: int | None = None) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "userId": user_id,
        "email": email,
        "iat": now,
        "exp": now + timedelta(seconds=expires_in if expires_in is not None else JWT_EXPIRES_SECONDS),
    }
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALGORITHM)


def verify_token(token: str) -> Dict[str, Any] | None:
    try:
        return jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
    except jwt.PyJWTError:
        return None


def extract_bearer(authorization: str | None) -> str | None:
    if not authorization or not authorization.startswith("Bearer "):
        return None
    token = authorization[len("Bearer "):].strip()
    return token or None


def authenticate(authorization: str | None, cookie_token: str | None = None) -> AuthResult:
    """
    Resolves the caller from a bearer header, falling back to the session cookie.

    Pure validation: no lookups, no side effects.
    """
    token = extract_bearer(authorization) or cookie_token
    if not token:
        return AuthResult(authenticated=False, error=CREDENTIAL_MISSING)

    claims = verify_token(token)
    if not claims or not claims.get("userId"):
        return AuthResult(authenticated=False, error=CREDENTIAL_INVALID)

    return AuthResult(authenticated=True, user=claims)
