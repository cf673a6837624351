# app/api/deps.py
from functools import lru_cache

from fastapi import Cookie, Depends, Header

from app.domain.exceptions import AuthError, LoginRequiredError
from app.services.auth_guard import AuthResult, authenticate
from app.services.credential_store import CredentialStore, RedisCredentialStore
from app.services.product_client import ProductClient
from app.utils.settings import AUTH_COOKIE_NAME


def get_product_client() -> ProductClient:
    return ProductClient()


@lru_cache
def get_credential_store() -> CredentialStore:
    return RedisCredentialStore()


def current_auth(
    authorization: str | None = Header(None),
    auth_token: str | None = Cookie(None, alias=AUTH_COOKIE_NAME),
) -> AuthResult:
    return authenticate(authorization, auth_token)


def require_user(auth: AuthResult = Depends(current_auth)) -> str:
    if not auth.authenticated:
        raise AuthError(f"Unauthorized: {auth.error}")
    return auth.user_id


def require_shopper(auth: AuthResult = Depends(current_auth)) -> str:
    """Like require_user, but the 401 tells the client to send the user to /login."""
    if not auth.authenticated:
        raise LoginRequiredError()
    return auth.user_id
