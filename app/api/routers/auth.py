# app/api/routers/auth.py
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.api.deps import get_credential_store, require_user
from app.api.envelope import envelope
from app.data.database import get_db
from app.domain.schemas import RegisterIn, LoginIn
from app.services.credential_store import CredentialStore
from app.services.user_service import UserService
from app.utils.settings import AUTH_COOKIE_NAME, ENVIRONMENT, JWT_EXPIRES_SECONDS

router = APIRouter(prefix="/api/auth", tags=["auth"])


def get_service(
    db: Session = Depends(get_db),
    store: CredentialStore = Depends(get_credential_store),
) -> UserService:
    return UserService(db, store)


def _set_session_cookie(response: JSONResponse, token: str):
    response.set_cookie(
        key=AUTH_COOKIE_NAME,
        value=token,
        max_age=JWT_EXPIRES_SECONDS,
        httponly=True,
        samesite="lax",
        secure=ENVIRONMENT == "production",
        path="/",
    )


def _logged_in(result: dict) -> JSONResponse:
    response = envelope(200, "Login successful", result)
    _set_session_cookie(response, result["token"])
    return response


@router.post("/register")
def register(payload: RegisterIn, svc: UserService = Depends(get_service)):
    user = svc.register(payload.name, payload.phone, payload.email)
    return envelope(201, "User registered successfully", user)


@router.post("/login")
def login(payload: LoginIn, svc: UserService = Depends(get_service)):
    result = svc.login(payload.phone, payload.code)
    if "token" in result:
        return _logged_in(result)
    return envelope(200, "OTP sent successfully", result)


@router.post("/verify-otp")
def verify_otp(payload: LoginIn, svc: UserService = Depends(get_service)):
    return _logged_in(svc.verify_otp(payload.phone, payload.code))


@router.api_route("/logout", methods=["GET", "POST"])
def logout():
    response = envelope(200, "Logged out successfully", {})
    response.delete_cookie(AUTH_COOKIE_NAME, path="/", httponly=True, samesite="lax")
    return response


@router.get("/get-profile")
def get_profile(user_id: str = Depends(require_user), svc: UserService = Depends(get_service)):
    return envelope(200, "Profile retrieved successfully", svc.get_profile(user_id))
