import re
import secrets
from typing import Dict, Any

from sqlalchemy.orm import Session

from app.data.models._common import utcnow
from app.data.models.user import UserModel
from app.domain.exceptions import ValidationError, AuthError, ForbiddenError, NotFoundError
from app.repos.user_repo import UserRepo
from app.services.auth_guard import issue_token
from app.services.credential_store import CredentialStore
from app.utils.settings import OTP_TTL_SECONDS, OTP_ECHO
from app.utils.logging import get_logger

logger = get_logger(__name__)

_PHONE_RE = re.compile(r"^\d{10}$")
_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def validate_phone(phone: Any) -> str:
    if not phone or not isinstance(phone, str):
        raise ValidationError("Phone number is required.")
    if re.search(r"\s", phone):
        raise ValidationError("Spaces are not allowed in phone number.")
    if re.search(r"[A-Za-z]", phone):
        raise ValidationError("Characters are not allowed in phone number. Please enter digits only.")
    if not _PHONE_RE.match(phone):
        digits = re.sub(r"[^0-9]", "", phone)
        if len(digits) < 10:
            raise ValidationError("Phone number must be exactly 10 digits long.")
        if len(digits) > 10:
            raise ValidationError("Phone number cannot be more than 10 digits.")
        raise ValidationError("Phone number must contain exactly 10 digits and no other characters.")
    return phone


def generate_otp() -> str:
    return f"{secrets.randbelow(900000) + 100000}"


class UserService:
    """Registration and the phone + one-time-code login handshake."""

    def __init__(self, db: Session, credential_store: CredentialStore):
        self.repo = UserRepo(db)
        self.store = credential_store

    def register(self, name: str | None, phone: str | None, email: str | None = None) -> Dict[str, Any]:
        if not name or not str(name).strip():
            raise ValidationError("Name is required.")
        phone = validate_phone(phone)
        if email and not _EMAIL_RE.match(email):
            raise ValidationError("Invalid email address.")

        if self.repo.get_by_phone(phone):
            raise ValidationError("User with this phone number already exists.")

        user = self.repo.create_user(UserModel(name=str(name).strip(), phone=phone, email=email or None))
        logger.info(f"Registered user {user.user_id}")
        return self.to_dict(user)

    def get_profile(self, user_id: str) -> Dict[str, Any]:
        user = self.repo.get_user(user_id)
        if not user:
            raise NotFoundError("User not found.")
        return self.to_dict(user)

    def login(self, phone: str | None, otp: str | None = None) -> Dict[str, Any]:
        """
        Without a code: issue one and keep it in the credential store.
        With a code: same as verify_otp.
        """
        phone = validate_phone(phone)
        user = self.repo.get_by_phone(phone)
        if not user:
            raise AuthError("User not found. Please register first.")
        if not user.is_active:
            raise ForbiddenError("Account is inactive. Please contact administrator.")

        if otp:
            return self.verify_otp(phone, otp)

        code = generate_otp()
        self.store.set(phone, code, OTP_TTL_SECONDS)
        logger.info(f"Login code issued for user {user.user_id}")

        data = {"phone": phone, "message": "Please verify with OTP"}
        if OTP_ECHO:
            data["otp"] = code
        return {"otpSent": True, **data}

    def verify_otp(self, phone: str | None, otp: str | None) -> Dict[str, Any]:
        phone = validate_phone(phone)
        user = self.repo.get_by_phone(phone)
        if not user:
            raise NotFoundError("User not found.")
        if not otp:
            raise ValidationError("OTP is required for verification.")

        # expired codes are gone from the store
        stored = self.store.get(phone)
        if stored is None:
            raise AuthError("OTP not found or expired. Please request a new OTP.")
        if str(otp) != str(stored):
            raise ValidationError("Invalid OTP. Please try again.")

        self.store.delete(phone)
        user.last_login = utcnow()
        self.repo.save(user)

        token = issue_token(user.user_id, user.email)
        logger.info(f"User {user.user_id} logged in")
        return {"user": self.to_dict(user), "token": token}

    @staticmethod
    def to_dict(user: UserModel) -> Dict[str, Any]:
        return {
            "userId": user.user_id,
            "name": user.name,
            "email": user.email,
            "phone": user.phone,
            "isActive": user.is_active,
            "lastLogin": user.last_login,
        }
