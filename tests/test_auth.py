"""
Tests for the authentication guard and the phone + one-time-code login.

The credential store runs on fakeredis, so expiry and deletion behave as
they do against a real Redis.
"""

import jwt
import pytest

from app.data.models.user import UserModel
from app.domain.exceptions import ValidationError, AuthError, ForbiddenError, NotFoundError
from app.services.auth_guard import (
    CREDENTIAL_MISSING,
    CREDENTIAL_INVALID,
    authenticate,
    issue_token,
    verify_token,
)
from app.services.user_service import UserService, validate_phone

PHONE = "9876543210"


@pytest.fixture
def service(db, credential_store):
    return UserService(db, credential_store)


@pytest.fixture
def registered(service):
    return service.register("Asha", PHONE, "asha@example.com")


class TestAuthenticate:
    def test_missing_credential(self):
        result = authenticate(None)

        assert result.authenticated is False
        assert result.error == CREDENTIAL_MISSING

    def test_non_bearer_header_is_missing(self):
        assert authenticate("Basic abc").error == CREDENTIAL_MISSING

    def test_garbage_token(self):
        result = authenticate("Bearer not-a-jwt")

        assert result.authenticated is False
        assert result.error == CREDENTIAL_INVALID

    def test_expired_token(self):
        token = issue_token("u1", expires_in=-10)

        assert authenticate(f"Bearer {token}").error == CREDENTIAL_INVALID

    def test_valid_bearer(self):
        result = authenticate(f"Bearer {issue_token('u1', 'a@b.c')}")

        assert result.authenticated is True
        assert result.user_id == "u1"
        assert result.user["email"] == "a@b.c"

    def test_cookie_fallback(self):
        result = authenticate(None, cookie_token=issue_token("u2"))

        assert result.authenticated is True
        assert result.user_id == "u2"

    def test_foreign_signature(self):
        token = jwt.encode({"userId": "u1"}, "a-completely-different-signing-secret-0123", algorithm="HS256")

        assert verify_token(token) is None
        assert authenticate(f"Bearer {token}").error == CREDENTIAL_INVALID


class TestValidatePhone:
    @pytest.mark.parametrize(
        "phone, message",
        [
            (None, "Phone number is required."),
            ("98765 43210", "Spaces are not allowed in phone number."),
            ("98765abcde", "Characters are not allowed in phone number. Please enter digits only."),
            ("98765", "Phone number must be exactly 10 digits long."),
            ("987654321012", "Phone number cannot be more than 10 digits."),
        ],
    )
    def test_messages(self, phone, message):
        with pytest.raises(ValidationError) as exc_info:
            validate_phone(phone)

        assert exc_info.value.message == message

    def test_valid(self):
        assert validate_phone(PHONE) == PHONE


class TestRegister:
    def test_register(self, registered):
        assert registered["phone"] == PHONE
        assert registered["isActive"] is True
        assert registered["userId"]

    def test_duplicate_phone(self, service, registered):
        with pytest.raises(ValidationError):
            service.register("Someone", PHONE)

    def test_name_required(self, service):
        with pytest.raises(ValidationError):
            service.register(" ", PHONE)


class TestLogin:
    def test_unknown_user(self, service):
        with pytest.raises(AuthError):
            service.login(PHONE)

    def test_inactive_user(self, service, db, registered):
        user = db.query(UserModel).filter_by(phone=PHONE).one()
        user.is_active = False
        db.commit()

        with pytest.raises(ForbiddenError):
            service.login(PHONE)

    def test_code_stored_with_ttl(self, service, registered, fake_redis):
        result = service.login(PHONE)

        assert result["otpSent"] is True
        assert len(result["otp"]) == 6
        assert fake_redis.get(f"otp:{PHONE}") == result["otp"]
        assert 0 < fake_redis.ttl(f"otp:{PHONE}") <= 600

    def test_verify_consumes_code(self, service, registered, fake_redis):
        code = service.login(PHONE)["otp"]

        result = service.verify_otp(PHONE, code)

        assert result["user"]["userId"] == registered["userId"]
        assert result["user"]["lastLogin"] is not None
        assert verify_token(result["token"])["userId"] == registered["userId"]
        assert fake_redis.get(f"otp:{PHONE}") is None

        with pytest.raises(AuthError):
            service.verify_otp(PHONE, code)

    def test_login_with_code_verifies(self, service, registered):
        code = service.login(PHONE)["otp"]

        assert "token" in service.login(PHONE, code)

    def test_wrong_code(self, service, registered, fake_redis):
        code = service.login(PHONE)["otp"]
        wrong = "000000" if code != "000000" else "111111"

        with pytest.raises(ValidationError):
            service.verify_otp(PHONE, wrong)

        # a typo does not burn the code
        assert fake_redis.get(f"otp:{PHONE}") == code

    def test_no_code_issued(self, service, registered):
        with pytest.raises(AuthError):
            service.verify_otp(PHONE, "123456")

    def test_verify_unknown_user(self, service):
        with pytest.raises(NotFoundError):
            service.verify_otp(PHONE, "123456")
