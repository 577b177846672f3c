"""
Tests for validation helpers and the credential/token utilities.
"""

import re
import uuid
from datetime import timedelta

import pytest
from jose import jwt

from app.config import settings
from app.models.user import UserRole
from app.utils.auth import (
    create_access_token,
    create_refresh_token,
    verify_access_token,
    verify_refresh_token,
    hash_password,
    verify_password
)
from app.utils.validators import (
    validate_email,
    validate_password_strength,
    validate_phone,
    generate_slug,
    is_uuid,
    get_pagination_params,
    total_pages
)


def _payload(role=UserRole.AGENT):
    return {"user_id": uuid.uuid4(), "email": "agent@example.com", "role": role}


class TestEmailAndPhoneValidation:

    @pytest.mark.parametrize("email", ["agent@example.com", "a.b+c@sub.domain.ng", "x@y.io"])
    def test_valid_emails(self, email):
        assert validate_email(email) is True

    @pytest.mark.parametrize("email", ["", None, "plainaddress", "no-tld@example", "two words@example.com", "@example.com"])
    def test_invalid_emails(self, email):
        assert validate_email(email) is False

    def test_phone_needs_ten_characters(self):
        assert validate_phone("0801234567") is True
        assert validate_phone("+2348012345678") is True
        assert validate_phone("080123456") is False
        assert validate_phone("") is False
        assert validate_phone(None) is False


class TestPasswordPolicy:
    """Every violated rule is reported, in policy order."""

    def test_strong_password_passes(self):
        result = validate_password_strength("Passw0rd!")
        assert result.valid is True
        assert result.errors == []

    def test_empty_password_fails_every_rule(self):
        result = validate_password_strength("")
        assert result.valid is False
        assert len(result.errors) == 5
        assert result.errors[0] == "Password must be at least 8 characters long"

    def test_all_failures_are_collected(self):
        result = validate_password_strength("abc")
        assert result.errors == [
            "Password must be at least 8 characters long",
            "Password must contain at least one uppercase letter",
            "Password must contain at least one number",
            "Password must contain at least one special character (!@#$%^&*)",
        ]

    def test_special_character_must_come_from_allowed_set(self):
        result = validate_password_strength("Passw0rd?")
        assert result.valid is False
        assert result.errors == ["Password must contain at least one special character (!@#$%^&*)"]


class TestSlugGeneration:

    def test_title_becomes_hyphenated_lowercase(self):
        assert generate_slug("3 Bedroom Flat in Jabi") == "3-bedroom-flat-in-jabi"

    def test_symbols_removed_and_hyphens_collapsed(self):
        slug = generate_slug("A & B  Café")
        assert slug == "a-b-caf"
        assert slug == generate_slug("A & B  Café")
        assert "--" not in slug
        assert re.fullmatch(r"[a-z0-9_-]+", slug)
        assert slug == slug.lower()

    def test_non_ascii_letters_are_dropped(self):
        assert generate_slug("Résidence Élan") == "rsidence-lan"

    def test_leading_and_trailing_whitespace_ignored(self):
        assert generate_slug("  Maitama  ") == "maitama"


class TestIdentifiersAndPagination:

    def test_is_uuid(self):
        assert is_uuid(str(uuid.uuid4())) is True
        assert is_uuid(str(uuid.uuid4()).upper()) is True
        assert is_uuid("jabi") is False
        assert is_uuid("") is False
        assert is_uuid(None) is False

    def test_pagination_defaults(self):
        assert get_pagination_params() == (1, settings.default_page_size)

    def test_pagination_clamps(self):
        assert get_pagination_params("0", "200") == (1, 100)
        assert get_pagination_params("-3", "0") == (1, 1)
        assert get_pagination_params("3", "10") == (3, 10)

    def test_pagination_ignores_garbage(self):
        assert get_pagination_params("abc", "xyz") == (1, 20)

    def test_total_pages(self):
        assert total_pages(0, 20) == 0
        assert total_pages(40, 20) == 2
        assert total_pages(41, 20) == 3


class TestPasswordHashing:

    def test_hash_and_verify(self):
        hashed = hash_password("Passw0rd!")
        assert hashed != "Passw0rd!"
        assert verify_password("Passw0rd!", hashed) is True
        assert verify_password("wrong", hashed) is False

    def test_malformed_hash_is_a_mismatch(self):
        assert verify_password("Passw0rd!", "not-a-bcrypt-hash") is False


class TestTokens:

    def test_access_token_round_trip(self):
        payload = _payload(UserRole.ADMIN)
        decoded = verify_access_token(create_access_token(payload))

        assert decoded is not None
        assert decoded.user_id == str(payload["user_id"])
        assert decoded.email == "agent@example.com"
        assert decoded.role == "admin"

    def test_refresh_token_round_trip(self):
        payload = _payload()
        decoded = verify_refresh_token(create_refresh_token(payload))
        assert decoded is not None
        assert decoded.user_id == str(payload["user_id"])

    def test_tokens_are_not_interchangeable(self):
        payload = _payload()
        assert verify_access_token(create_refresh_token(payload)) is None
        assert verify_refresh_token(create_access_token(payload)) is None

    def test_expired_token_rejected(self):
        token = create_access_token(_payload(), expires_delta=timedelta(seconds=-5))
        assert verify_access_token(token) is None

    def test_garbage_rejected_without_raising(self):
        assert verify_access_token("not.a.jwt") is None
        assert verify_access_token("") is None
        assert verify_access_token(None) is None

    def test_wrong_secret_rejected(self):
        token = jwt.encode(
            {"sub": "x", "email": "a@b.co", "role": "agent", "type": "access", "exp": 9999999999},
            "some-other-secret",
            algorithm="HS256"
        )
        assert verify_access_token(token) is None

    def test_missing_claims_rejected(self):
        token = jwt.encode(
            {"sub": "x", "type": "access", "exp": 9999999999},
            settings.jwt_secret_key,
            algorithm="HS256"
        )
        assert verify_access_token(token) is None

    def test_tokens_minted_together_differ(self):
        payload = _payload()
        assert create_refresh_token(payload) != create_refresh_token(payload)


class TestUserRoleParsing:

    def test_case_insensitive(self):
        assert UserRole.parse("ADMIN") is UserRole.ADMIN
        assert UserRole.parse("Agent") is UserRole.AGENT

    def test_unknown_role(self):
        assert UserRole.parse("root") is None
        assert UserRole.parse(None) is None
