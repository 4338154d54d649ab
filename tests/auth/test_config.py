"""Tests for auth/config.py - Auth configuration with validation."""

import pytest
from pydantic import ValidationError

from auth.config import AuthConfig


class TestAuthConfigDefaults:
    """Defaults match the deployed behavior."""

    def test_session_ttl_is_one_hour(self):
        config = AuthConfig()
        assert config.session_expiry_minutes == 60
        assert config.session_expiry_seconds == 3600

    def test_bcrypt_cost_default(self):
        assert AuthConfig().password_hash_rounds == 12

    def test_form_limits(self):
        config = AuthConfig()
        assert config.max_name_length == 20
        assert config.max_password_length == 20
        assert config.allowed_email_tlds == ["com", "org", "net"]

    def test_three_member_images(self):
        assert AuthConfig().member_image_count == 3

    def test_email_uniqueness_off_by_default(self):
        assert AuthConfig().enforce_unique_email is False


class TestAuthConfigValidation:
    """AuthConfig enforces validation bounds."""

    def test_session_expiry_min_bound(self):
        with pytest.raises(ValidationError):
            AuthConfig(session_expiry_minutes=0)

    def test_bcrypt_rounds_lower_bound(self):
        with pytest.raises(ValidationError):
            AuthConfig(password_hash_rounds=3)

    def test_bcrypt_rounds_upper_bound(self):
        with pytest.raises(ValidationError):
            AuthConfig(password_hash_rounds=17)

    def test_needs_at_least_one_tld(self):
        with pytest.raises(ValidationError):
            AuthConfig(allowed_email_tlds=[])

    def test_needs_at_least_one_image(self):
        with pytest.raises(ValidationError):
            AuthConfig(member_image_count=0)
