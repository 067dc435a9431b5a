"""Tests for registration, login and sessions."""

import pytest

from service.auth import generate_session_token, hash_password, verify_password
from service.exceptions import InvalidCredentialsError, InvalidSessionError, UserAlreadyExistsError


class TestPasswordHelpers:
    def test_hash_and_verify(self):
        password_hash = hash_password("s3cret", rounds=4)

        assert password_hash != "s3cret"
        assert verify_password("s3cret", password_hash)
        assert not verify_password("wrong", password_hash)

    def test_session_token_format(self):
        token = generate_session_token()

        assert token.startswith("dc_")
        assert len(token) == 3 + 36
        assert token != generate_session_token()


class TestRegistration:
    def test_register_user(self, services):
        result = services.auth.register_user("dave", "pw")

        assert result.username == "dave"
        user = services.auth.user_repo.get_by_user_id(result.user_id)
        assert user.storage_used == 0
        assert user.storage_limit == 1000

    def test_duplicate_username_rejected(self, services, alice):
        with pytest.raises(UserAlreadyExistsError):
            services.auth.register_user("alice", "other")

    @pytest.mark.parametrize("username,password", [("", "pw"), ("   ", "pw"), ("erin", "")])
    def test_empty_credentials_rejected(self, services, username, password):
        with pytest.raises(InvalidCredentialsError):
            services.auth.register_user(username, password)


class TestLogin:
    def test_login_returns_session(self, services, alice):
        result = services.auth.login_user("alice", "alicepass")

        assert result.user_id == alice
        assert services.auth.resolve_session(result.token).user_id == alice

    def test_wrong_password(self, services, alice):
        with pytest.raises(InvalidCredentialsError):
            services.auth.login_user("alice", "nope")

    def test_unknown_user(self, services):
        with pytest.raises(InvalidCredentialsError):
            services.auth.login_user("nobody", "pw")

    def test_sessions_are_independent(self, services, alice, bob):
        alice_token = services.auth.login_user("alice", "alicepass").token
        bob_token = services.auth.login_user("bob", "bobpass").token

        assert services.auth.resolve_session(alice_token).user_id == alice
        assert services.auth.resolve_session(bob_token).user_id == bob

    def test_logout_invalidates_token(self, services, alice):
        token = services.auth.login_user("alice", "alicepass").token

        assert services.auth.logout(token) is True
        with pytest.raises(InvalidSessionError):
            services.auth.resolve_session(token)
        assert services.auth.logout(token) is False

    def test_unknown_token(self, services):
        with pytest.raises(InvalidSessionError):
            services.auth.resolve_session("dc_bogus")
        with pytest.raises(InvalidSessionError):
            services.auth.resolve_session("")
