# server/tests/test_accounts.py

import pytest

from core import accounts
from core.accounts import ProviderProfile, link_provider_account
from core.credentials import authenticate
from core.exceptions import AccountNotLinkedError, AuthenticationUnavailableError, NoAccountFoundError
from models.account import Account
from tests.conftest import TEST_PASSWORD


def github_profile(**overrides):
    data = {
        "provider": "github",
        "provider_account_id": "12345",
        "email": "Octo@Example.com",
        "name": "Octo Cat",
        "image": "https://example.com/octo.png",
    }
    data.update(overrides)
    return ProviderProfile(**data)


class TestLinkProviderAccount:

    def test_creates_password_less_user(self, db):
        user = link_provider_account(db, github_profile())

        assert user.email == "octo@example.com"
        assert user.username == "octo"
        assert user.hashed_password is None
        assert user.completed_onboarding is False
        assert db.query(Account).filter(Account.user_id == user.id).count() == 1

    def test_returns_linked_user_on_next_sign_in(self, db):
        first = link_provider_account(db, github_profile())
        again = link_provider_account(db, github_profile(email="changed@example.com"))
        assert again.id == first.id

    def test_username_is_deduplicated(self, db, make_user):
        make_user(username="octo", email="someone@example.com")
        user = link_provider_account(db, github_profile())
        assert user.username == "octo2"

    def test_existing_email_is_not_linked(self, db, make_user):
        make_user(email="octo@example.com")
        with pytest.raises(AccountNotLinkedError):
            link_provider_account(db, github_profile())

    def test_social_user_cannot_use_password_sign_in(self, db):
        link_provider_account(db, github_profile())
        with pytest.raises(NoAccountFoundError):
            authenticate(db, "octo@example.com", TEST_PASSWORD)


class TestUsernameRace:

    def test_retries_when_username_taken_at_insert(self, db, make_user, monkeypatch):
        make_user(username="octo", email="someone@example.com")
        real_available = accounts.available_username
        picks = iter(["octo"])

        def stale_then_real(session, email):
            return next(picks, None) or real_available(session, email)

        monkeypatch.setattr(accounts, "available_username", stale_then_real)

        user = link_provider_account(db, github_profile())

        assert user.username == "octo2"
        assert user.email == "octo@example.com"

    def test_gives_up_after_repeated_collisions(self, db, make_user, monkeypatch):
        make_user(username="octo", email="someone@example.com")
        monkeypatch.setattr(accounts, "available_username", lambda session, email: "octo")

        with pytest.raises(AuthenticationUnavailableError):
            link_provider_account(db, github_profile())
        assert db.query(Account).count() == 0
