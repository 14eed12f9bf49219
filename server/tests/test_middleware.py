# server/tests/test_middleware.py

"""
Tests for the request gate and locale resolution on page routes.
"""

import pytest

from core import config
from tests.conftest import bearer


def location(response):
    return response.headers["location"]


class TestRequestGate:

    def test_no_session_dashboard_redirects_to_sign_in(self, client):
        response = client.get("/dashboard", follow_redirects=False)
        assert response.status_code == 307
        assert location(response) == "/sign-in"

    def test_not_onboarded_redirects_to_onboarding(self, client, make_user, issue_token):
        token = issue_token(make_user())
        response = client.get("/en/dashboard", headers=bearer(token), follow_redirects=False)
        assert location(response) == "/onboarding"

    def test_onboarded_user_leaves_onboarding(self, client, make_user, issue_token):
        token = issue_token(make_user(completed_onboarding=True))
        response = client.get("/en/onboarding", headers=bearer(token), follow_redirects=False)
        assert location(response) == "/dashboard"

    def test_signed_in_user_leaves_sign_in(self, client, make_user, issue_token):
        token = issue_token(make_user(completed_onboarding=True))
        response = client.get("/en/sign-in", headers=bearer(token), follow_redirects=False)
        assert location(response) == "/dashboard"

    def test_no_session_sign_in_passes_through(self, client):
        response = client.get("/en/sign-in", follow_redirects=False)
        assert response.status_code == 200
        assert response.json() == {"page": "sign-in", "locale": "en"}

    def test_invalid_token_counts_as_no_session(self, client):
        response = client.get("/en/dashboard", headers=bearer("garbage"), follow_redirects=False)
        assert location(response) == "/sign-in"

    def test_session_cookie_is_read(self, client, make_user, issue_token):
        client.cookies.set(
            config.SESSION_COOKIE_NAME,
            issue_token(make_user(completed_onboarding=True)),
        )
        response = client.get("/en/dashboard", follow_redirects=False)
        assert response.status_code == 200
        assert response.json()["session"]["user"]["username"] == "testuser"

    @pytest.mark.parametrize("path", ["/api/auth/session", "/openapi.json", "/favicon.ico"])
    def test_excluded_paths_are_not_gated(self, client, path):
        response = client.get(path, follow_redirects=False)
        assert response.status_code != 307

    def test_full_redirect_chain_to_localized_sign_in(self, client):
        response = client.get("/dashboard")
        assert response.status_code == 200
        assert response.json() == {"page": "sign-in", "locale": "en"}


class TestLocaleResolution:

    def test_missing_locale_redirects_with_query(self, client):
        response = client.get("/sign-up?ref=home", follow_redirects=False)
        assert response.status_code == 307
        assert location(response) == "/en/sign-up?ref=home"

    def test_accept_language(self, client):
        response = client.get(
            "/sign-in",
            headers={"Accept-Language": "es-ES,es;q=0.9,en;q=0.5"},
            follow_redirects=False,
        )
        assert location(response) == "/es/sign-in"

    def test_locale_cookie_is_set(self, client):
        response = client.get("/es/sign-in")
        assert response.cookies.get(config.LOCALE_COOKIE_NAME) == "es"

    def test_locale_cookie_wins(self, client):
        client.cookies.set(config.LOCALE_COOKIE_NAME, "es")
        response = client.get("/sign-up", follow_redirects=False)
        assert location(response) == "/es/sign-up"

    def test_onboarded_home_page(self, client, make_user, issue_token):
        token = issue_token(make_user(completed_onboarding=True))
        response = client.get("/", headers=bearer(token), follow_redirects=False)
        assert location(response) == "/en"


class TestDeletedUser:

    def test_dashboard_hides_session_of_deleted_user(self, client, db, make_user, issue_token):
        user = make_user(completed_onboarding=True)
        token = issue_token(user)
        db.delete(user)
        db.commit()

        response = client.get("/en/dashboard", headers=bearer(token), follow_redirects=False)

        assert response.status_code == 200
        assert response.json()["session"] is None


class TestCors:

    def test_gate_redirect_has_cors_headers(self, client):
        response = client.get(
            "/dashboard",
            headers={"Origin": "http://localhost:3000"},
            follow_redirects=False,
        )
        assert response.status_code == 307
        assert "access-control-allow-origin" in response.headers
