# server/tests/test_onboarding_api.py

from core import config
from core.sessions import get_session_issuer
from tests.conftest import bearer
from tests.test_onboarding import wizard


class TestOnboardingEndpoint:

    def test_requires_session(self, client):
        response = client.post("/api/onboarding", json=wizard())
        assert response.status_code == 401
        assert response.json()["message"] == "Unauthorized"

    def test_completes_onboarding_and_reissues_cookie(self, client, db, make_user, issue_token):
        user = make_user()

        response = client.post("/api/onboarding", json=wizard(), headers=bearer(issue_token(user)))

        assert response.status_code == 200
        assert response.json() == {"success": True}

        token = response.cookies.get(config.SESSION_COOKIE_NAME)
        assert get_session_issuer().read(token).completed_onboarding is True

        db.refresh(user)
        assert user.completed_onboarding is True

    def test_validation_error(self, client, make_user, issue_token):
        user = make_user()

        response = client.post(
            "/api/onboarding",
            json=wizard(lastName=""),
            headers=bearer(issue_token(user)),
        )

        assert response.status_code == 400
        assert response.json()["success"] is False
        assert "Last name is required" in response.json()["message"]

    def test_deleted_user(self, client, db, make_user, issue_token):
        user = make_user()
        token = issue_token(user)
        db.delete(user)
        db.commit()

        response = client.post("/api/onboarding", json=wizard(), headers=bearer(token))

        assert response.status_code == 401
