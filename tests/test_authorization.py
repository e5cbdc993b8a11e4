"""
Authorization dependency tests.

Verifies:
- Missing header, missing token and invalid token each return 401 with their own message
- Rejected requests never reach the handler
- A valid bearer token populates the identity context
- Security headers are present on responses
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import Mock

import pytest

from regal.application.services.token_service import TokenService

from .conftest import TEST_SECRET


# =============================================================================
# REJECTIONS: 401
# =============================================================================


class TestRejectedRequests:

    def test_missing_header(self, client):
        resp = client.get("/regal/api/company/get")
        assert resp.status_code == 401
        assert resp.json() == {"message": "Authorization header missing"}

    @pytest.mark.parametrize("header", ["Bearer", "Basic abc", "token-without-scheme"])
    def test_missing_token(self, client, header):
        resp = client.get("/regal/api/company/get", headers={"Authorization": header})
        assert resp.status_code == 401
        assert resp.json()["message"] == "Token missing from authorization header"

    def test_invalid_token_surfaces_diagnostic(self, client):
        resp = client.get("/regal/api/company/get", headers={"Authorization": "Bearer garbage"})
        assert resp.status_code == 401
        body = resp.json()
        assert body["message"] == "Invalid or expired token"
        assert "error" in body

    def test_expired_token(self, client, alice):
        past = datetime.now(tz=timezone.utc) - timedelta(hours=2)
        token = TokenService(TEST_SECRET, clock=lambda: past).issue(alice.id, alice.email)
        resp = client.get("/regal/api/user/me", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 401
        assert resp.json()["message"] == "Invalid or expired token"

    def test_token_signed_with_another_secret(self, client, alice):
        token = TokenService("some-other-secret").issue(alice.id, alice.email)
        resp = client.get("/regal/api/user/me", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 401

    @pytest.mark.parametrize(
        "method,path",
        [
            ("GET", "/regal/api/company/get"),
            ("POST", "/regal/api/company/add"),
            ("PUT", "/regal/api/company/edit/64b000000000000000000001"),
            ("DELETE", "/regal/api/company/delete/64b000000000000000000001"),
            ("POST", "/regal/api/product/add"),
            ("GET", "/regal/api/product/all/someone"),
            ("GET", "/regal/api/product/get-images/64b000000000000000000001"),
            ("DELETE", "/regal/api/user/delete-account"),
        ],
    )
    def test_protected_routes_require_header(self, client, method, path):
        resp = client.request(method, path)
        assert resp.status_code == 401, f"{method} {path} returned {resp.status_code}"

    def test_handler_not_reached(self, client, container):
        container.company_service = Mock()
        resp = client.get("/regal/api/company/get", headers={"Authorization": "Bearer nope"})
        assert resp.status_code == 401
        container.company_service.list_owned.assert_not_called()


# =============================================================================
# ACCEPTED REQUESTS
# =============================================================================


class TestAcceptedRequests:

    def test_identity_reaches_handler(self, client, container, alice, alice_headers):
        container.company_service = Mock()
        container.company_service.list_owned.return_value = []

        resp = client.get("/regal/api/company/get", headers=alice_headers)

        assert resp.status_code == 200
        identity = container.company_service.list_owned.call_args.args[0]
        assert identity.subject_id == alice.id
        assert identity.subject_email == alice.email
        assert identity.owner_id == alice.id
        assert alice_headers["Authorization"].endswith(identity.token)

    def test_scheme_is_case_insensitive(self, client, alice, alice_headers):
        token = alice_headers["Authorization"].split()[1]
        resp = client.get("/regal/api/user/me", headers={"Authorization": f"bearer {token}"})
        assert resp.status_code == 200
        assert resp.json()["user"]["id"] == alice.id

    def test_security_headers(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.headers["X-Content-Type-Options"] == "nosniff"
        assert resp.headers["X-Frame-Options"] == "SAMEORIGIN"
