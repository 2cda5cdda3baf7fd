"""
API tests for account endpoints.

Tests cover:
- Route guard (401 without an authenticated user)
- Create account (success + field-level validation errors)
- List, get, edit, set default, delete
- Error responses (403, 404, 409, 422, 500, 503)
"""

import pytest
from fastapi.testclient import TestClient

from fintrack.api.deps import get_document_store
from fintrack.main import app
from fintrack.repositories.protocols import DocumentStoreError

from tests.conftest import FailingDocumentStore


@pytest.fixture
def create_account(client: TestClient, auth_headers):
    """Create an account through the API and return its JSON."""

    def _create(headers=None, **fields) -> dict:
        body = {"name": "Everyday Checking", "type": "checking", "balance": 0}
        body.update(fields)
        response = client.post("/accounts/", json=body, headers=headers or auth_headers)
        assert response.status_code == 201, response.text
        return response.json()

    return _create


# =============================================================================
# AUTH
# =============================================================================


class TestAuthGuard:
    """Requests without a user are rejected."""

    def test_list_without_user_returns_401(self, client: TestClient):
        response = client.get("/accounts/")

        assert response.status_code == 401
        assert response.json()["error"] == "NOT_AUTHENTICATED"

    def test_me_returns_profile(self, client: TestClient, auth_headers):
        response = client.get("/me", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["user_id"] == "user-1"
        assert response.json()["email"] == "ada@example.com"
        assert response.json()["preferences"]["currency"] == "USD"
        assert response.json()["preferences"]["timezone"] == "UTC"


# =============================================================================
# CREATE ACCOUNT TESTS
# =============================================================================


class TestCreateAccountAPI:
    """Tests for POST /accounts endpoint."""

    def test_create_account_success(self, client: TestClient, auth_headers):
        """
        GIVEN no accounts exist
        WHEN I POST /accounts with valid data
        THEN response is 201 with account data
        """
        response = client.post(
            "/accounts/",
            json={"name": "Rainy Day", "type": "savings", "balance": "1500.25", "is_default": True},
            headers=auth_headers,
        )

        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Rainy Day"
        assert data["account_type"] == "savings"
        assert data["type_label"] == "Savings"
        assert data["balance"] == "1500.25"
        assert data["is_default"] is True
        assert data["is_active"] is True
        assert data["owner_id"] == "user-1"
        assert data["account_id"]

    def test_create_reports_every_invalid_field(self, client: TestClient, auth_headers):
        """
        GIVEN an empty name and a non-numeric balance
        WHEN I POST /accounts
        THEN response is 422 with both field errors
        """
        response = client.post(
            "/accounts/",
            json={"name": "", "type": "checking", "balance": "lots"},
            headers=auth_headers,
        )

        assert response.status_code == 422
        body = response.json()
        assert body["error"] == "VALIDATION_ERROR"
        assert set(body["field_errors"]) == {"name", "balance"}

    def test_create_missing_fields_returns_422(self, client: TestClient, auth_headers):
        response = client.post("/accounts/", json={}, headers=auth_headers)

        assert response.status_code == 422
        assert set(response.json()["field_errors"]) == {"name", "type", "balance"}


# =============================================================================
# READ TESTS
# =============================================================================


class TestReadAccountsAPI:
    """Tests for GET endpoints."""

    def test_list_newest_first(self, client: TestClient, auth_headers, create_account):
        create_account(name="First")
        create_account(name="Second")

        response = client.get("/accounts/", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 2
        assert [a["name"] for a in data["accounts"]] == ["Second", "First"]

    def test_list_is_scoped_to_user(
        self, client: TestClient, auth_headers, other_auth_headers, create_account
    ):
        create_account(name="Mine")
        create_account(headers=other_auth_headers, name="Theirs")

        response = client.get("/accounts/", headers=auth_headers)

        assert [a["name"] for a in response.json()["accounts"]] == ["Mine"]

    def test_get_account(self, client: TestClient, auth_headers, create_account):
        account = create_account(name="Wallet", type="cash", balance=20)

        response = client.get(f"/accounts/{account['account_id']}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["name"] == "Wallet"

    def test_get_other_users_account_returns_403(
        self, client: TestClient, other_auth_headers, create_account
    ):
        account = create_account()

        response = client.get(f"/accounts/{account['account_id']}", headers=other_auth_headers)

        assert response.status_code == 403
        assert response.json()["error"] == "UNAUTHORIZED"

    def test_get_missing_account_returns_404(self, client: TestClient, auth_headers):
        response = client.get("/accounts/nonexistent", headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["error"] == "NOT_FOUND"

    def test_default_account_null_when_none(self, client: TestClient, auth_headers, create_account):
        create_account()

        response = client.get("/accounts/default", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() is None


# =============================================================================
# MUTATION TESTS
# =============================================================================


class TestMutateAccountsAPI:
    """Tests for PATCH, default switching and DELETE."""

    def test_patch_updates_given_fields(self, client: TestClient, auth_headers, create_account):
        account = create_account(name="Checking", balance=10)

        response = client.patch(
            f"/accounts/{account['account_id']}",
            json={"balance": -42.5},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json()["name"] == "Checking"
        assert response.json()["balance"] == "-42.5"

    def test_patch_invalid_returns_422(self, client: TestClient, auth_headers, create_account):
        account = create_account()

        response = client.patch(
            f"/accounts/{account['account_id']}",
            json={"type": "brokerage"},
            headers=auth_headers,
        )

        assert response.status_code == 422
        assert "type" in response.json()["field_errors"]

    def test_patch_other_users_account_returns_403(
        self, client: TestClient, other_auth_headers, create_account
    ):
        account = create_account()

        response = client.patch(
            f"/accounts/{account['account_id']}",
            json={"name": "Mine now"},
            headers=other_auth_headers,
        )

        assert response.status_code == 403

    def test_set_default_switches_default(self, client: TestClient, auth_headers, create_account):
        first = create_account(name="First", is_default=True)
        second = create_account(name="Second")

        response = client.post(f"/accounts/{second['account_id']}/default", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["is_default"] is True
        default = client.get("/accounts/default", headers=auth_headers).json()
        assert default["account_id"] == second["account_id"]
        first_now = client.get(f"/accounts/{first['account_id']}", headers=auth_headers).json()
        assert first_now["is_default"] is False

    def test_delete_zero_balance_returns_204(self, client: TestClient, auth_headers, create_account):
        account = create_account(balance=0)

        response = client.delete(f"/accounts/{account['account_id']}", headers=auth_headers)

        assert response.status_code == 204
        assert client.get("/accounts/", headers=auth_headers).json()["count"] == 0

    def test_delete_nonzero_balance_returns_409(
        self, client: TestClient, auth_headers, create_account
    ):
        """
        GIVEN an account with balance 0.01
        WHEN I DELETE it
        THEN response is 409 BALANCE_NOT_ZERO and the account remains listed
        """
        account = create_account(balance="0.01")

        response = client.delete(f"/accounts/{account['account_id']}", headers=auth_headers)

        assert response.status_code == 409
        assert response.json()["error"] == "BALANCE_NOT_ZERO"
        assert client.get("/accounts/", headers=auth_headers).json()["count"] == 1


# =============================================================================
# STORE FAILURES
# =============================================================================


class TestStoreFailureAPI:
    """Store failures map to server-side statuses."""

    def test_unreachable_store_returns_503(self, client: TestClient, auth_headers):
        """
        GIVEN a document store that cannot be reached
        WHEN I list my accounts
        THEN the API returns 503 with the store-unavailable code
        """
        app.dependency_overrides[get_document_store] = lambda: FailingDocumentStore()

        response = client.get("/accounts/", headers=auth_headers)

        assert response.status_code == 503
        body = response.json()
        assert body["error"] == "STORE_UNAVAILABLE"
        assert body["message"] == "Document store unavailable during list_accounts"

    def test_store_failure_returns_500(self, client: TestClient, auth_headers):
        app.dependency_overrides[get_document_store] = lambda: FailingDocumentStore(
            DocumentStoreError("disk full")
        )

        response = client.post(
            "/accounts/",
            json={"name": "Savings", "type": "savings", "balance": 0},
            headers=auth_headers,
        )

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "OPERATION_FAILED"
        assert body["message"] == "Failed to create account"

    def test_mutation_failure_names_the_mutation(self, client: TestClient, auth_headers):
        app.dependency_overrides[get_document_store] = lambda: FailingDocumentStore()

        response = client.delete("/accounts/acc-1", headers=auth_headers)

        assert response.status_code == 503
        assert response.json()["message"] == "Document store unavailable during delete_account"


class TestHealthAPI:
    """Tests for service endpoints."""

    def test_health_check(self, client: TestClient):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
