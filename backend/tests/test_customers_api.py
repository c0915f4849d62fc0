"""
Tests for customer profile endpoints.

Covers reads for any authenticated caller and owner-only updates/deletes.
"""

import pytest


class TestCustomerReads:
    def test_me_returns_token_owner(self, client, register_customer, bearer):
        customer, token = register_customer()

        response = client.get("/api/customers/me", headers=bearer(token))

        assert response.status_code == 200
        assert response.json()["data"]["customer"]["id"] == customer["id"]

    def test_list_customers(self, client, register_customer, bearer):
        register_customer()
        _, token = register_customer(email="bob@example.com", name="Bob Builder")

        response = client.get("/api/customers", headers=bearer(token))

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["results"] == 2
        assert {c["email"] for c in data["customers"]} == {
            "alice@example.com",
            "bob@example.com",
        }

    def test_get_other_customer_by_id(self, client, register_customer, bearer):
        alice, _ = register_customer()
        _, bob_token = register_customer(email="bob@example.com", name="Bob Builder")

        response = client.get(f"/api/customers/{alice['id']}", headers=bearer(bob_token))

        assert response.status_code == 200
        assert response.json()["data"]["customer"]["name"] == "Alice"

    def test_unknown_customer_is_404(self, client, register_customer, bearer):
        _, token = register_customer()

        response = client.get("/api/customers/does-not-exist", headers=bearer(token))

        assert response.status_code == 404
        assert response.json()["error_code"] == "NOT_FOUND"


class TestCustomerUpdate:
    def test_owner_can_update_profile(self, client, register_customer, bearer):
        customer, token = register_customer()

        response = client.put(
            f"/api/customers/{customer['id']}",
            json={"name": "Alice Cooper", "birth_date": "1991-01-02"},
            headers=bearer(token),
        )

        assert response.status_code == 200
        updated = response.json()["data"]["customer"]
        assert updated["name"] == "Alice Cooper"
        assert updated["birth_date"] == "1991-01-02"
        assert updated["email"] == "alice@example.com"

    def test_cannot_update_someone_else(self, client, register_customer, bearer):
        alice, _ = register_customer()
        _, bob_token = register_customer(email="bob@example.com", name="Bob Builder")

        response = client.put(
            f"/api/customers/{alice['id']}",
            json={"name": "Hijacked"},
            headers=bearer(bob_token),
        )

        assert response.status_code == 403
        assert response.json()["error_code"] == "FORBIDDEN"

    def test_email_taken_by_other_customer(self, client, register_customer, bearer):
        register_customer()
        bob, bob_token = register_customer(email="bob@example.com", name="Bob Builder")

        response = client.put(
            f"/api/customers/{bob['id']}",
            json={"email": "alice@example.com"},
            headers=bearer(bob_token),
        )

        assert response.status_code == 409
        assert response.json()["details"] == {"field": "email"}

    @pytest.mark.parametrize(
        "payload",
        [
            {"password": "new-password"},
            {"id": "another-id"},
            {"name": "Al"},
            {"birth_date": "02-01-1991"},
        ],
    )
    def test_invalid_update_is_rejected(self, client, register_customer, bearer, payload):
        customer, token = register_customer()

        response = client.put(
            f"/api/customers/{customer['id']}", json=payload, headers=bearer(token)
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_FAILED"


class TestCustomerDelete:
    def test_owner_can_delete_profile_and_sales(self, client, register_customer, bearer):
        customer, token = register_customer()
        client.post("/api/sales", json={"value": 10}, headers=bearer(token))
        _, bob_token = register_customer(email="bob@example.com", name="Bob Builder")

        response = client.delete(f"/api/customers/{customer['id']}", headers=bearer(token))

        assert response.status_code == 204
        assert (
            client.get(f"/api/customers/{customer['id']}", headers=bearer(bob_token)).status_code
            == 404
        )
        top = client.get(
            "/api/sales/statistics/top-volume-customer", headers=bearer(bob_token)
        )
        assert top.json()["data"]["topCustomer"] is None

    def test_cannot_delete_someone_else(self, client, register_customer, bearer):
        alice, _ = register_customer()
        _, bob_token = register_customer(email="bob@example.com", name="Bob Builder")

        response = client.delete(f"/api/customers/{alice['id']}", headers=bearer(bob_token))

        assert response.status_code == 403

    def test_delete_unknown_customer(self, client, register_customer, bearer):
        _, token = register_customer()

        response = client.delete("/api/customers/missing", headers=bearer(token))

        assert response.status_code == 404
