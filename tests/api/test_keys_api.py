"""
Tests for the key and activity log API endpoints.

These test the HTTP layer — status codes, response format,
and error mapping. Business rules are tested in
test_checkout_coordinator.py.
"""

import pytest
from fastapi import HTTPException

from key_ledger.api.keys import list_keys
from key_ledger.exceptions import StoreIOError
from key_ledger.services.checkout_coordinator import CheckoutCoordinator
from key_ledger.dependencies import get_coordinator
from key_ledger.main import app
from key_ledger.storage.activity_log import ActivityLog


def add_key(client, name="K1", location="L1"):
    response = client.post("/keys", json={"name": name, "location": location})
    assert response.status_code == 201
    return response.json()


class TestAddKey:

    def test_add_key_returns_201(self, client):
        data = add_key(client, "Main Office", "Bldg A")
        assert data["name"] == "Main Office"
        assert data["status"] == "AVAILABLE"
        assert data["holder"] is None
        assert data["checked_out_at"] is None

    def test_blank_name_returns_400(self, client):
        response = client.post("/keys", json={"name": "  ", "location": "L1"})
        assert response.status_code == 400
        assert "name" in response.json()["detail"]

    def test_missing_field_returns_422(self, client):
        response = client.post("/keys", json={"name": "K1"})
        assert response.status_code == 422


class TestListKeys:

    def test_list_keys(self, client):
        add_key(client, "K1")
        add_key(client, "K2")

        response = client.get("/keys")
        assert response.status_code == 200
        assert [k["name"] for k in response.json()] == ["K1", "K2"]

    def test_filter_by_status(self, client):
        k1 = add_key(client, "K1")
        add_key(client, "K2")
        client.post(f"/keys/{k1['id']}/checkout", json={"person": "Alice"})

        out = client.get("/keys", params={"status": "CHECKED_OUT"}).json()
        available = client.get("/keys", params={"status": "AVAILABLE"}).json()

        assert [k["name"] for k in out] == ["K1"]
        assert [k["name"] for k in available] == ["K2"]

    def test_summary(self, client):
        k1 = add_key(client, "K1")
        add_key(client, "K2")
        client.post(f"/keys/{k1['id']}/checkout", json={"person": "Alice"})

        data = client.get("/keys/summary").json()
        assert data == {"total": 2, "available": 1, "checked_out": 1}

    def test_malformed_store_returns_503(self, client, blob_store):
        blob_store.set("keys", "garbage")
        response = client.get("/keys")
        assert response.status_code == 503


class TestCheckOutAndIn:

    def test_check_out_returns_transition(self, client):
        key = add_key(client)

        response = client.post(
            f"/keys/{key['id']}/checkout", json={"person": "Alice"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["key"]["status"] == "CHECKED_OUT"
        assert data["key"]["holder"] == "Alice"
        assert data["log_entry"]["action"] == "checkout"
        assert data["log_entry"]["key_name"] == "K1"
        assert data["log_recorded"] is True

    def test_double_check_out_returns_409(self, client):
        key = add_key(client)
        client.post(f"/keys/{key['id']}/checkout", json={"person": "Alice"})

        response = client.post(
            f"/keys/{key['id']}/checkout", json={"person": "Bob"}
        )
        assert response.status_code == 409

    def test_unknown_key_returns_404(self, client):
        response = client.post("/keys/missing/checkout", json={"person": "Alice"})
        assert response.status_code == 404

    def test_blank_person_returns_400(self, client):
        key = add_key(client)
        response = client.post(f"/keys/{key['id']}/checkout", json={"person": ""})
        assert response.status_code == 400

    def test_check_in_by_someone_else(self, client):
        key = add_key(client)
        client.post(f"/keys/{key['id']}/checkout", json={"person": "Alice"})

        response = client.post(f"/keys/{key['id']}/checkin", json={"person": "Bob"})

        assert response.status_code == 200
        data = response.json()
        assert data["key"]["status"] == "AVAILABLE"
        assert data["key"]["holder"] is None
        assert data["log_entry"]["person"] == "Bob"

    def test_check_in_available_key_returns_409(self, client):
        key = add_key(client)
        response = client.post(f"/keys/{key['id']}/checkin", json={"person": "Bob"})
        assert response.status_code == 409

    def test_lost_log_entry_is_flagged(
        self, client, key_store, broken_blob_store, clock
    ):
        coordinator = CheckoutCoordinator(
            key_store, ActivityLog(broken_blob_store("checkoutLogs")), clock=clock
        )
        app.dependency_overrides[get_coordinator] = lambda: coordinator
        key = add_key(client)

        response = client.post(
            f"/keys/{key['id']}/checkout", json={"person": "Alice"}
        )

        assert response.status_code == 200
        assert response.json()["log_recorded"] is False


class TestRemoveKey:

    def test_remove_returns_removed_key(self, client):
        key = add_key(client)

        response = client.delete(f"/keys/{key['id']}")

        assert response.status_code == 200
        assert response.json()["id"] == key["id"]
        assert client.get("/keys").json() == []

    def test_remove_checked_out_returns_409(self, client):
        key = add_key(client)
        client.post(f"/keys/{key['id']}/checkout", json={"person": "Alice"})

        response = client.delete(f"/keys/{key['id']}")

        assert response.status_code == 409
        assert len(client.get("/keys").json()) == 1

    def test_remove_unknown_returns_404(self, client):
        assert client.delete("/keys/missing").status_code == 404


class TestLogs:

    def test_logs_newest_first_and_survive_removal(self, client):
        key = add_key(client)
        client.post(f"/keys/{key['id']}/checkout", json={"person": "Alice"})
        client.post(f"/keys/{key['id']}/checkin", json={"person": "Bob"})
        client.delete(f"/keys/{key['id']}")

        response = client.get("/logs")

        assert response.status_code == 200
        data = response.json()
        assert [(e["action"], e["person"]) for e in data] == [
            ("checkin", "Bob"),
            ("checkout", "Alice"),
        ]
        assert all(e["key_name"] == "K1" for e in data)

    def test_empty_log(self, client):
        assert client.get("/logs").json() == []


class TestErrorTranslation:

    def test_http_error_chains_domain_error(self, key_store, blob_store):
        blob_store.set("keys", "garbage")

        with pytest.raises(HTTPException) as excinfo:
            list_keys(status=None, key_store=key_store)

        assert excinfo.value.status_code == 503
        assert isinstance(excinfo.value.__cause__, StoreIOError)
