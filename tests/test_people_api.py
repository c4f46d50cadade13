"""
HTTP API for the person registry, driven in-process through httpx
"""

from datetime import date, timedelta

import pytest

from conftest import BrokenPersonStore, VALID_PERSON, person_candidate
from personnel.database import connection

OUT_OF_RANGE_ID = 99999999999999999999


class TestCreate:

    @pytest.mark.asyncio
    async def test_create_returns_201_and_id(self, api_client):
        response = await api_client.post("/api/records", json=VALID_PERSON)

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Person registered successfully"
        assert isinstance(body["id"], int)
        assert "X-Trace-ID" in response.headers

    @pytest.mark.asyncio
    async def test_camel_case_fields_are_accepted(self, api_client):
        response = await api_client.post("/api/records", json={
            "nationalId": "1234567890",
            "firstNames": "Juan",
            "lastNames": "Perez",
            "birthDate": "2000-01-01",
            "gender": "Masculine",
            "city": "Quito",
        })
        assert response.status_code == 201

    @pytest.mark.asyncio
    async def test_invalid_national_id_returns_field_errors(self, api_client):
        response = await api_client.post("/api/records", json=person_candidate(national_id="12345"))

        assert response.status_code == 400
        body = response.json()
        assert body["errors"] == {"national_id": "National ID must contain exactly 10 digits"}
        assert "trace_id" in body

        listing = await api_client.get("/api/records")
        assert listing.json() == []

    @pytest.mark.asyncio
    async def test_missing_fields_are_reported(self, api_client):
        response = await api_client.post("/api/records", json={"national_id": "1234567890"})

        assert response.status_code == 400
        assert set(response.json()["errors"]) == {"first_names", "last_names", "birth_date", "gender", "city"}

    @pytest.mark.asyncio
    async def test_future_birth_date_is_rejected(self, api_client):
        tomorrow = (date.today() + timedelta(days=1)).isoformat()
        response = await api_client.post("/api/records", json=person_candidate(birth_date=tomorrow))

        assert response.status_code == 400
        assert response.json()["errors"] == {"birth_date": "Birth date cannot be in the future"}

    @pytest.mark.asyncio
    async def test_duplicate_national_id_returns_400(self, api_client):
        await api_client.post("/api/records", json=VALID_PERSON)

        response = await api_client.post("/api/records", json=person_candidate(first_names="Maria"))

        assert response.status_code == 400
        assert response.json()["errors"] == {"national_id": "National ID is already registered"}
        assert len((await api_client.get("/api/records")).json()) == 1

    @pytest.mark.asyncio
    async def test_non_object_body_is_rejected(self, api_client):
        response = await api_client.post("/api/records", json=["not", "a", "record"])
        assert response.status_code == 422


class TestRead:

    @pytest.mark.asyncio
    async def test_get_returns_created_record(self, api_client):
        created = await api_client.post("/api/records", json=VALID_PERSON)
        person_id = created.json()["id"]

        response = await api_client.get(f"/api/records/{person_id}")

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == person_id
        for field, value in VALID_PERSON.items():
            assert body[field] == value
        assert body["registered_at"]

    @pytest.mark.asyncio
    async def test_list_is_most_recent_first(self, api_client):
        first = (await api_client.post("/api/records", json=person_candidate(national_id="1111111111"))).json()
        second = (await api_client.post("/api/records", json=person_candidate(national_id="2222222222"))).json()

        response = await api_client.get("/api/records")

        assert response.status_code == 200
        assert [r["id"] for r in response.json()] == [second["id"], first["id"]]

    @pytest.mark.asyncio
    async def test_get_missing_returns_404(self, api_client):
        response = await api_client.get("/api/records/999")

        assert response.status_code == 404
        assert response.json()["message"] == "Person not found"

    @pytest.mark.asyncio
    async def test_get_out_of_range_id_returns_404(self, api_client):
        response = await api_client.get(f"/api/records/{OUT_OF_RANGE_ID}")
        assert response.status_code == 404


class TestUpdate:

    @pytest.mark.asyncio
    async def test_put_replaces_record(self, api_client):
        person_id = (await api_client.post("/api/records", json=VALID_PERSON)).json()["id"]

        response = await api_client.put(
            f"/api/records/{person_id}",
            json=person_candidate(first_names="Juan Carlos", city="Ambato")
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Person updated successfully"
        assert body["record"]["first_names"] == "Juan Carlos"
        assert body["record"]["city"] == "Ambato"

    @pytest.mark.asyncio
    async def test_put_to_taken_national_id_returns_400(self, api_client):
        await api_client.post("/api/records", json=VALID_PERSON)
        other = (await api_client.post("/api/records", json=person_candidate(national_id="0987654321"))).json()

        response = await api_client.put(f"/api/records/{other['id']}", json=VALID_PERSON)

        assert response.status_code == 400
        unchanged = (await api_client.get(f"/api/records/{other['id']}")).json()
        assert unchanged["national_id"] == "0987654321"

    @pytest.mark.asyncio
    async def test_put_missing_returns_404(self, api_client):
        response = await api_client.put("/api/records/404", json=VALID_PERSON)
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_put_out_of_range_id_returns_404(self, api_client):
        response = await api_client.put(f"/api/records/{OUT_OF_RANGE_ID}", json=VALID_PERSON)
        assert response.status_code == 404


class TestDelete:

    @pytest.mark.asyncio
    async def test_delete_then_get_returns_404(self, api_client):
        person_id = (await api_client.post("/api/records", json=VALID_PERSON)).json()["id"]

        response = await api_client.delete(f"/api/records/{person_id}")

        assert response.status_code == 200
        assert response.json() == {"message": "Person deleted successfully", "deleted_id": person_id}
        assert (await api_client.get(f"/api/records/{person_id}")).status_code == 404

    @pytest.mark.asyncio
    async def test_delete_missing_returns_404(self, api_client):
        response = await api_client.delete("/api/records/12345")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_out_of_range_id_returns_404(self, api_client):
        response = await api_client.delete(f"/api/records/{OUT_OF_RANGE_ID}")
        assert response.status_code == 404


class TestHealth:

    @pytest.mark.asyncio
    async def test_health_reports_store(self, api_client):
        response = await api_client.get("/")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["store"] == "SqlitePersonStore"

    @pytest.mark.asyncio
    async def test_unreachable_store_returns_503(self, api_client, monkeypatch):
        monkeypatch.setattr(connection, "person_store", BrokenPersonStore())

        response = await api_client.get("/")

        assert response.status_code == 503


class TestStorageFailure:

    @pytest.mark.parametrize("method,path,body", [
        ("POST", "/api/records", VALID_PERSON),
        ("GET", "/api/records", None),
        ("GET", "/api/records/1", None),
        ("PUT", "/api/records/1", VALID_PERSON),
        ("DELETE", "/api/records/1", None),
    ])
    @pytest.mark.asyncio
    async def test_store_errors_return_500_without_internals(self, api_client, monkeypatch, method, path, body):
        monkeypatch.setattr(connection, "person_store", BrokenPersonStore())

        response = await api_client.request(method, path, json=body)

        assert response.status_code == 500
        assert response.json()["message"] == "Storage operation failed"
        assert BrokenPersonStore.reason not in response.text
