"""
PrayerSpot Backend — API Endpoint Tests
=========================================

What:  Full request/response tests against an in-memory SQLite store.
How:   The app is built with `create_app(database=...)`, so every test gets
       its own empty store.
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import func, select

from prayerspot.main import create_app
from prayerspot.models import UserAccount


class TestServiceEndpoints:

    @pytest.mark.asyncio
    async def test_empty_directory_lists_nothing(self, test_client):
        response = await test_client.get("/api/servicedetails")

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_added_service_is_found_by_pincode(self, test_client, sample_service_payload):
        created = await test_client.post("/api/addservice", json=sample_service_payload)

        assert created.status_code == 201
        body = created.json()
        assert body["message"] == "Service added successfully."
        assert body["service"]["name"] == "Masjid-e-Noor"
        assert body["service"]["gmapLink"] == sample_service_payload["gmapLink"]
        assert body["service"]["prayerTimings"]["jumuah"] == {"azan": "13:15", "iqamah": "13:45"}

        lookup = await test_client.post("/api/getservice", json={"pincode": "560001"})

        assert lookup.status_code == 200
        ids = [entry["id"] for entry in lookup.json()["filteredServices"]]
        assert body["service"]["id"] in ids

    @pytest.mark.asyncio
    async def test_pincode_lookup_is_exact_match(self, test_client, sample_service_payload):
        await test_client.post("/api/addservice", json=sample_service_payload)
        other = dict(sample_service_payload, name="Jama Masjid", pincode="110006")
        await test_client.post("/api/addservice", json=other)

        response = await test_client.post("/api/getservice", json={"pincode": "11000"})

        assert response.status_code == 200
        assert response.json() == {"filteredServices": []}

    @pytest.mark.asyncio
    async def test_listing_returns_entries_in_insertion_order(self, test_client, sample_service_payload):
        await test_client.post("/api/addservice", json=sample_service_payload)
        await test_client.post(
            "/api/addservice", json=dict(sample_service_payload, name="Second", pincode="560002")
        )

        response = await test_client.get("/api/servicedetails")

        assert [entry["name"] for entry in response.json()] == ["Masjid-e-Noor", "Second"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("field", ["name", "address", "pincode", "gmapLink"])
    async def test_missing_field_is_rejected_and_nothing_persisted(
        self, test_client, sample_service_payload, field
    ):
        del sample_service_payload[field]

        response = await test_client.post("/api/addservice", json=sample_service_payload)

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"
        assert field in response.json()["details"]["missing"]

        listing = await test_client.get("/api/servicedetails")
        assert listing.json() == []

    @pytest.mark.asyncio
    async def test_asar_without_iqamah_is_rejected(self, test_client, sample_service_payload):
        del sample_service_payload["prayerTimings"]["asar"]["iqamah"]

        response = await test_client.post("/api/addservice", json=sample_service_payload)

        assert response.status_code == 400
        assert "asar" in response.json()["message"]

        listing = await test_client.get("/api/servicedetails")
        assert listing.json() == []

    @pytest.mark.asyncio
    async def test_service_without_schedule_is_accepted(self, test_client, sample_service_payload):
        del sample_service_payload["prayerTimings"]

        response = await test_client.post("/api/addservice", json=sample_service_payload)

        assert response.status_code == 201
        assert response.json()["service"]["prayerTimings"] is None

    @pytest.mark.asyncio
    async def test_numeric_pincode_is_coerced(self, test_client, sample_service_payload):
        sample_service_payload["pincode"] = 560001

        created = await test_client.post("/api/addservice", json=sample_service_payload)
        lookup = await test_client.post("/api/getservice", json={"pincode": 560001})

        assert created.status_code == 201
        assert created.json()["service"]["pincode"] == "560001"
        assert len(lookup.json()["filteredServices"]) == 1

    @pytest.mark.asyncio
    async def test_lookup_without_pincode_is_rejected(self, test_client):
        response = await test_client.post("/api/getservice", json={})

        assert response.status_code == 400
        assert response.json()["message"] == "Pincode field is required."


class TestAccountEndpoints:

    REGISTRATION = {
        "name": "mosqueA",
        "mobileNumber": "111",
        "email": "a@x.com",
        "password": "p1",
    }

    @pytest.mark.asyncio
    async def test_register_then_duplicate_name_conflicts(self, test_client, database):
        first = await test_client.post("/api/register", json=self.REGISTRATION)
        second = await test_client.post(
            "/api/register", json=dict(self.REGISTRATION, email="other@x.com")
        )

        assert first.status_code == 201
        assert first.json() == {"message": "User added successfully."}
        assert second.status_code == 409

        async with database.session_factory() as session:
            count = await session.scalar(
                select(func.count(UserAccount.id)).where(UserAccount.name == "mosqueA")
            )
        assert count == 1

    @pytest.mark.asyncio
    async def test_duplicate_email_is_allowed(self, test_client):
        await test_client.post("/api/register", json=self.REGISTRATION)

        response = await test_client.post(
            "/api/register", json=dict(self.REGISTRATION, name="mosqueB")
        )

        assert response.status_code == 201

    @pytest.mark.asyncio
    async def test_password_is_not_stored_raw(self, test_client, database):
        await test_client.post("/api/register", json=self.REGISTRATION)

        async with database.session_factory() as session:
            account = (await session.execute(select(UserAccount))).scalar_one()
        assert account.password_hash != "p1"
        assert "p1" not in account.password_hash.split("$")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("field", ["name", "mobileNumber", "email", "password"])
    async def test_register_missing_field(self, test_client, field):
        body = dict(self.REGISTRATION)
        del body[field]

        response = await test_client.post("/api/register", json=body)

        assert response.status_code == 400
        assert response.json()["details"]["missing"] == [field]

    @pytest.mark.asyncio
    async def test_login_success(self, test_client):
        await test_client.post("/api/register", json=self.REGISTRATION)

        response = await test_client.post(
            "/api/login", json={"email": "a@x.com", "password": "p1"}
        )

        assert response.status_code == 200
        assert response.json() == {"message": "Login successful", "user": {"email": "a@x.com"}}

    @pytest.mark.asyncio
    async def test_login_wrong_password(self, test_client):
        await test_client.post("/api/register", json=self.REGISTRATION)

        response = await test_client.post(
            "/api/login", json={"email": "a@x.com", "password": "nope"}
        )

        assert response.status_code == 401
        assert response.json()["error"] == "authentication_failed"

    @pytest.mark.asyncio
    async def test_login_unknown_email_is_401_not_a_crash(self, test_client):
        response = await test_client.post(
            "/api/login", json={"email": "ghost@x.com", "password": "p1"}
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_login_requires_both_fields(self, test_client):
        response = await test_client.post("/api/login", json={"email": "a@x.com"})

        assert response.status_code == 400


class TestErrorHandling:

    @pytest.mark.asyncio
    async def test_malformed_json_is_400(self, test_client):
        response = await test_client.post(
            "/api/getservice",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    @pytest.mark.asyncio
    async def test_store_failure_is_500_without_driver_detail(self, empty_database):
        app = create_app(database=empty_database)
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/api/servicedetails")

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "server_error"
        assert "no such table" not in response.text
        assert "request_id" in body

    @pytest.mark.asyncio
    async def test_request_id_is_echoed(self, test_client):
        response = await test_client.get(
            "/api/servicedetails", headers={"X-Request-ID": "abc12345"}
        )

        assert response.headers["X-Request-ID"] == "abc12345"

    @pytest.mark.asyncio
    async def test_cors_allows_any_origin(self, test_client):
        response = await test_client.get(
            "/api/servicedetails", headers={"Origin": "http://example.org"}
        )

        assert response.headers["access-control-allow-origin"] == "*"


class TestHealth:

    @pytest.mark.asyncio
    async def test_health_reports_connected_store(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["database"] == "connected"
