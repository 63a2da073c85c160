"""
Integration tests for the settings and catalog endpoints.
"""

import pytest


@pytest.fixture
def api(client, seeded_catalog):
    return client


class TestCalendarSettings:
    def test_defaults(self, api):
        response = api.get("/api/settings/calendar")

        data = response.get_json()["data"]
        assert data["working_days"] == [0, 1, 2, 3, 4, 5]
        assert data["default_hours"] == {"start": "09:00", "end": "18:00"}
        assert data["special_days"] == []

    def test_update_weekly_pattern_changes_slots(self, api):
        response = api.put(
            "/api/settings/calendar",
            json={"working_days": [0, 1, 2, 3, 4], "start": "10:00", "end": "12:00"},
        )
        assert response.status_code == 200

        saturday = api.get(
            "/api/appointments/slots?professional_id=1&date=2027-01-09&service_ids=1"
        ).get_json()["data"]
        monday = api.get(
            "/api/appointments/slots?professional_id=1&date=2027-01-04&service_ids=1"
        ).get_json()["data"]

        assert saturday["slots"] == []
        assert monday["slots"] == ["10:00", "10:15", "10:30", "10:45", "11:00", "11:15", "11:30"]

    def test_invalid_hours(self, api):
        response = api.put(
            "/api/settings/calendar",
            json={"working_days": [0], "start": "18:00", "end": "09:00"},
        )
        assert response.status_code == 400

    def test_closed_special_day(self, api):
        response = api.put(
            "/api/settings/calendar/special-days/2027-01-05", json={"is_closed": True}
        )
        assert response.status_code == 200

        slots = api.get(
            "/api/appointments/slots?professional_id=1&date=2027-01-05&service_ids=1"
        ).get_json()["data"]["slots"]
        assert slots == []

    def test_special_day_custom_hours_and_removal(self, api):
        api.put(
            "/api/settings/calendar/special-days/2027-01-10",
            json={"is_closed": False, "start": "10:00", "end": "11:00"},
        )
        open_sunday = api.get(
            "/api/appointments/slots?professional_id=1&date=2027-01-10&service_ids=1"
        ).get_json()["data"]["slots"]

        removed = api.delete("/api/settings/calendar/special-days/2027-01-10")
        removed_again = api.delete("/api/settings/calendar/special-days/2027-01-10")

        assert open_sunday == ["10:00", "10:15", "10:30"]
        assert removed.status_code == 200
        assert removed_again.status_code == 404

    def test_invalid_special_day_date(self, api):
        response = api.put(
            "/api/settings/calendar/special-days/not-a-date", json={"is_closed": True}
        )
        assert response.status_code == 400

    def test_string_false_keeps_custom_hours(self, api):
        response = api.put(
            "/api/settings/calendar/special-days/2027-01-10",
            json={"is_closed": "false", "start": "10:00", "end": "11:00"},
        )
        slots = api.get(
            "/api/appointments/slots?professional_id=1&date=2027-01-10&service_ids=1"
        ).get_json()["data"]["slots"]

        assert response.status_code == 200
        assert slots == ["10:00", "10:15", "10:30"]

    def test_string_true_closes_day(self, api):
        api.put(
            "/api/settings/calendar/special-days/2027-01-05", json={"is_closed": "true"}
        )
        slots = api.get(
            "/api/appointments/slots?professional_id=1&date=2027-01-05&service_ids=1"
        ).get_json()["data"]["slots"]

        assert slots == []

    @pytest.mark.parametrize("flag", ["maybe", "0", 1])
    def test_ambiguous_closed_flag_is_rejected(self, api, flag):
        response = api.put(
            "/api/settings/calendar/special-days/2027-01-05", json={"is_closed": flag}
        )
        calendar = api.get("/api/settings/calendar").get_json()["data"]

        assert response.status_code == 400
        assert calendar["special_days"] == []


class TestCatalog:
    def test_lists_seeded_catalog(self, api):
        services = api.get("/api/catalog/services").get_json()["data"]
        professionals = api.get("/api/catalog/professionals").get_json()["data"]

        assert {s["name"] for s in services} == {
            "Corte de Cabelo",
            "Barba",
            "Sobrancelha",
            "Corte + Barba",
        }
        assert professionals[0]["name"] == "Barbeiro Principal"

    def test_create_service_and_professional(self, api):
        service = api.post(
            "/api/catalog/services",
            json={"name": "Pigmentação", "price": 35, "duration_minutes": 45},
        )
        professional = api.post(
            "/api/catalog/professionals", json={"name": "Rafael", "specialty": "Júnior"}
        )

        assert service.status_code == 201
        assert service.get_json()["data"]["duration_minutes"] == 45
        assert professional.status_code == 201
        assert professional.get_json()["data"]["name"] == "Rafael"

    def test_invalid_service(self, api):
        response = api.post(
            "/api/catalog/services", json={"name": "Nada", "price": 10, "duration_minutes": 0}
        )
        assert response.status_code == 400

    @pytest.mark.parametrize(
        "price, duration", [("40", 30), (" 39.90 ", "30"), (40, 30.0)]
    )
    def test_numeric_strings_are_accepted(self, api, price, duration):
        response = api.post(
            "/api/catalog/services",
            json={"name": "Corte Navalhado", "price": price, "duration_minutes": duration},
        )

        assert response.status_code == 201
        data = response.get_json()["data"]
        assert data["price"] == float(str(price).strip())
        assert data["duration_minutes"] == 30

    @pytest.mark.parametrize(
        "payload",
        [
            {"name": "Corte", "price": "abc", "duration_minutes": 30},
            {"name": "Corte", "price": 40, "duration_minutes": "meia hora"},
            {"name": "Corte", "price": 40, "duration_minutes": 30.5},
            {"name": "Corte", "price": 40},
            {"name": "Corte", "duration_minutes": 30},
        ],
    )
    def test_malformed_numbers_are_rejected(self, api, payload):
        response = api.post("/api/catalog/services", json=payload)

        assert response.status_code == 400
        assert response.get_json()["error"] == "validation_error"


class TestCatalogUpdates:
    def test_update_service(self, api):
        response = api.put(
            "/api/catalog/services/1",
            json={"name": "Corte Clássico", "price": "45", "duration_minutes": 40},
        )

        assert response.status_code == 200
        services = {s["id"]: s for s in api.get("/api/catalog/services").get_json()["data"]}
        assert services[1]["name"] == "Corte Clássico"
        assert services[1]["price"] == 45.0
        assert services[1]["duration_minutes"] == 40

    def test_update_unknown_service(self, api):
        response = api.put(
            "/api/catalog/services/99",
            json={"name": "Corte", "price": 40, "duration_minutes": 30},
        )

        assert response.status_code == 404
        assert response.get_json()["message"] == "Service 99 not found"

    def test_delete_service_keeps_booked_snapshot(self, api):
        booked = api.post(
            "/api/appointments",
            json={
                "client_name": "João Silva",
                "professional_id": 1,
                "service_ids": [3],
                "date": "2027-01-04",
                "time": "10:00",
            },
        )
        appointment_id = booked.get_json()["data"]["appointments"][0]["id"]

        deleted = api.delete("/api/catalog/services/3")
        deleted_again = api.delete("/api/catalog/services/3")
        appointment = api.get(f"/api/appointments/{appointment_id}").get_json()["data"]

        assert deleted.status_code == 200
        assert deleted_again.status_code == 404
        assert [s["name"] for s in appointment["services"]] == ["Sobrancelha"]

    def test_update_professional(self, api):
        response = api.put(
            "/api/catalog/professionals/1", json={"name": "Marcos", "specialty": "Master"}
        )

        assert response.status_code == 200
        assert response.get_json()["data"] == {
            "id": 1,
            "name": "Marcos",
            "specialty": "Master",
        }

    def test_professional_with_pending_appointments_cannot_be_deleted(self, api):
        api.post(
            "/api/appointments",
            json={
                "client_name": "João Silva",
                "professional_id": 1,
                "service_ids": [1],
                "date": "2027-01-04",
                "time": "10:00",
            },
        )

        response = api.delete("/api/catalog/professionals/1")

        assert response.status_code == 409
        assert "pending" in response.get_json()["message"]

    def test_delete_professional(self, api):
        created = api.post("/api/catalog/professionals", json={"name": "Rafael"})
        professional_id = created.get_json()["data"]["id"]

        response = api.delete(f"/api/catalog/professionals/{professional_id}")
        remaining = api.get("/api/catalog/professionals").get_json()["data"]

        assert response.status_code == 200
        assert [p["id"] for p in remaining] == [1]


class TestShopProfile:
    def test_defaults(self, api):
        data = api.get("/api/settings/profile").get_json()["data"]
        assert data == {"name": "Minha Barbearia", "address": "", "monthly_goal": 5000.0}

    def test_update_keeps_calendar(self, api):
        response = api.put(
            "/api/settings/profile",
            json={"name": "Barbearia do Zé", "address": "Rua A, 10", "monthly_goal": "8000"},
        )
        calendar = api.get("/api/settings/calendar").get_json()["data"]

        assert response.status_code == 200
        assert response.get_json()["data"]["monthly_goal"] == 8000.0
        assert calendar["working_days"] == [0, 1, 2, 3, 4, 5]

    @pytest.mark.parametrize(
        "payload",
        [{"name": "", "monthly_goal": 100}, {"name": "Barbearia", "monthly_goal": "x"}],
    )
    def test_invalid_profile(self, api, payload):
        assert api.put("/api/settings/profile", json=payload).status_code == 400


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.get_json()["database"] == "connected"
