"""Tests for the HTTP API."""

import pytest
from fastapi.testclient import TestClient

from amar_foshol.api.app import create_app
from amar_foshol.api.dependencies import get_weather_provider
from amar_foshol.models.weather import NextDayConditions
from amar_foshol.providers.base import ProviderError

from conftest import FakeProvider

DHAKA = {"division": "ঢাকা", "district": "ঢাকা"}


@pytest.fixture
def app(monkeypatch, database_url, fake_provider):
    """Application on a private database with a fake weather provider."""
    monkeypatch.setenv("DATABASE_URL", database_url)
    app = create_app()
    app.dependency_overrides[get_weather_provider] = lambda: fake_provider
    return app


@pytest.fixture
def client(app):
    with TestClient(app) as client:
        yield client


def window_body(forecasts) -> dict:
    return {"forecasts": [f.model_dump(by_alias=True, mode="json") for f in forecasts]}


class TestHealthAndLocations:
    """Tests for health and location lookup endpoints."""

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_divisions(self, client):
        response = client.get("/api/locations")
        assert response.status_code == 200
        assert len(response.json()["divisions"]) == 8

    def test_districts(self, client):
        response = client.get("/api/locations/সিলেট")
        assert response.status_code == 200
        assert response.json() == {
            "division": "সিলেট",
            "districts": ["সিলেট", "মৌলভীবাজার", "সুনামগঞ্জ", "হবিগঞ্জ"],
        }

    def test_unknown_division(self, client):
        assert client.get("/api/locations/Dhaka").status_code == 404


class TestWeather:
    """Tests for the forecast endpoint."""

    def test_forecast(self, client, fake_provider):
        """Test a forecast response with caching headers."""
        response = client.get("/api/weather", params=DHAKA)

        assert response.status_code == 200
        assert response.headers["Cache-Control"] == (
            "public, s-maxage=300, stale-while-revalidate=600"
        )
        data = response.json()
        assert len(data["forecasts"]) == 5
        assert data["forecasts"][0]["tempMax"] == 33
        assert data["forecasts"][0]["rainProbability"] == 80
        assert "lastUpdated" in data
        assert fake_provider.requested[0].to_tuple() == (23.8103, 90.4125)

    @pytest.mark.parametrize(
        "params", [{}, {"division": "ঢাকা"}, {"district": "ঢাকা"}]
    )
    def test_missing_parameters(self, client, params):
        """Test both division and district are required."""
        response = client.get("/api/weather", params=params)
        assert response.status_code == 400

    def test_unknown_district(self, client):
        response = client.get(
            "/api/weather", params={"division": "ঢাকা", "district": "Nowhere"}
        )
        assert response.status_code == 404

    def test_provider_failure(self, app):
        """Test provider errors map to 502."""
        app.dependency_overrides[get_weather_provider] = lambda: FakeProvider(
            error=ProviderError("API request failed: 503", provider="fake")
        )
        with TestClient(app) as client:
            response = client.get("/api/weather", params=DHAKA)

        assert response.status_code == 502
        assert "503" in response.json()["detail"]


class TestAdvisories:
    """Tests for advisory endpoints."""

    def test_district_advisories_recorded(self, client):
        """Test advisories for a district are returned and logged."""
        response = client.get("/api/advisories", params=DHAKA)

        assert response.status_code == 200
        data = response.json()
        assert data["location"] == "ঢাকা, ঢাকা"
        assert [a["condition"] for a in data["advisories"]] == [
            "high_rain",
            "combined_risk",
            "high_humidity",
            "ideal",
        ]
        assert data["summary"]["total"] == 4
        assert data["summary"]["highest_risk_level"] == 5
        assert data["summary"]["by_type"]["critical"] == 2

        history = client.get("/api/advisories/history").json()["advisories"]
        assert [a["condition"] for a in history] == [
            "ideal",
            "high_humidity",
            "combined_risk",
            "high_rain",
        ]

    def test_incomplete_forecast(self, app, monsoon_forecast):
        """Test a forecast shorter than five days maps to 502."""
        app.dependency_overrides[get_weather_provider] = lambda: FakeProvider(
            forecasts=monsoon_forecast[:3]
        )
        with TestClient(app) as client:
            response = client.get("/api/advisories", params=DHAKA)
        assert response.status_code == 502

    def test_evaluate_window(self, client, ideal_forecast):
        """Test evaluating a posted window without recording it."""
        response = client.post(
            "/api/advisories/evaluate", json=window_body(ideal_forecast)
        )

        assert response.status_code == 200
        advisories = response.json()["advisories"]
        assert [a["condition"] for a in advisories] == ["ideal"]
        assert advisories[0]["type"] == "success"
        assert advisories[0]["affected_days"] == 5

        history = client.get("/api/advisories/history").json()["advisories"]
        assert history == []

    def test_evaluate_and_record(self, client, ideal_forecast):
        response = client.post(
            "/api/advisories/evaluate",
            params={"record": "true"},
            json=window_body(ideal_forecast),
        )
        assert response.status_code == 200

        history = client.get("/api/advisories/history").json()["advisories"]
        assert [a["condition"] for a in history] == ["ideal"]

    def test_evaluate_rejects_short_window(self, client, ideal_forecast):
        """Test a window with fewer than five days is a validation error."""
        response = client.post(
            "/api/advisories/evaluate", json=window_body(ideal_forecast[:4])
        )
        assert response.status_code == 422

    def test_evaluate_rejects_unordered_window(self, client, ideal_forecast):
        response = client.post(
            "/api/advisories/evaluate",
            json=window_body(list(reversed(ideal_forecast))),
        )
        assert response.status_code == 422

    def test_history_limit_and_clear(self, client):
        """Test limiting and clearing the history."""
        client.get("/api/advisories", params=DHAKA)

        limited = client.get("/api/advisories/history", params={"limit": 2})
        assert len(limited.json()["advisories"]) == 2

        response = client.delete("/api/advisories/history")
        assert response.status_code == 200
        assert response.json() == {"deleted": 4}
        assert client.get("/api/advisories/history").json()["advisories"] == []

    def test_history_limit_validated(self, client):
        response = client.get("/api/advisories/history", params={"limit": 0})
        assert response.status_code == 422


class TestFieldAdvisories:
    """Tests for seasonal field-work advisory endpoints."""

    def test_district_field_advisories(self, client):
        """Test the season defaults to the month of the first forecast day."""
        response = client.get("/api/advisories/field", params=DHAKA)

        assert response.status_code == 200
        data = response.json()
        assert data["month"] == 6
        assert data["season"] == "kharif"
        assert [a["condition"] for a in data["advisories"]] == [
            "heavy_rain",
            "storage_caution",
            "humid",
        ]
        assert data["advisories"][0]["action"].startswith("Harvest rice immediately")

        history = client.get("/api/advisories/history").json()["advisories"]
        assert len(history) == 3
        assert {a["condition"] for a in history} == {
            "heavy_rain",
            "storage_caution",
            "humid",
        }

    def test_district_field_advisories_for_month(self, client):
        response = client.get("/api/advisories/field", params={**DHAKA, "month": 12})

        data = response.json()
        assert data["season"] == "rabi"
        assert data["advisories"][0]["action"].startswith("Cover crops")

    def test_evaluate_field_window(self, client, ideal_forecast):
        response = client.post(
            "/api/advisories/field/evaluate", json=window_body(ideal_forecast)
        )

        assert response.status_code == 200
        data = response.json()
        assert data["season"] == "kharif"
        assert [a["condition"] for a in data["advisories"]] == ["favorable"]
        assert client.get("/api/advisories/history").json()["advisories"] == []

    @pytest.mark.parametrize(
        "month,season,action",
        [
            (1, "rabi", "Ideal time for Rabi crops"),
            (4, "pre_monsoon", "Good time for seedbed preparation"),
            (9, "kharif", "Best time for rice harvesting"),
        ],
    )
    def test_evaluate_field_window_by_month(
        self, client, ideal_forecast, month, season, action
    ):
        response = client.post(
            "/api/advisories/field/evaluate",
            params={"month": month, "record": "true"},
            json=window_body(ideal_forecast),
        )

        data = response.json()
        assert data["month"] == month
        assert data["season"] == season
        assert data["advisories"][0]["action"].startswith(action)
        history = client.get("/api/advisories/history").json()["advisories"]
        assert [a["condition"] for a in history] == ["favorable"]

    @pytest.mark.parametrize("month", [0, 13])
    def test_month_validated(self, client, ideal_forecast, month):
        response = client.post(
            "/api/advisories/field/evaluate",
            params={"month": month},
            json=window_body(ideal_forecast),
        )
        assert response.status_code == 422

    def test_incomplete_forecast(self, app, monsoon_forecast):
        app.dependency_overrides[get_weather_provider] = lambda: FakeProvider(
            forecasts=monsoon_forecast[:4]
        )
        with TestClient(app) as client:
            response = client.get("/api/advisories/field", params=DHAKA)
        assert response.status_code == 502


class TestCrops:
    """Tests for crop risk endpoints."""

    def test_list_crops(self, client):
        crops = client.get("/api/crops").json()
        assert {"crop": "rice", "name_bn": "ধান"} in crops
        assert len(crops) == 13

    def test_critical_risk_with_alert(self, client):
        """Test a hot, dry tomorrow is critical for rice."""
        response = client.get("/api/crops/risk", params={"crop": "rice", **DHAKA})

        assert response.status_code == 200
        data = response.json()
        assert data["risk"] == {"level": "Critical", "type": "heat_stress"}
        assert data["alert"]["crop_type"] == "rice"
        assert data["alert"]["location"] == "ঢাকা, ঢাকা"

    def test_no_alert_below_critical(self, app):
        provider = FakeProvider(
            next_day=NextDayConditions(rain=False, humidity=60, temp=28)
        )
        app.dependency_overrides[get_weather_provider] = lambda: provider
        with TestClient(app) as client:
            data = client.get("/api/crops/risk", params={"crop": "rice", **DHAKA}).json()

        assert data["risk"] == {"level": "Low", "type": None}
        assert data["alert"] is None

    def test_crop_required(self, client):
        assert client.get("/api/crops/risk", params=DHAKA).status_code == 422

    def test_location_required(self, client):
        response = client.get("/api/crops/risk", params={"crop": "rice"})
        assert response.status_code == 400

    def test_provider_failure(self, app):
        app.dependency_overrides[get_weather_provider] = lambda: FakeProvider(
            error=ProviderError("timeout", provider="fake")
        )
        with TestClient(app) as client:
            response = client.get("/api/crops/risk", params={"crop": "rice", **DHAKA})
        assert response.status_code == 502
