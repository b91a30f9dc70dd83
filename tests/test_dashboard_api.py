"""
Tests for the Dashboard API routes.

The record store, exposure session and IP locator are overridden with an
in-memory store, a session on a fake clock and a mocked HTTP transport.
"""
import json

import httpx
import pytest
from fastapi.testclient import TestClient

from exposure_risk.location import IPLocator
from exposure_risk.storage import HISTORY_KEY


@pytest.fixture
def session(fake_clock):
    from server.dashboard_api.services.exposure_session import ExposureSession

    return ExposureSession(countdown_hours=24, clock=fake_clock)


@pytest.fixture
def ip_lookups():
    """URLs requested from the IP lookup service."""
    return []


@pytest.fixture
def client(record_store, session, ip_lookups):
    from server.dashboard_api.database import get_record_store
    from server.dashboard_api.main import app
    from server.dashboard_api.routes.location import get_ip_locator
    from server.dashboard_api.services.exposure_session import get_exposure_session

    def handler(request: httpx.Request) -> httpx.Response:
        ip_lookups.append(str(request.url))
        return httpx.Response(200, json={"latitude": 26.4499, "longitude": 80.3319})

    locator = IPLocator(base_url="https://ipapi.test", transport=httpx.MockTransport(handler))

    app.dependency_overrides[get_record_store] = lambda: record_store
    app.dependency_overrides[get_exposure_session] = lambda: session
    app.dependency_overrides[get_ip_locator] = lambda: locator
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


CRITICAL_ANSWERS = {
    "ageGroup": "Over 65",
    "healthConditions": "Multiple conditions from above",
    "pregnancyStatus": "No",
    "smokingStatus": "Never smoked",
    "locationExposure": "I have lived in Delhi for years and commute daily",
}


class TestHealth:
    def test_health_check(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestRiskRoutes:
    def test_list_risks(self, client):
        response = client.get("/api/risks")
        assert response.status_code == 200
        risks = response.json()
        assert len(risks) == 12
        assert risks[0]["disease"] == "Acute Respiratory Infection"
        assert risks[0]["exposureType"] == "Poor AQI"
        assert "vulnerableOnset" in risks[0]

    def test_filters_and_sort(self, client):
        response = client.get("/api/risks", params={"exposureType": "Contaminated Water", "sort": "severity"})
        risks = response.json()
        assert len(risks) == 5
        assert risks[0]["severity"] == "Critical"
        assert risks[-1]["severity"] == "Mild"

    def test_search(self, client):
        risks = client.get("/api/risks", params={"search": "typhoid"}).json()
        assert [r["disease"] for r in risks] == ["Typhoid/Cholera"]

    def test_invalid_severity_is_422(self, client):
        response = client.get("/api/risks", params={"severity": "Fatal"})
        assert response.status_code == 422
        body = response.json()
        assert body["field"] == "Severity"
        assert "Critical" in body["allowed"]

    def test_overview(self, client):
        overview = client.get("/api/risks/overview").json()
        assert overview["total"] == 12
        assert overview["severityCounts"]["Critical"] == 4
        assert overview["exposureCounts"] == {"air": 7, "water": 7, "combined": 2}

    def test_duration_assessment(self, client):
        response = client.get(
            "/api/risks/assessment",
            params={"duration": "hours", "profile": "vulnerable", "exposure": "air"},
        )
        results = response.json()
        assert response.status_code == 200
        assert results[0]["level"] == "High"
        assert results[0]["recommendation"] == "Seek immediate medical attention"

    def test_duration_assessment_invalid_bucket(self, client):
        response = client.get("/api/risks/assessment", params={"duration": "decades"})
        assert response.status_code == 422


class TestCityRoutes:
    def test_list_cities(self, client):
        cities = client.get("/api/cities").json()
        assert len(cities) == 30
        delhi = cities[0]
        assert delhi["id"] == "delhi"
        assert delhi["riskScore"] == 7.8
        assert delhi["waterQuality"] == "Poor"
        assert delhi["aqiLevel"]["band"] == "hazardous"
        assert delhi["riskFactors"]["airPollution"] == 9

    def test_filter_by_state(self, client):
        cities = client.get("/api/cities", params={"state": "kerala"}).json()
        assert [c["id"] for c in cities] == ["kochi", "trivandrum"]

    def test_by_state(self, client):
        groups = client.get("/api/cities/by-state").json()
        assert list(groups) == sorted(groups)
        assert [c["id"] for c in groups["Maharashtra"]] == ["mumbai", "pune"]

    def test_city_detail(self, client):
        response = client.get("/api/cities/kanpur")
        assert response.status_code == 200
        assert response.json()["riskScore"] == 8.1

    def test_unknown_city_is_404(self, client):
        assert client.get("/api/cities/atlantis").status_code == 404
        assert client.get("/api/cities/atlantis/predictions").status_code == 404

    def test_charts(self, client):
        charts = client.get("/api/cities/charts").json()
        assert charts["comparison"][0]["id"] == "delhi"
        assert charts["comparison"][0]["populationMillions"] == 33
        assert sum(b["count"] for b in charts["aqiDistribution"]) == 30
        assert sum(b["count"] for b in charts["waterQualityDistribution"]) == 30

    def test_predictions(self, client):
        response = client.get(
            "/api/cities/delhi/predictions", params={"profile": "vulnerable", "exposure": "air"}
        )
        body = response.json()
        assert body["cityId"] == "delhi"
        assert body["riskScore"] == 7.8
        first = body["predictions"][0]
        assert first["condition"] == "Asthma Exacerbation"
        assert first["timeToRisk"] == 3
        assert first["recommendation"] == "Seek immediate medical attention"
        assert body["riskProfile"]["Air Pollution"] == 9

    def test_predictions_invalid_profile(self, client):
        response = client.get("/api/cities/delhi/predictions", params={"profile": "elderly"})
        assert response.status_code == 422


class TestLocationRoutes:
    def test_match_with_auto_start(self, client):
        response = client.post(
            "/api/location/match", json={"lat": 28.6139, "lng": 77.2090, "autoStart": True}
        )
        body = response.json()
        assert response.status_code == 200
        assert body["matched"] is True
        assert body["city"]["id"] == "delhi"
        assert body["distanceKm"] == pytest.approx(0, abs=1e-6)
        assert body["timer"]["state"]["isRunning"] is True
        assert body["timer"]["cityId"] == "delhi"

    def test_match_without_auto_start(self, client):
        body = client.post("/api/location/match", json={"lat": 28.6139, "lng": 77.2090}).json()
        assert body["timer"]["state"]["isRunning"] is False

    def test_no_match_mid_ocean(self, client):
        body = client.post("/api/location/match", json={"lat": 0.0, "lng": 65.0}).json()
        assert body["matched"] is False
        assert body["city"] is None
        assert body["distanceKm"] > 100
        assert body["timer"] is None

    def test_invalid_latitude(self, client):
        response = client.post("/api/location/match", json={"lat": 95.0, "lng": 0.0})
        assert response.status_code == 422

    def test_ip_lookup(self, client):
        body = client.get("/api/location/ip").json()
        assert body["matched"] is True
        assert body["city"]["id"] == "kanpur"
        assert body["source"] == "ip"

    def test_ip_lookup_uses_forwarded_caller(self, client, ip_lookups):
        client.get("/api/location/ip", headers={"X-Forwarded-For": "49.36.0.1, 10.0.0.2"})
        assert ip_lookups == ["https://ipapi.test/49.36.0.1/json/"]

    def test_ip_lookup_explicit_address_wins(self, client, ip_lookups):
        client.get(
            "/api/location/ip",
            params={"ip": "49.36.0.9"},
            headers={"X-Forwarded-For": "49.36.0.1"},
        )
        assert ip_lookups == ["https://ipapi.test/49.36.0.9/json/"]

    def test_ip_lookup_private_caller_uses_server_address(self, client, ip_lookups):
        client.get("/api/location/ip", headers={"X-Forwarded-For": "192.168.1.20"})
        assert ip_lookups == ["https://ipapi.test/json/"]

    def test_match_radius_from_settings(self, client, monkeypatch):
        """A position 20 km out of Delhi falls outside a 5 km radius."""
        from server.dashboard_api.config import get_settings

        monkeypatch.setenv("RISK_DASHBOARD_MATCH_RADIUS_KM", "5")
        get_settings.cache_clear()
        try:
            body = client.post("/api/location/match", json={"lat": 28.79, "lng": 77.2090}).json()
        finally:
            get_settings.cache_clear()
        assert body["matched"] is False
        assert not hasattr(get_settings(), "high_accuracy_timeout")


class TestTimerRoutes:
    def test_initial_state(self, client):
        body = client.get("/api/timer").json()
        assert body["state"]["phase"] == "idle"
        assert body["remainingClock"] == "24:00:00"
        assert body["currentRisks"] == []

    def test_duration_change_rejected_while_running(self, client):
        client.post("/api/timer/start")
        response = client.put("/api/timer/duration", json={"hours": 6})
        assert response.status_code == 409

        client.post("/api/timer/pause")
        response = client.put("/api/timer/duration", json={"hours": 6})
        assert response.status_code == 200
        assert response.json()["state"]["totalDuration"] == 6 * 60 * 60 * 1000

    def test_invalid_duration(self, client):
        assert client.put("/api/timer/duration", json={"hours": 0}).status_code == 422

    def test_round_trip(self, client, fake_clock):
        """1h countdown: 30 min, pause, resume, 30 min -> done with alert."""
        client.put("/api/timer/duration", json={"hours": 1})
        client.post("/api/timer/start")
        fake_clock.advance_minutes(30)
        paused = client.post("/api/timer/pause").json()
        assert paused["state"]["elapsedTime"] == 30 * 60 * 1000
        assert paused["remainingClock"] == "00:30:00"

        client.post("/api/timer/start")
        fake_clock.advance_minutes(30)
        body = client.get("/api/timer").json()
        assert body["state"]["remaining"] == 0
        assert body["state"]["alertActive"] is True
        assert body["alertMessage"]

        reset = client.post("/api/timer/reset").json()
        assert reset["state"]["alertActive"] is False
        assert reset["state"]["elapsedTime"] == 0

    def test_risks_follow_selected_city(self, client, fake_clock):
        client.post(
            "/api/location/match",
            json={"lat": 28.6139, "lng": 77.2090, "autoStart": True, "profile": "vulnerable", "exposure": "air"},
        )
        fake_clock.advance_minutes(60)
        body = client.get("/api/timer").json()
        assert body["profile"] == "vulnerable"
        assert [r["condition"] for r in body["currentRisks"]] == ["Asthma Exacerbation"]
        assert body["nextRisk"]["condition"] == "Asthma Exacerbation"
        assert body["hoursUntilNext"] == 2

    def test_choices(self, client):
        assert client.get("/api/timer/choices").json()["hours"] == [1, 3, 6, 12, 24, 48, 72]


class TestAssessmentRoutes:
    def test_questions(self, client):
        questions = client.get("/api/assessment/questions").json()
        assert [q["id"] for q in questions][0] == "age_group"

    def test_critical_assessment_saves_profile(self, client):
        response = client.post("/api/assessment", json=CRITICAL_ANSWERS)
        assert response.status_code == 200
        body = response.json()
        assert body["score"] == 10
        assert body["level"] == "critical"
        assert body["highRiskCities"] == ["Delhi"]
        assert [e["category"] for e in body["equipment"]] == ["masks", "airPurifiers", "waterFilters"]
        assert body["locationAlert"]["highAlert"] is True
        assert body["equipmentPriority"]["tier"] == "critical"

        profile = client.get("/api/profile").json()
        assert profile["id"] == body["profile"]["id"]
        assert profile["vulnerabilityLevel"] == "critical"

    def test_unknown_answer_is_422(self, client):
        answers = dict(CRITICAL_ANSWERS, smokingStatus="Sometimes")
        response = client.post("/api/assessment", json=answers)
        assert response.status_code == 422
        assert response.json()["field"] == "SmokingStatus"

    def test_missing_answer_is_422(self, client):
        answers = dict(CRITICAL_ANSWERS)
        del answers["ageGroup"]
        assert client.post("/api/assessment", json=answers).status_code == 422


class TestProfileRoutes:
    def test_no_profile(self, client):
        response = client.get("/api/profile")
        assert response.status_code == 200
        assert response.json() is None

    def test_log_exposure_and_insights(self, client):
        client.post("/api/assessment", json=CRITICAL_ANSWERS)
        response = client.post(
            "/api/profile/exposures",
            json={
                "date": "2024-03-01",
                "location": "Kanpur",
                "exposureType": "combined",
                "duration": 3,
                "aqi": 278,
                "symptoms": ["cough"],
            },
        )
        assert response.status_code == 201
        logged = response.json()
        assert logged["exposureType"] == "combined"
        assert logged["id"]

        exposures = client.get("/api/profile/exposures").json()
        assert [e["location"] for e in exposures] == ["Kanpur"]

        insights = client.get("/api/profile/insights").json()
        assert insights["profile"]["vulnerabilityLevel"] == "critical"
        assert insights["summary"]["total"] == 1
        assert insights["summary"]["highRisk"] == 1
        assert insights["trend"] is None
        assert insights["equipmentPriority"]["tier"] == "critical"
        assert insights["locationAlert"]["cities"] == ["Kanpur"]

    def test_invalid_exposure_type(self, client):
        response = client.post(
            "/api/profile/exposures",
            json={"date": "2024-03-01", "location": "Delhi", "exposureType": "noise", "duration": 1},
        )
        assert response.status_code == 422

    def test_delete_removes_everything(self, client):
        client.post("/api/assessment", json=CRITICAL_ANSWERS)
        client.post(
            "/api/profile/exposures",
            json={"date": "2024-03-01", "location": "Delhi", "exposureType": "air", "duration": 1},
        )
        assert client.delete("/api/profile").status_code == 200
        assert client.get("/api/profile").json() is None
        assert client.get("/api/profile/exposures").json() == []

    def test_insights_skip_unreadable_history(self, client, kv_store):
        kv_store.put(HISTORY_KEY, json.dumps([
            {"id": "1", "date": None, "location": "Delhi", "exposureType": "air", "duration": 2},
            {"id": "2", "date": "2024-03-01", "location": "Delhi", "exposureType": "air", "duration": 2, "aqi": "200"},
        ]))
        response = client.get("/api/profile/insights")
        assert response.status_code == 200
        assert response.json()["summary"] is None

    def test_insights_without_data(self, client):
        insights = client.get("/api/profile/insights").json()
        assert insights == {
            "profile": None,
            "summary": None,
            "trend": None,
            "equipmentPriority": None,
            "locationAlert": None,
        }
