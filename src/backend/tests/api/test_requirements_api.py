import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from api.settings import ApiSettings, get_api_settings


@pytest.fixture
def client(engine):
    return TestClient(create_app(engine, settings=ApiSettings()))


def test_health(client):
    res = client.get("/health")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


def test_api_info_lists_endpoints(client):
    body = client.get("/api/info").json()
    assert "POST /api/requirements/match" in body["endpoints"]


def test_business_types(client):
    body = client.get("/api/business-types").json()
    assert body["success"] is True
    ids = [entry["id"] for entry in body["data"]]
    assert "restaurant" in ids
    assert len(ids) == 8
    cafe = next(entry for entry in body["data"] if entry["id"] == "cafe")
    assert cafe["name"] == "בית קפה"


def test_match_returns_grouped_requirements(client, small_cafe_payload):
    res = client.post("/api/requirements/match", json=small_cafe_payload)
    assert res.status_code == 200
    body = res.json()
    assert body["success"] is True
    assert "timestamp" in body

    data = body["data"]
    assert set(data["requirements"]) == {"general", "police", "health", "fire"}
    general = data["requirements"]["general"]
    assert [row["requirementId"] for row in general] == ["GEN-001", "GEN-002"]
    assert general[0]["matchedByRule"] == "RULE-003"
    assert general[0]["title"] == "רישיון עסק כללי"
    assert "requirement" not in general[0]
    assert data["summary"]["totalRequirements"] == 4
    assert data["summary"]["complexityLevel"] == "Medium"
    assert data["businessProfile"]["businessType"] == "cafe"
    assert data["recommendations"] == []


def test_match_includes_recommendations(client, large_restaurant_payload):
    data = client.post("/api/requirements/match", json=large_restaurant_payload).json()["data"]
    assert [rec["type"] for rec in data["recommendations"]] == ["alcohol_license", "fire_safety"]
    assert data["recommendations"][0]["priority"] == "high"


def test_match_rejects_invalid_profile(client):
    res = client.post("/api/requirements/match", json={"businessType": "restaurant", "seatingCapacity": -1, "floorArea": 50})
    assert res.status_code == 400
    body = res.json()
    assert body["success"] is False
    assert body["error"] == "Validation failed"
    assert body["field"] == "seatingCapacity"


@pytest.mark.parametrize("path", ["/api/requirements/match", "/api/generate-report"])
@pytest.mark.parametrize("body", [["cafe", 12, 40], "cafe", 12])
def test_non_object_body_is_400_envelope(client, path, body):
    res = client.post(path, json=body)
    assert res.status_code == 400
    payload = res.json()
    assert payload["success"] is False
    assert payload["error"] == "Validation failed"
    assert payload["field"] == "businessProfile"
    assert "timestamp" in payload


def test_unparseable_body_is_400_envelope(client):
    res = client.post(
        "/api/requirements/match",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert res.status_code == 400
    assert res.json()["field"] == "businessProfile"


def test_missing_body_is_400_envelope(client):
    res = client.post("/api/requirements/match")
    assert res.status_code == 400
    assert res.json()["success"] is False


def test_requirement_details(client):
    res = client.get("/api/requirements/MOH-002")
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["requirementId"] == "MOH-002"
    assert [r["requirementId"] for r in data["relatedRequirements"]] == ["MOH-001", "MOH-003", "MOH-004"]
    assert len(data["processingTips"]) == 2


def test_unknown_requirement_is_404(client):
    res = client.get("/api/requirements/ZZZ-999")
    assert res.status_code == 404
    body = res.json()
    assert body["error"] == "Requirement not found"
    assert "ZZZ-999" in body["details"]


def test_malformed_requirement_id_is_400(client):
    res = client.get("/api/requirements/gen-1")
    assert res.status_code == 400
    assert res.json()["field"] == "requirementId"


def test_list_requirements(client):
    data = client.get("/api/requirements").json()["data"]
    assert data["total"] == 13
    assert data["requirements"][0] == {
        "requirementId": "GEN-001",
        "title": "רישיון עסק כללי",
        "authority": "רשות מקומית",
        "category": "general",
        "mandatory": True,
    }


def test_generate_report_without_api_key_uses_fallback(client, small_cafe_payload, monkeypatch):
    monkeypatch.delenv("OPENROUTER_API_KEY", raising=False)
    res = client.post("/api/generate-report", json=small_cafe_payload)
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["report"]["metadata"]["generatedBy"] == "System Fallback"
    assert len(data["report"]["sections"]) == 3
    assert data["rawRequirements"]["summary"]["totalRequirements"] == 4


def test_generate_report_rejects_invalid_profile(client):
    res = client.post("/api/generate-report", json={"businessType": "cafe", "seatingCapacity": 5})
    assert res.status_code == 400
    assert res.json()["field"] == "floorArea"


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", "https://a.example, https://b.example")
    settings = get_api_settings()
    assert settings.log_level == "DEBUG"
    assert settings.cors_allow_origins == ("https://a.example", "https://b.example")
