"""HTTP route tests — FastAPI TestClient against an in-memory answer store.

The lifespan handler loads the real v1 catalog.  The DB session dependency
is overridden with an AsyncMock and the service's repository is swapped for
the MockRepository from test_service.py, so no database is needed.
"""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from absence_server.app import create_app
from absence_server.config import ServerSettings
from absence_server.dependencies import get_db

# Reuse mock infrastructure from test_service
from test_service import MockRepository

API = "/api/v1/questions"


@pytest.fixture
def client():
    app = create_app(ServerSettings(log_level="WARNING"))

    async def _fake_db():
        yield AsyncMock()

    app.dependency_overrides[get_db] = _fake_db
    with TestClient(app) as c:
        app.state.service._repo = MockRepository()
        yield c


def _ids(payload):
    return [q["id"] for q in payload]


# =====================================================================
# Catalog routes
# =====================================================================


class TestCatalogRoutes:

    def test_scenario(self, client):
        resp = client.get(f"{API}/scenario/Standard/Mental Health")
        assert resp.status_code == 200
        assert _ids(resp.json()) == [1, 2, 3]

    def test_dependent(self, client):
        resp = client.get(f"{API}/dependent/1/Illness")
        assert resp.status_code == 200
        assert _ids(resp.json()) == [4, 15]

    def test_dependent_unknown_parent_is_empty(self, client):
        resp = client.get(f"{API}/dependent/999/Illness")
        assert resp.status_code == 200
        assert resp.json() == []

    def test_dependent_non_integer_parent_is_not_found(self, client):
        resp = client.get(f"{API}/dependent/abc/Illness")
        assert resp.status_code == 404
        assert resp.json() == {"detail": "Resource not found"}

    def test_return_to_work(self, client):
        assert _ids(client.get(f"{API}/return-to-work").json()) == [19, 21]

    def test_catalog_listing(self, client):
        payload = client.get(f"{API}/catalog").json()
        assert len(payload) == 21
        first = payload[0]
        assert first["question_type"] == "select"
        assert first["depends_on"] is None

    def test_flow(self, client):
        payload = client.get(f"{API}/flow/Standard/Injury").json()
        assert [n["question"]["id"] for n in payload] == [1, 2, 3]
        triggers = [g["trigger_answer"] for g in payload[0]["dependent_questions"]]
        assert triggers == ["Illness", "Injury", "Mental Health"]


# =====================================================================
# Case routes
# =====================================================================


class TestCaseRoutes:

    def test_save_and_assess(self, client):
        resp = client.post(
            f"{API}/42/answers",
            json={
                "answers": [
                    {"question_id": 1, "answer": "Mental Health"},
                    {"question_id": 7, "answer": "High"},
                    {"question_id": 8, "answer": "true"},
                ],
                "answered_by_id": 3,
            },
        )
        assert resp.status_code == 200, resp.text
        body = resp.json()
        assert len(body["saved_answers"]) == 3
        risk = body["risk_assessment"]
        assert risk["level"] == "Critical"
        assert risk["requires_immediate_attention"] is True
        assert "Safety plan development" in risk["recommended_actions"]

        assessed = client.get(f"{API}/42/risk-assessment").json()
        assert assessed == risk

        check = client.get(f"{API}/42/mental-health-check").json()
        assert check == {"requires_mental_health_follow_up": True}

    def test_history_and_visibility(self, client):
        client.post(
            f"{API}/7/answers",
            json={"answers": [{"question_id": 1, "answer": "Illness"}], "answered_by_id": 3},
        )
        answers = client.get(f"{API}/7/answers").json()
        assert [a["question_id"] for a in answers] == [1]
        assert answers[0]["question_text"] == "What is the primary reason for this absence?"

        assert _ids(client.get(f"{API}/7/follow-up").json()) == [4, 15]

        visible = client.get(
            f"{API}/7/visible",
            params={"absence_type": "Standard", "reason_category": "Other"},
        ).json()
        assert _ids(visible) == [1, 2, 3, 4, 15]

    def test_empty_case_is_low_risk(self, client):
        risk = client.get(f"{API}/99/risk-assessment").json()
        assert risk["level"] == "Low"
        assert risk["flags"] == []

    def test_unknown_question_is_bad_request(self, client):
        resp = client.post(
            f"{API}/7/answers",
            json={"answers": [{"question_id": 500, "answer": "x"}], "answered_by_id": 3},
        )
        assert resp.status_code == 400
        assert resp.json() == {"detail": "Invalid request"}

    def test_malformed_payload_is_bad_request(self, client):
        resp = client.post(f"{API}/7/answers", json={"answers": "nope"})
        assert resp.status_code == 400

    def test_empty_answers_is_bad_request(self, client):
        resp = client.post(f"{API}/7/answers", json={"answers": [], "answered_by_id": 3})
        assert resp.status_code == 400

    def test_visible_requires_scenario(self, client):
        assert client.get(f"{API}/7/visible").status_code == 400

    @pytest.mark.parametrize(
        "path",
        ["abc/risk-assessment", "abc/answers", "abc/follow-up", "abc/mental-health-check"],
    )
    def test_non_integer_case_id_is_not_found(self, client, path):
        resp = client.get(f"{API}/{path}")
        assert resp.status_code == 404
        assert resp.json() == {"detail": "Resource not found"}

    def test_non_integer_case_id_on_save_is_not_found(self, client):
        resp = client.post(
            f"{API}/abc/answers",
            json={"answers": [{"question_id": 1, "answer": "Illness"}], "answered_by_id": 3},
        )
        assert resp.status_code == 404
