"""Tests for the REST endpoints."""

from datetime import datetime, timedelta
from unittest.mock import patch

from fastapi.testclient import TestClient

from hive_assess.main import app

from tests.test_observation import _BASE, _feeding_data, _frame_data, _hive_data, _inspection_data

client = TestClient(app)


def _patched_now(dt: datetime):
    """Freeze utc_now() where the router reads it."""
    return patch("hive_assess.api.assess.utc_now", return_value=dt)


class TestHealth:
    def test_health(self) -> None:
        resp = client.get("/health")
        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "ok"
        assert body["entity_kinds"] == ["inspection", "hive", "frame", "feeding"]


class TestAssessEndpoints:
    def test_assess_inspection(self) -> None:
        resp = client.post("/api/assess/inspection", json=_inspection_data())
        assert resp.status_code == 200
        body = resp.json()
        assert body["assessment"]["score"] == 100
        assert body["assessment"]["status"] == "green"
        assert body["assessment"]["risk_level"] == "low"
        assert body["assessment"]["next_action_date"].startswith("2026-04-22")
        assert body["summary"] == "Inspection: GREEN (100/100)"
        assert body["alert"] is False
        assert body["colony_status"] == "active"

    def test_queenless_inspection_raises_alert(self) -> None:
        resp = client.post("/api/assess/inspection", json=_inspection_data(queen_present="no"))
        body = resp.json()
        assert body["assessment"]["status"] == "red"
        assert body["alert"] is True
        assert body["colony_status"] == "needs_attention"
        assert body["assessment"]["recommendations"][0] == "Introduce new queen immediately"

    def test_assess_hive(self) -> None:
        body = client.post("/api/assess/hive", json=_hive_data()).json()
        assert body["assessment"]["score"] == 40
        assert body["assessment"]["max_score"] == 40
        assert body["assessment"]["status"] == "excellent"

    def test_assess_frame(self) -> None:
        body = client.post("/api/assess/frame", json=_frame_data()).json()
        assert body["assessment"]["score"] == 63
        assert body["assessment"]["recommendations"] == ["Frame is ready for harvest"]

    def test_assess_feeding(self) -> None:
        body = client.post("/api/assess/feeding", json=_feeding_data()).json()
        assert body["assessment"]["score"] == 9
        assert body["assessment"]["entity_kind"] == "feeding"

    def test_unknown_literal_rejected(self) -> None:
        resp = client.post("/api/assess/inspection", json=_inspection_data(food_stores="plenty"))
        assert resp.status_code == 422

    def test_overfull_frame_rejected(self) -> None:
        data = _frame_data(content={"honey": {"capped": 90}, "empty": 20})
        resp = client.post("/api/assess/frame", json=data)
        assert resp.status_code == 422

    def test_missing_timestamp_rejected(self) -> None:
        data = _feeding_data()
        del data["observed_at"]
        assert client.post("/api/assess/feeding", json=data).status_code == 422


class TestHistoryEndpoints:
    def test_history(self) -> None:
        payload = [
            _inspection_data(observed_at="2026-04-29T09:00:00+00:00", diseases_found=["nosema"], population_strength="weak"),
            _inspection_data(),
            _inspection_data(observed_at="2026-04-15T09:00:00+00:00", diseases_found=["nosema"]),
        ]
        body = client.post("/api/inspections/history", json=payload).json()
        assert body["total_inspections"] == 3
        assert [p["score"] for p in body["score_trend"]] == [100, 95, 85]
        assert [t["type"] for t in body["trend_recommendations"]] == ["trend_alert", "recurring_issue"]
        assert body["latest_inspection"]["score"] == 85
        assert body["queen_trends"]["present"] == {"yes": 3}

    def test_overdue(self) -> None:
        payload = [
            _inspection_data(),
            _inspection_data(observed_at=(_BASE + timedelta(days=20)).isoformat()),
            _inspection_data(observed_at=(_BASE - timedelta(days=10)).isoformat()),
        ]
        with _patched_now(_BASE + timedelta(days=30)):
            body = client.post("/api/inspections/overdue", json=payload).json()
        assert body["count"] == 2
        assert [o["days_overdue"] for o in body["overdue"]] == [19, 9]
        assert body["overdue"][0]["due_date"].startswith("2026-04-12")
        assert body["overdue"][1]["due_date"].startswith("2026-04-22")

    def test_frame_stats(self) -> None:
        body = client.post("/api/frames/stats", json=[_frame_data(), _frame_data(wax_condition="damaged")]).json()
        assert body["total_frames"] == 2
        assert body["honey_frames"] == 2
        assert body["frames_needing_replacement"] == 1
