"""Tests for inspection history analytics and follow-up helpers."""

from datetime import timedelta

import pytest
from pydantic import ValidationError

from hive_assess.core.assessment_engine import AssessmentEngine
from hive_assess.core.followup import colony_status_for, days_overdue, needs_alert, overdue_assessments
from hive_assess.core.history import (
    AssessedInspection,
    average_score,
    summarize_history,
    trend_recommendations,
)
from hive_assess.domain.assessment import Assessment
from hive_assess.domain.enums import (
    ColonyStatus,
    EntityKind,
    HealthStatus,
    InspectionStatus,
    RiskLevel,
)
from hive_assess.domain.observation import InspectionObservation

from tests.test_observation import _BASE, _inspection

_ENGINE = AssessmentEngine()


def _record(days: int, **overrides) -> AssessedInspection:
    obs = _inspection(observed_at=(_BASE + timedelta(days=days)).isoformat(), **overrides)
    return AssessedInspection(observation=obs, assessment=_ENGINE.assess(obs))


def _assessment(
    status=InspectionStatus.GREEN,
    risk=RiskLevel.LOW,
    score: int | None = 90,
    due_in_days: int = 21,
) -> Assessment:
    return Assessment(
        entity_kind=EntityKind.INSPECTION,
        observed_at=_BASE,
        score=score,
        max_score=100,
        completeness=100,
        status=status,
        risk_level=risk,
        next_action_date=_BASE + timedelta(days=due_in_days),
    )


def _declining_history() -> list[AssessedInspection]:
    return [
        _record(0),                                                           # 100
        _record(14, diseases_found=["nosema"]),                               # 95
        _record(28, diseases_found=["nosema"], population_strength="weak"),   # 85
    ]


# ── History ──────────────────────────────────────────────────────────────────


class TestTrendRecommendations:
    def test_single_inspection_has_no_trend(self) -> None:
        assert trend_recommendations([_record(0)]) == []

    def test_stable_history(self) -> None:
        assert trend_recommendations([_record(0), _record(14)]) == []

    def test_decline_and_recurring_disease(self) -> None:
        trends = trend_recommendations(_declining_history())
        assert [t.type for t in trends] == ["trend_alert", "recurring_issue"]
        assert trends[0].priority == "high"
        assert trends[1].message == "Recurring disease: nosema"

    def test_decline_of_exactly_ten_points_is_not_an_alert(self) -> None:
        records = [_record(0), _record(14, food_stores="low", queen_laying="poor")]
        # 100 -> 78 is an alert, 100 -> 90 is not
        assert records[1].assessment.score == 78
        assert trend_recommendations(records)[0].type == "trend_alert"
        flat = [_record(0), _record(14, diseases_found=["a", "b"])]
        assert flat[1].assessment.score == 90
        assert all(t.type != "trend_alert" for t in trend_recommendations(flat))

    def test_only_last_three_inspections_count(self) -> None:
        records = [_record(0, diseases_found=["foulbrood"]), _record(7, diseases_found=["foulbrood"])]
        records += [_record(14), _record(21), _record(28)]
        assert trend_recommendations(records) == []


class TestSummarizeHistory:
    def test_summary(self) -> None:
        summary = summarize_history(_declining_history())
        assert summary.total_inspections == 3
        assert summary.average_score == 93
        assert [p["score"] for p in summary.score_trend] == [100, 95, 85]
        assert summary.status_distribution == {"green": 1, "orange": 2}
        assert summary.risk_distribution == {"low": 1, "high": 2}
        assert summary.disease_frequency == {"nosema": 2}
        assert summary.pest_frequency == {}
        assert len(summary.trend_recommendations) == 2
        assert summary.queen_trends == {"present": {"yes": 3}, "laying": {"yes": 3}}
        assert summary.population_trends == {"very_strong": 2, "weak": 1}
        assert summary.food_trends == {"abundant": 3}

    def test_latest_inspection(self) -> None:
        latest = summarize_history(_declining_history()).latest_inspection
        assert latest["observed_at"] == (_BASE + timedelta(days=28)).isoformat()
        assert latest["inspection_type"] == "routine"
        assert latest["score"] == 85
        assert latest["status"] == "orange"
        assert latest["risk_level"] == "high"
        assert latest["quick_assessment"]["population_strength"] == "weak"
        assert latest["quick_assessment"]["queen_present"] == "yes"
        assert latest["issues"] == {"diseases": ["nosema"], "pests": []}
        assert latest["next_action_date"] == (_BASE + timedelta(days=35)).isoformat()
        assert latest["recommendations"][0] == "Strengthen colony with capped brood frames"
        assert latest["recommendations"][-1] == "Inspect weekly until the colony improves"

    def test_trends_skip_unanswered(self) -> None:
        blank = InspectionObservation(observed_at=_BASE)
        records = [_record(0), AssessedInspection(observation=blank, assessment=_ENGINE.assess(blank))]
        summary = summarize_history(records)
        assert summary.queen_trends["present"] == {"yes": 1}
        assert summary.food_trends == {"abundant": 1}
        assert summary.latest_inspection["score"] is None
        assert summary.latest_inspection["quick_assessment"]["food_stores"] is None

    def test_unscored_inspections_excluded_from_average(self) -> None:
        blank = InspectionObservation(observed_at=_BASE)
        records = [_record(0), AssessedInspection(observation=blank, assessment=_ENGINE.assess(blank))]
        assert average_score(records) == 100
        assert average_score(records[1:]) is None

    def test_empty_history(self) -> None:
        summary = summarize_history([])
        assert summary.total_inspections == 0
        assert summary.average_score is None
        assert summary.trend_recommendations == []
        assert summary.queen_trends == {"present": {}, "laying": {}}
        assert summary.latest_inspection is None


# ── Follow-up ────────────────────────────────────────────────────────────────


class TestColonyStatus:
    @pytest.mark.parametrize(
        "status, risk, expected",
        [
            (InspectionStatus.RED, RiskLevel.CRITICAL, ColonyStatus.NEEDS_ATTENTION),
            (InspectionStatus.ORANGE, RiskLevel.HIGH, ColonyStatus.MONITORING),
            (InspectionStatus.YELLOW, RiskLevel.MEDIUM, None),
            (InspectionStatus.YELLOW, RiskLevel.CRITICAL, ColonyStatus.NEEDS_ATTENTION),
            (InspectionStatus.GREEN, RiskLevel.LOW, ColonyStatus.ACTIVE),
            (HealthStatus.CRITICAL, RiskLevel.CRITICAL, ColonyStatus.NEEDS_ATTENTION),
            (HealthStatus.WARNING, RiskLevel.HIGH, ColonyStatus.MONITORING),
            (None, None, None),
        ],
    )
    def test_colony_status_for(self, status, risk, expected) -> None:
        assert colony_status_for(_assessment(status=status, risk=risk)) == expected

    def test_needs_alert(self) -> None:
        assert needs_alert(_assessment(status=InspectionStatus.ORANGE, risk=RiskLevel.HIGH))
        assert not needs_alert(_assessment(status=InspectionStatus.YELLOW, risk=RiskLevel.MEDIUM))


class TestOverdue:
    def test_days_overdue(self) -> None:
        a = _assessment(due_in_days=3)
        assert days_overdue(a, _BASE + timedelta(days=10, hours=5)) == 7
        assert days_overdue(a, _BASE + timedelta(days=2)) == 0

    def test_most_overdue_first(self) -> None:
        soon = _assessment(due_in_days=14)
        early = _assessment(due_in_days=3)
        future = _assessment(due_in_days=60)
        assert overdue_assessments([soon, future, early], _BASE + timedelta(days=20)) == [early, soon]


class TestAssessmentInvariants:
    def test_next_action_must_follow_observation(self) -> None:
        with pytest.raises(ValidationError):
            _assessment(due_in_days=0)

    def test_score_within_scale(self) -> None:
        with pytest.raises(ValidationError):
            _assessment(score=101)
