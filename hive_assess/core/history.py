"""Inspection history analytics — trends over already-assessed inspections.

Works on a chronologically ordered sequence of (observation, assessment)
pairs as stored by the persistence layer.  Nothing here re-scores an
observation; it only aggregates stored results.

Trend rules (evaluated over the last three inspections):
    - trend_alert (high):      the latest scored inspection is more than
                               10 points below the earliest of the window
    - recurring_issue (medium): a disease appears in two or more of them
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from pydantic import BaseModel, Field

from hive_assess.core.scoring import round_half_up
from hive_assess.domain.assessment import Assessment
from hive_assess.domain.observation import InspectionObservation

TREND_WINDOW = 3
DECLINE_POINTS = 10
RECURRENCE_COUNT = 2


class AssessedInspection(BaseModel):
    """An inspection observation stored together with its assessment."""

    observation: InspectionObservation
    assessment: Assessment

    model_config = {"frozen": True}


@dataclass(frozen=True)
class TrendRecommendation:
    type: str
    priority: str
    message: str
    action: str

    def to_dict(self) -> dict[str, str]:
        return {
            "type": self.type,
            "priority": self.priority,
            "message": self.message,
            "action": self.action,
        }


class HistorySummary(BaseModel):
    total_inspections: int
    average_score: Optional[int] = Field(None, description="Rounded mean of scored inspections")
    score_trend: list[dict[str, Any]] = Field(default_factory=list)
    status_distribution: dict[str, int] = Field(default_factory=dict)
    risk_distribution: dict[str, int] = Field(default_factory=dict)
    disease_frequency: dict[str, int] = Field(default_factory=dict)
    pest_frequency: dict[str, int] = Field(default_factory=dict)
    queen_trends: dict[str, dict[str, int]] = Field(
        default_factory=dict, description="Distributions of queen presence and laying answers"
    )
    population_trends: dict[str, int] = Field(default_factory=dict)
    food_trends: dict[str, int] = Field(default_factory=dict)
    latest_inspection: Optional[dict[str, Any]] = Field(None, description="Summary of the most recent inspection")
    trend_recommendations: list[dict[str, str]] = Field(default_factory=list)


def average_score(records: Sequence[AssessedInspection]) -> Optional[int]:
    scores = [r.assessment.score for r in records if r.assessment.score is not None]
    if not scores:
        return None
    return round_half_up(sum(scores) / len(scores))


def _distribution(values) -> dict[str, int]:
    counts: Counter[str] = Counter(v.value for v in values if v is not None)
    return dict(counts)


def finding_frequency(records: Sequence[AssessedInspection], field: str) -> dict[str, int]:
    counts: Counter[str] = Counter()
    for record in records:
        counts.update(getattr(record.observation, field))
    return dict(counts)


def trend_recommendations(records: Sequence[AssessedInspection]) -> list[TrendRecommendation]:
    """Trend-based advice; needs at least two inspections."""
    if len(records) < 2:
        return []

    recent = records[-TREND_WINDOW:]
    result: list[TrendRecommendation] = []

    scores = [r.assessment.score for r in recent if r.assessment.score is not None]
    if len(scores) >= 2 and scores[-1] < scores[0] - DECLINE_POINTS:
        result.append(TrendRecommendation(
            type="trend_alert",
            priority="high",
            message="Assessment score declined over the recent inspections",
            action="Carry out a full review of the hive",
        ))

    recurring = Counter(d for r in recent for d in r.observation.diseases_found)
    for disease, count in recurring.items():
        if count >= RECURRENCE_COUNT:
            result.append(TrendRecommendation(
                type="recurring_issue",
                priority="medium",
                message=f"Recurring disease: {disease}",
                action="Consult a bee health specialist",
            ))

    return result


def _value(member) -> Optional[str]:
    return member.value if member is not None else None


def inspection_summary(record: AssessedInspection) -> dict[str, Any]:
    """Flat view of one stored inspection for dashboards."""
    obs, a = record.observation, record.assessment
    return {
        "observed_at": obs.observed_at.isoformat(),
        "inspection_type": obs.inspection_type.value,
        "score": a.score,
        "status": _value(a.status),
        "risk_level": _value(a.risk_level),
        "quick_assessment": {
            "queen_present": _value(obs.queen_present),
            "queen_laying": _value(obs.queen_laying),
            "brood_pattern": _value(obs.brood_pattern),
            "population_strength": _value(obs.population_strength),
            "food_stores": _value(obs.food_stores),
        },
        "issues": {
            "diseases": list(obs.diseases_found),
            "pests": list(obs.pests_found),
        },
        "next_action_date": a.next_action_date.isoformat(),
        "recommendations": list(a.recommendations),
    }


def summarize_history(records: Sequence[AssessedInspection]) -> HistorySummary:
    """Aggregate analytics for one hive's inspection history (oldest first)."""
    return HistorySummary(
        total_inspections=len(records),
        average_score=average_score(records),
        score_trend=[
            {
                "observed_at": r.assessment.observed_at.isoformat(),
                "score": r.assessment.score,
                "status": r.assessment.status.value if r.assessment.status else None,
            }
            for r in records
        ],
        status_distribution=_distribution(r.assessment.status for r in records),
        risk_distribution=_distribution(r.assessment.risk_level for r in records),
        disease_frequency=finding_frequency(records, "diseases_found"),
        pest_frequency=finding_frequency(records, "pests_found"),
        queen_trends={
            "present": _distribution(r.observation.queen_present for r in records),
            "laying": _distribution(r.observation.queen_laying for r in records),
        },
        population_trends=_distribution(r.observation.population_strength for r in records),
        food_trends=_distribution(r.observation.food_stores for r in records),
        latest_inspection=inspection_summary(records[-1]) if records else None,
        trend_recommendations=[t.to_dict() for t in trend_recommendations(records)],
    )
