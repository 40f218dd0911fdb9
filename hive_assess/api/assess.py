"""REST endpoints exposing the assessment engine.

Paths:
    POST /api/assess/{inspection,hive,frame,feeding}
    POST /api/inspections/history
    POST /api/inspections/overdue
    POST /api/frames/stats

The request bodies are the observation models themselves, so enum
membership, numeric ranges and the frame content ceiling are enforced by
FastAPI's validation before the engine is called (HTTP 422 otherwise).
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, HTTPException

from hive_assess.core.assessment_engine import AssessmentEngine
from hive_assess.core.followup import colony_status_for, days_overdue, needs_alert, overdue_assessments
from hive_assess.core.frames import frame_statistics
from hive_assess.core.history import AssessedInspection, summarize_history
from hive_assess.domain.assessment import Assessment
from hive_assess.domain.errors import ConfigurationError
from hive_assess.domain.observation import (
    FeedingObservation,
    FrameObservation,
    HiveObservation,
    InspectionObservation,
    Observation,
)
from hive_assess.foundation.clock import utc_now
from hive_assess.report.formatter import AssessmentFormatter

logger = logging.getLogger(__name__)


def create_assess_router(engine: AssessmentEngine) -> APIRouter:
    """Factory that wires the assessment endpoints to an engine instance."""

    router = APIRouter(prefix="/api", tags=["assessment"])

    def _assess(observation: Observation) -> Assessment:
        try:
            return engine.assess(observation)
        except ConfigurationError as exc:
            logger.error("Assessment misconfigured: %s", exc)
            raise HTTPException(status_code=500, detail=str(exc)) from exc

    def _respond(assessment: Assessment) -> dict[str, Any]:
        return {
            "assessment": assessment.model_dump(mode="json"),
            "summary": AssessmentFormatter.headline(assessment),
            "alert": needs_alert(assessment),
        }

    @router.post("/assess/inspection")
    async def assess_inspection(observation: InspectionObservation) -> dict[str, Any]:
        assessment = _assess(observation)
        body = _respond(assessment)
        colony_status = colony_status_for(assessment)
        body["colony_status"] = colony_status.value if colony_status else None
        return body

    @router.post("/assess/hive")
    async def assess_hive(observation: HiveObservation) -> dict[str, Any]:
        return _respond(_assess(observation))

    @router.post("/assess/frame")
    async def assess_frame(observation: FrameObservation) -> dict[str, Any]:
        return _respond(_assess(observation))

    @router.post("/assess/feeding")
    async def assess_feeding(observation: FeedingObservation) -> dict[str, Any]:
        return _respond(_assess(observation))

    @router.post("/inspections/history")
    async def inspection_history(observations: list[InspectionObservation]) -> dict[str, Any]:
        """Assess a hive's inspections and aggregate them, oldest first."""
        ordered = sorted(observations, key=lambda o: o.observed_at)
        records = [AssessedInspection(observation=o, assessment=_assess(o)) for o in ordered]
        return summarize_history(records).model_dump(mode="json")

    @router.post("/inspections/overdue")
    async def overdue_inspections(observations: list[InspectionObservation]) -> dict[str, Any]:
        now = utc_now()
        overdue = overdue_assessments([_assess(o) for o in observations], now)
        return {
            "overdue": [
                {
                    "observed_at": a.observed_at.isoformat(),
                    "due_date": a.next_action_date.isoformat(),
                    "days_overdue": days_overdue(a, now),
                    "risk_level": a.risk_level.value if a.risk_level else None,
                    "status": a.status.value if a.status else None,
                }
                for a in overdue
            ],
            "count": len(overdue),
        }

    @router.post("/frames/stats")
    async def frame_stats(frames: list[FrameObservation]) -> dict[str, Any]:
        return frame_statistics(frames).to_dict()

    return router
