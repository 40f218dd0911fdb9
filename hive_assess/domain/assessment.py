"""Assessment — the computed, always-reproducible output of the engine.

An Assessment is a pure function of an Observation and its entity kind.
It is built once, stored as plain data by the caller, and recomputed in
full whenever the observation is edited.  It is never patched.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, Field, model_validator

from hive_assess.domain.enums import EntityKind, HealthStatus, InspectionStatus, RiskLevel
from hive_assess.domain.errors import InvariantViolation

Status = Union[InspectionStatus, HealthStatus]


class Assessment(BaseModel):
    """Score, status, risk, recommendations and follow-up date for one observation.

    ``score`` is ``None`` when none of the scoring categories were answered;
    status and risk are then ``None`` too and callers must treat the record
    as "not yet assessed" rather than as a zero score.
    """

    entity_kind: EntityKind
    observed_at: datetime = Field(..., description="Timestamp of the assessed observation")
    score: Optional[int] = Field(None, ge=0, description="Clamped score, None when nothing was answered")
    max_score: int = Field(..., gt=0, description="Upper bound of the score scale (100, 40 or 10)")
    completeness: int = Field(
        ..., ge=0, le=100,
        description="Share of scoring categories that were answered (0-100)",
    )
    status: Optional[Status] = None
    risk_level: Optional[RiskLevel] = None
    recommendations: tuple[str, ...] = ()
    next_action_date: datetime = Field(..., description="When the entity should next be looked at")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def check_bounds(self) -> Assessment:
        if self.score is not None and self.score > self.max_score:
            raise InvariantViolation(f"score {self.score} exceeds maximum {self.max_score}")
        if self.next_action_date <= self.observed_at:
            raise InvariantViolation("next_action_date must fall after the observation")
        return self

    @property
    def is_scored(self) -> bool:
        return self.score is not None

    @property
    def score_percentage(self) -> Optional[float]:
        """Score expressed on a 0-100 scale regardless of the entity's own scale."""
        if self.score is None:
            return None
        return self.score * 100.0 / self.max_score
