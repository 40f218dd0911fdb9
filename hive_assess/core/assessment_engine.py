"""AssessmentEngine — deterministic scoring, classification and scheduling.

Design principles:
    1. Pure function: accepts an Observation, returns an Assessment.
    2. No side effects, no state mutation, no I/O, no clock reads.
    3. One generic pipeline; entity kinds differ only by their profile.
    4. All intervals and risk bounds are explicit and configurable.

Pipeline (data only flows forward):

    observation ─► score ─► status ─► { risk, recommendations } ─► next date

    score           = profile.scorer.score(observation)
    status          = profile.classifier.classify(score, observation)
    risk            = derive_risk(status, score as % of scale)
    recommendations = every profile rule that fires, in rule order
    next date       = observed_at + min(risk interval, action-type cap)

An observation with nothing answered yields score/status/risk of None and
is scheduled at the default interval.
"""

from __future__ import annotations

import logging
from datetime import datetime
from enum import Enum
from typing import Optional

from hive_assess.core.profiles import EntityProfile, ProfileRegistry
from hive_assess.core.recommendations import RuleContext, generate_recommendations
from hive_assess.core.risk import RiskPolicy, derive_risk
from hive_assess.core.scheduler import SchedulePolicy, next_action_date
from hive_assess.core.scoring import ScoreResult
from hive_assess.domain.assessment import Assessment
from hive_assess.domain.enums import EntityKind, RiskLevel
from hive_assess.domain.errors import ConfigurationError
from hive_assess.domain.observation import Observation

logger = logging.getLogger(__name__)


class AssessmentEngine:
    """Stateless assessment of observations.

    The engine holds only immutable configuration, so a single instance
    can be shared by any number of concurrent request handlers.
    """

    def __init__(
        self,
        registry: ProfileRegistry | None = None,
        risk_policy: RiskPolicy | None = None,
        schedule_policy: SchedulePolicy | None = None,
    ) -> None:
        self._registry = registry or ProfileRegistry.with_defaults()
        self._risk_policy = risk_policy or RiskPolicy()
        self._schedule_policy = schedule_policy or SchedulePolicy()

    @property
    def registry(self) -> ProfileRegistry:
        return self._registry

    # ── Public API ───────────────────────────────────────────────────────

    def assess(self, observation: Observation, kind: EntityKind | None = None) -> Assessment:
        """Produce the complete Assessment for one observation."""
        profile = self._profile(observation, kind)

        result = profile.scorer.score(observation)
        status = profile.classifier.classify(result.value, observation)
        risk = derive_risk(status, result.percentage, profile.classifier.ladder, self._risk_policy)
        recommendations = generate_recommendations(
            profile.rules,
            RuleContext(observation=observation, score=result.value, status=status),
        )
        due = next_action_date(
            observation.observed_at,
            risk,
            profile.action_type(observation),
            self._schedule_policy,
        )

        if result.value is None:
            logger.info("%s observation has no answered categories; not scored", profile.kind.value)
        else:
            logger.debug(
                "Assessed %s: score=%s/%s status=%s risk=%s",
                profile.kind.value,
                result.value,
                result.maximum,
                status.value if status else None,
                risk.value if risk else None,
            )

        return Assessment(
            entity_kind=profile.kind,
            observed_at=observation.observed_at,
            score=result.value,
            max_score=result.maximum,
            completeness=result.completeness,
            status=status,
            risk_level=risk,
            recommendations=tuple(recommendations),
            next_action_date=due,
        )

    def compute_score(self, observation: Observation, kind: EntityKind | None = None) -> ScoreResult:
        return self._profile(observation, kind).scorer.score(observation)

    def classify(
        self,
        score: Optional[float],
        observation: Observation,
        kind: EntityKind | None = None,
    ) -> Optional[Enum]:
        return self._profile(observation, kind).classifier.classify(score, observation)

    def derive_risk(
        self,
        status: Optional[Enum],
        score: Optional[float],
        kind: EntityKind,
    ) -> Optional[RiskLevel]:
        """Risk for a status and a raw score on the kind's own scale."""
        profile = self._registry.get(kind)
        percentage = None if score is None else score * 100.0 / profile.scorer.maximum
        return derive_risk(status, percentage, profile.classifier.ladder, self._risk_policy)

    def generate_recommendations(
        self,
        observation: Observation,
        kind: EntityKind | None = None,
    ) -> list[str]:
        """Recommendations for an observation, including the status-driven ones."""
        profile = self._profile(observation, kind)
        result = profile.scorer.score(observation)
        status = profile.classifier.classify(result.value, observation)
        return generate_recommendations(
            profile.rules,
            RuleContext(observation=observation, score=result.value, status=status),
        )

    def next_action_date(
        self,
        observed_at: datetime,
        risk_level: Optional[RiskLevel],
        action_type=None,
    ) -> datetime:
        return next_action_date(observed_at, risk_level, action_type, self._schedule_policy)

    # ── Helpers ──────────────────────────────────────────────────────────

    def _profile(self, observation: Observation, kind: EntityKind | None) -> EntityProfile:
        if kind is None:
            return self._registry.for_observation(observation)
        profile = self._registry.get(kind)
        if not isinstance(observation, profile.observation_type):
            raise ConfigurationError(
                f"{type(observation).__name__} cannot be assessed as '{kind.value}'"
            )
        return profile
