"""Entity profiles — one configuration object per assessed entity kind.

A profile bundles everything the generic engine needs to assess one kind
of observation: how to score it, how to classify the score, which
recommendation rules apply and which observation field adjusts the
follow-up schedule.  The four built-in profiles are module constants;
the ProfileRegistry looks them up by EntityKind.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Protocol, Sequence

from hive_assess.core.classifier import Classifier, Escalation, Override, StatusLadder
from hive_assess.core.recommendations import (
    FEEDING_RULES,
    FRAME_RULES,
    HIVE_RULES,
    INSPECTION_RULES,
    RecommendationRule,
)
from hive_assess.core.scoring import (
    Category,
    CategoryScorer,
    FrameProductivityScorer,
    Penalty,
    ScoreResult,
)
from hive_assess.domain.enums import (
    BeeResponse,
    BroodPattern,
    ColonyStrength,
    ConsumptionRate,
    EggPattern,
    EntityKind,
    FoodStores,
    HealthStatus,
    HiveBroodPattern,
    InspectionStatus,
    PopulationStrength,
    QueenLaying,
    QueenPresence,
    WaxCondition,
)
from hive_assess.domain.errors import ConfigurationError
from hive_assess.domain.observation import (
    FeedingObservation,
    FrameObservation,
    HiveObservation,
    InspectionObservation,
    Observation,
)

logger = logging.getLogger(__name__)


class Scorer(Protocol):
    @property
    def maximum(self) -> int: ...

    def score(self, observation) -> ScoreResult: ...


@dataclass(frozen=True)
class EntityProfile:
    kind: EntityKind
    observation_type: type[Observation]
    scorer: Scorer
    classifier: Classifier
    rules: tuple[RecommendationRule, ...]
    schedule_field: Optional[str] = None

    def action_type(self, observation: Observation):
        """Value of the observation field that caps the follow-up interval."""
        if self.schedule_field is None:
            return None
        return getattr(observation, self.schedule_field, None)


_STARVING = (FoodStores.CRITICAL, FoodStores.NONE)
_HEALTH_STATUSES = tuple(HealthStatus)


# ── Inspection ───────────────────────────────────────────────────────────────

INSPECTION_SCORER = CategoryScorer(
    categories=(
        Category(
            "queen_present", 25,
            {QueenPresence.YES: 25, QueenPresence.NOT_SEEN: 15, QueenPresence.NO: 0},
            unanswered=frozenset({QueenPresence.UNKNOWN}),
            vocabulary=QueenPresence,
        ),
        Category(
            "queen_laying", 25,
            {QueenLaying.YES: 25, QueenLaying.POOR: 10, QueenLaying.NO: 0},
            unanswered=frozenset({QueenLaying.UNKNOWN}),
            vocabulary=QueenLaying,
        ),
        Category(
            "brood_pattern", 20,
            {
                BroodPattern.EXCELLENT: 20,
                BroodPattern.GOOD: 16,
                BroodPattern.FAIR: 12,
                BroodPattern.POOR: 6,
                BroodPattern.NONE: 0,
            },
            vocabulary=BroodPattern,
        ),
        Category(
            "population_strength", 15,
            {
                PopulationStrength.VERY_STRONG: 15,
                PopulationStrength.STRONG: 12,
                PopulationStrength.MODERATE: 9,
                PopulationStrength.WEAK: 5,
                PopulationStrength.VERY_WEAK: 2,
            },
            vocabulary=PopulationStrength,
        ),
        Category(
            "food_stores", 15,
            {
                FoodStores.ABUNDANT: 15,
                FoodStores.ADEQUATE: 12,
                FoodStores.LOW: 8,
                FoodStores.CRITICAL: 3,
                FoodStores.NONE: 0,
            },
            vocabulary=FoodStores,
        ),
    ),
    scale=100,
    normalize=True,
    penalties=(
        Penalty("diseases_found", per_item=5, cap=10),
        Penalty("pests_found", per_item=3, cap=5),
    ),
)

INSPECTION_CLASSIFIER = Classifier(
    ladder=StatusLadder(
        statuses=tuple(InspectionStatus),
        thresholds=(
            (40, InspectionStatus.RED),
            (60, InspectionStatus.ORANGE),
            (80, InspectionStatus.YELLOW),
        ),
    ),
    overrides=(
        Override("queen_absent", lambda o: o.queen_present == QueenPresence.NO, InspectionStatus.RED),
        Override("food_critical", lambda o: o.food_stores in _STARVING, InspectionStatus.RED),
    ),
    escalations=(
        Escalation("diseases_or_pests", lambda o: o.has_findings, InspectionStatus.ORANGE),
    ),
)

INSPECTION_PROFILE = EntityProfile(
    kind=EntityKind.INSPECTION,
    observation_type=InspectionObservation,
    scorer=INSPECTION_SCORER,
    classifier=INSPECTION_CLASSIFIER,
    rules=INSPECTION_RULES,
    schedule_field="inspection_type",
)


# ── Hive (40-point absolute score) ───────────────────────────────────────────

HIVE_SCORER = CategoryScorer(
    categories=(
        Category("queen_present", 5, {True: 5, False: 0}),
        Category(
            "egg_pattern", 5,
            {EggPattern.REGULAR: 5, EggPattern.IRREGULAR: 3, EggPattern.SPOTTY: 1, EggPattern.NONE: 0},
            vocabulary=EggPattern,
            requires=lambda o: o.queen_present is True,
        ),
        Category(
            "colony_strength", 10,
            {ColonyStrength.STRONG: 10, ColonyStrength.MEDIUM: 7, ColonyStrength.WEAK: 3},
            vocabulary=ColonyStrength,
        ),
        Category(
            "brood_pattern", 10,
            {HiveBroodPattern.SOLID: 10, HiveBroodPattern.PATCHY: 6, HiveBroodPattern.SCATTERED: 2},
            vocabulary=HiveBroodPattern,
        ),
        Category(
            "food_stores", 10,
            {
                FoodStores.ABUNDANT: 10,
                FoodStores.ADEQUATE: 7,
                FoodStores.LOW: 3,
                FoodStores.CRITICAL: 0,
                FoodStores.NONE: 0,
            },
            vocabulary=FoodStores,
        ),
    ),
    scale=40,
    normalize=False,
    penalties=(
        Penalty("diseases", per_item=2, cap=10),
        Penalty("pests", per_item=1, cap=5),
    ),
)

HIVE_PROFILE = EntityProfile(
    kind=EntityKind.HIVE,
    observation_type=HiveObservation,
    scorer=HIVE_SCORER,
    classifier=Classifier(
        ladder=StatusLadder(
            statuses=_HEALTH_STATUSES,
            thresholds=(
                (15, HealthStatus.CRITICAL),
                (25, HealthStatus.WARNING),
                (35, HealthStatus.GOOD),
            ),
        ),
        overrides=(
            Override("queen_absent", lambda o: o.queen_present is False, HealthStatus.CRITICAL),
            Override("food_critical", lambda o: o.food_stores in _STARVING, HealthStatus.CRITICAL),
        ),
        escalations=(
            Escalation("diseases_or_pests", lambda o: o.has_findings, HealthStatus.WARNING),
        ),
    ),
    rules=HIVE_RULES,
)


# ── Frame ────────────────────────────────────────────────────────────────────

FRAME_PROFILE = EntityProfile(
    kind=EntityKind.FRAME,
    observation_type=FrameObservation,
    scorer=FrameProductivityScorer(),
    classifier=Classifier(
        ladder=StatusLadder(
            statuses=_HEALTH_STATUSES,
            thresholds=(
                (40, HealthStatus.CRITICAL),
                (60, HealthStatus.WARNING),
                (80, HealthStatus.GOOD),
            ),
        ),
        overrides=(
            Override("wax_damaged", lambda o: o.wax_condition == WaxCondition.DAMAGED, HealthStatus.CRITICAL),
        ),
        escalations=(
            Escalation("wax_black", lambda o: o.wax_condition == WaxCondition.BLACK, HealthStatus.WARNING),
            Escalation("marked_for_replacement", lambda o: o.needs_replacement, HealthStatus.WARNING),
        ),
    ),
    rules=FRAME_RULES,
)


# ── Feeding (0-10 score) ─────────────────────────────────────────────────────

FEEDING_SCORER = CategoryScorer(
    categories=(
        Category(
            "consumption_rate", 10,
            {
                ConsumptionRate.NONE: 0,
                ConsumptionRate.SLOW: 2,
                ConsumptionRate.MODERATE: 5,
                ConsumptionRate.FAST: 8,
                ConsumptionRate.VERY_FAST: 10,
            },
            vocabulary=ConsumptionRate,
        ),
        Category(
            "bee_response", 10,
            {
                BeeResponse.POSITIVE: 10,
                BeeResponse.NEUTRAL: 5,
                BeeResponse.NEGATIVE: 2,
                BeeResponse.AGGRESSIVE: 0,
            },
            vocabulary=BeeResponse,
        ),
        Category("effectiveness", 10),
    ),
    scale=10,
    normalize=True,
)

FEEDING_PROFILE = EntityProfile(
    kind=EntityKind.FEEDING,
    observation_type=FeedingObservation,
    scorer=FEEDING_SCORER,
    classifier=Classifier(
        ladder=StatusLadder(
            statuses=_HEALTH_STATUSES,
            thresholds=(
                (4, HealthStatus.CRITICAL),
                (6, HealthStatus.WARNING),
                (8, HealthStatus.GOOD),
            ),
        ),
        escalations=(
            Escalation("bees_aggressive", lambda o: o.bee_response == BeeResponse.AGGRESSIVE, HealthStatus.WARNING),
            Escalation("feed_ignored", lambda o: o.consumption_rate == ConsumptionRate.NONE, HealthStatus.WARNING),
        ),
    ),
    rules=FEEDING_RULES,
    schedule_field="feeding_type",
)

DEFAULT_PROFILES: tuple[EntityProfile, ...] = (
    INSPECTION_PROFILE,
    HIVE_PROFILE,
    FRAME_PROFILE,
    FEEDING_PROFILE,
)


# ── Registry ─────────────────────────────────────────────────────────────────

class ProfileRegistry:
    """Maps each EntityKind to the profile that assesses it.

    Usage:
        registry = ProfileRegistry.with_defaults()
        profile = registry.get(EntityKind.INSPECTION)
    """

    def __init__(self, profiles: Sequence[EntityProfile] = ()) -> None:
        self._profiles: dict[EntityKind, EntityProfile] = {}
        for profile in profiles:
            self.register(profile)

    @classmethod
    def with_defaults(cls) -> ProfileRegistry:
        return cls(DEFAULT_PROFILES)

    def register(self, profile: EntityProfile) -> None:
        """Add or replace the profile for ``profile.kind``."""
        self._profiles[profile.kind] = profile
        logger.info("Registered assessment profile: %s", profile.kind.value)

    def get(self, kind: EntityKind) -> EntityProfile:
        try:
            return self._profiles[kind]
        except KeyError:
            raise ConfigurationError(f"No assessment profile registered for '{kind}'") from None

    def for_observation(self, observation: Observation) -> EntityProfile:
        for profile in self._profiles.values():
            if isinstance(observation, profile.observation_type):
                return profile
        raise ConfigurationError(
            f"No assessment profile accepts {type(observation).__name__}"
        )

    @property
    def kinds(self) -> list[EntityKind]:
        """Registered entity kinds in registration order."""
        return list(self._profiles)
