"""Recommendation rules — ordered (condition, advice) pairs per entity kind.

Rules are independent of each other: every rule whose condition holds
contributes all of its recommendations, appended in rule-definition order.
There is no ranking and no learned weighting.  Each rule set closes with
status rules so that the two worst tiers always carry at least one
escalation recommendation.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional, Sequence

from hive_assess.core.frames import (
    REPLACEMENT_AGE_DAYS,
    frame_age_days,
    is_effectively_empty,
    is_ready_for_harvest,
)
from hive_assess.domain.enums import (
    BeeResponse,
    BroodPattern,
    ColonyStrength,
    ConsumptionRate,
    EggPattern,
    FoodStores,
    FrameBroodPattern,
    FrameType,
    HealthStatus,
    HiveBroodPattern,
    InspectionStatus,
    PopulationStrength,
    QueenLaying,
    QueenPresence,
    WaxCondition,
)


@dataclass(frozen=True)
class RuleContext:
    """What a rule may look at: the observation and what was derived from it."""

    observation: Any
    score: Optional[int] = None
    status: Optional[Enum] = None


@dataclass(frozen=True)
class RecommendationRule:
    name: str
    applies: Callable[[RuleContext], bool]
    recommendations: tuple[str, ...]


def generate_recommendations(
    rules: Sequence[RecommendationRule],
    context: RuleContext,
) -> list[str]:
    """Evaluate every rule in order and collect the advice of those that fire."""
    result: list[str] = []
    for rule in rules:
        if rule.applies(context):
            result.extend(rule.recommendations)
    return result


def _obs(attr: str, *values: Any) -> Callable[[RuleContext], bool]:
    return lambda ctx: getattr(ctx.observation, attr, None) in values


def _listed(attr: str) -> Callable[[RuleContext], bool]:
    return lambda ctx: bool(getattr(ctx.observation, attr, None))


def _status(*values: Enum) -> Callable[[RuleContext], bool]:
    return lambda ctx: ctx.status in values


# ── Inspection ───────────────────────────────────────────────────────────────

INSPECTION_RULES: tuple[RecommendationRule, ...] = (
    RecommendationRule(
        "queen_absent",
        _obs("queen_present", QueenPresence.NO),
        ("Introduce new queen immediately", "Investigate queen loss"),
    ),
    RecommendationRule(
        "queen_not_seen",
        _obs("queen_present", QueenPresence.NOT_SEEN),
        ("Look for the queen at the next inspection", "Check for fresh eggs"),
    ),
    RecommendationRule(
        "queen_laying_poor",
        _obs("queen_laying", QueenLaying.POOR),
        ("Monitor laying pattern", "Inspect queen age and condition"),
    ),
    RecommendationRule(
        "queen_not_laying",
        _obs("queen_laying", QueenLaying.NO),
        ("Replace the queen",),
    ),
    RecommendationRule(
        "brood_poor",
        _obs("brood_pattern", BroodPattern.POOR),
        ("Check the queen and her laying quality", "Rule out brood diseases"),
    ),
    RecommendationRule(
        "population_weak",
        _obs("population_strength", PopulationStrength.WEAK, PopulationStrength.VERY_WEAK),
        ("Strengthen colony with capped brood frames", "Reduce hive volume", "Increase feeding"),
    ),
    RecommendationRule(
        "food_low",
        _obs("food_stores", FoodStores.LOW, FoodStores.CRITICAL),
        ("Emergency sugar-syrup feeding", "Add protein patty"),
    ),
    RecommendationRule(
        "food_exhausted",
        _obs("food_stores", FoodStores.NONE),
        ("Start emergency feeding immediately", "Monitor the colony daily"),
    ),
    RecommendationRule(
        "diseases_found",
        _listed("diseases_found"),
        ("Begin treatment for the detected diseases", "Consider isolation of the hive", "Disinfect tools"),
    ),
    RecommendationRule(
        "pests_found",
        _listed("pests_found"),
        ("Apply a pest control program", "Improve hive ventilation"),
    ),
    RecommendationRule(
        "status_red",
        _status(InspectionStatus.RED),
        ("Inspect within 3 days", "Consult expert beekeeper"),
    ),
    RecommendationRule(
        "status_orange",
        _status(InspectionStatus.ORANGE),
        ("Inspect weekly until the colony improves",),
    ),
)


# ── Hive ─────────────────────────────────────────────────────────────────────

def _queen_laying_badly(ctx: RuleContext) -> bool:
    obs = ctx.observation
    return obs.queen_present is True and obs.egg_pattern in (EggPattern.SPOTTY, EggPattern.NONE)


HIVE_RULES: tuple[RecommendationRule, ...] = (
    RecommendationRule(
        "queen_absent",
        lambda ctx: ctx.observation.queen_present is False,
        ("Introduce new queen immediately", "Investigate queen loss"),
    ),
    RecommendationRule(
        "egg_pattern_poor",
        _queen_laying_badly,
        ("Monitor laying pattern", "Inspect queen age and condition"),
    ),
    RecommendationRule(
        "colony_weak",
        _obs("colony_strength", ColonyStrength.WEAK),
        ("Strengthen colony with capped brood frames", "Reduce hive volume"),
    ),
    RecommendationRule(
        "brood_scattered",
        _obs("brood_pattern", HiveBroodPattern.SCATTERED),
        ("Rule out brood diseases",),
    ),
    RecommendationRule(
        "food_low",
        _obs("food_stores", FoodStores.LOW, FoodStores.CRITICAL, FoodStores.NONE),
        ("Emergency sugar-syrup feeding", "Add protein patty"),
    ),
    RecommendationRule(
        "diseases_found",
        _listed("diseases"),
        ("Begin treatment for the detected diseases", "Consider isolation of the hive", "Disinfect tools"),
    ),
    RecommendationRule(
        "pests_found",
        _listed("pests"),
        ("Apply a pest control program", "Improve hive ventilation"),
    ),
    RecommendationRule(
        "status_critical",
        _status(HealthStatus.CRITICAL),
        ("Inspect within 3 days", "Consult expert beekeeper"),
    ),
    RecommendationRule(
        "status_warning",
        _status(HealthStatus.WARNING),
        ("Inspect weekly until the colony improves",),
    ),
)


# ── Frame ────────────────────────────────────────────────────────────────────

def _frame_too_old(ctx: RuleContext) -> bool:
    age = frame_age_days(ctx.observation)
    return age is not None and age > REPLACEMENT_AGE_DAYS


def _brood_frame_spotty(ctx: RuleContext) -> bool:
    obs = ctx.observation
    return obs.frame_type in (FrameType.BROOD, FrameType.MIXED) and obs.content.brood.pattern in (
        FrameBroodPattern.SPOTTY,
        FrameBroodPattern.NONE,
    )


FRAME_RULES: tuple[RecommendationRule, ...] = (
    RecommendationRule(
        "wax_worn",
        _obs("wax_condition", WaxCondition.BLACK, WaxCondition.DAMAGED),
        ("Replace the frame comb",),
    ),
    RecommendationRule(
        "frame_aged",
        _frame_too_old,
        ("Replace the frame, foundation is over three years old",),
    ),
    RecommendationRule(
        "marked_for_replacement",
        lambda ctx: ctx.observation.needs_replacement,
        ("Schedule the marked frame for replacement",),
    ),
    RecommendationRule(
        "brood_spotty",
        _brood_frame_spotty,
        ("Check the queen and her laying quality",),
    ),
    RecommendationRule(
        "ready_for_harvest",
        lambda ctx: is_ready_for_harvest(ctx.observation),
        ("Frame is ready for harvest",),
    ),
    RecommendationRule(
        "frame_empty",
        lambda ctx: is_effectively_empty(ctx.observation),
        ("Move the empty frame toward the brood nest or remove it",),
    ),
    RecommendationRule(
        "status_critical",
        _status(HealthStatus.CRITICAL),
        ("Check the frame again within 3 days",),
    ),
    RecommendationRule(
        "status_warning",
        _status(HealthStatus.WARNING),
        ("Review frame placement at the next inspection",),
    ),
)


# ── Feeding ──────────────────────────────────────────────────────────────────

FEEDING_RULES: tuple[RecommendationRule, ...] = (
    RecommendationRule(
        "feed_ignored",
        _obs("consumption_rate", ConsumptionRate.NONE),
        ("Remove uneaten feed before it ferments", "Check the colony for queen loss or disease"),
    ),
    RecommendationRule(
        "feed_slow",
        _obs("consumption_rate", ConsumptionRate.SLOW),
        ("Check syrup concentration and feeder placement",),
    ),
    RecommendationRule(
        "feed_very_fast",
        _obs("consumption_rate", ConsumptionRate.VERY_FAST),
        ("Increase the feeding amount", "Check food stores at the next inspection"),
    ),
    RecommendationRule(
        "bees_agitated",
        _obs("bee_response", BeeResponse.NEGATIVE, BeeResponse.AGGRESSIVE),
        ("Review feed quality and ingredients", "Feed in the evening to limit robbing"),
    ),
    RecommendationRule(
        "low_effectiveness",
        lambda ctx: ctx.observation.effectiveness is not None and ctx.observation.effectiveness <= 3,
        ("Switch to a different feed type or feeding method",),
    ),
    RecommendationRule(
        "status_critical",
        _status(HealthStatus.CRITICAL),
        ("Reassess the feeding plan within 3 days",),
    ),
    RecommendationRule(
        "status_warning",
        _status(HealthStatus.WARNING),
        ("Review the feeding plan",),
    ),
)
