"""Score Calculator — maps categorical observations onto a bounded score.

Two scorers cover every entity kind:

CategoryScorer
    Each category owns a point table and a budget.  A category whose value
    is missing (or one of its "unanswered" literals) is dropped from both
    the earned points and the achievable maximum.

    normalised mode (inspection, feeding):
        score = round(earned / achievable * scale) - penalties
    absolute mode (hive):
        score = round(earned) - penalties

    The result is clamped to [0, scale].  With no answered category the
    achievable maximum is zero and the score is ``None``.

FrameProductivityScorer
    score = 0.4 * utilisation
          + 0.3 * brood pattern quality   (brood / mixed frames)
          + 0.3 * honey percentage        (honey / mixed frames)
          - wax condition penalty
    clamped to [0, 100].

Scorers are stateless and never mutate the observation.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional

from hive_assess.domain.enums import FrameBroodPattern, FrameType, WaxCondition
from hive_assess.domain.errors import ConfigurationError
from hive_assess.domain.observation import FrameContent, FrameObservation


def round_half_up(value: float) -> int:
    """Round halves away from zero for positive values (2.5 -> 3)."""
    return int(math.floor(value + 0.5))


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(value, upper))


@dataclass(frozen=True)
class ScoreResult:
    """Outcome of a scorer: the clamped score and the scale it lives on."""

    value: Optional[int]
    maximum: int
    completeness: int = 100

    @property
    def percentage(self) -> Optional[float]:
        if self.value is None:
            return None
        return self.value * 100.0 / self.maximum


# ── Category scoring ─────────────────────────────────────────────────────────

@dataclass(frozen=True, eq=False)
class Category:
    """One scored question of an observation.

    ``points`` maps every answer to its contribution.  When ``points`` is
    None the answer is itself numeric and counted as-is.  ``requires``
    restricts the category to observations where a precondition holds.
    """

    field: str
    budget: float
    points: Optional[Mapping[Any, float]] = None
    unanswered: frozenset = frozenset()
    vocabulary: Optional[type[Enum]] = None
    requires: Optional[Callable[[Any], bool]] = None

    def __post_init__(self) -> None:
        if self.points is None:
            return
        object.__setattr__(self, "points", MappingProxyType(dict(self.points)))
        if any(v > self.budget for v in self.points.values()):
            raise ConfigurationError(f"category '{self.field}' awards more than its budget")
        if self.vocabulary is not None:
            missing = [m.value for m in self.vocabulary if m not in self.points and m not in self.unanswered]
            if missing:
                raise ConfigurationError(
                    f"category '{self.field}' has no points for: {', '.join(missing)}"
                )

    def answer(self, observation: Any) -> Any:
        """Return the recorded answer, or None if it does not count."""
        value = getattr(observation, self.field, None)
        if value is None or value in self.unanswered:
            return None
        if self.requires is not None and not self.requires(observation):
            return None
        return value

    def points_for(self, value: Any) -> float:
        if self.points is None:
            return clamp(float(value), 0.0, self.budget)
        return self.points[value]


@dataclass(frozen=True)
class Penalty:
    """Flat deduction per distinct finding listed in ``field``, up to ``cap`` points."""

    field: str
    per_item: float
    cap: float

    def points_for(self, observation: Any) -> float:
        findings = getattr(observation, self.field, None) or ()
        return min(len(set(findings)) * self.per_item, self.cap)


@dataclass(frozen=True)
class CategoryScorer:
    categories: tuple[Category, ...]
    scale: int = 100
    normalize: bool = True
    penalties: tuple[Penalty, ...] = ()

    @property
    def maximum(self) -> int:
        return self.scale

    def score(self, observation: Any) -> ScoreResult:
        earned = 0.0
        achievable = 0.0
        answered = 0

        for category in self.categories:
            value = category.answer(observation)
            if value is None:
                continue
            answered += 1
            earned += category.points_for(value)
            achievable += category.budget

        completeness = round_half_up(answered * 100.0 / len(self.categories)) if self.categories else 0

        # Nothing answered: "not yet assessed", not zero
        if achievable == 0:
            return ScoreResult(value=None, maximum=self.scale, completeness=completeness)

        raw = earned / achievable * self.scale if self.normalize else earned
        raw -= sum(p.points_for(observation) for p in self.penalties)

        value = int(clamp(round_half_up(raw), 0, self.scale))
        return ScoreResult(value=value, maximum=self.scale, completeness=completeness)


# ── Frame productivity ───────────────────────────────────────────────────────

_PATTERN_QUALITY: Mapping[FrameBroodPattern, float] = {
    FrameBroodPattern.SOLID: 100.0,
    FrameBroodPattern.PATCHY: 70.0,
    FrameBroodPattern.SPOTTY: 40.0,
    FrameBroodPattern.NONE: 0.0,
}

_WAX_PENALTY: Mapping[WaxCondition, float] = {
    WaxCondition.NEW: 0.0,
    WaxCondition.LIGHT: 5.0,
    WaxCondition.MEDIUM: 10.0,
    WaxCondition.DARK: 20.0,
    WaxCondition.BLACK: 40.0,
    WaxCondition.DAMAGED: 50.0,
}

_BROOD_FRAMES = frozenset({FrameType.BROOD, FrameType.MIXED})
_HONEY_FRAMES = frozenset({FrameType.HONEY, FrameType.MIXED})


def productivity_score(
    content: FrameContent,
    frame_type: FrameType,
    wax_condition: WaxCondition = WaxCondition.NEW,
    utilization_weight: float = 0.4,
    brood_weight: float = 0.3,
    honey_weight: float = 0.3,
) -> int:
    """Weighted productivity of a single frame on a 0-100 scale."""
    utilization = clamp(100.0 - content.empty, 0.0, 100.0)
    score = utilization * utilization_weight

    if frame_type in _BROOD_FRAMES:
        score += _PATTERN_QUALITY[content.brood.pattern] * brood_weight

    if frame_type in _HONEY_FRAMES:
        score += clamp(content.honey_percentage, 0.0, 100.0) * honey_weight

    score -= _WAX_PENALTY[wax_condition]
    return int(clamp(round_half_up(score), 0, 100))


@dataclass(frozen=True)
class FrameProductivityScorer:
    utilization_weight: float = 0.4
    brood_weight: float = 0.3
    honey_weight: float = 0.3

    @property
    def maximum(self) -> int:
        return 100

    def score(self, observation: FrameObservation) -> ScoreResult:
        value = productivity_score(
            observation.content,
            observation.frame_type,
            observation.wax_condition,
            utilization_weight=self.utilization_weight,
            brood_weight=self.brood_weight,
            honey_weight=self.honey_weight,
        )
        return ScoreResult(value=value, maximum=self.maximum)
