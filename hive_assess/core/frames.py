"""Frame helpers and per-hive frame statistics.

All age computations are relative to the observation's own timestamp so
results stay reproducible.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional, Sequence

from hive_assess.core.scoring import productivity_score, round_half_up
from hive_assess.domain.enums import FrameType, WaxCondition
from hive_assess.domain.observation import FrameObservation

HARVEST_CAPPED_PERCENT = 80.0
REPLACEMENT_AGE_DAYS = 1095  # three years
EFFECTIVELY_EMPTY_PERCENT = 10.0

_WORN_WAX = frozenset({WaxCondition.BLACK, WaxCondition.DAMAGED})


@dataclass(frozen=True)
class ReplacementAdvice:
    should: bool
    reason: Optional[str] = None
    priority: Optional[str] = None


def frame_age_days(frame: FrameObservation) -> Optional[int]:
    """Whole days between foundation install and the observation, rounded up."""
    if frame.foundation_installed is None:
        return None
    seconds = abs((frame.observed_at - frame.foundation_installed).total_seconds())
    return math.ceil(seconds / 86400)


def is_ready_for_harvest(frame: FrameObservation) -> bool:
    return frame.content.honey.capped >= HARVEST_CAPPED_PERCENT


def has_brood(frame: FrameObservation) -> bool:
    return frame.content.brood_percentage > 0


def is_effectively_empty(frame: FrameObservation) -> bool:
    return frame.content.total_percentage < EFFECTIVELY_EMPTY_PERCENT


def replacement_advice(frame: FrameObservation) -> ReplacementAdvice:
    age = frame_age_days(frame)
    if age is not None and age > REPLACEMENT_AGE_DAYS:
        return ReplacementAdvice(True, "age", "medium")
    if frame.wax_condition in _WORN_WAX:
        return ReplacementAdvice(True, "condition", "high")
    if frame.needs_replacement:
        reason = frame.replacement_reason.value if frame.replacement_reason else "marked"
        return ReplacementAdvice(True, reason, "high")
    return ReplacementAdvice(False)


# ── Hive-level statistics ────────────────────────────────────────────────────

def _empty_wax_distribution() -> dict[str, int]:
    return {c.value: 0 for c in WaxCondition}


@dataclass
class FrameStatistics:
    total_frames: int = 0
    brood_frames: int = 0
    honey_frames: int = 0
    mixed_frames: int = 0
    empty_frames: int = 0
    frames_needing_replacement: int = 0
    average_productivity: int = 0
    average_brood_percentage: int = 0
    average_honey_percentage: int = 0
    average_pollen_percentage: int = 0
    wax_condition_distribution: dict[str, int] = field(default_factory=_empty_wax_distribution)

    def to_dict(self) -> dict:
        return {
            "total_frames": self.total_frames,
            "brood_frames": self.brood_frames,
            "honey_frames": self.honey_frames,
            "mixed_frames": self.mixed_frames,
            "empty_frames": self.empty_frames,
            "frames_needing_replacement": self.frames_needing_replacement,
            "average_productivity": self.average_productivity,
            "average_brood_percentage": self.average_brood_percentage,
            "average_honey_percentage": self.average_honey_percentage,
            "average_pollen_percentage": self.average_pollen_percentage,
            "wax_condition_distribution": dict(self.wax_condition_distribution),
        }


def frame_statistics(frames: Sequence[FrameObservation]) -> FrameStatistics:
    """Aggregate counts and rounded averages over all frames of a hive."""
    stats = FrameStatistics(total_frames=len(frames))
    if not frames:
        return stats

    productivity = brood = honey = pollen = 0.0
    for frame in frames:
        if frame.frame_type == FrameType.BROOD:
            stats.brood_frames += 1
        elif frame.frame_type == FrameType.HONEY:
            stats.honey_frames += 1
        else:
            stats.mixed_frames += 1

        if is_effectively_empty(frame):
            stats.empty_frames += 1
        if replacement_advice(frame).should:
            stats.frames_needing_replacement += 1

        productivity += productivity_score(frame.content, frame.frame_type, frame.wax_condition)
        brood += frame.content.brood_percentage
        honey += frame.content.honey_percentage
        pollen += frame.content.pollen_percentage
        stats.wax_condition_distribution[frame.wax_condition.value] += 1

    n = len(frames)
    stats.average_productivity = round_half_up(productivity / n)
    stats.average_brood_percentage = round_half_up(brood / n)
    stats.average_honey_percentage = round_half_up(honey / n)
    stats.average_pollen_percentage = round_half_up(pollen / n)
    return stats
