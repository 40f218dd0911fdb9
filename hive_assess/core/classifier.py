"""Classifier — maps a score plus hard conditions onto an ordered status.

Precedence (first match wins):
    1. Overrides: a disqualifying condition forces a fixed status
       (normally the worst tier) no matter what the score says.
    2. No score: nothing was answered, so there is no status.
    3. Threshold ladder: the score picks a tier.
    4. Escalations: conditions that put a floor under the severity.
       They can only make the status worse, never better.

A high numeric score must never hide a disqualifying condition, which is
why overrides run before the score is even looked at.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

from hive_assess.domain.errors import ConfigurationError

logger = logging.getLogger(__name__)

Predicate = Callable[[Any], bool]


@dataclass(frozen=True)
class StatusLadder:
    """Ordered status vocabulary with the score bounds that select each tier.

    ``statuses`` runs best to worst.  ``thresholds`` is a sequence of
    ``(upper_bound, status)`` pairs in ascending bound order; a score below
    a bound gets that status, a score at or above every bound gets the
    best status.
    """

    statuses: tuple[Enum, ...]
    thresholds: tuple[tuple[float, Enum], ...]

    def __post_init__(self) -> None:
        bounds = [b for b, _ in self.thresholds]
        if bounds != sorted(bounds):
            raise ConfigurationError("status thresholds must be in ascending order")
        for _, status in self.thresholds:
            if status not in self.statuses:
                raise ConfigurationError(f"threshold status {status!r} is not in the ladder")

    @property
    def best(self) -> Enum:
        return self.statuses[0]

    @property
    def worst(self) -> Enum:
        return self.statuses[-1]

    def rank(self, status: Enum) -> int:
        """0 for the best tier, len-1 for the worst."""
        return self.statuses.index(status)

    def worse(self, a: Enum, b: Enum) -> Enum:
        return a if self.rank(a) >= self.rank(b) else b

    def for_score(self, score: float) -> Enum:
        for bound, status in self.thresholds:
            if score < bound:
                return status
        return self.best


@dataclass(frozen=True)
class Override:
    """Forces ``status`` whenever ``applies`` holds for the observation."""

    name: str
    applies: Predicate
    status: Enum


@dataclass(frozen=True)
class Escalation:
    """Makes the status at least as severe as ``status`` when ``applies`` holds."""

    name: str
    applies: Predicate
    status: Enum


class Classifier:
    """Stateless status classifier for one entity kind."""

    def __init__(
        self,
        ladder: StatusLadder,
        overrides: tuple[Override, ...] = (),
        escalations: tuple[Escalation, ...] = (),
    ) -> None:
        for rule in (*overrides, *escalations):
            if rule.status not in ladder.statuses:
                raise ConfigurationError(f"rule '{rule.name}' targets unknown status {rule.status!r}")
        self._ladder = ladder
        self._overrides = overrides
        self._escalations = escalations

    @property
    def ladder(self) -> StatusLadder:
        return self._ladder

    def classify(self, score: Optional[float], observation: Any) -> Optional[Enum]:
        for override in self._overrides:
            if override.applies(observation):
                logger.debug("Override '%s' forces status %s", override.name, override.status.value)
                return override.status

        if score is None:
            return None

        status = self._ladder.for_score(score)
        for escalation in self._escalations:
            if escalation.applies(observation):
                status = self._ladder.worse(status, escalation.status)
        return status
