"""Risk deriver — turns a status into an urgency level.

The status tier maps positionally onto the risk scale (best tier -> low,
worst tier -> critical).  The score then acts as a tie-break that can only
raise the risk: a very low score is critical even when the status was
reached through a milder path.  The tie-break uses the score as a
percentage of its scale so the 40-point and 10-point kinds share bounds.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from hive_assess.core.classifier import StatusLadder
from hive_assess.domain.enums import RiskLevel

RISK_ORDER: tuple[RiskLevel, ...] = (
    RiskLevel.LOW,
    RiskLevel.MEDIUM,
    RiskLevel.HIGH,
    RiskLevel.CRITICAL,
)


def riskier(a: RiskLevel, b: RiskLevel) -> RiskLevel:
    return a if RISK_ORDER.index(a) >= RISK_ORDER.index(b) else b


@dataclass(frozen=True)
class RiskPolicy:
    """Percentage bounds below which the score alone sets a minimum risk."""

    critical_below: float = 30.0
    high_below: float = 50.0
    medium_below: float = 70.0

    def floor_for(self, percentage: float) -> RiskLevel:
        if percentage < self.critical_below:
            return RiskLevel.CRITICAL
        if percentage < self.high_below:
            return RiskLevel.HIGH
        if percentage < self.medium_below:
            return RiskLevel.MEDIUM
        return RiskLevel.LOW


def derive_risk(
    status: Optional[Enum],
    score_percentage: Optional[float],
    ladder: StatusLadder,
    policy: RiskPolicy | None = None,
) -> Optional[RiskLevel]:
    """Risk level for a classified observation, or None when it has no status."""
    if status is None:
        return None

    policy = policy or RiskPolicy()
    rank = ladder.rank(status)
    # Ladders shorter than the risk scale map their worst tier to critical
    position = round(rank * (len(RISK_ORDER) - 1) / max(len(ladder.statuses) - 1, 1))
    level = RISK_ORDER[position]

    if score_percentage is not None:
        level = riskier(level, policy.floor_for(score_percentage))
    return level
