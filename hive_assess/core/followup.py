"""Follow-up helpers consumed by the persistence and dashboard layers.

These read stored assessments; the current time is always passed in.
"""

from __future__ import annotations

import math
from datetime import datetime
from typing import Optional, Sequence

from hive_assess.domain.assessment import Assessment
from hive_assess.domain.enums import ColonyStatus, HealthStatus, InspectionStatus, RiskLevel

_WORST = (InspectionStatus.RED, HealthStatus.CRITICAL)
_SECOND_WORST = (InspectionStatus.ORANGE, HealthStatus.WARNING)
_BEST = (InspectionStatus.GREEN, HealthStatus.EXCELLENT)


def colony_status_for(assessment: Assessment) -> Optional[ColonyStatus]:
    """Operational hive status implied by an inspection, None to leave it unchanged."""
    if assessment.status in _WORST or assessment.risk_level == RiskLevel.CRITICAL:
        return ColonyStatus.NEEDS_ATTENTION
    if assessment.status in _SECOND_WORST:
        return ColonyStatus.MONITORING
    if assessment.status in _BEST:
        return ColonyStatus.ACTIVE
    return None


def needs_alert(assessment: Assessment) -> bool:
    """True once the status has crossed into one of the two worst tiers."""
    return assessment.status in _WORST or assessment.status in _SECOND_WORST


def days_overdue(assessment: Assessment, now: datetime) -> int:
    """Whole days past the follow-up date, 0 if not yet due."""
    if now <= assessment.next_action_date:
        return 0
    return math.floor((now - assessment.next_action_date).total_seconds() / 86400)


def overdue_assessments(assessments: Sequence[Assessment], now: datetime) -> list[Assessment]:
    """Assessments whose follow-up date has passed, most overdue first."""
    overdue = [a for a in assessments if a.next_action_date < now]
    return sorted(overdue, key=lambda a: a.next_action_date)
