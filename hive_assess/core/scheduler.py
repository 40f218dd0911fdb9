"""Scheduler — picks the date of the next required action.

interval = min(base interval for the risk level, cap for the action type)
next     = observation timestamp + interval calendar days

The interval is never shorter than one day, so the result always lies
strictly after the observation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Union

from hive_assess.domain.enums import RiskLevel


def _default_caps() -> dict[str, int]:
    return {
        "disease_check": 7,
        "treatment": 5,
        "emergency_feeding": 3,
    }


@dataclass(frozen=True, eq=False)
class SchedulePolicy:
    """Follow-up intervals in days."""

    critical_days: int = 3
    high_days: int = 7
    medium_days: int = 14
    low_days: int = 21
    default_days: int = 14
    type_caps: Mapping[str, int] = field(default_factory=_default_caps)

    def __post_init__(self) -> None:
        object.__setattr__(self, "type_caps", MappingProxyType(dict(self.type_caps)))

    def base_interval(self, risk_level: Optional[RiskLevel]) -> int:
        if risk_level is None:
            return self.default_days
        return {
            RiskLevel.CRITICAL: self.critical_days,
            RiskLevel.HIGH: self.high_days,
            RiskLevel.MEDIUM: self.medium_days,
            RiskLevel.LOW: self.low_days,
        }[risk_level]

    def cap_for(self, action_type: Union[Enum, str, None]) -> Optional[int]:
        if action_type is None:
            return None
        key = action_type.value if isinstance(action_type, Enum) else action_type
        return self.type_caps.get(key)

    def interval_days(self, risk_level: Optional[RiskLevel], action_type: Union[Enum, str, None] = None) -> int:
        days = self.base_interval(risk_level)
        cap = self.cap_for(action_type)
        if cap is not None:
            days = min(days, cap)
        return max(days, 1)


def next_action_date(
    observed_at: datetime,
    risk_level: Optional[RiskLevel],
    action_type: Union[Enum, str, None] = None,
    policy: SchedulePolicy | None = None,
) -> datetime:
    """Date of the next inspection / feeding / frame check."""
    policy = policy or SchedulePolicy()
    return observed_at + timedelta(days=policy.interval_days(risk_level, action_type))
