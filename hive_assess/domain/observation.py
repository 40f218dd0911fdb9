"""Observation models — the immutable inputs of the assessment engine.

An Observation is a snapshot of what a beekeeper recorded about one entity
at one point in time.  There is one model per entity kind.  All models are
strict: categorical fields reference the controlled enums, numeric fields
carry their declared ranges, and the frame content percentages are checked
against their hard 100% ceiling at construction time.  Downstream code
never has to re-check field constraints.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import ClassVar, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from hive_assess.domain.enums import (
    BeeResponse,
    BroodPattern,
    ColonyStrength,
    ConsumptionRate,
    EggPattern,
    EntityKind,
    FeedingType,
    FoodStores,
    FrameBroodPattern,
    FrameType,
    HiveBroodPattern,
    InspectionType,
    PopulationStrength,
    QueenLaying,
    QueenPresence,
    ReplacementReason,
    WaxCondition,
)
from hive_assess.domain.errors import InvariantViolation

_PERCENT = {"ge": 0.0, "le": 100.0}


def _ensure_aware(value: datetime) -> datetime:
    # Form submissions often arrive without an offset
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _distinct_findings(values: tuple[str, ...]) -> tuple[str, ...]:
    """Strip blanks and repeated entries, keeping first-seen order."""
    seen: list[str] = []
    for raw in values:
        item = raw.strip()
        if item and item not in seen:
            seen.append(item)
    return tuple(seen)


# ── Base ─────────────────────────────────────────────────────────────────────

class Observation(BaseModel):
    """Common shape of every observation: an explicit, timezone-aware timestamp."""

    kind: ClassVar[EntityKind]

    observed_at: datetime = Field(..., description="When the observation was made")

    model_config = {"frozen": True}

    @field_validator("observed_at")
    @classmethod
    def observed_at_must_be_aware(cls, v: datetime) -> datetime:
        return _ensure_aware(v)


# ── Inspection ───────────────────────────────────────────────────────────────

class InspectionObservation(Observation):
    """The five quick-assessment answers of a hive inspection plus its findings."""

    kind: ClassVar[EntityKind] = EntityKind.INSPECTION

    inspection_type: InspectionType = InspectionType.ROUTINE
    queen_present: Optional[QueenPresence] = None
    queen_laying: Optional[QueenLaying] = None
    brood_pattern: Optional[BroodPattern] = None
    population_strength: Optional[PopulationStrength] = None
    food_stores: Optional[FoodStores] = None
    diseases_found: tuple[str, ...] = Field(default=(), max_length=50)
    pests_found: tuple[str, ...] = Field(default=(), max_length=50)

    @field_validator("diseases_found", "pests_found")
    @classmethod
    def findings_are_distinct(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        return _distinct_findings(v)

    @property
    def has_findings(self) -> bool:
        return bool(self.diseases_found or self.pests_found)


# ── Hive ─────────────────────────────────────────────────────────────────────

class HiveObservation(Observation):
    """Inspection-derived data used for the hive's 40-point health score."""

    kind: ClassVar[EntityKind] = EntityKind.HIVE

    queen_present: Optional[bool] = None
    egg_pattern: Optional[EggPattern] = None
    colony_strength: Optional[ColonyStrength] = None
    brood_pattern: Optional[HiveBroodPattern] = None
    food_stores: Optional[FoodStores] = None
    diseases: tuple[str, ...] = Field(default=(), max_length=50)
    pests: tuple[str, ...] = Field(default=(), max_length=50)

    @field_validator("diseases", "pests")
    @classmethod
    def findings_are_distinct(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        return _distinct_findings(v)

    @property
    def has_findings(self) -> bool:
        return bool(self.diseases or self.pests)


# ── Frame ────────────────────────────────────────────────────────────────────

class BroodContent(BaseModel):
    eggs: float = Field(0.0, **_PERCENT)
    larvae: float = Field(0.0, **_PERCENT)
    pupae: float = Field(0.0, **_PERCENT)
    pattern: FrameBroodPattern = FrameBroodPattern.NONE

    model_config = {"frozen": True}


class HoneyContent(BaseModel):
    capped: float = Field(0.0, **_PERCENT)
    uncapped: float = Field(0.0, **_PERCENT)
    moisture: Optional[float] = Field(None, ge=0.0, le=100.0, description="Moisture content if tested")

    model_config = {"frozen": True}


class PollenContent(BaseModel):
    stored: float = Field(0.0, **_PERCENT)
    colors: tuple[str, ...] = ()

    model_config = {"frozen": True}


class FrameContent(BaseModel):
    """Share of the frame's cells holding each kind of content.

    The percentages of all content categories together may never exceed 100.
    """

    brood: BroodContent = Field(default_factory=BroodContent)
    honey: HoneyContent = Field(default_factory=HoneyContent)
    pollen: PollenContent = Field(default_factory=PollenContent)
    empty: float = Field(0.0, **_PERCENT)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def total_must_not_exceed_hundred(self) -> FrameContent:
        total = self.total_percentage
        if total > 100.0 + 1e-9:
            raise InvariantViolation(f"Total frame content cannot exceed 100% (got {total:g}%)")
        return self

    @property
    def brood_percentage(self) -> float:
        return self.brood.eggs + self.brood.larvae + self.brood.pupae

    @property
    def honey_percentage(self) -> float:
        return self.honey.capped + self.honey.uncapped

    @property
    def pollen_percentage(self) -> float:
        return self.pollen.stored

    @property
    def total_percentage(self) -> float:
        return self.brood_percentage + self.honey_percentage + self.pollen_percentage + self.empty


class FrameObservation(Observation):
    """A content reading of one frame together with its physical condition."""

    kind: ClassVar[EntityKind] = EntityKind.FRAME

    frame_type: FrameType
    wax_condition: WaxCondition = WaxCondition.NEW
    content: FrameContent = Field(default_factory=FrameContent)
    foundation_installed: Optional[datetime] = Field(
        None, description="When foundation was first installed"
    )
    needs_replacement: bool = False
    replacement_reason: Optional[ReplacementReason] = None

    @field_validator("foundation_installed")
    @classmethod
    def foundation_installed_must_be_aware(cls, v: Optional[datetime]) -> Optional[datetime]:
        return _ensure_aware(v) if v is not None else None


# ── Feeding ──────────────────────────────────────────────────────────────────

class FeedingObservation(Observation):
    """How a colony took up a feeding."""

    kind: ClassVar[EntityKind] = EntityKind.FEEDING

    feeding_type: Optional[FeedingType] = None
    consumption_rate: Optional[ConsumptionRate] = None
    bee_response: Optional[BeeResponse] = None
    effectiveness: Optional[int] = Field(None, ge=1, le=10, description="Effectiveness rating from 1-10")


OBSERVATION_TYPES: dict[EntityKind, type[Observation]] = {
    EntityKind.INSPECTION: InspectionObservation,
    EntityKind.HIVE: HiveObservation,
    EntityKind.FRAME: FrameObservation,
    EntityKind.FEEDING: FeedingObservation,
}
