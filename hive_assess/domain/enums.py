"""Controlled enumerations for the hive-assess domain.

Every categorical field in an observation MUST reference an enum defined
here.  Free-form strings are not acceptable for classification fields:
an unrecognised literal is rejected when the observation is constructed
instead of silently scoring zero.
"""

from __future__ import annotations

from enum import Enum


class EntityKind(str, Enum):
    """The kind of record an observation describes."""

    INSPECTION = "inspection"
    HIVE = "hive"
    FRAME = "frame"
    FEEDING = "feeding"


# ── Inspection ───────────────────────────────────────────────────────────────

class QueenPresence(str, Enum):
    YES = "yes"
    NO = "no"
    NOT_SEEN = "not_seen"
    UNKNOWN = "unknown"


class QueenLaying(str, Enum):
    YES = "yes"
    NO = "no"
    POOR = "poor"
    UNKNOWN = "unknown"


class BroodPattern(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"
    NONE = "none"


class PopulationStrength(str, Enum):
    VERY_STRONG = "very_strong"
    STRONG = "strong"
    MODERATE = "moderate"
    WEAK = "weak"
    VERY_WEAK = "very_weak"


class FoodStores(str, Enum):
    ABUNDANT = "abundant"
    ADEQUATE = "adequate"
    LOW = "low"
    CRITICAL = "critical"
    NONE = "none"


class InspectionType(str, Enum):
    ROUTINE = "routine"
    DISEASE_CHECK = "disease_check"
    HARVEST = "harvest"
    FEEDING = "feeding"
    TREATMENT = "treatment"
    EMERGENCY = "emergency"


# ── Hive (inspection-derived) ────────────────────────────────────────────────

class EggPattern(str, Enum):
    REGULAR = "regular"
    IRREGULAR = "irregular"
    SPOTTY = "spotty"
    NONE = "none"


class ColonyStrength(str, Enum):
    WEAK = "weak"
    MEDIUM = "medium"
    STRONG = "strong"


class HiveBroodPattern(str, Enum):
    SOLID = "solid"
    PATCHY = "patchy"
    SCATTERED = "scattered"


# ── Frame ────────────────────────────────────────────────────────────────────

class FrameType(str, Enum):
    BROOD = "brood"
    HONEY = "honey"
    MIXED = "mixed"


class FrameBroodPattern(str, Enum):
    SOLID = "solid"
    PATCHY = "patchy"
    SPOTTY = "spotty"
    NONE = "none"


class WaxCondition(str, Enum):
    NEW = "new"
    LIGHT = "light"
    MEDIUM = "medium"
    DARK = "dark"
    BLACK = "black"
    DAMAGED = "damaged"


class ReplacementReason(str, Enum):
    AGE = "age"
    DAMAGE = "damage"
    DISEASE = "disease"
    POOR_CONSTRUCTION = "poor_construction"
    OTHER = "other"


# ── Feeding ──────────────────────────────────────────────────────────────────

class ConsumptionRate(str, Enum):
    NONE = "none"
    SLOW = "slow"
    MODERATE = "moderate"
    FAST = "fast"
    VERY_FAST = "very_fast"


class BeeResponse(str, Enum):
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"
    AGGRESSIVE = "aggressive"


class FeedingType(str, Enum):
    SUGAR_SYRUP = "sugar_syrup"
    HONEY_SYRUP = "honey_syrup"
    POLLEN_PATTY = "pollen_patty"
    PROTEIN_PATTY = "protein_patty"
    EMERGENCY_FEEDING = "emergency_feeding"
    WINTER_FEEDING = "winter_feeding"
    STIMULATIVE_FEEDING = "stimulative_feeding"
    MAINTENANCE_FEEDING = "maintenance_feeding"
    CANDY_BOARD = "candy_board"
    FONDANT = "fondant"
    CUSTOM = "custom"


# ── Assessment vocabularies ──────────────────────────────────────────────────

class InspectionStatus(str, Enum):
    """Traffic-light status of an inspection, listed best to worst."""

    GREEN = "green"
    YELLOW = "yellow"
    ORANGE = "orange"
    RED = "red"


class HealthStatus(str, Enum):
    """Status used for hive, frame and feeding scores, listed best to worst."""

    EXCELLENT = "excellent"
    GOOD = "good"
    WARNING = "warning"
    CRITICAL = "critical"


class RiskLevel(str, Enum):
    """Coarse urgency used for scheduling, listed least to most urgent."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ColonyStatus(str, Enum):
    """Operational status written back onto a hive after an inspection."""

    ACTIVE = "active"
    MONITORING = "monitoring"
    NEEDS_ATTENTION = "needs_attention"
