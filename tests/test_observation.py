"""Tests for the observation models."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from hive_assess.domain.enums import (
    FoodStores,
    FrameType,
    InspectionType,
    QueenPresence,
    WaxCondition,
)
from hive_assess.domain.errors import InvariantViolation
from hive_assess.domain.observation import (
    FeedingObservation,
    FrameContent,
    FrameObservation,
    HiveObservation,
    InspectionObservation,
)

_BASE = datetime(2026, 4, 1, 9, 0, 0, tzinfo=timezone.utc)


def _inspection_data(**overrides) -> dict:
    """Return a valid, fully answered inspection dict, with optional overrides."""
    base = {
        "observed_at": _BASE.isoformat(),
        "inspection_type": "routine",
        "queen_present": "yes",
        "queen_laying": "yes",
        "brood_pattern": "excellent",
        "population_strength": "very_strong",
        "food_stores": "abundant",
        "diseases_found": [],
        "pests_found": [],
    }
    base.update(overrides)
    return base


def _inspection(**overrides) -> InspectionObservation:
    return InspectionObservation.model_validate(_inspection_data(**overrides))


def _hive_data(**overrides) -> dict:
    base = {
        "observed_at": _BASE.isoformat(),
        "queen_present": True,
        "egg_pattern": "regular",
        "colony_strength": "strong",
        "brood_pattern": "solid",
        "food_stores": "abundant",
        "diseases": [],
        "pests": [],
    }
    base.update(overrides)
    return base


def _hive(**overrides) -> HiveObservation:
    return HiveObservation.model_validate(_hive_data(**overrides))


def _frame_data(**overrides) -> dict:
    base = {
        "observed_at": _BASE.isoformat(),
        "frame_type": "honey",
        "wax_condition": "new",
        "content": {
            "brood": {"eggs": 0, "larvae": 0, "pupae": 0, "pattern": "none"},
            "honey": {"capped": 90, "uncapped": 0},
            "pollen": {"stored": 0},
            "empty": 10,
        },
    }
    base.update(overrides)
    return base


def _frame(**overrides) -> FrameObservation:
    return FrameObservation.model_validate(_frame_data(**overrides))


def _feeding_data(**overrides) -> dict:
    base = {
        "observed_at": _BASE.isoformat(),
        "feeding_type": "sugar_syrup",
        "consumption_rate": "fast",
        "bee_response": "positive",
        "effectiveness": 9,
    }
    base.update(overrides)
    return base


def _feeding(**overrides) -> FeedingObservation:
    return FeedingObservation.model_validate(_feeding_data(**overrides))


class TestInspectionObservation:
    def test_valid_inspection_parses(self) -> None:
        obs = _inspection()
        assert obs.queen_present == QueenPresence.YES
        assert obs.food_stores == FoodStores.ABUNDANT
        assert obs.inspection_type == InspectionType.ROUTINE

    def test_categories_are_optional(self) -> None:
        obs = InspectionObservation(observed_at=_BASE)
        assert obs.queen_present is None
        assert obs.diseases_found == ()

    def test_unknown_literal_rejected(self) -> None:
        with pytest.raises(ValidationError):
            _inspection(food_stores="plenty")

    def test_findings_are_deduplicated(self) -> None:
        obs = _inspection(diseases_found=["nosema", " nosema ", "", "chalkbrood"])
        assert obs.diseases_found == ("nosema", "chalkbrood")

    def test_has_findings(self) -> None:
        assert not _inspection().has_findings
        assert _inspection(pests_found=["varroa"]).has_findings

    def test_naive_timestamp_gets_utc(self) -> None:
        obs = _inspection(observed_at=datetime(2026, 4, 1, 9, 0).isoformat())
        assert obs.observed_at.tzinfo is not None

    def test_observation_is_immutable(self) -> None:
        obs = _inspection()
        with pytest.raises(ValidationError):
            obs.queen_present = QueenPresence.NO


class TestHiveObservation:
    def test_valid_hive_parses(self) -> None:
        obs = _hive()
        assert obs.queen_present is True
        assert not obs.has_findings

    def test_findings(self) -> None:
        assert _hive(diseases=["nosema"]).has_findings


class TestFrameContent:
    def test_percentages_sum_to_hundred_accepted(self) -> None:
        content = FrameContent.model_validate({
            "brood": {"eggs": 10, "larvae": 10, "pupae": 10},
            "honey": {"capped": 30, "uncapped": 10},
            "pollen": {"stored": 20},
            "empty": 10,
        })
        assert content.total_percentage == 100
        assert content.brood_percentage == 30
        assert content.honey_percentage == 40
        assert content.pollen_percentage == 20

    def test_percentages_over_hundred_rejected(self) -> None:
        with pytest.raises(ValidationError) as excinfo:
            FrameContent.model_validate({
                "honey": {"capped": 80},
                "empty": 30,
            })
        assert "cannot exceed 100%" in str(excinfo.value)

    def test_single_percentage_out_of_range_rejected(self) -> None:
        with pytest.raises(ValidationError):
            FrameContent.model_validate({"empty": 120})
        with pytest.raises(ValidationError):
            FrameContent.model_validate({"pollen": {"stored": -5}})

    def test_invariant_violation_is_a_value_error(self) -> None:
        assert issubclass(InvariantViolation, ValueError)


class TestFrameObservation:
    def test_valid_frame_parses(self) -> None:
        obs = _frame()
        assert obs.frame_type == FrameType.HONEY
        assert obs.wax_condition == WaxCondition.NEW
        assert obs.content.honey.capped == 90

    def test_default_content_is_empty(self) -> None:
        obs = FrameObservation(observed_at=_BASE, frame_type=FrameType.BROOD)
        assert obs.content.total_percentage == 0

    def test_naive_foundation_date_gets_utc(self) -> None:
        obs = _frame(foundation_installed=datetime(2024, 1, 1).isoformat())
        assert obs.foundation_installed.tzinfo is not None


class TestFeedingObservation:
    def test_valid_feeding_parses(self) -> None:
        assert _feeding().effectiveness == 9

    @pytest.mark.parametrize("value", [0, 11, -1])
    def test_effectiveness_out_of_range_rejected(self, value: int) -> None:
        with pytest.raises(ValidationError):
            _feeding(effectiveness=value)

    def test_effectiveness_optional(self) -> None:
        assert _feeding(effectiveness=None).effectiveness is None
