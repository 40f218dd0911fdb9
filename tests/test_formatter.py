"""Tests for the plain-text assessment formatter."""

from hive_assess.core.assessment_engine import AssessmentEngine
from hive_assess.domain.observation import InspectionObservation
from hive_assess.report.formatter import AssessmentFormatter

from tests.test_observation import _BASE, _frame, _inspection

_ENGINE = AssessmentEngine()


class TestAssessmentFormatter:
    def test_headline(self) -> None:
        assert AssessmentFormatter.headline(_ENGINE.assess(_inspection())) == "Inspection: GREEN (100/100)"
        assert AssessmentFormatter.headline(_ENGINE.assess(_frame())) == "Frame: GOOD (63/100)"

    def test_unscored_headline(self) -> None:
        a = _ENGINE.assess(InspectionObservation(observed_at=_BASE))
        assert AssessmentFormatter.headline(a) == "Inspection: not yet assessed"
        assert "Risk: n/a" in AssessmentFormatter.format_plain(a)

    def test_healthy_report(self) -> None:
        text = AssessmentFormatter.format_plain(_ENGINE.assess(_inspection()))
        assert "Risk: low" in text
        assert "Data completeness: 100%" in text
        assert "Observed: 2026-04-01" in text
        assert "Next action: 2026-04-22" in text
        assert text.endswith("No recommendations")

    def test_recommendations_listed_in_order(self) -> None:
        a = _ENGINE.assess(_inspection(queen_present="no"))
        text = AssessmentFormatter.format_plain(a)
        lines = text.splitlines()
        start = lines.index("--- Recommendations ---")
        assert lines[start + 1:] == [f"  • {rec}" for rec in a.recommendations]

    def test_output_is_stable(self) -> None:
        a = _ENGINE.assess(_inspection(pests_found=["varroa"]))
        assert AssessmentFormatter.format_plain(a) == AssessmentFormatter.format_plain(a)
