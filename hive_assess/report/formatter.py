"""AssessmentFormatter — deterministic plain-text rendering of an Assessment.

Used by dashboards, notifications and logs that need a readable summary
without re-deriving anything.  Output is stable for a given Assessment.
"""

from __future__ import annotations

from hive_assess.domain.assessment import Assessment


class AssessmentFormatter:
    """Plain-text formatter for Assessment records."""

    @staticmethod
    def headline(assessment: Assessment) -> str:
        if not assessment.is_scored:
            return f"{assessment.entity_kind.value.capitalize()}: not yet assessed"
        status = assessment.status.value.upper() if assessment.status else "UNCLASSIFIED"
        return (
            f"{assessment.entity_kind.value.capitalize()}: {status} "
            f"({assessment.score}/{assessment.max_score})"
        )

    @staticmethod
    def format_plain(assessment: Assessment) -> str:
        lines = [AssessmentFormatter.headline(assessment)]
        lines.append("=" * 50)

        risk = assessment.risk_level.value if assessment.risk_level else "n/a"
        lines.append(f"Risk: {risk}")
        lines.append(f"Data completeness: {assessment.completeness}%")
        lines.append(f"Observed: {assessment.observed_at.date().isoformat()}")
        lines.append(f"Next action: {assessment.next_action_date.date().isoformat()}")
        lines.append("")

        if assessment.recommendations:
            lines.append("--- Recommendations ---")
            for rec in assessment.recommendations:
                lines.append(f"  • {rec}")
        else:
            lines.append("No recommendations")

        return "\n".join(lines)
