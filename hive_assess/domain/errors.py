"""Error taxonomy for the assessment engine.

"Not yet assessed" is not an error: an observation with no answered
categories produces an Assessment whose score is ``None``.
"""

from __future__ import annotations


class AssessmentError(Exception):
    """Base class for every error raised by hive-assess."""


class InvariantViolation(AssessmentError, ValueError):
    """An observation breaks a hard input invariant.

    Subclasses ValueError so pydantic validators can raise it directly and
    have it reported as a regular validation error.
    """


class ConfigurationError(AssessmentError):
    """A profile or lookup table is inconsistent with the domain enums."""
