"""Constraint module - spacing rules, overlap resolution and layout validation."""

from scenelayout.constraints.spacing import (
    DEFAULT_MIN_SEPARATION,
    MIN_SEPARATION,
    min_separation,
    required_distance,
)
from scenelayout.constraints.overlap import (
    OverlapResolver,
    ResolutionStats,
    count_overlaps,
    find_overlaps,
    tie_break_angle,
)
from scenelayout.constraints.engine import ConstraintResult, LayoutValidator, Violation

__all__ = [
    # Spacing
    "DEFAULT_MIN_SEPARATION",
    "MIN_SEPARATION",
    "min_separation",
    "required_distance",
    # Overlap
    "OverlapResolver",
    "ResolutionStats",
    "count_overlaps",
    "find_overlaps",
    "tie_break_angle",
    # Validation
    "ConstraintResult",
    "LayoutValidator",
    "Violation",
]
