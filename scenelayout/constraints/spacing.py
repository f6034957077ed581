"""Minimum separation between nodes, per diagram type."""

from typing import Union

from scenelayout.dsl.schema import DiagramType

# Gap added on top of the half-widths when nudging overlapping nodes apart.
# Hierarchies need the most clearance, timelines the least.
MIN_SEPARATION: dict[DiagramType, float] = {
    DiagramType.FLOW: 30,
    DiagramType.TREE: 40,
    DiagramType.TIMELINE: 20,
    DiagramType.MATRIX: 25,
    DiagramType.CYCLE: 35,
}

DEFAULT_MIN_SEPARATION: float = 30


def min_separation(diagram_type: Union[DiagramType, str, None]) -> float:
    """Look up the minimum separation for a diagram type.

    Args:
        diagram_type: Diagram type (enum or its string value). Unknown or
            missing types get the default.

    Returns:
        Separation in pixels.
    """
    try:
        key = DiagramType(diagram_type)
    except ValueError:
        return DEFAULT_MIN_SEPARATION
    return MIN_SEPARATION.get(key, DEFAULT_MIN_SEPARATION)


def required_distance(diagram_type: Union[DiagramType, str, None], width1: float, width2: float) -> float:
    """Centre-to-centre distance two nodes must reach when nudged apart."""
    return min_separation(diagram_type) + (width1 + width2) / 2
