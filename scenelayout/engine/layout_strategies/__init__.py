"""
layout_strategies — Pluggable layout computation strategies.

This package contains one strategy per diagram type:

- FlowStrategy: Sequential top-to-bottom chain (Process Flow, Pipeline)
- TreeStrategy: Hierarchical (Org Chart, Tree Diagram)
- TimelineStrategy: Chronological axis (Timeline, Roadmap)
- MatrixStrategy: Rows/columns (Matrix, Card Grid)
- CycleStrategy: Circular arrangement (Cycle, Loop)
- ComparisonStrategy: Two facing columns (Pros/Cons, Before/After)

Each strategy implements the BaseLayoutStrategy interface and is selected
by diagram type through the STRATEGIES registry.
"""

from typing import Dict, Union

from ...dsl.schema import DiagramType
from .base_strategy import BaseLayoutStrategy
from .flow_strategy import FlowStrategy
from .tree_strategy import TreeStrategy
from .timeline_strategy import TimelineStrategy
from .matrix_strategy import MatrixStrategy
from .cycle_strategy import CycleStrategy
from .comparison_strategy import ComparisonStrategy

__all__ = [
    'BaseLayoutStrategy',
    'FlowStrategy',
    'TreeStrategy',
    'TimelineStrategy',
    'MatrixStrategy',
    'CycleStrategy',
    'ComparisonStrategy',
    'get_strategy',
    'STRATEGIES',
]


# Strategy registry for lookup by diagram type
STRATEGIES: Dict[DiagramType, BaseLayoutStrategy] = {
    strategy.diagram_type: strategy
    for strategy in (
        FlowStrategy(),
        TreeStrategy(),
        TimelineStrategy(),
        MatrixStrategy(),
        CycleStrategy(),
        ComparisonStrategy(),
    )
}


def get_strategy(diagram_type: Union[DiagramType, str]) -> BaseLayoutStrategy:
    """Get the strategy instance for a diagram type."""
    for strategy in STRATEGIES.values():
        if strategy.supports(diagram_type):
            return strategy
    raise ValueError(
        f"Unknown diagram type: {diagram_type}. "
        f"Available: {[t.value for t in STRATEGIES]}"
    )
