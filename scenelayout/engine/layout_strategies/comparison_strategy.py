"""
comparison_strategy.py — Two-column comparison layout strategy.

Used for: Pros/Cons, Before/After, A vs B
Pattern: First half of the nodes in a left column, the rest in a right
column; connectors run between the facing sides of the columns.
"""

import math
from typing import Dict, List, Sequence

from .base_strategy import BaseLayoutStrategy
from ..connector_router import AnchorMode
from ..positioned import PositionedNode
from ..units import COMPARISON_LEFT_CENTER, COMPARISON_RIGHT_CENTER
from ...dsl.schema import DiagramType, EdgeDatum, LayoutConfig


class ComparisonStrategy(BaseLayoutStrategy):
    """
    Side-by-side layout.

    Key features:
    - Left group is the first ceil(n/2) nodes in input order
    - Each group is a vertical column centred on the canvas height
    - Column centres at 25% and 75% of the canvas width
    """

    diagram_type = DiagramType.COMPARISON
    anchor_mode = AnchorMode.FACING

    def get_strategy_defaults(self) -> Dict[str, float]:
        return {
            'node_separation': 70,    # Vertical breathing room inside a column
            'margin_x': 80,
            'margin_y': 50,
        }

    def _place(
        self,
        nodes: List[PositionedNode],
        edges: Sequence[EdgeDatum],
        config: LayoutConfig,
    ) -> None:
        split = math.ceil(len(nodes) / 2)
        left_nodes = nodes[:split]
        right_nodes = nodes[split:]

        center_y = config.canvas_height / 2
        gap = config.node_separation

        self._stack_column(left_nodes, config.canvas_width * COMPARISON_LEFT_CENTER, center_y, gap)
        if right_nodes:
            self._stack_column(right_nodes, config.canvas_width * COMPARISON_RIGHT_CENTER, center_y, gap)
