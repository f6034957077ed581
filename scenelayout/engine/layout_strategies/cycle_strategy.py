"""
cycle_strategy.py — Circular layout strategy.

Used for: Cycle, Loop, Recurring Process
Pattern: Nodes placed on a circle around the canvas centre, starting at the
top and continuing clockwise in input order.
"""

import math
from typing import Dict, List, Sequence

from .base_strategy import BaseLayoutStrategy
from ..positioned import PositionedNode
from ..units import CYCLE_START_ANGLE_DEG
from ...dsl.schema import DiagramType, EdgeDatum, LayoutConfig


class CycleStrategy(BaseLayoutStrategy):
    """
    Radial layout strategy for circular arrangements.

    Key features:
    - Radius grows with node count so neighbours clear each other
    - Radius is capped to keep the ring inside the canvas margins
    - A single node sits at the centre
    """

    diagram_type = DiagramType.CYCLE

    # Smallest ring, as a fraction of the available half-extent
    radius_ratio = 0.35

    def get_strategy_defaults(self) -> Dict[str, float]:
        return {
            'node_separation': 35,
            'margin_x': 60,
            'margin_y': 60,
        }

    def compute_radius(self, nodes: Sequence[PositionedNode], config: LayoutConfig) -> float:
        """Radius of the ring for the given nodes."""
        count = len(nodes)
        if count < 2:
            return 0.0

        widest = max(n.width for n in nodes)
        tallest = max(n.height for n in nodes)

        # Chord between neighbours must fit a node plus separation
        needed = (widest + config.node_separation) / (2 * math.sin(math.pi / count))

        max_radius = max(0.0, min(
            (config.canvas_width - 2 * config.margin_x - widest) / 2,
            (config.canvas_height - 2 * config.margin_y - tallest) / 2,
        ))
        min_radius = max_radius * self.radius_ratio

        return min(max(needed, min_radius), max_radius)

    def _place(
        self,
        nodes: List[PositionedNode],
        edges: Sequence[EdgeDatum],
        config: LayoutConfig,
    ) -> None:
        center_x = config.canvas_width / 2
        center_y = config.canvas_height / 2
        radius = self.compute_radius(nodes, config)

        angle_step = 360 / len(nodes)
        for i, node in enumerate(nodes):
            angle_rad = math.radians(CYCLE_START_ANGLE_DEG + i * angle_step)
            node.move_center_to(
                center_x + radius * math.cos(angle_rad),
                center_y + radius * math.sin(angle_rad),
            )
