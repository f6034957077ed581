"""
timeline_strategy.py — Chronological layout strategy.

Used for: Timeline, Roadmap, History
Pattern: Nodes evenly spaced left to right along a horizontal axis, in
input order (input order is chronological order).
"""

import math
from typing import Dict, List, Sequence

from .base_strategy import BaseLayoutStrategy
from ..positioned import PositionedNode
from ...dsl.schema import DiagramType, EdgeDatum, LayoutConfig


class TimelineStrategy(BaseLayoutStrategy):
    """
    Timeline layout strategy.

    Key features:
    - Uniform slots: node i is centred at canvas_width * (i + 1) / (n + 1)
    - All nodes on the vertical centre line when they fit in their slots
    - Crowded timelines spread over as many lanes as needed, centred on
      the axis, so nodes sharing a lane are far enough apart
    """

    diagram_type = DiagramType.TIMELINE

    def get_strategy_defaults(self) -> Dict[str, float]:
        return {
            'node_separation': 20,
            'rank_separation': 40,    # Gap between lanes
            'margin_x': 60,
        }

    def lane_count(self, nodes: Sequence[PositionedNode], config: LayoutConfig) -> int:
        """Number of lanes needed so same-lane neighbours don't collide."""
        count = len(nodes)
        if count < 2:
            return 1

        spacing = config.canvas_width / (count + 1)
        widest = max(n.width for n in nodes)
        lanes = math.ceil((widest + config.node_separation) / spacing)

        # Cap at what fits between the vertical margins
        pitch = max(n.height for n in nodes) + config.rank_separation
        max_lanes = math.floor((config.canvas_height - 2 * config.margin_y + config.rank_separation) / pitch)
        return max(1, min(lanes, max_lanes, count))

    def _place(
        self,
        nodes: List[PositionedNode],
        edges: Sequence[EdgeDatum],
        config: LayoutConfig,
    ) -> None:
        count = len(nodes)
        spacing = config.canvas_width / (count + 1)
        axis_y = config.canvas_height / 2

        lanes = self.lane_count(nodes, config)
        pitch = max(n.height for n in nodes) + config.rank_separation

        for index, node in enumerate(nodes):
            lane = index % lanes
            # Lane 0 is the lowest, so two lanes put even items below the axis
            offset = ((lanes - 1) / 2 - lane) * pitch
            node.move_center_to(spacing * (index + 1), axis_y + offset)
