"""
connector_router.py — Connector anchor points between positioned nodes.

Routes are straight lines described by their anchor points. Two anchor
modes are supported:
- CENTER: centre of the source box to centre of the target box
- FACING: anchors sit on the sides of the two boxes that face each other,
  vertically centred, so the connector always runs left to right

Usage:
    from scenelayout.engine.connector_router import EdgeRouter

    router = EdgeRouter()
    points = router.route(source_node, target_node)
"""

import logging
from enum import Enum
from typing import Dict, List, Sequence, Tuple

from ..dsl.schema import EdgeDatum
from .positioned import Point, PositionedNode, RoutedEdge

logger = logging.getLogger(__name__)


class AnchorMode(Enum):
    """Where connectors attach to node boxes."""
    CENTER = "center"
    FACING = "facing"


# =============================================================================
# ANCHOR POINT CALCULATION
# =============================================================================

def center_anchor(node: PositionedNode) -> Point:
    return node.center


def facing_anchors(
    source: PositionedNode,
    target: PositionedNode,
) -> Tuple[Point, Point]:
    """
    Anchors on the facing sides of two boxes.

    The node further left anchors on its right edge, the other on its left
    edge. When both centres share the same x the source counts as the left
    node.

    Returns:
        (source anchor, target anchor)
    """
    if source.center_x <= target.center_x:
        left, right = source, target
    else:
        left, right = target, source

    left_anchor = Point(left.right, left.center_y)
    right_anchor = Point(right.x, right.center_y)

    if left is source:
        return left_anchor, right_anchor
    return right_anchor, left_anchor


# =============================================================================
# ROUTER
# =============================================================================

class EdgeRouter:
    """
    Computes connector geometry for edges of a positioned layout.

    Stateless apart from the anchor mode, so one instance can be shared.
    """

    def __init__(self, anchor_mode: AnchorMode = AnchorMode.CENTER):
        self.anchor_mode = anchor_mode

    def route(self, source: PositionedNode, target: PositionedNode) -> List[Point]:
        """Ordered points from the source anchor to the target anchor."""
        if self.anchor_mode == AnchorMode.FACING:
            start, end = facing_anchors(source, target)
            return [start, end]
        return [center_anchor(source), center_anchor(target)]

    def route_edge(
        self,
        edge: EdgeDatum,
        nodes_by_id: Dict[str, PositionedNode],
    ) -> RoutedEdge:
        """
        Route a single edge.

        A missing endpoint is not an error: the edge comes back with no
        points and renderers skip it.
        """
        source = nodes_by_id.get(edge.source)
        target = nodes_by_id.get(edge.target)

        if source is None or target is None:
            missing = edge.source if source is None else edge.target
            logger.warning(
                f"Edge {edge.source} -> {edge.target} references missing node '{missing}'; "
                f"leaving it unrouted"
            )
            return RoutedEdge(source=edge.source, target=edge.target, points=[], label=edge.label)

        return RoutedEdge(
            source=edge.source,
            target=edge.target,
            points=self.route(source, target),
            label=edge.label,
        )

    def route_all(
        self,
        edges: Sequence[EdgeDatum],
        nodes: Sequence[PositionedNode],
    ) -> List[RoutedEdge]:
        """Route every edge against the given nodes, preserving edge order."""
        nodes_by_id = {}
        for node in nodes:
            # First occurrence wins, matching duplicate handling elsewhere
            nodes_by_id.setdefault(node.id, node)
        return [self.route_edge(edge, nodes_by_id) for edge in edges]

    def reroute(self, routed: Sequence[RoutedEdge], nodes: Sequence[PositionedNode]) -> List[RoutedEdge]:
        """Recompute points for already routed edges after nodes moved."""
        edges = [EdgeDatum(source=e.source, target=e.target, label=e.label) for e in routed]
        return self.route_all(edges, nodes)
