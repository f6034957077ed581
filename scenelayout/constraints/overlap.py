"""Overlap resolution for positioned layouts.

Escalates through three phases until no two node boxes intersect:

1. Nudge: repeatedly push overlapping pairs apart along their centre axis
   (at most MAX_RESOLVE_ITERATIONS full scans).
2. Spiral: for pairs the nudge phase could not separate, search candidate
   positions on a growing spiral around one node.
3. Final pass: an independent single scan run right before rendering that
   force-separates anything still overlapping.

The resolver never raises for geometric difficulty. Whatever cannot be
separated is reported through ResolutionStats.residual_overlaps.
"""

import hashlib
import logging
import math
from dataclasses import dataclass
from typing import Union

from scenelayout.constraints.spacing import min_separation, required_distance
from scenelayout.dsl.schema import DiagramType, LayoutConfig
from scenelayout.engine.positioned import DiagramLayout, PositionedNode
from scenelayout.engine.units import (
    MAX_RESOLVE_ITERATIONS,
    SPIRAL_ATTEMPTS,
    SPIRAL_BASE_RADIUS,
    spiral_offset,
)

logger = logging.getLogger(__name__)


def find_overlaps(nodes: list[PositionedNode]) -> list[tuple[int, int]]:
    """Return index pairs (i < j) of all overlapping nodes."""
    pairs = []
    for i, first in enumerate(nodes):
        for j in range(i + 1, len(nodes)):
            if first.overlaps(nodes[j]):
                pairs.append((i, j))
    return pairs


def count_overlaps(nodes: list[PositionedNode]) -> int:
    """Number of overlapping node pairs."""
    return len(find_overlaps(nodes))


def tie_break_angle(id1: str, id2: str) -> float:
    """Deterministic angle in [0, 2*pi) derived from two node ids.

    The ids are sorted first so the angle does not depend on pair order.
    """
    first, second = sorted((id1, id2))
    digest = hashlib.md5(f"{first}\x00{second}".encode("utf-8")).hexdigest()
    return int(digest[:8], 16) / 0x100000000 * 2 * math.pi


@dataclass
class ResolutionStats:
    """What the resolver had to do for one layout."""

    iterations: int = 0
    converged: bool = True
    pairs_resolved: int = 0
    spiral_searches: int = 0
    spiral_failures: int = 0
    residual_overlaps: int = 0

    @property
    def spiral_fallback_used(self) -> bool:
        return self.spiral_searches > 0


class OverlapResolver:
    """Moves nodes of a DiagramLayout until their boxes no longer intersect.

    The layout passed in is owned by the resolver for the duration of a call
    and mutated in place; only x and y of nodes change.
    """

    def __init__(self, config: LayoutConfig) -> None:
        """Initialize the resolver.

        Args:
            config: Layout configuration; the canvas size bounds all moves.
        """
        self.config = config
        self.stats = ResolutionStats()

    async def ensure_zero_overlaps(
        self,
        layout: DiagramLayout,
        diagram_type: Union[DiagramType, str],
    ) -> DiagramLayout:
        """Nudge overlapping nodes apart, falling back to spiral placement.

        Args:
            layout: Candidate layout from a strategy.
            diagram_type: Selects the separation and the tie-break policy.

        Returns:
            The same layout, with adjusted positions.
        """
        self.stats = ResolutionStats()
        nodes = layout.nodes

        for node in nodes:
            self.constrain_to_bounds(node)

        overlaps = find_overlaps(nodes)
        iteration = 0
        while overlaps and iteration < MAX_RESOLVE_ITERATIONS:
            iteration += 1
            logger.debug(f"Iteration {iteration}: resolving {len(overlaps)} overlaps")
            for i, j in overlaps:
                # Earlier moves in this pass may already have separated the pair
                if nodes[i].overlaps(nodes[j]):
                    self._resolve_pair(nodes[i], nodes[j], diagram_type)
                    self.stats.pairs_resolved += 1
            overlaps = find_overlaps(nodes)

        self.stats.iterations = iteration
        self.stats.converged = not overlaps

        if overlaps:
            logger.warning(
                f"{len(overlaps)} overlaps remain after {iteration} iterations, forcing separation"
            )
            for i, j in overlaps:
                if nodes[i].overlaps(nodes[j]):
                    self._force_separation(nodes, i, j)

        self.stats.residual_overlaps = count_overlaps(nodes)
        if self.stats.residual_overlaps:
            logger.warning(f"{self.stats.residual_overlaps} overlaps could not be resolved")
        else:
            logger.debug(f"Zero overlaps after {iteration} iterations")

        return layout

    async def final_overlap_resolution(self, layout: DiagramLayout) -> DiagramLayout:
        """Single verification pass run directly before rendering.

        Any overlap still present is force-separated with the spiral search
        at the fixed minimum distance. Leaves overlap-free layouts untouched.
        """
        nodes = layout.nodes

        for node in nodes:
            self.constrain_to_bounds(node)

        for i in range(len(nodes)):
            for j in range(i + 1, len(nodes)):
                if nodes[i].overlaps(nodes[j]):
                    logger.debug(f"Final pass separating {nodes[i].id} and {nodes[j].id}")
                    self._force_separation(nodes, i, j, SPIRAL_BASE_RADIUS)

        self.stats.residual_overlaps = count_overlaps(nodes)
        if self.stats.residual_overlaps:
            logger.warning(
                f"Final pass left {self.stats.residual_overlaps} overlapping pairs"
            )
        return layout

    def constrain_to_bounds(self, node: PositionedNode) -> None:
        """Clip a node so its box stays inside the canvas."""
        if not math.isfinite(node.x):
            node.x = 0.0
        if not math.isfinite(node.y):
            node.y = 0.0
        node.x = max(0.0, min(node.x, self.config.canvas_width - node.width))
        node.y = max(0.0, min(node.y, self.config.canvas_height - node.height))

    def _resolve_pair(
        self,
        first: PositionedNode,
        second: PositionedNode,
        diagram_type: Union[DiagramType, str],
    ) -> None:
        """Push one overlapping pair apart symmetrically."""
        dx = second.center_x - first.center_x
        dy = second.center_y - first.center_y
        distance = math.hypot(dx, dy)
        separation = min_separation(diagram_type)
        required = required_distance(diagram_type, first.width, second.width)

        if distance == 0:
            self._separate_coincident(first, second, diagram_type, separation, required)
        else:
            deficit = required - distance
            if deficit <= 0:
                # Tall boxes can still touch after the width-based target is met
                deficit = separation
            shift = deficit / 2
            ux, uy = dx / distance, dy / distance
            first.x -= ux * shift
            first.y -= uy * shift
            second.x += ux * shift
            second.y += uy * shift

        self.constrain_to_bounds(first)
        self.constrain_to_bounds(second)

    def _separate_coincident(
        self,
        first: PositionedNode,
        second: PositionedNode,
        diagram_type: Union[DiagramType, str],
        separation: float,
        required: float,
    ) -> None:
        """Split two nodes whose centres coincide exactly."""
        try:
            kind = DiagramType(diagram_type)
        except ValueError:
            kind = None

        if kind == DiagramType.FLOW:
            shift = ((first.height + second.height) / 2 + separation) / 2
            first.y -= shift
            second.y += shift
        elif kind == DiagramType.TIMELINE:
            shift = required / 2
            first.x -= shift
            second.x += shift
        elif kind == DiagramType.TREE:
            shift_x = required / 2
            shift_y = ((first.height + second.height) / 2 + separation) / 2
            first.x -= shift_x
            first.y -= shift_y
            second.x += shift_x
            second.y += shift_y
        else:
            angle = tie_break_angle(first.id, second.id)
            shift = required / 2
            first.x -= math.cos(angle) * shift
            first.y -= math.sin(angle) * shift
            second.x += math.cos(angle) * shift
            second.y += math.sin(angle) * shift

    def _force_separation(
        self,
        nodes: list[PositionedNode],
        anchor_index: int,
        mover_index: int,
        min_distance: float = SPIRAL_BASE_RADIUS,
    ) -> bool:
        """Spiral search for a free spot for nodes[mover_index].

        Candidates circle nodes[anchor_index] at a growing radius. The first
        candidate clear of every other node is kept; if none is, the node
        stays at the last attempted position.

        Returns:
            True if a free position was found.
        """
        anchor = nodes[anchor_index]
        mover = nodes[mover_index]
        self.stats.spiral_searches += 1

        for attempt in range(SPIRAL_ATTEMPTS):
            offset_x, offset_y = spiral_offset(attempt, min_distance)
            mover.move_center_to(anchor.center_x + offset_x, anchor.center_y + offset_y)
            self.constrain_to_bounds(mover)
            if not any(
                k != mover_index and mover.overlaps(other)
                for k, other in enumerate(nodes)
            ):
                return True

        self.stats.spiral_failures += 1
        logger.warning(
            f"No free position found for {mover.id} near {anchor.id} "
            f"after {SPIRAL_ATTEMPTS} attempts"
        )
        return False
