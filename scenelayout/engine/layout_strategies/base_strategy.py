"""
base_strategy.py — Abstract base class for layout strategies.

All layout strategies inherit from BaseLayoutStrategy and implement
_place() to generate node positions for their diagram type. The base class
owns everything the strategies share: input validation, configuration
defaults, node sizing and edge routing.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Sequence, Union

from ...constraints.spacing import min_separation
from ...dsl.schema import DiagramType, EdgeDatum, LayoutConfig, NodeDatum
from ..connector_router import AnchorMode, EdgeRouter
from ..positioned import DiagramLayout, PositionedNode
from ..text_measure import size_node

logger = logging.getLogger(__name__)


class BaseLayoutStrategy(ABC):
    """
    Abstract base class for layout computation strategies.

    Each strategy knows how to arrange nodes according to one diagram
    type's semantics. Strategies only produce a candidate placement; the
    overlap resolver guarantees the final result is collision free, but
    strategies should already keep nodes apart where they can.
    """

    diagram_type: DiagramType
    anchor_mode: AnchorMode = AnchorMode.CENTER

    def __init__(self):
        self.router = EdgeRouter(self.anchor_mode)

    @property
    def name(self) -> str:
        return self.diagram_type.value

    @property
    def min_separation(self) -> float:
        """Separation the overlap resolver uses for this diagram type."""
        return min_separation(self.diagram_type)

    def supports(self, diagram_type: Union[DiagramType, str]) -> bool:
        """True if this strategy handles exactly the given diagram type."""
        try:
            return DiagramType(diagram_type) == self.diagram_type
        except ValueError:
            return False

    # =========================================================================
    # CONFIGURATION
    # =========================================================================

    def get_strategy_defaults(self) -> Dict[str, float]:
        """Spacing values this strategy prefers over the global defaults."""
        return {}

    def effective_config(self, config: LayoutConfig) -> LayoutConfig:
        """
        Apply strategy defaults to every field the caller left unset.

        Values the caller set explicitly always win.
        """
        overrides = {
            key: value
            for key, value in self.get_strategy_defaults().items()
            if key not in config.model_fields_set
        }
        if not overrides:
            return config
        return config.with_overrides(**overrides)

    # =========================================================================
    # VALIDATION
    # =========================================================================

    def describe_input_errors(
        self,
        nodes: Sequence[NodeDatum],
        edges: Sequence[EdgeDatum],
    ) -> List[str]:
        """List every problem with the input graph (empty if valid)."""
        errors = []

        if not nodes:
            errors.append("No nodes to layout")
            return errors

        seen = set()
        duplicates = []
        for node in nodes:
            if node.id in seen and node.id not in duplicates:
                duplicates.append(node.id)
            seen.add(node.id)
        if duplicates:
            errors.append(f"Duplicate node IDs: {', '.join(duplicates)}")

        for edge in edges:
            if edge.source not in seen or edge.target not in seen:
                errors.append(f"Edge {edge.source} -> {edge.target} references an unknown node")

        return errors

    def validate_inputs(
        self,
        nodes: Sequence[NodeDatum],
        edges: Sequence[EdgeDatum],
    ) -> bool:
        """Reject empty node sets, duplicate ids and dangling edges."""
        errors = self.describe_input_errors(nodes, edges)
        for error in errors:
            logger.error(f"[{self.name}] {error}")
        return not errors

    # =========================================================================
    # LAYOUT
    # =========================================================================

    async def generate_layout(
        self,
        nodes: Sequence[NodeDatum],
        edges: Sequence[EdgeDatum],
        config: LayoutConfig,
    ) -> DiagramLayout:
        """
        Compute a candidate layout.

        Args:
            nodes: Nodes in input order
            edges: Directed edges between nodes
            config: Layout configuration (strategy defaults are applied here)

        Returns:
            DiagramLayout with nodes in input order and edges routed
        """
        config = self.effective_config(config)
        logger.debug(f"[{self.name}] Laying out {len(nodes)} nodes, {len(edges)} edges")

        positioned = [size_node(node, config) for node in nodes]
        if positioned:
            self._place(positioned, edges, config)

        return DiagramLayout(
            nodes=positioned,
            edges=self.router.route_all(edges, positioned),
        )

    @abstractmethod
    def _place(
        self,
        nodes: List[PositionedNode],
        edges: Sequence[EdgeDatum],
        config: LayoutConfig,
    ) -> None:
        """Assign x and y to every (already sized) node, in place."""
        pass

    # =========================================================================
    # HELPER METHODS (Available to all strategies)
    # =========================================================================

    def _known_edges(
        self,
        nodes: Sequence[PositionedNode],
        edges: Sequence[EdgeDatum],
    ) -> List[EdgeDatum]:
        """Edges whose endpoints both exist, without self loops."""
        ids = {node.id for node in nodes}
        return [
            edge for edge in edges
            if edge.source in ids and edge.target in ids and edge.source != edge.target
        ]

    def _stack_row(
        self,
        nodes: Sequence[PositionedNode],
        center_x: float,
        y: float,
        gap: float,
    ) -> float:
        """
        Place nodes left to right in one row centred on center_x.

        Returns the total row width.
        """
        total_width = sum(n.width for n in nodes) + gap * (len(nodes) - 1)
        x = center_x - total_width / 2
        for node in nodes:
            node.x = x
            node.y = y
            x += node.width + gap
        return total_width

    def _stack_column(
        self,
        nodes: Sequence[PositionedNode],
        center_x: float,
        center_y: float,
        gap: float,
    ) -> float:
        """
        Place nodes top to bottom in one column centred on (center_x, center_y).

        Returns the total column height.
        """
        total_height = sum(n.height for n in nodes) + gap * (len(nodes) - 1)
        y = center_y - total_height / 2
        for node in nodes:
            node.x = center_x - node.width / 2
            node.y = y
            y += node.height + gap
        return total_height
