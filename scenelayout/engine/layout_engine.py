"""
layout_engine.py — Layout orchestrator.

The LayoutEngine coordinates the entire layout generation process:
1. Receives the node/edge graph and a diagram type
2. Selects the strategy for that diagram type
3. Invokes the strategy to generate a candidate DiagramLayout
4. Resolves overlaps, re-routes edges and validates the result

This is the main entry point for layout generation.

NOTE: Uses lazy imports to avoid circular dependency with the constraints module.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional, Sequence, Union

from ..dsl.schema import DiagramType, EdgeDatum, LayoutConfig, NodeDatum
from .layout_strategies import get_strategy
from .positioned import DiagramLayout, LayoutBounds
from .units import FAST_LAYOUT_MS, SLOW_LAYOUT_MS

if TYPE_CHECKING:
    from ..constraints.engine import ConstraintResult

logger = logging.getLogger(__name__)


# =============================================================================
# LAYOUT RESULT
# =============================================================================

@dataclass
class LayoutResult:
    """Result of layout generation."""
    layout: DiagramLayout
    diagram_type: str
    success: bool
    warnings: List[str] = field(default_factory=list)
    error_message: Optional[str] = None
    residual_overlaps: int = 0
    iterations: int = 0
    spiral_fallback_used: bool = False
    bounds: LayoutBounds = field(default_factory=LayoutBounds)
    confidence: float = 0.0
    processing_time_ms: float = 0.0
    validation: Optional["ConstraintResult"] = None


def compute_confidence(layout: DiagramLayout, residual_overlaps: int, processing_time_ms: float) -> float:
    """
    Heuristic confidence in a finished layout, in [0, 1].

    Starts at 0.8; clean layouts and fast runs score higher, overlaps and
    slow runs lower.
    """
    confidence = 0.8

    if residual_overlaps == 0:
        confidence += 0.15
    else:
        confidence -= residual_overlaps * 0.1

    if processing_time_ms < FAST_LAYOUT_MS:
        confidence += 0.05
    elif processing_time_ms > SLOW_LAYOUT_MS:
        confidence -= 0.1

    if layout.nodes and layout.edges:
        confidence += 0.05

    return max(0.0, min(1.0, confidence))


# =============================================================================
# LAYOUT ENGINE
# =============================================================================

class LayoutEngine:
    """
    Main layout orchestrator.

    Every call runs: strategy -> overlap resolution -> final verification
    pass -> edge re-routing -> validation. Input validation always runs:

    - Strict (default): invalid input returns a failed LayoutResult with an
      empty layout
    - Permissive: problems are logged, duplicate ids are dropped (first
      wins) and dangling edges come back unrouted
    """

    def __init__(
        self,
        config: Optional[LayoutConfig] = None,
        strict_validation: bool = True,
    ):
        """
        Initialize the layout engine.

        Args:
            config: Base layout configuration (defaults if None)
            strict_validation: If True, invalid input fails the layout.
                               If False, the engine repairs what it can.
        """
        self.config = config or LayoutConfig()
        self.strict_validation = strict_validation

    @classmethod
    def from_settings(cls, settings=None) -> "LayoutEngine":
        """Create an engine configured from LAYOUT_* environment variables."""
        from ..config import get_settings

        settings = settings or get_settings()
        return cls(
            config=settings.layout_config(),
            strict_validation=settings.strict_validation,
        )

    async def generate_layout(
        self,
        nodes: Sequence[NodeDatum],
        edges: Sequence[EdgeDatum],
        diagram_type: Union[DiagramType, str],
    ) -> LayoutResult:
        """
        Generate a positioned, overlap-free layout.

        Args:
            nodes: Nodes in input order
            edges: Directed edges between nodes
            diagram_type: DiagramType or its string value

        Returns:
            LayoutResult with the generated layout

        Raises:
            ValueError: If the diagram type is unknown
        """
        from ..constraints.engine import LayoutValidator
        from ..constraints.overlap import OverlapResolver

        strategy = get_strategy(diagram_type)
        kind = strategy.diagram_type
        config = strategy.effective_config(self.config)
        start = time.perf_counter()

        logger.info(f"Generating {kind.value} layout for {len(nodes)} nodes, {len(edges)} edges")

        warnings: List[str] = []
        if not strategy.validate_inputs(nodes, edges):
            errors = strategy.describe_input_errors(nodes, edges)
            if self.strict_validation or not nodes:
                return LayoutResult(
                    layout=DiagramLayout(),
                    diagram_type=kind.value,
                    success=False,
                    warnings=errors,
                    error_message="; ".join(errors),
                    processing_time_ms=(time.perf_counter() - start) * 1000,
                )
            warnings.extend(errors)
            nodes = self._dedupe_nodes(nodes)

        try:
            layout = await strategy.generate_layout(nodes, edges, config)

            resolver = OverlapResolver(config)
            await resolver.ensure_zero_overlaps(layout, kind)
            await resolver.final_overlap_resolution(layout)
            stats = resolver.stats

            layout.edges = strategy.router.reroute(layout.edges, layout.nodes)

            validation = LayoutValidator(config).validate(layout)
        except Exception as e:
            logger.error(f"Layout generation failed for {kind.value}: {e}", exc_info=True)
            return LayoutResult(
                layout=DiagramLayout(),
                diagram_type=kind.value,
                success=False,
                warnings=warnings,
                error_message=str(e),
                processing_time_ms=(time.perf_counter() - start) * 1000,
            )

        processing_time_ms = (time.perf_counter() - start) * 1000
        if processing_time_ms > SLOW_LAYOUT_MS:
            logger.warning(f"Slow {kind.value} layout: {processing_time_ms:.0f}ms")

        if stats.residual_overlaps:
            warnings.append(f"{stats.residual_overlaps} overlapping node pairs remain")
        warnings.extend(
            v.message for v in validation.violations
            if v.rule not in ("overlap", "duplicate_id")
        )

        logger.info(
            f"Layout complete: {kind.value}, {stats.iterations} iterations, "
            f"{stats.residual_overlaps} residual overlaps, {processing_time_ms:.1f}ms"
        )

        return LayoutResult(
            layout=layout,
            diagram_type=kind.value,
            success=True,
            warnings=warnings,
            residual_overlaps=stats.residual_overlaps,
            iterations=stats.iterations,
            spiral_fallback_used=stats.spiral_fallback_used,
            bounds=layout.bounds(),
            confidence=compute_confidence(layout, stats.residual_overlaps, processing_time_ms),
            processing_time_ms=processing_time_ms,
            validation=validation,
        )

    def _dedupe_nodes(self, nodes: Sequence[NodeDatum]) -> List[NodeDatum]:
        """Drop repeated node ids, keeping the first occurrence."""
        seen = set()
        unique = []
        for node in nodes:
            if node.id in seen:
                logger.warning(f"Dropping duplicate node '{node.id}'")
                continue
            seen.add(node.id)
            unique.append(node)
        return unique


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

async def create_layout(
    nodes: Sequence[dict],
    edges: Sequence[dict],
    diagram_type: Union[DiagramType, str],
    config: Optional[LayoutConfig] = None,
    strict_validation: bool = True,
) -> LayoutResult:
    """
    Convenience function to create a layout from simple dicts.

    Args:
        nodes: List of node dicts with id and optional label
        edges: List of edge dicts with source, target and optional label
        diagram_type: Diagram type ID string (e.g., "flow", "tree")
        config: Optional layout configuration
        strict_validation: Fail on invalid input instead of repairing it

    Returns:
        LayoutResult with generated layout
    """
    node_data = [NodeDatum(id=n["id"], label=n.get("label", "")) for n in nodes]
    edge_data = [
        EdgeDatum(source=e["source"], target=e["target"], label=e.get("label"))
        for e in edges
    ]

    engine = LayoutEngine(config=config, strict_validation=strict_validation)
    return await engine.generate_layout(node_data, edge_data, diagram_type)
