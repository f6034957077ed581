"""Constraint validation for finished layouts."""

import math
from dataclasses import dataclass

from scenelayout.constraints.overlap import find_overlaps
from scenelayout.dsl.schema import LayoutConfig
from scenelayout.engine.positioned import DiagramLayout, PositionedNode


@dataclass
class Violation:
    """Represents a constraint violation."""

    rule: str
    message: str
    severity: str  # "error", "warning", "info"
    node_ids: list[str]
    suggested_fix: dict | None = None


@dataclass
class ConstraintResult:
    """Result of constraint validation."""

    is_valid: bool
    violations: list[Violation]
    score: float  # 0-100 quality score

    def count(self, rule: str) -> int:
        """Number of violations of the given rule."""
        return len([v for v in self.violations if v.rule == rule])


class LayoutValidator:
    """Checks a positioned layout against the layout rules."""

    def __init__(self, config: LayoutConfig) -> None:
        """Initialize the validator.

        Args:
            config: Layout configuration providing the canvas size.
        """
        self.canvas_width = config.canvas_width
        self.canvas_height = config.canvas_height

    def validate(self, layout: DiagramLayout) -> ConstraintResult:
        """Validate a layout.

        Args:
            layout: The DiagramLayout to validate.

        Returns:
            ConstraintResult with violations and score.
        """
        violations: list[Violation] = []

        violations.extend(self._check_geometry(layout.nodes))
        violations.extend(self._check_duplicates(layout.nodes))
        violations.extend(self._check_bounds(layout.nodes))
        violations.extend(self._check_overlaps(layout.nodes))
        violations.extend(self._check_edges(layout))

        return ConstraintResult(
            is_valid=len([v for v in violations if v.severity == "error"]) == 0,
            violations=violations,
            score=self._calculate_score(violations),
        )

    def _check_geometry(self, nodes: list[PositionedNode]) -> list[Violation]:
        """Check sizes are positive and coordinates finite."""
        violations = []

        for node in nodes:
            values = (node.x, node.y, node.width, node.height)
            if not all(math.isfinite(v) for v in values) or node.width <= 0 or node.height <= 0:
                violations.append(
                    Violation(
                        rule="geometry",
                        message=f"Node {node.id} has invalid geometry {values}",
                        severity="error",
                        node_ids=[node.id],
                    )
                )

        return violations

    def _check_duplicates(self, nodes: list[PositionedNode]) -> list[Violation]:
        """Check node ids are unique."""
        violations = []
        seen: set[str] = set()

        for node in nodes:
            if node.id in seen:
                violations.append(
                    Violation(
                        rule="duplicate_id",
                        message=f"Node id {node.id} appears more than once",
                        severity="error",
                        node_ids=[node.id],
                    )
                )
            seen.add(node.id)

        return violations

    def _check_bounds(self, nodes: list[PositionedNode]) -> list[Violation]:
        """Check if nodes are within canvas bounds.

        Args:
            nodes: Nodes to check.

        Returns:
            List of violations.
        """
        violations = []

        for node in nodes:
            if node.x < 0:
                violations.append(
                    Violation(
                        rule="bounds",
                        message=f"Node {node.id} extends beyond left edge",
                        severity="error",
                        node_ids=[node.id],
                        suggested_fix={"x": 0},
                    )
                )

            if node.y < 0:
                violations.append(
                    Violation(
                        rule="bounds",
                        message=f"Node {node.id} extends beyond top edge",
                        severity="error",
                        node_ids=[node.id],
                        suggested_fix={"y": 0},
                    )
                )

            if node.right > self.canvas_width:
                violations.append(
                    Violation(
                        rule="bounds",
                        message=f"Node {node.id} extends beyond right edge",
                        severity="error",
                        node_ids=[node.id],
                        suggested_fix={"x": self.canvas_width - node.width},
                    )
                )

            if node.bottom > self.canvas_height:
                violations.append(
                    Violation(
                        rule="bounds",
                        message=f"Node {node.id} extends beyond bottom edge",
                        severity="error",
                        node_ids=[node.id],
                        suggested_fix={"y": self.canvas_height - node.height},
                    )
                )

        return violations

    def _check_overlaps(self, nodes: list[PositionedNode]) -> list[Violation]:
        """Report every overlapping pair."""
        return [
            Violation(
                rule="overlap",
                message=f"Nodes {nodes[i].id} and {nodes[j].id} overlap",
                severity="error",
                node_ids=[nodes[i].id, nodes[j].id],
            )
            for i, j in find_overlaps(nodes)
        ]

    def _check_edges(self, layout: DiagramLayout) -> list[Violation]:
        """Flag edges that could not be routed."""
        violations = []

        for edge in layout.edges:
            if not edge.is_routable:
                violations.append(
                    Violation(
                        rule="unroutable_edge",
                        message=f"Edge {edge.source} -> {edge.target} has no route",
                        severity="info",
                        node_ids=[edge.source, edge.target],
                    )
                )

        return violations

    def _calculate_score(self, violations: list[Violation]) -> float:
        """Calculate a quality score based on violations.

        Args:
            violations: List of violations.

        Returns:
            Score from 0-100.
        """
        score = 100.0

        for violation in violations:
            if violation.severity == "error":
                score -= 20
            elif violation.severity == "warning":
                score -= 10
            elif violation.severity == "info":
                score -= 2

        return max(0, score)
