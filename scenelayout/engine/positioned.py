"""
positioned.py — The contract between layout engine and renderers.

The layout engine outputs DiagramLayout objects.
Renderers consume these — they NEVER compute positions themselves.

All coordinates are canvas pixels with the origin at the top-left corner.
A DiagramLayout is mutated in place only while the overlap resolver owns it;
once handed to a renderer it is treated as read-only.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class Point:
    """A 2D point on the canvas."""
    x: float
    y: float


@dataclass
class PositionedNode:
    """
    A node with assigned geometry.

    (x, y) is the top-left corner of the bounding box
    [x, x + width] x [y, y + height].
    """
    id: str                                # Unique identifier
    label: str                             # Label text
    x: float                               # Left edge position
    y: float                               # Top edge position
    width: float                           # Box width (> 0)
    height: float                          # Box height (> 0)

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    @property
    def center_y(self) -> float:
        return self.y + self.height / 2

    @property
    def center(self) -> Point:
        return Point(self.center_x, self.center_y)

    def move_center_to(self, cx: float, cy: float) -> None:
        """Place the node so its box is centred on (cx, cy)."""
        self.x = cx - self.width / 2
        self.y = cy - self.height / 2

    def overlaps(self, other: "PositionedNode") -> bool:
        """Two boxes overlap iff they overlap on both axes. Touching is allowed."""
        return (
            self.x < other.right
            and self.right > other.x
            and self.y < other.bottom
            and self.bottom > other.y
        )


@dataclass
class RoutedEdge:
    """
    An edge plus the anchor points used to draw its connector.

    An empty point list means one of the endpoints could not be resolved;
    renderers must not draw such edges.
    """
    source: str
    target: str
    points: List[Point] = field(default_factory=list)
    label: Optional[str] = None

    @property
    def is_routable(self) -> bool:
        return len(self.points) >= 2


@dataclass
class LayoutBounds:
    """Extent of all node boxes in a layout."""
    min_x: float = 0.0
    min_y: float = 0.0
    max_x: float = 0.0
    max_y: float = 0.0

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y


@dataclass
class DiagramLayout:
    """
    Positioned nodes and routed edges for one scene.

    This is the complete output of the layout engine.
    """
    nodes: List[PositionedNode] = field(default_factory=list)
    edges: List[RoutedEdge] = field(default_factory=list)

    def bounds(self) -> LayoutBounds:
        """Compute the bounding extent of all nodes."""
        if not self.nodes:
            return LayoutBounds()
        return LayoutBounds(
            min_x=min(n.x for n in self.nodes),
            min_y=min(n.y for n in self.nodes),
            max_x=max(n.right for n in self.nodes),
            max_y=max(n.bottom for n in self.nodes),
        )

    def validate(self) -> List[str]:
        """
        Validate layout structure.

        Returns list of warnings (empty if valid).
        """
        warnings = []

        seen = set()
        for node in self.nodes:
            if node.id in seen:
                warnings.append(f"Duplicate node ID: {node.id}")
            seen.add(node.id)

            if node.width <= 0 or node.height <= 0:
                warnings.append(f"Node {node.id} has non-positive size")
            if not all(math.isfinite(v) for v in (node.x, node.y, node.width, node.height)):
                warnings.append(f"Node {node.id} has non-finite geometry")

        for edge in self.edges:
            if edge.source not in seen or edge.target not in seen:
                if edge.points:
                    warnings.append(
                        f"Edge {edge.source}->{edge.target} has points but references a missing node"
                    )
            elif not edge.is_routable:
                warnings.append(f"Edge {edge.source}->{edge.target} was not routed")

        return warnings

    def to_dict(self) -> Dict[str, Any]:
        """Plain-data view for renderers and serialization."""
        return {
            "nodes": [
                {
                    "id": n.id,
                    "label": n.label,
                    "x": n.x,
                    "y": n.y,
                    "width": n.width,
                    "height": n.height,
                }
                for n in self.nodes
            ],
            "edges": [
                {
                    "source": e.source,
                    "target": e.target,
                    "label": e.label,
                    "points": [{"x": p.x, "y": p.y} for p in e.points],
                }
                for e in self.edges
            ],
        }
