"""Pydantic v2 models for the layout engine input graph.

This module defines the data that flows into the layout engine: the diagram
type chosen by the classifier, the unpositioned node/edge graph produced by
content analysis, and the sizing configuration. All measurements are in
pixels of the target video frame.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class DiagramType(str, Enum):
    """Supported diagram semantics."""

    FLOW = "flow"
    TREE = "tree"
    TIMELINE = "timeline"
    MATRIX = "matrix"
    CYCLE = "cycle"
    COMPARISON = "comparison"


# ============================================================================
# Graph Models
# ============================================================================


class NodeDatum(BaseModel):
    """A content item to visualize."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1, description="Identifier, unique within a graph")
    label: str = Field(default="", description="Label text rendered inside the node")


class EdgeDatum(BaseModel):
    """A directed relationship between two nodes."""

    model_config = ConfigDict(frozen=True)

    source: str = Field(description="Source node id")
    target: str = Field(description="Target node id")
    label: Optional[str] = Field(default=None, description="Optional connector label")


# ============================================================================
# Configuration
# ============================================================================


class LayoutConfig(BaseModel):
    """Sizing and spacing parameters for one layout run."""

    model_config = ConfigDict(frozen=True)

    canvas_width: float = Field(default=1920, gt=0, description="Canvas width")
    canvas_height: float = Field(default=1080, gt=0, description="Canvas height")
    node_width: float = Field(default=120, gt=0, description="Base node width")
    node_height: float = Field(default=60, gt=0, description="Base node height")
    char_width: float = Field(default=8, gt=0, description="Width of one label character")
    padding: float = Field(default=20, gt=0, description="Horizontal label padding")
    node_separation: float = Field(default=50, gt=0, description="Gap between sibling nodes")
    edge_separation: float = Field(default=10, gt=0, description="Gap between parallel edges")
    rank_separation: float = Field(default=50, gt=0, description="Gap between ranks/levels")
    margin_x: float = Field(default=50, gt=0, description="Horizontal canvas margin")
    margin_y: float = Field(default=50, gt=0, description="Vertical canvas margin")

    @model_validator(mode="after")
    def _canvas_fits_nodes(self) -> "LayoutConfig":
        # Labels can grow a node up to twice the base width.
        if self.canvas_width < self.node_width * 2:
            raise ValueError(
                f"canvas_width {self.canvas_width} cannot hold a node of width {self.node_width * 2}"
            )
        if self.canvas_height < self.node_height:
            raise ValueError(
                f"canvas_height {self.canvas_height} cannot hold a node of height {self.node_height}"
            )
        return self

    def with_overrides(self, **overrides: float) -> "LayoutConfig":
        """Return a validated copy with the given fields replaced.

        Fields explicitly set on this config stay marked as set, so callers
        can keep telling user choices apart from defaults.
        """
        data = {name: getattr(self, name) for name in self.model_fields_set}
        data.update(overrides)
        return LayoutConfig(**data)
