"""
matrix_strategy.py — Grid-based layout strategy.

Used for: Matrix, Quadrant, Card Grid
Pattern: Nodes arranged in rows and columns, row-major in input order.
"""

import math
from typing import Dict, List, Sequence, Tuple

from .base_strategy import BaseLayoutStrategy
from ..positioned import PositionedNode
from ...dsl.schema import DiagramType, EdgeDatum, LayoutConfig


class MatrixStrategy(BaseLayoutStrategy):
    """
    Grid layout strategy for row/column arrangements.

    Key features:
    - Column count scored over every candidate grid
    - Cells always wide and tall enough for the largest node plus separation
    - Equal cells covering the margin-inset canvas
    - Each node centred in its cell
    """

    diagram_type = DiagramType.MATRIX

    def get_strategy_defaults(self) -> Dict[str, float]:
        return {
            'node_separation': 25,
            'margin_x': 60,
            'margin_y': 60,
        }

    def _content_area(self, config: LayoutConfig) -> Tuple[float, float, float, float]:
        """(left, top, width, height) of the area the cells cover."""
        # Margins only apply while they leave room for the cells
        left = min(config.margin_x, config.canvas_width / 4)
        top = min(config.margin_y, config.canvas_height / 4)
        return left, top, config.canvas_width - 2 * left, config.canvas_height - 2 * top

    def grid_shape(self, nodes: Sequence[PositionedNode], config: LayoutConfig) -> Tuple[int, int]:
        """
        Return (columns, rows) for the given nodes.

        Candidates whose cells cannot hold the widest/tallest node plus
        node_separation are skipped. The rest are scored on how close the
        cell shape is to the node shape, on empty cells, and on preferring
        landscape grids.
        """
        count = len(nodes)
        _, _, width, height = self._content_area(config)
        min_cell_width = max(n.width for n in nodes) + config.node_separation
        min_cell_height = max(n.height for n in nodes) + config.node_separation
        aspect_ratio = min_cell_width / min_cell_height

        best_score = float('inf')
        best_config = None

        for cols in range(1, count + 1):
            rows = math.ceil(count / cols)

            cell_width = width / cols
            cell_height = height / rows
            if cell_width < min_cell_width or cell_height < min_cell_height:
                continue

            # 1. How close cell aspect ratio is to the node shape
            ratio_diff = abs(cell_width / cell_height - aspect_ratio) / aspect_ratio

            # 2. How many empty cells
            empty_penalty = (cols * rows - count) * 0.2

            # 3. Prefer more columns than rows (landscape canvas)
            orientation_bonus = -0.1 if cols >= rows else 0

            score = ratio_diff + empty_penalty + orientation_bonus
            if score < best_score:
                best_score = score
                best_config = (cols, rows)

        if best_config is None:
            # Nothing fits: as many columns as the width allows, resolver does the rest
            cols = max(1, min(count, math.floor(width / min_cell_width)))
            best_config = (cols, math.ceil(count / cols))

        return best_config

    def _place(
        self,
        nodes: List[PositionedNode],
        edges: Sequence[EdgeDatum],
        config: LayoutConfig,
    ) -> None:
        columns, rows = self.grid_shape(nodes, config)
        left, top, width, height = self._content_area(config)
        cell_width = width / columns
        cell_height = height / rows

        for i, node in enumerate(nodes):
            row = i // columns
            col = i % columns
            node.move_center_to(
                left + col * cell_width + cell_width / 2,
                top + row * cell_height + cell_height / 2,
            )
