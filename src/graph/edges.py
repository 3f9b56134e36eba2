import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from src.graph.constants import LANE_PADDING, LANE_WIDTH, NODE_RADIUS, ROW_HEIGHT
from src.graph.index import HistoryIndex, build_history_index
from src.graph.models import Commit, GraphEdge

logger = logging.getLogger(__name__)

Point = Tuple[float, float]


def build_edges(
    commits: Sequence[Commit],
    lane_by_row: Sequence[int],
    index: Optional[HistoryIndex] = None,
) -> List[GraphEdge]:
    """Creates one edge per (commit, visible parent) pair, child row first."""
    if index is None:
        index = build_history_index(commits)

    edges: List[GraphEdge] = []
    for row, commit in enumerate(commits):
        for parent in commit.parents:
            parent_row = index.row_of.get(parent)
            if parent_row is None:
                continue
            if parent_row <= row:
                logger.debug("Skipping edge %s -> %s: parent is not below its child", commit.hash, parent)
                continue
            edges.append(GraphEdge(
                from_row=row,
                to_row=parent_row,
                from_lane=lane_by_row[row],
                to_lane=lane_by_row[parent_row],
            ))
    return edges


def node_x(lane: int, lane_step: float) -> float:
    return LANE_PADDING + lane * lane_step + LANE_WIDTH / 2


def node_y(row: int) -> float:
    return row * ROW_HEIGHT + ROW_HEIGHT / 2


@dataclass(frozen=True)
class EdgePath:
    start: Point
    end: Point
    control1: Optional[Point] = None
    control2: Optional[Point] = None

    @property
    def is_straight(self) -> bool:
        return self.control1 is None

    def svg(self) -> str:
        """SVG path data for this edge."""
        def fmt(point: Point) -> str:
            return " ".join(f"{value:.2f}".rstrip("0").rstrip(".") for value in point)

        if self.is_straight:
            return f"M {fmt(self.start)} L {fmt(self.end)}"
        return f"M {fmt(self.start)} C {fmt(self.control1)} {fmt(self.control2)} {fmt(self.end)}"


def edge_path(edge: GraphEdge, lane_step: float) -> EdgePath:
    """Builds the connector from a child node down to its parent node.

    The graph grows downwards: the child is at the top (smaller y), the parent
    below it. Both ends are pulled in by the node radius so the line never
    crosses the node markers.
    """
    x1, x2 = node_x(edge.from_lane, lane_step), node_x(edge.to_lane, lane_step)
    start = (x1, node_y(edge.from_row) + NODE_RADIUS)
    end = (x2, node_y(edge.to_row) - NODE_RADIUS)

    dx = abs(x2 - x1)
    dy = end[1] - start[1]
    if edge.from_lane == edge.to_lane or dy <= NODE_RADIUS * 2:
        return EdgePath(start=start, end=end)

    # Wider jumps bend harder, within a quarter to a half of the drop
    bend = min(0.5, max(0.25, dx / (dx + dy)))
    return EdgePath(
        start=start,
        end=end,
        control1=(x1, start[1] + dy * bend),
        control2=(x2, end[1] - dy * bend),
    )
