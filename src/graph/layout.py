from typing import Dict, Sequence, Tuple

from src.graph.constants import LANE_PADDING, LANE_WIDTH, MAX_GRAPH_WIDTH, MIN_LANE_STEP, ROW_HEIGHT
from src.graph.edges import build_edges
from src.graph.index import build_history_index
from src.graph.lanes import assign_lanes
from src.graph.models import Commit, GraphLayout


def compute_geometry(lane_count: int, row_count: int) -> Tuple[int, int, int]:
    """Returns (lane_step, width, height).

    Lane spacing shrinks once the lanes no longer fit in MAX_GRAPH_WIDTH,
    but never below MIN_LANE_STEP.
    """
    if lane_count <= 1:
        lane_step = LANE_WIDTH
    else:
        available = MAX_GRAPH_WIDTH - LANE_PADDING * 2 - LANE_WIDTH
        lane_step = min(LANE_WIDTH, max(MIN_LANE_STEP, available // (lane_count - 1)))

    width = LANE_PADDING * 2 + (lane_count - 1) * lane_step + LANE_WIDTH
    height = row_count * ROW_HEIGHT
    return lane_step, width, height


def build_graph(commits: Sequence[Commit]) -> GraphLayout:
    """Lays out a newest-first commit list as lanes and edges."""
    index = build_history_index(commits)
    lanes = assign_lanes(commits, index)
    edges = build_edges(commits, lanes.lane_by_row, index)
    lane_step, width, height = compute_geometry(lanes.lane_count, len(commits))

    return GraphLayout(
        lane_by_row=lanes.lane_by_row,
        edges=edges,
        lane_count=lanes.lane_count,
        lane_step=lane_step,
        width=width,
        height=height,
        mainline=lanes.mainline,
    )


def build_lane_by_hash(commits: Sequence[Commit], layout: GraphLayout) -> Dict[str, int]:
    lane_by_hash: Dict[str, int] = {}
    for row, commit in enumerate(commits):
        lane_by_hash[commit.hash] = layout.lane_by_row[row] if row < len(layout.lane_by_row) else 0
    return lane_by_hash
