import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Set

from src.graph.constants import MAINLINE_LANE
from src.graph.index import HistoryIndex, build_history_index
from src.graph.models import Commit

logger = logging.getLogger(__name__)


@dataclass
class LaneAssignment:
    lane_by_row: List[int]
    mainline: Set[str] = field(default_factory=set)
    lane_count: int = 1


def find_mainline(index: HistoryIndex) -> List[int]:
    """Follows first visible parents from the newest commit.

    Returns the visited rows in walk order. Stops at a root, at a commit
    whose parents are all external, or when a row repeats.
    """
    if not len(index):
        return []

    chain: List[int] = []
    seen: Set[int] = set()
    cursor: Optional[int] = 0
    while cursor is not None:
        if cursor in seen:
            logger.debug("Mainline walk hit a cycle at row %d", cursor)
            break
        seen.add(cursor)
        chain.append(cursor)
        cursor = index.first_parent_row(cursor)
    return chain


def pick_primary_children(index: HistoryIndex, mainline_rows: Set[int]) -> Dict[int, int]:
    """Maps each parent row to the child row that continues its lane."""
    primary: Dict[int, int] = {}
    for parent_row, children in enumerate(index.child_rows):
        if not children:
            continue

        parent_hash = index.commits[parent_row].hash
        on_mainline = next((c for c in children if c in mainline_rows), None)
        if on_mainline is not None:
            primary[parent_row] = on_mainline
            continue

        # The child for which this parent is the real git first parent,
        # rather than a merge source.
        first_parent_child = next(
            (c for c in children if index.commits[c].parents[:1] == [parent_hash]),
            None,
        )
        if first_parent_child is not None:
            primary[parent_row] = first_parent_child
            continue

        primary[parent_row] = children[0]
    return primary


def assign_lanes(commits: Sequence[Commit], index: Optional[HistoryIndex] = None) -> LaneAssignment:
    """Assigns one lane per row, oldest row first.

    Mainline rows sit on lane 0. Any other row keeps its first parent's lane
    when it is that parent's primary child and the parent is off the
    mainline; otherwise it opens a fresh lane. Lanes are never recycled.
    """
    if index is None:
        index = build_history_index(commits)

    mainline_rows = set(find_mainline(index))
    primary = pick_primary_children(index, mainline_rows)

    lane_by_row: List[int] = [MAINLINE_LANE] * len(commits)
    next_lane = MAINLINE_LANE + 1

    for row in range(len(commits) - 1, -1, -1):
        if row in mainline_rows:
            continue

        lane = None
        parent_row = index.first_parent_row(row)
        # A parent above its child (bad ordering) has no lane yet
        if parent_row is not None and parent_row > row:
            parent_lane = lane_by_row[parent_row]
            if primary.get(parent_row) == row and parent_lane != MAINLINE_LANE:
                lane = parent_lane

        if lane is None:
            lane = next_lane
            next_lane += 1
        lane_by_row[row] = lane

    return LaneAssignment(
        lane_by_row=lane_by_row,
        mainline={index.commits[row].hash for row in mainline_rows},
        lane_count=next_lane,
    )
