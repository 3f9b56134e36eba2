from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from src.graph.models import Commit


@dataclass
class HistoryIndex:
    """Row-addressed view of a newest-first commit list.

    Everything is keyed by row number; ``row_of`` is the only hash-keyed map.
    Parents outside the visible set are dropped from ``parent_rows`` and
    ``child_rows`` but remain on the commits themselves.
    """
    commits: Sequence[Commit]
    row_of: Dict[str, int]
    parent_rows: List[List[int]]
    child_rows: List[List[int]]

    def __len__(self) -> int:
        return len(self.commits)

    def first_parent_row(self, row: int) -> Optional[int]:
        """Row of the first parent present in the visible set, if any."""
        parents = self.parent_rows[row]
        return parents[0] if parents else None


def build_history_index(commits: Sequence[Commit]) -> HistoryIndex:
    row_of: Dict[str, int] = {}
    for row, commit in enumerate(commits):
        # Duplicate hashes: last one wins
        row_of[commit.hash] = row

    parent_rows: List[List[int]] = []
    child_rows: List[List[int]] = [[] for _ in commits]

    # Rows are visited in ascending order, so every child list comes out
    # sorted nearest-to-head first.
    for row, commit in enumerate(commits):
        visible = [row_of[p] for p in commit.parents if p in row_of]
        parent_rows.append(visible)
        for parent_row in visible:
            child_rows[parent_row].append(row)

    return HistoryIndex(
        commits=commits,
        row_of=row_of,
        parent_rows=parent_rows,
        child_rows=child_rows,
    )
