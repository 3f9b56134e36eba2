import logging
from dataclasses import dataclass
from typing import Callable, Dict, Sequence, Set

from src.graph.constants import BRANCH_WALK_SLACK, DEFAULT_BRANCH_LABEL
from src.graph.index import build_history_index
from src.graph.models import Branch, Commit

logger = logging.getLogger(__name__)

CURRENT_PRIORITY = 0
LOCAL_PRIORITY = 1
REMOTE_PRIORITY = 2


@dataclass
class LabelAssignment:
    label: str
    priority: int
    distance: int


def branch_priority(branch: Branch) -> int:
    """Lower wins: the checked-out branch, then local, then remote."""
    if branch.is_current:
        return CURRENT_PRIORITY
    if branch.is_remote:
        return REMOTE_PRIORITY
    return LOCAL_PRIORITY


def display_name(branch: Branch) -> str:
    """Branch name as shown in the flow view ('origin/feat/x' -> 'feat/x')."""
    if branch.is_remote and "/" in branch.name:
        return branch.name.split("/", 1)[1]
    return branch.name


def build_branch_label_map(commits: Sequence[Commit], branches: Sequence[Branch]) -> Dict[str, str]:
    """Labels every commit reachable from a branch tip by first-parent walk.

    Branches are walked in priority order. A commit keeps the label with the
    lowest priority, and among equal priorities the one whose tip is closest.
    Commits no branch reaches are absent from the result.
    """
    index = build_history_index(commits)
    max_distance = len(commits) + BRANCH_WALK_SLACK
    assignments: Dict[int, LabelAssignment] = {}

    for branch in sorted(branches, key=lambda b: (branch_priority(b), b.name)):
        tip_row = index.row_of.get(branch.target_hash) if branch.target_hash else None
        if tip_row is None:
            continue

        priority = branch_priority(branch)
        label = display_name(branch)
        seen: Set[int] = set()
        cursor = tip_row
        distance = 0

        while cursor is not None and distance <= max_distance:
            if cursor in seen:
                logger.debug("Branch walk for %s hit a cycle at row %d", branch.name, cursor)
                break
            seen.add(cursor)

            existing = assignments.get(cursor)
            if (
                existing is None
                or priority < existing.priority
                or (priority == existing.priority and distance < existing.distance)
            ):
                assignments[cursor] = LabelAssignment(label=label, priority=priority, distance=distance)

            cursor = index.first_parent_row(cursor)
            distance += 1

    return {commits[row].hash: assignments[row].label for row in sorted(assignments)}


def fallback_label(branch_filters: Sequence[str] = ()) -> str:
    """Label for unreached commits: the sole active filter, else 'detached'."""
    if len(branch_filters) == 1:
        return branch_filters[0]
    return DEFAULT_BRANCH_LABEL


def make_label_resolver(labels: Dict[str, str], default: str = DEFAULT_BRANCH_LABEL) -> Callable[[Commit], str]:
    def resolve(commit: Commit) -> str:
        return labels.get(commit.hash, default)
    return resolve
