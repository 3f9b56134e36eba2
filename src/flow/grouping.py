from typing import Callable, Dict, Iterable, List, Optional

from src.flow.classify import commit_type, relation_of
from src.flow.models import FlowGroup, FlowRelation
from src.graph.constants import FLOW_MAX_GROUP_SIZE, FLOW_WINDOW_SECONDS, MAINLINE_LANE
from src.graph.models import Commit, Timestamp


class FlowGroupBuilder:
    """Single forward scan that folds commits into flow groups.

    Holds at most one open group. A commit either extends the open group or
    closes it and opens a new one; nothing is ever revisited.
    """

    def __init__(self, window: float = FLOW_WINDOW_SECONDS, max_size: int = FLOW_MAX_GROUP_SIZE):
        self.window = window
        self.max_size = max_size
        self.groups: List[FlowGroup] = []
        self.open_group: Optional[FlowGroup] = None

    def can_append(self, branch_label: str, type_label: str, date: Timestamp) -> bool:
        group = self.open_group
        return (
            group is not None
            and group.branch_label == branch_label
            and group.type_label == type_label
            and len(group.commits) < self.max_size
            and abs(group.ended_at - date) <= self.window
        )

    def add(self, commit: Commit, branch_label: str, lane: int = MAINLINE_LANE):
        type_label = commit_type(commit.message)
        if self.can_append(branch_label, type_label, commit.date):
            self._append(commit)
        else:
            self._start(commit, branch_label, type_label, lane)

    def finish(self) -> List[FlowGroup]:
        if self.open_group is not None:
            self.groups.append(self.open_group)
            self.open_group = None
        return self.groups

    def _start(self, commit: Commit, branch_label: str, type_label: str, lane: int):
        if self.open_group is not None:
            self.groups.append(self.open_group)

        self.open_group = FlowGroup(
            id=commit.hash,
            lane=lane,
            branch_label=branch_label,
            type_label=type_label,
            started_at=commit.date,
            ended_at=commit.date,
            commits=[commit],
        )
        self._record_relation(commit)

    def _append(self, commit: Commit):
        group = self.open_group
        group.commits.append(commit)
        group.ended_at = commit.date
        # Newest-first input: this stays the date of the group's newest commit
        group.started_at = max(group.started_at, commit.date)
        self._record_relation(commit)

    def _record_relation(self, commit: Commit):
        relation = relation_of(commit.message)
        if relation is None:
            return

        kind, label = relation
        for existing in self.open_group.relations:
            if existing.kind == kind:
                existing.count += 1
                return
        self.open_group.relations.append(FlowRelation(kind=kind, label=label))


def build_flow_groups(
    commits: Iterable[Commit],
    lane_by_hash: Dict[str, int],
    resolve_branch_label: Callable[[Commit], str],
) -> List[FlowGroup]:
    """Partitions the commit stream into flow groups, preserving order."""
    builder = FlowGroupBuilder()
    for commit in commits:
        builder.add(
            commit,
            branch_label=resolve_branch_label(commit),
            lane=lane_by_hash.get(commit.hash, MAINLINE_LANE),
        )
    return builder.finish()
