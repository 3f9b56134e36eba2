from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from src.flow.grouping import build_flow_groups
from src.flow.labels import build_branch_label_map, fallback_label, make_label_resolver
from src.flow.models import FlowGroup
from src.graph.layout import build_graph, build_lane_by_hash
from src.graph.models import Branch, Commit, GraphLayout


@dataclass
class HistoryView:
    layout: GraphLayout
    labels: Dict[str, str] = field(default_factory=dict)
    lane_by_hash: Dict[str, int] = field(default_factory=dict)
    groups: List[FlowGroup] = field(default_factory=list)


def build_history_view(
    commits: Sequence[Commit],
    branches: Sequence[Branch] = (),
    branch_filters: Sequence[str] = (),
    default_label: Optional[str] = None,
) -> HistoryView:
    """Runs layout, labelling and grouping over one snapshot."""
    layout = build_graph(commits)
    lane_by_hash = build_lane_by_hash(commits, layout)
    labels = build_branch_label_map(commits, branches)

    if len(branch_filters) == 1 or default_label is None:
        default_label = fallback_label(branch_filters)
    resolve = make_label_resolver(labels, default_label)

    return HistoryView(
        layout=layout,
        labels=labels,
        lane_by_hash=lane_by_hash,
        groups=build_flow_groups(commits, lane_by_hash, resolve),
    )
