import hashlib
import json
import logging
from typing import Dict, List, Optional, Tuple

from src.api.schemas import (
    EdgeResponse,
    FlowGroupResponse,
    GraphResponse,
    HistoryResponse,
    HistorySnapshot,
)
from src.flow.view import HistoryView, build_history_view
from src.graph.edges import edge_path
from src.graph.models import Branch, Commit

logger = logging.getLogger(__name__)


def snapshot_fingerprint(snapshot: HistorySnapshot) -> str:
    """Stable SHA-1 over the snapshot contents."""
    payload = json.dumps(snapshot.model_dump(), sort_keys=True, separators=(",", ":"))
    return hashlib.sha1(payload.encode()).hexdigest()


class GraphService:
    def __init__(self, default_label: Optional[str] = None):
        self.default_label = default_label
        # (fingerprint, view) pair, swapped as a single reference so
        # concurrent renders never see one without the other
        self._cache: Optional[Tuple[str, HistoryView]] = None

    def clear(self):
        """Drops the memoized view."""
        self._cache = None

    def render(self, snapshot: HistorySnapshot) -> HistoryView:
        """Runs the engine, reusing the last result for an identical snapshot.

        The returned view is shared with the cache and must be treated as
        read-only; the get_* methods only ever serialize it.
        """
        key = snapshot_fingerprint(snapshot)
        cached = self._cache
        if cached is not None and cached[0] == key:
            logger.debug("Reusing history view %s", key[:7])
            return cached[1]

        commits = [Commit(**c.model_dump()) for c in snapshot.commits]
        branches = [Branch(**b.model_dump()) for b in snapshot.branches]
        view = build_history_view(
            commits,
            branches,
            branch_filters=snapshot.branch_filters,
            default_label=self.default_label,
        )
        logger.info(
            "Laid out %d commits on %d lanes in %d flow groups",
            len(commits), view.layout.lane_count, len(view.groups),
        )

        self._cache = (key, view)
        return view

    def get_graph(self, snapshot: HistorySnapshot) -> GraphResponse:
        return self._to_graph_response(self.render(snapshot))

    def get_labels(self, snapshot: HistorySnapshot) -> Dict[str, str]:
        return self.render(snapshot).labels

    def get_flow(self, snapshot: HistorySnapshot) -> List[FlowGroupResponse]:
        return [FlowGroupResponse.model_validate(g) for g in self.render(snapshot).groups]

    def get_history(self, snapshot: HistorySnapshot) -> HistoryResponse:
        view = self.render(snapshot)
        return HistoryResponse(
            graph=self._to_graph_response(view),
            labels=view.labels,
            lane_by_hash=view.lane_by_hash,
            groups=[FlowGroupResponse.model_validate(g) for g in view.groups],
        )

    def _to_graph_response(self, view: HistoryView) -> GraphResponse:
        layout = view.layout
        edges = []
        for edge in layout.edges:
            # Geometry is only needed by the renderer, so it is built here
            edges.append(EdgeResponse(
                from_row=edge.from_row,
                to_row=edge.to_row,
                from_lane=edge.from_lane,
                to_lane=edge.to_lane,
                path=edge_path(edge, layout.lane_step).svg(),
            ))

        return GraphResponse(
            lane_by_row=layout.lane_by_row,
            edges=edges,
            lane_count=layout.lane_count,
            lane_step=layout.lane_step,
            width=layout.width,
            height=layout.height,
            mainline=sorted(layout.mainline),
        )
