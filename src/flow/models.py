from dataclasses import dataclass, field
from typing import List

from src.graph.models import Commit, Timestamp


@dataclass
class FlowRelation:
    kind: str
    label: str
    count: int = 1


@dataclass
class FlowGroup:
    id: str
    lane: int
    branch_label: str
    type_label: str
    started_at: Timestamp
    ended_at: Timestamp
    commits: List[Commit] = field(default_factory=list)
    relations: List[FlowRelation] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.commits)

    @property
    def authors(self) -> List[str]:
        """Distinct authors in first-seen order."""
        seen: List[str] = []
        for commit in self.commits:
            if commit.author not in seen:
                seen.append(commit.author)
        return seen
