from dataclasses import dataclass, field
from typing import List, Optional, Set, Union

from src.graph.constants import MILLISECOND_THRESHOLD

Timestamp = Union[int, float]


def normalize_timestamp(value: Timestamp) -> Timestamp:
    """Returns the timestamp in seconds, converting millisecond values."""
    if abs(value) >= MILLISECOND_THRESHOLD:
        return value / 1000
    return value


@dataclass
class Commit:
    hash: str
    author: str
    message: str
    date: Timestamp
    parents: List[str] = field(default_factory=list)

    def __post_init__(self):
        # Everything downstream compares dates in seconds
        self.date = normalize_timestamp(self.date)

    @property
    def is_merge(self) -> bool:
        return len(self.parents) > 1

    @property
    def summary(self) -> str:
        return self.message.splitlines()[0] if self.message else ""


@dataclass
class Branch:
    name: str
    is_current: bool = False
    is_remote: bool = False
    target_hash: Optional[str] = None


@dataclass(frozen=True)
class GraphEdge:
    from_row: int
    to_row: int
    from_lane: int
    to_lane: int


@dataclass
class GraphLayout:
    lane_by_row: List[int]
    edges: List[GraphEdge]
    lane_count: int
    lane_step: int
    width: int
    height: int
    mainline: Set[str] = field(default_factory=set)
