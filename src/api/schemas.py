from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field

class CommitSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    hash: str = Field(min_length=1)
    author: str = ""
    message: str = ""
    date: float
    parents: List[str] = []

class BranchSchema(BaseModel):
    name: str = Field(min_length=1)
    is_current: bool = False
    is_remote: bool = False
    target_hash: Optional[str] = None

class HistorySnapshot(BaseModel):
    commits: List[CommitSchema]
    branches: List[BranchSchema] = []
    # Active branch filters in the UI; a single one becomes the fallback label
    branch_filters: List[str] = []

class EdgeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    from_row: int
    to_row: int
    from_lane: int
    to_lane: int
    path: str = ""

class GraphResponse(BaseModel):
    lane_by_row: List[int]
    edges: List[EdgeResponse]
    lane_count: int
    lane_step: int
    width: int
    height: int
    mainline: List[str]

class RelationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    kind: str
    label: str
    count: int

class FlowGroupResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    lane: int
    branch_label: str
    type_label: str
    started_at: float
    ended_at: float
    commits: List[CommitSchema]
    relations: List[RelationResponse]
    authors: List[str] = []

class HistoryResponse(BaseModel):
    graph: GraphResponse
    labels: Dict[str, str]
    lane_by_hash: Dict[str, int]
    groups: List[FlowGroupResponse]
