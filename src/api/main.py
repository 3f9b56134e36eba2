from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from typing import Dict, List
import os

from src.api.service import GraphService
from src.api.schemas import FlowGroupResponse, GraphResponse, HistoryResponse, HistorySnapshot

import logging

# Configure Logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Commit Flow Graph API")

# Allow CORS
# In production, set ALLOWED_ORIGINS to a comma-separated list of domains
allowed_origins_env = os.getenv("ALLOWED_ORIGINS", "*")
allowed_origins = [origin.strip() for origin in allowed_origins_env.split(",")]

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Label for commits no branch reaches, unless a single branch filter is active.
service = GraphService(default_label=os.getenv("FLOW_FALLBACK_LABEL", "detached"))

@app.post("/api/graph", response_model=GraphResponse)
def get_graph(snapshot: HistorySnapshot):
    """Lane layout, edges and edge paths for a newest-first commit list."""
    return service.get_graph(snapshot)

@app.post("/api/labels", response_model=Dict[str, str])
def get_labels(snapshot: HistorySnapshot):
    """Inferred branch label per reachable commit."""
    return service.get_labels(snapshot)

@app.post("/api/flow", response_model=List[FlowGroupResponse])
def get_flow(snapshot: HistorySnapshot):
    """Commits partitioned into collapsible flow groups."""
    return service.get_flow(snapshot)

@app.post("/api/history", response_model=HistoryResponse)
def get_history(snapshot: HistorySnapshot):
    return service.get_history(snapshot)

@app.get("/health")
def health_check():
    return {"status": "ok"}
