"""Routes: visualizer page, graph websocket and a JSON debug endpoint."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from fastapi import APIRouter, HTTPException, Request, WebSocket
from fastapi.responses import FileResponse
from pydantic import BaseModel

from goraph.errors import RootUnreachable
from goraph.pipeline import analyze_project

logger = logging.getLogger(__name__)

router = APIRouter()

INDEX_HTML = Path(__file__).parent / "static" / "index.html"


# --- Response models ---

class NodeOut(BaseModel):
    id: str
    label: str
    x: float = 0.0
    y: float = 0.0
    vx: float = 0.0
    vy: float = 0.0
    type: str
    depth: int

class EdgeOut(BaseModel):
    source: str
    target: str

class GraphOut(BaseModel):
    nodes: list[NodeOut]
    edges: list[EdgeOut]

class GraphResponse(BaseModel):
    graph: GraphOut
    summary: dict[str, int]


# --- Endpoints ---

@router.get("/", include_in_schema=False)
async def index():
    return FileResponse(INDEX_HTML, media_type="text/html")


@router.get("/api/graph", response_model=GraphResponse)
async def get_graph(request: Request):
    """Analyze the configured project and return the graph as JSON."""
    try:
        graph = await asyncio.to_thread(analyze_project, request.app.state.target_path)
    except RootUnreachable as e:
        raise HTTPException(404, str(e))
    return {"graph": graph.to_dict(), "summary": graph.summary()}


@router.websocket("/ws")
async def graph_ws(websocket: WebSocket):
    """Send one freshly built graph on connect, then idle until the client leaves."""
    await websocket.accept()
    target = websocket.app.state.target_path
    try:
        graph = await asyncio.to_thread(analyze_project, target)
    except RootUnreachable as e:
        logger.warning("Analysis failed: %s", e)
        await websocket.send_json({"error": str(e)})
        await websocket.close()
        return

    await websocket.send_json({"graph": graph.to_dict()})
    # Any frame type keeps the connection alive
    while True:
        message = await websocket.receive()
        if message["type"] == "websocket.disconnect":
            break
    logger.debug("Graph client disconnected")
