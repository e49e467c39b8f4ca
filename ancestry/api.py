"""
Shortest Ancestral Path API

HTTP surface over a single SAP engine. Query endpoints are plain functions so
FastAPI runs them in its threadpool; the engine is safe for concurrent use.
"""

from fastapi import FastAPI, HTTPException, Request, Query
from fastapi.middleware.cors import CORSMiddleware
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from typing import List, Optional
import logging
import threading

from ancestry import config
from ancestry.digraph import Digraph
from ancestry.models import SAPRequest, SAPResponse, Edge, GraphInfo, CacheStats
from ancestry.sap import SAP

# Configure structured logging
logging.basicConfig(
    level=config.LOG_LEVEL,
    format=config.LOG_FORMAT,
    handlers=[
        logging.StreamHandler()
    ]
)

logger = logging.getLogger(__name__)

# Initialize rate limiter
limiter = Limiter(key_func=get_remote_address)

app = FastAPI(title=config.API_TITLE, version=config.API_VERSION)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "DELETE"],
    allow_headers=["*"],
)

# Engine shared by all requests
_engine: Optional[SAP] = None
_engine_lock = threading.Lock()


def set_engine(engine: Optional[SAP]):
    """Install the engine used by every endpoint (None unloads it)"""
    global _engine
    with _engine_lock:
        _engine = engine


def get_engine() -> SAP:
    """
    Get the shared engine, loading config.GRAPH_FILE on first use

    Raises:
        HTTPException: 503 if no engine is installed and no graph file is configured
    """
    global _engine

    with _engine_lock:
        if _engine is None:
            if not config.GRAPH_FILE:
                raise HTTPException(status_code=503, detail="No graph loaded")
            logger.info(f"Loading graph from {config.GRAPH_FILE}")
            with open(config.GRAPH_FILE, "r") as stream:
                _engine = SAP(Digraph.read(stream))
        return _engine


def _path_edges(path: List[int], ancestor: int) -> List[Edge]:
    """Directed edges along an ancestral path, both halves pointing at the ancestor"""
    meeting = path.index(ancestor)
    edges = []
    for i in range(len(path) - 1):
        if i < meeting:
            edges.append(Edge(from_=path[i], to=path[i + 1]))
        else:
            edges.append(Edge(from_=path[i + 1], to=path[i]))
    return edges


def _resolve(engine: SAP, v, w, include_path: bool) -> SAPResponse:
    try:
        result = engine.query(v, w)
        path = engine.path(v, w) if include_path else None
    except (IndexError, ValueError) as e:
        logger.warning(f"Rejected query v={v} w={w}: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    response = SAPResponse(ancestor=result.ancestor, length=result.length, found=result.found)
    if path is not None:
        response.path = path
        response.edges = _path_edges(path, result.ancestor)
    return response


@app.get('/api/health')
def health():
    return {'status': 'ok'}


@app.get('/api/graph', response_model=GraphInfo)
def get_graph():
    """Size of the loaded graph"""
    engine = get_engine()
    return GraphInfo(vertices=engine.vertex_count, edges=engine.edge_count)


@app.get('/api/sap', response_model=SAPResponse)
@limiter.limit(config.RATE_LIMIT)
def get_sap(
    request: Request,
    v: int = Query(..., ge=0),
    w: int = Query(..., ge=0),
    include_path: bool = False
):
    """
    Shortest ancestral path between two vertices

    - **v**, **w**: vertex ids in 0..V-1
    - **include_path**: also return the vertices and edges of the path
    """
    return _resolve(get_engine(), v, w, include_path)


@app.post('/api/sap', response_model=SAPResponse)
@limiter.limit(config.RATE_LIMIT)
def post_sap(request: Request, sap_request: SAPRequest):
    """
    Shortest ancestral path between any vertex of v and any vertex of w
    """
    return _resolve(get_engine(), sap_request.v, sap_request.w, sap_request.include_path)


@app.get('/api/cache/stats', response_model=CacheStats)
def get_cache_stats():
    """
    Get query cache statistics

    Returns cache performance metrics including:
    - Cache size and capacity
    - Hit/miss rates
    - Total requests
    """
    return get_engine().cache_stats()


@app.delete('/api/cache')
def clear_cache():
    get_engine().clear_cache()
    return {'cleared': True}
