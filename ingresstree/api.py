"""FastAPI REST API exposing ingress reads."""

import asyncio
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException, Query, Request

from .client import IngressClient
from .exceptions import ConfigError, IdentityMissingError, IngressClientError, MappingError
from .logging_config import get_logger, log_api_request, log_api_response, log_function_entry, log_function_exit
from .models import ReaderConfig
from .reader import IngressReader
from .schema import get_tree_schema

logger = get_logger(__name__)

app = FastAPI(
    title="ingresstree",
    description="Read Kubernetes ingresses as configuration trees",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all HTTP requests and responses."""
    start_time = asyncio.get_running_loop().time()

    log_api_request(logger, request.method, str(request.url.path),
                   client_ip=request.client.host if request.client else "unknown",
                   user_agent=request.headers.get("user-agent", "unknown"))

    response = await call_next(request)

    duration = asyncio.get_running_loop().time() - start_time
    log_api_response(logger, request.method, str(request.url.path),
                    response.status_code,
                    duration_ms=round(duration * 1000, 2))

    return response


reader_config: Optional[ReaderConfig] = None
readers: Dict[str, IngressReader] = {}


def initialize_reader(config: ReaderConfig) -> None:
    """Install the configuration and build one reader per enabled cluster."""
    log_function_entry(logger, "initialize_reader", clusters_count=len(config.clusters))
    global reader_config
    reader_config = config
    readers.clear()
    for cluster in config.clusters:
        if cluster.enabled:
            readers[cluster.name] = IngressReader(IngressClient(cluster))
    logger.info("Ingress readers initialized", clusters=list(readers))
    log_function_exit(logger, "initialize_reader", status="success")


def get_reader(cluster: Optional[str] = None) -> IngressReader:
    """Return the reader for the requested or default cluster."""
    if reader_config is None:
        raise HTTPException(status_code=503, detail="Reader not initialized")
    try:
        cluster_config = reader_config.get_cluster(cluster)
    except ConfigError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return readers[cluster_config.name]


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "ingresstree"}


@app.get("/schema")
async def tree_schema():
    """JSON schema of the configuration tree."""
    return get_tree_schema()


@app.get("/ingresses/{namespace}/{name}")
async def read_ingress(
    namespace: str,
    name: str,
    cluster: Optional[str] = Query(None, description="Cluster to read from"),
) -> Dict[str, Any]:
    """Read an ingress. A missing ingress yields an empty tree, not a 404."""
    reader = get_reader(cluster)

    try:
        tree = await reader.read({"namespace": namespace, "name": name})
    except IdentityMissingError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except IngressClientError as e:
        logger.error("Ingress read failed", namespace=namespace, name=name, status=e.status, error=str(e))
        raise HTTPException(status_code=502, detail=str(e))
    except MappingError as e:
        logger.error("Ingress mapping failed", namespace=namespace, name=name, section=e.section, error=str(e))
        raise HTTPException(status_code=500, detail=str(e))

    return tree.to_tree()


@app.on_event("shutdown")
async def shutdown_event():
    """Close cluster connections on application shutdown."""
    for reader in readers.values():
        reader.client.disconnect()
    logger.info("ingresstree shutdown complete")
