"""FastAPI application for the instance items demo.

Endpoints:
  GET    /health      — Liveness probe for the load balancer
  GET    /api/hello   — Greeting plus the instance that answered
  GET    /api/items   — Every stored item, in insertion order
  POST   /api/items   — Append an item ({"text": "..."})
  GET    /metrics     — Prometheus metrics
  GET    /            — Browser frontend

Any other GET or HEAD from a client that accepts text/html also gets the frontend.
"""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from typing import Any

from fastapi import APIRouter, Depends, FastAPI, Request, Response
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from backend.config import Settings, resolve_instance_id, settings as default_settings
from backend.frontend import INDEX_HTML
from backend.metrics import HTTP_DURATION, HTTP_REQUESTS
from backend.models import ErrorResponse, HelloResponse, Item
from backend.store import ItemStore, ValidationError

logging.basicConfig(
    level=default_settings.log_level.upper(),
    format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
)
logger = logging.getLogger(__name__)

# Endpoints excluded from HTTP metrics
_METRICS_EXCLUDE = {"/metrics", "/openapi.json", "/docs", "/redoc"}
_UNMATCHED = "<unmatched>"


class MetricsMiddleware(BaseHTTPMiddleware):
    """Record HTTP request count and duration for Prometheus."""

    async def dispatch(self, request: Request, call_next):
        """Wrap each request with timing and counting."""
        if request.url.path in _METRICS_EXCLUDE:
            return await call_next(request)

        start = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - start

        # Label by route template so unknown paths can't blow up cardinality
        route = request.scope.get("route")
        endpoint = getattr(route, "path", _UNMATCHED)

        HTTP_REQUESTS.labels(
            method=request.method,
            endpoint=endpoint,
            status_code=response.status_code,
        ).inc()
        HTTP_DURATION.labels(endpoint=endpoint).observe(elapsed)
        return response


# --- Dependencies ---


def get_store(request: Request) -> ItemStore:
    """The item store owned by the running application."""
    return request.app.state.store


def get_instance_id(request: Request) -> str:
    """The instance identifier resolved when the application was built."""
    return request.app.state.instance_id


async def _read_json(request: Request) -> Any:
    """Parse a JSON request body, treating anything else as absent."""
    media_type = request.headers.get("content-type", "").split(";")[0].strip()
    if media_type.lower() != "application/json":
        return None
    try:
        return await request.json()
    except ValueError:
        return None


# --- Endpoints ---

router = APIRouter()


@router.get("/health", response_class=PlainTextResponse)
def health() -> str:
    """Liveness probe, independent of store state."""
    return "OK"


@router.get("/api/hello", response_model=HelloResponse)
def hello(instance_id: str = Depends(get_instance_id)) -> HelloResponse:
    """Report which instance answered."""
    return HelloResponse(instance=instance_id)


@router.get("/api/items", response_model=list[Item])
def list_items(store: ItemStore = Depends(get_store)) -> list[Item]:
    """Return every stored item in insertion order."""
    return store.list_items()


@router.post(
    "/api/items",
    response_model=Item,
    status_code=201,
    responses={400: {"model": ErrorResponse}},
)
async def create_item(request: Request, store: ItemStore = Depends(get_store)) -> Item:
    """Append an item from a {"text": "..."} body."""
    payload = await _read_json(request)
    text = payload.get("text") if isinstance(payload, dict) else None
    return store.add_item(text)


@router.get("/", response_class=HTMLResponse)
def index() -> str:
    """Serve the browser frontend."""
    return INDEX_HTML


@router.get("/metrics")
def metrics() -> Response:
    """Prometheus metrics endpoint."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


# --- Error handling ---


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    """Map a rejected item submission to 400."""
    return JSONResponse(
        status_code=400,
        content=ErrorResponse(error=str(exc)).model_dump(),
    )


def accepts_html(request: Request) -> bool:
    """Whether the client advertises text/html in its Accept header."""
    return "text/html" in request.headers.get("accept", "")


async def html_fallback_handler(request: Request, exc: StarletteHTTPException) -> Response:
    """Serve the frontend for unknown GET/HEAD requests from browsers.

    Browser navigation to any path lands on the single page; every other
    request to an unknown path keeps the framework's 404.
    """
    if exc.status_code == 404 and request.method in ("GET", "HEAD") and accepts_html(request):
        return HTMLResponse(INDEX_HTML)
    return await http_exception_handler(request, exc)


# --- Application factory ---


def create_app(
    settings: Settings | None = None,
    store: ItemStore | None = None,
) -> FastAPI:
    """Build the application around its own settings and item store."""
    settings = settings or default_settings
    instance_id = resolve_instance_id(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            "App listening on port %d (instance: %s)", settings.port, instance_id
        )
        yield
        logger.info("App shut down (instance: %s)", instance_id)

    app = FastAPI(title="Instance Items Demo", version="1.0.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.instance_id = instance_id
    app.state.store = store if store is not None else ItemStore(instance_id)

    app.add_middleware(MetricsMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, html_fallback_handler)
    app.include_router(router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=default_settings.port)
