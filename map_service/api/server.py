"""
Map API Server

HTTP surface for storing a map and querying shortest routes and distances.
Engine errors are translated to status codes here and nowhere else.
"""

import asyncio
from datetime import datetime
from contextlib import asynccontextmanager
from http import HTTPStatus
from typing import Callable, Optional, TypeVar

import structlog
from fastapi import Body, Depends, FastAPI, HTTPException, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..config_loader import Config
from ..errors import ErrorKind, MapServiceError, UnexpectedFailureError
from ..schemas.graph import Graph, GraphPayload
from ..schemas.responses import (
    DistanceResponse,
    ErrorResponse,
    HealthResponse,
    RouteResponse,
    SetMapResponse,
)
from ..tools.graph_store import GraphStore
from ..tools.path_engine import PathEngine
from .auth import ApiKeyGuard

logger = structlog.get_logger(__name__)

T = TypeVar("T")

ERROR_STATUS_CODES: dict[ErrorKind, int] = {
    ErrorKind.INVALID_GRAPH: 400,
    ErrorKind.NODE_NOT_FOUND: 404,
    ErrorKind.NO_PATH_EXISTS: 404,
    ErrorKind.MAP_NOT_SET: 409,
    ErrorKind.UNEXPECTED_FAILURE: 500,
}


def _error_response(
    status_code: int,
    message: str,
    headers: Optional[dict[str, str]] = None,
) -> JSONResponse:
    body = ErrorResponse(error=HTTPStatus(status_code).phrase, message=message)
    return JSONResponse(status_code=status_code, content=body.model_dump(), headers=headers)


def _require_param(name: str, value: Optional[str]) -> str:
    if value is None or not value.strip():
        raise HTTPException(status_code=400, detail=f"Parameter '{name}' is required")
    return value


class MapServer:
    """
    Map API server.

    Features:
    - Store a map (POST {prefix}/SetMap, read-write key)
    - Fetch the stored map (GET {prefix}/GetMap)
    - Shortest route (GET {prefix}/ShortestRoute?from=&to=)
    - Shortest distance (GET {prefix}/ShortestDistance?from=&to=)
    - Health checks (GET /health, GET /ready)
    """

    def __init__(
        self,
        config: Config,
        store: Optional[GraphStore] = None,
        engine: Optional[PathEngine] = None,
    ):
        """
        Initialize map server.

        Args:
            config: Service configuration
            store: Graph store; a fresh one is created if omitted
            engine: Path engine; built over the store if omitted
        """
        self.config = config
        self.store = store or GraphStore()
        self.engine = engine or PathEngine(
            self.store,
            route_separator=config.engine.route_separator,
        )
        self.guard = ApiKeyGuard(config.auth)
        self.query_timeout_seconds = config.engine.query_timeout_seconds

        # Health state
        self._ready = False

        # Create FastAPI app
        self.app = self._create_app()

    def _create_app(self) -> FastAPI:
        """Create FastAPI application with routes"""

        @asynccontextmanager
        async def lifespan(app: FastAPI):
            """Lifecycle management"""
            logger.info(
                "Map server starting",
                service=self.config.service.name,
                version=self.config.service.version,
            )
            self._ready = True
            yield
            logger.info("Map server shutting down")
            self._ready = False

        app = FastAPI(
            title=f"{self.config.service.name} API",
            version=self.config.service.version,
            description=self.config.service.description,
            lifespan=lifespan,
        )

        self._register_exception_handlers(app)
        self._register_routes(app)
        return app

    def _register_exception_handlers(self, app: FastAPI) -> None:
        """Render every failure as an ErrorResponse body"""

        @app.exception_handler(MapServiceError)
        async def handle_map_error(request: Request, exc: MapServiceError):
            status_code = ERROR_STATUS_CODES[exc.kind]
            logger.warning(
                "Map request failed",
                path=request.url.path,
                kind=exc.kind.value,
                message=exc.message,
            )
            return _error_response(status_code, exc.message)

        @app.exception_handler(StarletteHTTPException)
        async def handle_http_error(request: Request, exc: StarletteHTTPException):
            return _error_response(exc.status_code, str(exc.detail), headers=exc.headers)

        @app.exception_handler(RequestValidationError)
        async def handle_validation_error(request: Request, exc: RequestValidationError):
            problems = "; ".join(
                f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
                for err in exc.errors()
            )
            logger.warning("Invalid request", path=request.url.path, errors=problems)
            return _error_response(400, f"Invalid request: {problems}")

    def _register_routes(self, app: FastAPI) -> None:
        """Register all API routes"""
        prefix = self.config.server.route_prefix.rstrip("/")

        # ============== Health Endpoints ==============

        @app.get("/health", response_model=HealthResponse)
        async def health_check():
            """Basic health check"""
            return HealthResponse(
                status="healthy",
                service_name=self.config.service.name,
                version=self.config.service.version,
                map_loaded=self.store.has_map(),
                timestamp=datetime.utcnow().isoformat(),
            )

        @app.get("/ready")
        async def readiness_check():
            """Readiness check for orchestration"""
            if not self._ready:
                raise HTTPException(status_code=503, detail="Not ready")
            return {"status": "ready"}

        # ============== Map Endpoints ==============

        @app.post(
            f"{prefix}/SetMap",
            response_model=SetMapResponse,
            dependencies=[Depends(self.guard.require_write)],
        )
        async def set_map(payload: Optional[GraphPayload] = Body(None)):
            """Replace the stored map."""
            if payload is None:
                raise HTTPException(status_code=400, detail="Map data is required")

            graph = payload.to_graph()
            self.store.set_map(graph)

            return SetMapResponse(
                node_count=len(graph.nodes),
                edge_count=len(graph.edges),
            )

        @app.get(
            f"{prefix}/GetMap",
            response_model=Graph,
            dependencies=[Depends(self.guard.require_read)],
        )
        async def get_map():
            """Return the stored map."""
            return self.store.snapshot()

        @app.get(
            f"{prefix}/ShortestRoute",
            response_model=RouteResponse,
            dependencies=[Depends(self.guard.require_read)],
        )
        async def shortest_route(
            from_id: Optional[str] = Query(None, alias="from"),
            to_id: Optional[str] = Query(None, alias="to"),
        ):
            """Shortest route between two nodes, e.g. ?from=G&to=E"""
            from_id = _require_param("from", from_id)
            to_id = _require_param("to", to_id)

            route = await self._run_query(self.engine.shortest_route, from_id, to_id)
            return RouteResponse(
                from_id=from_id,
                to_id=to_id,
                route=route,
                path=self.engine.render_route(route),
            )

        @app.get(
            f"{prefix}/ShortestDistance",
            response_model=DistanceResponse,
            dependencies=[Depends(self.guard.require_read)],
        )
        async def shortest_distance(
            from_id: Optional[str] = Query(None, alias="from"),
            to_id: Optional[str] = Query(None, alias="to"),
        ):
            """Shortest distance between two nodes, e.g. ?from=G&to=E"""
            from_id = _require_param("from", from_id)
            to_id = _require_param("to", to_id)

            distance = await self._run_query(self.engine.shortest_distance, from_id, to_id)
            return DistanceResponse(from_id=from_id, to_id=to_id, distance=distance)

    async def _run_query(self, query: Callable[[str, str], T], from_id: str, to_id: str) -> T:
        """
        Run an engine query on a worker thread within the time budget.

        Domain errors pass through untouched; anything else is logged with
        its traceback and reported as an unexpected failure.
        """
        loop = asyncio.get_running_loop()
        try:
            return await asyncio.wait_for(
                loop.run_in_executor(None, query, from_id, to_id),
                timeout=self.query_timeout_seconds,
            )

        except asyncio.TimeoutError:
            logger.error(
                "Query timed out",
                from_id=from_id,
                to_id=to_id,
                timeout_seconds=self.query_timeout_seconds,
            )
            raise HTTPException(
                status_code=504,
                detail=f"Query timed out after {self.query_timeout_seconds}s",
            )

        except MapServiceError:
            raise

        except Exception as e:
            logger.exception("Query failed", from_id=from_id, to_id=to_id, error=str(e))
            raise UnexpectedFailureError() from e
