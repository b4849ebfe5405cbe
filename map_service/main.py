"""
Map Service Main Entry Point

Runs the shortest path API with uvicorn.
"""

import os
from typing import Optional

import structlog
import uvicorn
from dotenv import load_dotenv

from .config_loader import load_config
from .api.server import MapServer
from .tools.graph_store import GraphStore
from .tools.path_engine import PathEngine

# Load environment variables
load_dotenv()

# Configure structured logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
        if os.getenv("LOG_FORMAT", "json") == "json"
        else structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger(__name__)


class MapServiceRunner:
    """
    Map Service Runner

    Owns the graph store and wires it into the engine and the HTTP server.
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize runner.

        Args:
            config_path: Path to config.yaml
        """
        self.config = load_config(config_path)
        self.store = GraphStore()
        self.engine = PathEngine(
            self.store,
            route_separator=self.config.engine.route_separator,
        )
        self._server: Optional[MapServer] = None

    def create_server(self) -> MapServer:
        """Create map API server"""
        if not self.config.auth.enabled:
            logger.warning("API key authentication is disabled")
        elif not self.config.auth.read_write_key:
            logger.warning("No read-write API key configured, SetMap will reject every call")

        self._server = MapServer(
            config=self.config,
            store=self.store,
            engine=self.engine,
        )
        return self._server

    def run(self) -> None:
        """Run the map server"""
        server = self.create_server()

        logger.info(
            "Starting map server",
            host=self.config.server.host,
            port=self.config.server.port,
        )

        uvicorn.run(
            server.app,
            host=self.config.server.host,
            port=self.config.server.port,
            log_level=self.config.observability.log_level.lower(),
        )


def main():
    """Main entry point"""
    runner = MapServiceRunner()
    runner.run()


if __name__ == "__main__":
    main()
