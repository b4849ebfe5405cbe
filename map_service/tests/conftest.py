"""
Shared fixtures for map service tests
"""

import pytest

from ..config_loader import AuthConfig, Config, EngineConfig
from ..schemas.graph import Graph, GraphPayload
from ..tools.graph_store import GraphStore
from ..tools.path_engine import PathEngine

READ_KEY = "test-read-key"
READ_WRITE_KEY = "test-read-write-key"


def make_graph(node_ids: list[str], edges: list[tuple[str, str, int]]) -> Graph:
    """Build a Graph from ids and (from, to, weight) tuples."""
    return GraphPayload(
        nodes=[{"id": node_id} for node_id in node_ids],
        edges=[
            {"fromId": from_id, "toId": to_id, "weight": weight}
            for from_id, to_id, weight in edges
        ],
    ).to_graph()


@pytest.fixture
def triangle_graph() -> Graph:
    """A-B (1), B-C (2), A-C (5)"""
    return make_graph(
        ["A", "B", "C"],
        [("A", "B", 1), ("B", "C", 2), ("A", "C", 5)],
    )


@pytest.fixture
def city_graph() -> Graph:
    """Nine nodes, one component, mixed weights"""
    return make_graph(
        ["A", "B", "C", "D", "E", "F", "G", "H", "I"],
        [
            ("A", "B", 4),
            ("A", "C", 6),
            ("B", "F", 2),
            ("C", "D", 8),
            ("D", "E", 4),
            ("D", "G", 1),
            ("E", "B", 2),
            ("E", "F", 3),
            ("E", "I", 8),
            ("F", "G", 4),
            ("F", "H", 6),
            ("G", "H", 5),
            ("G", "I", 5),
        ],
    )


@pytest.fixture
def store() -> GraphStore:
    return GraphStore()


@pytest.fixture
def engine(store) -> PathEngine:
    return PathEngine(store)


@pytest.fixture
def config() -> Config:
    """Configuration with both API keys set"""
    return Config(
        auth=AuthConfig(
            enabled=True,
            header_name="X-Api-Key",
            read_key=READ_KEY,
            read_write_key=READ_WRITE_KEY,
        ),
        engine=EngineConfig(query_timeout_seconds=5.0),
    )
