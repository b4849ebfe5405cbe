"""
Tests for the in-memory graph store
"""

import threading

import pytest
from pydantic import ValidationError

from ..errors import MapNotSetError
from ..tools.graph_store import GraphStore
from .conftest import make_graph


class TestGraphStore:
    """Tests for GraphStore"""

    def test_starts_empty(self, store):
        assert store.get_map() is None
        assert store.has_map() is False

    def test_snapshot_without_map(self, store):
        with pytest.raises(MapNotSetError) as exc_info:
            store.snapshot()

        assert "Map has not been set" in exc_info.value.message

    def test_set_and_get(self, store, triangle_graph):
        store.set_map(triangle_graph)

        assert store.has_map() is True
        assert store.get_map() is triangle_graph
        assert store.snapshot() is triangle_graph

    def test_get_is_idempotent(self, store, triangle_graph):
        store.set_map(triangle_graph)

        first = store.get_map()
        second = store.get_map()

        assert first is second
        assert first == second

    def test_replacement_discards_previous(self, store, triangle_graph):
        replacement = make_graph(["X", "Y"], [("X", "Y", 4)])

        store.set_map(triangle_graph)
        store.set_map(replacement)

        stored = store.get_map()
        assert stored is replacement
        assert stored.node_ids() == ["X", "Y"]
        assert len(stored.edges) == 1

    def test_initial_graph(self, triangle_graph):
        store = GraphStore(triangle_graph)

        assert store.has_map() is True
        assert store.get_map() is triangle_graph

    def test_stored_graph_is_frozen(self, store, triangle_graph):
        store.set_map(triangle_graph)

        with pytest.raises(ValidationError):
            store.get_map().nodes = ()

        assert isinstance(store.get_map().nodes, tuple)
        assert isinstance(store.get_map().edges, tuple)


class TestGraphStoreConcurrency:
    """Readers racing a writer only ever see complete graphs"""

    def test_readers_see_whole_graphs(self, store):
        small = make_graph(["A", "B"], [("A", "B", 1)])
        large = make_graph(
            [f"N{i}" for i in range(50)],
            [(f"N{i}", f"N{i + 1}", i) for i in range(49)],
        )
        store.set_map(small)

        stop = threading.Event()
        failures: list[str] = []

        def writer():
            for i in range(500):
                store.set_map(large if i % 2 else small)
            stop.set()

        def reader():
            while not stop.is_set():
                graph = store.get_map()
                if graph is small:
                    continue
                if graph is not large:
                    failures.append("unknown graph observed")
                elif len(graph.edges) != len(graph.nodes) - 1:
                    failures.append("mixed node and edge collections")

        threads = [threading.Thread(target=reader) for _ in range(4)]
        threads.append(threading.Thread(target=writer))
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=10)

        assert failures == []
        assert store.get_map() in (small, large)
