import threading

import pytest

from ancestry import sap as sap_module
from ancestry.digraph import Digraph
from ancestry.sap import SAP, SAPResult, NO_ANCESTOR, NO_PATH


@pytest.fixture
def sap(digraph1):
    return SAP(digraph1)


@pytest.fixture
def bfs_runs(monkeypatch):
    """Count breadth-first searches started by the engine"""
    runs = []
    original = sap_module.BreadthFirstDirectedPaths

    class CountingBFS(original):
        def __init__(self, graph, sources):
            runs.append(sources)
            super().__init__(graph, sources)

    monkeypatch.setattr(sap_module, 'BreadthFirstDirectedPaths', CountingBFS)
    return runs


@pytest.mark.parametrize("v, w, ancestor, length", [
    (3, 11, 1, 4),
    (9, 12, 5, 3),
    (7, 2, 0, 4),
    (1, 6, NO_ANCESTOR, NO_PATH),
])
def test_digraph1_pairs(sap, v, w, ancestor, length):
    assert sap.length(v, w) == length
    assert sap.ancestor(v, w) == ancestor


def test_small_graph_pairs(small_graph):
    sap = SAP(small_graph)

    assert sap.query(3, 4) == SAPResult(1, 2)
    assert sap.query(1, 2) == SAPResult(0, 2)


def test_small_graph_sets(small_graph):
    sap = SAP(small_graph)

    assert sap.length({3, 4}, {2}) == 3
    assert sap.ancestor({3, 4}, {2}) == 0


def test_sets_take_minimum_over_pairs(sap):
    assert sap.query([7, 12], [9]) == SAPResult(5, 3)
    assert sap.query([3, 11], [4, 8]) == SAPResult(3, 1)


def test_mixed_scalar_and_set(sap):
    assert sap.query(3, [11]) == sap.query(3, 11)


def test_set_order_and_duplicates_do_not_matter(sap):
    assert sap.query([12, 7, 7], [9]) == sap.query((7, 12), [9])
    assert sap.cache_stats()["misses"] == 1


def test_symmetry(sap):
    for v in range(sap.vertex_count):
        for w in range(sap.vertex_count):
            assert sap.query(v, w) == sap.query(w, v)


def test_self_distance(sap):
    for v in range(sap.vertex_count):
        assert sap.length(v, v) == 0
        assert sap.ancestor(v, v) == v


def test_ties_go_to_lowest_vertex():
    graph = Digraph.from_edges(4, [(0, 3), (1, 3), (0, 2), (1, 2)])
    assert SAP(graph).query(0, 1) == SAPResult(2, 2)


def test_cyclic_graph():
    graph = Digraph.from_edges(6, [(0, 1), (1, 2), (2, 0), (3, 2), (4, 5), (5, 4), (2, 2)])
    sap = SAP(graph)

    assert sap.query(0, 3) == SAPResult(0, 2)
    assert sap.query(3, 4) == SAPResult(NO_ANCESTOR, NO_PATH)
    assert sap.query(4, 5) == SAPResult(4, 1)


def test_no_path_result_is_not_found(sap):
    result = sap.query(1, 6)
    assert not result.found
    assert sap.path(1, 6) is None


def test_path(sap):
    assert sap.path(3, 11) == [3, 1, 5, 10, 11]
    assert sap.path(11, 3) == [11, 10, 5, 1, 3]
    assert sap.path(4, 4) == [4]
    assert len(sap.path(7, 2)) == sap.length(7, 2) + 1


def test_defensive_copy(small_graph):
    sap = SAP(small_graph)
    small_graph.add_edge(3, 2)

    assert sap.query(3, 2) == SAPResult(0, 3)
    assert sap.edge_count == 4


def test_repeat_query_skips_search(sap, bfs_runs):
    first = sap.query(3, 11)
    second = sap.query(3, 11)
    reversed_ = sap.query(11, 3)

    assert first == second == reversed_
    assert len(bfs_runs) == 2
    assert sap.cache_stats()['hits'] == 2


def test_different_sets_are_different_queries(sap, bfs_runs):
    sap.query([3, 4], [11])
    sap.query([3], [11])

    assert len(bfs_runs) == 4


def test_clear_cache_forces_recompute(sap, bfs_runs):
    sap.query(3, 11)
    sap.clear_cache()
    sap.query(3, 11)

    assert len(bfs_runs) == 4


def test_concurrent_queries(sap, bfs_runs):
    results = []
    threads = [threading.Thread(target=lambda: results.append(sap.query(9, 12))) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert results == [SAPResult(5, 3)] * 8
    assert len(bfs_runs) == 2


@pytest.mark.parametrize("v, w", [(-1, 0), (0, 13), (13, 0)])
def test_scalar_out_of_range(sap, v, w):
    with pytest.raises(IndexError):
        sap.length(v, w)


@pytest.mark.parametrize("v, w", [([], [1]), ([1], []), (set(), set())])
def test_empty_set(sap, v, w):
    with pytest.raises(ValueError):
        sap.ancestor(v, w)


def test_empty_set_checked_before_bounds(sap):
    with pytest.raises(ValueError):
        sap.length([], [99])


def test_set_out_of_range(sap, bfs_runs):
    with pytest.raises(IndexError):
        sap.length([1, 2], [3, 13])
    assert bfs_runs == []


def test_non_integer_vertices(sap):
    with pytest.raises(TypeError):
        sap.length(True, 1)
    with pytest.raises(TypeError):
        sap.length(["1"], [2])


def test_empty_graph_rejects_every_query():
    sap = SAP(Digraph(0))
    with pytest.raises(IndexError):
        sap.length(0, 0)
    with pytest.raises(IndexError):
        sap.length([0], [0])


def test_cache_size_limits_entries(digraph1):
    sap = SAP(digraph1, cache_size=2)
    sap.query(3, 11)
    sap.query(9, 12)

    assert sap.cache_stats()['size'] == 2
    assert sap.cache_stats()['max_size'] == 2


def test_empty_w_reported_before_v_bounds(sap):
    with pytest.raises(ValueError):
        sap.length([99], [])


def test_path_between_sets_starts_at_nearest_sources(sap):
    assert sap.path([7, 12], [9]) == [12, 10, 5, 9]
    assert sap.path([3, 11], [4, 8]) == [3, 8]


def test_single_entry_cache_serves_repeat_queries(digraph1, bfs_runs):
    sap = SAP(digraph1, cache_size=1)

    assert sap.query(3, 11) == SAPResult(1, 4)
    assert sap.query(3, 11) == SAPResult(1, 4)
    assert sap.query(11, 3) == SAPResult(1, 4)
    assert len(bfs_runs) == 2
    assert sap.cache_stats()['size'] == 1


def test_concurrent_reversed_queries_compute_once(sap, bfs_runs):
    results = []
    pairs = [(9, 12), (12, 9)] * 4
    threads = [threading.Thread(target=lambda p=p: results.append(sap.query(*p))) for p in pairs]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert results == [SAPResult(5, 3)] * 8
    assert len(bfs_runs) == 2
