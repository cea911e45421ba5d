import math

import pytest

from route_optimizer.config import Location, RawEdge
from route_optimizer.errors import InvalidEdgeWeight
from route_optimizer.graph import LocationGraph, build_graph, effective_weight


def test_effective_weight_applies_traffic_only_when_enabled():
    assert effective_weight(10.0, 2.0, apply_traffic=True) == 20.0
    assert effective_weight(10.0, 2.0, apply_traffic=False) == 10.0
    assert effective_weight(7.5, 1.3, apply_traffic=True) == 7.5 * 1.3


def test_build_graph_inserts_both_directions(line_edges):
    graph = build_graph(line_edges, apply_traffic=False)

    assert graph.neighbors(1) == ((2, 10.0),)
    assert sorted(graph.neighbors(2)) == [(1, 10.0), (3, 5.0)]
    assert graph.neighbors(3) == ((2, 5.0),)
    assert graph.edge_count() == 2
    assert graph.is_symmetric()


def test_build_graph_traffic_weight_shared_by_both_directions(line_edges):
    graph = build_graph(line_edges, apply_traffic=True)

    assert (2, 20.0) in graph.neighbors(1)
    assert (1, 20.0) in graph.neighbors(2)


def test_build_graph_keeps_parallel_edges():
    graph = build_graph([RawEdge(1, 2, 4.0), RawEdge(2, 1, 9.0)], apply_traffic=False)

    assert sorted(graph.neighbors(1)) == [(2, 4.0), (2, 9.0)]
    assert sorted(graph.neighbors(2)) == [(1, 4.0), (1, 9.0)]
    assert graph.is_symmetric()


def test_build_graph_registers_isolated_locations():
    locations = [Location(1, "A"), Location(2, "B"), Location(9, "Island")]
    graph = build_graph([RawEdge(1, 2, 1.0)], apply_traffic=False, locations=locations)

    assert 9 in graph
    assert graph.neighbors(9) == ()
    assert len(graph) == 3


def test_negative_weight_rejected():
    with pytest.raises(InvalidEdgeWeight) as exc_info:
        build_graph([RawEdge(1, 2, -1.0)], apply_traffic=False)

    assert exc_info.value.weight == -1.0
    assert exc_info.value.edge == RawEdge(1, 2, -1.0)


def test_negative_traffic_factor_rejected_only_when_applied():
    edges = [RawEdge(1, 2, 3.0, -2.0)]

    with pytest.raises(InvalidEdgeWeight):
        build_graph(edges, apply_traffic=True)

    graph = build_graph(edges, apply_traffic=False)
    assert graph.neighbors(1) == ((2, 3.0),)


def test_non_finite_weight_rejected():
    with pytest.raises(InvalidEdgeWeight):
        build_graph([RawEdge(1, 2, math.nan)], apply_traffic=False)
    with pytest.raises(InvalidEdgeWeight):
        LocationGraph().add_edge(1, 2, math.inf)


def test_add_edge_labels_error_with_endpoints_or_edge():
    graph = LocationGraph()

    with pytest.raises(InvalidEdgeWeight) as exc_info:
        graph.add_edge(3, 4, -2.0)
    assert exc_info.value.edge == (3, 4)

    edge = RawEdge(3, 4, -2.0)
    with pytest.raises(InvalidEdgeWeight) as exc_info:
        graph.add_edge(3, 4, -2.0, edge=edge)
    assert exc_info.value.edge is edge
    assert len(graph) == 0


def test_invalid_edge_weight_is_a_value_error():
    with pytest.raises(ValueError):
        LocationGraph().add_edge(1, 2, -0.5)


def test_neighbors_of_unknown_location_is_empty():
    graph = LocationGraph()
    assert graph.neighbors(42) == ()
    assert 42 not in graph
