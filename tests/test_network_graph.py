import pytest
from shapely.geometry import LineString, Point

from fmmnet.network import Network
from fmmnet.network_graph import NetworkGraph

EDGES = [
    (1, 2, 9, [(0, 0), (0, 4)]),
    (2, 9, 4, [(0, 4), (1, 4)]),
    (3, 2, 5, [(0, 0), (3, 0)]),
    (4, 5, 4, [(3, 0), (3, 4), (1, 4)]),
    (5, 4, 3, [(1, 4), (1, 10)]),
    (6, 3, 2, [(1, 10), (0, 10), (0, 0)]),
    (20, 11, 12, [(5, 5), (6, 5)]),
    (21, 12, 11, [(6, 5), (6, 6), (5, 6), (5, 5)]),
    (22, 11, 12, [(5, 5), (5, 4), (6, 4), (6, 5)]),
]


@pytest.fixture
def network():
    net = Network()
    for edge_id, source, target, coords in EDGES:
        net.add_edge(edge_id, source, target, 1.0, LineString(coords))
    return net


@pytest.fixture
def graph(network):
    return NetworkGraph(network)


def ids(network, path):
    return [network.edge_id(i) for i in path]


def test_single_source_upperbound_dijkstra(network, graph):
    source = network.node_index(2)
    pmap, dmap = graph.single_source_upperbound_dijkstra(source, 5.1)
    assert dmap[network.node_index(4)] == 5.0
    assert pmap[network.node_index(4)] == network.node_index(9)
    assert network.node_index(3) not in dmap
    assert pmap[source] == source
    assert dmap[network.node_index(5)] == 3.0


def test_get_edge_index(network, graph):
    n11, n12 = network.node_index(11), network.node_index(12)
    assert network.edge_id(graph.get_edge_index(n11, n12, 1)) == 20
    assert graph.get_edge_index(n11, n12, 0.5) == -1
    assert network.edge_id(graph.get_edge_index(n11, n12, 3)) == 22


def test_find_edge_picks_shortest(network, graph):
    n11, n12 = network.node_index(11), network.node_index(12)
    index, cost = graph.find_edge(n11, n12)
    assert network.edge_id(index) == 20
    assert cost == 1.0
    assert graph.find_edge(n12, network.node_index(2)) is None
    assert graph.find_edge(n11, 1000) is None


def test_dijkstra_path(network, graph):
    path = graph.shortest_path_dijkstra(network.node_index(2), network.node_index(3))
    assert ids(network, path) == [1, 2, 5]


def test_astar_matches_dijkstra(network, graph):
    source, target = network.node_index(2), network.node_index(3)
    assert graph.shortest_path_astar(source, target) == graph.shortest_path_dijkstra(
        source, target
    )


def test_same_node_gives_empty_path(network, graph):
    node = network.node_index(2)
    assert graph.shortest_path_dijkstra(node, node) == []
    assert graph.shortest_path_astar(node, node) == []


def test_unreachable_gives_empty_path(network, graph):
    source, target = network.node_index(11), network.node_index(2)
    assert graph.shortest_path_dijkstra(source, target) == []
    assert graph.shortest_path_astar(source, target) == []


def test_back_track(network, graph):
    n2, n9, n4 = (network.node_index(i) for i in (2, 9, 4))
    pmap = {n2: n2, n9: n2, n4: n9}
    dmap = {n2: 0.0, n9: 4.0, n4: 5.0}
    assert ids(network, graph.back_track(n2, n4, pmap, dmap)) == [1, 2]
    assert graph.back_track(n2, network.node_index(3), pmap, dmap) == []


def test_calc_heuristic_dist(graph):
    assert graph.calc_heuristic_dist(Point(0, 0), Point(3, 4)) == pytest.approx(5.0)


def test_out_edges(network, graph):
    targets = [out.target for out in graph.out_edges(network.node_index(2))]
    assert targets == [network.node_index(9), network.node_index(5)]
    assert list(graph.out_edges(1000)) == []


def test_delegation(network, graph):
    index = graph.node_index(9)
    assert graph.node_id(index) == 9
    assert graph.edge_id(network.edge_index(20)) == 20
    assert graph.edge_id(1000) == -1
    point = graph.vertex_point(graph.node_index(4))
    assert (point.x, point.y) == (1.0, 4.0)
    assert graph.num_vertices == network.node_count == 7


def test_format_graph(graph):
    text = graph.format_graph()
    lines = text.splitlines()
    assert len(lines) == len(EDGES)
    assert lines[0] == " index 0 edge 1 2 -> 9"
    assert " index 6 edge 20 11 -> 12" in lines


def test_decrease_key_path_improves(network, graph):
    net = Network()
    net.add_edge(1, 1, 3, 1.0, LineString([(0, 0), (10, 0)]))
    net.add_edge(2, 1, 2, 1.0, LineString([(0, 0), (0, 1)]))
    net.add_edge(3, 2, 3, 1.0, LineString([(0, 1), (10, 0)]))
    g = NetworkGraph(net)
    path = g.shortest_path_dijkstra(net.node_index(1), net.node_index(3))
    assert [net.edge_id(i) for i in path] == [1]
    pmap, dmap = g.single_source_upperbound_dijkstra(net.node_index(1), 100)
    assert dmap[net.node_index(3)] == pytest.approx(10.0)
    assert pmap[net.node_index(3)] == net.node_index(1)