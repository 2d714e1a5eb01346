# fmmnet

Road network model and routing for GPS map matching.

`fmmnet` holds a directed road network that you build from edge polylines.
You can search it for candidate edges near trajectory points and build route
geometries. It also runs shortest-path queries: Dijkstra, A*, bidirectional
Dijkstra, and searches bounded by a distance.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Building a network

```python
from shapely.geometry import LineString
from fmmnet.network import Network

network = Network()          # srid defaults to 4326
network.add_edge(1, 1, 2, 1.0, LineString([(0, 0), (1, 0)]))
network.add_edge(2, 2, 3, 1.0, LineString([(1, 0), (1, 1)]))
network.add_edge(3, 1, 3, 3.0, LineString([(0, 0), (1, 1)]))
```

Each edge has these parts:

- an external edge id
- a source node id and a target node id
- a weight
- a polyline

The length of an edge is the length of its polyline times its weight. Nodes
get dense indices in the order they first appear. The geometry of a node is
taken from the first or last point of the first edge that uses it.

```python
idx = network.edge_index(2)   # KeyError for an unknown id
network.edge_id(idx)          # 2; -1 for an index out of range
network.node_index(3)         # KeyError for an unknown id
network.node_id(0)            # -1 for an index out of range
network.vertex_point(0)       # shapely Point of node 0
network.edge_geom(1)          # the polyline of edge 1
network.edge(1)               # the Edge record for edge id 1
network.node_count, network.edge_count
```

## Candidate search

`Network.search_tr_cs_knn(geom, k, radius)` looks at each point of a
trajectory line and returns at most `k` candidate edges within `radius` of
it:

- The closest candidates come first.
- When two candidates are equally close, the one with the lower edge index
  comes first.
- If any point has no candidate, the result is an empty list.

Candidates are numbered with indices that start at the node count.

```python
traj = LineString([(0.5, 0.05), (1.05, 0.5)])
candidates = network.search_tr_cs_knn(traj, 2, 0.2)
```

The other geometry builders work like this:

- `complete_path_to_geometry(traj, cpath)` builds the matched geometry of a
  path of edge ids. It clips the first and last edges at the points where the
  trajectory's ends project onto them.
- `route2geometry(path)` joins whole edges given by id.
- `route_indices_to_geometry(path)` joins whole edges given by index.

## Routing

```python
from fmmnet.network_graph import NetworkGraph
from fmmnet.bidirectional_network_graph import BidirectionalNetworkGraph

graph = NetworkGraph(network)
s, t = network.node_index(1), network.node_index(3)
graph.shortest_path_dijkstra(s, t)    # list of edge indices
graph.shortest_path_astar(s, t)

pmap, dmap = graph.single_source_upperbound_dijkstra(s, 5.0)
graph.get_edge_index(s, t, 3 * 2 ** 0.5)  # edge with that cost, or -1
graph.find_edge(s, t)                  # (index, length) of the shortest, or None
print(graph.format_graph())

bgraph = BidirectionalNetworkGraph(network)
bgraph.shortest_path_bidirectional_dijkstra(s, t)
smap, dmap = bgraph.single_target_upperbound_dijkstra(t, 5.0)
bgraph.search_edges_within_dist_from_node(s, 3.0)  # set of edge ids
bgraph.search_edges_within_dist_to_node(t, 3.0)
bgraph.search_edges_within_dist_ft_edge(2, 3.0)
```

A path is empty when the source and target are the same node or when the
target cannot be reached.

## Data types and helpers

- **`fmmnet.types`** holds the records `Edge`, `Candidate`,
  `MatchedCandidate`, `MatchResult`, `PyCandidate` and `PyMatchResult`.
  It also has text formatters: `format_traj_candidates`,
  `format_candidate_path` and `format_point`.
- **`fmmnet.heap.Heap`** is an indexed min-priority queue. It has `push`,
  `pop`, `top`, `decrease_key`, `len()` and `in`. Nodes are ordered by
  value, then by index.
- **`fmmnet.util`** has small helpers:
  - comma-separated strings: `split_string`, `vec2string`, `string2vec`
  - booleans: `string2bool`, `bool2string`
  - file checks: `check_file_extension`, `file_exists`, `folder_exist`,
    `get_file_directory`
  - timing: `get_current_time`, `get_duration`
  - `iter_lines`, which splits a text stream on `\n`, `\r\n`, `\r` or a
    custom delimiter.

## What it does not do

- It does not read network files. You build networks in code with
  `Network.add_edge`.
- It has no map matching algorithm. The match result types are provided, but
  nothing in the package fills them.
- It has no command-line programs.