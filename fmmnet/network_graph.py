"""Directed graph over a road network with shortest path routing."""

from __future__ import annotations

import math
from typing import Dict, Iterator, List, NamedTuple, Optional, Tuple

from shapely.geometry import Point

from .heap import Heap
from .network import Network
from .types import EdgeID, EdgeIndex, NodeID, NodeIndex

PredecessorMap = Dict[NodeIndex, NodeIndex]
SuccessorMap = Dict[NodeIndex, NodeIndex]
DistanceMap = Dict[NodeIndex, float]

DOUBLE_MIN = 1.0e-6


class OutEdge(NamedTuple):
    """An edge leaving a node: its target node, edge index and length."""

    target: NodeIndex
    index: EdgeIndex
    length: float


class NetworkGraph:
    """Adjacency structure of a network supporting Dijkstra and A* routing."""

    def __init__(self, network: Network) -> None:
        self._network = network
        self._num_vertices = network.node_count
        self._adjacency: List[List[OutEdge]] = [[] for _ in range(self._num_vertices)]
        for edge in network.edges:
            self._adjacency[edge.source].append(
                OutEdge(edge.target, edge.index, edge.length)
            )

    @property
    def network(self) -> Network:
        """The road network the graph was built from."""
        return self._network

    @property
    def num_vertices(self) -> int:
        """Number of vertices in the graph."""
        return self._num_vertices

    def out_edges(self, node: NodeIndex) -> Iterator[OutEdge]:
        """Yield the edges leaving a node in insertion order."""
        if 0 <= node < self._num_vertices:
            yield from self._adjacency[node]

    def shortest_path_dijkstra(
        self, source: NodeIndex, target: NodeIndex
    ) -> List[EdgeIndex]:
        """Edge indices of the shortest path from source to target.

        Empty if source equals target or target is unreachable.
        """
        if source == target:
            return []
        queue = Heap()
        pmap: PredecessorMap = {source: source}
        dmap: DistanceMap = {source: 0.0}
        queue.push(source, 0.0)
        while len(queue):
            node = queue.pop()
            u = node.index
            if u == target:
                break
            for out in self.out_edges(u):
                v = out.target
                temp_dist = node.value + out.length
                if v in dmap:
                    if dmap[v] > temp_dist:
                        pmap[v] = u
                        dmap[v] = temp_dist
                        queue.decrease_key(v, temp_dist)
                else:
                    queue.push(v, temp_dist)
                    pmap[v] = u
                    dmap[v] = temp_dist
        return self.back_track(source, target, pmap, dmap)

    def calc_heuristic_dist(self, p1: Point, p2: Point) -> float:
        """Euclidean distance between two points."""
        return math.hypot(p2.x - p1.x, p2.y - p1.y)

    def shortest_path_astar(
        self, source: NodeIndex, target: NodeIndex
    ) -> List[EdgeIndex]:
        """Edge indices of the shortest path found with A* search."""
        if source == target:
            return []
        points = self._network.vertex_points
        queue = Heap()
        pmap: PredecessorMap = {source: source}
        dmap: DistanceMap = {source: 0.0}
        queue.push(source, self.calc_heuristic_dist(points[source], points[target]))
        while len(queue):
            node = queue.pop()
            u = node.index
            if u == target:
                break
            for out in self.out_edges(u):
                v = out.target
                temp_dist = dmap[u] + out.length
                h = self.calc_heuristic_dist(points[v], points[target])
                if v in dmap:
                    if dmap[v] > temp_dist:
                        pmap[v] = u
                        dmap[v] = temp_dist
                        if v in queue:
                            queue.decrease_key(v, temp_dist + h)
                        else:
                            queue.push(v, temp_dist + h)
                else:
                    queue.push(v, temp_dist + h)
                    pmap[v] = u
                    dmap[v] = temp_dist
        return self.back_track(source, target, pmap, dmap)

    def back_track(
        self,
        source: NodeIndex,
        target: NodeIndex,
        pmap: PredecessorMap,
        dmap: DistanceMap,
    ) -> List[EdgeIndex]:
        """Rebuild the path from source to target out of a routing result."""
        if target not in dmap:
            return []
        path: List[EdgeIndex] = []
        v = target
        u = pmap[v]
        while v != source:
            cost = dmap[v] - dmap[u]
            path.append(self.get_edge_index(u, v, cost))
            v = u
            u = pmap[v]
        path.reverse()
        return path

    def single_source_upperbound_dijkstra(
        self, source: NodeIndex, delta: float
    ) -> Tuple[PredecessorMap, DistanceMap]:
        """Dijkstra from source that stops beyond distance delta.

        Returns the predecessor map and the distance map.
        """
        queue = Heap()
        pmap: PredecessorMap = {source: source}
        dmap: DistanceMap = {source: 0.0}
        queue.push(source, 0.0)
        while len(queue):
            node = queue.pop()
            u = node.index
            if node.value > delta:
                break
            for out in self.out_edges(u):
                v = out.target
                temp_dist = node.value + out.length
                if v in dmap:
                    if dmap[v] > temp_dist:
                        pmap[v] = u
                        dmap[v] = temp_dist
                        queue.decrease_key(v, temp_dist)
                elif temp_dist <= delta:
                    queue.push(v, temp_dist)
                    pmap[v] = u
                    dmap[v] = temp_dist
        return pmap, dmap

    def get_edge_index(
        self, source: NodeIndex, target: NodeIndex, cost: float
    ) -> int:
        """Index of the edge from source to target with the given cost, or -1."""
        for out in self.out_edges(source):
            if out.target == target and abs(out.length - cost) <= DOUBLE_MIN:
                return out.index
        return -1

    def find_edge(
        self, source: NodeIndex, target: NodeIndex
    ) -> Optional[Tuple[EdgeIndex, float]]:
        """The shortest edge from source to target as (index, length), or None.

        Among edges of equal length the last one added wins.
        """
        if target >= self._num_vertices:
            return None
        found: Optional[Tuple[EdgeIndex, float]] = None
        current_cost = math.inf
        for out in self.out_edges(source):
            if out.target == target and out.length <= current_cost:
                current_cost = out.length
                found = (out.index, out.length)
        return found

    def edge_id(self, index: EdgeIndex) -> EdgeID:
        """Edge id of an edge index, or -1 if out of range."""
        return self._network.edge_id(index)

    def node_id(self, index: NodeIndex) -> NodeID:
        """Node id of a node index, or -1 if out of range."""
        return self._network.node_id(index)

    def node_index(self, node_id: NodeID) -> NodeIndex:
        """Node index of a node id; KeyError if unknown."""
        return self._network.node_index(node_id)

    def vertex_point(self, index: NodeIndex) -> Point:
        """Geometry of a node."""
        return self._network.vertex_point(index)

    def format_graph(self) -> str:
        """One line per edge: its index, id and the ids of its end nodes."""
        lines = []
        for source in range(self._num_vertices):
            for out in self._adjacency[source]:
                lines.append(
                    f" index {out.index} edge {self.edge_id(out.index)} "
                    f"{self.node_id(source)} -> {self.node_id(out.target)}\n"
                )
        return "".join(lines)