"""Network graph with backward adjacency for bidirectional searches."""

from __future__ import annotations

from typing import Iterator, List, Set, Tuple

from .heap import Heap
from .network import Network
from .network_graph import DistanceMap, NetworkGraph, PredecessorMap, SuccessorMap
from .types import EdgeID, EdgeIndex, NodeIndex


class BidirectionalNetworkGraph(NetworkGraph):
    """A network graph that can also search against the edge direction."""

    def __init__(self, network: Network) -> None:
        super().__init__(network)
        self._inverted: List[List[NodeIndex]] = [[] for _ in range(self.num_vertices)]
        for edge in network.edges:
            self._inverted[edge.target].append(edge.source)

    def _incoming(self, v: NodeIndex) -> Iterator[Tuple[NodeIndex, int, float]]:
        """Yield (source node, edge index, cost) for the edges entering v."""
        for u in self._inverted[v]:
            found = self.find_edge(u, v)
            index, cost = found if found is not None else (-1, 0.0)
            yield u, index, cost

    def shortest_path_bidirectional_dijkstra(
        self, source: NodeIndex, target: NodeIndex
    ) -> List[EdgeIndex]:
        """Edge indices of a path found by alternating forward and backward search."""
        if source == target:
            return []
        fq, bq = Heap(), Heap()
        pmap: PredecessorMap = {source: source}
        smap: SuccessorMap = {target: target}
        fdmap: DistanceMap = {source: 0.0}
        bdmap: DistanceMap = {target: 0.0}
        fq.push(source, 0.0)
        bq.push(target, 0.0)
        forward = True
        prev_node = -1
        while bq and fq:
            if forward:
                node = fq.pop()
                if node.index == prev_node:
                    break
                self.forward_search(fq, node.index, node.value, pmap, fdmap)
            else:
                node = bq.pop()
                if node.index == prev_node:
                    break
                self.backward_search(bq, node.index, node.value, smap, bdmap)
            forward = not forward
            prev_node = node.index
        path = self.back_track(source, prev_node, pmap, fdmap)
        path.extend(self.forward_track(prev_node, target, smap, bdmap))
        return path

    def single_target_upperbound_dijkstra(
        self, target: NodeIndex, delta: float
    ) -> Tuple[SuccessorMap, DistanceMap]:
        """Backward Dijkstra to target that stops beyond distance delta.

        Returns the successor map and the distance map.
        """
        queue = Heap()
        smap: SuccessorMap = {target: target}
        dmap: DistanceMap = {target: 0.0}
        queue.push(target, 0.0)
        while queue:
            node = queue.pop()
            if node.value > delta:
                break
            self.backward_search(queue, node.index, node.value, smap, dmap)
        return smap, dmap

    def forward_track(
        self,
        source: NodeIndex,
        target: NodeIndex,
        smap: SuccessorMap,
        dmap: DistanceMap,
    ) -> List[EdgeIndex]:
        """Follow the successor map from source to target, collecting edges."""
        if source not in dmap:
            return []
        path: List[EdgeIndex] = []
        u = source
        v = smap[u]
        while u != target:
            cost = dmap[u] - dmap[v]
            path.append(self.get_edge_index(u, v, cost))
            u = v
            v = smap[u]
        return path

    def forward_search(
        self,
        queue: Heap,
        u: NodeIndex,
        dist: float,
        pmap: PredecessorMap,
        dmap: DistanceMap,
    ) -> None:
        """Relax the edges leaving u, updating queue and maps in place."""
        for out in self.out_edges(u):
            v = out.target
            temp_dist = dist + out.length
            if v in dmap:
                if dmap[v] > temp_dist:
                    pmap[v] = u
                    dmap[v] = temp_dist
                    queue.decrease_key(v, temp_dist)
            else:
                queue.push(v, temp_dist)
                pmap[v] = u
                dmap[v] = temp_dist

    def backward_search(
        self,
        queue: Heap,
        v: NodeIndex,
        dist: float,
        smap: SuccessorMap,
        dmap: DistanceMap,
    ) -> None:
        """Relax the edges entering v, updating queue and maps in place."""
        for u, _, cost in self._incoming(v):
            temp_dist = dist + cost
            if u in dmap:
                if dmap[u] > temp_dist:
                    smap[u] = v
                    dmap[u] = temp_dist
                    queue.decrease_key(u, temp_dist)
            else:
                queue.push(u, temp_dist)
                smap[u] = v
                dmap[u] = temp_dist

    def search_edges_within_dist_from_node(
        self, source: NodeIndex, delta: float
    ) -> Set[EdgeID]:
        """Ids of edges reachable from source within distance delta."""
        result: Set[EdgeID] = set()
        queue = Heap()
        dmap: DistanceMap = {source: 0.0}
        queue.push(source, 0.0)
        while queue:
            node = queue.pop()
            if node.value > delta:
                break
            for out in self.out_edges(node.index):
                v = out.target
                temp_dist = node.value + out.length
                eid = self.edge_id(out.index)
                if v in dmap:
                    if dmap[v] > temp_dist:
                        dmap[v] = temp_dist
                        queue.decrease_key(v, temp_dist)
                    if temp_dist <= delta:
                        result.add(eid)
                elif temp_dist <= delta:
                    queue.push(v, temp_dist)
                    dmap[v] = temp_dist
                    result.add(eid)
        return result

    def search_edges_within_dist_to_node(
        self, target: NodeIndex, delta: float
    ) -> Set[EdgeID]:
        """Ids of edges from which target is reachable within distance delta."""
        result: Set[EdgeID] = set()
        queue = Heap()
        dmap: DistanceMap = {target: 0.0}
        queue.push(target, 0.0)
        while queue:
            node = queue.pop()
            if node.value > delta:
                break
            for u, index, cost in self._incoming(node.index):
                eid = self.edge_id(index)
                temp_dist = node.value + cost
                if u in dmap:
                    if dmap[u] > temp_dist:
                        dmap[u] = temp_dist
                        queue.decrease_key(u, temp_dist)
                    if temp_dist <= delta:
                        result.add(eid)
                elif temp_dist <= delta:
                    queue.push(u, temp_dist)
                    dmap[u] = temp_dist
                    result.add(eid)
        return result

    def search_edges_within_dist_ft_edge(
        self, edge_id: EdgeID, dist: float
    ) -> Set[EdgeID]:
        """Ids of edges within dist after the edge's target or before its source."""
        edge = self.network.edge(edge_id)
        result = self.search_edges_within_dist_from_node(edge.target, dist)
        result |= self.search_edges_within_dist_to_node(edge.source, dist)
        return result