"""Road network: edges, nodes, candidate search and path geometry."""

from __future__ import annotations

import math
from itertools import pairwise
from typing import Dict, List, Optional, Sequence, Tuple

from shapely.geometry import LineString, Point, box
from shapely.strtree import STRtree

from .types import Candidate, EdgeID, EdgeIndex, Edge, NodeID, NodeIndex

Coord = Tuple[float, float]

_EPS = 1e-9


def candidate_sort_key(candidate: Candidate) -> Tuple[float, int]:
    """Order candidates by GPS error, then by edge index."""
    return (candidate.dist, candidate.edge.index)


def _linear_referencing(
    px: float, py: float, coords: Sequence[Coord]
) -> Tuple[float, float, float, float]:
    """Project a point on a polyline: (distance, offset, closest x, closest y)."""
    best = (math.inf, 0.0, coords[0][0], coords[0][1])
    cumulative = 0.0
    for (x1, y1), (x2, y2) in pairwise(coords):
        dx, dy = x2 - x1, y2 - y1
        seg_len = math.hypot(dx, dy)
        if seg_len == 0:
            t = 0.0
        else:
            t = ((px - x1) * dx + (py - y1) * dy) / (seg_len * seg_len)
            t = min(max(t, 0.0), 1.0)
        cx, cy = x1 + t * dx, y1 + t * dy
        dist = math.hypot(px - cx, py - cy)
        if dist < best[0]:
            best = (dist, cumulative + t * seg_len, cx, cy)
        cumulative += seg_len
    return best


def _locate(coords: Sequence[Coord], offset: float) -> Coord:
    """Return the point at a distance along a polyline, clamped to its ends."""
    if offset <= 0:
        return coords[0]
    cumulative = 0.0
    for (x1, y1), (x2, y2) in pairwise(coords):
        seg_len = math.hypot(x2 - x1, y2 - y1)
        if seg_len > 0 and cumulative + seg_len >= offset:
            t = (offset - cumulative) / seg_len
            return (x1 + t * (x2 - x1), y1 + t * (y2 - y1))
        cumulative += seg_len
    return coords[-1]


def _cut(coords: Sequence[Coord], start: float, end: float) -> List[Coord]:
    """Return the part of a polyline between two offsets."""
    result = [_locate(coords, start)]
    cumulative = 0.0
    previous = coords[0]
    for vertex in coords[1:]:
        cumulative += math.hypot(vertex[0] - previous[0], vertex[1] - previous[1])
        if start + _EPS < cumulative < end - _EPS:
            result.append(vertex)
        previous = vertex
    result.append(_locate(coords, end))
    return result


def _coords(geom: LineString) -> List[Coord]:
    return [(float(x), float(y)) for x, y, *_ in geom.coords]


class Network:
    """A directed road network built edge by edge."""

    def __init__(self, srid: int = 4326) -> None:
        self.srid = srid
        self._edges: List[Edge] = []
        self._node_ids: List[NodeID] = []
        self._node_map: Dict[NodeID, NodeIndex] = {}
        self._edge_map: Dict[EdgeID, EdgeIndex] = {}
        self._vertex_points: List[Point] = []
        self._tree: Optional[STRtree] = None

    @property
    def edges(self) -> List[Edge]:
        """All edges, ordered by index."""
        return self._edges

    @property
    def node_count(self) -> int:
        return len(self._node_ids)

    @property
    def edge_count(self) -> int:
        return len(self._edges)

    @property
    def vertex_points(self) -> List[Point]:
        """Geometry of every node, ordered by node index."""
        return self._vertex_points

    def _node(self, node_id: NodeID, point: Point) -> NodeIndex:
        try:
            return self._node_map[node_id]
        except KeyError:
            index = len(self._node_ids)
            self._node_ids.append(node_id)
            self._node_map[node_id] = index
            self._vertex_points.append(point)
            return index

    def add_edge(
        self,
        edge_id: EdgeID,
        source: NodeID,
        target: NodeID,
        weight: float,
        geom: LineString,
    ) -> Edge:
        """Add an edge; its length is the geometry length times the weight."""
        coords = _coords(geom)
        s_idx = self._node(source, Point(coords[0]))
        t_idx = self._node(target, Point(coords[-1]))
        edge = Edge(len(self._edges), edge_id, s_idx, t_idx, geom.length * weight, geom)
        self._edges.append(edge)
        self._edge_map.setdefault(edge_id, edge.index)
        self._tree = None
        return edge

    def edge(self, edge_id: EdgeID) -> Edge:
        """Return the edge with the given id."""
        return self._edges[self.edge_index(edge_id)]

    def edge_index(self, edge_id: EdgeID) -> EdgeIndex:
        """Return the index of an edge id; KeyError if unknown."""
        try:
            return self._edge_map[edge_id]
        except KeyError:
            raise KeyError(f"edge id {edge_id} not in network") from None

    def edge_id(self, index: EdgeIndex) -> EdgeID:
        """Return the id of the edge at index, or -1 if out of range."""
        return self._edges[index].id if 0 <= index < len(self._edges) else -1

    def node_index(self, node_id: NodeID) -> NodeIndex:
        """Return the index of a node id; KeyError if unknown."""
        try:
            return self._node_map[node_id]
        except KeyError:
            raise KeyError(f"node id {node_id} not in network") from None

    def node_id(self, index: NodeIndex) -> NodeID:
        """Return the id of the node at index, or -1 if out of range."""
        return self._node_ids[index] if 0 <= index < len(self._node_ids) else -1

    def vertex_point(self, index: NodeIndex) -> Point:
        """Return the geometry of a node."""
        return self._vertex_points[index]

    def edge_geom(self, edge_id: EdgeID) -> LineString:
        """Return the geometry of an edge given its id."""
        return self.edge(edge_id).geom

    def _rtree(self) -> STRtree:
        if self._tree is None:
            self._tree = STRtree([edge.geom for edge in self._edges])
        return self._tree

    def search_tr_cs_knn(
        self, geom: LineString, k: int, radius: float
    ) -> List[List[Candidate]]:
        """Find up to k candidate edges within radius of every point.

        Returns an empty list if any point has no candidate.
        """
        if not self._edges:
            return []
        tree = self._rtree()
        next_index = len(self._node_ids)
        result: List[List[Candidate]] = []
        for px, py, *_ in geom.coords:
            window = box(px - radius, py - radius, px + radius, py + radius)
            found: List[Candidate] = []
            for item in sorted(int(i) for i in tree.query(window)):
                edge = self._edges[item]
                dist, offset, cx, cy = _linear_referencing(px, py, _coords(edge.geom))
                if dist <= radius:
                    found.append(Candidate(0, offset, dist, edge, Point(cx, cy)))
            if not found:
                return []
            if len(found) > k:
                found = sorted(found, key=candidate_sort_key)[:k]
            for candidate in found:
                candidate.index = next_index
                next_index += 1
            result.append(found)
        return result

    def complete_path_to_geometry(
        self, traj: LineString, complete_path: Sequence[EdgeID]
    ) -> LineString:
        """Geometry of a path with its end edges clipped to the trajectory ends."""
        if not complete_path:
            return LineString()
        traj_coords = _coords(traj)
        (fx, fy), (lx, ly) = traj_coords[0], traj_coords[-1]
        first = _coords(self.edge_geom(complete_path[0]))
        if len(complete_path) == 1:
            _, first_offset, _, _ = _linear_referencing(fx, fy, first)
            _, last_offset, _, _ = _linear_referencing(lx, ly, first)
            return LineString(_cut(first, first_offset, last_offset))
        last = _coords(self.edge_geom(complete_path[-1]))
        _, first_offset, _, _ = _linear_referencing(fx, fy, first)
        _, last_offset, _, _ = _linear_referencing(lx, ly, last)
        points = _cut(first, first_offset, math.inf)
        for edge_id in complete_path[1:-1]:
            points.extend(_coords(self.edge_geom(edge_id))[1:])
        points.extend(_cut(last, 0.0, last_offset)[1:])
        return LineString(points)

    def _join(self, edges: Sequence[Edge]) -> LineString:
        points: List[Coord] = []
        for position, edge in enumerate(edges):
            coords = _coords(edge.geom)
            points.extend(coords if position == 0 else coords[1:])
        return LineString(points) if points else LineString()

    def route2geometry(self, path: Sequence[EdgeID]) -> LineString:
        """Geometry of a route given as edge ids."""
        return self._join([self.edge(edge_id) for edge_id in path])

    def route_indices_to_geometry(self, path: Sequence[EdgeIndex]) -> LineString:
        """Geometry of a route given as edge indices."""
        return self._join([self._edges[index] for index in path])