"""Data types of the road network and of map matching results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence

from shapely.geometry import LineString, Point

NodeID = int
EdgeID = int
NodeIndex = int
EdgeIndex = int


@dataclass
class Edge:
    """A directed road edge."""

    index: EdgeIndex
    id: EdgeID
    source: NodeIndex
    target: NodeIndex
    length: float
    geom: LineString


@dataclass
class Candidate:
    """An edge matched to a GPS point."""

    index: NodeIndex
    offset: float
    dist: float
    edge: Edge
    point: Point


@dataclass
class MatchedCandidate:
    """A candidate chosen for a point, with its probabilities."""

    candidate: Candidate
    ep: float
    tp: float
    sp_dist: float


@dataclass
class MatchResult:
    """Result of matching one trajectory."""

    id: int
    opt_candidate_path: List[MatchedCandidate] = field(default_factory=list)
    opath: List[EdgeID] = field(default_factory=list)
    cpath: List[EdgeID] = field(default_factory=list)
    indices: List[int] = field(default_factory=list)
    mgeom: LineString = field(default_factory=LineString)


@dataclass
class PyCandidate:
    """Flat description of a matched candidate."""

    index: int
    edge_id: EdgeID
    source: NodeID
    target: NodeID
    error: float
    offset: float
    length: float
    ep: float
    tp: float
    spdist: float


@dataclass
class PyMatchResult:
    """Flat description of a match result."""

    id: int
    opath: List[EdgeID] = field(default_factory=list)
    cpath: List[EdgeID] = field(default_factory=list)
    candidates: List[PyCandidate] = field(default_factory=list)
    indices: List[int] = field(default_factory=list)
    mgeom: LineString = field(default_factory=LineString)
    pgeom: LineString = field(default_factory=LineString)


def format_traj_candidates(traj_candidates: Sequence[Sequence[Candidate]]) -> str:
    """Render the candidates of every point of a trajectory as a table."""
    lines = [
        "",
        f"Candidate {'step':>4};{'index':>6};{'offset':>8};"
        f"{'distance':>8};{'edge_id':>8}",
    ]
    for step, candidates in enumerate(traj_candidates):
        for c in candidates:
            lines.append(
                f"Candidate {step:>4};{c.index:>6};{c.offset:>8.6f};"
                f"{c.dist:>8.6f};{c.edge.id:>8}"
            )
    return "\n".join(lines) + "\n"


def format_candidate_path(candidates: Iterable[Candidate]) -> str:
    """Join the edge ids of a candidate path with commas."""
    return ",".join(str(c.edge.id) for c in candidates)


def format_point(point: Point) -> str:
    """Return the WKT of a point with 12 significant digits."""
    return f"POINT({point.x:.12g} {point.y:.12g})"