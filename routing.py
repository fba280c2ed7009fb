from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from heapq import heappop, heappush
from typing import List, Optional, Sequence, Tuple

from errors import OutOfRange, RoutingError
from graph import Graph, Vertex


logger = logging.getLogger(__name__)

INFINITY = math.inf


@dataclass(frozen=True)
class ShortestPaths:
    """Single-source Dijkstra result.

    distances[v] is the least total weight from source to v (INFINITY when v
    cannot be reached) and predecessors[v] is the vertex preceding v on that
    route (None for the source and for unreached vertices).
    """

    source: Vertex
    distances: Tuple[float, ...]
    predecessors: Tuple[Optional[Vertex], ...]

    def _check(self, vertex: Vertex) -> None:
        if isinstance(vertex, bool) or not isinstance(vertex, int) or not 0 <= vertex < len(self.distances):
            raise OutOfRange(
                f"Vertex {vertex!r} is outside the range [0, {len(self.distances)})."
            )

    def distance_to(self, vertex: Vertex) -> float:
        self._check(vertex)
        return self.distances[vertex]

    def predecessor_of(self, vertex: Vertex) -> Optional[Vertex]:
        self._check(vertex)
        return self.predecessors[vertex]

    def is_reachable(self, vertex: Vertex) -> bool:
        return self.distance_to(vertex) != INFINITY


@dataclass(frozen=True)
class RouteSegment:
    origin: Vertex
    target: Vertex
    weight: int


@dataclass(frozen=True)
class Itinerary:
    source: Vertex
    target: Vertex
    vertices: Tuple[Vertex, ...]
    segments: Tuple[RouteSegment, ...] = field(default_factory=tuple)
    reachable: bool = True
    total_weight: Optional[int] = None


def compute_shortest_paths(graph: Graph, source: Vertex) -> ShortestPaths:
    """Compute single-source shortest paths using Dijkstra.

    The frontier is a plain binary heap without decrease-key: a vertex may sit
    in it several times and entries older than the best-known distance are
    dropped when popped.
    """
    if isinstance(source, bool) or not isinstance(source, int) or not 0 <= source < graph.vertex_count:
        raise OutOfRange(
            f"Source {source!r} is outside the range [0, {graph.vertex_count})."
        )

    distances: List[float] = [INFINITY] * graph.vertex_count
    predecessors: List[Optional[Vertex]] = [None] * graph.vertex_count
    distances[source] = 0

    queue: List[Tuple[float, Vertex]] = [(0, source)]
    settled = 0
    stale = 0

    while queue:
        distance_u, u = heappop(queue)
        if distance_u > distances[u]:
            stale += 1
            continue
        settled += 1

        for v, weight in graph.neighbors(u):
            candidate = distance_u + weight
            if candidate < distances[v]:
                distances[v] = candidate
                predecessors[v] = u
                heappush(queue, (candidate, v))

    logger.debug(
        "Dijkstra from %d: %d entries settled, %d stale entries skipped",
        source,
        settled,
        stale,
    )
    return ShortestPaths(
        source=source,
        distances=tuple(distances),
        predecessors=tuple(predecessors),
    )


def reconstruct_path(predecessors: Sequence[Optional[Vertex]], target: Vertex) -> List[Vertex]:
    """Walk predecessor links back from target and return source..target.

    An unreached target has no predecessor, so the result is just [target];
    callers tell that apart from source == target by comparing with the
    known source.
    """
    if isinstance(target, bool) or not isinstance(target, int) or not 0 <= target < len(predecessors):
        raise OutOfRange(
            f"Target {target!r} is outside the range [0, {len(predecessors)})."
        )

    path: List[Vertex] = [target]
    seen = {target}
    while predecessors[path[-1]] is not None:
        previous = predecessors[path[-1]]
        if previous in seen:
            raise RoutingError(f"Predecessor table contains a cycle through {previous}.")
        seen.add(previous)
        path.append(previous)
    path.reverse()
    return path


def build_itinerary(graph: Graph, paths: ShortestPaths, target: Vertex) -> Itinerary:
    """Turn a ShortestPaths result into the concrete route to target."""
    if not paths.is_reachable(target):
        logger.debug("Vertex %d is unreachable from %d", target, paths.source)
        return Itinerary(
            source=paths.source,
            target=target,
            vertices=(target,),
            reachable=False,
        )

    vertices = reconstruct_path(paths.predecessors, target)
    segments = []
    for u, v in zip(vertices[:-1], vertices[1:]):
        weight = graph.edge_weight(u, v)
        if weight is None:
            raise RoutingError(f"Edge {u}-{v} not present in graph.")
        segments.append(RouteSegment(origin=u, target=v, weight=weight))

    return Itinerary(
        source=paths.source,
        target=target,
        vertices=tuple(vertices),
        segments=tuple(segments),
        reachable=True,
        total_weight=int(paths.distance_to(target)),
    )


def shortest_route(graph: Graph, source: Vertex, target: Vertex) -> Itinerary:
    """Recover the explicit route and its cost between source and target."""
    return build_itinerary(graph, compute_shortest_paths(graph, source), target)
