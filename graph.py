from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Tuple

from errors import InvalidSize, InvalidWeight, OutOfRange


Vertex = int


@dataclass(frozen=True)
class Edge:
    origin: Vertex
    target: Vertex
    weight: int


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class Graph:
    """Fixed-size undirected weighted graph over vertices 0..vertex_count-1.

    Edges can only be added, never removed. Each vertex keeps its incident
    edges in insertion order, so parallel edges are allowed and lookups
    return the first one inserted.
    """

    def __init__(self, vertex_count: int) -> None:
        if not _is_int(vertex_count) or vertex_count < 0:
            raise InvalidSize(f"Vertex count must be a non-negative integer, got {vertex_count!r}.")
        self._vertex_count = vertex_count
        self._adjacency: List[List[Tuple[Vertex, int]]] = [[] for _ in range(vertex_count)]
        self._edges: List[Edge] = []

    @classmethod
    def from_edges(cls, vertex_count: int, edges: Iterable[Tuple[Vertex, Vertex, int]]) -> "Graph":
        graph = cls(vertex_count)
        for origin, target, weight in edges:
            graph.add_edge(origin, target, weight)
        return graph

    @property
    def vertex_count(self) -> int:
        return self._vertex_count

    @property
    def edge_count(self) -> int:
        return len(self._edges)

    def __len__(self) -> int:
        return self._vertex_count

    def vertices(self) -> range:
        return range(self._vertex_count)

    def _check_vertex(self, vertex: Vertex) -> None:
        if not _is_int(vertex) or not 0 <= vertex < self._vertex_count:
            raise OutOfRange(
                f"Vertex {vertex!r} is outside the range [0, {self._vertex_count})."
            )

    def add_edge(self, u: Vertex, v: Vertex, weight: int) -> None:
        self._check_vertex(u)
        self._check_vertex(v)
        if not _is_int(weight) or weight < 0:
            raise InvalidWeight(f"Edge {u}-{v} has invalid weight {weight!r}.")

        self._adjacency[u].append((v, weight))
        self._adjacency[v].append((u, weight))
        self._edges.append(Edge(min(u, v), max(u, v), weight))

    def edge_weight(self, u: Vertex, v: Vertex) -> Optional[int]:
        """Return the weight of the first edge joining u and v, or None."""
        self._check_vertex(u)
        self._check_vertex(v)
        return next((weight for neighbor, weight in self._adjacency[u] if neighbor == v), None)

    def neighbors(self, u: Vertex) -> Tuple[Tuple[Vertex, int], ...]:
        self._check_vertex(u)
        return tuple(self._adjacency[u])

    def edges(self) -> Iterator[Edge]:
        """Yield every inserted edge once, lower endpoint first."""
        return iter(tuple(self._edges))

    def __repr__(self) -> str:
        return f"Graph(vertex_count={self._vertex_count}, edge_count={self.edge_count})"
