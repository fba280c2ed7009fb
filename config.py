from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple, Union

import yaml

from errors import ConfigError, RoutingError
from graph import Graph, Vertex


logger = logging.getLogger(__name__)

DEFAULT_CONFIG = Path(__file__).with_name("school_bus_route.yaml")


@dataclass(frozen=True)
class NetworkConfig:
    """Validated contents of a network instance file."""

    vertex_count: int
    edges: Tuple[Tuple[Vertex, Vertex, int], ...]
    labels: Tuple[str, ...]
    positions: Optional[Tuple[Tuple[float, float], ...]]
    destination: Vertex
    default_source: Vertex

    def build_graph(self) -> Graph:
        return Graph.from_edges(self.vertex_count, self.edges)

    def label(self, vertex: Vertex) -> str:
        return self.labels[vertex]

    def resolve_vertex(self, value: str | int) -> Vertex:
        """Map a vertex index or a stop label to a vertex index."""
        if isinstance(value, bool):
            raise ConfigError(f"Unknown stop {value!r}.")
        if isinstance(value, int):
            vertex = value
        elif value in self.labels:
            return self.labels.index(value)
        else:
            try:
                vertex = int(value)
            except ValueError:
                raise ConfigError(f"Unknown stop {value!r}.") from None
        if not 0 <= vertex < self.vertex_count:
            raise ConfigError(f"Stop index {vertex} is outside [0, {self.vertex_count}).")
        return vertex


def default_labels(vertex_count: int, destination: Vertex) -> List[str]:
    labels = [f"Stop {index + 1}" for index in range(vertex_count)]
    if 0 <= destination < vertex_count:
        labels[destination] = "College"
    return labels


def _require_int(value: object, what: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{what} must be an integer, got {value!r}.")
    return value


def _require_list(value: object, what: str) -> Union[list, tuple]:
    if not isinstance(value, (list, tuple)):
        raise ConfigError(f"{what} must be a list, got {value!r}.")
    return value


def _parse_edges(raw: Sequence) -> Tuple[Tuple[Vertex, Vertex, int], ...]:
    edges = []
    seen: Dict[Tuple[int, int], int] = {}
    for entry in _require_list(raw, "network.edges"):
        if not isinstance(entry, (list, tuple)) or len(entry) != 3:
            raise ConfigError(f"Edge entries must be [u, v, weight] triples, got {entry!r}.")
        u, v, weight = (_require_int(item, "Edge field") for item in entry)
        key = (min(u, v), max(u, v))
        if key in seen:
            logger.warning(
                "Duplicate edge %d-%d (weights %d and %d); lookups use the first one",
                key[0],
                key[1],
                seen[key],
                weight,
            )
        else:
            seen[key] = weight
        edges.append((u, v, weight))
    return tuple(edges)


def parse_config(data: Dict) -> NetworkConfig:
    if not isinstance(data, dict) or not isinstance(data.get("network"), dict):
        raise ConfigError("Instance file must contain a 'network' mapping.")
    network = data["network"]
    routing = data.get("routing") or {}
    if not isinstance(routing, dict):
        raise ConfigError("'routing' must be a mapping.")

    vertex_count = _require_int(network.get("vertex_count"), "network.vertex_count")
    edges = _parse_edges(network.get("edges") or [])
    destination = _require_int(routing.get("destination", vertex_count - 1), "routing.destination")
    default_source = _require_int(routing.get("default_source", 0), "routing.default_source")

    labels = network.get("labels")
    if labels is None:
        labels = default_labels(vertex_count, destination)
    elif len(_require_list(labels, "network.labels")) != vertex_count:
        raise ConfigError(f"Expected {vertex_count} labels, got {len(labels)}.")

    positions = network.get("positions")
    if positions is not None:
        if len(_require_list(positions, "network.positions")) != vertex_count:
            raise ConfigError(f"Expected {vertex_count} positions, got {len(positions)}.")
        try:
            positions = tuple((float(x), float(y)) for x, y in positions)
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"Positions must be [x, y] pairs: {exc}") from exc

    config = NetworkConfig(
        vertex_count=vertex_count,
        edges=edges,
        labels=tuple(str(label) for label in labels),
        positions=positions,
        destination=destination,
        default_source=default_source,
    )

    # Fail early on bad vertex indices or weights rather than at query time.
    try:
        config.build_graph()
    except RoutingError as exc:
        raise ConfigError(f"Invalid network: {exc}") from exc
    for name, vertex in (("destination", destination), ("default_source", default_source)):
        if not 0 <= vertex < vertex_count:
            raise ConfigError(f"routing.{name} {vertex} is outside [0, {vertex_count}).")
    return config


def load_config(path: Path) -> NetworkConfig:
    with path.open("r", encoding="utf-8") as handle:
        try:
            data = yaml.safe_load(handle)
        except (yaml.YAMLError, UnicodeDecodeError) as exc:
            raise ConfigError(f"Cannot parse {path}: {exc}") from exc
    logger.debug("Loaded instance file %s", path)
    return parse_config(data)
