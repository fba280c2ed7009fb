from __future__ import annotations

import argparse
from pathlib import Path
from typing import Dict, List, Sequence, Tuple

import matplotlib.pyplot as plt
import networkx as nx

from config import DEFAULT_CONFIG, NetworkConfig, load_config
from graph import Graph, Vertex
from routing import Itinerary, shortest_route


SOURCE_COLOR = "magenta"
TARGET_COLOR = "green"
STOP_COLOR = "orange"
ROUTE_COLOR = "blue"
HOME_LABEL = "Home"


def build_networkx_graph(graph: Graph) -> nx.Graph:
    g = nx.Graph()
    g.add_nodes_from(graph.vertices())
    for edge in graph.edges():
        # Parallel edges collapse onto one drawn line labelled with the first weight.
        if not g.has_edge(edge.origin, edge.target):
            g.add_edge(edge.origin, edge.target, weight=edge.weight)
    return g


def compute_layout(graph_nx: nx.Graph, config: NetworkConfig) -> Dict[Vertex, Tuple[float, float]]:
    if config.positions is None:
        return nx.spring_layout(graph_nx, seed=42)
    # Instance positions are screen coordinates, so flip y for matplotlib.
    return {vertex: (x, -y) for vertex, (x, y) in enumerate(config.positions)}


def route_edges(path: Sequence[Vertex]) -> List[Tuple[Vertex, Vertex]]:
    return list(zip(path[:-1], path[1:]))


def node_colors(graph_nx: nx.Graph, itinerary: Itinerary) -> List[str]:
    colors = []
    for vertex in graph_nx.nodes:
        if vertex == itinerary.source:
            colors.append(SOURCE_COLOR)
        elif vertex == itinerary.target:
            colors.append(TARGET_COLOR)
        else:
            colors.append(STOP_COLOR)
    return colors


def figure_labels(graph_nx: nx.Graph, config: NetworkConfig, itinerary: Itinerary) -> Dict[Vertex, str]:
    labels = {vertex: config.label(vertex) for vertex in graph_nx.nodes}
    if itinerary.source != itinerary.target:
        labels[itinerary.source] = HOME_LABEL
    return labels


def draw_route(
    graph: Graph,
    config: NetworkConfig,
    itinerary: Itinerary,
    output: Path | None,
    show: bool,
) -> None:
    graph_nx = build_networkx_graph(graph)
    layout = compute_layout(graph_nx, config)

    fig, ax = plt.subplots(figsize=(10, 6))

    nx.draw_networkx_edges(graph_nx, layout, ax=ax, edge_color="lightgray", width=2.0)

    if itinerary.reachable and itinerary.segments:
        nx.draw_networkx_edges(
            graph_nx,
            layout,
            edgelist=route_edges(itinerary.vertices),
            edge_color=ROUTE_COLOR,
            width=3.0,
            ax=ax,
        )

    nx.draw_networkx_nodes(
        graph_nx,
        layout,
        node_color=node_colors(graph_nx, itinerary),
        node_size=400,
        ax=ax,
    )

    labels = figure_labels(graph_nx, config, itinerary)
    label_layout = {vertex: (x, y + 12.0) for vertex, (x, y) in layout.items()} if config.positions else layout
    nx.draw_networkx_labels(graph_nx, label_layout, labels=labels, font_size=9, ax=ax)

    edge_labels = {(u, v): data["weight"] for u, v, data in graph_nx.edges(data=True)}
    nx.draw_networkx_edge_labels(
        graph_nx, layout, edge_labels=edge_labels, font_size=8, font_color="gray", ax=ax
    )

    if itinerary.reachable:
        summary = f"Total weight: {itinerary.total_weight}"
    else:
        summary = f"{config.label(itinerary.target)} unreachable"
    ax.text(
        0.02,
        0.02,
        summary,
        transform=ax.transAxes,
        fontsize=10,
        bbox=dict(facecolor="white", alpha=0.8, boxstyle="round"),
    )

    ax.set_axis_off()
    ax.set_title("School Bus Route Visualization")

    if output:
        fig.savefig(output, bbox_inches="tight")
    if show:
        plt.show()
    else:
        plt.close(fig)


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Draw the school bus network with the shortest route highlighted."
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=DEFAULT_CONFIG,
        help="Path to the YAML network instance.",
    )
    parser.add_argument("--source", help="Home stop index or label.")
    parser.add_argument(
        "--out",
        type=Path,
        help="Optional path to save a static PNG of the network and route.",
    )
    parser.add_argument(
        "--no-show",
        action="store_true",
        help="Do not display the figure interactively.",
    )
    args = parser.parse_args()

    config = load_config(args.config)
    source = config.resolve_vertex(args.source) if args.source is not None else config.default_source
    graph = config.build_graph()
    itinerary = shortest_route(graph, source, config.destination)

    draw_route(
        graph=graph,
        config=config,
        itinerary=itinerary,
        output=args.out,
        show=not args.no_show,
    )


if __name__ == "__main__":
    main()
