from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from config import DEFAULT_CONFIG, NetworkConfig, load_config
from errors import ConfigError
from routing import Itinerary, shortest_route


LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
    )


def format_itinerary(itinerary: Itinerary, config: NetworkConfig) -> List[str]:
    source = config.label(itinerary.source)
    target = config.label(itinerary.target)
    lines = [f"Edges in the Shortest Route (from {source} to {target}):"]
    if not itinerary.reachable:
        lines.append(f"{target} cannot be reached from {source}.")
        return lines

    for segment in itinerary.segments:
        lines.append(
            f"{config.label(segment.origin)} -> {config.label(segment.target)} : {segment.weight}"
        )
    lines.append(f"Total weight: {itinerary.total_weight}")
    return lines


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Find the cheapest school bus route from a home stop to the college."
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=DEFAULT_CONFIG,
        help="Path to the YAML network instance.",
    )
    parser.add_argument(
        "--source",
        help="Home stop, as a vertex index or a stop label (default from the instance).",
    )
    parser.add_argument(
        "--target",
        help="Destination stop, as a vertex index or a stop label (default from the instance).",
    )
    parser.add_argument(
        "--visualize",
        action="store_true",
        help="Show the network with the shortest route highlighted.",
    )
    parser.add_argument(
        "--figure-out",
        type=Path,
        help="Optional path to save the route figure (implies drawing it).",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity.",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    try:
        config = load_config(args.config)
        source = config.resolve_vertex(args.source) if args.source is not None else config.default_source
        target = config.resolve_vertex(args.target) if args.target is not None else config.destination
    except (ConfigError, OSError) as exc:
        parser.error(str(exc))

    graph = config.build_graph()
    itinerary = shortest_route(graph, source, target)
    print("\n".join(format_itinerary(itinerary, config)))

    if args.visualize or args.figure_out:
        from visualize import draw_route

        draw_route(
            graph=graph,
            config=config,
            itinerary=itinerary,
            output=args.figure_out,
            show=args.visualize,
        )

    return 0 if itinerary.reachable else 1


if __name__ == "__main__":
    sys.exit(main())
