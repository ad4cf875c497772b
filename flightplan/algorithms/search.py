"""Exhaustive simple-path enumeration with an explicit work stack.

`find_routes` collects every cycle-free route between two cities. Search state
lives in `_FrontierEntry` records on a list used as a LIFO stack instead of the
call stack, so route length is bounded by memory rather than recursion depth.
Each entry holds its own immutable route tuple and visited frozenset, so
sibling branches never observe each other's extensions.
"""

from __future__ import annotations

from typing import FrozenSet, List, NamedTuple, Tuple, Union

from flightplan.graph import FlightGraph, NodeKey, node_key
from flightplan.logging import get_logger
from flightplan.route import Route
from flightplan.types import Metric, Weight

logger = get_logger(__name__)


class _FrontierEntry(NamedTuple):
    """One unit of pending search state."""

    name: str
    cost: Weight
    time: Weight
    route: Tuple[str, ...]
    visited: FrozenSet[NodeKey]


def find_routes(
    graph: FlightGraph,
    origin: str,
    destination: str,
    metric: Union[Metric, str] = Metric.TIME,
) -> List[Route]:
    """Find all simple routes from ``origin`` to ``destination``.

    Names are matched case-insensitively. An entry that reaches the
    destination is recorded and not expanded further; the search continues
    with the remaining entries until the stack is empty.

    Args:
        graph: Network to search.
        origin: Name of the starting city.
        destination: Name of the target city.
        metric: Ranking metric attached to each route. Tags other than the
            cost marker select time.

    Returns:
        Routes in discovery order (unranked). Empty if either endpoint is
        unknown or the destination is unreachable.
    """
    metric = Metric.coerce(metric)
    start = graph.display_name(origin)
    if start is None or destination not in graph:
        logger.debug(
            "No route: unknown endpoint in request %s -> %s", origin, destination
        )
        return []

    target = node_key(destination)
    routes: List[Route] = []
    stack: List[_FrontierEntry] = [
        _FrontierEntry(start, 0, 0, (start,), frozenset((node_key(start),)))
    ]
    expanded = 0

    while stack:
        entry = stack.pop()

        if node_key(entry.name) == target:
            routes.append(Route(entry.route, entry.cost, entry.time, metric))
            continue

        node = graph.lookup(entry.name)
        if node is None:
            continue
        expanded += 1

        for edge in node.edges:
            next_key = node_key(edge.destination)
            if next_key in entry.visited:
                continue
            stack.append(
                _FrontierEntry(
                    edge.destination,
                    entry.cost + edge.cost,
                    entry.time + edge.time,
                    entry.route + (edge.destination,),
                    entry.visited | {next_key},
                )
            )

    logger.debug(
        "Search %s -> %s expanded %d entries and found %d routes",
        start,
        destination,
        expanded,
        len(routes),
    )
    return routes
