"""FlightPlan: enumerate and rank every simple route in a flight network.

Primary API:
    FlightGraph - undirected, case-insensitive multigraph of cities
    find_routes() - all cycle-free routes between two cities
    heap_sort() - rank routes ascending by cost or time
    FlightPlanner - search, rank and trim routes per request

Example:
    from flightplan import FlightGraph, Metric, find_routes, heap_sort

    graph = FlightGraph()
    graph.add_connection("Dallas", "Austin", cost=50, time=60)
    graph.add_connection("Austin", "Houston", cost=40, time=90)
    graph.add_connection("Dallas", "Houston", cost=120, time=70)

    ranked = heap_sort(find_routes(graph, "Dallas", "Houston", Metric.COST))
    ranked[0].path  # ('Dallas', 'Austin', 'Houston')
"""

from __future__ import annotations

from flightplan import cli, logging
from flightplan.algorithms import find_routes, heap_sort, rank_routes
from flightplan.config import PLANNER_CONFIG, PlannerConfig
from flightplan.graph import Edge, FlightGraph, Node
from flightplan.io import (
    NetworkFormatError,
    RequestFormatError,
    load_network,
    load_requests,
)
from flightplan.planner import FlightPlanner, PlanRequest, PlanResult
from flightplan.route import MetricMismatchError, Route
from flightplan.types import Metric

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Model
    "FlightGraph",
    "Node",
    "Edge",
    "Route",
    "Metric",
    # Algorithms
    "find_routes",
    "heap_sort",
    "rank_routes",
    # Planning
    "FlightPlanner",
    "PlanRequest",
    "PlanResult",
    "PlannerConfig",
    "PLANNER_CONFIG",
    # IO
    "load_network",
    "load_requests",
    # Errors
    "MetricMismatchError",
    "NetworkFormatError",
    "RequestFormatError",
    # Utilities
    "cli",
    "logging",
]
