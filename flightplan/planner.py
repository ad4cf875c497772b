"""Request coordination: search, rank and select the top routes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Union

from flightplan.algorithms.heapsort import rank_routes
from flightplan.algorithms.search import find_routes
from flightplan.config import PLANNER_CONFIG, PlannerConfig
from flightplan.graph import FlightGraph
from flightplan.logging import get_logger
from flightplan.route import Route
from flightplan.types import Metric

logger = get_logger(__name__)


@dataclass(frozen=True)
class PlanRequest:
    """A single origin/destination query.

    Attributes:
        origin: Starting city name.
        destination: Target city name.
        metric: Ranking metric.
        number: Position of the request in its batch (0 for ad-hoc queries).
    """

    origin: str
    destination: str
    metric: Metric = Metric.TIME
    number: int = 0


@dataclass
class PlanResult:
    """Ranked routes for one request and the prefix selected for reporting."""

    request: PlanRequest
    routes: List[Route] = field(default_factory=list)
    top_n: int = PLANNER_CONFIG.top_n

    @property
    def found(self) -> bool:
        return bool(self.routes)

    @property
    def top(self) -> List[Route]:
        return self.routes[: self.top_n]

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable representation."""
        return {
            "number": self.request.number,
            "origin": self.request.origin,
            "destination": self.request.destination,
            "metric": self.request.metric.name.lower(),
            "routes_found": len(self.routes),
            "top": [route.to_dict() for route in self.top],
        }


class FlightPlanner:
    """Run route requests against a prebuilt flight network.

    The graph is read-only for the planner; every call owns its search and
    ranking state.
    """

    def __init__(
        self, graph: FlightGraph, config: Optional[PlannerConfig] = None
    ) -> None:
        self.graph = graph
        self.config = config if config is not None else PLANNER_CONFIG

    def plan(
        self,
        origin: str,
        destination: str,
        metric: Union[Metric, str] = Metric.TIME,
        top_n: Optional[int] = None,
        number: int = 0,
    ) -> PlanResult:
        """Find, rank and trim the routes for one request."""
        request = PlanRequest(origin, destination, Metric.coerce(metric), number)
        return self.run(request, top_n=top_n)

    def run(self, request: PlanRequest, top_n: Optional[int] = None) -> PlanResult:
        """Execute a prepared request."""
        routes = find_routes(
            self.graph, request.origin, request.destination, request.metric
        )
        ranked = rank_routes(routes)
        if not ranked:
            logger.info(
                "No route between %s and %s", request.origin, request.destination
            )
        return PlanResult(request, ranked, self.config.limit(top_n))

    def plan_many(
        self, requests: Iterable[PlanRequest], top_n: Optional[int] = None
    ) -> List[PlanResult]:
        """Execute requests in order."""
        return [self.run(request, top_n=top_n) for request in requests]
