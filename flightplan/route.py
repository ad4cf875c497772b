"""Immutable result type for a single origin-to-destination route.

A `Route` stores the ordered node names, the accumulated cost and time, and
the metric that ranks it. The metric is fixed at construction; re-ranking by
another metric goes through `Route.with_metric`, which returns a new value.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, Iterator, Tuple

from flightplan.types import Metric, Weight


class MetricMismatchError(ValueError):
    """Raised when routes tagged with different metrics are compared."""


@dataclass(frozen=True)
class Route:
    """A simple path through the network with aggregated weights.

    Attributes:
        path: Node names from origin to destination, inclusive.
        cost: Sum of edge costs along the path.
        time: Sum of edge times along the path.
        metric: Field used to order this route against others.
    """

    path: Tuple[str, ...]
    cost: Weight
    time: Weight
    metric: Metric = Metric.TIME

    def __post_init__(self) -> None:
        if not self.path:
            raise ValueError("Route path must contain at least one node.")
        # Accept any sequence and any metric tag at construction
        object.__setattr__(self, "path", tuple(self.path))
        object.__setattr__(self, "metric", Metric.coerce(self.metric))

    @property
    def origin(self) -> str:
        return self.path[0]

    @property
    def destination(self) -> str:
        return self.path[-1]

    @property
    def hops(self) -> int:
        """Number of edges traversed."""
        return len(self.path) - 1

    @property
    def value(self) -> Weight:
        """Total of the field selected by ``metric``."""
        return self.cost if self.metric is Metric.COST else self.time

    def with_metric(self, metric: Metric) -> Route:
        """Return a copy of this route ranked by ``metric``."""
        metric = Metric.coerce(metric)
        if metric is self.metric:
            return self
        return replace(self, metric=metric)

    def __iter__(self) -> Iterator[str]:
        return iter(self.path)

    def __len__(self) -> int:
        return len(self.path)

    def __lt__(self, other: Any) -> bool:
        """Compare by the value of the shared ranking metric.

        Raises:
            MetricMismatchError: If the two routes carry different metrics.
        """
        if not isinstance(other, Route):
            return NotImplemented
        if other.metric is not self.metric:
            raise MetricMismatchError(
                f"Cannot compare a route ranked by {self.metric.name} "
                f"with one ranked by {other.metric.name}."
            )
        return self.value < other.value

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable representation."""
        return {
            "path": list(self.path),
            "cost": self.cost,
            "time": self.time,
            "metric": self.metric.name.lower(),
        }
