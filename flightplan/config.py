"""Configuration classes for FlightPlan components."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class PlannerConfig:
    """Configuration for request handling and plan presentation."""

    # Number of ranked routes reported per request
    top_n: int = 3

    # Field separator in flight data and request files
    field_separator: str = "|"

    # Separator placed between node names when rendering a route
    path_separator: str = " -> "

    # Decimal places used when printing cost
    cost_precision: int = 2

    def __post_init__(self) -> None:
        if self.top_n < 1:
            raise ValueError(f"top_n must be at least 1, got {self.top_n}")
        if not self.field_separator:
            raise ValueError("field_separator must not be empty")

    def limit(self, top_n: Optional[int] = None) -> int:
        """Return the effective report size, honoring a per-call override."""
        if top_n is None:
            return self.top_n
        if top_n < 1:
            raise ValueError(f"top_n must be at least 1, got {top_n}")
        return top_n


# Global configuration instance
PLANNER_CONFIG = PlannerConfig()
