"""Route search and ranking algorithms."""

from flightplan.algorithms.heapsort import heap_sort, rank_routes
from flightplan.algorithms.search import find_routes

__all__ = ["find_routes", "heap_sort", "rank_routes"]
