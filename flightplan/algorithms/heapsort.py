"""In-place min-heap sort of routes, most efficient first.

The heap lives in a plain list viewed as an implicit binary tree: the
children of index ``i`` are ``2i + 1`` and ``2i + 2``. Building the heap and
repeatedly moving the minimum to the end of the shrinking active range leaves
the list in descending order, which a final reversal turns ascending.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Union

from flightplan.logging import get_logger
from flightplan.route import MetricMismatchError, Route
from flightplan.types import Metric

logger = get_logger(__name__)


def _sift_down(heap: List[Route], i: int, size: int) -> None:
    """Restore the min-heap property below index ``i`` within ``heap[:size]``."""
    while True:
        smallest = i
        left = 2 * i + 1
        right = 2 * i + 2

        if left < size and heap[left] < heap[smallest]:
            smallest = left
        if right < size and heap[right] < heap[smallest]:
            smallest = right

        if smallest == i:
            return
        heap[i], heap[smallest] = heap[smallest], heap[i]
        i = smallest


def build_min_heap(heap: List[Route]) -> None:
    """Arrange ``heap`` in place so that every parent is <= its children."""
    for i in range(len(heap) // 2 - 1, -1, -1):
        _sift_down(heap, i, len(heap))


def is_min_heap(heap: List[Route], size: Optional[int] = None) -> bool:
    """Return True if ``heap[:size]`` satisfies the min-heap property."""
    size = len(heap) if size is None else size
    for i in range(size // 2):
        for child in (2 * i + 1, 2 * i + 2):
            if child < size and heap[child] < heap[i]:
                return False
    return True


def _check_metric(routes: List[Route]) -> None:
    metrics = {route.metric for route in routes}
    if len(metrics) > 1:
        names = ", ".join(sorted(m.name for m in metrics))
        raise MetricMismatchError(
            f"Routes must share a single ranking metric; got {names}."
        )


def heap_sort(
    routes: Iterable[Route], metric: Optional[Union[Metric, str]] = None
) -> List[Route]:
    """Return ``routes`` sorted ascending by their ranking metric.

    Args:
        routes: Routes to rank. The input collection is not modified.
        metric: Optional metric to rank by. When given, every route is
            re-derived with this metric before sorting.

    Returns:
        A new list, smallest metric value first.

    Raises:
        MetricMismatchError: If ``metric`` is None and the routes carry
            different metric tags.
    """
    heap = list(routes)
    if metric is not None:
        heap = [route.with_metric(Metric.coerce(metric)) for route in heap]
    if len(heap) <= 1:
        return heap
    _check_metric(heap)

    build_min_heap(heap)

    size = len(heap)
    while size > 1:
        # Move the current minimum just before the previously extracted tail
        heap[0], heap[size - 1] = heap[size - 1], heap[0]
        size -= 1
        _sift_down(heap, 0, size)

    heap.reverse()
    logger.debug("Ranked %d routes by %s", len(heap), heap[0].metric.name)
    return heap


rank_routes = heap_sort
