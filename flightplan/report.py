"""Plain-text rendering of flight plans and network summaries."""

from __future__ import annotations

from typing import Any, List, Optional, Sequence

from flightplan.config import PLANNER_CONFIG, PlannerConfig
from flightplan.graph import FlightGraph
from flightplan.planner import PlanResult
from flightplan.route import Route

INDENT = "    "


def format_table(
    headers: List[str],
    rows: List[List[Any]],
    min_width: int = 8,
    max_col_width: Optional[int] = None,
) -> str:
    """Format data as a simple ASCII table.

    Args:
        headers: Column headers.
        rows: Data rows.
        min_width: Minimum column width.
        max_col_width: Clip longer cells with an ASCII ellipsis.

    Returns:
        Formatted table string, or "" when there are no rows.
    """
    if not rows:
        return ""

    def clip(val: Any) -> str:
        s = str(val)
        if max_col_width is not None and len(s) > max_col_width:
            return s[: max_col_width - 3] + "..."
        return s

    clipped_headers = [clip(h) for h in headers]
    clipped_rows = [[clip(item) for item in row] for row in rows]

    all_data = [clipped_headers] + clipped_rows
    col_widths = [
        max(max(len(row[col_idx]) for row in all_data), min_width)
        for col_idx in range(len(clipped_headers))
    ]

    def format_row(row_data: List[str]) -> str:
        return "   " + " | ".join(
            f"{item:<{col_widths[i]}}" for i, item in enumerate(row_data)
        )

    lines = [format_row(clipped_headers)]
    lines.append("   " + "-+-".join("-" * width for width in col_widths))
    lines.extend(format_row(row) for row in clipped_rows)
    return "\n".join(lines)


def format_path(path: Sequence[str], separator: str = PLANNER_CONFIG.path_separator) -> str:
    """Join node names with arrows, e.g. ``Dallas -> Austin -> Houston``."""
    return separator.join(path)


def format_route(
    index: int, route: Route, config: PlannerConfig = PLANNER_CONFIG
) -> str:
    """Render one ranked route as ``Path N: A -> B. Time: T Cost: C``."""
    return (
        f"Path {index}: {format_path(route.path, config.path_separator)}. "
        f"Time: {route.time} Cost: {route.cost:.{config.cost_precision}f}"
    )


def format_plan(result: PlanResult, config: PlannerConfig = PLANNER_CONFIG) -> str:
    """Render a request header followed by its top routes."""
    request = result.request
    lines = [
        f"Flight {request.number}: {request.origin}, {request.destination} "
        f"({request.metric.label})"
    ]
    if not result.found:
        lines.append(
            f"{INDENT}No flight plan can be created between "
            f"{request.origin} and {request.destination}."
        )
    else:
        lines.extend(
            INDENT + format_route(i, route, config)
            for i, route in enumerate(result.top, start=1)
        )
    return "\n".join(lines)


def format_network_summary(graph: FlightGraph) -> str:
    """Render city and connection counts plus a per-city table."""
    names = graph.node_names()
    header = (
        f"Cities: {len(names)}\n"
        f"Connections: {graph.connection_count()}"
    )
    rows = []
    for name in sorted(names, key=str.casefold):
        edges = graph.outgoing(name)
        neighbors = sorted({edge.destination for edge in edges}, key=str.casefold)
        rows.append([name, len(edges), ", ".join(neighbors)])
    table = format_table(["City", "Flights", "Destinations"], rows, max_col_width=60)
    return f"{header}\n{table}" if table else header
