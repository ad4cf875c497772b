"""Readers for flight data and request files, plus node-link export.

Flight data text format::

    3
    Dallas|Austin|98|47
    Austin|Houston|95|39
    Dallas|Houston|101|51

The first line holds the number of records. Each record is
``Origin|Destination|Cost|Time``. Request files use the same header and
``Origin|Destination|SortBy`` records, where SortBy is ``C`` or ``T``.

Flight data may also be written in YAML with a top-level ``connections`` list
whose items are mappings (``origin``, ``destination``, ``cost``, ``time``) or
four-item lists.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple, Union

import yaml

from flightplan.config import PLANNER_CONFIG
from flightplan.graph import FlightGraph
from flightplan.logging import get_logger
from flightplan.planner import PlanRequest
from flightplan.types import Metric, Weight

logger = get_logger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")


class NetworkFormatError(ValueError):
    """Raised when flight data cannot be parsed."""

    def __init__(self, message: str, line_no: Optional[int] = None) -> None:
        self.line_no = line_no
        if line_no is not None:
            message = f"line {line_no}: {message}"
        super().__init__(message)


class RequestFormatError(ValueError):
    """Raised when a route request cannot be parsed."""

    def __init__(self, message: str, line_no: Optional[int] = None) -> None:
        self.line_no = line_no
        if line_no is not None:
            message = f"line {line_no}: {message}"
        super().__init__(message)


def _numbered(lines: Iterable[str]) -> Iterator[Tuple[int, str]]:
    """Yield (line_no, stripped_line) for non-blank lines."""
    for line_no, raw in enumerate(lines, start=1):
        line = raw.strip()
        if line:
            yield line_no, line


def _read_count(
    numbered: Iterator[Tuple[int, str]], what: str, error: type
) -> int:
    """Consume the header line and return its record count."""
    try:
        line_no, header = next(numbered)
    except StopIteration:
        raise error(f"{what} input is empty.") from None
    token = header.split()[0]
    try:
        count = int(token)
    except ValueError:
        raise error(
            f"expected an integer record count, got '{header}'", line_no
        ) from None
    if count < 0:
        raise error(f"record count must be non-negative, got {count}", line_no)
    return count


def parse_weight(token: str) -> Weight:
    """Parse a non-negative integer weight.

    Raises:
        ValueError: If ``token`` is not a non-negative integer.
    """
    value = int(token.strip())
    if value < 0:
        raise ValueError(f"weight must be non-negative, got {value}")
    return value


def parse_network_lines(
    lines: Iterable[str],
    graph: Optional[FlightGraph] = None,
    separator: str = PLANNER_CONFIG.field_separator,
) -> FlightGraph:
    """Build or extend a FlightGraph from flight data text lines.

    Records with fewer than four fields or with malformed weights are
    skipped with a warning. If the input ends before the declared number of
    records, the records read so far are kept.

    Args:
        lines: Text lines, header first.
        graph: Existing graph to extend; a new graph is created if None.
        separator: Field separator.

    Returns:
        The populated graph.

    Raises:
        NetworkFormatError: If the header is missing or not an integer.
    """
    if graph is None:
        graph = FlightGraph()

    numbered = _numbered(lines)
    expected = _read_count(numbered, "Flight data", NetworkFormatError)

    added = 0
    for _ in range(expected):
        try:
            line_no, line = next(numbered)
        except StopIteration:
            logger.warning(
                "Flight data ended prematurely: expected %d records, read %d",
                expected,
                added,
            )
            break

        parts = line.split(separator)
        if len(parts) < 4:
            logger.warning("Skipping line %d: expected 4 fields: %s", line_no, line)
            continue

        origin, destination = parts[0].strip(), parts[1].strip()
        if not origin or not destination:
            logger.warning("Skipping line %d: empty city name: %s", line_no, line)
            continue
        try:
            cost = parse_weight(parts[2])
            time = parse_weight(parts[3])
        except ValueError as exc:
            logger.warning("Skipping line %d: %s", line_no, exc)
            continue

        graph.add_connection(origin, destination, cost, time)
        added += 1

    logger.info(
        "Added %d connections between %d cities", added, graph.number_of_nodes()
    )
    return graph


def _yaml_connection(entry: Any, index: int) -> Tuple[str, str, Weight, Weight]:
    if isinstance(entry, dict):
        missing = [
            k for k in ("origin", "destination", "cost", "time") if k not in entry
        ]
        if missing:
            raise NetworkFormatError(
                f"connection {index} is missing {', '.join(missing)}"
            )
        fields = [entry["origin"], entry["destination"], entry["cost"], entry["time"]]
    elif isinstance(entry, list) and len(entry) == 4:
        fields = list(entry)
    else:
        raise NetworkFormatError(
            f"connection {index} must be a mapping or a 4-item list"
        )

    origin, destination, cost, time = fields
    names = []
    for name in (origin, destination):
        if name is not None and not isinstance(name, str):
            raise NetworkFormatError(f"connection {index} city names must be strings")
        if name is None or not name.strip():
            raise NetworkFormatError(f"connection {index} has an empty city name")
        names.append(name.strip())
    for weight in (cost, time):
        if isinstance(weight, bool) or not isinstance(weight, int) or weight < 0:
            raise NetworkFormatError(
                f"connection {index} weights must be non-negative integers"
            )
    return names[0], names[1], cost, time


def parse_network_yaml(
    yaml_str: str, graph: Optional[FlightGraph] = None
) -> FlightGraph:
    """Build or extend a FlightGraph from a YAML document.

    Raises:
        NetworkFormatError: If the document is not valid YAML or does not have
            the expected shape.
    """
    try:
        data = yaml.safe_load(yaml_str)
    except yaml.YAMLError as exc:
        raise NetworkFormatError(f"invalid YAML: {exc}") from exc
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise NetworkFormatError("The provided YAML must map to a dictionary at top-level.")

    connections = data.get("connections", [])
    if not isinstance(connections, list):
        raise NetworkFormatError("'connections' must be a list")

    if graph is None:
        graph = FlightGraph()
    for index, entry in enumerate(connections):
        graph.add_connection(*_yaml_connection(entry, index))

    logger.info(
        "Added %d connections between %d cities",
        len(connections),
        graph.number_of_nodes(),
    )
    return graph


def load_network(
    path: Union[str, Path], separator: str = PLANNER_CONFIG.field_separator
) -> FlightGraph:
    """Load a flight network from a text or YAML file.

    The format is chosen by suffix: ``.yaml``/``.yml`` is YAML, anything else
    is the pipe-separated text format.
    """
    path = Path(path)
    logger.debug("Loading flight data from %s", path)
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() in YAML_SUFFIXES:
        return parse_network_yaml(text)
    return parse_network_lines(text.splitlines(), separator=separator)


def parse_request_line(
    line: str,
    number: int = 0,
    separator: str = PLANNER_CONFIG.field_separator,
    line_no: Optional[int] = None,
) -> PlanRequest:
    """Parse one ``Origin|Destination|SortBy`` request.

    Raises:
        RequestFormatError: If the line does not have exactly three fields,
            a city name is empty, or the sort key is invalid.
    """
    parts = [part.strip() for part in line.strip().split(separator)]
    if len(parts) != 3:
        raise RequestFormatError(
            f"expected Origin{separator}Destination{separator}SortBy, got '{line.strip()}'",
            line_no,
        )
    origin, destination, sort_by = parts
    if not origin or not destination:
        raise RequestFormatError(f"empty city name in '{line.strip()}'", line_no)
    try:
        metric = Metric.from_string(sort_by)
    except ValueError as exc:
        raise RequestFormatError(str(exc), line_no) from None
    return PlanRequest(origin, destination, metric, number)


def parse_request_lines(
    lines: Iterable[str], separator: str = PLANNER_CONFIG.field_separator
) -> List[PlanRequest]:
    """Parse a request file body, skipping malformed requests.

    Requests are numbered by their position in the file starting at 1,
    including skipped ones.

    Raises:
        RequestFormatError: If the header is missing or not an integer.
    """
    numbered = _numbered(lines)
    expected = _read_count(numbered, "Request", RequestFormatError)

    requests: List[PlanRequest] = []
    for number in range(1, expected + 1):
        try:
            line_no, line = next(numbered)
        except StopIteration:
            logger.warning(
                "Request file ended early: expected %d requests", expected
            )
            break
        try:
            requests.append(parse_request_line(line, number, separator, line_no))
        except RequestFormatError as exc:
            logger.warning("Skipping request %d: %s", number, exc)
    return requests


def load_requests(
    path: Union[str, Path], separator: str = PLANNER_CONFIG.field_separator
) -> List[PlanRequest]:
    """Load route requests from a text file."""
    path = Path(path)
    logger.debug("Loading requests from %s", path)
    return parse_request_lines(
        path.read_text(encoding="utf-8").splitlines(), separator=separator
    )


def graph_to_node_link(graph: FlightGraph) -> Dict[str, Any]:
    """Convert a FlightGraph into a node-link dict representation.

    The returned dict has the following structure::

        {
            "nodes": [{"id": <display name>}, ...],
            "links": [
                {"source": <index>, "target": <index>, "key": <edge id>,
                 "cost": <int>, "time": <int>},
                ...
            ]
        }

    Both directions of every connection are listed.
    """
    node_keys = list(graph.nodes)
    node_map = {key: i for i, key in enumerate(node_keys)}
    return {
        "nodes": [{"id": graph.nodes[key]["name"]} for key in node_keys],
        "links": [
            {
                "source": node_map[src],
                "target": node_map[dst],
                "key": edge_id,
                "cost": attr["cost"],
                "time": attr["time"],
            }
            for src, dst, edge_id, attr in graph.edges(keys=True, data=True)
        ],
    }


def node_link_to_graph(data: Dict[str, Any]) -> FlightGraph:
    """Rebuild a FlightGraph from `graph_to_node_link` output.

    Only one direction of each connection is replayed, since
    `FlightGraph.add_connection` adds the reverse edge itself.
    """
    names = [node["id"] for node in data.get("nodes", [])]
    graph = FlightGraph()
    for name in names:
        graph.add_city(name)

    pending: Dict[Tuple[int, int, Weight, Weight], int] = {}
    for link in data.get("links", []):
        src, dst = link["source"], link["target"]
        reverse = (dst, src, link["cost"], link["time"])
        if pending.get(reverse):
            pending[reverse] -= 1
            continue
        forward = (src, dst, link["cost"], link["time"])
        pending[forward] = pending.get(forward, 0) + 1
        graph.add_connection(names[src], names[dst], link["cost"], link["time"])
    return graph
