"""Command-line interface for FlightPlan."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Callable, List, NoReturn, Optional

from flightplan.config import PLANNER_CONFIG, PlannerConfig
from flightplan.graph import FlightGraph
from flightplan.io import (
    RequestFormatError,
    graph_to_node_link,
    load_network,
    load_requests,
    parse_request_line,
)
from flightplan.logging import get_logger, set_global_log_level
from flightplan.planner import FlightPlanner, PlanResult
from flightplan.report import format_network_summary, format_plan
from flightplan.types import Metric

logger = get_logger(__name__)

# Request number shown for manually entered requests
MANUAL_REQUEST_NUMBER = 999


def _fail(message: str) -> NoReturn:
    logger.error(message)
    print(f"❌ ERROR: {message}")
    sys.exit(1)


def _load_graph(path: Path) -> FlightGraph:
    logger.info(f"Loading flight data from: {path}")
    try:
        return load_network(path)
    except FileNotFoundError:
        _fail(f"Flight data file not found: {path}")
    except ValueError as e:
        _fail(f"Failed to load flight data: {e}")


def _write_results(results: List[PlanResult], path: Path) -> None:
    payload = {"plans": [result.to_dict() for result in results]}
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    logger.info(f"Results written to: {path}")
    print(f"✅ Results written to: {path}")


def _process_request_file(
    planner: FlightPlanner,
    requests_path: Path,
    results_path: Optional[Path] = None,
) -> None:
    """Process a request file and print each plan."""
    try:
        requests = load_requests(requests_path, planner.config.field_separator)
    except FileNotFoundError:
        _fail(f"Requests file not found: {requests_path}")
    except ValueError as e:
        _fail(f"Failed to load requests: {e}")

    print("Processing File Requests...")
    results = planner.plan_many(requests)
    for result in results:
        print("\n" + format_plan(result, planner.config))

    logger.info(f"Processed {len(results)} requests")
    if results_path is not None:
        _write_results(results, results_path)


def _run_requests(
    network: Path,
    requests_path: Path,
    config: PlannerConfig,
    results_path: Optional[Path] = None,
) -> None:
    planner = FlightPlanner(_load_graph(network), config)
    _process_request_file(planner, requests_path, results_path)


def _run_query(
    network: Path,
    origin: str,
    destination: str,
    metric: Metric,
    config: PlannerConfig,
    as_json: bool = False,
) -> None:
    """Run a single request given on the command line."""
    planner = FlightPlanner(_load_graph(network), config)
    result = planner.plan(origin, destination, metric, number=1)
    if as_json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(format_plan(result, config))


def _inspect_network(network: Path, as_json: bool = False) -> None:
    graph = _load_graph(network)
    if as_json:
        print(json.dumps(graph_to_node_link(graph), indent=2))
    else:
        print(format_network_summary(graph))


def _interactive_loop(
    planner: FlightPlanner,
    input_func: Optional[Callable[[str], str]] = None,
) -> None:
    """Prompt for manual requests until the user exits."""
    read = input_func if input_func is not None else input
    while True:
        print("\n--- Flight Plan Source ---")
        print("Select next action:")
        print("  [M] Enter a Manual Flight Request")
        print("  [E] Exit Program")
        try:
            choice = read("Enter choice (M/E): ").strip().upper()[:1]
        except EOFError:
            break

        if choice == "E":
            break
        if choice != "M":
            print("Invalid choice. Please enter M or E.")
            continue

        try:
            line = read(
                "Enter request (Format: Origin|Destination|SortBy - e.g., Chicago|Dallas|C): "
            )
        except EOFError:
            break
        try:
            request = parse_request_line(
                line, MANUAL_REQUEST_NUMBER, planner.config.field_separator
            )
        except RequestFormatError as e:
            logger.warning(f"Invalid manual request: {e}")
            print(f"Invalid request: {e}")
            continue
        print("\n" + format_plan(planner.run(request), planner.config))

    print("\n--- Program Exited. Thank you. ---")


def _run_shell(
    network: Path,
    requests_path: Optional[Path],
    config: PlannerConfig,
    input_func: Optional[Callable[[str], str]] = None,
) -> None:
    planner = FlightPlanner(_load_graph(network), config)
    if requests_path is not None:
        _process_request_file(planner, requests_path)
    _interactive_loop(planner, input_func)


def _metric_arg(value: str) -> Metric:
    try:
        return Metric.from_string(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def _top_arg(value: str) -> int:
    try:
        top = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: '{value}'") from None
    if top < 1:
        raise argparse.ArgumentTypeError("must be at least 1")
    return top


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``flightplan`` command.

    Args:
        argv: Optional list of command-line arguments. If ``None``, ``sys.argv``
            is used.
    """
    parser = argparse.ArgumentParser(
        prog="flightplan",
        description="Enumerate and rank flight routes between cities.",
    )

    # Global options
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Suppress informational logs"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        title="Available commands",
        metavar="{run,query,inspect,shell}",
        help="Available commands",
    )

    run_parser = subparsers.add_parser("run", help="Process a request file")
    run_parser.add_argument("network", type=Path, help="Path to flight data")
    run_parser.add_argument("requests", type=Path, help="Path to requests file")
    run_parser.add_argument(
        "--results",
        "-r",
        type=Path,
        default=None,
        help="Export ranked plans to a JSON file",
    )

    query_parser = subparsers.add_parser("query", help="Plan a single request")
    query_parser.add_argument("network", type=Path, help="Path to flight data")
    query_parser.add_argument("origin", help="Origin city")
    query_parser.add_argument("destination", help="Destination city")
    query_parser.add_argument(
        "--metric",
        "-m",
        type=_metric_arg,
        default=Metric.COST,
        help="Ranking metric: C/cost or T/time (default: cost)",
    )
    query_parser.add_argument(
        "--json", action="store_true", help="Print the plan as JSON"
    )

    inspect_parser = subparsers.add_parser(
        "inspect", help="Summarize a flight network"
    )
    inspect_parser.add_argument("network", type=Path, help="Path to flight data")
    inspect_parser.add_argument(
        "--json", action="store_true", help="Print the network in node-link JSON"
    )

    shell_parser = subparsers.add_parser(
        "shell", help="Enter manual requests interactively"
    )
    shell_parser.add_argument("network", type=Path, help="Path to flight data")
    shell_parser.add_argument(
        "requests",
        type=Path,
        nargs="?",
        default=None,
        help="Optional requests file processed before the prompt",
    )

    for p in (run_parser, query_parser, shell_parser):
        p.add_argument(
            "--top",
            "-n",
            type=_top_arg,
            default=PLANNER_CONFIG.top_n,
            help=f"Routes reported per request (default: {PLANNER_CONFIG.top_n})",
        )

    effective_args = sys.argv[1:] if argv is None else argv

    if not effective_args:
        parser.print_help()
        raise SystemExit(0)

    args = parser.parse_args(effective_args)

    if args.verbose:
        set_global_log_level(logging.DEBUG)
        logger.debug("Debug logging enabled")
    elif args.quiet:
        set_global_log_level(logging.WARNING)
    else:
        set_global_log_level(logging.INFO)

    top = getattr(args, "top", PLANNER_CONFIG.top_n)
    config = PlannerConfig(
        top_n=top,
        field_separator=PLANNER_CONFIG.field_separator,
        path_separator=PLANNER_CONFIG.path_separator,
        cost_precision=PLANNER_CONFIG.cost_precision,
    )

    if args.command == "run":
        _run_requests(args.network, args.requests, config, args.results)
    elif args.command == "query":
        _run_query(
            args.network,
            args.origin,
            args.destination,
            args.metric,
            config,
            as_json=args.json,
        )
    elif args.command == "inspect":
        _inspect_network(args.network, as_json=args.json)
    elif args.command == "shell":
        _run_shell(args.network, args.requests, config)


if __name__ == "__main__":
    main()
