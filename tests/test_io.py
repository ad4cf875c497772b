import logging
from pathlib import Path

import pytest

from flightplan.graph import FlightGraph
from flightplan.io import (
    NetworkFormatError,
    RequestFormatError,
    graph_to_node_link,
    load_network,
    load_requests,
    node_link_to_graph,
    parse_network_lines,
    parse_network_yaml,
    parse_request_line,
    parse_request_lines,
    parse_weight,
)
from flightplan.planner import PlanRequest
from flightplan.types import Metric

DATA_DIR = Path(__file__).parent / "data"


class TestNetworkText:
    def test_parse_basic(self):
        g = parse_network_lines(
            ["2", "Dallas|Austin|50|60", "Austin|Houston|40|90"]
        )
        assert g.node_names() == ["Dallas", "Austin", "Houston"]
        assert g.connection_count() == 2
        assert [(e.destination, e.cost, e.time) for e in g.outgoing("Austin")] == [
            ("Dallas", 50, 60),
            ("Houston", 40, 90),
        ]

    def test_fields_are_trimmed(self):
        g = parse_network_lines(["1", " Dallas | Austin | 50 | 60 "])
        assert g.lookup("Dallas").edges[0].destination == "Austin"
        assert g.lookup("Dallas").edges[0].cost == 50

    def test_extends_existing_graph(self, texas):
        g = parse_network_lines(["1", "Houston|Austin|10|10"], graph=texas)
        assert g is texas
        assert texas.connection_count() == 4

    def test_header_with_trailing_text(self):
        g = parse_network_lines(["1 records", "A|B|1|2"])
        assert g.connection_count() == 1

    def test_blank_lines_ignored(self):
        g = parse_network_lines(["", "2", "", "A|B|1|2", "  ", "B|C|3|4"])
        assert g.connection_count() == 2

    def test_short_record_skipped(self, caplog):
        with caplog.at_level(logging.WARNING, logger="flightplan"):
            g = parse_network_lines(["2", "A|B|1", "B|C|3|4"])
        assert g.connection_count() == 1
        assert "expected 4 fields" in caplog.text

    @pytest.mark.parametrize("record", ["A|B|x|2", "A|B|1|2.5", "A|B|-1|2", "A|B|1|-2"])
    def test_bad_weights_skipped(self, record, caplog):
        with caplog.at_level(logging.WARNING, logger="flightplan"):
            g = parse_network_lines(["2", record, "B|C|3|4"])
        assert g.connection_count() == 1
        assert "Skipping line 2" in caplog.text

    def test_empty_city_name_skipped(self):
        g = parse_network_lines(["2", "|B|1|1", "B|C|3|4"])
        assert g.connection_count() == 1

    def test_premature_end_keeps_records(self, caplog):
        with caplog.at_level(logging.WARNING, logger="flightplan"):
            g = parse_network_lines(["5", "A|B|1|2"])
        assert g.connection_count() == 1
        assert "ended prematurely" in caplog.text

    def test_extra_records_ignored(self):
        g = parse_network_lines(["1", "A|B|1|2", "B|C|3|4"])
        assert g.connection_count() == 1
        assert "C" not in g

    def test_empty_input(self):
        with pytest.raises(NetworkFormatError, match="empty"):
            parse_network_lines([])

    def test_non_integer_header(self):
        with pytest.raises(NetworkFormatError, match="line 1"):
            parse_network_lines(["A|B|1|2"])

    def test_negative_header(self):
        with pytest.raises(NetworkFormatError, match="non-negative"):
            parse_network_lines(["-1"])

    def test_custom_separator(self):
        g = parse_network_lines(["1", "A,B,1,2"], separator=",")
        assert g.connection_count() == 1

    def test_parse_weight(self):
        assert parse_weight(" 42 ") == 42
        with pytest.raises(ValueError):
            parse_weight("-3")
        with pytest.raises(ValueError):
            parse_weight("abc")


class TestNetworkYaml:
    def test_mappings_and_lists(self):
        g = parse_network_yaml(
            """
connections:
  - {origin: Dallas, destination: Austin, cost: 50, time: 60}
  - [Austin, Houston, 40, 90]
"""
        )
        assert g.connection_count() == 2
        assert g.lookup("houston").edges[0].time == 90

    def test_empty_document(self):
        assert len(parse_network_yaml("")) == 0

    def test_top_level_must_be_mapping(self):
        with pytest.raises(NetworkFormatError, match="dictionary"):
            parse_network_yaml("- a\n- b\n")

    def test_connections_must_be_list(self):
        with pytest.raises(NetworkFormatError, match="must be a list"):
            parse_network_yaml("connections: {a: 1}\n")

    def test_missing_fields(self):
        with pytest.raises(NetworkFormatError, match="missing time"):
            parse_network_yaml(
                "connections:\n  - {origin: A, destination: B, cost: 1}\n"
            )

    def test_bad_entry_shape(self):
        with pytest.raises(NetworkFormatError, match="4-item list"):
            parse_network_yaml("connections:\n  - [A, B, 1]\n")

    @pytest.mark.parametrize(
        "entry",
        [
            "['', B, 1, 1]",
            "[A, '  ', 1, 1]",
            "[null, B, 1, 1]",
            "{origin: A, destination: null, cost: 1, time: 1}",
        ],
    )
    def test_empty_city_names(self, entry):
        with pytest.raises(NetworkFormatError, match="empty city name"):
            parse_network_yaml(f"connections:\n  - {entry}\n")

    def test_city_names_must_be_strings(self):
        with pytest.raises(NetworkFormatError, match="must be strings"):
            parse_network_yaml("connections:\n  - [A, 42, 1, 1]\n")

    def test_invalid_yaml_syntax(self):
        with pytest.raises(NetworkFormatError, match="invalid YAML"):
            parse_network_yaml("connections: [\n  - {origin: A\n")

    @pytest.mark.parametrize("weight", ["-1", "1.5", "'1'", "true"])
    def test_bad_weights(self, weight):
        with pytest.raises(NetworkFormatError, match="non-negative integers"):
            parse_network_yaml(f"connections:\n  - [A, B, {weight}, 1]\n")


class TestLoadNetwork:
    def test_text_file(self):
        g = load_network(DATA_DIR / "flights.txt")
        assert g.connection_count() == 3

    def test_yaml_file(self):
        g = load_network(DATA_DIR / "flights.yaml")
        assert g.connection_count() == 3
        assert sorted(g.node_names()) == ["Austin", "Dallas", "Houston"]

    def test_text_and_yaml_agree(self):
        text = load_network(DATA_DIR / "flights.txt")
        yml = load_network(str(DATA_DIR / "flights.yaml"))
        assert graph_to_node_link(text) == graph_to_node_link(yml)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_network(tmp_path / "nope.txt")


class TestRequests:
    def test_parse_request_line(self):
        request = parse_request_line("Dallas|Houston|c", number=4)
        assert request == PlanRequest("Dallas", "Houston", Metric.COST, 4)

    @pytest.mark.parametrize(
        "line,match",
        [
            ("Dallas|Houston", "expected"),
            ("Dallas|Houston|C|extra", "expected"),
            ("|Houston|C", "empty city name"),
            ("Dallas|Houston|X", "Invalid metric"),
        ],
    )
    def test_parse_request_line_errors(self, line, match):
        with pytest.raises(RequestFormatError, match=match):
            parse_request_line(line)

    def test_parse_request_lines_numbering(self, caplog):
        with caplog.at_level(logging.WARNING, logger="flightplan"):
            requests = parse_request_lines(
                ["3", "Dallas|Houston|C", "bad line", "Houston|Dallas|T"]
            )
        assert requests == [
            PlanRequest("Dallas", "Houston", Metric.COST, 1),
            PlanRequest("Houston", "Dallas", Metric.TIME, 3),
        ]
        assert "Skipping request 2" in caplog.text

    def test_request_file_ends_early(self, caplog):
        with caplog.at_level(logging.WARNING, logger="flightplan"):
            requests = parse_request_lines(["4", "A|B|T"])
        assert len(requests) == 1
        assert "ended early" in caplog.text

    def test_request_header_required(self):
        with pytest.raises(RequestFormatError, match="record count"):
            parse_request_lines(["A|B|T"])

    def test_load_requests(self):
        requests = load_requests(DATA_DIR / "requests.txt")
        assert [(r.origin, r.destination, r.metric, r.number) for r in requests] == [
            ("Dallas", "Houston", Metric.COST, 1),
            ("Houston", "Dallas", Metric.TIME, 2),
            ("Dallas", "El Paso", Metric.COST, 3),
        ]


class TestNodeLink:
    def test_graph_to_node_link(self):
        g = FlightGraph()
        g.add_connection("A", "B", 1, 2)
        assert graph_to_node_link(g) == {
            "nodes": [{"id": "A"}, {"id": "B"}],
            "links": [
                {"source": 0, "target": 1, "key": 0, "cost": 1, "time": 2},
                {"source": 1, "target": 0, "key": 1, "cost": 1, "time": 2},
            ],
        }

    def test_node_link_restores_parallel_edges(self, parallel):
        data = graph_to_node_link(parallel)
        restored = node_link_to_graph(data)
        assert restored.connection_count() == parallel.connection_count()
        assert sorted((e.cost, e.time) for e in restored.outgoing("A")) == [
            (10, 5),
            (20, 1),
        ]

    def test_node_link_keeps_isolated_cities(self, texas_with_isolated):
        restored = node_link_to_graph(graph_to_node_link(texas_with_isolated))
        assert "El Paso" in restored
        assert restored.connection_count() == 3
