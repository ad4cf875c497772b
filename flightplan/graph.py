"""Undirected flight network stored as a case-insensitive multigraph.

`FlightGraph` extends `networkx.MultiDiGraph`. Every connection between two
cities is stored as a pair of directed edges with identical ``cost`` and
``time`` attributes, so parallel connections between the same pair are kept
and explored independently. Node keys are case-folded names; the spelling of
the first reference is kept in the ``name`` node attribute.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Hashable, Iterator, List, Optional, Tuple

import networkx as nx

from flightplan.types import Weight

NodeKey = str
EdgeID = Hashable


def node_key(name: str) -> NodeKey:
    """Return the case-insensitive key used to identify a node by name."""
    return name.strip().casefold()


@dataclass(frozen=True)
class Edge:
    """Directed, weighted connection owned by its source node.

    Attributes:
        destination: Display name of the destination node.
        cost: Non-negative cost of traversing the edge.
        time: Non-negative travel time of the edge.
        key: Graph-unique edge identifier.
    """

    destination: str
    cost: Weight
    time: Weight
    key: EdgeID = None


@dataclass(frozen=True)
class Node:
    """Named location with its outgoing edges in insertion order."""

    name: str
    edges: Tuple[Edge, ...] = ()

    @property
    def key(self) -> NodeKey:
        return node_key(self.name)

    def __iter__(self) -> Iterator[Edge]:
        return iter(self.edges)

    def __len__(self) -> int:
        return len(self.edges)


class FlightGraph(nx.MultiDiGraph):
    """Adjacency-list flight network with bidirectional weighted connections.

    This class enforces:
      - Node identity is the case-folded name; lookups ignore case.
      - Nodes are created on first reference and never removed by the API.
      - Each connection adds two directed edges with equal weights.
      - Edge keys are unique, monotonically increasing integers.

    Inherits from:
        networkx.MultiDiGraph
    """

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        # Advances only; keys are never reused.
        self._next_edge_id: int = 0

    def new_edge_key(self, u: Any, v: Any, key: Optional[int] = None) -> int:  # type: ignore[override]
        """Return a new unique integer edge ID.

        Signature matches NetworkX's ``new_edge_key(self, u, v, key=None)``.
        """
        next_edge_id = self._next_edge_id
        self._next_edge_id += 1
        return next_edge_id

    def __contains__(self, n: object) -> bool:
        if isinstance(n, str):
            n = node_key(n)
        return super().__contains__(n)

    #
    # Construction
    #
    def add_city(self, name: str) -> NodeKey:
        """Return the key for ``name``, creating the node if it is new."""
        key = node_key(name)
        if key not in self._node:
            super().add_node(key, name=name.strip())
        return key

    def add_connection(
        self, a: str, b: str, cost: Weight, time: Weight
    ) -> Tuple[EdgeID, EdgeID]:
        """Add an undirected connection between ``a`` and ``b``.

        Both endpoints are created on first reference. The connection is
        stored as the directed edges a->b and b->a with the same weights.
        Calling this again for the same pair adds parallel edges.

        Args:
            a: Name of the first endpoint.
            b: Name of the second endpoint.
            cost: Non-negative integer cost.
            time: Non-negative integer time.

        Returns:
            The keys of the a->b and b->a edges.
        """
        a_key = self.add_city(a)
        b_key = self.add_city(b)
        forward = self.add_edge(a_key, b_key, cost=cost, time=time)
        backward = self.add_edge(b_key, a_key, cost=cost, time=time)
        return forward, backward

    #
    # Queries
    #
    def lookup(self, name: str) -> Optional[Node]:
        """Return the node called ``name`` (ignoring case), or None.

        Args:
            name: City name in any letter case.

        Returns:
            A `Node` snapshot with its outgoing edges, or None if absent.
        """
        key = node_key(name)
        if key not in self._node:
            return None
        edges = tuple(
            Edge(
                destination=self._node[dst]["name"],
                cost=attr["cost"],
                time=attr["time"],
                key=edge_id,
            )
            for _, dst, edge_id, attr in self.out_edges(key, keys=True, data=True)
        )
        return Node(name=self._node[key]["name"], edges=edges)

    def outgoing(self, name: str) -> Tuple[Edge, ...]:
        """Return outgoing edges of ``name``; empty when the node is unknown."""
        node = self.lookup(name)
        return node.edges if node is not None else ()

    def display_name(self, name: str) -> Optional[str]:
        """Return the stored spelling of ``name``, or None if absent."""
        key = node_key(name)
        if key not in self._node:
            return None
        return self._node[key]["name"]

    def node_names(self) -> List[str]:
        """Return display names of all nodes in creation order."""
        return [attr["name"] for _, attr in self.nodes(data=True)]

    def connection_count(self) -> int:
        """Return the number of undirected connections (edge pairs)."""
        return self.number_of_edges() // 2

