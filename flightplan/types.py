"""Shared scalar types and enums for route search and ranking."""

from __future__ import annotations

from enum import IntEnum
from typing import Union

#: Non-negative integer weight carried by an edge (dollars or minutes).
Weight = int


class Metric(IntEnum):
    """Scalar route field used to rank candidate routes.

    The single-character markers ``"C"`` and ``"T"`` are the tags used in
    request files.
    """

    #: Rank by accumulated cost.
    COST = 1
    #: Rank by accumulated time.
    TIME = 2

    @property
    def marker(self) -> str:
        """Single-character tag used in request files."""
        return "C" if self is Metric.COST else "T"

    @property
    def label(self) -> str:
        """Human-readable name, e.g. ``"Cost"``."""
        return self.name.capitalize()

    @property
    def field(self) -> str:
        """Name of the route attribute holding this metric's total."""
        return self.name.lower()

    @classmethod
    def from_string(cls, value: str) -> "Metric":
        """Parse a metric tag strictly.

        Args:
            value: Case-insensitive tag: ``"C"``, ``"T"``, ``"cost"`` or ``"time"``.

        Returns:
            The corresponding Metric member.

        Raises:
            ValueError: If the tag is not recognized.
        """
        tag = value.strip().upper()
        for member in cls:
            if tag in (member.marker, member.name):
                return member
        valid = ", ".join(f"{m.marker}/{m.name.lower()}" for m in cls)
        raise ValueError(f"Invalid metric '{value}'. Valid values are: {valid}")

    @classmethod
    def coerce(cls, value: Union["Metric", str]) -> "Metric":
        """Lenient conversion used by the search core.

        Anything other than the cost marker maps to ``Metric.TIME``.
        """
        if isinstance(value, Metric):
            return value
        tag = str(value).strip().upper()
        if tag in (cls.COST.marker, cls.COST.name):
            return cls.COST
        return cls.TIME
