"""Flat input records as delivered by a backend, before graph construction.

Records arrive as plain mappings (decoded JSON). Each record type accepts
the field names of the current API as well as the older backend spellings
(``x_position``, ``from_station_label``, ``colour``).
"""

from __future__ import annotations

__all__ = [
    "ConnectionRecord",
    "RouteStep",
    "StationRecord",
    "coerce_coordinate",
    "id_key",
]

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

Identifier = int | str


def _first(data: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    """Return the first non-null value among *keys* in *data*."""
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return default


def id_key(value: Identifier) -> str:
    """Canonical lookup key for a group or line id.

    Backends mix numeric and string ids, so ``1``, ``1.0`` and ``"1"`` all
    name the same group.
    """
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value)


def coerce_coordinate(value: Any) -> float | None:
    """Convert a raw coordinate to float, or None when it is unusable.

    Zero is a valid coordinate; only missing, non-numeric and non-finite
    values are rejected.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


@dataclass(frozen=True)
class StationRecord:
    """A station row: label, display name and a position on the x/z plane."""

    label: str
    name: str
    x: float | None
    z: float | None

    @property
    def has_position(self) -> bool:
        return self.x is not None and self.z is not None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> StationRecord:
        label = _first(data, "label")
        if label is None:
            raise ValueError(f"Station record has no label: {dict(data)!r}")
        return cls(
            label=str(label),
            name=str(_first(data, "name", default=label)),
            x=coerce_coordinate(_first(data, "x", "x_position")),
            z=coerce_coordinate(_first(data, "z", "z_position")),
        )


@dataclass(frozen=True)
class ConnectionRecord:
    """A directed connection row between two station labels."""

    from_label: str
    to_label: str
    group_id: Identifier
    group_name: str
    color: str
    line_id: Identifier | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> ConnectionRecord:
        from_label = _first(data, "from_label", "from_station_label", "from")
        to_label = _first(data, "to_label", "to_station_label", "to")
        group_id = _first(data, "group_id")
        if from_label is None or to_label is None or group_id is None:
            raise ValueError(
                f"Connection record needs from/to labels and a group_id: {dict(data)!r}"
            )
        return cls(
            from_label=str(from_label),
            to_label=str(to_label),
            group_id=group_id,
            group_name=str(_first(data, "group_name", default=group_id)),
            color=str(_first(data, "color", "colour", default="fff")),
            line_id=_first(data, "line_id"),
        )


@dataclass(frozen=True)
class RouteStep:
    """One hop of a highlighted route.

    ``line`` may hold a line id, a group id or a group name.
    """

    current_station_label: str
    next_station_label: str
    line: Identifier

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> RouteStep:
        current = _first(data, "current_station_label", "from_label", "from")
        nxt = _first(data, "next_station_label", "to_label", "to")
        line = _first(data, "current_line", "current_line_id", "line_id", "line")
        if current is None or nxt is None or line is None:
            raise ValueError(f"Route step is incomplete: {dict(data)!r}")
        return cls(
            current_station_label=str(current),
            next_station_label=str(nxt),
            line=line,
        )
