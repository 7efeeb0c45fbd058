"""Graph construction from flat station and connection records.

Turns the relational rows delivered by a backend into a deduplicated graph:
one Station per label, one Group per group id, one Line per (group, line id)
and at most one Connection per unordered station pair within a group.
"""

from __future__ import annotations

__all__ = ["IngestSummary", "load_graph"]

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from railmap.diagnostics import (
    Diagnostic,
    DiagnosticKind,
    DiagnosticReporter,
    warn_diagnostic,
)
from railmap.model import Connection, GraphModel, Station
from railmap.records import ConnectionRecord, StationRecord

logger = logging.getLogger(__name__)


@dataclass
class IngestSummary:
    """Counts of what one ``load_graph`` call kept and dropped."""

    stations: int = 0
    stations_skipped: int = 0
    connections: int = 0
    merged_two_way: int = 0
    duplicates_dropped: int = 0
    connections_skipped: int = 0


def _as_record(raw: Any, record_type: type, report: DiagnosticReporter) -> Any:
    if isinstance(raw, record_type):
        return raw
    if not isinstance(raw, Mapping):
        report(
            Diagnostic(
                DiagnosticKind.INVALID_RECORD,
                f"Expected a mapping for {record_type.__name__}, got {type(raw).__name__}",
                raw,
            )
        )
        return None
    try:
        return record_type.from_mapping(raw)
    except ValueError as e:
        report(Diagnostic(DiagnosticKind.INVALID_RECORD, str(e), raw))
        return None


def load_graph(
    graph: GraphModel,
    stations: Iterable[StationRecord | Mapping[str, Any]],
    connections: Iterable[ConnectionRecord | Mapping[str, Any]],
    report: DiagnosticReporter = warn_diagnostic,
) -> IngestSummary:
    """Reset *graph* and rebuild it from station and connection records.

    Stations without a usable x/z position are dropped. Connections naming a
    dropped or unknown station are skipped and reported; nothing raises.
    A connection whose reverse already exists in the same group marks the
    existing one two-way instead of adding a second edge.
    """
    graph.reset()
    summary = IngestSummary()

    for raw in stations:
        record = _as_record(raw, StationRecord, report)
        if record is None:
            summary.stations_skipped += 1
            continue
        if not record.has_position:
            report(
                Diagnostic(
                    DiagnosticKind.MISSING_POSITION,
                    f"Station {record.label!r} has no position and was not loaded",
                    raw,
                )
            )
            summary.stations_skipped += 1
            continue
        if graph.station(record.label) is not None:
            report(
                Diagnostic(
                    DiagnosticKind.DUPLICATE_STATION,
                    f"Station {record.label!r} is defined more than once; "
                    "keeping the first definition",
                    raw,
                )
            )
            summary.stations_skipped += 1
            continue
        # World y comes from the record's z (the map is the x/z ground plane)
        graph.add_station(Station(record.label, record.name, record.x, record.z))
        summary.stations += 1

    for raw in connections:
        record = _as_record(raw, ConnectionRecord, report)
        if record is None:
            summary.connections_skipped += 1
            continue

        from_station = graph.station(record.from_label)
        to_station = graph.station(record.to_label)
        missing = [
            label
            for label, st in (
                (record.from_label, from_station),
                (record.to_label, to_station),
            )
            if st is None
        ]
        if missing:
            report(
                Diagnostic(
                    DiagnosticKind.MISSING_STATION,
                    f"Connection {record.from_label!r} -> {record.to_label!r} "
                    f"references unknown station(s) {', '.join(map(repr, missing))}",
                    raw,
                )
            )
            summary.connections_skipped += 1
            continue

        group = graph.ensure_group(record.group_id, record.group_name, record.color)
        line_id = record.line_id if record.line_id is not None else record.group_id
        line = group.line(line_id)

        from_station.add_group(group)
        to_station.add_group(group)

        if from_station is not to_station:
            reverse = graph.find_connection(to_station, from_station, group)
            if reverse is not None:
                reverse.two_way = True
                summary.merged_two_way += 1
                continue

        if graph.find_connection(from_station, to_station, group) is not None:
            summary.duplicates_dropped += 1
            continue

        graph.add_connection(Connection(from_station, to_station, group, line))
        summary.connections += 1

    graph.sort_connections()

    logger.debug(
        "Loaded graph: %d stations (%d skipped), %d groups, %d connections "
        "(%d merged two-way, %d duplicates, %d skipped)",
        summary.stations,
        summary.stations_skipped,
        len(graph.groups),
        summary.connections,
        summary.merged_two_way,
        summary.duplicates_dropped,
        summary.connections_skipped,
    )
    return summary
