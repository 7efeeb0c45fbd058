"""Recoverable problems found while ingesting data or configuring a renderer.

Nothing in the core raises for bad input records. Problems are described by
a :class:`Diagnostic` and handed to a reporter callable, which defaults to
:func:`warn_diagnostic`.
"""

from __future__ import annotations

__all__ = [
    "Diagnostic",
    "DiagnosticKind",
    "DiagnosticReporter",
    "RailmapWarning",
    "warn_diagnostic",
]

import logging
import warnings
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class RailmapWarning(UserWarning):
    """Warning category for diagnostics emitted by the default reporter."""


class DiagnosticKind(Enum):
    MISSING_POSITION = "missing_position"
    DUPLICATE_STATION = "duplicate_station"
    MISSING_STATION = "missing_station"
    INVALID_RECORD = "invalid_record"
    AMBIGUOUS_ROUTE_STEP = "ambiguous_route_step"
    UNMATCHED_ROUTE_STEP = "unmatched_route_step"
    INVALID_CONFIG = "invalid_config"


@dataclass(frozen=True)
class Diagnostic:
    """A single reported problem and the input that caused it."""

    kind: DiagnosticKind
    message: str
    record: Any = None

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"


DiagnosticReporter = Callable[[Diagnostic], None]


def warn_diagnostic(diagnostic: Diagnostic) -> None:
    """Default reporter: log the diagnostic and emit a RailmapWarning."""
    logger.warning("%s", diagnostic)
    warnings.warn(str(diagnostic), RailmapWarning, stacklevel=2)
