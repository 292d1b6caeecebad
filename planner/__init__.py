"""Planungs-Modul: Validierung und Abgleich der KI-Antworten mit dem Lernplan."""

from .errors import (
    EmptyBatchError,
    FailureKind,
    InputPreconditionError,
    PlannerError,
    ResponseParseError,
    TransportError,
)
from .weights import normalize_assessments, normalize_weights
from .dates import clamp_horizon, is_valid_time, parse_iso_date, weeks_between

__all__ = [
    "EmptyBatchError",
    "FailureKind",
    "InputPreconditionError",
    "PlannerError",
    "ResponseParseError",
    "TransportError",
    "normalize_assessments",
    "normalize_weights",
    "clamp_horizon",
    "is_valid_time",
    "parse_iso_date",
    "weeks_between",
]
