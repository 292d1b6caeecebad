"""Fehlerarten der Generierungsabläufe.

Aufrufer verzweigen über ``error.kind`` statt über Log-Texte.
"""

from enum import Enum


class FailureKind(str, Enum):
    INPUT_PRECONDITION = "input_precondition"    # keine Module/Slots/Key: vor jedem KI-Aufruf
    TRANSPORT = "transport"                      # Netzwerk, Auth, Limit, leere Antwort
    PARSE = "parse"                              # kein JSON / Pflichtschlüssel fehlt
    EMPTY_BATCH = "empty_batch"                  # kein einziger gültiger Datensatz


class PlannerError(Exception):
    """Basisklasse aller Ablauf-Fehler."""

    kind: FailureKind = FailureKind.TRANSPORT

    def __init__(self, message: str, kind: FailureKind | None = None):
        super().__init__(message)
        if kind is not None:
            self.kind = kind


class InputPreconditionError(PlannerError):
    kind = FailureKind.INPUT_PRECONDITION


class TransportError(PlannerError):
    kind = FailureKind.TRANSPORT


class ResponseParseError(PlannerError):
    kind = FailureKind.PARSE


class EmptyBatchError(PlannerError):
    kind = FailureKind.EMPTY_BATCH
