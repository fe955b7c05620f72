"""Error classes for the kinship and mission engines.

Absence of a result (no deduction rule, no path, no suggestions) is never
an error; these exceptions cover rejected input, unavailable upstream data
and invalid mission transitions only.
"""

from __future__ import annotations


class KinshipError(Exception):
    """Base exception for the kinship engines."""

    pass


class InvalidInputError(KinshipError):
    """Raised at the boundary when caller data is malformed."""

    pass


class InvalidRelationshipError(InvalidInputError):
    """Raised when a relationship tag is outside the closed vocabulary."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(f"Unrecognized relationship label: {value!r}")


class InvalidIdentifierError(InvalidInputError):
    """Raised when a person identifier is empty or not a string."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(f"Malformed person identifier: {value!r}")


class GraphUnavailableError(KinshipError):
    """Raised when the connection store cannot be reached or times out."""

    pass


class MissionError(KinshipError):
    """Base exception for mission state errors."""

    pass


class MissionNotFoundError(MissionError):
    """Raised when a mission record does not exist."""

    pass


class InvalidMissionTransitionError(MissionError):
    """Raised when an action is recorded against a terminal mission."""

    pass


class MissionDegreeExceededError(MissionError):
    """Raised when a mission would advance past the six degrees ceiling."""

    pass
