"""Core domain models for the kinship and mission engines.

These mirror the PocketBase collections (profiles, connections, missions,
mission_suggestions) but carry no client dependency; repositories map
records onto them."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from .errors import InvalidIdentifierError
from .relationships.vocabulary import RelationshipLabel, normalize_relationship

# Six degrees of separation ceiling
MAX_DEGREES = 6


class ConnectionType(Enum):
    """Kinds of connections between people"""

    FAMILY = "family"
    FRIEND = "friend"


class ConnectionStatus(Enum):
    """Lifecycle of a connection request

    Note: only ACCEPTED connections are edges of the connection graph;
    PENDING ones still block duplicate suggestions.
    """

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class MissionStatus(Enum):
    """Mission lifecycle; COMPLETED and ABANDONED are terminal"""

    ACTIVE = "active"
    COMPLETED = "completed"
    ABANDONED = "abandoned"

    @property
    def is_terminal(self) -> bool:
        return self is not MissionStatus.ACTIVE


class MissionActionType(Enum):
    """Actions a user can take on a suggested person"""

    CONNECTION = "connection"
    MESSAGE = "message"
    INVITE = "invite"


@dataclass(frozen=True)
class Person:
    """Profile snapshot, owned by the external profile store"""

    id: str
    full_name: str = ""
    avatar_url: str | None = None
    latitude: float | None = None
    longitude: float | None = None


@dataclass
class Connection:
    """A connection record between a requester and a receiver.

    relationship_from_requester names what the requester is to the receiver;
    relationship_from_receiver names what the receiver is to the requester.
    Strength metadata is optional and supplied by the store when known.
    """

    requester_id: str
    receiver_id: str
    connection_type: ConnectionType = ConnectionType.FAMILY
    status: ConnectionStatus = ConnectionStatus.ACCEPTED
    relationship_from_requester: RelationshipLabel = RelationshipLabel.OTHER
    relationship_from_receiver: RelationshipLabel = RelationshipLabel.OTHER
    connection_strength: float | None = None
    common_connections: int | None = None
    id: str | None = None

    def __post_init__(self) -> None:
        # Records arrive with raw strings; keep the closed vocabulary inside
        self.relationship_from_requester = normalize_relationship(self.relationship_from_requester)
        self.relationship_from_receiver = normalize_relationship(self.relationship_from_receiver)
        if not isinstance(self.connection_type, ConnectionType):
            self.connection_type = ConnectionType(self.connection_type)
        if not isinstance(self.status, ConnectionStatus):
            self.status = ConnectionStatus(self.status)

    @property
    def pair_key(self) -> tuple[str, str]:
        return pair_key(self.requester_id, self.receiver_id)

    def other(self, person_id: str) -> str:
        """The other end of this connection as seen from person_id"""
        return self.receiver_id if person_id == self.requester_id else self.requester_id


@dataclass(frozen=True)
class Suggestion:
    """Ranked next-hop candidate for a mission"""

    person_id: str
    connection_strength: float = 0.0
    common_connections: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "person_id": self.person_id,
            "connection_strength": self.connection_strength,
            "common_connections": self.common_connections,
        }


@dataclass(frozen=True)
class KinshipSuggestion:
    """A deduced family connection that does not exist yet.

    recipient_id is the person who should add person_id; for second degree
    suggestions that is the requesting user, for first degree ones it is one
    of the user's own relatives.
    """

    person_id: str
    recipient_id: str
    through_id: str
    suggested_relationship: RelationshipLabel
    reverse_relationship: RelationshipLabel
    degree: int
    reason: str = ""


@dataclass
class PathStep:
    """One person on a mission path, with the action that reached them"""

    person_id: str
    action: str | None = None
    name: str | None = None
    avatar_url: str | None = None
    latitude: float | None = None
    longitude: float | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.person_id,
            "action": self.action,
            "name": self.name,
            "avatar_url": self.avatar_url,
            "latitude": self.latitude,
            "longitude": self.longitude,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PathStep:
        return cls(
            person_id=str(data.get("id") or data.get("person_id") or ""),
            action=data.get("action"),
            name=data.get("name"),
            avatar_url=data.get("avatar_url"),
            latitude=data.get("latitude"),
            longitude=data.get("longitude"),
        )


@dataclass
class Mission:
    """A user's goal of reaching a target person"""

    user_id: str
    target_id: str
    current_degree: int = 0
    status: MissionStatus = MissionStatus.ACTIVE
    path: list[PathStep] = field(default_factory=list)
    actioned_ids: set[str] = field(default_factory=set)
    id: str | None = None
    created_at: datetime | None = None
    completed_at: datetime | None = None

    @property
    def frontier_id(self) -> str:
        """The last person reached; the user while the path is empty"""
        return self.path[-1].person_id if self.path else self.user_id

    @property
    def path_ids(self) -> list[str]:
        return [step.person_id for step in self.path]


@dataclass
class MissionAction:
    """A user action against a person during a mission.

    degree is the mission's degree when the action was taken, before any
    increment the action causes.
    """

    mission_id: str | None
    person_id: str
    action_type: MissionActionType
    degree: int
    metadata: dict[str, Any] = field(default_factory=dict)
    id: str | None = None
    created_at: datetime | None = None


def pair_key(a: str, b: str) -> tuple[str, str]:
    """Order-independent key for a pair of person ids"""
    return (a, b) if a <= b else (b, a)


# PocketBase record ids are 15 lowercase alphanumerics; accept any id shaped
# safely enough to be interpolated into a filter expression
_PERSON_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,64}$")


def validate_person_id(value: object) -> str:
    """Boundary check for person identifiers.

    Raises:
        InvalidIdentifierError: value is not a non-empty, filter-safe string
    """
    if not isinstance(value, str) or not _PERSON_ID_PATTERN.match(value.strip()):
        raise InvalidIdentifierError(value)
    return value.strip()
