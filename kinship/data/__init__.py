"""
PocketBase repositories feeding the kinship and mission engines
"""

from .connection_repository import ConnectionRepository, connection_from_record
from .mission_repository import MissionRepository
from .profile_repository import ProfileRepository

__all__ = [
    "ConnectionRepository",
    "MissionRepository",
    "ProfileRepository",
    "connection_from_record",
]
