"""
Pydantic schemas for the Kinship API.

Re-exports all schemas for convenient importing.
"""

from __future__ import annotations

from .kinship import (
    DeductionRequest,
    DeductionResponse,
    KinshipSuggestionItem,
    KinshipSuggestionsResponse,
)
from .missions import (
    MissionActionRequest,
    MissionResponse,
    PathRequest,
    PathResponse,
    PathStepItem,
    StartMissionRequest,
    SuggestionItem,
    SuggestionRequest,
    SuggestionResponse,
)

__all__ = [
    # Kinship
    "DeductionRequest",
    "DeductionResponse",
    "KinshipSuggestionItem",
    "KinshipSuggestionsResponse",
    # Missions
    "MissionActionRequest",
    "MissionResponse",
    "PathRequest",
    "PathResponse",
    "PathStepItem",
    "StartMissionRequest",
    "SuggestionItem",
    "SuggestionRequest",
    "SuggestionResponse",
]
