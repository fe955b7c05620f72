"""Mission state machine.

A mission starts active at degree 0 with the user as the only step on its
path. Connection actions advance the degree and extend the path; any action
that reaches the target completes the mission. Completed and abandoned
missions accept no further actions.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from ..errors import InvalidInputError, InvalidMissionTransitionError, MissionDegreeExceededError
from ..models import (
    MAX_DEGREES,
    Mission,
    MissionAction,
    MissionActionType,
    MissionStatus,
    PathStep,
    validate_person_id,
)

logger = logging.getLogger(__name__)


def _now(now: datetime | None) -> datetime:
    return now or datetime.now(UTC)


def start_mission(user_id: str, target_id: str, now: datetime | None = None) -> Mission:
    """Create an active mission from user_id toward target_id.

    Raises:
        InvalidIdentifierError: either id is malformed
        InvalidInputError: the user targets themselves
    """
    user_id = validate_person_id(user_id)
    target_id = validate_person_id(target_id)
    if user_id == target_id:
        raise InvalidInputError("A mission cannot target its own user")

    mission = Mission(
        user_id=user_id,
        target_id=target_id,
        current_degree=0,
        status=MissionStatus.ACTIVE,
        path=[PathStep(user_id)],
        created_at=_now(now),
    )
    logger.info(f"Mission started: {user_id} -> {target_id}")
    return mission


def _ensure_active(mission: Mission) -> None:
    if mission.status.is_terminal:
        raise InvalidMissionTransitionError(
            f"Mission {mission.id or mission.target_id} is {mission.status.value}; no further actions allowed"
        )


def record_action(
    mission: Mission,
    person_id: str,
    action_type: MissionActionType | str = MissionActionType.CONNECTION,
    now: datetime | None = None,
    metadata: dict | None = None,
) -> MissionAction:
    """Apply an action to the mission in place and return the action record.

    Args:
        mission: Active mission to advance
        person_id: Person the action was taken on
        action_type: connection, message or invite
        now: Timestamp override (tests)
        metadata: Free-form data stored with the action

    Returns:
        The MissionAction to persist; its degree is the degree before the
        action was applied.

    Raises:
        InvalidMissionTransitionError: mission is terminal, or a connection
            targets someone already on the path
        MissionDegreeExceededError: a connection would go past six degrees
    """
    _ensure_active(mission)
    person_id = validate_person_id(person_id)
    if not isinstance(action_type, MissionActionType):
        try:
            action_type = MissionActionType(action_type)
        except ValueError as e:
            raise InvalidInputError(f"Unknown mission action type: {action_type!r}") from e

    timestamp = _now(now)
    action = MissionAction(
        mission_id=mission.id,
        person_id=person_id,
        action_type=action_type,
        degree=mission.current_degree,
        metadata=dict(metadata or {}),
        created_at=timestamp,
    )

    if action_type is MissionActionType.CONNECTION:
        if person_id in mission.path_ids:
            raise InvalidMissionTransitionError(f"{person_id} is already on the mission path")
        if mission.current_degree + 1 > MAX_DEGREES:
            raise MissionDegreeExceededError(
                f"Mission {mission.id or mission.target_id} is already at degree {mission.current_degree}"
            )
        mission.current_degree += 1
        mission.path.append(PathStep(person_id, action=action_type.value))

    mission.actioned_ids.add(person_id)

    if person_id == mission.target_id:
        mission.status = MissionStatus.COMPLETED
        mission.completed_at = timestamp
        logger.info(f"Mission {mission.id or ''} completed at degree {mission.current_degree}")
    else:
        logger.debug(
            f"Mission {mission.id or ''}: {action_type.value} on {person_id}, degree {mission.current_degree}"
        )
    return action


def abandon_mission(mission: Mission) -> Mission:
    """Move an active mission to the terminal abandoned state."""
    _ensure_active(mission)
    mission.status = MissionStatus.ABANDONED
    logger.info(f"Mission {mission.id or ''} abandoned at degree {mission.current_degree}")
    return mission
