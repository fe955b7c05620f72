"""
Six degrees missions: state transitions and next-hop planning
"""

from .planner import MissionPlan, plan_for_mission, plan_mission_step
from .tracker import abandon_mission, record_action, start_mission

__all__ = [
    "MissionPlan",
    "abandon_mission",
    "plan_for_mission",
    "plan_mission_step",
    "record_action",
    "start_mission",
]
