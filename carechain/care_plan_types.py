"""Records, statuses and errors of the care-plan contract."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional

from carechain.ledger import Address


class ErrorCode(IntEnum):
    UNAUTHORIZED = 1
    CARE_PLAN_NOT_FOUND = 2
    GOAL_NOT_FOUND = 3
    INTERVENTION_NOT_FOUND = 4
    BARRIER_NOT_FOUND = 5
    REVIEW_NOT_FOUND = 6
    GOAL_ALREADY_ACHIEVED = 7
    GOAL_DISCONTINUED = 8
    BARRIER_ALREADY_RESOLVED = 9
    REVIEW_ALREADY_CONDUCTED = 10


class CarePlanError(Exception):
    """A care-plan operation failed; ``code`` says why."""

    def __init__(self, code: ErrorCode) -> None:
        super().__init__(code.name)
        self.code = code


class GoalStatus(Enum):
    ACTIVE = "active"
    ON_TRACK = "on_track"
    AT_RISK = "at_risk"
    ACHIEVED = "achieved"
    DISCONTINUED = "discontinued"

    @property
    def is_closed(self) -> bool:
        """True once the goal is achieved or discontinued."""
        return self in (GoalStatus.ACHIEVED, GoalStatus.DISCONTINUED)


class CarePlanStatus(Enum):
    ACTIVE = "active"
    UNDER_REVIEW = "under_review"
    COMPLETED = "completed"
    DISCONTINUED = "discontinued"


@dataclass
class ProgressEntry:
    goal_id: int
    patient_id: Address
    current_value: str
    progress_note: str
    recorded_date: int


@dataclass
class CareGoal:
    goal_id: int
    care_plan_id: int
    description: str
    target_value: Optional[str]
    target_date: int
    priority: str
    status: GoalStatus
    progress_entries: list[ProgressEntry]
    achievement_date: Optional[int]
    outcome_notes: Optional[str]
    created_by: Address
    created_at: int


@dataclass
class Intervention:
    intervention_id: int
    care_plan_id: int
    intervention_type: str
    description: str
    frequency: str
    responsible_party: str  # patient | provider | caregiver
    assigned_by: Address
    created_at: int


@dataclass
class Barrier:
    barrier_id: int
    care_plan_id: int
    reporter: Address
    barrier_type: str
    description: str
    identified_date: int
    resolved: bool
    resolution: Optional[str]
    resolution_date: Optional[int]
    resolved_by: Optional[Address]


@dataclass
class CareReview:
    review_id: int
    care_plan_id: int
    scheduled_by: Address
    review_date: int
    review_type: str
    conducted: bool
    review_notes_hash: Optional[bytes]
    plan_modifications: list[str]
    continue_plan: bool
    conducted_by: Optional[Address]
    conducted_at: Optional[int]


@dataclass
class CareTeamMember:
    care_plan_id: int
    team_member: Address
    role: str
    responsibilities: list[str]
    assigned_by: Address
    assigned_at: int


@dataclass
class CarePlan:
    care_plan_id: int
    patient_id: Address
    provider_id: Address
    plan_type: str  # chronic_disease | post_op | preventive | palliative
    conditions: list[str]
    goals: list[str]
    start_date: int
    review_frequency_days: int
    status: CarePlanStatus
    next_review_date: int
    last_review_date: Optional[int]
    created_at: int


@dataclass
class CarePlanSummary:
    care_plan_id: int
    patient_id: Address
    plan_type: str
    active_goals: list[CareGoal]
    interventions: list[Intervention]
    care_team: list[CareTeamMember]
    barriers: list[Barrier]
    last_review_date: Optional[int]
    next_review_date: int