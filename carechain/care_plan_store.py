"""Persistent storage of care plans and their goals, interventions, barriers and reviews."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from carechain.care_plan_types import (
    Barrier,
    CareGoal,
    CarePlan,
    CareReview,
    CareTeamMember,
    Intervention,
)
from carechain.ledger import Address, Env


class _Key(Enum):
    CARE_PLAN_COUNTER = "care_plan_counter"
    GOAL_COUNTER = "goal_counter"
    INTERVENTION_COUNTER = "intervention_counter"
    BARRIER_COUNTER = "barrier_counter"
    REVIEW_COUNTER = "review_counter"
    CARE_PLAN = "care_plan"
    GOAL = "goal"
    INTERVENTION = "intervention"
    BARRIER = "barrier"
    REVIEW = "review"
    PLAN_GOALS = "plan_goals"
    PLAN_INTERVENTIONS = "plan_interventions"
    PLAN_BARRIERS = "plan_barriers"
    PLAN_REVIEWS = "plan_reviews"
    PLAN_CARE_TEAM = "plan_care_team"
    PATIENT_PLANS = "patient_plans"


class CarePlanStore:
    """Typed access to the care-plan records kept in an environment's persistent storage."""

    def __init__(self, env: Env) -> None:
        self._storage = env.storage

    # Counters

    def _next_id(self, counter: _Key) -> int:
        next_id = self._storage.get(counter, 0) + 1
        self._storage.set(counter, next_id)
        return next_id

    def next_care_plan_id(self) -> int:
        return self._next_id(_Key.CARE_PLAN_COUNTER)

    def next_goal_id(self) -> int:
        return self._next_id(_Key.GOAL_COUNTER)

    def next_intervention_id(self) -> int:
        return self._next_id(_Key.INTERVENTION_COUNTER)

    def next_barrier_id(self) -> int:
        return self._next_id(_Key.BARRIER_COUNTER)

    def next_review_id(self) -> int:
        return self._next_id(_Key.REVIEW_COUNTER)

    # Id lists

    def _append_id(self, key: tuple, item_id: int) -> None:
        ids = self._storage.get(key, [])
        ids.append(item_id)
        self._storage.set(key, ids)

    # Care plans

    def save_care_plan(self, plan: CarePlan) -> None:
        self._storage.set((_Key.CARE_PLAN, plan.care_plan_id), plan)

    def load_care_plan(self, care_plan_id: int) -> Optional[CarePlan]:
        return self._storage.get((_Key.CARE_PLAN, care_plan_id))

    def add_patient_plan(self, patient_id: Address, care_plan_id: int) -> None:
        self._append_id((_Key.PATIENT_PLANS, patient_id), care_plan_id)

    # Goals

    def save_goal(self, goal: CareGoal) -> None:
        self._storage.set((_Key.GOAL, goal.goal_id), goal)

    def load_goal(self, goal_id: int) -> Optional[CareGoal]:
        return self._storage.get((_Key.GOAL, goal_id))

    def add_plan_goal(self, care_plan_id: int, goal_id: int) -> None:
        self._append_id((_Key.PLAN_GOALS, care_plan_id), goal_id)

    def load_plan_goals(self, care_plan_id: int) -> list[int]:
        return self._storage.get((_Key.PLAN_GOALS, care_plan_id), [])

    # Interventions

    def save_intervention(self, intervention: Intervention) -> None:
        self._storage.set((_Key.INTERVENTION, intervention.intervention_id), intervention)

    def load_intervention(self, intervention_id: int) -> Optional[Intervention]:
        return self._storage.get((_Key.INTERVENTION, intervention_id))

    def add_plan_intervention(self, care_plan_id: int, intervention_id: int) -> None:
        self._append_id((_Key.PLAN_INTERVENTIONS, care_plan_id), intervention_id)

    def load_plan_interventions(self, care_plan_id: int) -> list[int]:
        return self._storage.get((_Key.PLAN_INTERVENTIONS, care_plan_id), [])

    # Barriers

    def save_barrier(self, barrier: Barrier) -> None:
        self._storage.set((_Key.BARRIER, barrier.barrier_id), barrier)

    def load_barrier(self, barrier_id: int) -> Optional[Barrier]:
        return self._storage.get((_Key.BARRIER, barrier_id))

    def add_plan_barrier(self, care_plan_id: int, barrier_id: int) -> None:
        self._append_id((_Key.PLAN_BARRIERS, care_plan_id), barrier_id)

    def load_plan_barriers(self, care_plan_id: int) -> list[Barrier]:
        """Return the plan's barriers in the order they were added."""
        ids = self._storage.get((_Key.PLAN_BARRIERS, care_plan_id), [])
        barriers = (self.load_barrier(barrier_id) for barrier_id in ids)
        return [barrier for barrier in barriers if barrier is not None]

    # Reviews

    def save_review(self, review: CareReview) -> None:
        self._storage.set((_Key.REVIEW, review.review_id), review)

    def load_review(self, review_id: int) -> Optional[CareReview]:
        return self._storage.get((_Key.REVIEW, review_id))

    def add_plan_review(self, care_plan_id: int, review_id: int) -> None:
        self._append_id((_Key.PLAN_REVIEWS, care_plan_id), review_id)

    # Care team

    def load_care_team(self, care_plan_id: int) -> list[CareTeamMember]:
        return self._storage.get((_Key.PLAN_CARE_TEAM, care_plan_id), [])

    def save_care_team(self, care_plan_id: int, team: list[CareTeamMember]) -> None:
        self._storage.set((_Key.PLAN_CARE_TEAM, care_plan_id), list(team))