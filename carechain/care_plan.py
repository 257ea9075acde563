"""Care-plan contract: plans, goals, interventions, barriers, reviews and care teams."""

from __future__ import annotations

from typing import Iterable, Optional

from carechain.care_plan_store import CarePlanStore
from carechain.care_plan_types import (
    Barrier,
    CareGoal,
    CarePlan,
    CarePlanError,
    CarePlanStatus,
    CarePlanSummary,
    CareReview,
    CareTeamMember,
    ErrorCode,
    GoalStatus,
    Intervention,
    ProgressEntry,
)
from carechain.ledger import Address, Env

SECONDS_PER_DAY = 86_400
_HASH_LENGTH = 32


def _review_interval(review_frequency_days: int) -> int:
    return review_frequency_days * SECONDS_PER_DAY


class CarePlanContract:
    """Manages care plans kept in an environment's persistent storage."""

    def __init__(self, env: Env) -> None:
        self.env = env
        self._store = CarePlanStore(env)

    def _require_plan(self, care_plan_id: int) -> CarePlan:
        plan = self._store.load_care_plan(care_plan_id)
        if plan is None:
            raise CarePlanError(ErrorCode.CARE_PLAN_NOT_FOUND)
        return plan

    def _require_open_goal(self, goal_id: int) -> CareGoal:
        goal = self._store.load_goal(goal_id)
        if goal is None:
            raise CarePlanError(ErrorCode.GOAL_NOT_FOUND)
        if goal.status is GoalStatus.ACHIEVED:
            raise CarePlanError(ErrorCode.GOAL_ALREADY_ACHIEVED)
        if goal.status is GoalStatus.DISCONTINUED:
            raise CarePlanError(ErrorCode.GOAL_DISCONTINUED)
        return goal

    def create_care_plan(
        self,
        patient_id: Address,
        provider_id: Address,
        plan_type: str,
        conditions: Iterable[str],
        goals: Iterable[str],
        start_date: int,
        review_frequency_days: int,
    ) -> int:
        """Create a care plan for a patient and return its id."""
        self.env.require_auth(provider_id)

        care_plan_id = self._store.next_care_plan_id()
        plan = CarePlan(
            care_plan_id=care_plan_id,
            patient_id=patient_id,
            provider_id=provider_id,
            plan_type=plan_type,
            conditions=list(conditions),
            goals=list(goals),
            start_date=start_date,
            review_frequency_days=review_frequency_days,
            status=CarePlanStatus.ACTIVE,
            next_review_date=start_date + _review_interval(review_frequency_days),
            last_review_date=None,
            created_at=self.env.timestamp,
        )
        self._store.save_care_plan(plan)
        self._store.add_patient_plan(patient_id, care_plan_id)

        self.env.publish(("care_plan_created",), (care_plan_id, patient_id, provider_id))
        return care_plan_id

    def add_care_goal(
        self,
        care_plan_id: int,
        provider_id: Address,
        goal_description: str,
        target_value: Optional[str],
        target_date: int,
        priority: str,
    ) -> int:
        """Add a goal to an existing care plan and return its id."""
        self.env.require_auth(provider_id)
        self._require_plan(care_plan_id)

        goal_id = self._store.next_goal_id()
        goal = CareGoal(
            goal_id=goal_id,
            care_plan_id=care_plan_id,
            description=goal_description,
            target_value=target_value,
            target_date=target_date,
            priority=priority,
            status=GoalStatus.ACTIVE,
            progress_entries=[],
            achievement_date=None,
            outcome_notes=None,
            created_by=provider_id,
            created_at=self.env.timestamp,
        )
        self._store.save_goal(goal)
        self._store.add_plan_goal(care_plan_id, goal_id)

        self.env.publish(("goal_added",), (care_plan_id, goal_id))
        return goal_id

    def add_intervention(
        self,
        care_plan_id: int,
        provider_id: Address,
        intervention_type: str,
        description: str,
        frequency: str,
        responsible_party: str,
    ) -> int:
        """Add an intervention to a care plan and return its id."""
        self.env.require_auth(provider_id)
        self._require_plan(care_plan_id)

        intervention_id = self._store.next_intervention_id()
        intervention = Intervention(
            intervention_id=intervention_id,
            care_plan_id=care_plan_id,
            intervention_type=intervention_type,
            description=description,
            frequency=frequency,
            responsible_party=responsible_party,
            assigned_by=provider_id,
            created_at=self.env.timestamp,
        )
        self._store.save_intervention(intervention)
        self._store.add_plan_intervention(care_plan_id, intervention_id)

        self.env.publish(("intervention_added",), (care_plan_id, intervention_id))
        return intervention_id

    def record_goal_progress(
        self,
        goal_id: int,
        patient_id: Address,
        current_value: str,
        progress_note: str,
        recorded_date: int,
    ) -> None:
        """Record progress against a goal that is neither achieved nor discontinued."""
        self.env.require_auth(patient_id)
        goal = self._require_open_goal(goal_id)

        goal.progress_entries.append(
            ProgressEntry(
                goal_id=goal_id,
                patient_id=patient_id,
                current_value=current_value,
                progress_note=progress_note,
                recorded_date=recorded_date,
            )
        )
        self._store.save_goal(goal)

        self.env.publish(("goal_progress_recorded",), (goal_id, patient_id))

    def mark_goal_achieved(
        self,
        goal_id: int,
        provider_id: Address,
        achievement_date: int,
        outcome_notes: str,
    ) -> None:
        """Mark an open goal as achieved."""
        self.env.require_auth(provider_id)
        goal = self._require_open_goal(goal_id)

        goal.status = GoalStatus.ACHIEVED
        goal.achievement_date = achievement_date
        goal.outcome_notes = outcome_notes
        self._store.save_goal(goal)

        self.env.publish(("goal_achieved",), (goal_id, provider_id))

    def add_barrier(
        self,
        care_plan_id: int,
        reporter: Address,
        barrier_type: str,
        description: str,
        identified_date: int,
    ) -> int:
        """Report a barrier to a care plan and return its id."""
        self.env.require_auth(reporter)
        self._require_plan(care_plan_id)

        barrier_id = self._store.next_barrier_id()
        barrier = Barrier(
            barrier_id=barrier_id,
            care_plan_id=care_plan_id,
            reporter=reporter,
            barrier_type=barrier_type,
            description=description,
            identified_date=identified_date,
            resolved=False,
            resolution=None,
            resolution_date=None,
            resolved_by=None,
        )
        self._store.save_barrier(barrier)
        self._store.add_plan_barrier(care_plan_id, barrier_id)

        self.env.publish(("barrier_added",), (care_plan_id, barrier_id))
        return barrier_id

    def resolve_barrier(
        self,
        barrier_id: int,
        provider_id: Address,
        resolution: str,
        resolution_date: int,
    ) -> None:
        """Resolve an unresolved barrier."""
        self.env.require_auth(provider_id)

        barrier = self._store.load_barrier(barrier_id)
        if barrier is None:
            raise CarePlanError(ErrorCode.BARRIER_NOT_FOUND)
        if barrier.resolved:
            raise CarePlanError(ErrorCode.BARRIER_ALREADY_RESOLVED)

        barrier.resolved = True
        barrier.resolution = resolution
        barrier.resolution_date = resolution_date
        barrier.resolved_by = provider_id
        self._store.save_barrier(barrier)

        self.env.publish(("barrier_resolved",), (barrier_id, provider_id))

    def schedule_care_plan_review(
        self,
        care_plan_id: int,
        provider_id: Address,
        review_date: int,
        review_type: str,
    ) -> int:
        """Schedule a review of a care plan and return its id."""
        self.env.require_auth(provider_id)
        self._require_plan(care_plan_id)

        review_id = self._store.next_review_id()
        review = CareReview(
            review_id=review_id,
            care_plan_id=care_plan_id,
            scheduled_by=provider_id,
            review_date=review_date,
            review_type=review_type,
            conducted=False,
            review_notes_hash=None,
            plan_modifications=[],
            continue_plan=True,
            conducted_by=None,
            conducted_at=None,
        )
        self._store.save_review(review)
        self._store.add_plan_review(care_plan_id, review_id)

        self.env.publish(("review_scheduled",), (care_plan_id, review_id, review_date))
        return review_id

    def conduct_care_plan_review(
        self,
        review_id: int,
        provider_id: Address,
        review_notes_hash: bytes,
        plan_modifications: Iterable[str],
        continue_plan: bool,
    ) -> None:
        """Conduct a scheduled review, updating the plan's review dates and status."""
        self.env.require_auth(provider_id)

        notes_hash = bytes(review_notes_hash)
        if len(notes_hash) != _HASH_LENGTH:
            raise ValueError(f"review notes hash must be {_HASH_LENGTH} bytes")

        review = self._store.load_review(review_id)
        if review is None:
            raise CarePlanError(ErrorCode.REVIEW_NOT_FOUND)
        if review.conducted:
            raise CarePlanError(ErrorCode.REVIEW_ALREADY_CONDUCTED)

        conducted_at = self.env.timestamp
        review.conducted = True
        review.review_notes_hash = notes_hash
        review.plan_modifications = list(plan_modifications)
        review.continue_plan = continue_plan
        review.conducted_by = provider_id
        review.conducted_at = conducted_at

        plan = self._store.load_care_plan(review.care_plan_id)
        if plan is not None:
            plan.last_review_date = conducted_at
            plan.next_review_date = conducted_at + _review_interval(plan.review_frequency_days)
            if not continue_plan:
                plan.status = CarePlanStatus.COMPLETED
            self._store.save_care_plan(plan)

        self._store.save_review(review)

        self.env.publish(("review_conducted",), (review_id, provider_id, continue_plan))

    def assign_care_team_member(
        self,
        care_plan_id: int,
        coordinating_provider: Address,
        team_member: Address,
        role: str,
        responsibilities: Iterable[str],
    ) -> None:
        """Add a member to a care plan's team."""
        self.env.require_auth(coordinating_provider)
        self._require_plan(care_plan_id)

        team = self._store.load_care_team(care_plan_id)
        team.append(
            CareTeamMember(
                care_plan_id=care_plan_id,
                team_member=team_member,
                role=role,
                responsibilities=list(responsibilities),
                assigned_by=coordinating_provider,
                assigned_at=self.env.timestamp,
            )
        )
        self._store.save_care_team(care_plan_id, team)

        self.env.publish(("team_member_assigned",), (care_plan_id, team_member))

    def get_care_plan_summary(self, care_plan_id: int, requester: Address) -> CarePlanSummary:
        """Return the plan with its open goals, interventions, team and barriers."""
        self.env.require_auth(requester)
        plan = self._require_plan(care_plan_id)

        goals = (self._store.load_goal(goal_id) for goal_id in self._store.load_plan_goals(care_plan_id))
        active_goals = [goal for goal in goals if goal is not None and not goal.status.is_closed]

        interventions = (
            self._store.load_intervention(intervention_id)
            for intervention_id in self._store.load_plan_interventions(care_plan_id)
        )

        return CarePlanSummary(
            care_plan_id=care_plan_id,
            patient_id=plan.patient_id,
            plan_type=plan.plan_type,
            active_goals=active_goals,
            interventions=[item for item in interventions if item is not None],
            care_team=self._store.load_care_team(care_plan_id),
            barriers=self._store.load_plan_barriers(care_plan_id),
            last_review_date=plan.last_review_date,
            next_review_date=plan.next_review_date,
        )