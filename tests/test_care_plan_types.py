import pytest

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
from carechain.ledger import Address


PATIENT = Address("patient")
PROVIDER = Address("provider")


@pytest.mark.parametrize(
    "value, expected",
    [
        (1, ErrorCode.UNAUTHORIZED),
        (2, ErrorCode.CARE_PLAN_NOT_FOUND),
        (10, ErrorCode.REVIEW_ALREADY_CONDUCTED),
    ],
)
def test_error_codes_fixed_by_source(value, expected):
    error = CarePlanError(ErrorCode(value))
    assert error.code is expected
    assert error.code == value


def test_care_plan_error_carries_code():
    error = CarePlanError(ErrorCode.GOAL_NOT_FOUND)
    assert error.code is ErrorCode.GOAL_NOT_FOUND
    assert str(error) == "GOAL_NOT_FOUND"


@pytest.mark.parametrize(
    "status, closed",
    [
        (GoalStatus.ACTIVE, False),
        (GoalStatus.ON_TRACK, False),
        (GoalStatus.AT_RISK, False),
        (GoalStatus.ACHIEVED, True),
        (GoalStatus.DISCONTINUED, True),
    ],
)
def test_goal_status_is_closed(status, closed):
    assert status.is_closed is closed


def _plan(status):
    return CarePlan(
        1, PATIENT, PROVIDER, "chronic_disease", ["COPD"], ["Goal"],
        1_000_000, 30, status, 3_592_000, None, 0,
    )


def test_care_plan_equality_depends_on_status():
    assert _plan(CarePlanStatus.ACTIVE) == _plan(CarePlanStatus.ACTIVE)
    assert _plan(CarePlanStatus.ACTIVE) != _plan(CarePlanStatus.COMPLETED)
    assert _plan(CarePlanStatus.UNDER_REVIEW).status is CarePlanStatus.UNDER_REVIEW


def _goal(**changes):
    values = dict(
        goal_id=1,
        care_plan_id=1,
        description="Reduce HbA1c",
        target_value=None,
        target_date=2_000_000,
        priority="high",
        status=GoalStatus.ACTIVE,
        progress_entries=[],
        achievement_date=None,
        outcome_notes=None,
        created_by=PROVIDER,
        created_at=0,
    )
    values.update(changes)
    return CareGoal(**values)


def test_goal_equality_depends_on_fields():
    assert _goal() == _goal()
    assert _goal() != _goal(status=GoalStatus.ACHIEVED)


def test_goal_progress_entries_hold_entries():
    entry = ProgressEntry(1, PATIENT, "7.5", "Progress noted", 1_100_000)
    goal = _goal(progress_entries=[entry])
    assert goal.progress_entries[0].current_value == "7.5"


def test_summary_holds_records():
    plan = _plan(CarePlanStatus.ACTIVE)
    intervention = Intervention(1, 1, "medication", "Metformin", "Twice daily", "patient", PROVIDER, 0)
    barrier = Barrier(1, 1, PATIENT, "financial", "Cost", 1_050_000, False, None, None, None)
    member = CareTeamMember(1, Address("nurse"), "nurse", ["Check vitals"], PROVIDER, 0)
    review = CareReview(1, 1, PROVIDER, 3_600_000, "routine", False, None, [], True, None, None)
    summary = CarePlanSummary(
        plan.care_plan_id, plan.patient_id, plan.plan_type, [_goal()],
        [intervention], [member], [barrier], plan.last_review_date, plan.next_review_date,
    )
    assert summary.patient_id == PATIENT
    assert summary.next_review_date == 3_592_000
    assert summary.barriers[0].resolved is False
    assert review.continue_plan is True