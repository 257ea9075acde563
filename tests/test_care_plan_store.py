import pytest

from carechain.care_plan_store import CarePlanStore
from carechain.care_plan_types import (
    Barrier,
    CareGoal,
    CarePlan,
    CarePlanStatus,
    CareReview,
    CareTeamMember,
    GoalStatus,
    Intervention,
)
from carechain.ledger import Env


@pytest.fixture
def env():
    return Env()


@pytest.fixture
def store(env):
    return CarePlanStore(env)


def _plan(env, plan_id=1):
    return CarePlan(
        plan_id, env.generate_address(), env.generate_address(), "chronic_disease",
        ["Type 2 Diabetes"], ["Reduce HbA1c to <7%"], 1_000_000, 30,
        CarePlanStatus.ACTIVE, 1_000_000 + 30 * 86_400, None, 0,
    )


def _goal(env, goal_id=1, plan_id=1):
    return CareGoal(
        goal_id, plan_id, "Reduce HbA1c", None, 2_000_000, "high", GoalStatus.ACTIVE,
        [], None, None, env.generate_address(), 0,
    )


def _barrier(env, barrier_id, plan_id=1):
    return Barrier(
        barrier_id, plan_id, env.generate_address(), "financial",
        "Cannot afford medication", 1_050_000, False, None, None, None,
    )


@pytest.mark.parametrize(
    "counter",
    ["next_care_plan_id", "next_goal_id", "next_intervention_id", "next_barrier_id", "next_review_id"],
)
def test_counters_start_at_one_and_increment(store, counter):
    next_id = getattr(store, counter)
    assert [next_id(), next_id(), next_id()] == [1, 2, 3]


def test_counters_are_independent(store):
    assert store.next_care_plan_id() == 1
    assert store.next_care_plan_id() == 2
    assert store.next_goal_id() == 1
    assert store.next_review_id() == 1


def test_care_plan_round_trip(env, store):
    plan = _plan(env)
    store.save_care_plan(plan)
    assert store.load_care_plan(1) == plan
    assert store.load_care_plan(999) is None


def test_loaded_plan_is_a_copy(env, store):
    store.save_care_plan(_plan(env))
    loaded = store.load_care_plan(1)
    loaded.status = CarePlanStatus.COMPLETED
    assert store.load_care_plan(1).status is CarePlanStatus.ACTIVE


def test_goal_round_trip_and_plan_goals(env, store):
    store.save_goal(_goal(env, 1))
    store.save_goal(_goal(env, 2))
    store.add_plan_goal(1, 1)
    store.add_plan_goal(1, 2)
    assert store.load_plan_goals(1) == [1, 2]
    assert store.load_plan_goals(2) == []
    assert store.load_goal(2).goal_id == 2
    assert store.load_goal(3) is None


def test_intervention_round_trip(env, store):
    intervention = Intervention(1, 1, "medication", "Metformin 500mg", "Twice daily", "patient", env.generate_address(), 0)
    store.save_intervention(intervention)
    store.add_plan_intervention(1, 1)
    assert store.load_intervention(1) == intervention
    assert store.load_plan_interventions(1) == [1]
    assert store.load_intervention(2) is None


def test_plan_barriers_in_order_and_skip_missing(env, store):
    store.save_barrier(_barrier(env, 1))
    store.save_barrier(_barrier(env, 2))
    for barrier_id in (2, 7, 1):
        store.add_plan_barrier(1, barrier_id)
    assert [b.barrier_id for b in store.load_plan_barriers(1)] == [2, 1]
    assert store.load_plan_barriers(5) == []


def test_review_round_trip(env, store):
    review = CareReview(1, 1, env.generate_address(), 3_600_000, "routine", False, None, [], True, None, None)
    store.save_review(review)
    assert store.load_review(1) == review
    assert store.load_review(2) is None


def test_add_plan_review_stores_one_list(env, store):
    before = len(env.storage)
    store.add_plan_review(1, 1)
    store.add_plan_review(1, 2)
    assert len(env.storage) == before + 1


def test_add_patient_plan_stores_one_list_per_patient(env, store):
    patient = env.generate_address()
    store.add_patient_plan(patient, 1)
    store.add_patient_plan(patient, 2)
    assert len(env.storage) == 1
    store.add_patient_plan(env.generate_address(), 3)
    assert len(env.storage) == 2


def test_care_team_round_trip(env, store):
    assert store.load_care_team(1) == []
    member = CareTeamMember(1, env.generate_address(), "specialist", ["Monitor blood sugar"], env.generate_address(), 0)
    store.save_care_team(1, [member])
    team = store.load_care_team(1)
    assert team == [member]
    assert store.load_care_team(2) == []