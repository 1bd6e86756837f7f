from datetime import datetime, timedelta

import pytest

from gzclp_tracker.errors import SessionStateError
from gzclp_tracker.models import (
    DEFAULT_EQUIPMENT,
    LiftState,
    LiftType,
    Location,
    PhaseMode,
    SetStatus,
    T2AutoRegAction,
    Tier,
    TrainingPhase,
)
from gzclp_tracker.progression import evaluate_session_progression, evaluate_t2_autoregulation
from gzclp_tracker.session import (
    ExerciseSlot,
    WorkoutCursor,
    default_rest_seconds,
    slots_for_template,
)

NOW = datetime(2025, 3, 10, 18, 0)
MAINTAINING = TrainingPhase(mode=PhaseMode.MAINTAINING)
CUTTING = TrainingPhase(mode=PhaseMode.CUTTING)


def _cursor(phase=MAINTAINING):
    slots = slots_for_template("A1", {"squat": 190, "bench": 100, "lat_pulldown": 80})
    cursor = WorkoutCursor(slots, phase, Location.GYM, template_id="A1")
    cursor.start(NOW)
    return cursor


def test_must_start_before_logging():
    slots = slots_for_template("A1", {"squat": 190, "bench": 100, "lat_pulldown": 80})
    cursor = WorkoutCursor(slots, MAINTAINING)
    with pytest.raises(SessionStateError):
        cursor.log_set(3)


def test_slots_for_template_requires_weights():
    with pytest.raises(KeyError):
        slots_for_template("A1", {"squat": 190})


def test_walks_through_t1_sets():
    cursor = _cursor()
    assert cursor.current.exercise_id == "squat"
    logs = []
    for reps in (3, 3, 3, 3):
        assert cursor.current_set_number == len(logs) + 1
        logs.append(cursor.log_set(reps, completed_at=NOW))
        cursor.advance_set()
    assert cursor.is_last_set
    logs.append(cursor.log_set(6))
    cursor.advance_set()

    assert [s.set_number for s in logs] == [1, 2, 3, 4, 5]
    assert [s.is_amrap for s in logs] == [False, False, False, False, True]
    assert all(s.status == SetStatus.COMPLETED and s.tier == Tier.T1 for s in logs)
    assert cursor.current.exercise_id == "bench"
    assert cursor.sets_for("squat") == logs


def test_skip_set_counts_without_logging():
    cursor = _cursor()
    cursor.skip_set()
    cursor.advance_set()
    assert cursor.current_set_number == 2
    assert cursor.completed == []


def test_next_exercise_and_finish():
    cursor = _cursor()
    cursor.next_exercise()
    cursor.next_exercise()
    assert cursor.current.exercise_id == "lat_pulldown"
    cursor.next_exercise()
    assert cursor.finished
    assert cursor.current is None
    with pytest.raises(SessionStateError):
        cursor.next_exercise()
    with pytest.raises(SessionStateError):
        cursor.log_set(10)


def test_rest_timer():
    cursor = _cursor()
    cursor.start_rest()
    assert cursor.rest_active
    assert cursor.rest_duration == 180
    cursor.tick(170)
    assert cursor.rest_remaining == 10
    assert not cursor.rest_overtime
    cursor.tick(15)
    assert cursor.rest_remaining == -5
    assert cursor.rest_overtime
    cursor.add_rest_time(30)
    assert cursor.rest_remaining == 25
    assert cursor.rest_duration == 210
    cursor.skip_rest()
    assert not cursor.rest_active
    cursor.tick()
    assert cursor.rest_remaining == 0


def test_default_rest_seconds():
    assert default_rest_seconds(Tier.T1, MAINTAINING) == 180
    assert default_rest_seconds(Tier.T1, CUTTING) == 210
    assert default_rest_seconds(Tier.T2, CUTTING) == 150
    assert default_rest_seconds(Tier.ACCESSORY, CUTTING) == 60
    cursor = _cursor(CUTTING)
    cursor.start_rest(90)
    assert cursor.rest_remaining == 90


def test_update_weight():
    cursor = _cursor()
    cursor.update_weight(0, 185)
    assert cursor.log_set(3).weight == 185


def test_accepted_load_drop_freezes_t2():
    cursor = _cursor()
    cursor.next_exercise()
    first = cursor.log_set(10, rpe=10)
    cursor.advance_set()

    suggestion = evaluate_t2_autoregulation(first.rpe, MAINTAINING, cursor.current.weight)
    assert suggestion.action == T2AutoRegAction.SUGGEST_DROP
    cursor.apply_load_drop(cursor.exercise_index, suggestion.reduced_weight)

    second = cursor.log_set(10)
    cursor.advance_set()
    third = cursor.log_set(10)
    assert second.weight == 90
    assert second.original_weight == 100
    assert second.status == SetStatus.AUTOREGULATED_LOAD_DROP
    assert third.status == SetStatus.AUTOREGULATED_LOAD_DROP

    bench = LiftState(exercise_id="bench", t1_weight=145, t2_weight=100)
    result = evaluate_session_progression(
        bench, cursor.completed, Location.GYM, DEFAULT_EQUIPMENT, LiftType.UPPER, NOW
    )
    assert result.t2_weight == 100
    assert result.t2_load_drop_count == 1


def test_substituted_slot_marks_sets():
    slot = ExerciseSlot(
        exercise_id="bench",
        tier=Tier.T2,
        target_sets=3,
        target_reps=10,
        weight=40,
        substitute_exercise_id="db_bench",
    )
    cursor = WorkoutCursor([slot], MAINTAINING, Location.HOME)
    cursor.start(NOW)
    record = cursor.log_set(10)
    assert record.is_substituted
    assert record.substitute_exercise_id == "db_bench"
    assert record.location == Location.HOME


def test_restart_clears_progress():
    cursor = _cursor()
    cursor.log_set(3)
    cursor.start(NOW + timedelta(minutes=5))
    assert cursor.completed == []
    assert cursor.current_set_number == 1
    assert cursor.elapsed_seconds(NOW + timedelta(minutes=65)) == 3600


def test_restart_undoes_accepted_load_drop():
    cursor = _cursor()
    cursor.next_exercise()
    cursor.apply_load_drop(1, 95)
    cursor.start(NOW + timedelta(minutes=5))
    cursor.next_exercise()

    record = cursor.log_set(10)
    assert record.status == SetStatus.COMPLETED
    assert record.weight == 100
    assert record.original_weight is None
    assert not cursor.current.load_dropped


def test_restart_keeps_substitute_original_weight():
    slot = ExerciseSlot(
        exercise_id="bench",
        tier=Tier.T2,
        target_sets=3,
        target_reps=10,
        weight=40,
        substitute_exercise_id="db_bench",
        original_weight=100,
    )
    cursor = WorkoutCursor([slot], MAINTAINING, Location.HOME)
    cursor.start(NOW)
    cursor.apply_load_drop(0, 35)
    assert cursor.log_set(10).original_weight == 100

    cursor.start(NOW + timedelta(minutes=5))
    assert (slot.weight, slot.original_weight, slot.load_dropped) == (40, 100, False)
