from gzclp_tracker.e1rm import E1RMTrend
from gzclp_tracker.fatigue import (
    DELOAD_WEEK,
    detect_fatigue_signals,
    evaluate_fatigue,
    trailing_run,
)
from gzclp_tracker.models import FatigueAlertLevel, FatigueSignalType, LiftState


def _state(exercise_id="squat", **trends):
    return LiftState(exercise_id=exercise_id, t1_weight=200, t2_weight=150, **trends)


def test_no_history_no_signals():
    assert detect_fatigue_signals(_state()) == []


def test_declining_e1rm_signal():
    (signal,) = detect_fatigue_signals(_state(recent_e1rms=(240, 230, 225, 220)))
    assert signal.type == FatigueSignalType.E1RM_DECLINE
    assert signal.lift == "squat"
    assert signal.consecutive_sessions == 3


def test_rising_rpe_and_falling_amrap():
    signals = detect_fatigue_signals(
        _state(recent_avg_rpes=(7.5, 8.0, 8.5), recent_amrap_reps=(6, 5, 4))
    )
    assert {s.type for s in signals} == {
        FatigueSignalType.RPE_INCREASE,
        FatigueSignalType.AMRAP_DECLINE,
    }


def test_improving_lift_has_no_signals():
    state = _state(
        recent_e1rms=(220, 225, 230),
        recent_avg_rpes=(8.5, 8.0, 7.5),
        recent_amrap_reps=(4, 5, 6),
    )
    assert detect_fatigue_signals(state) == []


def test_trailing_run():
    assert trailing_run([240, 230, 235, 230, 225], E1RMTrend.DECREASING) == 2
    assert trailing_run([7, 8, 9], E1RMTrend.INCREASING) == 2
    assert trailing_run([5], E1RMTrend.DECREASING) == 0


def test_evaluate_fatigue_none_when_fresh():
    assert evaluate_fatigue([_state(), _state("bench")]) is None


def test_one_lift_is_watch():
    alert = evaluate_fatigue([_state(recent_e1rms=(230, 225, 220)), _state("bench")])
    assert alert.level == FatigueAlertLevel.WATCH
    assert alert.prescription is None
    assert "Barbell Squat" in alert.message


def test_two_lifts_are_systemic_with_deload():
    alert = evaluate_fatigue(
        [
            _state(recent_e1rms=(230, 225, 220)),
            _state("bench", recent_amrap_reps=(8, 6, 4)),
        ]
    )
    assert alert.level == FatigueAlertLevel.SYSTEMIC
    assert len(alert.signals) == 2
    assert alert.prescription == DELOAD_WEEK
    assert "2 lifts" in alert.message


def test_deload_week_serializes_return_key():
    dumped = DELOAD_WEEK.model_dump(by_alias=True)
    assert dumped["return"] == DELOAD_WEEK.return_plan
    assert dumped["rpe_target"] == "6-7"
