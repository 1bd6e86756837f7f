from gzclp_tracker.exercises import EXERCISES
from gzclp_tracker.models import Tier
from gzclp_tracker.templates import (
    ACCESSORY_RECOMMENDATIONS,
    HOME_ACCESSORY_ALTERNATIVES,
    WORKOUT_ROTATION,
    WORKOUT_TEMPLATES,
    get_next_workout_id,
    home_accessory,
)


def test_rotation_cycles():
    assert get_next_workout_id("A1") == "B1"
    assert get_next_workout_id("B1") == "A2"
    assert get_next_workout_id("A2") == "B2"
    assert get_next_workout_id("B2") == "A1"


def test_unknown_template_restarts_rotation():
    assert get_next_workout_id("") == "A1"
    assert get_next_workout_id("Z9") == "A1"


def test_template_schemes():
    a1 = WORKOUT_TEMPLATES["A1"]
    t1, t2, t3 = a1.exercises
    assert (t1.exercise_id, t1.tier, t1.sets, t1.reps) == ("squat", Tier.T1, 5, 3)
    assert t1.is_amrap
    assert (t2.exercise_id, t2.sets, t2.reps, t2.is_amrap) == ("bench", 3, 10, False)
    assert (t3.exercise_id, t3.sets, t3.reps, t3.is_amrap) == ("lat_pulldown", 3, 15, True)
    assert WORKOUT_TEMPLATES["B2"].exercise_for(Tier.T2).exercise_id == "ohp"


def test_every_template_and_accessory_is_registered():
    assert set(WORKOUT_TEMPLATES) == set(WORKOUT_ROTATION)
    for template in WORKOUT_TEMPLATES.values():
        for item in template.exercises:
            assert item.exercise_id in EXERCISES
    for accessories in ACCESSORY_RECOMMENDATIONS.values():
        for exercise_id in accessories:
            assert exercise_id in EXERCISES


def test_home_alternatives_need_no_gym():
    for gym_id, home_id in HOME_ACCESSORY_ALTERNATIVES.items():
        assert EXERCISES[gym_id].requires_gym
        assert not EXERCISES[home_id].requires_gym
    assert home_accessory("leg_curls") == "hip_thrust"
    assert home_accessory("bicep_curls") == "bicep_curls"
