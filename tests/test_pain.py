import logging
from datetime import datetime, timedelta

from gzclp_tracker.exercises import get_exercise
from gzclp_tracker.models import (
    BodyRegion,
    ModificationAction,
    ModificationSource,
    PainSorenessEntry,
    PlannedExercise,
    RedFlagDismissal,
    Sensation,
    Tier,
)
from gzclp_tracker.pain import format_region, generate_modifications, should_show_red_flag

NOW = datetime(2025, 3, 10, 18, 0)


def _pain(region, severity, sensation=Sensation.PAIN, notes=None):
    return PainSorenessEntry(
        region=region, sensation=sensation, severity=severity, date=NOW, notes=notes
    )


def _planned():
    return [
        PlannedExercise(exercise=get_exercise("squat"), weight=190, tier=Tier.T1),
        PlannedExercise(exercise=get_exercise("bench"), weight=100, tier=Tier.T2),
        PlannedExercise(exercise=get_exercise("lat_pulldown"), weight=80, tier=Tier.T3),
    ]


def _b1_planned():
    return [
        PlannedExercise(exercise=get_exercise("ohp"), weight=85, tier=Tier.T1),
        PlannedExercise(exercise=get_exercise("deadlift"), weight=220, tier=Tier.T2),
    ]


def test_severity_one_is_informational():
    assert generate_modifications([_pain(BodyRegion.LOWER_BACK, 1)], _planned()) == []


def test_soreness_never_modifies():
    entries = [_pain(BodyRegion.LOWER_BACK, 5, Sensation.SORENESS)]
    assert generate_modifications(entries, _planned()) == []


def test_severity_two_reduces_ten_percent():
    (mod,) = generate_modifications([_pain(BodyRegion.LOWER_BACK, 2)], _planned())
    assert mod.exercise_id == "squat"
    assert mod.action == ModificationAction.REDUCE_WEIGHT
    assert mod.original_weight == 190
    assert mod.modified_weight == 170
    assert mod.reason == "Lower Back pain (2/5) — reduced load 10%"
    assert mod.source == ModificationSource.PAIN
    assert mod.user_accepted is False


def test_severity_three_lower_back_suggests_substitutions():
    (squat,) = generate_modifications([_pain(BodyRegion.LOWER_BACK, 3)], _planned())
    assert squat.modified_weight == 150
    assert squat.substitution_suggestions == ("goblet_squat", "box_squat")

    mods = generate_modifications([_pain(BodyRegion.LOWER_BACK, 3)], _b1_planned())
    by_id = {m.exercise_id: m for m in mods}
    assert by_id["ohp"].substitution_suggestions == ("db_shoulder_press",)
    assert by_id["deadlift"].substitution_suggestions == ("db_rdl",)
    assert by_id["deadlift"].modified_weight == 175


def test_severity_three_other_region_has_no_substitutions():
    (mod,) = generate_modifications([_pain(BodyRegion.LEFT_KNEE, 3)], _planned())
    assert mod.exercise_id == "squat"
    assert mod.substitution_suggestions == ()


def test_severity_four_skips_t1_and_halves_others():
    mods = generate_modifications([_pain(BodyRegion.LOWER_BACK, 4)], _b1_planned())
    by_id = {m.exercise_id: m for m in mods}
    assert by_id["ohp"].action == ModificationAction.SKIP
    assert by_id["ohp"].modified_weight == 0
    assert by_id["deadlift"].action == ModificationAction.REDUCE_WEIGHT
    assert by_id["deadlift"].modified_weight == 110


def test_severity_five_skips_every_sensitive_exercise():
    planned = _planned() + _b1_planned()
    mods = generate_modifications([_pain(BodyRegion.LOWER_BACK, 5)], planned)
    assert {m.exercise_id for m in mods} == {"squat", "ohp", "deadlift"}
    for mod in mods:
        assert mod.action == ModificationAction.SKIP
        assert mod.modified_weight == 0
        assert mod.suggest_rest_day


def test_unaffected_regions_produce_nothing():
    assert generate_modifications([_pain(BodyRegion.NECK, 4)], _planned()) == []


def test_pain_notes_stay_out_of_the_log(caplog):
    from gzclp_tracker.logging_setup import SensitiveDataFilter

    caplog.handler.addFilter(SensitiveDataFilter())
    with caplog.at_level(logging.DEBUG, logger="gzclp_tracker.pain"):
        generate_modifications(
            [_pain(BodyRegion.LOWER_BACK, 2, notes="tweaked it moving a couch")], _planned()
        )
    assert "couch" not in caplog.text
    assert "notes=<REDACTED>" in caplog.text


def test_red_flag_severity_five_always_shows():
    dismissals = [RedFlagDismissal(region=BodyRegion.LOWER_BACK, dismissed_at=NOW)]
    assert should_show_red_flag(5, BodyRegion.LOWER_BACK, dismissals, NOW)


def test_red_flag_severity_four_suppressed_for_same_region():
    dismissals = [
        RedFlagDismissal(region=BodyRegion.LOWER_BACK, dismissed_at=NOW - timedelta(days=10))
    ]
    assert not should_show_red_flag(4, BodyRegion.LOWER_BACK, dismissals, NOW)
    assert should_show_red_flag(4, BodyRegion.LEFT_KNEE, dismissals, NOW)


def test_red_flag_dismissal_expires():
    dismissals = [
        RedFlagDismissal(region=BodyRegion.LOWER_BACK, dismissed_at=NOW - timedelta(days=31))
    ]
    assert should_show_red_flag(4, BodyRegion.LOWER_BACK, dismissals, NOW)


def test_red_flag_low_severity_never_shows():
    assert not should_show_red_flag(3, BodyRegion.LOWER_BACK, [], NOW)
    assert should_show_red_flag(4, BodyRegion.LOWER_BACK, [], NOW)


def test_format_region():
    assert format_region(BodyRegion.LOWER_BACK) == "Lower Back"
    assert format_region(BodyRegion.NECK) == "Neck"
