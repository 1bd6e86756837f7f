"""
Session volume-ratio guardrail.

The ratio is written ``T1:T2:T3-tier`` relative to T1 volume, where the T3
tier is the T3 lift plus every accessory. ``"1:2:3"`` means twice the T1 reps
at T2 and three times at the T3 tier.
"""

import logging
import math

from .accessories import PHASE_ACCESSORY_CAPS, get_accessory_rep_range
from .models import PhaseMode, TrainingPhase, VolumeRatioCheck, VolumeRatioStatus
from .rounding import round_to_increment

logger = logging.getLogger(__name__)

MAX_T3_TIER_RATIOS: dict[PhaseMode, float] = {
    PhaseMode.CUTTING: 5,
    PhaseMode.MAINTAINING: 7,
    PhaseMode.BULKING: 10,
}

# Assumed reps per dropped accessory, independent of its real rep range
REPS_PER_ACCESSORY = 45


def _whole(value: float) -> int:
    return int(round_to_increment(value, 1))


def _ratio_string(t1_reps: int, t2_reps: int, ratio: float) -> str:
    if t1_reps > 0:
        t2_part = str(_whole(t2_reps / t1_reps))
    else:
        t2_part = "inf" if t2_reps > 0 else "0"
    return f"1:{t2_part}:{_whole(ratio)}"


def calculate_session_volume_ratio(
    t1_reps: int, t2_reps: int, t3_reps: int, accessory_reps: int, phase: TrainingPhase
) -> VolumeRatioCheck:
    """
    Check T3-tier volume against the phase maximum.

    Example:
        >>> calculate_session_volume_ratio(15, 30, 45, 0, TrainingPhase(mode="cutting")).ratio
        '1:2:3'
    """
    t3_tier = t3_reps + accessory_reps
    ratio = t3_tier / t1_reps if t1_reps > 0 else 0
    max_ratio = MAX_T3_TIER_RATIOS[phase.mode]
    max_accessories = PHASE_ACCESSORY_CAPS[phase.mode]
    ratio_str = _ratio_string(t1_reps, t2_reps, ratio)

    if ratio <= max_ratio:
        return VolumeRatioCheck(
            status=VolumeRatioStatus.OK,
            ratio=ratio_str,
            ratio_value=ratio,
            suggested_max_accessories=max_accessories,
        )

    excess = t3_tier - max_ratio * t1_reps
    to_drop = math.ceil(excess / REPS_PER_ACCESSORY)
    logger.debug(
        "T3-tier ratio %.2f exceeds %s for %s, drop %d", ratio, max_ratio, phase.mode.value, to_drop
    )
    if phase.mode == PhaseMode.CUTTING:
        noun = "accessory" if to_drop == 1 else "accessories"
        message = (
            f"Your T3-tier volume is {_whole(ratio)}x your T1 volume "
            f"(target: ≤{_whole(max_ratio)}x). On a cut, this will impair recovery "
            f"for your heavy lifts. Consider dropping {to_drop} {noun}."
        )
    else:
        message = f"Volume ratio is high ({_whole(ratio)}x). Monitor recovery."
    return VolumeRatioCheck(
        status=VolumeRatioStatus.WARNING,
        ratio=ratio_str,
        ratio_value=ratio,
        suggested_max_accessories=max_accessories,
        message=message,
    )


def estimate_accessory_reps(exercise_id: str) -> int:
    """Conservative rep estimate: sets x bottom of the range (face pulls -> 45)."""
    rep_range = get_accessory_rep_range(exercise_id)
    return rep_range.sets * rep_range.min_reps
