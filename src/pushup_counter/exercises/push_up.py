"""
push_up.py - Push-up Position Classification
============================================
Compares shoulder, elbow and eye heights against the extent recorded at the
start of a series to tell the upper and lower push-up positions apart.
"""

from typing import Dict, Iterable, Optional, Sequence, Tuple

from .base import BodyPart, Keypoint, PushUpPosition, PushUpTrackState, ReferenceExtent


DEFAULT_TOLERANCE = 0.20

# Joint pairs accepted as evidence of the lower position, in the order they are tried
LOWER_POSITION_PAIRS = (
    (BodyPart.LEFT_SHOULDER, BodyPart.RIGHT_SHOULDER),
    (BodyPart.LEFT_EYE, BodyPart.RIGHT_EYE),
    (BodyPart.LEFT_SHOULDER, BodyPart.RIGHT_ELBOW),
    (BodyPart.RIGHT_SHOULDER, BodyPart.LEFT_ELBOW),
)


def are_approximately_equal(y1: float, y2: float, scale: float,
                            tolerance: float = DEFAULT_TOLERANCE) -> bool:
    """
    Treat two Y values as equal when their difference is a small share of scale.

    Args:
        y1, y2: Y coordinates to compare
        scale: Normalizing length, usually taken from the reference extent
        tolerance: Largest accepted value of 2*|y1 - y2| / scale

    Returns:
        True if the normalized difference is below the tolerance
    """
    if scale <= 0:
        raise ValueError(f"scale must be positive, got {scale}")
    return 2 * abs(y1 - y2) / scale < tolerance


def are_keypoints_identified(keypoints: Sequence[Keypoint],
                             min_confidence: float,
                             indices: Iterable[int]) -> bool:
    """Check that every keypoint at the given indices scores at least min_confidence."""
    for index in indices:
        if keypoints[index].score < min_confidence:
            return False
    return True


def _mean_y(keypoints: Sequence[Keypoint], first: int, second: int) -> float:
    return (keypoints[first].position.y + keypoints[second].position.y) / 2


def check_new_push_up_series(keypoints: Sequence[Keypoint],
                             min_confidence: float) -> ReferenceExtent:
    """
    Record the reference extent for a new series of push-ups.

    Y grows downwards, so a valid starting posture has the shoulders above
    the elbows. Scores are not consulted; ``min_confidence`` is accepted so the
    signature matches the other checks.

    Returns:
        Extent spanning mean shoulder Y to mean elbow Y, or
        ReferenceExtent.UNDETECTED when the shoulders are not above the elbows
    """
    shoulders_y = _mean_y(keypoints, BodyPart.LEFT_SHOULDER, BodyPart.RIGHT_SHOULDER)
    elbows_y = _mean_y(keypoints, BodyPart.LEFT_ELBOW, BodyPart.RIGHT_ELBOW)

    if shoulders_y < elbows_y:
        return ReferenceExtent(min_y=shoulders_y, max_y=elbows_y)
    return ReferenceExtent.UNDETECTED


def calculate_max_and_min_y(keypoints: Sequence[Keypoint],
                            min_confidence: float) -> ReferenceExtent:
    """Extent over every identified keypoint from the shoulders down."""
    ys = [kp.position.y for kp in keypoints[BodyPart.LEFT_SHOULDER:]
          if kp.score >= min_confidence]
    if not ys:
        return ReferenceExtent.UNDETECTED
    return ReferenceExtent(min_y=min(ys), max_y=max(ys))


def is_push_ups_in_lower_position(keypoints: Sequence[Keypoint],
                                  min_confidence: float,
                                  previous_max_y: float,
                                  first: int,
                                  second: int) -> bool:
    """
    Check that a pair of joints is level and sits near the bottom of the extent.
    """
    if not are_keypoints_identified(keypoints, min_confidence, (first, second)):
        return False

    first_y = keypoints[first].position.y
    second_y = keypoints[second].position.y

    # both parts on the same level
    if not are_approximately_equal(first_y, second_y, previous_max_y, DEFAULT_TOLERANCE):
        return False

    # and where the elbows were at the start of the series
    return are_approximately_equal((first_y + second_y) / 2, previous_max_y,
                                   previous_max_y, DEFAULT_TOLERANCE)


def check_that_push_ups_in_lower_position(keypoints: Sequence[Keypoint],
                                          min_confidence: float,
                                          previous_max_y: float) -> bool:
    """True if any pair in LOWER_POSITION_PAIRS is down at previous_max_y."""
    return any(
        is_push_ups_in_lower_position(keypoints, min_confidence, previous_max_y, first, second)
        for first, second in LOWER_POSITION_PAIRS
    )


def check_that_push_ups_in_upper_position(keypoints: Sequence[Keypoint],
                                          min_confidence: float,
                                          previous_min_y: float,
                                          previous_max_y: float) -> bool:
    """
    Check that the shoulders are level and back where the series started.

    Only the shoulder pair is considered.
    """
    if not are_keypoints_identified(keypoints, min_confidence,
                                    (BodyPart.LEFT_SHOULDER, BodyPart.RIGHT_SHOULDER)):
        return False

    left_y = keypoints[BodyPart.LEFT_SHOULDER].position.y
    right_y = keypoints[BodyPart.RIGHT_SHOULDER].position.y

    if not are_approximately_equal(left_y, right_y, previous_max_y, DEFAULT_TOLERANCE):
        return False

    return are_approximately_equal((left_y + right_y) / 2, previous_min_y,
                                   previous_max_y, DEFAULT_TOLERANCE)


class PushUpDetector:
    """Classifies push-up positions per frame and counts repetitions."""

    # ===== CONFIGURATION =====
    MIN_KEYPOINT_SCORE = 0.5

    def __init__(self, min_keypoint_score: Optional[float] = None):
        if min_keypoint_score is not None:
            self.MIN_KEYPOINT_SCORE = min_keypoint_score

    def detect(self, keypoints: Sequence[Keypoint],
               extent: ReferenceExtent) -> Tuple[PushUpPosition, Dict]:
        """
        Classify one frame against the series extent.

        Args:
            keypoints: 17 keypoints ordered by BodyPart
            extent: Reference extent of the current series

        Returns:
            Tuple of (position, debug_info)
        """
        debug_info = {"upper": False, "lower": False, "extent_detected": extent.is_detected}

        if not extent.is_detected:
            return PushUpPosition.UNKNOWN, debug_info

        debug_info["upper"] = check_that_push_ups_in_upper_position(
            keypoints, self.MIN_KEYPOINT_SCORE, extent.min_y, extent.max_y)
        debug_info["lower"] = check_that_push_ups_in_lower_position(
            keypoints, self.MIN_KEYPOINT_SCORE, extent.max_y)

        if debug_info["upper"]:
            return PushUpPosition.UPPER, debug_info
        if debug_info["lower"]:
            return PushUpPosition.LOWER, debug_info
        return PushUpPosition.UNKNOWN, debug_info

    def update_track(self, state: PushUpTrackState, keypoints: Sequence[Keypoint]) -> bool:
        """
        Advance the rep state machine by one frame.

        Args:
            state: Caller-owned tracking state, updated in place
            keypoints: 17 keypoints ordered by BodyPart

        Returns:
            True if a rep was completed
        """
        if state.stage == "waiting":
            extent = check_new_push_up_series(keypoints, self.MIN_KEYPOINT_SCORE)
            if extent.is_detected:
                state.extent = extent
                state.stage = "up"
                print(f"🔹 New push-up series: shoulders at {extent.min_y:.1f}, elbows at {extent.max_y:.1f}")
            state.position, state.debug_info = self.detect(keypoints, state.extent)
            return False

        position, debug_info = self.detect(keypoints, state.extent)
        state.position, state.debug_info = position, debug_info

        # UPPER takes precedence, so a frame passing both checks never moves down
        if state.stage == "up" and position == PushUpPosition.LOWER:
            state.stage = "down"

        elif state.stage == "down" and position == PushUpPosition.UPPER:
            state.reps += 1
            state.stage = "up"
            print(f"💪 Push-up Rep #{state.reps}")
            return True

        return False
