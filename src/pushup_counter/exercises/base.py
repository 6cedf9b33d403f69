"""
base.py - Keypoint data model shared by the push-up logic
=========================================================
Body part labels, keypoint containers and the per-series tracking state.
"""

import enum
from dataclasses import dataclass
from typing import ClassVar, Dict, List, Sequence

import numpy as np


NUM_KEYPOINTS = 17


class BodyPart(enum.IntEnum):
    """COCO keypoint labels in the order the pose model emits them."""
    NOSE = 0
    LEFT_EYE = 1
    RIGHT_EYE = 2
    LEFT_EAR = 3
    RIGHT_EAR = 4
    LEFT_SHOULDER = 5
    RIGHT_SHOULDER = 6
    LEFT_ELBOW = 7
    RIGHT_ELBOW = 8
    LEFT_WRIST = 9
    RIGHT_WRIST = 10
    LEFT_HIP = 11
    RIGHT_HIP = 12
    LEFT_KNEE = 13
    RIGHT_KNEE = 14
    LEFT_ANKLE = 15
    RIGHT_ANKLE = 16

    @property
    def label(self) -> str:
        """Part name as PoseNet spells it, e.g. ``leftShoulder``."""
        head, *rest = self.name.lower().split("_")
        return head + "".join(word.capitalize() for word in rest)


class PushUpPosition(enum.Enum):
    """Phase of a single push-up repetition"""
    UPPER = "upper"
    LOWER = "lower"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Position:
    x: float
    y: float


@dataclass(frozen=True)
class Keypoint:
    """A labeled anatomical landmark with its image position and confidence."""
    part: BodyPart
    position: Position
    score: float


@dataclass(frozen=True)
class ReferenceExtent:
    """
    Topmost and bottommost Y recorded at the start of a push-up series.

    The pair (1000, -1) is the "series not yet detected" sentinel.
    """
    UNDETECTED: ClassVar["ReferenceExtent"]

    min_y: float = 1000.0
    max_y: float = -1.0

    @property
    def is_detected(self) -> bool:
        return self.max_y > 0 and self.min_y < self.max_y

    @property
    def span(self) -> float:
        return self.max_y - self.min_y


ReferenceExtent.UNDETECTED = ReferenceExtent()


class PushUpTrackState:
    """Caller-owned state carried between frames for one push-up session."""

    def __init__(self):
        self.reps = 0
        self.stage = "waiting"  # "waiting", "up" or "down"
        self.extent = ReferenceExtent.UNDETECTED
        # classification of the most recent frame
        self.position = PushUpPosition.UNKNOWN
        self.debug_info: Dict = {}

    def start_new_series(self):
        """Forget the reference extent but keep the rep count."""
        self.stage = "waiting"
        self.extent = ReferenceExtent.UNDETECTED
        self.position = PushUpPosition.UNKNOWN
        self.debug_info = {}

    def reset(self):
        """Reset the track state."""
        self.reps = 0
        self.start_new_series()


def keypoints_from_array(keypoints: np.ndarray,
                         width: float = 1.0,
                         height: float = 1.0) -> List[Keypoint]:
    """
    Convert a MoveNet keypoint tensor to Keypoint objects.

    Args:
        keypoints: Array of shape (17, 3) holding [y, x, score] rows with
            normalized coordinates
        width, height: Frame size used to scale coordinates to pixels

    Returns:
        List of 17 keypoints ordered by BodyPart
    """
    keypoints = np.asarray(keypoints, dtype=float)
    if keypoints.shape != (NUM_KEYPOINTS, 3):
        raise ValueError(f"Expected keypoints of shape ({NUM_KEYPOINTS}, 3), got {keypoints.shape}")

    return [
        Keypoint(part=part,
                 position=Position(x=float(keypoints[part, 1] * width),
                                   y=float(keypoints[part, 0] * height)),
                 score=float(keypoints[part, 2]))
        for part in BodyPart
    ]


def keypoints_to_array(keypoints: Sequence[Keypoint]) -> np.ndarray:
    """Inverse of keypoints_from_array for pixel coordinates: rows of [y, x, score]."""
    if len(keypoints) != NUM_KEYPOINTS:
        raise ValueError(f"Expected {NUM_KEYPOINTS} keypoints, got {len(keypoints)}")
    return np.array([[kp.position.y, kp.position.x, kp.score] for kp in keypoints])
