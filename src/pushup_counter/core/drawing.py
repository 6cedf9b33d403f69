"""
drawing.py - Pose Visualization
===============================
Draws keypoints, skeletons, bounding boxes and the rep counter onto frames.
"""

from typing import List, Sequence, Tuple

import cv2
import numpy as np

from ..exercises.base import BodyPart, Keypoint


# ===== VISUALIZATION CONFIG (BGR) =====
COLOR_POSE = (255, 255, 0)  # Aqua for keypoints and skeleton
COLOR_BOUNDING_BOX = (0, 0, 255)  # Red
COLOR_TEXT = (255, 255, 255)  # White
LINE_WIDTH = 2
KEYPOINT_RADIUS = 3

FONT = cv2.FONT_HERSHEY_SIMPLEX

# Skeleton connections used by PoseNet
CONNECTED_PARTS = [
    (BodyPart.LEFT_HIP, BodyPart.LEFT_SHOULDER),
    (BodyPart.LEFT_ELBOW, BodyPart.LEFT_SHOULDER),
    (BodyPart.LEFT_ELBOW, BodyPart.LEFT_WRIST),
    (BodyPart.LEFT_HIP, BodyPart.LEFT_KNEE),
    (BodyPart.LEFT_KNEE, BodyPart.LEFT_ANKLE),
    (BodyPart.RIGHT_HIP, BodyPart.RIGHT_SHOULDER),
    (BodyPart.RIGHT_ELBOW, BodyPart.RIGHT_SHOULDER),
    (BodyPart.RIGHT_ELBOW, BodyPart.RIGHT_WRIST),
    (BodyPart.RIGHT_HIP, BodyPart.RIGHT_KNEE),
    (BodyPart.RIGHT_KNEE, BodyPart.RIGHT_ANKLE),
    (BodyPart.LEFT_SHOULDER, BodyPart.RIGHT_SHOULDER),
    (BodyPart.LEFT_HIP, BodyPart.RIGHT_HIP),
]


def _to_tuple(keypoint: Keypoint) -> Tuple[float, float]:
    return keypoint.position.y, keypoint.position.x


def get_adjacent_keypoints(keypoints: Sequence[Keypoint],
                           min_confidence: float) -> List[Tuple[Keypoint, Keypoint]]:
    """Return skeleton connections whose both ends reach min_confidence."""
    return [
        (keypoints[a], keypoints[b])
        for a, b in CONNECTED_PARTS
        if keypoints[a].score >= min_confidence and keypoints[b].score >= min_confidence
    ]


def get_bounding_box(keypoints: Sequence[Keypoint]) -> Tuple[float, float, float, float]:
    """
    Bounding box of a pose as (min_x, min_y, max_x, max_y).

    Every keypoint counts regardless of its score.
    """
    xs = [kp.position.x for kp in keypoints]
    ys = [kp.position.y for kp in keypoints]
    return min(xs), min(ys), max(xs), max(ys)


def draw_point(image: np.ndarray, y: float, x: float, radius: int,
               color: Tuple[int, int, int] = COLOR_POSE):
    cv2.circle(image, (int(round(x)), int(round(y))), radius, color, -1)


def draw_segment(image: np.ndarray,
                 a: Tuple[float, float],
                 b: Tuple[float, float],
                 color: Tuple[int, int, int] = COLOR_POSE,
                 scale: float = 1.0):
    """Draw a line between two (y, x) points, i.e. a joint."""
    ay, ax = a
    by, bx = b
    cv2.line(image,
             (int(round(ax * scale)), int(round(ay * scale))),
             (int(round(bx * scale)), int(round(by * scale))),
             color, LINE_WIDTH)


def draw_skeleton(image: np.ndarray, keypoints: Sequence[Keypoint],
                  min_confidence: float, scale: float = 1.0):
    """Draw every identified skeleton connection."""
    for first, second in get_adjacent_keypoints(keypoints, min_confidence):
        draw_segment(image, _to_tuple(first), _to_tuple(second), COLOR_POSE, scale)


def draw_keypoints(image: np.ndarray, keypoints: Sequence[Keypoint],
                   min_confidence: float, scale: float = 1.0):
    """Draw identified keypoints."""
    for keypoint in keypoints:
        if keypoint.score < min_confidence:
            continue
        y, x = _to_tuple(keypoint)
        draw_point(image, y * scale, x * scale, KEYPOINT_RADIUS, COLOR_POSE)


def draw_bounding_box(image: np.ndarray, keypoints: Sequence[Keypoint]):
    """Draw the box from the topmost keypoint to the lowest one."""
    min_x, min_y, max_x, max_y = get_bounding_box(keypoints)
    cv2.rectangle(image,
                  (int(round(min_x)), int(round(min_y))),
                  (int(round(max_x)), int(round(max_y))),
                  COLOR_BOUNDING_BOX, 1)


def draw_number_of_push_ups(image: np.ndarray, reps: int, origin: Tuple[int, int] = (20, 40)):
    """Draw the rep counter on a dark background panel."""
    x, y = origin
    cv2.rectangle(image, (x - 10, y - 30), (x + 230, y + 12), (0, 0, 0), -1)
    cv2.putText(image, f"Push-ups: {reps}", (x, y), FONT, 0.9, COLOR_TEXT, 2)
