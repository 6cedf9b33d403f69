"""
Exercise Logic Module
=====================
Keypoint data model and push-up position classification.
"""

from .base import (BodyPart, Keypoint, Position, PushUpPosition, PushUpTrackState,
                   ReferenceExtent, keypoints_from_array, keypoints_to_array)
from .push_up import (PushUpDetector, are_approximately_equal, are_keypoints_identified,
                      calculate_max_and_min_y, check_new_push_up_series,
                      check_that_push_ups_in_lower_position,
                      check_that_push_ups_in_upper_position,
                      is_push_ups_in_lower_position)

__all__ = [
    'BodyPart',
    'Keypoint',
    'Position',
    'PushUpPosition',
    'PushUpTrackState',
    'ReferenceExtent',
    'keypoints_from_array',
    'keypoints_to_array',
    'PushUpDetector',
    'are_approximately_equal',
    'are_keypoints_identified',
    'calculate_max_and_min_y',
    'check_new_push_up_series',
    'check_that_push_ups_in_lower_position',
    'check_that_push_ups_in_upper_position',
    'is_push_ups_in_lower_position',
]
