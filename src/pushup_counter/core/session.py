"""
session.py - Push-up Counting Session
=====================================
Combines pose estimation with push-up detection for one person.
"""

import time
from typing import Dict, Sequence

import numpy as np

from ..exercises.base import Keypoint, PushUpTrackState
from ..exercises.push_up import PushUpDetector
from .pose_estimator import PoseEstimator


class PushUpSession:
    """
    Runs the pose model on each frame and keeps the rep count.
    All state carried between frames lives in ``self.state``.
    """

    def __init__(self, pose_estimator: PoseEstimator, min_keypoint_score: float = 0.5):
        """
        Args:
            pose_estimator: Loaded estimator (anything with infer_keypoints)
            min_keypoint_score: Confidence below which a keypoint is ignored
        """
        print("🔹 [PushUpSession] Initializing...")
        self.pose_estimator = pose_estimator
        self.detector = PushUpDetector(min_keypoint_score)
        self.state = PushUpTrackState()
        self.frame_idx = 0
        self.last_rep_time = None
        print("✅ [PushUpSession] Ready!")

    @property
    def min_keypoint_score(self) -> float:
        return self.detector.MIN_KEYPOINT_SCORE

    @property
    def reps(self) -> int:
        return self.state.reps

    def process_keypoints(self, keypoints: Sequence[Keypoint]) -> Dict:
        """
        Update the session with keypoints already produced for a frame.

        Returns:
            Detection dictionary for rendering and reporting
        """
        self.frame_idx += 1

        rep_completed = self.detector.update_track(self.state, keypoints)
        if rep_completed:
            self.last_rep_time = time.time()

        return {
            "frame": self.frame_idx,
            "keypoints": list(keypoints),
            "position": self.state.position,
            "stage": self.state.stage,
            "reps": self.state.reps,
            "rep_completed": rep_completed,
            "extent": self.state.extent,
            "debug": self.state.debug_info,
        }

    def process_frame(self, frame: np.ndarray) -> Dict:
        """
        Process a single BGR frame.

        Args:
            frame: BGR image from OpenCV

        Returns:
            Detection dictionary, see process_keypoints
        """
        keypoints = self.pose_estimator.infer_keypoints(frame)
        return self.process_keypoints(keypoints)

    def start_new_series(self):
        """Record a fresh reference extent on the next upright frame."""
        self.state.start_new_series()
        print("🔄 [PushUpSession] Waiting for a new series")

    def reset(self):
        """Reset rep count and series state."""
        self.state.reset()
        self.frame_idx = 0
        self.last_rep_time = None
        print("🔄 [PushUpSession] Tracking state reset")
