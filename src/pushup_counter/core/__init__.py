"""
Core Processing Module
======================
Contains pose estimation, video streaming, drawing and the counting session.
"""

from .pose_estimator import PoseEstimator
from .session import PushUpSession
from .streamer import VideoStreamer
from . import drawing

__all__ = [
    'PoseEstimator',
    'PushUpSession',
    'VideoStreamer',
    'drawing'
]
