"""
Push-up Counter
===============
Counts push-up repetitions from MoveNet pose keypoints.
"""

__version__ = "1.0.0"
__all__ = [
    "core",
    "exercises",
    "main",
]
