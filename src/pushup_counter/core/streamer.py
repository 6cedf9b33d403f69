"""
streamer.py - Threaded Video Streamer
=====================================
Reads frames from a camera or video file in a background thread so that
pose inference never waits on capture I/O.
"""

import threading
import time
from queue import Empty, Queue
from typing import Optional, Union

import cv2
import numpy as np


def parse_source(source: Union[str, int]) -> Union[str, int]:
    """Turn a numeric string such as "0" into a camera index."""
    if isinstance(source, str) and source.isdigit():
        return int(source)
    return source


class VideoStreamer:
    """
    Reads frames from a video source using a separate thread.
    Frames are handed over through a bounded, thread-safe queue.
    """

    def __init__(self, source: Union[str, int], queue_size: int = 128, flip: bool = False):
        """
        Args:
            source: Video file path, stream URL, or camera index
            queue_size: Maximum number of buffered frames
            flip: Mirror frames horizontally (useful for webcams)
        """
        self.source = parse_source(source)
        self.flip = flip
        self.cap = cv2.VideoCapture(self.source)

        if not self.cap.isOpened():
            raise RuntimeError(f"Failed to open video source: {source}")

        self.width = int(self.cap.get(cv2.CAP_PROP_FRAME_WIDTH))
        self.height = int(self.cap.get(cv2.CAP_PROP_FRAME_HEIGHT))
        self.fps = self.cap.get(cv2.CAP_PROP_FPS) or 30.0

        self.queue = Queue(maxsize=queue_size)
        self.stopped = False
        self.thread = None

    def __enter__(self):
        return self.start()

    def __exit__(self, exc_type, exc, tb):
        self.stop()

    def start(self):
        """Start the background frame reading thread."""
        if self.thread is not None:
            return self

        self.stopped = False
        self.thread = threading.Thread(target=self._update, name="StreamerThread", daemon=True)
        self.thread.start()
        return self

    def _update(self):
        while not self.stopped:
            if self.queue.full():
                time.sleep(0.001)
                continue

            ret, frame = self.cap.read()
            if not ret:
                self.stopped = True
                break
            if self.flip:
                frame = cv2.flip(frame, 1)
            self.queue.put(frame)

        self.cap.release()

    def read(self, timeout: float = 1.0) -> Optional[np.ndarray]:
        """Return the next frame, or None if none arrived within timeout."""
        try:
            return self.queue.get(timeout=timeout)
        except Empty:
            return None

    def more(self) -> bool:
        """Check if frames are queued or the reader is still running."""
        return not self.queue.empty() or not self.stopped

    def stop(self):
        """Stop the background thread and release the capture."""
        self.stopped = True
        if self.thread:
            self.thread.join(timeout=2.0)
        if self.cap.isOpened():
            self.cap.release()
