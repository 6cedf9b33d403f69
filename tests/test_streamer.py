import unittest
from unittest import mock

import numpy as np

from pushup_counter.core import streamer


class FakeCapture:
    def __init__(self, frames, opened=True) -> None:
        self.frames = list(frames)
        self.opened = opened
        self.released = False

    def isOpened(self) -> bool:
        return self.opened and not self.released

    def get(self, prop) -> float:
        return {
            streamer.cv2.CAP_PROP_FRAME_WIDTH: 4.0,
            streamer.cv2.CAP_PROP_FRAME_HEIGHT: 2.0,
            streamer.cv2.CAP_PROP_FPS: 0.0,
        }.get(prop, 0.0)

    def read(self):
        if not self.frames:
            return False, None
        return True, self.frames.pop(0)

    def release(self) -> None:
        self.released = True


def drain(video: streamer.VideoStreamer):
    frames = []
    while video.more():
        frame = video.read(timeout=0.5)
        if frame is not None:
            frames.append(frame)
    return frames


class VideoStreamerTests(unittest.TestCase):
    def test_parse_source_turns_digits_into_camera_index(self) -> None:
        self.assertEqual(streamer.parse_source("0"), 0)
        self.assertEqual(streamer.parse_source("clip.mp4"), "clip.mp4")
        self.assertEqual(streamer.parse_source(2), 2)

    def test_unopened_source_raises(self) -> None:
        with mock.patch.object(streamer.cv2, "VideoCapture", return_value=FakeCapture([], opened=False)):
            with self.assertRaises(RuntimeError):
                streamer.VideoStreamer("missing.mp4")

    def test_reads_every_frame_then_stops(self) -> None:
        frames = [np.full((2, 4, 3), i, dtype=np.uint8) for i in range(3)]
        capture = FakeCapture(frames)
        with mock.patch.object(streamer.cv2, "VideoCapture", return_value=capture) as mock_capture:
            video = streamer.VideoStreamer("0")

        mock_capture.assert_called_once_with(0)
        self.assertEqual((video.width, video.height), (4, 2))
        self.assertEqual(video.fps, 30.0)

        with video:
            received = drain(video)

        self.assertEqual([int(f[0, 0, 0]) for f in received], [0, 1, 2])
        self.assertTrue(capture.released)

    def test_flip_mirrors_frames(self) -> None:
        frame = np.zeros((1, 2, 3), dtype=np.uint8)
        frame[0, 0] = 255
        with mock.patch.object(streamer.cv2, "VideoCapture", return_value=FakeCapture([frame])):
            video = streamer.VideoStreamer("clip.mp4", flip=True)

        with video:
            (received,) = drain(video)

        self.assertEqual(int(received[0, 1, 0]), 255)
        self.assertEqual(int(received[0, 0, 0]), 0)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
