import tempfile
import types
import unittest
from pathlib import Path
from unittest import mock

import numpy as np

from pushup_counter.core.pose_estimator import PoseEstimator
from pushup_counter.exercises.base import BodyPart


class FakeInferenceSession:
    def __init__(self, model_path, providers=None) -> None:
        self.model_path = model_path
        self.providers = providers
        self.inputs = []

    def get_inputs(self):
        return [types.SimpleNamespace(name="input")]

    def run(self, output_names, feeds):
        self.inputs.append(feeds["input"])
        output = np.zeros((1, 1, 17, 3), dtype=np.float32)
        output[0, 0, BodyPart.LEFT_SHOULDER] = [0.5, 0.25, 0.75]
        return [output]


class PoseEstimatorTests(unittest.TestCase):
    def setUp(self) -> None:
        self.tmpdir = tempfile.TemporaryDirectory()
        self.model_path = Path(self.tmpdir.name) / "movenet.onnx"
        self.model_path.write_bytes(b"onnx")
        self.fake_ort = types.SimpleNamespace(InferenceSession=FakeInferenceSession)

    def tearDown(self) -> None:
        self.tmpdir.cleanup()

    def test_missing_model_raises(self) -> None:
        with self.assertRaises(FileNotFoundError):
            PoseEstimator(str(Path(self.tmpdir.name) / "absent.onnx"))

    def test_onnx_inference_returns_pixel_keypoints(self) -> None:
        with mock.patch.dict("sys.modules", {"onnxruntime": self.fake_ort}):
            estimator = PoseEstimator(str(self.model_path))

        frame = np.zeros((480, 640, 3), dtype=np.uint8)
        keypoints = estimator.infer_keypoints(frame)

        self.assertEqual(estimator.model_type, "onnx")
        self.assertEqual(len(keypoints), 17)
        shoulder = keypoints[BodyPart.LEFT_SHOULDER]
        self.assertAlmostEqual(shoulder.position.x, 160.0)
        self.assertAlmostEqual(shoulder.position.y, 240.0)
        self.assertAlmostEqual(shoulder.score, 0.75)

        (fed,) = estimator.ort_session.inputs
        self.assertEqual(fed.shape, (1, 192, 192, 3))
        self.assertEqual(fed.dtype, np.int32)

    def test_input_size_override(self) -> None:
        with mock.patch.dict("sys.modules", {"onnxruntime": self.fake_ort}):
            estimator = PoseEstimator(str(self.model_path), input_size=256)

        estimator.infer_poses(np.zeros((100, 100, 3), dtype=np.uint8))
        self.assertEqual(estimator.ort_session.inputs[0].shape, (1, 256, 256, 3))
        self.assertEqual(PoseEstimator.INPUT_SIZE, 192)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
