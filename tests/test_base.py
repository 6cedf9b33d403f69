import unittest
from dataclasses import fields

import numpy as np

from pushup_counter.exercises.base import (BodyPart, PushUpTrackState, ReferenceExtent,
                                           keypoints_from_array, keypoints_to_array)


class BodyPartTests(unittest.TestCase):
    def test_indices_follow_coco_order(self) -> None:
        self.assertEqual(len(BodyPart), 17)
        self.assertEqual(BodyPart.NOSE, 0)
        self.assertEqual(BodyPart.LEFT_SHOULDER, 5)
        self.assertEqual(BodyPart.RIGHT_WRIST, 10)
        self.assertEqual(BodyPart.RIGHT_ANKLE, 16)

    def test_label_uses_camel_case(self) -> None:
        self.assertEqual(BodyPart.NOSE.label, "nose")
        self.assertEqual(BodyPart.LEFT_SHOULDER.label, "leftShoulder")
        self.assertEqual(BodyPart.RIGHT_ANKLE.label, "rightAnkle")


class ReferenceExtentTests(unittest.TestCase):
    def test_sentinel_is_not_detected(self) -> None:
        self.assertEqual(ReferenceExtent.UNDETECTED, ReferenceExtent(min_y=1000, max_y=-1))
        self.assertFalse(ReferenceExtent.UNDETECTED.is_detected)

    def test_sentinel_is_not_a_field(self) -> None:
        self.assertEqual([f.name for f in fields(ReferenceExtent)], ["min_y", "max_y"])
        self.assertEqual(ReferenceExtent(), ReferenceExtent.UNDETECTED)

    def test_span(self) -> None:
        extent = ReferenceExtent(min_y=100, max_y=150)
        self.assertTrue(extent.is_detected)
        self.assertEqual(extent.span, 50)

    def test_new_track_state_waits_for_series(self) -> None:
        state = PushUpTrackState()
        self.assertEqual(state.reps, 0)
        self.assertEqual(state.stage, "waiting")
        self.assertIs(state.extent, ReferenceExtent.UNDETECTED)


class KeypointConversionTests(unittest.TestCase):
    def test_movenet_rows_are_scaled_to_pixels(self) -> None:
        raw = np.zeros((17, 3))
        raw[BodyPart.LEFT_SHOULDER] = [0.25, 0.5, 0.8]

        keypoints = keypoints_from_array(raw, width=640, height=480)

        shoulder = keypoints[BodyPart.LEFT_SHOULDER]
        self.assertEqual(shoulder.part, BodyPart.LEFT_SHOULDER)
        self.assertAlmostEqual(shoulder.position.x, 320.0)
        self.assertAlmostEqual(shoulder.position.y, 120.0)
        self.assertAlmostEqual(shoulder.score, 0.8)
        self.assertEqual([kp.part for kp in keypoints], list(BodyPart))

    def test_wrong_shape_raises(self) -> None:
        with self.assertRaises(ValueError):
            keypoints_from_array(np.zeros((16, 3)))

    def test_to_array_keeps_y_x_score_layout(self) -> None:
        raw = np.arange(51, dtype=float).reshape((17, 3))
        np.testing.assert_allclose(keypoints_to_array(keypoints_from_array(raw)), raw)

    def test_to_array_rejects_partial_pose(self) -> None:
        keypoints = keypoints_from_array(np.zeros((17, 3)))
        with self.assertRaises(ValueError):
            keypoints_to_array(keypoints[:5])


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
