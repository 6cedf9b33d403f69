"""
pose_estimator.py - MoveNet Pose Estimation
============================================
Handles MoveNet SinglePose model loading and pose inference.
"""

import os
from typing import List, Optional

import cv2
import numpy as np

from ..exercises.base import NUM_KEYPOINTS, Keypoint, keypoints_from_array


class PoseEstimator:
    """
    Handles MoveNet SinglePose model loading and inference.
    Provides the 17 keypoints of the most prominent person in a frame.
    """

    # Lightning expects 192x192 input, Thunder 256x256
    INPUT_SIZE = 192

    def __init__(self, model_path: str, input_size: Optional[int] = None):
        """
        Initialize the pose estimator with MoveNet model.

        Args:
            model_path: Path to the SavedModel directory, .tflite, or .onnx file
            input_size: Model input resolution; defaults to INPUT_SIZE
        """
        if not os.path.exists(model_path):
            raise FileNotFoundError(f"MoveNet model not found at: {model_path}")

        self.model_path = model_path
        if input_size is not None:
            self.INPUT_SIZE = input_size

        if model_path.endswith('.onnx'):
            import onnxruntime as ort
            print(f"🔹 [PoseEstimator] Loading MoveNet SinglePose ONNX model: {model_path}")
            providers = ['CPUExecutionProvider']
            self.ort_session = ort.InferenceSession(model_path, providers=providers)
            self.model_type = 'onnx'
        elif model_path.endswith('.tflite'):
            import tensorflow as tf
            print(f"🔹 [PoseEstimator] Loading MoveNet SinglePose TFLite model: {model_path}")
            self.interpreter = tf.lite.Interpreter(model_path=model_path)
            self.interpreter.allocate_tensors()
            self.input_details = self.interpreter.get_input_details()
            self.output_details = self.interpreter.get_output_details()
            self.model_type = 'tflite'
        else:
            import tensorflow as tf
            print(f"🔹 [PoseEstimator] Loading MoveNet SinglePose SavedModel: {model_path}")
            self._tf = tf
            self.model = tf.saved_model.load(model_path)
            self.movenet = self.model.signatures['serving_default']
            self.model_type = 'tf'

        print("✅ [PoseEstimator] Model loaded successfully!")

    def _preprocess_frame(self, frame: np.ndarray) -> np.ndarray:
        """
        Preprocess frame for MoveNet inference.

        Args:
            frame: BGR image from OpenCV

        Returns:
            Array of shape [1, INPUT_SIZE, INPUT_SIZE, 3] ready for inference
        """
        img = cv2.resize(frame, (self.INPUT_SIZE, self.INPUT_SIZE))
        img = cv2.cvtColor(img, cv2.COLOR_BGR2RGB)

        if self.model_type == 'tflite':
            return np.expand_dims(img.astype(self.input_details[0]['dtype']), axis=0)
        return np.expand_dims(img.astype(np.int32), axis=0)

    def infer_poses(self, frame: np.ndarray) -> np.ndarray:
        """
        Run MoveNet inference on frame.

        Returns:
            Array (17, 3) of [y, x, score] with coordinates normalized to [0, 1]
        """
        input_data = self._preprocess_frame(frame)

        if self.model_type == 'onnx':
            input_name = self.ort_session.get_inputs()[0].name
            output = self.ort_session.run(None, {input_name: input_data})[0]
        elif self.model_type == 'tflite':
            self.interpreter.set_tensor(self.input_details[0]['index'], input_data)
            self.interpreter.invoke()
            output = self.interpreter.get_tensor(self.output_details[0]['index'])
        else:
            input_tensor = self._tf.convert_to_tensor(input_data)
            output = self.movenet(input_tensor)['output_0'].numpy()

        # SinglePose output is [1, 1, 17, 3]
        return np.asarray(output).reshape((NUM_KEYPOINTS, 3))

    def infer_keypoints(self, frame: np.ndarray) -> List[Keypoint]:
        """
        Run inference and return keypoints in pixel coordinates of the frame.
        """
        h, w = frame.shape[:2]
        return keypoints_from_array(self.infer_poses(frame), width=w, height=h)
