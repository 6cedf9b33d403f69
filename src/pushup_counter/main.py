"""
main.py - Push-up Counter
Main controller: video loop, rendering and keyboard handling
"""

import argparse
import os
import time
from collections import deque
from typing import Dict, Optional

import cv2
import numpy as np

from .core import PoseEstimator, PushUpSession, VideoStreamer, drawing
from .exercises import PushUpPosition

# ============================================================================
# 🔧 CONFIGURATION
# ============================================================================

# Path to the MoveNet SinglePose model (.onnx, .tflite or SavedModel directory)
MOVENET_MODEL_PATH = os.path.abspath(os.path.join(os.getcwd(), 'models', 'movenet_singlepose_lightning.onnx'))

# Video source - camera index or file path
VIDEO_SOURCE = "0"

# Optional: path to save the annotated video
OUTPUT_VIDEO_PATH = None

# Display window (set to False for headless mode)
SHOW_DISPLAY = True

MIN_KEYPOINT_SCORE = 0.5

# ============================================================================


class PushUpApp:
    """
    Push-up counting application.
    """

    WINDOW_NAME = "Push-up Counter"

    COLOR_UPPER = (0, 255, 0)  # Green
    COLOR_LOWER = (0, 165, 255)  # Orange
    COLOR_UNKNOWN = (200, 200, 200)  # Gray

    def __init__(self,
                 model_path: str,
                 video_source: str = VIDEO_SOURCE,
                 min_keypoint_score: float = MIN_KEYPOINT_SCORE,
                 flip: bool = False):
        print("\n" + "=" * 70)
        print("🏋️  PUSH-UP COUNTER")
        print("⚡ Model: MoveNet SinglePose")
        print("=" * 70 + "\n")

        print("🔹 Initializing Pose Estimator...")
        self.session = PushUpSession(PoseEstimator(model_path), min_keypoint_score)

        print(f"🎥 Opening video source: {video_source}")
        self.streamer = VideoStreamer(video_source, flip=flip)
        print(f"✅ Video opened: {self.streamer.width}x{self.streamer.height} @ {self.streamer.fps:.1f} FPS")

        self.processing_times = deque(maxlen=100)

    def _get_position_color(self, position: PushUpPosition):
        if position == PushUpPosition.UPPER:
            return self.COLOR_UPPER
        if position == PushUpPosition.LOWER:
            return self.COLOR_LOWER
        return self.COLOR_UNKNOWN

    def _render_frame(self, frame: np.ndarray, result: Dict, fps: float) -> np.ndarray:
        """
        Render keypoints, skeleton and counters onto a copy of the frame.
        """
        output = frame.copy()
        keypoints = result["keypoints"]
        min_score = self.session.min_keypoint_score

        drawing.draw_keypoints(output, keypoints, min_score)
        drawing.draw_skeleton(output, keypoints, min_score)
        drawing.draw_bounding_box(output, keypoints)
        drawing.draw_number_of_push_ups(output, result["reps"])

        position = result["position"]
        if not result["extent"].is_detected:
            status = "Get into the upper position"
        else:
            status = f"Position: {position.value}"
        cv2.putText(output, status, (20, 80), drawing.FONT, 0.6,
                    self._get_position_color(position), 2)
        cv2.putText(output, f"FPS: {fps:.1f}", (20, 110), drawing.FONT, 0.5,
                    (200, 200, 200), 1)

        return output

    def run(self, display: bool = True, save_output: Optional[str] = None):
        """
        Main processing loop.
        """
        writer = None
        if save_output:
            fourcc = cv2.VideoWriter_fourcc(*'mp4v')
            writer = cv2.VideoWriter(save_output, fourcc, self.streamer.fps,
                                     (self.streamer.width, self.streamer.height))
            print(f"💾 Saving output to: {save_output}")

        if display:
            cv2.namedWindow(self.WINDOW_NAME, cv2.WINDOW_NORMAL)

        print("▶️  PUSH-UP DETECTION STARTED...")
        print("   • ESC = Exit")
        print("   • R = Reset count")
        print("   • N = Start a new series\n")

        frame_count = 0
        start_time = time.time()
        last_fps_time = time.time()
        fps_frames = 0
        current_fps = 0.0

        self.streamer.start()

        try:
            while self.streamer.more():
                frame = self.streamer.read()
                if frame is None:
                    continue

                frame_count += 1
                loop_start = time.time()

                result = self.session.process_frame(frame)
                self.processing_times.append(time.time() - loop_start)

                fps_frames += 1
                if time.time() - last_fps_time >= 1.0:
                    current_fps = fps_frames / (time.time() - last_fps_time)
                    fps_frames = 0
                    last_fps_time = time.time()

                output_frame = self._render_frame(frame, result, current_fps)

                if display:
                    cv2.imshow(self.WINDOW_NAME, output_frame)

                    key = cv2.waitKey(1) & 0xFF
                    if key == 27:  # ESC
                        print("\n⏹️  Stopped by user.")
                        break
                    elif key in (ord('r'), ord('R')):
                        self.session.reset()
                    elif key in (ord('n'), ord('N')):
                        self.session.start_new_series()

                if writer:
                    writer.write(output_frame)

                if frame_count % 30 == 0:
                    avg_process = np.mean(self.processing_times) * 1000
                    print(f"Frame {frame_count:5d} | "
                          f"FPS: {current_fps:5.1f} | "
                          f"Process: {avg_process:5.1f}ms | "
                          f"Stage: {result['stage']:>7} | "
                          f"Reps: {result['reps']}")

        except KeyboardInterrupt:
            print("\n⏹️  Interrupted by user.")

        finally:
            total_time = time.time() - start_time
            avg_fps = frame_count / total_time if total_time > 0 else 0

            print("\n" + "=" * 70)
            print("📊 SESSION SUMMARY")
            print("=" * 70)
            print(f"Total frames processed: {frame_count}")
            print(f"Total time: {total_time:.2f} seconds")
            print(f"Average FPS: {avg_fps:.2f}")
            if self.processing_times:
                print(f"Average frame processing: {np.mean(self.processing_times) * 1000:.1f}ms")
            print(f"Push-ups counted: {self.session.reps}")
            print("=" * 70 + "\n")

            self.streamer.stop()
            if writer:
                writer.release()
            if display:
                cv2.destroyAllWindows()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Push-up Counter: MoveNet based repetition counting"
    )
    parser.add_argument('--video', type=str, default=VIDEO_SOURCE,
                        help='Video file path, stream URL, or camera index')
    parser.add_argument('--model', type=str, default=MOVENET_MODEL_PATH,
                        help='Path to MoveNet SinglePose model (.onnx, .tflite or SavedModel dir)')
    parser.add_argument('--output', type=str, default=OUTPUT_VIDEO_PATH,
                        help='Optional: path to save output video')
    parser.add_argument('--no-display', action='store_true',
                        help='Run without displaying video window')
    parser.add_argument('--min-confidence', type=float, default=MIN_KEYPOINT_SCORE,
                        help='Minimum keypoint score for a body part to count as identified')
    parser.add_argument('--flip', action='store_true',
                        help='Mirror frames horizontally (webcam view)')
    return parser


def main(argv=None):
    """Main entry point with command-line argument parsing."""
    args = build_parser().parse_args(argv)

    try:
        app = PushUpApp(
            model_path=args.model,
            video_source=args.video,
            min_keypoint_score=args.min_confidence,
            flip=args.flip
        )
        app.run(
            display=SHOW_DISPLAY and not args.no_display,
            save_output=args.output
        )

    except Exception as e:
        print(f"\n❌ Error: {str(e)}")
        import traceback
        traceback.print_exc()
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
