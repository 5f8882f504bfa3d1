import cv2
import numpy as np
import time
from typing import Iterable, Optional
from config import config
from models.exercise_state import ExerciseState
from models.pose import Pose
from utils.logging_utils import logger

# BGR colours
COLOR_GOOD = (0, 200, 0)
COLOR_WARN = (0, 190, 255)
COLOR_BAD = (0, 0, 255)
COLOR_NEUTRAL = (200, 200, 200)
COLOR_TEXT = (255, 255, 255)

SKELETON = [
    ("left_shoulder", "right_shoulder"),
    ("left_shoulder", "left_elbow"), ("left_elbow", "left_wrist"),
    ("right_shoulder", "right_elbow"), ("right_elbow", "right_wrist"),
    ("left_shoulder", "left_hip"), ("right_shoulder", "right_hip"),
    ("left_hip", "right_hip"),
    ("left_hip", "left_knee"), ("left_knee", "left_ankle"),
    ("right_hip", "right_knee"), ("right_knee", "right_ankle"),
]


def landmark_color(name: str, state: Optional[ExerciseState], primary: Iterable[str]) -> tuple:
    """
    Colour for one landmark: red when flagged in form_issues, otherwise green
    or amber for primary landmarks depending on overall form, grey for the rest.
    """
    if state is None:
        return COLOR_NEUTRAL
    if state.form_issues.get(name):
        return COLOR_BAD
    if name in primary:
        return COLOR_GOOD if state.form_correct else COLOR_WARN
    return COLOR_NEUTRAL


class DebugService:
    """
    Pose overlay rendering and debug frame saving.
    Draws the skeleton with form-issue highlighting plus the current workout
    state, and saves annotated frames when frame saving is enabled.
    """

    @staticmethod
    def draw_pose(img: np.ndarray, pose: Pose, state: Optional[ExerciseState] = None,
                  primary_landmarks: Iterable[str] = ()) -> np.ndarray:
        """Return an annotated copy of img with the pose and state overlaid"""
        primary = set(primary_landmarks)
        annotated = img.copy()

        for a, b in SKELETON:
            if a in pose and b in pose:
                p1 = (int(pose[a].x), int(pose[a].y))
                p2 = (int(pose[b].x), int(pose[b].y))
                flagged = state is not None and (state.form_issues.get(a) or state.form_issues.get(b))
                cv2.line(annotated, p1, p2, COLOR_BAD if flagged else COLOR_NEUTRAL, 2)

        for name, point in pose.items():
            radius = 8 if name in primary else 4
            cv2.circle(annotated, (int(point.x), int(point.y)), radius,
                       landmark_color(name, state, primary), -1)

        if state is not None:
            font = cv2.FONT_HERSHEY_SIMPLEX
            texts = [
                f"Reps: {state.rep_count}  Set: {state.set_count}",
                f"State: {state.rep_state.value}",
            ] + list(state.form_feedback)

            for i, text in enumerate(texts):
                y_pos = 30 + (i * 28)
                cv2.putText(annotated, text, (10, y_pos), font, 0.6, COLOR_TEXT, 2)

        return annotated

    def save_debug_frame(self, img_bytes: bytes, frame_count: int, pose: Optional[Pose],
                         state: ExerciseState, primary_landmarks: Iterable[str] = (),
                         scale: float = 1.0):
        """
        Save annotated debug frame to disk if frame saving is enabled.
        `scale` maps pose coordinates (resized image) back onto the original frame.
        """
        if not config.save_frames or not config.debug_dir:
            return

        try:
            # Decode image from bytes
            nparr = np.frombuffer(img_bytes, np.uint8)
            img = cv2.imdecode(nparr, cv2.IMREAD_COLOR)

            if img is None:
                return

            if pose and scale != 1.0:
                pose = {name: p._replace(x=p.x / scale, y=p.y / scale) for name, p in pose.items()}

            debug_img = self.draw_pose(img, pose or {}, state, primary_landmarks)

            # Generate descriptive filename with timestamp
            timestamp = int(time.time())
            filename = f"frame_{frame_count:04d}_set_{state.set_count}_reps_{state.rep_count}_{timestamp}.jpg"
            filepath = config.debug_dir / filename

            cv2.imwrite(str(filepath), debug_img)
            logger.debug(f"Debug frame saved: {filename}")

        except Exception as e:
            logger.error(f"Error saving debug frame: {e}")

# Global service instance
debug_service = DebugService()
