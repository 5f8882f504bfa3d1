# push_up_evaluator.py
"""
Push-up evaluator for a side-on camera, using the left shoulder-elbow-wrist
angle. Checks that the body stays in a plank line and the hands stay under
the shoulders.
"""

from typing import Optional

from models.exercise_catalog import ExerciseSettings
from models.exercise_evaluator import Evaluation, ExerciseEvaluator, Features, Polarity
from models.exercise_state import ExerciseType, RepState
from models.pose import Pose
from utils.geometry import angle_between, horizontal_offset

DEFAULT_BODY_LINE_MIN = 160
HAND_PLACEMENT_TOLERANCE = 60


class PushUpEvaluator(ExerciseEvaluator):
    exercise_type = ExerciseType.PUSHUP
    polarity = Polarity.RETURN
    required_landmarks = ("left_shoulder", "left_elbow", "left_wrist", "left_hip", "left_ankle")
    missing_message = "Cannot detect arms and body line clearly"

    def measure(self, pose: Pose, settings: ExerciseSettings) -> Optional[Features]:
        shoulder, elbow, wrist = pose["left_shoulder"], pose["left_elbow"], pose["left_wrist"]
        elbow_angle = angle_between(shoulder, elbow, wrist)
        body_line = angle_between(shoulder, pose["left_hip"], pose["left_ankle"])
        if elbow_angle is None or body_line is None:
            return None
        return {
            "angle": elbow_angle,
            "body_line_angle": body_line,
            "hand_offset": horizontal_offset(wrist, shoulder),
        }

    def check_form(self, pose: Pose, features: Features, settings: ExerciseSettings, evaluation: Evaluation):
        body_min = settings.thresholds.back_angle_min or DEFAULT_BODY_LINE_MIN

        if features["body_line_angle"] < body_min:
            evaluation.flag(
                "Keep your body in a straight line from head to heels",
                ("left_hip", "right_hip"),
            )

        if abs(features["hand_offset"]) > HAND_PLACEMENT_TOLERANCE:
            evaluation.flag(
                "Place your hands under your shoulders",
                ("left_wrist", "right_wrist"),
            )

    def reached_work_phase(self, features: Features, settings: ExerciseSettings) -> bool:
        return features["angle"] < settings.thresholds.down_angle

    def returned_home(self, features: Features, settings: ExerciseSettings) -> bool:
        return features["angle"] > settings.thresholds.up_angle

    def recovery_phase(self, features: Features, settings: ExerciseSettings) -> RepState:
        return RepState.DOWN if features["angle"] < settings.thresholds.down_angle else RepState.UP
