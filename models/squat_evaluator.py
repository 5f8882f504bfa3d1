# squat_evaluator.py
"""
Squat evaluator using the hip-knee-ankle angle of the left leg.
Form checks: forward lean (shoulder-hip-knee) and knee travel past the ankle.
"""

from typing import Optional

from models.exercise_catalog import ExerciseSettings
from models.exercise_evaluator import Evaluation, ExerciseEvaluator, Features, Polarity
from models.exercise_state import ExerciseType, RepState
from models.pose import Pose
from utils.geometry import angle_between, horizontal_offset

DEFAULT_BACK_ANGLE_MIN = 160
DEFAULT_KNEE_POSITION_THRESHOLD = 30


class SquatEvaluator(ExerciseEvaluator):
    exercise_type = ExerciseType.SQUAT
    polarity = Polarity.RETURN
    required_landmarks = ("left_hip", "left_knee", "left_ankle", "left_shoulder")
    missing_message = "Cannot detect legs and torso clearly"

    def measure(self, pose: Pose, settings: ExerciseSettings) -> Optional[Features]:
        hip, knee, ankle = pose["left_hip"], pose["left_knee"], pose["left_ankle"]
        knee_angle = angle_between(hip, knee, ankle)
        back_angle = angle_between(pose["left_shoulder"], hip, knee)
        if knee_angle is None or back_angle is None:
            return None
        return {
            "angle": knee_angle,
            "back_angle": back_angle,
            "knee_offset": horizontal_offset(knee, ankle),
        }

    def check_form(self, pose: Pose, features: Features, settings: ExerciseSettings, evaluation: Evaluation):
        thresholds = settings.thresholds
        back_min = thresholds.back_angle_min or DEFAULT_BACK_ANGLE_MIN
        knee_limit = thresholds.knee_position_threshold or DEFAULT_KNEE_POSITION_THRESHOLD

        if features["back_angle"] < back_min:
            evaluation.flag(
                "Keep your back straighter, avoid excessive forward lean",
                ("left_shoulder", "right_shoulder", "left_hip", "right_hip"),
            )

        if abs(features["knee_offset"]) > knee_limit:
            evaluation.flag(
                "Align your knees better with your ankles",
                ("left_knee", "right_knee"),
            )

    def reached_work_phase(self, features: Features, settings: ExerciseSettings) -> bool:
        return features["angle"] < settings.thresholds.down_angle

    def returned_home(self, features: Features, settings: ExerciseSettings) -> bool:
        return features["angle"] > settings.thresholds.up_angle

    def recovery_phase(self, features: Features, settings: ExerciseSettings) -> RepState:
        return RepState.DOWN if features["angle"] < settings.thresholds.down_angle else RepState.UP
