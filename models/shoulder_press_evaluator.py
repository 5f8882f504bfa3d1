# shoulder_press_evaluator.py
"""
Shoulder press evaluator. Tracks the right elbow angle together with the
wrist height relative to the shoulder, since a locked-out elbow alone does
not tell an overhead press from an arm hanging at the side.
"""

from typing import Optional

from models.exercise_catalog import ExerciseSettings
from models.exercise_evaluator import Evaluation, ExerciseEvaluator, Features, Polarity
from models.exercise_state import ExerciseType, RepState
from models.pose import Pose
from utils.geometry import angle_between, horizontal_offset, vertical_offset

DEFAULT_BACK_ANGLE_MIN = 165
TORSO_REFERENCE_LENGTH = 100    # Pixels below the hip for the vertical reference point
PRESS_TOP_HEIGHT = -100         # Wrist this far above the shoulder counts as pressed
PRESS_BOTTOM_HEIGHT = -50       # Wrist below this height counts as lowered
PRESS_PATH_TOLERANCE = 40


class ShoulderPressEvaluator(ExerciseEvaluator):
    exercise_type = ExerciseType.SHOULDER_PRESS
    polarity = Polarity.CONTRACTION
    required_landmarks = ("right_shoulder", "right_elbow", "right_wrist", "right_hip")
    missing_message = "Cannot detect arms and torso clearly"

    def measure(self, pose: Pose, settings: ExerciseSettings) -> Optional[Features]:
        shoulder, elbow, wrist, hip = (
            pose["right_shoulder"], pose["right_elbow"], pose["right_wrist"], pose["right_hip"],
        )
        elbow_angle = angle_between(shoulder, elbow, wrist)
        # 180 when the shoulder sits straight above the hip
        torso_angle = angle_between(shoulder, hip, (hip.x, hip.y + TORSO_REFERENCE_LENGTH))
        if elbow_angle is None or torso_angle is None:
            return None
        return {
            "angle": elbow_angle,
            "torso_angle": torso_angle,
            "wrist_height": vertical_offset(wrist, shoulder),
            "wrist_offset": horizontal_offset(wrist, shoulder),
        }

    def check_form(self, pose: Pose, features: Features, settings: ExerciseSettings, evaluation: Evaluation):
        back_min = settings.thresholds.back_angle_min or DEFAULT_BACK_ANGLE_MIN

        if features["torso_angle"] < back_min:
            evaluation.flag(
                "Avoid arching your back, keep your core engaged",
                ("right_hip", "left_hip"),
            )

        # Path only matters once the arms are raised
        if abs(features["wrist_offset"]) > PRESS_PATH_TOLERANCE and features["wrist_height"] < PRESS_BOTTOM_HEIGHT:
            evaluation.flag(
                "Press directly upward, maintain a vertical path",
                ("right_wrist", "left_wrist"),
            )

    def reached_work_phase(self, features: Features, settings: ExerciseSettings) -> bool:
        return (
            features["angle"] > settings.thresholds.up_angle
            and features["wrist_height"] < PRESS_TOP_HEIGHT
        )

    def returned_home(self, features: Features, settings: ExerciseSettings) -> bool:
        return (
            features["angle"] < settings.thresholds.down_angle
            and features["wrist_height"] > PRESS_BOTTOM_HEIGHT
        )

    def recovery_phase(self, features: Features, settings: ExerciseSettings) -> RepState:
        return RepState.UP if features["wrist_height"] < PRESS_TOP_HEIGHT else RepState.DOWN
