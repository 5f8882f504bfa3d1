# bicep_curl_evaluator.py
"""
Bicep curl evaluator using the right shoulder-elbow-wrist angle.
The curl contracts the elbow, so the cycle starts DOWN (arm extended) and
a rep counts when the arm extends again after passing the curl threshold.
"""

from typing import Optional

from models.exercise_catalog import ExerciseSettings
from models.exercise_evaluator import Evaluation, ExerciseEvaluator, Features, Polarity
from models.exercise_state import ExerciseType, RepState
from models.pose import Pose
from utils.geometry import angle_between, horizontal_offset, segment_verticality

ELBOW_DRIFT_TOLERANCE = 30      # Pixels the elbow may sit away from the shoulder line
MIN_UPPER_ARM_VERTICALITY = 0.85


class BicepCurlEvaluator(ExerciseEvaluator):
    exercise_type = ExerciseType.BICEP_CURL
    polarity = Polarity.CONTRACTION
    required_landmarks = ("right_shoulder", "right_elbow", "right_wrist")
    missing_message = "Cannot detect arms clearly"

    def measure(self, pose: Pose, settings: ExerciseSettings) -> Optional[Features]:
        shoulder, elbow, wrist = pose["right_shoulder"], pose["right_elbow"], pose["right_wrist"]
        elbow_angle = angle_between(shoulder, elbow, wrist)
        verticality = segment_verticality(elbow, shoulder)
        if elbow_angle is None or verticality is None:
            return None
        return {
            "angle": elbow_angle,
            "elbow_offset": horizontal_offset(elbow, shoulder),
            "upper_arm_verticality": verticality,
        }

    def check_form(self, pose: Pose, features: Features, settings: ExerciseSettings, evaluation: Evaluation):
        if abs(features["elbow_offset"]) > ELBOW_DRIFT_TOLERANCE:
            evaluation.flag(
                "Keep your elbows closer to your body",
                ("right_elbow", "left_elbow"),
            )

        if features["upper_arm_verticality"] < MIN_UPPER_ARM_VERTICALITY:
            evaluation.flag(
                "Minimize shoulder movement, focus on elbow flexion",
                ("right_shoulder", "left_shoulder"),
            )

    def reached_work_phase(self, features: Features, settings: ExerciseSettings) -> bool:
        return features["angle"] < settings.thresholds.up_angle

    def returned_home(self, features: Features, settings: ExerciseSettings) -> bool:
        return features["angle"] > settings.thresholds.down_angle

    def recovery_phase(self, features: Features, settings: ExerciseSettings) -> RepState:
        return RepState.UP if features["angle"] < settings.thresholds.up_angle else RepState.DOWN
