# exercise_catalog.py
"""
Static exercise catalog: targets, rest timing, angle thresholds, tracked
landmarks and display text for every ExerciseType. Pure data.
"""

from typing import Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, model_validator

from models.exercise_state import ExerciseType


class Thresholds(BaseModel):
    model_config = ConfigDict(frozen=True)

    up_angle: float
    down_angle: float
    back_angle_min: Optional[float] = None
    back_angle_max: Optional[float] = None
    knee_position_threshold: Optional[float] = None

    @model_validator(mode="after")
    def check_distinct_extremes(self):
        if self.up_angle == self.down_angle and self.up_angle != 0:
            raise ValueError("up_angle and down_angle must differ")
        return self


class ExerciseSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    type: ExerciseType
    target_reps: int
    sets: int
    rest_between_sets: float                 # Seconds
    thresholds: Thresholds
    form_instructions: Tuple[str, ...] = ()
    muscles_targeted: Tuple[str, ...] = ()
    primary_landmarks: Tuple[str, ...] = ()


EXERCISES: Dict[ExerciseType, ExerciseSettings] = {
    ExerciseType.SQUAT: ExerciseSettings(
        name="Squat",
        type=ExerciseType.SQUAT,
        target_reps=10,
        sets=3,
        rest_between_sets=60,
        thresholds=Thresholds(
            up_angle=165,                  # Standing, knees nearly straight
            down_angle=100,                # Squat depth
            back_angle_min=155,
            knee_position_threshold=35,
        ),
        form_instructions=(
            "Keep your back straight throughout the movement",
            "Knees should be aligned with toes, not collapsing inward",
            "Go down until thighs are parallel to the ground",
            "Maintain weight in your heels, not your toes",
        ),
        muscles_targeted=("Quadriceps", "Hamstrings", "Glutes", "Core"),
        primary_landmarks=(
            "left_hip", "left_knee", "left_ankle",
            "right_hip", "right_knee", "right_ankle",
            "left_shoulder", "right_shoulder",
        ),
    ),
    ExerciseType.BICEP_CURL: ExerciseSettings(
        name="Bicep Curl",
        type=ExerciseType.BICEP_CURL,
        target_reps=12,
        sets=3,
        rest_between_sets=45,
        thresholds=Thresholds(
            up_angle=50,                   # Top of the curl
            down_angle=150,                # Arm extended
            back_angle_min=160,
        ),
        form_instructions=(
            "Keep elbows close to your sides throughout the movement",
            "Minimize upper arm movement - isolate the bicep",
            "Curl up until forearms are nearly vertical",
            "Lower weights in a controlled motion to near full extension",
        ),
        muscles_targeted=("Biceps", "Forearms"),
        primary_landmarks=(
            "left_shoulder", "left_elbow", "left_wrist",
            "right_shoulder", "right_elbow", "right_wrist",
        ),
    ),
    ExerciseType.SHOULDER_PRESS: ExerciseSettings(
        name="Shoulder Press",
        type=ExerciseType.SHOULDER_PRESS,
        target_reps=10,
        sets=3,
        rest_between_sets=60,
        thresholds=Thresholds(
            up_angle=165,                  # Arms locked out overhead
            down_angle=95,                 # Weights back at shoulder level
            back_angle_min=160,
        ),
        form_instructions=(
            "Keep your core engaged and back straight",
            "Press directly upward in a vertical path",
            "Lower weights under control to shoulder level",
            "Avoid excessive back arching during the press",
        ),
        muscles_targeted=("Shoulders", "Triceps", "Upper back"),
        primary_landmarks=(
            "left_shoulder", "left_elbow", "left_wrist",
            "right_shoulder", "right_elbow", "right_wrist",
            "left_hip", "right_hip",
        ),
    ),
    ExerciseType.PUSHUP: ExerciseSettings(
        name="Push-up",
        type=ExerciseType.PUSHUP,
        target_reps=10,
        sets=3,
        rest_between_sets=60,
        thresholds=Thresholds(
            up_angle=150,                  # Arms extended at the top
            down_angle=100,                # Chest lowered
            back_angle_min=160,
        ),
        form_instructions=(
            "Keep your body in a straight line from head to heels",
            "Place your hands slightly wider than shoulder width",
            "Lower your chest until elbows reach about 90 degrees",
            "Push back up to full arm extension",
        ),
        muscles_targeted=("Chest", "Triceps", "Shoulders", "Core"),
        primary_landmarks=(
            "left_shoulder", "left_elbow", "left_wrist",
            "right_shoulder", "right_elbow", "right_wrist",
            "left_hip", "right_hip", "left_ankle", "right_ankle",
        ),
    ),
    ExerciseType.NONE: ExerciseSettings(
        name="None",
        type=ExerciseType.NONE,
        target_reps=0,
        sets=0,
        rest_between_sets=0,
        thresholds=Thresholds(up_angle=0, down_angle=0),
    ),
}


def settings_for(exercise_type: Union[ExerciseType, str]) -> ExerciseSettings:
    """Look up catalog settings; raises ValueError for identifiers outside ExerciseType."""
    return EXERCISES[ExerciseType(exercise_type)]


def list_exercises() -> List[ExerciseSettings]:
    """Selectable exercises, in catalog order."""
    return [s for t, s in EXERCISES.items() if t is not ExerciseType.NONE]
