# exercise_state_machine.py
"""
Entry point of the exercise state machine: one call per pose sample.
"""

import time
from typing import Dict, Optional

from models.bicep_curl_evaluator import BicepCurlEvaluator
from models.exercise_catalog import ExerciseSettings
from models.exercise_evaluator import ExerciseEvaluator
from models.exercise_state import ExerciseState, ExerciseType
from models.pose import Pose
from models.push_up_evaluator import PushUpEvaluator
from models.shoulder_press_evaluator import ShoulderPressEvaluator
from models.squat_evaluator import SquatEvaluator

EVALUATORS: Dict[ExerciseType, ExerciseEvaluator] = {
    evaluator.exercise_type: evaluator
    for evaluator in (
        SquatEvaluator(),
        BicepCurlEvaluator(),
        ShoulderPressEvaluator(),
        PushUpEvaluator(),
    )
}

# Every exercise except NONE must have exactly one evaluator
assert set(EVALUATORS) == set(ExerciseType) - {ExerciseType.NONE}


def transition(
    previous: ExerciseState,
    pose: Optional[Pose],
    settings: ExerciseSettings,
    now: Optional[float] = None,
) -> ExerciseState:
    """
    Produce the next ExerciseState for one pose sample.

    Returns `previous` untouched when there is no pose or no active exercise.
    Otherwise feedback, form_correct and form_issues are rebuilt from scratch
    and the evaluator for previous.type advances the rep/set/rest cycle.
    `now` (epoch seconds) defaults to the wall clock.
    """
    if pose is None or previous.type is ExerciseType.NONE:
        return previous

    assert settings.type is previous.type, f"settings for {settings.type} applied to {previous.type}"
    evaluator = EVALUATORS[previous.type]
    return evaluator.evaluate(previous, pose, settings, time.time() if now is None else now)
