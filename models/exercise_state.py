# exercise_state.py
"""
Per-exercise workout state threaded through the state machine.
ExerciseState is an immutable value: every evaluation returns a new one.
"""

import time
from enum import Enum
from typing import Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict


class ExerciseType(str, Enum):
    """Closed set of exercises; NONE means no active exercise."""
    SQUAT = "squat"
    BICEP_CURL = "bicepCurl"
    SHOULDER_PRESS = "shoulderPress"
    PUSHUP = "pushup"
    NONE = "none"


class RepState(str, Enum):
    """Phases of the rep/set cycle plus the form-gate interrupt."""
    STARTING = "starting"
    UP = "up"
    DOWN = "down"
    RESTING = "resting"
    INCORRECT_FORM = "incorrectForm"


class ExerciseState(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: ExerciseType
    rep_count: int = 0                          # Reps in the current set
    set_count: int = 1                          # Current set, saturates at settings.sets
    rep_state: RepState = RepState.STARTING
    form_feedback: Tuple[str, ...] = ()         # Rebuilt on every evaluation
    last_rep_timestamp: float = 0.0             # Epoch seconds of the last rep or set boundary
    form_correct: bool = True
    form_issues: Dict[str, bool] = {}           # Landmark name -> flagged, rebuilt on every evaluation
    total_reps: int = 0                         # Reps across all sets of this exercise


def new_exercise_state(exercise_type: ExerciseType, now: Optional[float] = None) -> ExerciseState:
    """Fresh state for a newly selected (or cleared) exercise."""
    return ExerciseState(
        type=ExerciseType(exercise_type),
        last_rep_timestamp=time.time() if now is None else now,
    )


def rep_progress(state: ExerciseState, target_reps: int) -> float:
    """Percentage of the current set completed."""
    if target_reps <= 0:
        return 0.0
    return state.rep_count / target_reps * 100


def set_progress(state: ExerciseState, sets: int) -> float:
    """Percentage of sets completed before the current one."""
    if sets <= 0:
        return 0.0
    return (state.set_count - 1) / sets * 100
