# workout_counter.py
"""
Workout session that owns the ExerciseState for the selected exercise.
Replaces the state on every frame, resets it on exercise selection and keeps
an in-memory summary of the exercises used during this process lifetime.
"""

import time
from typing import Any, Dict, Optional, Union

from models.exercise_catalog import ExerciseSettings, settings_for
from models.exercise_state import ExerciseState, ExerciseType, RepState, new_exercise_state
from models.exercise_state_machine import transition
from models.pose import Pose
from utils.logging_utils import logger

FORM_LOST_ALERT = "Incorrect form detected. Pausing count."
FORM_RECOVERED_ALERT = "Form corrected! Continue exercising"


class WorkoutCounter:
    """
    Frame-loop owner of one exercise session.
    Delegates every pose sample to the state machine and reports what changed.
    """

    def __init__(self, mode: Union[ExerciseType, str] = ExerciseType.NONE):
        self.mode = ExerciseType(mode)
        self.settings: ExerciseSettings = settings_for(self.mode)
        self.state: ExerciseState = new_exercise_state(self.mode)
        self.frame_count = 0
        self.form_alert: Optional[str] = None
        self._history: Dict[ExerciseType, Dict[str, int]] = {}
        logger.info(f"WorkoutCounter initialized with mode: {self.mode.value}")

    @property
    def count(self) -> int:
        """Reps in the current set"""
        return self.state.rep_count

    def update(self, pose: Optional[Pose], now: Optional[float] = None) -> ExerciseState:
        """
        Process one pose sample through the state machine and keep the result.
        A missing pose leaves the state as it was.
        """
        self.frame_count += 1
        previous = self.state
        current = transition(previous, pose, self.settings, now)
        self.state = current
        self.form_alert = None

        if current is previous:
            return current

        if previous.form_correct and not current.form_correct:
            self.form_alert = FORM_LOST_ALERT
        elif not previous.form_correct and current.form_correct:
            self.form_alert = FORM_RECOVERED_ALERT

        if current.total_reps > previous.total_reps:
            logger.info(
                f"{self.settings.name} REP #{current.total_reps} completed "
                f"(set {previous.set_count}, rep {previous.rep_count + 1}/{self.settings.target_reps})"
            )
        if current.rep_state is not previous.rep_state:
            logger.info(f"{self.settings.name} state: {previous.rep_state.value} -> {current.rep_state.value}")
            if current.rep_state is RepState.RESTING:
                logger.info(f"{self.settings.name} set boundary: {' '.join(current.form_feedback)}")

        return current

    def reset(self, now: Optional[float] = None):
        """Start the current exercise over with a fresh state"""
        self._record(self.state)
        self.state = new_exercise_state(self.mode, now)
        self.frame_count = 0
        self.form_alert = None
        logger.info(f"Reset {self.mode.value} session")

    def switch_mode(self, new_mode: Union[ExerciseType, str], now: Optional[float] = None):
        """Select a different exercise; the previous exercise's state is discarded"""
        new_mode = ExerciseType(new_mode)
        if new_mode is self.mode:
            return
        self._record(self.state)
        self.mode = new_mode
        self.settings = settings_for(new_mode)
        self.state = new_exercise_state(new_mode, now)
        self.frame_count = 0
        self.form_alert = None
        logger.info(f"Switched to {new_mode.value} mode")

    def _record(self, state: ExerciseState):
        if state.type is ExerciseType.NONE or state.total_reps == 0:
            return
        entry = self._history.setdefault(state.type, {"total_reps": 0, "sets_completed": 0})
        entry["total_reps"] += state.total_reps
        entry["sets_completed"] += self._sets_completed(state)

    def _sets_completed(self, state: ExerciseState) -> int:
        settings = settings_for(state.type)
        if settings.target_reps <= 0:
            return 0
        return min(state.total_reps // settings.target_reps, settings.sets)

    def summary(self) -> Dict[str, Dict[str, Any]]:
        """Per-exercise totals for this process lifetime, current exercise included"""
        totals = {t: dict(v) for t, v in self._history.items()}
        if self.state.type is not ExerciseType.NONE and self.state.total_reps > 0:
            entry = totals.setdefault(self.state.type, {"total_reps": 0, "sets_completed": 0})
            entry["total_reps"] += self.state.total_reps
            entry["sets_completed"] += self._sets_completed(self.state)

        return {
            t.value: {"name": settings_for(t).name, **values}
            for t, values in totals.items()
        }

    def get_status(self) -> Dict[str, Any]:
        """Get workout status for debugging"""
        return {
            "mode": self.mode.value,
            "count": self.state.rep_count,
            "set": self.state.set_count,
            "rep_state": self.state.rep_state.value,
            "form_correct": self.state.form_correct,
            "frame_count": self.frame_count,
            "timestamp": time.time(),
        }
