# exercise_evaluator.py
"""
Base class for per-exercise evaluators.

Each evaluator turns (state, pose, settings) into the next ExerciseState:
landmark availability check, feature extraction, form checks, the form gate,
and finally the rep/set/rest cycle. Subclasses only describe geometry; the
cycle itself is shared and keyed by the exercise's polarity.
"""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple

from models.exercise_catalog import ExerciseSettings
from models.exercise_state import ExerciseState, ExerciseType, RepState
from models.pose import Pose, missing_landmarks
from utils.logging_utils import logger

Features = Dict[str, float]

FIX_FORM_MESSAGE = "Fix your form to continue counting reps"
GOOD_FORM_MESSAGE = "Good form, continue your exercise"
WORKOUT_COMPLETE_MESSAGE = "Workout complete! Great job!"


class Polarity(Enum):
    """Which half of the movement completes a rep."""
    RETURN = "return"            # Starts UP, rep counts when coming back up (squat, push-up)
    CONTRACTION = "contraction"  # Starts DOWN, rep counts when extending after a contraction (curl, press)


@dataclass
class Evaluation:
    """Mutable working copy of one evaluation, frozen back into an ExerciseState."""
    rep_count: int
    set_count: int
    rep_state: RepState
    last_rep_timestamp: float
    total_reps: int
    feedback: List[str] = field(default_factory=list)
    issues: Dict[str, bool] = field(default_factory=dict)
    form_correct: bool = True

    @classmethod
    def start(cls, state: ExerciseState) -> "Evaluation":
        return cls(
            rep_count=state.rep_count,
            set_count=state.set_count,
            rep_state=state.rep_state,
            last_rep_timestamp=state.last_rep_timestamp,
            total_reps=state.total_reps,
        )

    def flag(self, message: str, landmarks: Iterable[str] = ()):
        """Record a failed check: feedback line, form marked bad, landmarks highlighted."""
        self.feedback.append(message)
        self.form_correct = False
        for name in landmarks:
            self.issues[name] = True

    def freeze(self, state: ExerciseState) -> ExerciseState:
        return state.model_copy(update={
            "rep_count": self.rep_count,
            "set_count": self.set_count,
            "rep_state": self.rep_state,
            "last_rep_timestamp": self.last_rep_timestamp,
            "total_reps": self.total_reps,
            "form_feedback": tuple(self.feedback),
            "form_issues": dict(self.issues),
            "form_correct": self.form_correct,
        })


class ExerciseEvaluator(ABC):
    """
    Shared evaluation pipeline. Subclasses provide the landmarks they read,
    the features they compute and the threshold predicates of their cycle.
    """

    exercise_type: ExerciseType = ExerciseType.NONE
    polarity: Polarity = Polarity.RETURN
    required_landmarks: Tuple[str, ...] = ()
    missing_message: str = "Cannot detect body clearly"

    @property
    def home_phase(self) -> RepState:
        """Phase the body rests in between reps."""
        return RepState.UP if self.polarity is Polarity.RETURN else RepState.DOWN

    @property
    def work_phase(self) -> RepState:
        """Phase reached at the far end of the movement."""
        return RepState.DOWN if self.polarity is Polarity.RETURN else RepState.UP

    @abstractmethod
    def measure(self, pose: Pose, settings: ExerciseSettings) -> Optional[Features]:
        """Compute the tracked joint 'angle' plus form features; None if geometry is degenerate."""

    @abstractmethod
    def check_form(self, pose: Pose, features: Features, settings: ExerciseSettings, evaluation: Evaluation):
        """Flag every violated form check on the evaluation."""

    @abstractmethod
    def reached_work_phase(self, features: Features, settings: ExerciseSettings) -> bool:
        """Threshold crossing from the home phase into the work phase."""

    @abstractmethod
    def returned_home(self, features: Features, settings: ExerciseSettings) -> bool:
        """Threshold crossing back to the home phase; completes a rep."""

    @abstractmethod
    def recovery_phase(self, features: Features, settings: ExerciseSettings) -> RepState:
        """UP or DOWN to resume in once form is fixed."""

    def evaluate(self, state: ExerciseState, pose: Pose, settings: ExerciseSettings, now: float) -> ExerciseState:
        evaluation = Evaluation.start(state)

        missing = missing_landmarks(pose, self.required_landmarks)
        if missing:
            logger.debug(f"{self.exercise_type.value}: missing landmarks {missing}")
            evaluation.flag(self.missing_message)
            return evaluation.freeze(state)

        features = self.measure(pose, settings)
        if features is None:
            evaluation.flag(self.missing_message)
            return evaluation.freeze(state)

        self.check_form(pose, features, settings, evaluation)

        # Form gate: counting freezes while form is wrong mid-rep
        if not evaluation.form_correct and evaluation.rep_state in (RepState.UP, RepState.DOWN):
            evaluation.rep_state = RepState.INCORRECT_FORM
            evaluation.feedback.append(FIX_FORM_MESSAGE)
            logger.debug(f"{self.exercise_type.value}: form gate closed at {features['angle']:.1f}°")
            return evaluation.freeze(state)

        if evaluation.form_correct and evaluation.rep_state is RepState.INCORRECT_FORM:
            evaluation.rep_state = self.recovery_phase(features, settings)
            evaluation.feedback.append(GOOD_FORM_MESSAGE)
            logger.debug(f"{self.exercise_type.value}: form recovered, resuming {evaluation.rep_state.value}")

        self._advance(evaluation, features, settings, now)
        return evaluation.freeze(state)

    def _advance(self, evaluation: Evaluation, features: Features, settings: ExerciseSettings, now: float):
        rep_state = evaluation.rep_state

        if rep_state in (RepState.STARTING, self.home_phase):
            if self.reached_work_phase(features, settings):
                evaluation.rep_state = self.work_phase
                logger.debug(f"{self.exercise_type.value}: {self.work_phase.value} at {features['angle']:.1f}°")

        elif rep_state is self.work_phase:
            if self.returned_home(features, settings):
                evaluation.rep_state = self.home_phase
                self._complete_rep(evaluation, settings, now)

        elif rep_state is RepState.RESTING:
            elapsed = now - evaluation.last_rep_timestamp
            if elapsed >= settings.rest_between_sets:
                evaluation.rep_state = RepState.STARTING
                evaluation.feedback.append(f"Starting set {evaluation.set_count}")
            else:
                remaining = settings.rest_between_sets - elapsed
                evaluation.feedback.append(f"Rest: {math.floor(remaining + 0.5)}s remaining")

        # INCORRECT_FORM with bad form stays frozen

    def _complete_rep(self, evaluation: Evaluation, settings: ExerciseSettings, now: float):
        evaluation.rep_count += 1
        evaluation.total_reps += 1
        evaluation.last_rep_timestamp = now

        if evaluation.rep_count < settings.target_reps:
            return

        evaluation.set_count += 1
        evaluation.rep_count = 0
        evaluation.rep_state = RepState.RESTING

        if evaluation.set_count > settings.sets:
            evaluation.set_count = settings.sets
            evaluation.feedback.append(WORKOUT_COMPLETE_MESSAGE)
        else:
            evaluation.feedback.append(
                f"Set {evaluation.set_count - 1} complete! "
                f"Rest for {settings.rest_between_sets:g} seconds."
            )
