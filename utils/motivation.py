# motivation.py
from typing import Optional

from models.exercise_state import ExerciseState, ExerciseType, RepState

def get_motivation_text(rep_count: int) -> str:
    """
    Generate motivational messages based on the reps completed so far.
    Cycles through predefined messages to encourage user progress.
    Returns "Ready to start!" for zero reps, otherwise formats with rep number.
    """

    motivational_messages = [
        "Strong start, keep it going!",
        "Nice and controlled!",
        "That's the way!",
        "Looking solid!",
        "Keep that form tight!",
        "You're in the zone!",
        "Push through, you've got this!",
        "Great tempo!",
        "Almost there, stay focused!",
        "Crushing it!"
    ]

    if rep_count == 0:
        return "Ready to start!"

    # Cycle through messages based on rep count to maintain variety
    message_index = (rep_count - 1) % len(motivational_messages)
    selected_message = motivational_messages[message_index]

    return f"Rep {rep_count} - {selected_message}"


def get_status_text(state: ExerciseState) -> Optional[str]:
    """Short banner describing the form gate / rest state, None when nothing applies."""
    if state.type is ExerciseType.NONE:
        return None

    if state.rep_state is RepState.RESTING:
        return "Resting between sets..."

    if state.rep_state is RepState.INCORRECT_FORM:
        return "Incorrect form detected. Fix to continue counting."

    if state.form_correct:
        return "Good form! Keep it up."

    return None
