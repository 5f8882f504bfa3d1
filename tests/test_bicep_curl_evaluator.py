from conftest import curl_pose
from models.exercise_catalog import settings_for
from models.exercise_state import ExerciseType, RepState, new_exercise_state
from models.exercise_state_machine import transition

SETTINGS = settings_for(ExerciseType.BICEP_CURL)


def run(angles, state=None, **pose_kwargs):
    state = state or new_exercise_state(ExerciseType.BICEP_CURL, now=0.0)
    for i, angle in enumerate(angles):
        state = transition(state, curl_pose(angle, **pose_kwargs), SETTINGS, now=float(i + 1))
    return state


def test_curl_starts_down_and_contracts_up():
    assert run([160]).rep_state is RepState.STARTING
    assert run([160, 45]).rep_state is RepState.UP


def test_rep_counts_on_extension():
    state = run([160, 45, 100, 155])
    assert state.rep_count == 1
    assert state.rep_state is RepState.DOWN


def test_partial_curl_does_not_count():
    state = run([160, 70, 155, 60, 150])
    assert state.rep_count == 0
    assert state.rep_state is RepState.STARTING


def test_shoulder_swing_flags_shoulders():
    state = run([120], elbow_offset=(20.0, 25.0))
    assert state.form_feedback == ("Minimize shoulder movement, focus on elbow flexion",)
    assert state.form_issues == {"right_shoulder": True, "left_shoulder": True}


def test_recovery_picks_phase_from_curl_threshold():
    gated = new_exercise_state(ExerciseType.BICEP_CURL, now=0.0).model_copy(
        update={"rep_state": RepState.INCORRECT_FORM})

    assert run([45], state=gated).rep_state is RepState.UP
    # Mid-range recovers into DOWN so the rep must be curled again
    assert run([100], state=gated).rep_state is RepState.DOWN


def test_missing_wrist():
    pose = curl_pose(90)
    del pose["right_wrist"]
    state = transition(new_exercise_state(ExerciseType.BICEP_CURL, now=0.0), pose, SETTINGS, now=1.0)
    assert state.form_feedback == ("Cannot detect arms clearly",)
    assert state.form_correct is False
