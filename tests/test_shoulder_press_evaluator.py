from conftest import PRESS_BOTTOM, PRESS_TOP, press_pose
from models.exercise_catalog import settings_for
from models.exercise_state import ExerciseType, RepState, new_exercise_state
from models.exercise_state_machine import transition

SETTINGS = settings_for(ExerciseType.SHOULDER_PRESS)


def run(poses, state=None):
    state = state or new_exercise_state(ExerciseType.SHOULDER_PRESS, now=0.0)
    for i, pose in enumerate(poses):
        state = transition(state, pose, SETTINGS, now=float(i + 1))
    return state


def test_press_cycle_counts_on_lowering():
    bottom, top = press_pose(**PRESS_BOTTOM), press_pose(**PRESS_TOP)

    pressed = run([bottom, top])
    assert pressed.rep_state is RepState.UP
    assert pressed.form_correct is True

    lowered = run([bottom, top, bottom])
    assert lowered.rep_state is RepState.DOWN
    assert lowered.rep_count == 1


def test_straight_arm_below_shoulder_is_not_a_press():
    # Arm hanging straight down: elbow locked but wrist under the shoulder
    hanging = press_pose(175, elbow=(300.0, 380.0))
    assert run([hanging]).rep_state is RepState.STARTING


def test_back_arch_flags_hips():
    state = run([press_pose(**PRESS_BOTTOM, hip=(400.0, 500.0))])
    assert state.form_feedback == ("Avoid arching your back, keep your core engaged",)
    assert state.form_issues == {"right_hip": True, "left_hip": True}


def test_upright_torso_passes_back_check():
    state = run([press_pose(**PRESS_BOTTOM, hip=(360.0, 500.0))])
    assert state.form_correct is True


def test_wide_press_path_flags_wrists_only_when_raised():
    wide = press_pose(175, elbow=(360.0, 230.0))
    state = run([wide])
    assert state.form_feedback == ("Press directly upward, maintain a vertical path",)
    assert state.form_issues == {"right_wrist": True, "left_wrist": True}

    # Bottom position has a wide wrist too, but is not yet raised
    assert run([press_pose(**PRESS_BOTTOM)]).form_correct is True


def test_recovery_uses_wrist_height():
    gated = new_exercise_state(ExerciseType.SHOULDER_PRESS, now=0.0).model_copy(
        update={"rep_state": RepState.INCORRECT_FORM})
    assert run([press_pose(**PRESS_TOP)], state=gated).rep_state is RepState.UP
    assert run([press_pose(**PRESS_BOTTOM)], state=gated).rep_state is RepState.DOWN
