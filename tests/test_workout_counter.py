from conftest import squat_pose
from models.exercise_state import ExerciseType, RepState
from models.workout_counter import FORM_LOST_ALERT, FORM_RECOVERED_ALERT, WorkoutCounter


def test_new_session_state():
    counter = WorkoutCounter("squat")
    state = counter.state
    assert counter.mode is ExerciseType.SQUAT
    assert (state.rep_count, state.set_count, state.rep_state, state.form_correct) == (
        0, 1, RepState.STARTING, True)


def test_update_replaces_state(clock):
    counter = WorkoutCounter(ExerciseType.SQUAT)
    for angle in (170, 90, 170):
        counter.update(squat_pose(angle), now=clock.tick())

    assert counter.count == 1
    assert counter.state.rep_state is RepState.UP
    assert counter.frame_count == 3


def test_missing_pose_keeps_state(clock):
    counter = WorkoutCounter(ExerciseType.SQUAT)
    counter.update(squat_pose(90), now=clock.tick())
    before = counter.state

    assert counter.update(None, now=clock.tick()) is before
    assert counter.form_alert is None


def test_form_alerts_on_change(clock):
    counter = WorkoutCounter(ExerciseType.SQUAT)

    counter.update(squat_pose(170, back_angle=120), now=clock.tick())
    assert counter.form_alert == FORM_LOST_ALERT

    counter.update(squat_pose(170, back_angle=120), now=clock.tick())
    assert counter.form_alert is None

    counter.update(squat_pose(170), now=clock.tick())
    assert counter.form_alert == FORM_RECOVERED_ALERT


def test_switch_mode_starts_fresh(clock):
    counter = WorkoutCounter(ExerciseType.SQUAT)
    for angle in (170, 90, 170):
        counter.update(squat_pose(angle), now=clock.tick())

    counter.switch_mode("bicepCurl", now=clock.tick())

    assert counter.mode is ExerciseType.BICEP_CURL
    assert counter.settings.name == "Bicep Curl"
    assert counter.state.type is ExerciseType.BICEP_CURL
    assert counter.state.rep_count == 0
    assert counter.frame_count == 0


def test_switch_to_same_mode_keeps_progress(clock):
    counter = WorkoutCounter(ExerciseType.SQUAT)
    counter.update(squat_pose(90), now=clock.tick())
    counter.switch_mode(ExerciseType.SQUAT)
    assert counter.state.rep_state is RepState.DOWN


def test_none_mode_ignores_poses(clock):
    counter = WorkoutCounter()
    before = counter.state
    assert counter.update(squat_pose(90), now=clock.tick()) is before


def test_summary_accumulates_across_resets(clock):
    counter = WorkoutCounter(ExerciseType.SQUAT)
    for angle in (170, 90, 170, 90, 170):
        counter.update(squat_pose(angle), now=clock.tick())
    counter.reset(now=clock.tick())
    for angle in (170, 90, 170):
        counter.update(squat_pose(angle), now=clock.tick())
    counter.switch_mode(ExerciseType.PUSHUP)

    assert counter.summary() == {
        "squat": {"name": "Squat", "total_reps": 3, "sets_completed": 0},
    }
