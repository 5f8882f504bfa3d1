import math

import pytest

from models.pose import Keypoint


def rotate_from(vertex, toward, angle_deg, length, turn=1):
    """Point `length` px from vertex whose direction makes angle_deg with vertex->toward."""
    base = math.atan2(toward[1] - vertex[1], toward[0] - vertex[0])
    theta = base + turn * math.radians(angle_deg)
    return (vertex[0] + length * math.cos(theta), vertex[1] + length * math.sin(theta))


def make_pose(**points):
    return {name: Keypoint(x, y, 0.9) for name, (x, y) in points.items()}


def squat_pose(knee_angle, back_angle=175.0, knee_shift=0.0):
    """Left-side squat pose; knee sits knee_shift px in front of the ankle."""
    ankle = (300.0, 500.0)
    knee = (300.0 + knee_shift, 400.0)
    hip = rotate_from(knee, ankle, knee_angle, 100)
    shoulder = rotate_from(hip, knee, back_angle, 120)
    return make_pose(left_ankle=ankle, left_knee=knee, left_hip=hip, left_shoulder=shoulder)


def curl_pose(elbow_angle, elbow_offset=(0.0, 100.0)):
    """Right-arm curl pose; elbow placed at shoulder + elbow_offset."""
    shoulder = (300.0, 200.0)
    elbow = (shoulder[0] + elbow_offset[0], shoulder[1] + elbow_offset[1])
    wrist = rotate_from(elbow, shoulder, elbow_angle, 90)
    return make_pose(right_shoulder=shoulder, right_elbow=elbow, right_wrist=wrist)


def press_pose(elbow_angle, elbow=(300.0, 220.0), hip=(300.0, 500.0)):
    """Right-side press pose with the shoulder at (300, 300)."""
    shoulder = (300.0, 300.0)
    wrist = rotate_from(elbow, shoulder, elbow_angle, 90)
    return make_pose(right_shoulder=shoulder, right_elbow=elbow, right_wrist=wrist, right_hip=hip)


def push_up_pose(elbow_angle, elbow=(200.0, 370.0), hip_sag=0.0):
    """Side-on plank; hip_sag drops the hip below the shoulder-ankle line."""
    shoulder = (200.0, 300.0)
    ankle = (500.0, 320.0)
    hip = (350.0, 310.0 + hip_sag)
    wrist = rotate_from(elbow, shoulder, elbow_angle, 80, turn=-1)
    return make_pose(left_shoulder=shoulder, left_elbow=elbow, left_wrist=wrist,
                     left_hip=hip, left_ankle=ankle)


# Standard press positions
PRESS_TOP = dict(elbow_angle=175)
PRESS_BOTTOM = dict(elbow_angle=80, elbow=(340.0, 340.0))
# Standard push-up positions
PUSH_UP_TOP = dict(elbow_angle=170)
PUSH_UP_BOTTOM = dict(elbow_angle=80, elbow=(260.0, 320.0))


@pytest.fixture
def clock():
    """Manually advanced clock in epoch seconds"""
    class Clock:
        def __init__(self):
            self.now = 1_000.0

        def tick(self, seconds=0.5):
            self.now += seconds
            return self.now

    return Clock()
