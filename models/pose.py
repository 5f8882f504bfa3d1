# pose.py
"""
Landmark vocabulary and the Pose mapping consumed by the exercise evaluators.
A Pose only contains landmarks that were actually detected; occluded or
low-confidence keypoints are absent rather than placed at (0, 0).
"""

from typing import Dict, Iterable, NamedTuple, Optional, Tuple

import numpy as np


class Keypoint(NamedTuple):
    """2-D landmark position in pixels (y grows downward) with optional confidence."""
    x: float
    y: float
    confidence: Optional[float] = None


Pose = Dict[str, Keypoint]

# YOLO pose models emit the 17 COCO keypoints in this order
LANDMARK_NAMES: Tuple[str, ...] = (
    "nose",
    "left_eye",
    "right_eye",
    "left_ear",
    "right_ear",
    "left_shoulder",
    "right_shoulder",
    "left_elbow",
    "right_elbow",
    "left_wrist",
    "right_wrist",
    "left_hip",
    "right_hip",
    "left_knee",
    "right_knee",
    "left_ankle",
    "right_ankle",
)

LANDMARK_INDEX: Dict[str, int] = {name: i for i, name in enumerate(LANDMARK_NAMES)}


def pose_from_keypoints(keypoints: np.ndarray, min_confidence: float = 0.3) -> Pose:
    """
    Convert a (17, 3) [x, y, confidence] keypoint array into a Pose.
    Keypoints under min_confidence are dropped so consumers see them as missing.
    """
    pose: Pose = {}
    if keypoints is None or len(keypoints) == 0:
        return pose

    for i, name in enumerate(LANDMARK_NAMES):
        if i >= len(keypoints):
            break
        x, y = float(keypoints[i][0]), float(keypoints[i][1])
        conf = float(keypoints[i][2]) if len(keypoints[i]) > 2 else None
        if conf is not None and conf < min_confidence:
            continue
        pose[name] = Keypoint(x, y, conf)
    return pose


def pose_from_mapping(points: Dict[str, dict], min_confidence: float = 0.3) -> Pose:
    """Build a Pose from a JSON-like {name: {x, y, confidence}} mapping."""
    pose: Pose = {}
    for name, point in points.items():
        if name not in LANDMARK_INDEX:
            continue
        conf = point.get("confidence")
        if conf is not None and conf < min_confidence:
            continue
        pose[name] = Keypoint(float(point["x"]), float(point["y"]), conf)
    return pose


def missing_landmarks(pose: Pose, required: Iterable[str]) -> Tuple[str, ...]:
    """Return the required landmark names that the pose does not contain."""
    return tuple(name for name in required if name not in pose)
