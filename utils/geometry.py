# geometry.py
"""
Planar geometry helpers shared by the exercise evaluators.
Points are anything indexable as (x, y[, ...]); image coordinates, y down.
"""

from typing import Optional, Sequence

import numpy as np

Point = Sequence[float]


def angle_between(a: Point, b: Point, c: Point) -> Optional[float]:
    """
    Calculate the angle at vertex b formed by points a and c.
    Returns degrees in [0, 180], or None when a or c coincides with b.
    """
    v1 = np.array(a[:2], dtype=float) - np.array(b[:2], dtype=float)
    v2 = np.array(c[:2], dtype=float) - np.array(b[:2], dtype=float)

    norm1 = np.linalg.norm(v1)
    norm2 = np.linalg.norm(v2)

    if norm1 < 1e-6 or norm2 < 1e-6:
        return None

    cosine = np.dot(v1, v2) / (norm1 * norm2)
    return float(np.degrees(np.arccos(np.clip(cosine, -1.0, 1.0))))


def vertical_offset(p: Point, q: Point) -> float:
    """Signed vertical distance p.y - q.y; negative means p is above q."""
    return float(p[1] - q[1])


def horizontal_offset(p: Point, q: Point) -> float:
    """Signed horizontal distance p.x - q.x; negative means p is left of q."""
    return float(p[0] - q[0])


def segment_verticality(p: Point, q: Point) -> Optional[float]:
    """
    Ratio |dy| / length of the segment p-q: 1.0 for a vertical segment,
    0.0 for a horizontal one, None for a zero-length segment.
    """
    dx = horizontal_offset(p, q)
    dy = vertical_offset(p, q)
    length = float(np.hypot(dx, dy))
    if length < 1e-6:
        return None
    return abs(dy) / length
