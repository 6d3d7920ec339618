from __future__ import annotations
import math
import numpy as np

def distance(p1, p2) -> float:
    return float(np.hypot(p1[0] - p2[0], p1[1] - p2[1]))

def _ratio(num: float, den: float) -> float:
    # degenerate geometry (coincident points) -> NaN, detectors skip it
    if den == 0: return math.nan
    return num / den

def eye_aspect_ratio(eye_pts) -> float:
    """
    eye_pts ordered [outer, upper1, upper2, inner, lower1, lower2]:
    0,3 are the corners; 1-5 and 2-4 are the vertical lid pairs.
    """
    A = distance(eye_pts[1], eye_pts[5])
    B = distance(eye_pts[2], eye_pts[4])
    C = distance(eye_pts[0], eye_pts[3])
    return _ratio(A + B, 2.0 * C)

def mouth_aspect_ratio(mouth_pts) -> float:
    """mouth_pts ordered [left_corner, right_corner, upper_lip, lower_lip]."""
    dv = distance(mouth_pts[2], mouth_pts[3])
    dh = distance(mouth_pts[0], mouth_pts[1])
    return _ratio(dv, dh)

def eyebrow_ratio(eyebrow, nose_bridge, nose_bottom, chin) -> float:
    # eyebrow height normalised by lower-face height
    return _ratio(distance(eyebrow, nose_bridge), distance(nose_bottom, chin))
