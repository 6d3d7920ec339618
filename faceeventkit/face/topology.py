from __future__ import annotations
from typing import List, Optional, Any
import numpy as np
from pydantic import BaseModel, Field, NonNegativeInt, field_validator

class LandmarkFrameError(IndexError):
    """A landmark frame is too short for the configured topology."""

class FaceTopology(BaseModel):
    """
    Maps facial features to indices of the detector's landmark output.
    Defaults follow MediaPipe FaceMesh (468/478 points).
    """
    right_eye: List[NonNegativeInt] = Field(default_factory=lambda: [33, 160, 158, 133, 153, 144])
    left_eye: List[NonNegativeInt] = Field(default_factory=lambda: [362, 385, 387, 263, 373, 380])
    mouth: List[NonNegativeInt] = Field(default_factory=lambda: [61, 291, 13, 14])  # corners, upper, lower
    eyebrow: NonNegativeInt = 105
    nose_bridge: NonNegativeInt = 6
    nose_bottom: NonNegativeInt = 2
    chin: NonNegativeInt = 152

    @field_validator("right_eye", "left_eye")
    @classmethod
    def _six(cls, v: List[int]) -> List[int]:
        if len(v) != 6: raise ValueError("eye contour needs exactly 6 indices")
        return v

    @field_validator("mouth")
    @classmethod
    def _four(cls, v: List[int]) -> List[int]:
        if len(v) != 4: raise ValueError("mouth needs exactly 4 indices")
        return v

    def max_index(self) -> int:
        return max(self.right_eye + self.left_eye + self.mouth +
                   [self.eyebrow, self.nose_bridge, self.nose_bottom, self.chin])

    def check(self, pts: np.ndarray):
        need = self.max_index() + 1
        if pts.ndim != 2 or pts.shape[1] < 2:
            raise LandmarkFrameError(f"expected (N,2) landmark array, got shape {pts.shape}")
        if pts.shape[0] < need:
            raise LandmarkFrameError(f"landmark frame has {pts.shape[0]} points, topology needs index {need-1}")

def as_points(frame: Any) -> Optional[np.ndarray]:
    """
    Normalise a landmark frame to a float (N,2) array.
    Accepts arrays, (x,y[,z]) sequences or objects with .x/.y (MediaPipe landmarks).
    Returns None for an absent/empty frame (no face).
    """
    if frame is None: return None
    if hasattr(frame, "landmark"):  # mediapipe NormalizedLandmarkList
        frame = frame.landmark
    if len(frame) == 0: return None
    first = frame[0]
    if hasattr(first, "x") and hasattr(first, "y"):
        return np.array([(p.x, p.y) for p in frame], dtype=np.float64)
    pts = np.asarray(frame, dtype=np.float64)
    if pts.ndim != 2 or pts.shape[1] < 2:
        raise LandmarkFrameError(f"expected (N,2) landmark array, got shape {pts.shape}")
    return pts[:, :2]
