from __future__ import annotations
import mediapipe as mp
import numpy as np
import cv2
from typing import Optional

class FaceLandmarks:
    """Single-face MediaPipe FaceMesh wrapper -> (N,2) normalized points or None."""
    def __init__(self, static_image_mode=False, refine_landmarks=True):
        self.mesh = mp.solutions.face_mesh.FaceMesh(static_image_mode=static_image_mode,
                                                    refine_landmarks=refine_landmarks,
                                                    max_num_faces=1)

    def __call__(self, frame_bgr) -> Optional[np.ndarray]:
        rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)
        res = self.mesh.process(rgb)
        if not res.multi_face_landmarks: return None
        lms = res.multi_face_landmarks[0]
        return np.array([(lm.x, lm.y) for lm in lms.landmark], dtype=np.float32)

    def close(self):
        self.mesh.close()
