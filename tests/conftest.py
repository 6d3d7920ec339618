import numpy as np
import pytest

RIGHT_EYE = [33, 160, 158, 133, 153, 144]
LEFT_EYE = [362, 385, 387, 263, 373, 380]
MOUTH = [61, 291, 13, 14]
EYEBROW, NOSE_BRIDGE, NOSE_BOTTOM, CHIN = 105, 6, 2, 152

def _eye(pts, idx, cx, cy, w=0.1, h=0.03):
    pts[idx[0]] = [cx - w/2, cy]; pts[idx[3]] = [cx + w/2, cy]   # corners
    pts[idx[1]] = [cx - w/6, cy - h/2]; pts[idx[5]] = [cx - w/6, cy + h/2]
    pts[idx[2]] = [cx + w/6, cy - h/2]; pts[idx[4]] = [cx + w/6, cy + h/2]

def synthetic_face(eye_h=0.03, mouth_gap=0.02, brow=0.05):
    """
    FaceMesh-sized (478,2) frame. EAR = eye_h/0.1, MAR = mouth_gap/0.2,
    eyebrow ratio = brow/0.2.
    """
    pts = np.zeros((478, 2), dtype=float)
    _eye(pts, RIGHT_EYE, 0.40, 0.45, h=eye_h)
    _eye(pts, LEFT_EYE, 0.60, 0.45, h=eye_h)
    pts[MOUTH[0]] = [0.40, 0.70]; pts[MOUTH[1]] = [0.60, 0.70]
    pts[MOUTH[2]] = [0.50, 0.70 - mouth_gap/2]; pts[MOUTH[3]] = [0.50, 0.70 + mouth_gap/2]
    pts[NOSE_BRIDGE] = [0.50, 0.40]
    pts[EYEBROW] = [0.50, 0.40 - brow]
    pts[NOSE_BOTTOM] = [0.50, 0.60]; pts[CHIN] = [0.50, 0.80]
    return pts

@pytest.fixture
def face():
    return synthetic_face
