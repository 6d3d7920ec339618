from types import SimpleNamespace
import numpy as np
import pytest
from faceeventkit.config import Settings
from faceeventkit.face.topology import LandmarkFrameError
from faceeventkit.fuse.processor import FrameProcessor

def test_ratios_from_synthetic_face(face):
    r = FrameProcessor().compute_ratios(face(eye_h=0.03, mouth_gap=0.12, brow=0.05))
    assert r.ear == pytest.approx(0.3)
    assert r.mar == pytest.approx(0.6)
    assert r.eyebrow == pytest.approx(0.25)

def test_closed_eye_blink(face):
    proc = FrameProcessor()
    closed, opened = face(eye_h=0.0), face(eye_h=0.03)
    proc.process_frame(closed); proc.process_frame(closed)
    counts = proc.process_frame(opened)
    assert counts.eye_blinks == 1
    assert proc.session.fired == ["blink"]

def test_single_closed_frame_is_not_a_blink(face):
    proc = FrameProcessor()
    for f in (face(eye_h=0.0), face(), face()):
        counts = proc.process_frame(f)
    assert counts.eye_blinks == 0

def test_sustained_mouth_opening_counts_once(face):
    proc = FrameProcessor()
    for _ in range(3):
        counts = proc.process_frame(face(mouth_gap=0.12))
    counts = proc.process_frame(face(mouth_gap=0.02))
    assert counts.mouth_openings == 1
    counts = proc.process_frame(face(mouth_gap=0.12))
    assert counts.mouth_openings == 2

def test_eyebrow_raise_over_baseline(face):
    proc = FrameProcessor()
    for _ in range(5):
        proc.process_frame(face(brow=0.05))
    assert proc.session.baseline.value == pytest.approx(0.25)
    counts = proc.process_frame(face(brow=0.07))
    assert counts.eyebrow_raises == 1
    assert proc.session.fired == ["eyebrow_raise"]
    # held while raised
    assert proc.process_frame(face(brow=0.07)).eyebrow_raises == 1

def test_first_frame_sets_baseline(face):
    proc = FrameProcessor()
    counts = proc.process_frame(face(brow=0.07))
    assert counts.eyebrow_raises == 0
    assert proc.session.baseline.value == pytest.approx(0.35)

def test_no_face_is_a_noop(face):
    proc = FrameProcessor()
    proc.process_frame(face(eye_h=0.0))
    before = proc.session.counts()
    for frame in (None, [], np.zeros((0, 2))):
        for _ in range(5):
            assert proc.process_frame(frame) is None
    assert proc.session.counts() == before
    assert proc.session.eyes.consecutive_count == 1
    assert proc.session.frames == 1

def test_short_frame_raises(face):
    proc = FrameProcessor()
    with pytest.raises(LandmarkFrameError):
        proc.process_frame(face()[:100])
    with pytest.raises(IndexError):
        proc.process_frame(face()[:152])

def test_mediapipe_style_points(face):
    pts = face(mouth_gap=0.12)
    lms = [SimpleNamespace(x=float(x), y=float(y), z=0.0) for x, y in pts]
    assert FrameProcessor().process_frame(lms).mouth_openings == 1

def test_xyz_array_accepted(face):
    pts = np.concatenate([face(mouth_gap=0.12), np.ones((478, 1))], axis=1)
    assert FrameProcessor().process_frame(pts).mouth_openings == 1

def test_sessions_are_independent(face):
    proc = FrameProcessor()
    a, b = proc.new_session(), proc.new_session()
    proc.process_frame(face(mouth_gap=0.12), a)
    assert proc.process_frame(face(), b).mouth_openings == 0
    assert a.counts().mouth_openings == 1
    assert proc.session.frames == 0

def test_degenerate_frame_does_not_fire(face):
    proc = FrameProcessor()
    flat = np.zeros((478, 2))
    assert proc.process_frame(flat).eye_blinks == 0
    assert proc.session.baseline.value is None

def test_custom_topology(face):
    pts = face()
    # move the chin to a different slot and point the topology at it
    pts[400] = pts[152]; pts[152] = [0.0, 0.0]
    s = Settings.model_validate({"topology": {"chin": 400}})
    assert FrameProcessor(s).compute_ratios(pts).eyebrow == pytest.approx(0.25)

def test_zero_eyebrow_ratio_keeps_baseline_positive(face):
    proc = FrameProcessor()
    proc.process_frame(face(brow=0.0))
    assert proc.session.baseline.value is None
    proc.process_frame(face(brow=0.05))
    counts = proc.process_frame(face(brow=0.05))
    assert proc.session.baseline.value == pytest.approx(0.25)
    assert counts.eyebrow_raises == 0
