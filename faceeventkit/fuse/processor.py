from __future__ import annotations
import logging
from typing import Any, List, NamedTuple, Optional
import numpy as np
from ..config import Settings
from ..face.ratios import eye_aspect_ratio, mouth_aspect_ratio, eyebrow_ratio
from ..face.topology import as_points
from ..filters.baseline import BaselineTracker
from ..runtime.events import Counts, EventType
from .detector import EventDetector

logger = logging.getLogger(__name__)

class FrameRatios(NamedTuple):
    ear: float
    mar: float
    eyebrow: float

class Session:
    """Per-face mutable state: the eyebrow baseline and the three detectors."""
    def __init__(self, settings: Settings):
        self.baseline = BaselineTracker(settings.baseline_weight)
        self.eyes = EventDetector(settings.eye, name="blink")
        self.mouth = EventDetector(settings.mouth, name="mouth_open")
        self.eyebrows = EventDetector(settings.eyebrow, name="eyebrow_raise")
        self.fired: List[EventType] = []
        self.frames = 0

    def counts(self) -> Counts:
        return Counts(eye_blinks=self.eyes.total_events,
                      mouth_openings=self.mouth.total_events,
                      eyebrow_raises=self.eyebrows.total_events)

class FrameProcessor:
    """
    Runs one landmark frame through ratios -> baseline -> detectors.
    A frame with no face is skipped without touching any state.
    """
    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or Settings()
        self.topology = self.settings.topology
        self.session = self.new_session()

    def new_session(self) -> Session:
        return Session(self.settings)

    def compute_ratios(self, pts: np.ndarray) -> FrameRatios:
        topo = self.topology
        topo.check(pts)
        ear = (eye_aspect_ratio(pts[topo.left_eye]) + eye_aspect_ratio(pts[topo.right_eye])) / 2.0
        mar = mouth_aspect_ratio(pts[topo.mouth])
        brow = eyebrow_ratio(pts[topo.eyebrow], pts[topo.nose_bridge], pts[topo.nose_bottom], pts[topo.chin])
        return FrameRatios(ear, mar, brow)

    def process_frame(self, frame: Any, session: Optional[Session] = None) -> Optional[Counts]:
        s = session or self.session
        pts = as_points(frame)
        if pts is None:
            return None
        r = self.compute_ratios(pts)
        baseline = s.baseline.update(r.eyebrow)
        s.fired = []
        if s.eyes.update(r.ear): s.fired.append("blink")
        if s.mouth.update(r.mar): s.fired.append("mouth_open")
        if s.eyebrows.update(r.eyebrow, baseline): s.fired.append("eyebrow_raise")
        s.frames += 1
        logger.debug("frame %d ear=%.3f mar=%.3f brow=%.3f base=%s", s.frames, r.ear, r.mar, r.eyebrow, baseline)
        return s.counts()
