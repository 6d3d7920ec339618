from __future__ import annotations
import logging
import math
from enum import Enum
from typing import Literal, Optional
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

class DetectorConfig(BaseModel):
    threshold: float
    consecutive_frames: int = Field(default=1, ge=1)
    comparison: Literal["below", "above", "above_ratio"] = "above"
    latch: bool = True

class Phase(str, Enum):
    IDLE = "idle"
    ACCUMULATING = "accumulating"
    FIRED = "fired"
    HELD = "held"

class EventDetector:
    """
    Debounced threshold crossing over a per-frame ratio.

    latch=True  -> fires on the frame the run of true conditions reaches
                   `consecutive_frames`, then holds until the condition clears.
    latch=False -> fires when the run ends (condition goes false) if the run
                   was at least `consecutive_frames` long.
    """
    def __init__(self, cfg: DetectorConfig, name: str = "detector"):
        self.cfg = cfg
        self.name = name
        self.consecutive_count = 0
        self.is_active = False
        self.total_events = 0
        self._phase = Phase.IDLE

    @property
    def phase(self) -> Phase:
        return self._phase

    def condition(self, value: float, reference: Optional[float] = None) -> Optional[bool]:
        """Returns None when the input can't be judged (NaN value, no reference yet)."""
        if math.isnan(value): return None
        c = self.cfg
        if c.comparison == "below":
            return value < c.threshold
        if c.comparison == "above":
            return value > c.threshold
        if reference is None or math.isnan(reference): return None
        return value > reference * (1.0 + c.threshold)

    def update(self, value: float, reference: Optional[float] = None) -> bool:
        cond = self.condition(value, reference)
        if cond is None:
            logger.debug("%s: skipped undefined ratio %r", self.name, value)
            return False
        fired = self._step(cond)
        if fired:
            logger.info("%s event #%d", self.name, self.total_events)
        return fired

    def _step(self, cond: bool) -> bool:
        need = self.cfg.consecutive_frames
        if self.cfg.latch:
            if not cond:
                self.consecutive_count = 0
                self.is_active = False
                self._phase = Phase.IDLE
                return False
            self.consecutive_count += 1
            if self.is_active:
                self._phase = Phase.HELD
                return False
            if self.consecutive_count >= need:
                self.total_events += 1
                self.is_active = True
                self._phase = Phase.FIRED
                return True
            self._phase = Phase.ACCUMULATING
            return False

        # release-triggered: the run is measured at the moment it ends
        if cond:
            self.consecutive_count += 1
            self._phase = Phase.ACCUMULATING
            return False
        fired = self.consecutive_count >= need
        self.consecutive_count = 0
        if fired:
            self.total_events += 1
            self._phase = Phase.FIRED
        else:
            self._phase = Phase.IDLE
        return fired

    def reset(self):
        """Back to IDLE; total_events is kept (counters never decrease)."""
        self.consecutive_count = 0
        self.is_active = False
        self._phase = Phase.IDLE
