from __future__ import annotations
import math
from typing import Optional

class BaselineTracker:
    """
    Exponential moving average of a ratio's neutral level.
    Bootstraps from the first observed value (assumes a neutral face at start).
    """
    def __init__(self, weight: float = 0.05):
        if not 0.0 < weight <= 1.0:
            raise ValueError("weight must be in (0, 1]")
        self.weight = weight
        self._value: Optional[float] = None

    @property
    def value(self) -> Optional[float]:
        return self._value

    @property
    def initialized(self) -> bool:
        return self._value is not None

    def update(self, current: float) -> Optional[float]:
        # a zero ratio (coincident points) would pin the baseline at 0
        if not math.isfinite(current) or current <= 0:
            return self._value
        if self._value is None:
            self._value = current
        else:
            self._value = self._value * (1.0 - self.weight) + current * self.weight
        return self._value
