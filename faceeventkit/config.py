from __future__ import annotations
import yaml
from pathlib import Path
from typing import Optional, Union
from pydantic import BaseModel, Field
from .fuse.detector import DetectorConfig
from .face.topology import FaceTopology

class Settings(BaseModel):
    """All tunables. Read once at start-up; not reconfigured at runtime."""
    eye: DetectorConfig = Field(default_factory=lambda: DetectorConfig(
        threshold=0.23, consecutive_frames=2, comparison="below", latch=False))
    mouth: DetectorConfig = Field(default_factory=lambda: DetectorConfig(
        threshold=0.5, consecutive_frames=1, comparison="above", latch=True))
    # relative rise over the neutral baseline
    eyebrow: DetectorConfig = Field(default_factory=lambda: DetectorConfig(
        threshold=0.09, consecutive_frames=1, comparison="above_ratio", latch=True))
    baseline_weight: float = Field(default=0.05, gt=0.0, le=1.0)
    topology: FaceTopology = Field(default_factory=FaceTopology)

def load_settings(path: Optional[Union[str, Path]] = None) -> Settings:
    if path is None or not Path(path).exists():
        return Settings()
    with open(path, "r") as f: cfg = yaml.safe_load(f) or {}
    return Settings.model_validate(cfg)
