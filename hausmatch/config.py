"""
Search configuration.

MatchConfig groups the edge detector thresholds and the pose sweep
parameters used by the command line tool and the interactive viewer.
Defaults search translation only (rotation 0, scale 1) with an initial
stride of 4 pixels.
"""

from __future__ import annotations
from dataclasses import dataclass, asdict, fields
import json
import logging
from pathlib import Path
from typing import Optional, Tuple

logger = logging.getLogger(__name__)


@dataclass
class MatchConfig:
    """
    Attributes:
        low_threshold, high_threshold: Canny hysteresis thresholds
        blur: smooth images before edge detection
        initial_step: first stride of the hierarchical translation search
        rotation_range: (min, max) rotation in degrees, inclusive
        rotation_step: rotation stride in degrees
        scale_range: (min, max) scale, inclusive
        scale_step: scale stride
        workers: processes for the pose sweep (None = in-process)
    """
    low_threshold: int = 30
    high_threshold: int = 90
    blur: bool = True
    initial_step: int = 4
    rotation_range: Tuple[float, float] = (0, 0)
    rotation_step: float = 1
    scale_range: Tuple[float, float] = (1.0, 1.0)
    scale_step: float = 1.0
    workers: Optional[int] = None

    def __post_init__(self):
        self.rotation_range = tuple(self.rotation_range)
        self.scale_range = tuple(self.scale_range)
        if self.initial_step < 1:
            raise ValueError(f"initial_step must be >= 1, got {self.initial_step}")
        if self.rotation_step <= 0 or self.scale_step <= 0:
            raise ValueError("rotation_step and scale_step must be positive")
        if len(self.rotation_range) != 2 or len(self.scale_range) != 2:
            raise ValueError("rotation_range and scale_range take two values")

    @property
    def searches_pose(self) -> bool:
        """True when the sweep covers more than rotation 0 / scale 1."""
        return (self.rotation_range != (0, 0) or self.scale_range != (1.0, 1.0))

    def to_dict(self) -> dict:
        d = asdict(self)
        d["rotation_range"] = list(self.rotation_range)
        d["scale_range"] = list(self.scale_range)
        return d

    @classmethod
    def from_dict(cls, data: dict) -> "MatchConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning("Ignoring unknown config keys: %s", ", ".join(unknown))
        return cls(**{k: v for k, v in data.items() if k in known})

    @classmethod
    def from_json(cls, path) -> "MatchConfig":
        with open(Path(path), "r", encoding="utf-8") as f:
            return cls.from_dict(json.load(f))
