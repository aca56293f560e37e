"""Engine configuration."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

from nuclidesim.io.artifacts import read_artifact

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class EngineConfig:
    """
    Settings for building and running the decay engine.

    Attributes
    ----------
    data_path : str, optional
        Decay data file (packaged ``nuclides.dat`` when unset)
    abundance_path : str, optional
        Abundance data file (packaged ``abundances.dat`` when unset)
    normalize_branching : bool
        Rescale rows whose branching ratios do not sum to one
    branching_tolerance : float
        Allowed deviation of a branching sum from one
    map_margin : int
        Extra cells around the table in the half-life map
    map_bias : int
        Offset between a map cell index and Z / N
    map_output : str
        PNG path the half-life map is written to
    random_seed : int, optional
        Seed for decay and synthesis random streams
    time_acceleration : float
        Simulated seconds per wall-clock second
    log_level : str
        Logging level name
    """

    data_path: Optional[str] = None
    abundance_path: Optional[str] = None
    normalize_branching: bool = False
    branching_tolerance: float = 1e-6
    map_margin: int = 200
    map_bias: int = 100
    map_output: str = "halflife_map.png"
    random_seed: Optional[int] = None
    time_acceleration: float = 1.0
    log_level: str = "INFO"

    def __post_init__(self):
        if self.branching_tolerance <= 0:
            raise ValueError("branching_tolerance must be positive")
        if self.map_margin < 0 or self.map_bias < 0:
            raise ValueError("map_margin and map_bias must be non-negative")
        if self.time_acceleration < 0:
            raise ValueError("time_acceleration must be non-negative")
        self.log_level = str(self.log_level).upper()
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")

    def simulated_seconds(self, real_seconds: float) -> float:
        """Convert a wall-clock tick into simulated time."""
        return real_seconds * self.time_acceleration

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EngineConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown configuration keys: {', '.join(unknown)}")
        return cls(**data)


def load_config(path: Optional[Union[str, Path]] = None) -> EngineConfig:
    """Load an ``EngineConfig`` from a JSON or YAML file, or defaults when no path is given."""
    if path is None:
        return EngineConfig()
    config = EngineConfig.from_dict(read_artifact(path))
    logger.debug(f"Loaded configuration from {path}")
    return config
