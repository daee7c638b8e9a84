# seating_engine/config.py

"""
Configuration module for the seating engine.
Grid bounds and the search budget of the arrangement engine live here.
"""

from typing import Optional, Tuple
from enum import Enum
from dataclasses import dataclass, field
import logging


class SolverPhase(Enum):
    """Phases of a single arrangement run"""

    CONFLICT_GRAPH = "conflict_graph"
    GREEDY_CONSTRUCTION = "greedy_construction"
    LOCAL_REPAIR = "local_repair"
    RANDOM_RESTART = "random_restart"
    RECONCILIATION = "reconciliation"


@dataclass
class GridBounds:
    """Inclusive bounds applied to user supplied grid dimensions"""

    min_rows: int = 1
    max_rows: int = 20
    min_columns: int = 1
    max_columns: int = 12

    def clamp_rows(self, rows: int) -> int:
        return max(self.min_rows, min(self.max_rows, int(rows)))

    def clamp_columns(self, columns: int) -> int:
        return max(self.min_columns, min(self.max_columns, int(columns)))

    def clamp(self, rows: int, columns: int) -> Tuple[int, int]:
        """Clamp both dimensions independently. Out-of-range values are never rejected."""
        return self.clamp_rows(rows), self.clamp_columns(columns)


@dataclass
class ArrangementConfig:
    """Search budget for the arrangement engine"""

    max_repair_passes: int = 50
    restarts: int = 6  # randomized runs after the deterministic one
    seed: Optional[int] = None


@dataclass
class SeatingEngineConfig:
    """Main configuration for the seating engine"""

    grid: GridBounds = field(default_factory=GridBounds)
    arrangement: ArrangementConfig = field(default_factory=ArrangementConfig)

    enable_logging: bool = True
    log_level: str = "INFO"


# Global configuration instance
config = SeatingEngineConfig()


def get_logger(name: str) -> logging.Logger:
    """Get configured logger for seating engine"""
    logger = logging.getLogger(f"seating_engine.{name}")
    if config.enable_logging and not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(getattr(logging, config.log_level))
    return logger
