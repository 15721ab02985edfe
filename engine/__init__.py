"""Month orchestration, run configuration and run logs."""

from .config import EngineConfig
from .pipeline import TickEngine, pivot, tick

__all__ = ["EngineConfig", "TickEngine", "pivot", "tick"]
