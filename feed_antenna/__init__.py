"""Feed antenna package initializer."""

from .config import AntennaConfig
from .pipeline import AntennaPipeline
from .scheduler import Scheduler

__all__ = ["AntennaConfig", "AntennaPipeline", "Scheduler"]
