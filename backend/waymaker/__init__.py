"""WayMaker: multi-stage hiking route planner backend."""

__version__ = "0.1.0"
