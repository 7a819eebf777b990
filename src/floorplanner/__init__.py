"""Floor Planner - geometry, snapping and editing state for multi-floor floor plans."""

__version__ = "0.1.0"
__author__ = "Marco"
__email__ = "marco@example.com"

from .core.model import Floor, Plan, Point, Room, Size
from .engine.store import FloorPlanStore

__all__ = ["FloorPlanStore", "Floor", "Plan", "Point", "Room", "Size"]
