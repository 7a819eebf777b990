"""Core data models for floor plans."""

from .catalog import FURNITURE_CATALOG, L_SHAPE_PRESETS, ROOM_TEMPLATES
from .model import (
    Annotation,
    Door,
    Floor,
    FurnitureItem,
    MeasurementLine,
    Plan,
    Point,
    Room,
    Size,
    Window,
)

__all__ = [
    "Annotation",
    "Door",
    "Floor",
    "FurnitureItem",
    "MeasurementLine",
    "Plan",
    "Point",
    "Room",
    "Size",
    "Window",
    "ROOM_TEMPLATES",
    "FURNITURE_CATALOG",
    "L_SHAPE_PRESETS",
]
