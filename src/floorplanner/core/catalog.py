"""Room templates, furniture catalog and L-shape presets."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from .model import FurnitureCategory, Point, RoomType, Size


@dataclass(frozen=True)
class RoomTemplate:
    label: str
    size: Size
    color: str


@dataclass(frozen=True)
class FurnitureTemplate:
    label: str
    size: Size
    color: str
    category: FurnitureCategory


ROOM_TEMPLATES: Dict[RoomType, RoomTemplate] = {
    RoomType.LIVING_ROOM: RoomTemplate("Living Room", Size(20, 15), "#dbeafe"),
    RoomType.BEDROOM: RoomTemplate("Bedroom", Size(12, 12), "#fce7f3"),
    RoomType.KITCHEN: RoomTemplate("Kitchen", Size(12, 10), "#fef3c7"),
    RoomType.BATHROOM: RoomTemplate("Bathroom", Size(8, 6), "#d1fae5"),
    RoomType.DINING_ROOM: RoomTemplate("Dining Room", Size(12, 12), "#e0e7ff"),
    RoomType.OFFICE: RoomTemplate("Office", Size(10, 10), "#f3e8ff"),
    RoomType.GARAGE: RoomTemplate("Garage", Size(20, 20), "#e5e7eb"),
    RoomType.CLOSET: RoomTemplate("Closet", Size(6, 4), "#fef9c3"),
    RoomType.HALLWAY: RoomTemplate("Hallway", Size(10, 4), "#f5f5f4"),
    RoomType.LAUNDRY: RoomTemplate("Laundry", Size(8, 6), "#cffafe"),
    RoomType.OTHER: RoomTemplate("Room", Size(10, 10), "#f9fafb"),
}

_SEATING = FurnitureCategory.SEATING
_TABLES = FurnitureCategory.TABLES
_BEDS = FurnitureCategory.BEDS
_STORAGE = FurnitureCategory.STORAGE
_APPLIANCES = FurnitureCategory.APPLIANCES
_BATHROOM = FurnitureCategory.BATHROOM

FURNITURE_CATALOG: Dict[str, FurnitureTemplate] = {
    # Seating
    "sofa-3seat": FurnitureTemplate("3-Seat Sofa", Size(7, 3), "#94a3b8", _SEATING),
    "sofa-2seat": FurnitureTemplate("2-Seat Sofa", Size(5, 3), "#94a3b8", _SEATING),
    "armchair": FurnitureTemplate("Armchair", Size(3, 3), "#94a3b8", _SEATING),
    "dining-chair": FurnitureTemplate("Dining Chair", Size(1.5, 1.5), "#a78bfa", _SEATING),
    "office-chair": FurnitureTemplate("Office Chair", Size(2, 2), "#64748b", _SEATING),
    # Tables
    "dining-table-6": FurnitureTemplate("Dining Table (6)", Size(6, 3.5), "#d4a574", _TABLES),
    "dining-table-4": FurnitureTemplate("Dining Table (4)", Size(4, 3), "#d4a574", _TABLES),
    "coffee-table": FurnitureTemplate("Coffee Table", Size(4, 2), "#d4a574", _TABLES),
    "desk": FurnitureTemplate("Desk", Size(5, 2.5), "#d4a574", _TABLES),
    "nightstand": FurnitureTemplate("Nightstand", Size(2, 2), "#d4a574", _TABLES),
    # Beds
    "bed-king": FurnitureTemplate("King Bed", Size(6.5, 7), "#e2e8f0", _BEDS),
    "bed-queen": FurnitureTemplate("Queen Bed", Size(5, 6.5), "#e2e8f0", _BEDS),
    "bed-full": FurnitureTemplate("Full Bed", Size(4.5, 6.5), "#e2e8f0", _BEDS),
    "bed-twin": FurnitureTemplate("Twin Bed", Size(3.5, 6.5), "#e2e8f0", _BEDS),
    # Storage
    "wardrobe": FurnitureTemplate("Wardrobe", Size(6, 2), "#a1887f", _STORAGE),
    "dresser": FurnitureTemplate("Dresser", Size(5, 1.5), "#a1887f", _STORAGE),
    "bookshelf": FurnitureTemplate("Bookshelf", Size(3, 1), "#a1887f", _STORAGE),
    "tv-stand": FurnitureTemplate("TV Stand", Size(5, 1.5), "#64748b", _STORAGE),
    # Appliances
    "refrigerator": FurnitureTemplate("Refrigerator", Size(3, 3), "#cbd5e1", _APPLIANCES),
    "stove": FurnitureTemplate("Stove/Oven", Size(2.5, 2.5), "#cbd5e1", _APPLIANCES),
    "dishwasher": FurnitureTemplate("Dishwasher", Size(2, 2), "#cbd5e1", _APPLIANCES),
    "washer": FurnitureTemplate("Washer", Size(2.5, 2.5), "#cbd5e1", _APPLIANCES),
    "dryer": FurnitureTemplate("Dryer", Size(2.5, 2.5), "#cbd5e1", _APPLIANCES),
    "sink-kitchen": FurnitureTemplate("Kitchen Sink", Size(3, 2), "#94a3b8", _APPLIANCES),
    # Bathroom
    "toilet": FurnitureTemplate("Toilet", Size(1.5, 2.5), "#f1f5f9", _BATHROOM),
    "bathtub": FurnitureTemplate("Bathtub", Size(5, 2.5), "#f1f5f9", _BATHROOM),
    "shower": FurnitureTemplate("Shower", Size(3, 3), "#bae6fd", _BATHROOM),
    "sink-bathroom": FurnitureTemplate("Bathroom Sink", Size(2, 1.5), "#f1f5f9", _BATHROOM),
    "vanity": FurnitureTemplate("Vanity", Size(4, 2), "#d4a574", _BATHROOM),
}

# Polygons listed clockwise from the top-left corner, relative to the room position.
L_SHAPE_PRESETS: Dict[str, tuple[Point, ...]] = {
    "l-shape-small": (
        Point(0, 0),
        Point(15, 0),
        Point(15, 10),
        Point(8, 10),
        Point(8, 15),
        Point(0, 15),
    ),
    "l-shape-large": (
        Point(0, 0),
        Point(20, 0),
        Point(20, 12),
        Point(10, 12),
        Point(10, 20),
        Point(0, 20),
    ),
}
