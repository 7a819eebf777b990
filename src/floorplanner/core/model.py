"""Core data models for floor plan editing.

This module defines the fundamental data structures used to represent
a multi-floor plan: rooms, openings (doors and windows), furniture,
measurement lines, annotations, floors and the plan root. All spatial
quantities are in feet.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from enum import Enum


def generate_id() -> str:
    """Return a new unique entity id."""
    return uuid.uuid4().hex


class RoomShape(str, Enum):
    RECTANGLE = "rectangle"
    L_SHAPE = "l-shape"
    CUSTOM = "custom"


class RoomType(str, Enum):
    LIVING_ROOM = "living-room"
    BEDROOM = "bedroom"
    KITCHEN = "kitchen"
    BATHROOM = "bathroom"
    DINING_ROOM = "dining-room"
    OFFICE = "office"
    GARAGE = "garage"
    CLOSET = "closet"
    HALLWAY = "hallway"
    LAUNDRY = "laundry"
    OTHER = "other"


class WallSide(str, Enum):
    TOP = "top"
    RIGHT = "right"
    BOTTOM = "bottom"
    LEFT = "left"

    @property
    def is_horizontal(self) -> bool:
        return self in (WallSide.TOP, WallSide.BOTTOM)


class SwingDirection(str, Enum):
    INWARD_LEFT = "inward-left"
    INWARD_RIGHT = "inward-right"
    OUTWARD_LEFT = "outward-left"
    OUTWARD_RIGHT = "outward-right"


class FurnitureCategory(str, Enum):
    SEATING = "seating"
    TABLES = "tables"
    BEDS = "beds"
    STORAGE = "storage"
    APPLIANCES = "appliances"
    BATHROOM = "bathroom"
    OTHER = "other"


class AnnotationType(str, Enum):
    NOTE = "note"
    MEASUREMENT = "measurement"
    REPAIR = "repair"
    ELECTRICAL = "electrical"
    PLUMBING = "plumbing"


class LShapeCorner(str, Enum):
    """Corner of the bounding rectangle that is cut away from an L-shaped room."""

    BOTTOM_RIGHT = "bottom-right"
    BOTTOM_LEFT = "bottom-left"
    TOP_RIGHT = "top-right"
    TOP_LEFT = "top-left"


class InteractionMode(str, Enum):
    VIEW = "view"
    SELECT = "select"
    ADD_ROOM = "add-room"
    ADD_DOOR = "add-door"
    ADD_WINDOW = "add-window"
    ADD_FURNITURE = "add-furniture"
    ADD_MEASUREMENT = "add-measurement"
    ADD_ANNOTATION = "add-annotation"
    DRAW_ROOM = "draw-room"


class SelectionType(str, Enum):
    ROOM = "room"
    DOOR = "door"
    WINDOW = "window"
    FURNITURE = "furniture"
    ANNOTATION = "annotation"
    MEASUREMENT = "measurement"


@dataclass(frozen=True)
class Point:
    """Represents a 2D point on the floor plan.

    Attributes:
        x: The x-coordinate in feet.
        y: The y-coordinate in feet (grows downwards, like the canvas).
    """

    x: float
    y: float


@dataclass(frozen=True)
class Size:
    """Width and height in feet."""

    width: float
    height: float


@dataclass(frozen=True)
class Edge:
    """A world-space boundary segment of a rectangular room.

    Attributes:
        start: Start point (left end for horizontal edges, top end for vertical ones).
        end: End point.
        side: Which side of the room this edge is.
    """

    start: Point
    end: Point
    side: WallSide


@dataclass(frozen=True)
class Room:
    """Represents a room on a floor.

    Rectangle rooms are fully described by ``position`` (top-left corner) and
    ``size``. Polygon rooms (``l-shape`` and ``custom``) additionally carry
    ``points``, relative to ``position``. Polygon validity (at least three
    vertices, no self-intersection) is the caller's responsibility.

    Attributes:
        id: Unique identifier for the room.
        type: Room type, used to pick the template.
        label: Human-readable name of the room.
        position: Top-left corner of the room.
        size: Bounding size of the room.
        ceiling_height: Ceiling height, copied from the plan default at creation.
        color: Fill color (e.g., "#dbeafe").
        shape: Room shape variant.
        points: Polygon vertices relative to ``position``; None for rectangles.
    """

    id: str
    type: RoomType
    label: str
    position: Point
    size: Size
    ceiling_height: float
    color: str
    shape: RoomShape = RoomShape.RECTANGLE
    points: tuple[Point, ...] | None = None

    def __post_init__(self) -> None:
        if self.size.width <= 0 or self.size.height <= 0:
            raise ValueError(
                f"Room '{self.id}' must have positive size, got "
                f"{self.size.width}x{self.size.height}"
            )
        if self.shape is RoomShape.RECTANGLE and self.points is not None:
            raise ValueError(f"Rectangle room '{self.id}' cannot carry polygon points")
        if self.shape is not RoomShape.RECTANGLE and self.points is None:
            raise ValueError(f"{self.shape.value} room '{self.id}' requires polygon points")

    @property
    def is_rectangle(self) -> bool:
        return self.shape is RoomShape.RECTANGLE


@dataclass(frozen=True)
class Door:
    """Represents a door on a room wall.

    Attributes:
        id: Unique identifier for the door.
        room_id: ID of the room owning the wall.
        wall: Which wall of the room the door sits on.
        position: Fraction along the wall (0 = start, 1 = end); not clamped.
        width: Width of the door opening.
        swing_direction: How the leaf swings.
    """

    id: str
    room_id: str
    wall: WallSide
    position: float
    width: float
    swing_direction: SwingDirection = SwingDirection.INWARD_LEFT


@dataclass(frozen=True)
class Window:
    """Represents a window on a room wall.

    Attributes:
        id: Unique identifier for the window.
        room_id: ID of the room owning the wall.
        wall: Which wall of the room the window sits on.
        position: Fraction along the wall; not clamped.
        width: Width of the window.
        height: Height of the window.
    """

    id: str
    room_id: str
    wall: WallSide
    position: float
    width: float
    height: float


@dataclass(frozen=True)
class FurnitureItem:
    """A piece of furniture or a fixture placed freely on a floor.

    ``rotation`` is in degrees and kept in ``[0, 360)`` by the store.
    """

    id: str
    type: str
    category: FurnitureCategory
    label: str
    position: Point
    size: Size
    rotation: float
    color: str
    icon: str | None = None


@dataclass(frozen=True)
class MeasurementLine:
    """A dimension line between two points, optionally with a label override."""

    id: str
    start: Point
    end: Point
    label: str | None = None


@dataclass(frozen=True)
class Annotation:
    """A freestanding text marker."""

    id: str
    position: Point
    text: str
    type: AnnotationType


@dataclass(frozen=True)
class Floor:
    """One level of the plan and the entities it owns.

    Attributes:
        id: Unique identifier for the floor.
        name: Display name (e.g., "Ground Floor").
        level: Ordinal level; 0 is ground, negative is below grade. Not unique.
        rooms: Rooms on this floor.
        doors: Doors on this floor; each references a room on the same floor.
        windows: Windows on this floor; each references a room on the same floor.
        furniture: Furniture items on this floor.
        annotations: Annotations on this floor.
        measurements: Measurement lines on this floor.
    """

    id: str
    name: str
    level: int
    rooms: tuple[Room, ...] = ()
    doors: tuple[Door, ...] = ()
    windows: tuple[Window, ...] = ()
    furniture: tuple[FurnitureItem, ...] = ()
    annotations: tuple[Annotation, ...] = ()
    measurements: tuple[MeasurementLine, ...] = ()

    def room(self, room_id: str) -> Room | None:
        for room in self.rooms:
            if room.id == room_id:
                return room
        return None


@dataclass(frozen=True)
class Plan:
    """Represents a complete multi-floor plan.

    Attributes:
        floors: All floors; never empty.
        current_floor_id: ID of the floor being edited; always one of ``floors``.
        plan_name: Name of the plan.
        default_ceiling_height: Ceiling height given to newly created rooms.
    """

    floors: tuple[Floor, ...]
    current_floor_id: str
    plan_name: str
    default_ceiling_height: float

    def __post_init__(self) -> None:
        if not self.floors:
            raise ValueError("A plan must contain at least one floor")
        if self.floor(self.current_floor_id) is None:
            raise ValueError(f"Current floor '{self.current_floor_id}' is not part of the plan")

    def floor(self, floor_id: str) -> Floor | None:
        for floor in self.floors:
            if floor.id == floor_id:
                return floor
        return None

    @property
    def current_floor(self) -> Floor:
        floor = self.floor(self.current_floor_id)
        assert floor is not None, "current floor is checked on construction"
        return floor


@dataclass(frozen=True)
class Selection:
    """The currently selected entity on the current floor."""

    id: str
    type: SelectionType
