"""Mutation store for the floor plan editor.

The store is the single source of truth for a plan being edited: all
floors and their entities, the selection, the interaction mode and any
pending placement. Every public operation builds a new immutable
``EditorState`` and swaps it in with one assignment, so no caller can
observe a half-applied change. Operations that reference an unknown id
(or would delete the last floor) leave the state untouched.

The current-floor collections (``rooms``, ``doors``, ...) are computed
from the plan on every read; there is no second copy to keep in sync.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, Optional, Sequence, Tuple

from ..config import (
    DEFAULT_CEILING_HEIGHT,
    DEFAULT_DOOR_WIDTH,
    DEFAULT_FLOOR_NAME,
    DEFAULT_L_CUT_PCT,
    DEFAULT_PLAN_NAME,
    DEFAULT_WINDOW_HEIGHT,
    DEFAULT_WINDOW_WIDTH,
    GRID_SIZE,
    MIN_ROOM_DIMENSION,
    OPENING_PICK_TOLERANCE,
    PREVIEW_MEASUREMENT_ID,
    SNAP_THRESHOLD,
)
from ..core.catalog import FURNITURE_CATALOG, ROOM_TEMPLATES
from ..core.model import (
    Annotation,
    AnnotationType,
    Door,
    Floor,
    FurnitureCategory,
    FurnitureItem,
    InteractionMode,
    LShapeCorner,
    MeasurementLine,
    Plan,
    Point,
    Room,
    RoomShape,
    RoomType,
    Selection,
    SelectionType,
    Size,
    SwingDirection,
    WallSide,
    Window,
    generate_id,
)
from ..geom.polygon import (
    generate_l_shape_points,
    get_total_area,
    normalize_rotation,
    rectangle_points,
)
from ..geom.snap import find_snap_position, nearest_wall, snap_to_grid
from ..io.parser import PlanFormatError, plan_from_dict, plan_to_dict
from .validators import InvalidPlan, validate_all

LOGGER = logging.getLogger(__name__)

# Floor attribute holding each selectable entity type
COLLECTIONS: Dict[SelectionType, str] = {
    SelectionType.ROOM: "rooms",
    SelectionType.DOOR: "doors",
    SelectionType.WINDOW: "windows",
    SelectionType.FURNITURE: "furniture",
    SelectionType.ANNOTATION: "annotations",
    SelectionType.MEASUREMENT: "measurements",
}

# Enum-typed fields per collection, coerced from plain strings on update
_ENUM_FIELDS: Dict[str, Dict[str, type]] = {
    "rooms": {"type": RoomType, "shape": RoomShape},
    "doors": {"wall": WallSide, "swing_direction": SwingDirection},
    "windows": {"wall": WallSide},
    "furniture": {"category": FurnitureCategory},
    "annotations": {"type": AnnotationType},
    "measurements": {},
}


@dataclass(frozen=True)
class LShapeConfig:
    """Which corner of an L-shaped room is cut, and by how much (percent)."""

    corner: LShapeCorner | str = LShapeCorner.BOTTOM_RIGHT
    cut_width_pct: float = DEFAULT_L_CUT_PCT
    cut_height_pct: float = DEFAULT_L_CUT_PCT


@dataclass(frozen=True)
class PendingRoom:
    """Room waiting to be placed while the editor is in add-room mode."""

    room_type: RoomType = RoomType.OTHER
    width: Optional[float] = None
    height: Optional[float] = None
    label: Optional[str] = None
    shape: RoomShape = RoomShape.RECTANGLE
    points: Optional[Tuple[Point, ...]] = None
    l_shape: Optional[LShapeConfig] = None


@dataclass(frozen=True)
class EditorState:
    """Complete snapshot of the editor; replaced as a whole on every change."""

    plan: Plan
    selection: Optional[Selection] = None
    mode: InteractionMode = InteractionMode.SELECT
    pending_room: Optional[PendingRoom] = None
    pending_furniture_type: Optional[str] = None
    measurement_start: Optional[Point] = None
    measurement_hover: Optional[Point] = None
    snap_enabled: bool = True
    has_unsaved_changes: bool = False


def _find(items: Sequence[Any], entity_id: str) -> Optional[Any]:
    for item in items:
        if item.id == entity_id:
            return item
    return None


def _replace_item(items: Tuple[Any, ...], new_item: Any) -> Tuple[Any, ...]:
    return tuple(new_item if item.id == new_item.id else item for item in items)


def _coerce_enums(collection: str, changes: Dict[str, Any]) -> Dict[str, Any]:
    if "id" in changes:
        raise TypeError("Entity ids cannot be updated")
    coerced = dict(changes)
    for name, enum_type in _ENUM_FIELDS[collection].items():
        if name in coerced:
            coerced[name] = enum_type(coerced[name])
    return coerced


def _resolve_points(
    shape: RoomShape,
    width: float,
    height: float,
    points: Optional[Sequence[Point]],
    l_shape: Optional[LShapeConfig],
) -> Optional[Tuple[Point, ...]]:
    """Polygon points for a room of the given shape.

    Explicit points win. Otherwise L-shaped rooms get a generated L and
    custom rooms start from their bounding rectangle.
    """
    if shape is RoomShape.RECTANGLE:
        return None
    if points is not None:
        return tuple(points)
    if shape is RoomShape.L_SHAPE:
        config = l_shape or LShapeConfig()
        return generate_l_shape_points(
            width, height, config.corner, config.cut_width_pct, config.cut_height_pct
        )
    return rectangle_points(width, height)


class FloorPlanStore:
    """Single mutable container for a plan being edited.

    Args:
        grid_size: Grid unit in feet, used for placement rounding and the drag
            fallback.
        snap_threshold: Default edge-snap distance in feet.
        min_room_dimension: Smallest width or height a room can be resized to.
        id_factory: Generator for new entity ids.
    """

    def __init__(
        self,
        grid_size: float = GRID_SIZE,
        snap_threshold: float = SNAP_THRESHOLD,
        min_room_dimension: float = MIN_ROOM_DIMENSION,
        id_factory: Optional[Callable[[], str]] = None,
    ) -> None:
        self.grid_size = grid_size
        self.snap_threshold = snap_threshold
        self.min_room_dimension = min_room_dimension
        self._new_id = id_factory or generate_id
        self._state = EditorState(plan=self._initial_plan())

    def _initial_plan(self) -> Plan:
        floor = Floor(id=self._new_id(), name=DEFAULT_FLOOR_NAME, level=0)
        return Plan(
            floors=(floor,),
            current_floor_id=floor.id,
            plan_name=DEFAULT_PLAN_NAME,
            default_ceiling_height=DEFAULT_CEILING_HEIGHT,
        )

    # ------------------------------------------------------------------ #
    # Read accessors
    # ------------------------------------------------------------------ #
    @property
    def state(self) -> EditorState:
        return self._state

    @property
    def plan(self) -> Plan:
        return self._state.plan

    @property
    def floors(self) -> Tuple[Floor, ...]:
        return self.plan.floors

    @property
    def current_floor_id(self) -> str:
        return self.plan.current_floor_id

    @property
    def current_floor(self) -> Floor:
        return self.plan.current_floor

    @property
    def rooms(self) -> Tuple[Room, ...]:
        return self.current_floor.rooms

    @property
    def doors(self) -> Tuple[Door, ...]:
        return self.current_floor.doors

    @property
    def windows(self) -> Tuple[Window, ...]:
        return self.current_floor.windows

    @property
    def furniture(self) -> Tuple[FurnitureItem, ...]:
        return self.current_floor.furniture

    @property
    def annotations(self) -> Tuple[Annotation, ...]:
        return self.current_floor.annotations

    @property
    def measurements(self) -> Tuple[MeasurementLine, ...]:
        return self.current_floor.measurements

    @property
    def total_area(self) -> float:
        """Total area of the rooms on the current floor, in square feet."""
        return get_total_area(self.rooms)

    @property
    def plan_name(self) -> str:
        return self.plan.plan_name

    @property
    def default_ceiling_height(self) -> float:
        return self.plan.default_ceiling_height

    @property
    def selection(self) -> Optional[Selection]:
        return self._state.selection

    @property
    def selected_id(self) -> Optional[str]:
        return self._state.selection.id if self._state.selection else None

    @property
    def selected_type(self) -> Optional[SelectionType]:
        return self._state.selection.type if self._state.selection else None

    @property
    def mode(self) -> InteractionMode:
        return self._state.mode

    @property
    def pending_room(self) -> Optional[PendingRoom]:
        return self._state.pending_room

    @property
    def pending_furniture_type(self) -> Optional[str]:
        return self._state.pending_furniture_type

    @property
    def measurement_start(self) -> Optional[Point]:
        return self._state.measurement_start

    @property
    def measurement_preview(self) -> Optional[MeasurementLine]:
        """Transient line from the measurement anchor to the pointer; never stored."""
        start = self._state.measurement_start
        hover = self._state.measurement_hover
        if self.mode is not InteractionMode.ADD_MEASUREMENT or start is None or hover is None:
            return None
        return MeasurementLine(id=PREVIEW_MEASUREMENT_ID, start=start, end=hover)

    @property
    def snap_enabled(self) -> bool:
        return self._state.snap_enabled

    @property
    def has_unsaved_changes(self) -> bool:
        return self._state.has_unsaved_changes

    def get_entity(self, entity_type: SelectionType | str, entity_id: str) -> Optional[Any]:
        """Look up an entity of the given type on the current floor."""
        collection = COLLECTIONS[SelectionType(entity_type)]
        return _find(getattr(self.current_floor, collection), entity_id)

    # ------------------------------------------------------------------ #
    # State transitions
    # ------------------------------------------------------------------ #
    def _commit(self, **changes: Any) -> None:
        self._state = replace(self._state, **changes)

    def _commit_plan(self, plan: Plan, **changes: Any) -> None:
        self._commit(plan=plan, has_unsaved_changes=True, **changes)

    def _commit_floor(self, floor: Floor, **changes: Any) -> None:
        plan = self.plan
        floors = tuple(floor if f.id == floor.id else f for f in plan.floors)
        self._commit_plan(replace(plan, floors=floors), **changes)

    def _mode_changes(self, mode: InteractionMode) -> Dict[str, Any]:
        """State changes for switching to ``mode``: all pending data is dropped."""
        return {
            "mode": mode,
            "pending_room": None,
            "pending_furniture_type": None,
            "measurement_start": None,
            "measurement_hover": None,
        }

    def _add_entity(self, collection: str, entity: Any, selection_type: SelectionType) -> None:
        floor = self.current_floor
        floor = replace(floor, **{collection: getattr(floor, collection) + (entity,)})
        self._commit_floor(
            floor,
            selection=Selection(entity.id, selection_type),
            **self._mode_changes(InteractionMode.SELECT),
        )
        LOGGER.debug("Added %s %s", selection_type.value, entity.id)

    def _update_entity(self, collection: str, entity_id: str, changes: Dict[str, Any]) -> None:
        floor = self.current_floor
        current = _find(getattr(floor, collection), entity_id)
        if current is None:
            LOGGER.debug("Ignoring update of unknown %s id %s", collection, entity_id)
            return
        updated = replace(current, **changes)
        self._commit_floor(
            replace(floor, **{collection: _replace_item(getattr(floor, collection), updated)})
        )

    def _delete_entity(self, collection: str, entity_id: str) -> None:
        floor = self.current_floor
        if _find(getattr(floor, collection), entity_id) is None:
            LOGGER.debug("Ignoring delete of unknown %s id %s", collection, entity_id)
            return
        remaining = tuple(e for e in getattr(floor, collection) if e.id != entity_id)
        self._commit_floor(
            replace(floor, **{collection: remaining}),
            selection=self._selection_without({entity_id}),
        )

    def _selection_without(self, removed_ids: set) -> Optional[Selection]:
        selection = self._state.selection
        if selection is not None and selection.id in removed_ids:
            return None
        return selection

    def _clamp_size(self, size: Size) -> Size:
        return Size(
            max(size.width, self.min_room_dimension), max(size.height, self.min_room_dimension)
        )

    # ------------------------------------------------------------------ #
    # Floors
    # ------------------------------------------------------------------ #
    def add_floor(self, name: str, level: int) -> Floor:
        """Append an empty floor. Levels need not be unique."""
        floor = Floor(id=self._new_id(), name=name, level=int(level))
        self._commit_plan(replace(self.plan, floors=self.plan.floors + (floor,)))
        LOGGER.debug("Added floor %s (%s, level %d)", floor.id, name, floor.level)
        return floor

    def delete_floor(self, floor_id: str) -> None:
        """Delete a floor and everything on it; the last floor is never deleted."""
        plan = self.plan
        if len(plan.floors) <= 1 or plan.floor(floor_id) is None:
            LOGGER.debug("Ignoring delete of floor %s", floor_id)
            return

        floors = tuple(f for f in plan.floors if f.id != floor_id)
        if plan.current_floor_id == floor_id:
            self._commit_plan(
                replace(plan, floors=floors, current_floor_id=floors[0].id), selection=None
            )
        else:
            self._commit_plan(replace(plan, floors=floors))

    def set_current_floor(self, floor_id: str) -> None:
        """Switch the floor being edited and clear the selection."""
        if self.plan.floor(floor_id) is None:
            LOGGER.debug("Ignoring switch to unknown floor %s", floor_id)
            return
        self._commit(plan=replace(self.plan, current_floor_id=floor_id), selection=None)

    def update_floor_name(self, floor_id: str, name: str) -> None:
        floor = self.plan.floor(floor_id)
        if floor is None:
            return
        self._commit_floor(replace(floor, name=name))

    # ------------------------------------------------------------------ #
    # Rooms
    # ------------------------------------------------------------------ #
    def add_room(
        self,
        room_type: RoomType | str,
        position: Point,
        width: Optional[float] = None,
        height: Optional[float] = None,
        label: Optional[str] = None,
        shape: RoomShape | str = RoomShape.RECTANGLE,
        points: Optional[Sequence[Point]] = None,
        l_shape: Optional[LShapeConfig] = None,
    ) -> Optional[Room]:
        """Create a room on the current floor and select it.

        Missing (or non-positive) dimensions come from the room type template;
        the ceiling height is copied from the plan default.

        Args:
            room_type: Room type; unknown types are ignored.
            position: Top-left corner in feet.
            width: Optional width overriding the template.
            height: Optional height overriding the template.
            label: Optional label overriding the template.
            shape: Room shape.
            points: Polygon points relative to ``position`` for polygon shapes.
            l_shape: Cut configuration used when an L-shape has no points.

        Returns:
            The new room, or None if the room type is unknown.
        """
        try:
            room_type = RoomType(room_type)
        except ValueError:
            LOGGER.debug("Ignoring unknown room type %r", room_type)
            return None

        template = ROOM_TEMPLATES[room_type]
        width = width if width and width > 0 else template.size.width
        height = height if height and height > 0 else template.size.height
        shape = RoomShape(shape)

        room = Room(
            id=self._new_id(),
            type=room_type,
            label=label or template.label,
            position=position,
            size=Size(width, height),
            ceiling_height=self.default_ceiling_height,
            color=template.color,
            shape=shape,
            points=_resolve_points(shape, width, height, points, l_shape),
        )
        self._add_entity("rooms", room, SelectionType.ROOM)
        return room

    def update_room(self, room_id: str, **changes: Any) -> None:
        """Update room fields.

        Sizes are clamped to the minimum room dimension and polygon points are
        regenerated when the shape changes to one that needs them.
        """
        room = _find(self.rooms, room_id)
        if room is None:
            LOGGER.debug("Ignoring update of unknown room %s", room_id)
            return

        changes = _coerce_enums("rooms", changes)
        if "size" in changes:
            changes["size"] = self._clamp_size(changes["size"])

        shape = changes.get("shape", room.shape)
        if shape is RoomShape.RECTANGLE:
            changes["points"] = None
        else:
            size = changes.get("size", room.size)
            points = changes.get("points", room.points)
            changes["points"] = _resolve_points(shape, size.width, size.height, points, None)

        self._update_entity("rooms", room_id, changes)

    def delete_room(self, room_id: str) -> None:
        """Delete a room together with its doors and windows."""
        floor = self.current_floor
        if floor.room(room_id) is None:
            LOGGER.debug("Ignoring delete of unknown room %s", room_id)
            return

        doors = tuple(d for d in floor.doors if d.room_id != room_id)
        windows = tuple(w for w in floor.windows if w.room_id != room_id)
        removed = {room_id}
        removed.update(d.id for d in floor.doors if d.room_id == room_id)
        removed.update(w.id for w in floor.windows if w.room_id == room_id)

        floor = replace(
            floor,
            rooms=tuple(r for r in floor.rooms if r.id != room_id),
            doors=doors,
            windows=windows,
        )
        self._commit_floor(floor, selection=self._selection_without(removed))

    def move_room(self, room_id: str, position: Point) -> None:
        self._update_entity("rooms", room_id, {"position": position})

    def resize_room(self, room_id: str, size: Size) -> None:
        """Resize a room; each dimension is clamped to the minimum room dimension."""
        self._update_entity("rooms", room_id, {"size": self._clamp_size(size)})

    def move_room_with_snap(
        self, room_id: str, position: Point, threshold: Optional[float] = None
    ) -> Point:
        """Move a room, snapping one of its edges to a nearby room edge.

        Args:
            room_id: ID of the room being dragged.
            position: Candidate top-left position in feet.
            threshold: Snap distance; defaults to the store's threshold.

        Returns:
            The position the room ended up at (``position`` when nothing snapped,
            snapping is disabled, or the room does not exist).
        """
        room = _find(self.rooms, room_id)
        if room is None:
            return position

        final = position
        if self.snap_enabled:
            threshold = self.snap_threshold if threshold is None else threshold
            snapped = find_snap_position(replace(room, position=position), self.rooms, threshold)
            if snapped is not None:
                final = snapped

        self.move_room(room_id, final)
        return final

    def drag_room(self, room_id: str, position: Point) -> Optional[Point]:
        """Finish a room drag: edge-snap first, then round the result to the grid.

        The two passes are separate transitions, as the editor applies them.

        Returns:
            The final position, or None if the room does not exist.
        """
        if _find(self.rooms, room_id) is None:
            return None

        snapped = self.move_room_with_snap(room_id, position)
        gridded = snap_to_grid(snapped, self.grid_size)
        if gridded != snapped:
            self.move_room(room_id, gridded)
        return gridded

    # ------------------------------------------------------------------ #
    # Doors and windows
    # ------------------------------------------------------------------ #
    def add_door(
        self,
        room_id: str,
        wall: WallSide | str,
        position: float,
        width: float = DEFAULT_DOOR_WIDTH,
        swing_direction: SwingDirection | str = SwingDirection.INWARD_LEFT,
    ) -> Optional[Door]:
        """Add a door to a wall of a room on the current floor.

        Returns:
            The new door, or None if the room is not on the current floor.
        """
        if self.current_floor.room(room_id) is None:
            LOGGER.debug("Ignoring door for unknown room %s", room_id)
            return None

        door = Door(
            id=self._new_id(),
            room_id=room_id,
            wall=WallSide(wall),
            position=position,
            width=width,
            swing_direction=SwingDirection(swing_direction),
        )
        self._add_entity("doors", door, SelectionType.DOOR)
        return door

    def update_door(self, door_id: str, **changes: Any) -> None:
        """Update door fields; ``position`` is stored as given."""
        changes = _coerce_enums("doors", changes)
        if "room_id" in changes and self.current_floor.room(changes["room_id"]) is None:
            return
        self._update_entity("doors", door_id, changes)

    def delete_door(self, door_id: str) -> None:
        self._delete_entity("doors", door_id)

    def add_window(
        self,
        room_id: str,
        wall: WallSide | str,
        position: float,
        width: float = DEFAULT_WINDOW_WIDTH,
        height: float = DEFAULT_WINDOW_HEIGHT,
    ) -> Optional[Window]:
        """Add a window to a wall of a room on the current floor.

        Returns:
            The new window, or None if the room is not on the current floor.
        """
        if self.current_floor.room(room_id) is None:
            LOGGER.debug("Ignoring window for unknown room %s", room_id)
            return None

        window = Window(
            id=self._new_id(),
            room_id=room_id,
            wall=WallSide(wall),
            position=position,
            width=width,
            height=height,
        )
        self._add_entity("windows", window, SelectionType.WINDOW)
        return window

    def update_window(self, window_id: str, **changes: Any) -> None:
        changes = _coerce_enums("windows", changes)
        if "room_id" in changes and self.current_floor.room(changes["room_id"]) is None:
            return
        self._update_entity("windows", window_id, changes)

    def delete_window(self, window_id: str) -> None:
        self._delete_entity("windows", window_id)

    # ------------------------------------------------------------------ #
    # Furniture
    # ------------------------------------------------------------------ #
    def add_furniture(self, furniture_type: str, position: Point) -> Optional[FurnitureItem]:
        """Place a catalog item; unknown catalog keys are ignored."""
        template = FURNITURE_CATALOG.get(furniture_type)
        if template is None:
            LOGGER.debug("Ignoring unknown furniture type %r", furniture_type)
            return None

        item = FurnitureItem(
            id=self._new_id(),
            type=furniture_type,
            category=template.category,
            label=template.label,
            position=position,
            size=template.size,
            rotation=0.0,
            color=template.color,
        )
        self._add_entity("furniture", item, SelectionType.FURNITURE)
        return item

    def update_furniture(self, item_id: str, **changes: Any) -> None:
        changes = _coerce_enums("furniture", changes)
        if "rotation" in changes:
            if not math.isfinite(changes["rotation"]):
                LOGGER.debug("Ignoring non-finite rotation for furniture %s", item_id)
                return
            changes["rotation"] = normalize_rotation(changes["rotation"])
        self._update_entity("furniture", item_id, changes)

    def delete_furniture(self, item_id: str) -> None:
        self._delete_entity("furniture", item_id)

    def move_furniture(self, item_id: str, position: Point) -> None:
        self._update_entity("furniture", item_id, {"position": position})

    def rotate_furniture(self, item_id: str, rotation: float) -> None:
        """Set the rotation in degrees, reduced into [0, 360). Non-finite angles are ignored."""
        if not math.isfinite(rotation):
            LOGGER.debug("Ignoring non-finite rotation for furniture %s", item_id)
            return
        self._update_entity("furniture", item_id, {"rotation": normalize_rotation(rotation)})

    # ------------------------------------------------------------------ #
    # Annotations
    # ------------------------------------------------------------------ #
    def add_annotation(
        self,
        position: Point,
        text: str,
        annotation_type: AnnotationType | str = AnnotationType.NOTE,
    ) -> Annotation:
        annotation = Annotation(
            id=self._new_id(),
            position=position,
            text=text,
            type=AnnotationType(annotation_type),
        )
        self._add_entity("annotations", annotation, SelectionType.ANNOTATION)
        return annotation

    def update_annotation(self, annotation_id: str, **changes: Any) -> None:
        self._update_entity("annotations", annotation_id, _coerce_enums("annotations", changes))

    def delete_annotation(self, annotation_id: str) -> None:
        self._delete_entity("annotations", annotation_id)

    # ------------------------------------------------------------------ #
    # Measurements
    # ------------------------------------------------------------------ #
    def add_measurement(
        self, start: Point, end: Point, label: Optional[str] = None
    ) -> MeasurementLine:
        """Store a measurement line and clear any pending measurement anchor."""
        measurement = MeasurementLine(id=self._new_id(), start=start, end=end, label=label)
        self._add_entity("measurements", measurement, SelectionType.MEASUREMENT)
        return measurement

    def update_measurement(self, measurement_id: str, **changes: Any) -> None:
        self._update_entity("measurements", measurement_id, _coerce_enums("measurements", changes))

    def delete_measurement(self, measurement_id: str) -> None:
        self._delete_entity("measurements", measurement_id)

    def set_measurement_start(self, point: Optional[Point]) -> None:
        self._commit(measurement_start=point, measurement_hover=None)

    def set_measurement_preview(self, point: Optional[Point]) -> None:
        """Track the pointer while the second measurement point is pending."""
        if point is not None and (
            self.mode is not InteractionMode.ADD_MEASUREMENT or self.measurement_start is None
        ):
            return
        self._commit(measurement_hover=point)

    # ------------------------------------------------------------------ #
    # Pending placement
    # ------------------------------------------------------------------ #
    def set_pending_room(self, pending: PendingRoom | RoomType | str | None) -> None:
        """Arm add-room mode with a room to place, or return to select mode."""
        if pending is None:
            self._commit(**self._mode_changes(InteractionMode.SELECT))
            return
        if not isinstance(pending, PendingRoom):
            try:
                pending = PendingRoom(room_type=RoomType(pending))
            except ValueError:
                LOGGER.debug("Ignoring unknown pending room type %r", pending)
                return
        changes = self._mode_changes(InteractionMode.ADD_ROOM)
        changes["pending_room"] = pending
        self._commit(**changes)

    def set_pending_furniture_type(self, furniture_type: Optional[str]) -> None:
        """Arm add-furniture mode with a catalog key, or return to select mode."""
        if furniture_type is None:
            self._commit(**self._mode_changes(InteractionMode.SELECT))
            return
        changes = self._mode_changes(InteractionMode.ADD_FURNITURE)
        changes["pending_furniture_type"] = furniture_type
        self._commit(**changes)

    def place_pending_room(self, point: Point) -> Optional[Room]:
        """Place the pending room with its top-left corner at the grid point nearest ``point``."""
        pending = self.pending_room
        if self.mode is not InteractionMode.ADD_ROOM or pending is None:
            return None
        return self.add_room(
            pending.room_type,
            snap_to_grid(point, self.grid_size),
            width=pending.width,
            height=pending.height,
            label=pending.label,
            shape=pending.shape,
            points=pending.points,
            l_shape=pending.l_shape,
        )

    def place_pending_furniture(self, point: Point) -> Optional[FurnitureItem]:
        furniture_type = self.pending_furniture_type
        if self.mode is not InteractionMode.ADD_FURNITURE or furniture_type is None:
            return None
        return self.add_furniture(furniture_type, snap_to_grid(point, self.grid_size))

    def place_measurement_point(self, point: Point) -> Optional[MeasurementLine]:
        """Record one click of a measurement: the first anchors, the second completes.

        Returns:
            The new measurement on the second click, otherwise None.
        """
        if self.mode is not InteractionMode.ADD_MEASUREMENT:
            return None
        point = snap_to_grid(point, self.grid_size)
        if self.measurement_start is None:
            self.set_measurement_start(point)
            return None
        return self.add_measurement(self.measurement_start, point)

    def place_opening(
        self, point: Point, tolerance: Optional[float] = None
    ) -> Door | Window | None:
        """Place a door or window on the room wall nearest ``point``.

        Only acts in add-door and add-window modes. The fraction along the
        wall is kept away from the corners.
        """
        if self.mode not in (InteractionMode.ADD_DOOR, InteractionMode.ADD_WINDOW):
            return None

        tolerance = OPENING_PICK_TOLERANCE if tolerance is None else tolerance
        hit = nearest_wall(self.rooms, point, tolerance)
        if hit is None:
            return None

        if self.mode is InteractionMode.ADD_DOOR:
            return self.add_door(hit.room.id, hit.wall, hit.fraction)
        return self.add_window(hit.room.id, hit.wall, hit.fraction)

    # ------------------------------------------------------------------ #
    # Selection and mode
    # ------------------------------------------------------------------ #
    def select(
        self, entity_id: Optional[str], entity_type: SelectionType | str | None = None
    ) -> None:
        """Select an entity on the current floor, or clear the selection with None."""
        if entity_id is None:
            self._commit(selection=None)
            return
        if entity_type is None or self.get_entity(entity_type, entity_id) is None:
            LOGGER.debug("Ignoring selection of unknown %s %s", entity_type, entity_id)
            return
        self._commit(selection=Selection(entity_id, SelectionType(entity_type)))

    def delete_selected(self) -> None:
        selection = self.selection
        if selection is None:
            return
        deleters = {
            SelectionType.ROOM: self.delete_room,
            SelectionType.DOOR: self.delete_door,
            SelectionType.WINDOW: self.delete_window,
            SelectionType.FURNITURE: self.delete_furniture,
            SelectionType.ANNOTATION: self.delete_annotation,
            SelectionType.MEASUREMENT: self.delete_measurement,
        }
        deleters[selection.type](selection.id)

    def set_mode(self, mode: InteractionMode | str) -> None:
        """Switch interaction mode, discarding any half-entered placement."""
        mode = InteractionMode(mode)
        if mode is self.mode:
            return
        self._commit(**self._mode_changes(mode))

    # ------------------------------------------------------------------ #
    # Settings
    # ------------------------------------------------------------------ #
    def set_snap_enabled(self, enabled: bool) -> None:
        self._commit(snap_enabled=bool(enabled))

    def set_plan_name(self, name: str) -> None:
        self._commit_plan(replace(self.plan, plan_name=name))

    def set_default_ceiling_height(self, height: float) -> None:
        """Change the ceiling height given to rooms created from now on."""
        self._commit_plan(replace(self.plan, default_ceiling_height=height))

    # ------------------------------------------------------------------ #
    # Persistence boundary
    # ------------------------------------------------------------------ #
    def export_plan(self) -> Dict[str, Any]:
        """Snapshot the plan as a JSON-ready document."""
        return plan_to_dict(self.plan)

    def load_plan(self, data: Dict[str, Any]) -> None:
        """Replace the plan with a document (multi-floor or legacy single-floor).

        Selection and pending placements are cleared and the unsaved-changes
        flag is reset.

        Raises:
            PlanFormatError: If the document is malformed; the store is unchanged.
        """
        plan = plan_from_dict(
            data,
            plan_name=self.plan_name,
            default_ceiling_height=self.default_ceiling_height,
            id_factory=self._new_id,
        )
        try:
            validate_all(plan)
        except InvalidPlan as e:
            raise PlanFormatError(str(e)) from e

        self._state = EditorState(plan=plan, snap_enabled=self.snap_enabled)

    def reset(self) -> None:
        """Start over with an empty single-floor plan."""
        self._state = EditorState(plan=self._initial_plan())
