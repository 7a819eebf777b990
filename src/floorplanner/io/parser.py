"""Conversion between plan documents and Plan objects.

A plan document is the JSON-ready dictionary exchanged with the
persistence layer:

    {"floors": [...], "currentFloorId": ..., "planName": ..., "defaultCeilingHeight": ...}

Documents written before multi-floor support carry the entity
collections at the top level (``rooms``, ``doors``, ...) and no
``floors`` key; they are wrapped into a single "Ground Floor".
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from ..config import (
    DEFAULT_CEILING_HEIGHT,
    DEFAULT_FLOOR_NAME,
    DEFAULT_PLAN_NAME,
    PREVIEW_MEASUREMENT_ID,
)
from ..core.catalog import FURNITURE_CATALOG, ROOM_TEMPLATES
from ..core.model import (
    Annotation,
    AnnotationType,
    Door,
    Floor,
    FurnitureCategory,
    FurnitureItem,
    MeasurementLine,
    Plan,
    Point,
    Room,
    RoomShape,
    RoomType,
    Size,
    SwingDirection,
    WallSide,
    Window,
    generate_id,
)

LOGGER = logging.getLogger(__name__)


class PlanFormatError(ValueError):
    """Raised when a plan document cannot be converted into a Plan."""

    pass


def _point(data: Dict[str, Any]) -> Point:
    return Point(float(data["x"]), float(data["y"]))


def _size(data: Dict[str, Any]) -> Size:
    return Size(float(data["width"]), float(data["height"]))


def _point_dict(point: Point) -> Dict[str, float]:
    return {"x": point.x, "y": point.y}


def _size_dict(size: Size) -> Dict[str, float]:
    return {"width": size.width, "height": size.height}


def _room_from_dict(data: Dict[str, Any], default_ceiling_height: float) -> Room:
    room_type = RoomType(data.get("type", RoomType.OTHER.value))
    template = ROOM_TEMPLATES[room_type]
    shape = RoomShape(data.get("shape", RoomShape.RECTANGLE.value))

    points = None
    if shape is not RoomShape.RECTANGLE:
        if data.get("points") is None:
            raise ValueError(f"{shape.value} room has no points")
        points = tuple(_point(p) for p in data["points"])

    return Room(
        id=str(data["id"]),
        type=room_type,
        label=data.get("label") or template.label,
        position=_point(data["position"]),
        size=_size(data["size"]),
        ceiling_height=float(data.get("ceilingHeight", default_ceiling_height)),
        color=data.get("color") or template.color,
        shape=shape,
        points=points,
    )


def _room_to_dict(room: Room) -> Dict[str, Any]:
    result = {
        "id": room.id,
        "type": room.type.value,
        "label": room.label,
        "position": _point_dict(room.position),
        "size": _size_dict(room.size),
        "ceilingHeight": room.ceiling_height,
        "color": room.color,
        "shape": room.shape.value,
    }
    if room.points is not None:
        result["points"] = [_point_dict(p) for p in room.points]
    return result


def _door_from_dict(data: Dict[str, Any]) -> Door:
    return Door(
        id=str(data["id"]),
        room_id=str(data["roomId"]),
        wall=WallSide(data["wall"]),
        position=float(data["position"]),
        width=float(data["width"]),
        swing_direction=SwingDirection(
            data.get("swingDirection", SwingDirection.INWARD_LEFT.value)
        ),
    )


def _door_to_dict(door: Door) -> Dict[str, Any]:
    return {
        "id": door.id,
        "roomId": door.room_id,
        "wall": door.wall.value,
        "position": door.position,
        "width": door.width,
        "swingDirection": door.swing_direction.value,
    }


def _window_from_dict(data: Dict[str, Any]) -> Window:
    return Window(
        id=str(data["id"]),
        room_id=str(data["roomId"]),
        wall=WallSide(data["wall"]),
        position=float(data["position"]),
        width=float(data["width"]),
        height=float(data["height"]),
    )


def _window_to_dict(window: Window) -> Dict[str, Any]:
    return {
        "id": window.id,
        "roomId": window.room_id,
        "wall": window.wall.value,
        "position": window.position,
        "width": window.width,
        "height": window.height,
    }


def _furniture_from_dict(data: Dict[str, Any]) -> FurnitureItem:
    item_type = str(data["type"])
    template = FURNITURE_CATALOG.get(item_type)
    default_category = template.category.value if template else FurnitureCategory.OTHER.value

    return FurnitureItem(
        id=str(data["id"]),
        type=item_type,
        category=FurnitureCategory(data.get("category", default_category)),
        label=data.get("label") or (template.label if template else item_type),
        position=_point(data["position"]),
        size=_size(data["size"]),
        rotation=float(data.get("rotation", 0.0)),
        color=data.get("color") or (template.color if template else "#94a3b8"),
        icon=data.get("icon"),
    )


def _furniture_to_dict(item: FurnitureItem) -> Dict[str, Any]:
    result = {
        "id": item.id,
        "type": item.type,
        "category": item.category.value,
        "label": item.label,
        "position": _point_dict(item.position),
        "size": _size_dict(item.size),
        "rotation": item.rotation,
        "color": item.color,
    }
    if item.icon is not None:
        result["icon"] = item.icon
    return result


def _annotation_from_dict(data: Dict[str, Any]) -> Annotation:
    return Annotation(
        id=str(data["id"]),
        position=_point(data["position"]),
        text=str(data.get("text", "")),
        type=AnnotationType(data.get("type", AnnotationType.NOTE.value)),
    )


def _annotation_to_dict(annotation: Annotation) -> Dict[str, Any]:
    return {
        "id": annotation.id,
        "position": _point_dict(annotation.position),
        "text": annotation.text,
        "type": annotation.type.value,
    }


def _measurement_from_dict(data: Dict[str, Any]) -> MeasurementLine:
    return MeasurementLine(
        id=str(data["id"]),
        start=_point(data["start"]),
        end=_point(data["end"]),
        label=data.get("label"),
    )


def _measurement_to_dict(measurement: MeasurementLine) -> Dict[str, Any]:
    result = {
        "id": measurement.id,
        "start": _point_dict(measurement.start),
        "end": _point_dict(measurement.end),
    }
    if measurement.label is not None:
        result["label"] = measurement.label
    return result


def _collections_from_dict(data: Dict[str, Any], default_ceiling_height: float) -> Dict[str, tuple]:
    """Parse the six entity collections of a floor (or of a legacy document)."""
    measurements = tuple(
        _measurement_from_dict(m)
        for m in data.get("measurements") or []
        if m.get("id") != PREVIEW_MEASUREMENT_ID
    )
    return {
        "rooms": tuple(
            _room_from_dict(r, default_ceiling_height) for r in data.get("rooms") or []
        ),
        "doors": tuple(_door_from_dict(d) for d in data.get("doors") or []),
        "windows": tuple(_window_from_dict(w) for w in data.get("windows") or []),
        "furniture": tuple(_furniture_from_dict(f) for f in data.get("furniture") or []),
        "annotations": tuple(_annotation_from_dict(a) for a in data.get("annotations") or []),
        "measurements": measurements,
    }


def floor_from_dict(data: Dict[str, Any], default_ceiling_height: float = DEFAULT_CEILING_HEIGHT) -> Floor:
    """Convert a floor dictionary into a Floor."""
    return Floor(
        id=str(data["id"]),
        name=str(data.get("name", DEFAULT_FLOOR_NAME)),
        level=int(data.get("level", 0)),
        **_collections_from_dict(data, default_ceiling_height),
    )


def floor_to_dict(floor: Floor) -> Dict[str, Any]:
    """Convert a Floor into its document form."""
    return {
        "id": floor.id,
        "name": floor.name,
        "level": floor.level,
        "rooms": [_room_to_dict(r) for r in floor.rooms],
        "doors": [_door_to_dict(d) for d in floor.doors],
        "windows": [_window_to_dict(w) for w in floor.windows],
        "furniture": [_furniture_to_dict(f) for f in floor.furniture],
        "annotations": [_annotation_to_dict(a) for a in floor.annotations],
        "measurements": [
            _measurement_to_dict(m) for m in floor.measurements if m.id != PREVIEW_MEASUREMENT_ID
        ],
    }


def is_legacy_document(data: Dict[str, Any]) -> bool:
    """True for single-floor documents that predate the ``floors`` key."""
    return "floors" not in data


def plan_from_dict(
    data: Dict[str, Any],
    plan_name: str = DEFAULT_PLAN_NAME,
    default_ceiling_height: float = DEFAULT_CEILING_HEIGHT,
    id_factory: Optional[Callable[[], str]] = None,
) -> Plan:
    """Convert a plan document into a Plan.

    Args:
        data: Plan document, multi-floor or legacy single-floor.
        plan_name: Name kept when the document has no (or an empty) ``planName``.
        default_ceiling_height: Value kept when the document has no
            ``defaultCeilingHeight``.
        id_factory: Id generator for the floor synthesized from a legacy document.

    Returns:
        The parsed Plan.

    Raises:
        PlanFormatError: If the document is malformed.
    """
    if not isinstance(data, dict):
        raise PlanFormatError(f"Plan document must be an object, got {type(data).__name__}")

    plan_name = data.get("planName") or plan_name

    try:
        default_ceiling_height = float(data.get("defaultCeilingHeight") or default_ceiling_height)
        if is_legacy_document(data):
            LOGGER.warning("Upgrading legacy single-floor plan document")
            floor = Floor(
                id=(id_factory or generate_id)(),
                name=DEFAULT_FLOOR_NAME,
                level=0,
                **_collections_from_dict(data, default_ceiling_height),
            )
            floors = (floor,)
            current_floor_id = floor.id
        else:
            floors = tuple(floor_from_dict(f, default_ceiling_height) for f in data["floors"])
            current_floor_id = data.get("currentFloorId")
            if not any(f.id == current_floor_id for f in floors):
                current_floor_id = floors[0].id if floors else ""

        plan = Plan(
            floors=floors,
            current_floor_id=current_floor_id,
            plan_name=plan_name,
            default_ceiling_height=default_ceiling_height,
        )
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise PlanFormatError(f"Invalid plan document: {e}") from e

    LOGGER.info(
        "Loaded plan '%s' with %d floor(s)", plan.plan_name, len(plan.floors)
    )
    return plan


def plan_to_dict(plan: Plan) -> Dict[str, Any]:
    """Convert a Plan into a JSON-ready plan document."""
    return {
        "floors": [floor_to_dict(f) for f in plan.floors],
        "currentFloorId": plan.current_floor_id,
        "planName": plan.plan_name,
        "defaultCeilingHeight": plan.default_ceiling_height,
    }


def load_plan_file(path: str | Path) -> Dict[str, Any]:
    """Read a plan document from a JSON file.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        json.JSONDecodeError: If the file is not valid JSON.
    """
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    with open(file_path, encoding="utf-8") as f:
        return json.load(f)


def save_plan_file(data: Dict[str, Any], path: str | Path) -> None:
    """Write a plan document to a JSON file, creating parent directories."""
    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    with open(file_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
