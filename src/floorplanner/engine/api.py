"""Dict-driven interface to the floor plan store.

Operations arrive as plain dictionaries, as they do from a JSON file or a
remote client:

    {"op": "add_room", "room_type": "kitchen", "position": {"x": 0, "y": 0}}

The ``op`` (or ``type``) field names a registered operation; every other
field is passed as a keyword argument after coordinate dictionaries are
turned into model objects.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

from ..core.model import Point, Size
from .store import FloorPlanStore, LShapeConfig, PendingRoom

LOGGER = logging.getLogger(__name__)

Operation = Callable[..., Any]

_POINT_FIELDS = ("position", "start", "end", "point")

# Operations whose ``position`` is a fraction along a wall, not a point
_WALL_POSITION_OPERATIONS = {"add_door", "update_door", "add_window", "update_window"}

_OPERATIONS: Dict[str, Operation] = {
    name: getattr(FloorPlanStore, name)
    for name in (
        "add_floor",
        "delete_floor",
        "set_current_floor",
        "update_floor_name",
        "add_room",
        "update_room",
        "delete_room",
        "move_room",
        "move_room_with_snap",
        "drag_room",
        "resize_room",
        "add_door",
        "update_door",
        "delete_door",
        "add_window",
        "update_window",
        "delete_window",
        "add_furniture",
        "update_furniture",
        "delete_furniture",
        "move_furniture",
        "rotate_furniture",
        "add_annotation",
        "update_annotation",
        "delete_annotation",
        "add_measurement",
        "update_measurement",
        "delete_measurement",
        "set_measurement_start",
        "set_measurement_preview",
        "set_pending_room",
        "set_pending_furniture_type",
        "place_pending_room",
        "place_pending_furniture",
        "place_measurement_point",
        "place_opening",
        "select",
        "delete_selected",
        "set_mode",
        "set_snap_enabled",
        "set_plan_name",
        "set_default_ceiling_height",
        "load_plan",
        "reset",
    )
}


def register_operation(name: str, operation: Operation) -> None:
    """Register a new operation in the registry.

    Args:
        name: Name of the operation.
        operation: Callable invoked as ``operation(store, **params)``.
    """
    _OPERATIONS[name] = operation


def get_operation(name: str) -> Operation:
    """Get an operation by name.

    Raises:
        KeyError: If the operation is not registered.
    """
    if name not in _OPERATIONS:
        raise KeyError(f"Operation '{name}' not found")
    return _OPERATIONS[name]


def list_operations() -> list[str]:
    """List all registered operations."""
    return list(_OPERATIONS.keys())


def _to_point(value: Any, name: str = "point") -> Optional[Point]:
    """Point from ``{"x", "y"}`` or a 2-item sequence; None stays None.

    Raises:
        ValueError: For any other shape of value.
    """
    if value is None or isinstance(value, Point):
        return value
    if isinstance(value, dict):
        return Point(float(value["x"]), float(value["y"]))
    if isinstance(value, (list, tuple)) and len(value) == 2:
        return Point(float(value[0]), float(value[1]))
    raise ValueError(f"'{name}' must be an {{x, y}} object or a 2-item list, got {value!r}")


def _to_size(value: Any) -> Size:
    """Size from ``{"width", "height"}`` or a 2-item sequence.

    Raises:
        ValueError: For any other shape of value.
    """
    if isinstance(value, Size):
        return value
    if isinstance(value, dict):
        return Size(float(value["width"]), float(value["height"]))
    if isinstance(value, (list, tuple)) and len(value) == 2:
        return Size(float(value[0]), float(value[1]))
    raise ValueError(f"'size' must be a {{width, height}} object or a 2-item list, got {value!r}")


def _to_l_shape(value: Any) -> Any:
    if isinstance(value, dict):
        return LShapeConfig(**value)
    return value


def _to_pending(value: Any) -> Any:
    if not isinstance(value, dict):
        return value
    params = dict(value)
    if params.get("points") is not None:
        params["points"] = tuple(_to_point(p, "points") for p in params["points"])
    if "l_shape" in params:
        params["l_shape"] = _to_l_shape(params["l_shape"])
    return PendingRoom(**params)


def coerce_params(params: Dict[str, Any], wall_position: bool = False) -> Dict[str, Any]:
    """Convert JSON-style values of an operation into model objects.

    Args:
        params: Operation parameters without the ``op``/``type`` field.
        wall_position: Treat ``position`` as a scalar wall fraction (doors and
            windows) instead of a point.

    Raises:
        ValueError: If a point or size value has the wrong shape.
    """
    coerced = dict(params)
    for name in _POINT_FIELDS:
        if name == "position" and wall_position:
            if name in coerced:
                coerced[name] = float(coerced[name])
            continue
        if name in coerced:
            coerced[name] = _to_point(coerced[name], name)
    if "size" in coerced:
        coerced["size"] = _to_size(coerced["size"])
    if coerced.get("points") is not None:
        coerced["points"] = tuple(_to_point(p, "points") for p in coerced["points"])
    if "l_shape" in coerced:
        coerced["l_shape"] = _to_l_shape(coerced["l_shape"])
    if "pending" in coerced:
        coerced["pending"] = _to_pending(coerced["pending"])
    return coerced


def apply(store: FloorPlanStore, operation: dict) -> Any:
    """Apply one operation to the store.

    Args:
        store: The store to modify.
        operation: Dictionary describing the operation to apply.

    Returns:
        Whatever the underlying store operation returns (the new entity for
        add operations, the final position for moves, otherwise None).

    Raises:
        ValueError: If the operation type is missing or not recognized.
    """
    operation_type = operation.get("op") or operation.get("type")

    if operation_type is None:
        raise ValueError("Operation must have an 'op' or 'type' field")

    try:
        op = get_operation(operation_type)
    except KeyError:
        raise ValueError(f"Unknown operation type: {operation_type}")

    params = coerce_params(
        {k: v for k, v in operation.items() if k not in ["op", "type"]},
        wall_position=operation_type in _WALL_POSITION_OPERATIONS,
    )
    LOGGER.debug("Applying %s with %s", operation_type, params)
    return op(store, **params)


def describe_result(result: Any) -> Any:
    """Reduce an operation result to something printable and JSON-ready."""
    if isinstance(result, Point):
        return {"x": result.x, "y": result.y}
    entity_id = getattr(result, "id", None)
    if entity_id is not None:
        return entity_id
    return result


def apply_operations(store: FloorPlanStore, operations: list) -> List[Dict[str, Any]]:
    """Apply a list of operations in order, recording the outcome of each.

    A failing operation does not stop the sequence; the store is left as the
    previous operation left it.

    Args:
        store: The store to modify.
        operations: List of operation dictionaries.

    Returns:
        One result per operation with ``operation_index``, ``operation``,
        ``success`` and either ``result`` or ``error``.
    """
    results = []
    for i, operation in enumerate(operations):
        try:
            if not isinstance(operation, dict):
                raise ValueError(f"Operation must be an object, got {type(operation).__name__}")
            result = apply(store, operation)
        except (KeyError, TypeError, ValueError) as e:
            LOGGER.warning("Operation %d failed: %s", i, e)
            results.append(
                {"operation_index": i, "operation": operation, "success": False, "error": str(e)}
            )
            continue

        results.append(
            {
                "operation_index": i,
                "operation": operation,
                "success": True,
                "result": describe_result(result),
            }
        )
    return results
