# Floorplanner imports
from floorplanner.core.model import InteractionMode, Point, RoomShape, Size
from floorplanner.engine.api import (
    apply,
    apply_operations,
    coerce_params,
    describe_result,
    get_operation,
    list_operations,
    register_operation,
)
from floorplanner.engine.store import LShapeConfig, PendingRoom

# Third-party imports
import pytest


def test_apply_add_room_from_json(store):
    room = apply(
        store,
        {"op": "add_room", "room_type": "kitchen", "position": {"x": 5, "y": 10}, "width": 14},
    )
    assert room.position == Point(5, 10)
    assert room.size == Size(14, 10)
    assert store.rooms == (room,)


def test_type_is_an_alias_for_op(store):
    apply(store, {"type": "set_plan_name", "name": "Via type"})
    assert store.plan_name == "Via type"


def test_missing_operation_name(store):
    with pytest.raises(ValueError, match="'op' or 'type'"):
        apply(store, {"name": "nothing"})


def test_unknown_operation(store):
    with pytest.raises(ValueError, match="Unknown operation type: fly"):
        apply(store, {"op": "fly"})


def test_update_room_with_size_dict(store):
    room = store.add_room("other", Point(0, 0))
    apply(store, {"op": "update_room", "room_id": room.id, "size": {"width": 2, "height": 30}})
    assert store.get_entity("room", room.id).size == Size(5, 30)


def test_points_and_pending_are_coerced(store):
    apply(
        store,
        {
            "op": "set_pending_room",
            "pending": {
                "room_type": "other",
                "width": 20,
                "height": 12,
                "shape": "l-shape",
                "l_shape": {"corner": "top-right", "cut_width_pct": 50, "cut_height_pct": 50},
            },
        },
    )
    assert store.mode is InteractionMode.ADD_ROOM
    assert store.pending_room.l_shape == LShapeConfig("top-right", 50, 50)

    room = apply(store, {"op": "place_pending_room", "point": [1, 2]})
    assert room.shape is RoomShape.L_SHAPE
    assert room.position == Point(0, 0)
    assert store.total_area == pytest.approx(180.0)


def test_coerce_params_wall_position_stays_scalar():
    params = coerce_params(
        {"position": 0.5, "points": [{"x": 0, "y": 0}, [1, 0], (0, 1)], "size": {"width": 1, "height": 2}},
        wall_position=True,
    )
    assert params["position"] == 0.5
    assert params["points"] == (Point(0, 0), Point(1, 0), Point(0, 1))
    assert params["size"] == Size(1, 2)


@pytest.mark.parametrize(
    "params",
    [
        {"position": 5},
        {"position": "here"},
        {"start": [1, 2, 3]},
        {"size": 10},
        {"size": "large"},
        {"points": [{"x": 0, "y": 0}, 7]},
    ],
)
def test_coerce_params_rejects_malformed_values(params):
    with pytest.raises(ValueError):
        coerce_params(params)


def test_size_accepts_two_item_list():
    assert coerce_params({"size": [10, 12]})["size"] == Size(10, 12)


def test_malformed_values_are_recorded_and_not_committed(store):
    room = store.add_room("other", Point(0, 0))
    before = store.state

    results = apply_operations(
        store,
        [
            {"op": "move_room", "room_id": room.id, "position": 5},
            {"op": "resize_room", "room_id": room.id, "size": "huge"},
            {"op": "add_door", "room_id": room.id, "wall": "top", "position": {"x": 1}},
        ],
    )

    assert [r["success"] for r in results] == [False, False, False]
    assert store.state is before
    assert store.export_plan()["floors"][0]["rooms"][0]["position"] == {"x": 0, "y": 0}


def test_resize_with_list_size(store):
    room = store.add_room("other", Point(0, 0))
    results = apply_operations(store, [{"op": "resize_room", "room_id": room.id, "size": [10, 10]}])
    assert results[0]["success"]
    assert store.get_entity("room", room.id).size == Size(10, 10)


def test_door_position_is_a_wall_fraction(store):
    room = store.add_room("other", Point(0, 0))
    door = apply(store, {"op": "add_door", "room_id": room.id, "wall": "top", "position": 0.25})
    assert door.position == 0.25


def test_coerce_pending_points():
    params = coerce_params({"pending": {"shape": "custom", "points": [[0, 0], [4, 0], [0, 4]]}})
    assert params["pending"] == PendingRoom(shape="custom", points=(Point(0, 0), Point(4, 0), Point(0, 4)))


def test_apply_operations_records_each_result(store):
    results = apply_operations(
        store,
        [
            {"op": "add_room", "room_type": "bedroom", "position": {"x": 0, "y": 0}},
            {"op": "fly"},
            {"op": "add_door", "room_id": "id2"},
            "not an operation",
            {"op": "drag_room", "room_id": "id2", "position": {"x": 2.4, "y": 3.6}},
        ],
    )

    assert [r["success"] for r in results] == [True, False, False, False, True]
    assert results[0]["result"] == "id2"
    assert "Unknown operation type" in results[1]["error"]
    assert results[4]["result"] == {"x": 0, "y": 5}
    assert [r["operation_index"] for r in results] == [0, 1, 2, 3, 4]
    assert len(store.rooms) == 1


def test_describe_result():
    assert describe_result(None) is None
    assert describe_result(Point(1, 2)) == {"x": 1, "y": 2}
    assert describe_result(True) is True


def test_registry():
    assert "add_room" in list_operations()
    assert "place_opening" in list_operations()
    with pytest.raises(KeyError):
        get_operation("fly")


def test_register_custom_operation(store):
    def add_hallway(s, position):
        return s.add_room("hallway", position)

    register_operation("add_hallway", add_hallway)
    room = apply(store, {"op": "add_hallway", "position": {"x": 0, "y": 0}})
    assert room.label == "Hallway"
