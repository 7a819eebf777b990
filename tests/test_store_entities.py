# Floorplanner imports
from floorplanner.core.model import (
    AnnotationType,
    FurnitureCategory,
    InteractionMode,
    Point,
    SelectionType,
    Size,
    SwingDirection,
    WallSide,
)

# Third-party imports
import pytest


@pytest.fixture
def room(store):
    return store.add_room("other", Point(0, 0))


class TestDoorsAndWindows:
    def test_add_door_defaults(self, store, room):
        door = store.add_door(room.id, "top", 0.25)

        assert door.wall is WallSide.TOP
        assert door.width == 3.0
        assert door.swing_direction is SwingDirection.INWARD_LEFT
        assert store.doors == (door,)
        assert store.selected_type is SelectionType.DOOR

    def test_door_needs_room_on_current_floor(self, store, room):
        assert store.add_door("missing", "top", 0.5) is None

        upper = store.add_floor("Upper", 1)
        store.set_current_floor(upper.id)
        assert store.add_door(room.id, "top", 0.5) is None
        assert store.add_window(room.id, "top", 0.5) is None
        assert store.doors == ()

    def test_door_position_is_not_clamped(self, store, room):
        door = store.add_door(room.id, "left", 1.5)
        assert door.position == 1.5

        store.update_door(door.id, position=-0.2)
        assert store.get_entity("door", door.id).position == -0.2

    def test_update_door_coerces_enums(self, store, room):
        door = store.add_door(room.id, "top", 0.5)
        store.update_door(door.id, wall="right", swing_direction="outward-right", width=2.5)

        updated = store.get_entity("door", door.id)
        assert updated.wall is WallSide.RIGHT
        assert updated.swing_direction is SwingDirection.OUTWARD_RIGHT
        assert updated.width == 2.5

    def test_update_door_to_unknown_room_is_noop(self, store, room):
        door = store.add_door(room.id, "top", 0.5)
        store.update_door(door.id, room_id="missing")
        assert store.get_entity("door", door.id).room_id == room.id

    def test_move_door_to_other_room(self, store, room):
        door = store.add_door(room.id, "top", 0.5)
        other = store.add_room("closet", Point(20, 0))
        store.update_door(door.id, room_id=other.id)
        assert store.get_entity("door", door.id).room_id == other.id

    def test_add_window_defaults(self, store, room):
        window = store.add_window(room.id, WallSide.BOTTOM, 0.5)
        assert window.width == 4.0
        assert window.height == 4.0
        assert store.selected_type is SelectionType.WINDOW

    def test_update_and_delete_window(self, store, room):
        window = store.add_window(room.id, "bottom", 0.5)
        store.update_window(window.id, height=5)
        assert store.get_entity("window", window.id).height == 5

        store.delete_window(window.id)
        assert store.windows == ()
        assert store.selection is None

    def test_delete_door(self, store, room):
        door = store.add_door(room.id, "top", 0.5)
        store.delete_door(door.id)
        assert store.doors == ()


class TestFurniture:
    def test_add_from_catalog(self, store):
        item = store.add_furniture("sofa-3seat", Point(3, 4))

        assert item.label == "3-Seat Sofa"
        assert item.category is FurnitureCategory.SEATING
        assert item.size == Size(7, 3)
        assert item.rotation == 0.0
        assert store.furniture == (item,)
        assert store.selected_type is SelectionType.FURNITURE

    def test_unknown_catalog_key_is_ignored(self, store):
        assert store.add_furniture("hot-tub", Point(0, 0)) is None
        assert store.furniture == ()
        assert not store.has_unsaved_changes

    @pytest.mark.parametrize(
        "rotation,expected", [(90, 90), (-90, 270), (360, 0), (720, 0), (405, 45)]
    )
    def test_rotation_is_normalized(self, store, rotation, expected):
        item = store.add_furniture("armchair", Point(0, 0))
        store.rotate_furniture(item.id, rotation)
        assert store.get_entity("furniture", item.id).rotation == expected

    def test_update_furniture_normalizes_rotation(self, store):
        item = store.add_furniture("armchair", Point(0, 0))
        store.update_furniture(item.id, rotation=370, label="Reading chair")

        updated = store.get_entity("furniture", item.id)
        assert updated.rotation == 10
        assert updated.label == "Reading chair"

    @pytest.mark.parametrize("angle", [float("inf"), float("-inf"), float("nan")])
    def test_non_finite_rotation_is_ignored(self, store, angle):
        item = store.add_furniture("armchair", Point(0, 0))
        store.rotate_furniture(item.id, 90)
        before = store.state

        store.rotate_furniture(item.id, angle)
        store.update_furniture(item.id, rotation=angle, label="Lost")

        assert store.state is before
        assert store.get_entity("furniture", item.id).rotation == 90

    def test_move_and_delete(self, store):
        item = store.add_furniture("desk", Point(0, 0))
        store.move_furniture(item.id, Point(8, 9))
        assert store.get_entity("furniture", item.id).position == Point(8, 9)

        store.delete_furniture(item.id)
        assert store.furniture == ()


class TestAnnotations:
    def test_add_update_delete(self, store):
        note = store.add_annotation(Point(1, 2), "Check outlet", "electrical")
        assert note.type is AnnotationType.ELECTRICAL
        assert store.selected_id == note.id

        store.update_annotation(note.id, text="Replace outlet", type="repair")
        updated = store.get_entity("annotation", note.id)
        assert updated.text == "Replace outlet"
        assert updated.type is AnnotationType.REPAIR

        store.delete_annotation(note.id)
        assert store.annotations == ()

    def test_default_type_is_note(self, store):
        assert store.add_annotation(Point(0, 0), "Hello").type is AnnotationType.NOTE


class TestMeasurements:
    def test_add_update_delete(self, store):
        line = store.add_measurement(Point(0, 0), Point(10, 0))
        assert line.label is None
        assert store.measurements == (line,)

        store.update_measurement(line.id, label="Hallway")
        assert store.get_entity("measurement", line.id).label == "Hallway"

        store.delete_measurement(line.id)
        assert store.measurements == ()

    def test_add_clears_pending_anchor(self, store):
        store.set_mode("add-measurement")
        store.set_measurement_start(Point(0, 0))
        store.add_measurement(Point(0, 0), Point(5, 5))
        assert store.measurement_start is None
        assert store.mode is InteractionMode.SELECT


class TestStaleIds:
    @pytest.mark.parametrize(
        "operation",
        [
            lambda s: s.update_door("missing", width=4),
            lambda s: s.delete_door("missing"),
            lambda s: s.update_window("missing", width=4),
            lambda s: s.delete_window("missing"),
            lambda s: s.update_furniture("missing", rotation=10),
            lambda s: s.rotate_furniture("missing", 10),
            lambda s: s.move_furniture("missing", Point(0, 0)),
            lambda s: s.delete_furniture("missing"),
            lambda s: s.update_annotation("missing", text="x"),
            lambda s: s.delete_annotation("missing"),
            lambda s: s.update_measurement("missing", label="x"),
            lambda s: s.delete_measurement("missing"),
            lambda s: s.delete_room("missing"),
            lambda s: s.move_room("missing", Point(0, 0)),
            lambda s: s.resize_room("missing", Size(10, 10)),
            lambda s: s.update_floor_name("missing", "x"),
            lambda s: s.set_current_floor("missing"),
            lambda s: s.delete_floor("missing"),
            lambda s: s.select("missing", "room"),
        ],
    )
    def test_unknown_ids_leave_state_untouched(self, store, operation):
        before = store.state
        operation(store)
        assert store.state is before
