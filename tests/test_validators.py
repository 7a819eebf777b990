# Floorplanner imports
from floorplanner.core.model import (
    Door,
    Floor,
    Plan,
    Point,
    Room,
    RoomShape,
    RoomType,
    Size,
    WallSide,
    Window,
)
from floorplanner.engine.validators import (
    InvalidPlan,
    find_degenerate_rooms,
    validate_all,
    validate_openings,
    validate_unique_ids,
)

# Third-party imports
import pytest


def make_room(room_id, shape=RoomShape.RECTANGLE, points=None):
    return Room(
        id=room_id,
        type=RoomType.OTHER,
        label=room_id,
        position=Point(0, 0),
        size=Size(10, 10),
        ceiling_height=9.0,
        color="#f9fafb",
        shape=shape,
        points=points,
    )


def make_plan(*floors):
    return Plan(
        floors=tuple(floors),
        current_floor_id=floors[0].id,
        plan_name="Test",
        default_ceiling_height=9.0,
    )


@pytest.fixture
def valid_plan():
    room = make_room("r1")
    ground = Floor(
        id="f0",
        name="Ground",
        level=0,
        rooms=(room,),
        doors=(Door(id="d1", room_id="r1", wall=WallSide.TOP, position=0.5, width=3),),
        windows=(
            Window(id="w1", room_id="r1", wall=WallSide.LEFT, position=0.5, width=4, height=4),
        ),
    )
    return make_plan(ground, Floor(id="f1", name="Upper", level=1))


def test_valid_plan_passes(valid_plan):
    assert validate_all(valid_plan)


def test_plan_requires_floors():
    with pytest.raises(ValueError):
        Plan(floors=(), current_floor_id="f0", plan_name="x", default_ceiling_height=9)


def test_plan_requires_member_current_floor():
    with pytest.raises(ValueError):
        Plan(
            floors=(Floor(id="f0", name="Ground", level=0),),
            current_floor_id="f9",
            plan_name="x",
            default_ceiling_height=9,
        )


def test_duplicate_ids_across_floors():
    plan = make_plan(
        Floor(id="f0", name="Ground", level=0, rooms=(make_room("r1"),)),
        Floor(id="f1", name="Upper", level=1, rooms=(make_room("r1"),)),
    )
    assert not validate_unique_ids(plan)
    with pytest.raises(InvalidPlan):
        validate_all(plan)


def test_opening_must_reference_room_on_same_floor():
    upper = Floor(
        id="f1",
        name="Upper",
        level=1,
        doors=(Door(id="d1", room_id="r1", wall=WallSide.TOP, position=0.5, width=3),),
    )
    plan = make_plan(Floor(id="f0", name="Ground", level=0, rooms=(make_room("r1"),)), upper)

    assert not validate_openings(upper)
    with pytest.raises(InvalidPlan, match="Upper"):
        validate_all(plan)


def test_degenerate_rooms_are_reported_not_rejected():
    bowtie = (Point(0, 0), Point(10, 10), Point(10, 0), Point(0, 10))
    short = (Point(0, 0), Point(10, 0))
    good = (Point(0, 0), Point(10, 0), Point(0, 10))
    plan = make_plan(
        Floor(
            id="f0",
            name="Ground",
            level=0,
            rooms=(
                make_room("bowtie", RoomShape.CUSTOM, bowtie),
                make_room("short", RoomShape.CUSTOM, short),
                make_room("good", RoomShape.CUSTOM, good),
                make_room("rect"),
            ),
        )
    )

    assert [r.id for r in find_degenerate_rooms(plan)] == ["bowtie", "short"]
    assert validate_all(plan)


def test_room_rejects_non_positive_size():
    with pytest.raises(ValueError):
        Room(
            id="r",
            type=RoomType.OTHER,
            label="r",
            position=Point(0, 0),
            size=Size(0, 10),
            ceiling_height=9,
            color="#fff",
        )


def test_room_shape_and_points_must_agree():
    with pytest.raises(ValueError):
        make_room("r", RoomShape.RECTANGLE, (Point(0, 0), Point(1, 0), Point(0, 1)))
    with pytest.raises(ValueError):
        make_room("r", RoomShape.L_SHAPE, None)


def test_current_floor_is_always_a_member(valid_plan):
    assert valid_plan.current_floor is valid_plan.floors[0]
    assert valid_plan.current_floor.id == valid_plan.current_floor_id
