import itertools

import pytest

from floorplanner.core.model import Point
from floorplanner.engine.store import FloorPlanStore


@pytest.fixture
def id_factory():
    """Deterministic ids: id1, id2, ..."""
    counter = itertools.count(1)
    return lambda: f"id{next(counter)}"


@pytest.fixture
def store(id_factory):
    """Fresh store whose initial floor is ``id1``"""
    return FloorPlanStore(id_factory=id_factory)


@pytest.fixture
def two_rooms(store):
    """Store with a 10x10 room at the origin and a bedroom to its right"""
    store.add_room("other", Point(0, 0))
    store.add_room("bedroom", Point(30, 0))
    return store


@pytest.fixture
def plan_document():
    """Two-floor plan document as it is written to disk"""
    return {
        "floors": [
            {
                "id": "ground",
                "name": "Ground Floor",
                "level": 0,
                "rooms": [
                    {
                        "id": "living",
                        "type": "living-room",
                        "label": "Living Room",
                        "position": {"x": 0, "y": 0},
                        "size": {"width": 20, "height": 15},
                        "ceilingHeight": 9,
                        "color": "#dbeafe",
                        "shape": "rectangle",
                    },
                    {
                        "id": "den",
                        "type": "office",
                        "label": "Den",
                        "position": {"x": 20, "y": 0},
                        "size": {"width": 20, "height": 12},
                        "ceilingHeight": 8,
                        "color": "#f3e8ff",
                        "shape": "l-shape",
                        "points": [
                            {"x": 0, "y": 0},
                            {"x": 20, "y": 0},
                            {"x": 20, "y": 6},
                            {"x": 10, "y": 6},
                            {"x": 10, "y": 12},
                            {"x": 0, "y": 12},
                        ],
                    },
                ],
                "doors": [
                    {
                        "id": "front-door",
                        "roomId": "living",
                        "wall": "bottom",
                        "position": 0.5,
                        "width": 3,
                        "swingDirection": "inward-right",
                    }
                ],
                "windows": [
                    {
                        "id": "bay",
                        "roomId": "living",
                        "wall": "top",
                        "position": 0.3,
                        "width": 4,
                        "height": 4,
                    }
                ],
                "furniture": [
                    {
                        "id": "couch",
                        "type": "sofa-3seat",
                        "category": "seating",
                        "label": "3-Seat Sofa",
                        "position": {"x": 5, "y": 5},
                        "size": {"width": 7, "height": 3},
                        "rotation": 90,
                        "color": "#94a3b8",
                    }
                ],
                "annotations": [
                    {
                        "id": "note-1",
                        "position": {"x": 2, "y": 2},
                        "text": "Patch drywall",
                        "type": "repair",
                    }
                ],
                "measurements": [
                    {
                        "id": "m-1",
                        "start": {"x": 0, "y": 0},
                        "end": {"x": 20, "y": 0},
                        "label": "South wall",
                    },
                    {"id": "m-2", "start": {"x": 0, "y": 0}, "end": {"x": 0, "y": 15}},
                ],
            },
            {
                "id": "upper",
                "name": "Second Floor",
                "level": 1,
                "rooms": [],
                "doors": [],
                "windows": [],
                "furniture": [],
                "annotations": [],
                "measurements": [],
            },
        ],
        "currentFloorId": "ground",
        "planName": "Test House",
        "defaultCeilingHeight": 9,
    }


@pytest.fixture
def legacy_document():
    """Single-floor document without a ``floors`` key"""
    return {
        "rooms": [
            {
                "id": "kitchen",
                "type": "kitchen",
                "label": "Kitchen",
                "position": {"x": 0, "y": 0},
                "size": {"width": 12, "height": 10},
                "ceilingHeight": 9,
                "color": "#fef3c7",
            }
        ],
        "doors": [
            {"id": "d-1", "roomId": "kitchen", "wall": "left", "position": 0.5, "width": 3}
        ],
        "windows": [],
        "furniture": [],
        "planName": "Old Cottage",
    }
