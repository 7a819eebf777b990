"""Editing engine: the mutation store, validators and dict-driven operations."""

from .api import apply, apply_operations, get_operation, list_operations, register_operation
from .store import EditorState, FloorPlanStore, LShapeConfig, PendingRoom
from .validators import InvalidPlan, validate_all

__all__ = [
    "EditorState",
    "FloorPlanStore",
    "InvalidPlan",
    "LShapeConfig",
    "PendingRoom",
    "apply",
    "apply_operations",
    "get_operation",
    "list_operations",
    "register_operation",
    "validate_all",
]
