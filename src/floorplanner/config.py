"""
Configuration for the floor plan editor core.

All spatial values are in feet.
"""

# Grid
GRID_SIZE = 5.0  # grid unit used for placement and drag fallback rounding
MIN_ROOM_DIMENSION = GRID_SIZE  # resize never goes below one grid unit

# Edge snapping
SNAP_THRESHOLD = 2.0  # how close two parallel edges must be before snapping

# Plan defaults
DEFAULT_PLAN_NAME = "New Floor Plan"
DEFAULT_FLOOR_NAME = "Ground Floor"
DEFAULT_CEILING_HEIGHT = 9.0

# Openings
DEFAULT_DOOR_WIDTH = 3.0
DEFAULT_WINDOW_WIDTH = 4.0
DEFAULT_WINDOW_HEIGHT = 4.0
WALL_MARGIN = 0.1  # openings placed by pointer stay within [0.1, 0.9] of the wall
OPENING_PICK_TOLERANCE = 1.0  # max distance from a wall for placing an opening

# L-shaped rooms
DEFAULT_L_CUT_PCT = 40.0

# Transient measurement drawn while the second point is pending
PREVIEW_MEASUREMENT_ID = "preview"
