# config.py
import math
import os

# Nearest-walkable snapping: first ring pass, then a wider second pass
SNAP_RADII = (5, 15)

ORTHO_COST = 1.0
DIAG_COST = math.sqrt(2.0)

# Ramp detection (empirically tuned, keep as-is unless a map proves otherwise)
RAMP_SCAN_BORDER = 1
RAMP_ADJACENCY = 2
RAMP_MIN_CLUSTER = 3
RAMP_MIN_CELLS = 4
RAMP_MIN_HEIGHT_DIFF = 8
RAMP_MAX_HEIGHT_DIFF = 100
RAMP_STEEP_HEIGHT_DIFF = 16
RAMP_SLOPE_WINDOW = 0.2

# Narrow-passage scan
CHOKE_SCAN_BORDER = 2
CHOKE_SCAN_REACH = 10
CHOKE_MAX_WIDTH = 3
CHOKE_DEDUP_DIST = 8

# Lip / bottom-of-ramp window around a choke point (inclusive offsets)
LIP_WINDOW = (-5, 9)

# Default distance guards (grid units)
CHOKE_MAX_DISTANCE = 60.0
DEFENSIVE_MAX_DISTANCE = 30.0
FACING_MAX_DISTANCE = 25.0

PATROL_AVOID_RADIUS = 1.5

# API / CLI
MAP_DIR = os.environ.get("RTS_MAP_DIR", "maps/default")
API_HOST = os.environ.get("RTS_HOST", "0.0.0.0")
API_PORT = int(os.environ.get("RTS_PORT", "8081"))
