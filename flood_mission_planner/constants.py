"""Application constants.

The estimation constants are placeholders with no physical derivation.
They are kept as named values so ``Settings`` can override them.
"""

# Service
SERVICE_NAME = "flood-mission-planner"
SERVICE_VERSION = "0.1.0"

# Map origin used when no coordinate is picked
DEFAULT_ORIGIN_LATITUDE = 37.5665
DEFAULT_ORIGIN_LONGITUDE = 126.9780
COORDINATE_JITTER_DEGREES = 0.01

# Template waypoints are laid out on a diagonal from the origin
TEMPLATE_LATITUDE_STEP_DEGREES = 0.01
TEMPLATE_LONGITUDE_STEP_DEGREES = 0.008

# Blank missions get a short default route
DEFAULT_ROUTE_WAYPOINT_COUNT = 3
DEFAULT_ROUTE_STEP_DEGREES = 0.001

# Waypoint defaults
DEFAULT_ALTITUDE_RANGE_METERS = (30.0, 70.0)
DEFAULT_SPEED_RANGE_METERS_PER_SECOND = (8.0, 12.0)
MINIMUM_ALTITUDE_METERS = 5.0
MAXIMUM_ALTITUDE_METERS = 120.0
MAXIMUM_SPEED_METERS_PER_SECOND = 20.0

# Flat-earth degree scale, not great-circle
METERS_PER_DEGREE_LATITUDE = 111_000.0
METERS_PER_DEGREE_LONGITUDE = 85_000.0

# Linear battery proxy
BATTERY_PERCENT_PER_MINUTE = 2.5
MAXIMUM_BATTERY_PERCENT = 100.0
BATTERY_TIGHT_RATIO = 0.8

# Identifier prefixes
WAYPOINT_ID_PREFIX = "wp-"
MISSION_ID_PREFIX = "mission-"
