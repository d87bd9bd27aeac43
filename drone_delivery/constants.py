"""System constants shared by the planner and the delivery pipeline."""

# Distance covered by a single drone move (degrees, flat-plane approximation)
STEP_DISTANCE = 0.00015

# Two coordinates closer than this are treated as the same place
CLOSE_TOLERANCE = 0.00015

# Cross-product threshold for "point lies on an edge"
EDGE_EPSILON = 1e-10

HEADING_INCREMENT = 22.5

# The sixteen compass headings a move may follow (0 = east, counter-clockwise)
COMPASS_HEADINGS = tuple(i * HEADING_INCREMENT for i in range(16))

# Angle written for a hover record in the moves file
HOVER_ANGLE = 999

CENTRAL_REGION_NAME = "central"

# Delivery base (Appleton Tower), (lng, lat)
APPLETON_TOWER = (-3.186874, 55.944494)

MAX_PIZZAS_PER_ORDER = 4
ORDER_CHARGE_IN_PENCE = 100

# Default cap on settled nodes per search
DEFAULT_MAX_EXPANSIONS = 100000
