"""Default configuration values for cfg-viewer."""

# Canvas the layout is centred on
DEFAULT_CANVAS_WIDTH = 900
DEFAULT_CANVAS_HEIGHT = 700

# Spring target separation per edge kind
DETAIL_LINK_DISTANCE = 80.0  # ownership, drawn tighter
FLOW_LINK_DISTANCE = 150.0  # control flow
LINK_STRENGTH = 0.7

# Pairwise repulsion applied to every visible node
CHARGE_STRENGTH = -800.0
CHARGE_DISTANCE_MIN = 1.0

# Collision radius per node role (rendered box plus margin)
DETAIL_COLLISION_RADIUS = 50.0
MAIN_COLLISION_RADIUS = 70.0
COLLISION_STRENGTH = 1.0
COLLISION_ITERATIONS = 1

# Simulation temperature
ALPHA_START = 1.0
ALPHA_MIN = 0.001
ALPHA_DECAY_TICKS = 300  # ticks for alpha to cool from 1 to ALPHA_MIN
VELOCITY_DECAY = 0.4
DRAG_ALPHA_TARGET = 0.3

# Initial phyllotaxis placement
INITIAL_RADIUS = 10.0

# Node box geometry (width grows with text length)
CHAR_WIDTH = 8
DETAIL_MIN_WIDTH = 80
MAIN_MIN_WIDTH = 120
DETAIL_HEIGHT = 35
MAIN_HEIGHT = 50

# Label truncation before a node becomes expandable
DETAIL_TEXT_LIMIT = 10
MAIN_TEXT_LIMIT = 14

# Number of state entries shown before "show more"
STATE_PREVIEW_SIZE = 5

# Default number of relaxation steps for headless layout
DEFAULT_HEADLESS_STEPS = 300

# Position snapshots kept by the in-memory recording surface
SNAPSHOT_HISTORY = 100
