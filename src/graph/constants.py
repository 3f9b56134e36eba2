# Row/lane geometry shared by the layout and the edge paths.
ROW_HEIGHT = 46
LANE_WIDTH = 14
LANE_PADDING = 8
MAX_GRAPH_WIDTH = 196
MIN_LANE_STEP = 8
NODE_RADIUS = 4

# Lane 0 is always the mainline.
MAINLINE_LANE = 0

# Extra hops allowed past len(commits) before a branch walk gives up.
BRANCH_WALK_SLACK = 8

# Flow grouping
FLOW_WINDOW_SECONDS = 60 * 60 * 6
FLOW_MAX_GROUP_SIZE = 8
DEFAULT_BRANCH_LABEL = "detached"

# Dates at or above this are treated as milliseconds.
MILLISECOND_THRESHOLD = 10_000_000_000
