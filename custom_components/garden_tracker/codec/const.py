"""Constants of the garden planner save-code format."""

SAVE_CODE_SEPARATOR = "_"
ROW_SEPARATOR = "-"
SUFFIX_SEPARATOR = "."
CURRENT_VERSION = "v0.4"
SUPPORTED_VERSIONS = ("v0.1", "v0.2", "v0.3", "v0.4")
PLOTS_PREFIX = "D-"
CROPS_PREFIX = "CR-"
LEGACY_CROPS_PREFIX = "CROPS-"
FERTILIZER_PREFIX = "FE-"
PLOT_SIZE = 3
MAX_PLOT_ROWS = 3
MAX_PLOT_COLUMNS = 3
MAX_TILE_ROWS = MAX_PLOT_ROWS * PLOT_SIZE

# Planner links
PLANNER_URL = "https://palia-garden-planner.vercel.app/"
LAYOUT_QUERY_PARAM = "layout"
