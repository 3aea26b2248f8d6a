"""Constants for the Garden Tracker integration."""

DOMAIN = "garden_tracker"
STORAGE_VERSION = 1
STORAGE_KEY = f"{DOMAIN}_storage"
PLATFORMS: list[str] = [
    "binary_sensor",
    "sensor",
]

DEFAULT_NAME = "Garden Tracker"

# Options
CONF_RESET_HOUR = "reset_hour"
CONF_SEED_DEFAULT_LAYOUTS = "seed_default_layouts"
CONF_INITIAL_LAYOUT = "initial_layout"
DEFAULT_RESET_HOUR = 6

# Events
EVENT_LAYOUT_IMPORTED = f"{DOMAIN}_layout_imported"
EVENT_LAYOUT_REMOVED = f"{DOMAIN}_layout_removed"
EVENT_WATERING_RESET = f"{DOMAIN}_watering_reset"

# Layouts seeded when storage is empty
DEFAULT_LAYOUTS: list[dict[str, str]] = [
    {
        "id": "default_simple",
        "name": "Simple",
        "save_code": "v0.4_D-111-111-111_CR-TRTPWPTRT-TRT-PWP",
    },
    {
        "id": "default_orchard",
        "name": "Orchard",
        "save_code": (
            "v0.4_D-111-010_CR-AAABBBTTT-AAABBBTTT-AAABBBTTT"
            "-NNNCCoCrNNN-NNNCCoCrNNN-NNNCCoCrNNN"
        ),
    },
    {
        "id": "default_starter",
        "name": "Starter",
        "save_code": "v0.4_D-1_CR-T.ST.ST.S-PPP-R.QR.QR.Q",
    },
]
