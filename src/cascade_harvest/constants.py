from __future__ import annotations

# =============================================================================
# URL BASES
# =============================================================================
BASE_URL = "https://www.polovniautomobili.com"

# =============================================================================
# TIMEOUTS - NAVIGATION (milliseconds)
# =============================================================================
TIMEOUT_PAGE_DEFAULT = 20_000          # 20s - general page operations
TIMEOUT_NAVIGATION = 30_000            # 30s - goto

# =============================================================================
# TIMEOUTS - FIXED WAITS (milliseconds)
# Only where no completion signal exists
# =============================================================================
WAIT_LONG = 1_000                      # 1s - page stabilization after load
WAIT_SETTLE_DEFAULT = 2_000            # 2s - dependent list repopulation
WAIT_QUIET_WINDOW = 500                # 500ms - no mutations => update finished
TIMEOUT_SETTLE_MAX = 10_000            # 10s - quiescence settle upper bound

# =============================================================================
# SELECTORS
# =============================================================================
BRAND_SELECTOR = "#brand"
BRAND_OPTION_SELECTOR = "#brand option"
MODEL_SELECTOR = "#model"
MODEL_OPTION_SELECTOR = "#model option"
CHASSIS_SELECTOR = "#chassis"
CHASSIS_OPTION_SELECTOR = "#chassis option"
REGION_SELECTOR = "#region"
REGION_OPTION_SELECTOR = "#region option"

# =============================================================================
# OUTPUT FILES
# =============================================================================
CARS_FILE = "cars.json"
CHASSIS_FILE = "chassis.json"
REGIONS_FILE = "regions.json"

# =============================================================================
# PAGE BINDINGS
# =============================================================================
# Name of the function exposed to the page; MutationObserver callbacks call it
MUTATION_BINDING = "__harvestMutation"
# Page-global registry of live observers, keyed by subscription id
OBSERVER_REGISTRY = "__harvestObservers"

# =============================================================================
# PLAYWRIGHT CONFIGURATION
# =============================================================================
BROWSER_CHANNELS = ["chrome", "msedge"]

CHROME_PATHS = [
    "/usr/bin/google-chrome",
    "/usr/bin/chromium",
    r"C:\Program Files\Google\Chrome\Application\chrome.exe",
]
EDGE_PATHS = [
    "/usr/bin/microsoft-edge",
    r"C:\Program Files (x86)\Microsoft\Edge\Application\msedge.exe",
]
