import os
from pathlib import Path

# =========================================================
# DATA
# =========================================================
RAW_PATH = Path(os.getenv(
    "CRASH_DATA_PATH",
    "data/Airplane_Crashes_and_Fatalities_Since_1908.csv",
))
DATE_FORMAT = "%m/%d/%Y"
REQUIRED_COLUMNS = ("Date", "Operator", "Fatalities", "Summary")

# =========================================================
# CHART GEOMETRY
# =========================================================
MARGIN = dict(top=20, right=30, bottom=180, left=60)
CHART_WIDTH = 960 - MARGIN["left"] - MARGIN["right"]
CHART_HEIGHT = 500 - MARGIN["top"] - MARGIN["bottom"]
BAND_PADDING = 0.1

# years marked on the aggregate view
ANNOTATED_START_YEAR = 1908
ANNOTATED_END_YEAR = 2009
YEAR_TICK_EVERY = 20
TOP_OPERATORS = 3

# =========================================================
# STYLING
# =========================================================
COLORS = {
    "bg": "#f9f4e8",
    "card": "#ffffff",
    "primary": "#d35400",
    "bar": "#4682b4",
    "text": "#333333",
    "muted": "#777777",
}

# =========================================================
# RUNTIME
# =========================================================
DEBUG = os.getenv("CRASH_DASHBOARD_DEBUG", "0") == "1"
LOG_LEVEL = os.getenv("CRASH_DASHBOARD_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
