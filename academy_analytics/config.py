"""
Academy Analytics — Configuration: column catalog, month tables, model defaults.
"""
import os
from pathlib import Path

# ---------------------------------------------------------------------------
# Optional startup workbook (ACADEMY_WORKBOOK)
# ---------------------------------------------------------------------------
_workbook = os.environ.get("ACADEMY_WORKBOOK")
STARTUP_WORKBOOK = Path(_workbook) if _workbook else None

MAX_UPLOAD_BYTES = int(float(os.environ.get("ACADEMY_MAX_UPLOAD_MB", "20")) * 1024 * 1024)

WORKBOOK_EXTENSIONS = (".xlsx", ".xlsm")
CSV_EXTENSIONS = (".csv",)

# ---------------------------------------------------------------------------
# Recognized columns: field name → accepted header texts (exact match)
# ---------------------------------------------------------------------------
RECOGNIZED_COLUMNS = [
    ("year_month", ("Year-Month",)),
    ("year", ("Year",)),
    ("month", ("Month",)),
    ("total_students", ("Total Students",)),
    ("male", ("Male",)),
    ("female", ("Female",)),
    ("interested", ("Interested",)),
    ("offered", ("Offered",)),
    ("dropped", ("Dropped",)),
    ("java_fs", ("Java Full Stack",)),
    ("python_fs", ("Python Full Stack",)),
    ("total_paid", ("Total Paid (₹)", "Total Paid")),
    ("total_pending", ("Total Pending (₹)", "Total Pending")),
]

REQUIRED_HEADER = "Total Students"
HEADER_SCAN_ROWS = 12

# First-cell markers (upper-cased) for the trailing annual summary block
STOP_MARKERS = {"TOTAL", "", "NAN"}
STOP_PREFIXES = ("ANNUAL",)
SKIP_MARKERS = {"YEAR"}

COUNT_FIELDS = ["male", "female", "interested", "offered", "dropped", "java_fs", "python_fs"]
AMOUNT_FIELDS = ["total_paid", "total_pending"]

# ---------------------------------------------------------------------------
# Canonical months
# ---------------------------------------------------------------------------
MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]
MONTH_INDEX = {m: i for i, m in enumerate(MONTHS)}

FULL_MONTH_NAMES = {
    "january": "Jan",
    "february": "Feb",
    "march": "Mar",
    "april": "Apr",
    "may": "May",
    "june": "Jun",
    "july": "Jul",
    "august": "Aug",
    "september": "Sep",
    "october": "Oct",
    "november": "Nov",
    "december": "Dec",
}

# ---------------------------------------------------------------------------
# Model defaults
# ---------------------------------------------------------------------------
DEFAULT_HORIZON = 3
MAX_HORIZON = 24
DEFAULT_ALPHA = 0.3
DEFAULT_WINDOW = 3
DEFAULT_Z_THRESHOLD = 2.0

# Below this |determinant| the quadratic normal equations are treated as singular
SINGULAR_EPSILON = 1e-9

MIN_POINTS = {
    "linear": 3,
    "polynomial": 4,
    "exponential": 2,
    "growth": 2,
    "seasonal": 12,
    "correlation": 2,
    "anomalies": 3,
}

# ---------------------------------------------------------------------------
# Growth trend bands (average period-over-period growth, %)
# ---------------------------------------------------------------------------
STRONG_GROWTH_PCT = 5.0
SHARP_DECLINE_PCT = -5.0

CORRELATION_STRENGTH = [
    (0.7, "strong"),
    (0.4, "moderate"),
]
