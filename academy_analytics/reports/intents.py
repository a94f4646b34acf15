"""
Keyword intent classification for free-text analytics questions.

Intents are checked in a fixed order and the first match wins. Prediction of a named
field comes before the generic trend intent, so "predict the enrollment trend" is a
forecast, not a growth report.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from academy_analytics.config import DEFAULT_HORIZON, MAX_HORIZON
from academy_analytics.data.schemas import Field


class IntentType(str, Enum):
    PREDICT = "predict"
    GROWTH = "growth"
    ANOMALY = "anomaly"
    SEASONAL = "seasonal"
    CORRELATION = "correlation"
    SUMMARY = "summary"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Intent:
    kind: IntentType
    field: Optional[Field] = None
    horizon: int = DEFAULT_HORIZON


PREDICT_KEYWORDS = ["predict", "forecast", "project", "future", "next", "expect", "estimate"]

# Checked in order: students, revenue, placements, courses
FIELD_KEYWORDS = [
    (Field.TOTAL_STUDENTS, ["student", "enrol", "enroll", "admission"]),
    (Field.TOTAL_PAID, ["revenue", "income", "fee", "paid", "payment", "collection"]),
    (Field.OFFERED, ["placement", "placed", "offer", "job"]),
    (Field.JAVA_FS, ["java"]),
    (Field.PYTHON_FS, ["python"]),
]

INTENT_KEYWORDS = [
    (IntentType.GROWTH, ["growth", "trend", "grow", "increase", "decline"]),
    (IntentType.ANOMALY, ["anomal", "outlier", "unusual", "spike", "abnormal"]),
    (IntentType.SEASONAL, ["season", "monthly pattern", "peak month", "busiest", "best month"]),
    (IntentType.CORRELATION, ["correlat", "relationship", "related", "relation"]),
    (IntentType.SUMMARY, ["summary", "overview", "total", "kpi", "stats", "report"]),
]

_HORIZON_RE = re.compile(r"(?<![\d.])(\d{1,2})(?![\d.])")


def _contains_any(text: str, keywords: list[str]) -> bool:
    return any(k in text for k in keywords)


def extract_field(text: str) -> Optional[Field]:
    for field, keywords in FIELD_KEYWORDS:
        if _contains_any(text, keywords):
            return field
    return None


def extract_horizon(text: str, default: int = DEFAULT_HORIZON) -> int:
    """First standalone 1-2 digit number in 1..MAX_HORIZON; years like 2024 never match."""
    for match in _HORIZON_RE.finditer(text):
        months = int(match.group(1))
        if 1 <= months <= MAX_HORIZON:
            return months
    return default


def classify(text: str) -> Intent:
    q = text.lower()
    field = extract_field(q)
    horizon = extract_horizon(q)

    if field is not None and _contains_any(q, PREDICT_KEYWORDS):
        return Intent(IntentType.PREDICT, field, horizon)

    for kind, keywords in INTENT_KEYWORDS:
        if _contains_any(q, keywords):
            return Intent(kind, field, horizon)

    return Intent(IntentType.UNKNOWN, field, horizon)
