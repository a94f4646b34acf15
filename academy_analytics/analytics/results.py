"""
Result types for forecasts and diagnostics.

"Not enough points" and "numerically degenerate" are distinct statuses, so neither is
confused with a computed zero.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Optional


class ResultStatus(str, Enum):
    OK = "ok"
    INSUFFICIENT_DATA = "insufficient_data"
    DEGENERATE = "degenerate"


@dataclass(frozen=True)
class ModelResult:
    """Output of one forecasting method."""
    model: str
    status: ResultStatus
    values: Optional[list] = None
    params: dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status == ResultStatus.OK

    def value_at(self, step: int):
        """Prediction for a future step, or None when the model produced nothing."""
        if not self.ok or step >= len(self.values):
            return None
        return self.values[step]

    @classmethod
    def insufficient(cls, model: str, needed: int, got: int) -> "ModelResult":
        return cls(model, ResultStatus.INSUFFICIENT_DATA, params={"min_points": needed, "points": got})

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class GrowthResult:
    status: ResultStatus
    rates: list[float] = field(default_factory=list)
    average: float = 0.0
    minimum: float = 0.0
    maximum: float = 0.0
    trend: str = "Insufficient Data"

    @property
    def ok(self) -> bool:
        return self.status == ResultStatus.OK

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class SeasonalResult:
    status: ResultStatus
    month_means: dict[str, float] = field(default_factory=dict)
    month_counts: dict[str, int] = field(default_factory=dict)
    peak_month: Optional[str] = None
    low_month: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == ResultStatus.OK

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class CorrelationResult:
    status: ResultStatus
    coefficient: float = 0.0
    strength: str = "none"
    direction: str = "none"

    @property
    def ok(self) -> bool:
        return self.status == ResultStatus.OK

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class Anomaly:
    year_month: str
    value: float
    z_score: float
    deviation_pct: float

    def to_dict(self) -> dict:
        return asdict(self)
