from __future__ import annotations
from dataclasses import dataclass
from typing import Sequence, Tuple
import numpy as np

from quantumwalk.core.duration import MAX_INTERVAL_MS

RATIO_WEIGHT = 0.5
ERROR_WEIGHT = 0.3
CORRELATION_WEIGHT = 0.2


@dataclass(frozen=True)
class MatchStatistics:
    mean_error: float
    std_deviation: float
    correlation: float
    rmse: float
    max_error: float
    min_error: float

    def to_dict(self) -> dict:
        return {
            "meanError": self.mean_error,
            "stdDeviation": self.std_deviation,
            "correlation": self.correlation,
            "rmse": self.rmse,
            "maxError": self.max_error,
            "minError": self.min_error,
        }


def _paired(x: Sequence[float], y: Sequence[float]) -> Tuple[np.ndarray, np.ndarray]:
    n = min(len(x), len(y))
    return np.asarray(x[:n], dtype=float), np.asarray(y[:n], dtype=float)


def pearson_correlation(x: Sequence[float], y: Sequence[float]) -> float:
    xa, ya = _paired(x, y)
    if xa.size == 0:
        return 0.0
    dx = xa - xa.mean()
    dy = ya - ya.mean()
    denom = float(np.sqrt(np.sum(dx * dx) * np.sum(dy * dy)))
    if denom == 0.0:
        return 0.0
    return float(np.sum(dx * dy)) / denom


def calculate_statistics(user_intervals: Sequence[float], quantum_intervals: Sequence[float]) -> MatchStatistics:
    """
    Error statistics of |user - quantum| over the common prefix (population std/RMSE).
    Correlation is taken between the raw sequences, not the errors.
    """
    ua, qa = _paired(user_intervals, quantum_intervals)
    if ua.size == 0:
        return MatchStatistics(0.0, 0.0, 0.0, 0.0, 0.0, 0.0)
    errors = np.abs(ua - qa)
    return MatchStatistics(
        mean_error=float(np.mean(errors)),
        std_deviation=float(np.std(errors)),
        correlation=pearson_correlation(ua, qa),
        rmse=float(np.sqrt(np.mean(errors ** 2))),
        max_error=float(np.max(errors)),
        min_error=float(np.min(errors)),
    )


def calculate_similarity(user_intervals: Sequence[float],
                         quantum_intervals: Sequence[float],
                         max_interval: int = MAX_INTERVAL_MS) -> float:
    """
    Hybrid similarity in [0, 1]:

        0.5 * mean(min/max per pair)            (scale independent; 0/0 counts as 1)
      + 0.3 * max(0, 1 - MAE / max_interval)    (absolute accuracy)
      + 0.2 * (pearson + 1) / 2                 (shape)
    """
    ua, qa = _paired(user_intervals, quantum_intervals)
    n = ua.size
    if n == 0:
        return 0.0

    lo = np.minimum(ua, qa)
    hi = np.maximum(ua, qa)
    ratios = np.divide(lo, hi, out=np.ones(n, dtype=float), where=hi != 0)
    ratio_score = float(np.mean(ratios))

    mean_error = float(np.mean(np.abs(ua - qa)))
    error_score = max(0.0, 1.0 - mean_error / float(max_interval))

    corr_score = (pearson_correlation(ua, qa) + 1.0) / 2.0

    score = RATIO_WEIGHT * ratio_score + ERROR_WEIGHT * error_score + CORRELATION_WEIGHT * corr_score
    return max(0.0, min(1.0, score))
