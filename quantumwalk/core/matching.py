from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Any, List, Optional, Sequence, Tuple
import logging
import math

import numpy as np

from quantumwalk.core.duration import MAX_INTERVAL_MS
from quantumwalk.core.errors import InvalidInput
from quantumwalk.core.generator import StepGenerator
from quantumwalk.core.similarity import MatchStatistics, calculate_similarity, calculate_statistics
from quantumwalk.core.step import QuantumStep, to_millis

logger = logging.getLogger(__name__)

DEFAULT_WINDOW = 10_000
INPUT_KINDS = ("intervals", "timestamps")


@dataclass(frozen=True)
class SequenceAlignment:
    offset: int
    length: int
    aligned_steps: Tuple[QuantumStep, ...]


@dataclass(frozen=True)
class MatchResult:
    similarity_score: float
    alignment: SequenceAlignment
    matched_steps: Tuple[QuantumStep, ...]
    statistics: MatchStatistics
    user_intervals: Tuple[float, ...]
    quantum_intervals: Tuple[int, ...]


@dataclass
class MatchRequest:
    values: Sequence[float]
    kind: str = "intervals"
    # (start, end) as ms or datetimes; None searches the first default_window steps
    search_range: Optional[Tuple[Any, Any]] = None
    window_size: Optional[int] = None

    def __post_init__(self) -> None:
        if self.kind not in INPUT_KINDS:
            raise InvalidInput(f"kind must be one of {INPUT_KINDS}, got {self.kind!r}")


def parse_user_input(request: MatchRequest) -> List[float]:
    values = list(request.values)
    if request.kind == "intervals":
        return values
    return [values[i] - values[i - 1] for i in range(1, len(values))]


def extract_intervals(steps: Sequence[QuantumStep]) -> List[int]:
    return [s.interval for s in steps]


def find_best_alignment(user_intervals: Sequence[float],
                        candidate_steps: Sequence[QuantumStep],
                        window_size: Optional[int] = None,
                        max_interval: int = MAX_INTERVAL_MS) -> SequenceAlignment:
    """
    Exhaustive sliding-window search over candidate_steps.

    Every offset in [0, len(candidates) - window] is scored with calculate_similarity;
    a strictly greater score is required to replace the best, so ties keep the
    earliest offset.
    """
    length = window_size or len(user_intervals)
    if length <= 0:
        raise InvalidInput("window length must be positive")
    if length > len(candidate_steps):
        raise InvalidInput(
            f"candidate window holds {len(candidate_steps)} steps, fewer than the {length} required"
        )

    candidates = np.asarray(extract_intervals(candidate_steps), dtype=float)
    best_score = -1.0
    best_offset = 0
    for offset in range(len(candidates) - length + 1):
        score = calculate_similarity(user_intervals, candidates[offset:offset + length], max_interval)
        if score > best_score:
            best_score = score
            best_offset = offset

    logger.debug("Best alignment at offset %d (score %.6f) over %d offsets",
                 best_offset, best_score, len(candidates) - length + 1)
    return SequenceAlignment(
        offset=best_offset,
        length=length,
        aligned_steps=tuple(candidate_steps[best_offset:best_offset + length]),
    )


class SequenceMatcher:
    def __init__(self, generator: Optional[StepGenerator] = None, default_window: int = DEFAULT_WINDOW) -> None:
        self.generator = generator or StepGenerator()
        self.default_window = default_window

    def candidate_steps(self, request: MatchRequest) -> List[QuantumStep]:
        if request.search_range is not None:
            start, end = request.search_range
            return self.generator.steps_in_range(start, end)
        origin = self.generator.initial_step()
        return self.generator.steps_forward(origin, self.default_window)

    def match(self, request: MatchRequest) -> MatchResult:
        user_intervals = parse_user_input(request)
        if not user_intervals:
            raise InvalidInput("No intervals to match")

        candidates = self.candidate_steps(request)
        if len(candidates) < len(user_intervals):
            raise InvalidInput(
                f"Search range too small for sequence length ({len(candidates)} steps for "
                f"{len(user_intervals)} intervals). Please expand the date range."
            )

        max_interval = self.generator.config.max_interval
        alignment = find_best_alignment(user_intervals, candidates, request.window_size, max_interval)
        quantum_intervals = extract_intervals(alignment.aligned_steps)

        # Recomputed on the winning window so the result is self-consistent
        similarity = calculate_similarity(user_intervals, quantum_intervals, max_interval)
        statistics = calculate_statistics(user_intervals, quantum_intervals)
        logger.info("Matched %d intervals at offset %d with similarity %.4f",
                    len(user_intervals), alignment.offset, similarity)

        return MatchResult(
            similarity_score=similarity,
            alignment=alignment,
            matched_steps=alignment.aligned_steps,
            statistics=statistics,
            user_intervals=tuple(user_intervals),
            quantum_intervals=tuple(quantum_intervals),
        )


def match_sequence(request: MatchRequest, generator: Optional[StepGenerator] = None) -> MatchResult:
    return SequenceMatcher(generator).match(request)


def parse_timestamp_string(text: str) -> List[int]:
    """
    Comma-separated Unix timestamps (seconds if < 1e12, else ms) or ISO-8601 strings.
    Entries that parse as neither are skipped.
    """
    timestamps: List[int] = []
    for part in (text or "").split(","):
        part = part.strip()
        if not part:
            continue
        try:
            num = float(part)
        except ValueError:
            num = None
        if num is not None and math.isfinite(num):
            timestamps.append(int(num * 1000) if num < 1e12 else int(num))
            continue
        try:
            dt = datetime.fromisoformat(part.replace("Z", "+00:00"))
        except ValueError:
            continue
        timestamps.append(to_millis(dt))
    return timestamps
