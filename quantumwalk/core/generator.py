from __future__ import annotations
from typing import Any, List, Optional
import logging
import time

from quantumwalk.core.cache import StepCache
from quantumwalk.core.duration import hash_to_duration
from quantumwalk.core.errors import InvalidInput, ResourceExhausted
from quantumwalk.core.hasher import Hasher, hash_timestamp
from quantumwalk.core.step import QuantumConfig, QuantumStep, to_millis

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = QuantumConfig()
MAX_STEPS = 1_000_000


def _now_ms() -> int:
    return int(time.time() * 1000)


class StepGenerator:
    """
    Walks the hash chain: each step's interval is derived from the SHA-256 digest of
    the previous step's timestamp, so any step can be rebuilt from the origin.

    The optional cache only short-circuits recomputation; results are identical
    with or without it. A cache is bound to the first config that uses it and is
    bypassed for every other config, so sharing one between generators is safe.
    """

    def __init__(self,
                 config: Optional[QuantumConfig] = None,
                 hasher: Optional[Hasher] = None,
                 cache: Optional[StepCache] = None,
                 max_steps: int = MAX_STEPS) -> None:
        self.config = config or DEFAULT_CONFIG
        self.hasher = hasher
        self.cache = cache
        self.max_steps = max_steps

    def _cache_for(self, config: QuantumConfig) -> Optional[StepCache]:
        # A cache holds a single chain; any other config walks uncached
        if self.cache is not None and self.cache.bind(config):
            return self.cache
        return None

    def _check_ceiling(self, walked: int, what: str) -> None:
        if walked > self.max_steps:
            raise ResourceExhausted(
                f"{what} exceeded the maximum of {self.max_steps:,} steps; narrow the target"
            )

    def initial_step(self, config: Optional[QuantumConfig] = None) -> QuantumStep:
        cfg = config or self.config
        cache = self._cache_for(cfg)
        if cache is not None:
            cached = cache.get(0)
            if cached is not None and cached.timestamp == cfg.start_timestamp:
                return cached
        start = int(cfg.start_timestamp)
        step = QuantumStep(index=0, timestamp=start, interval=0, hash=hash_timestamp(start, self.hasher))
        if cache is not None:
            cache.set(step)
        return step

    def next_step(self, current: QuantumStep, config: Optional[QuantumConfig] = None) -> QuantumStep:
        cfg = config or self.config
        cache = self._cache_for(cfg)
        if cache is not None:
            cached = cache.get(current.index + 1)
            if cached is not None and cached.timestamp - cached.interval == current.timestamp:
                return cached

        digest = hash_timestamp(current.timestamp, self.hasher)
        interval = hash_to_duration(digest, cfg.max_interval)
        step = QuantumStep(
            index=current.index + 1,
            timestamp=current.timestamp + interval,
            interval=interval,
            hash=digest,
        )
        if cache is not None:
            cache.set(step)
        return step

    def steps_forward(self, start: QuantumStep, count: int, config: Optional[QuantumConfig] = None) -> List[QuantumStep]:
        steps: List[QuantumStep] = []
        current = start
        for _ in range(max(0, int(count))):
            current = self.next_step(current, config)
            steps.append(current)
        logger.debug("Generated %d steps forward from index %d", len(steps), start.index)
        return steps

    def steps_until(self, start: QuantumStep, target_timestamp: Any, config: Optional[QuantumConfig] = None) -> List[QuantumStep]:
        target = to_millis(target_timestamp)
        steps: List[QuantumStep] = []
        current = start
        while current.timestamp < target:
            current = self.next_step(current, config)
            steps.append(current)
            self._check_ceiling(len(steps), "steps_until")
        return steps

    def find_nearest(self, target_timestamp: Any, config: Optional[QuantumConfig] = None) -> QuantumStep:
        """
        Linear walk from the origin to the step closest to target_timestamp.
        On an exact tie between the last two candidates the earlier step wins.
        """
        target = to_millis(target_timestamp)
        current = self.initial_step(config)
        walked = 0
        while current.timestamp < target:
            nxt = self.next_step(current, config)
            walked += 1
            self._check_ceiling(walked, "find_nearest")
            if nxt.timestamp > target:
                if abs(target - current.timestamp) <= abs(nxt.timestamp - target):
                    return current
                return nxt
            current = nxt
        return current

    def steps_in_range(self, start: Any, end: Any, config: Optional[QuantumConfig] = None) -> List[QuantumStep]:
        start_ts = to_millis(start)
        end_ts = to_millis(end)
        first = self.find_nearest(start_ts, config)
        if first.timestamp < start_ts:
            first = self.next_step(first, config)

        steps: List[QuantumStep] = [first] if first.timestamp <= end_ts else []
        current = first
        while current.timestamp < end_ts:
            current = self.next_step(current, config)
            if current.timestamp <= end_ts:
                steps.append(current)
            self._check_ceiling(len(steps), "steps_in_range")
        logger.debug("Range [%d, %d] holds %d steps", start_ts, end_ts, len(steps))
        return steps

    def step_at(self, index: int) -> QuantumStep:
        """Step by index, starting from the cache or its nearest checkpoint when possible."""
        if index < 0:
            raise InvalidInput(f"step index must be non-negative, got {index}")
        cache = self._cache_for(self.config)
        checkpoint = None
        if cache is not None:
            hit = cache.get(index)
            if hit is not None and hit.index == index:
                return hit
            checkpoint = cache.get_nearest_checkpoint(index)

        current = checkpoint if checkpoint is not None and checkpoint.index <= index else self.initial_step()
        self._check_ceiling(index - current.index, "step_at")
        logger.debug("Rebuilding step %d from index %d", index, current.index)
        while current.index < index:
            current = self.next_step(current)
        return current

    def previous_steps(self, target: QuantumStep, count: int) -> List[QuantumStep]:
        """The `count` steps preceding target, most recent first."""
        if target.index == 0 or count <= 0:
            return []
        start_index = max(0, target.index - count)
        first = self.step_at(start_index)
        steps = [first] + self.steps_forward(first, target.index - start_index - 1)
        steps.reverse()
        return steps

    def current_step(self, now: Any = None) -> QuantumStep:
        return self.find_nearest(_now_ms() if now is None else now)

    def upcoming_step(self, now: Any = None) -> QuantumStep:
        """First step strictly after now."""
        target = _now_ms() if now is None else to_millis(now)
        current = self.initial_step()
        walked = 0
        while current.timestamp <= target:
            current = self.next_step(current)
            walked += 1
            self._check_ceiling(walked, "upcoming_step")
        return current
