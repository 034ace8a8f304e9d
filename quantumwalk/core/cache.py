from __future__ import annotations
from collections import OrderedDict
from typing import Dict, Optional
import logging
import threading
import time

from quantumwalk.core.step import QuantumConfig, QuantumStep, StepCacheEntry

logger = logging.getLogger(__name__)


class StepCache:
    """
    In-memory memo of computed steps plus periodic checkpoints.

    Eviction is by insertion order (oldest first); reads do not promote entries.
    Checkpoints are kept for every index that is a multiple of checkpoint_interval
    and survive entry eviction until clear().

    Steps are only comparable within one chain, so the cache binds to the first
    config it serves and refuses any other until cleared.
    """

    def __init__(self, max_size: int = 10_000, checkpoint_interval: int = 1_000) -> None:
        if max_size <= 0:
            raise ValueError("max_size must be positive")
        if checkpoint_interval <= 0:
            raise ValueError("checkpoint_interval must be positive")
        self.max_size = max_size
        self.checkpoint_interval = checkpoint_interval
        self._entries: "OrderedDict[int, StepCacheEntry]" = OrderedDict()
        self._checkpoints: Dict[int, QuantumStep] = {}
        self.config: Optional[QuantumConfig] = None
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._entries)

    def bind(self, config: QuantumConfig) -> bool:
        """Bind to config if unbound; True when the cache belongs to config."""
        with self._lock:
            if self.config is None:
                self.config = config
                return True
            return self.config == config

    def get(self, index: int) -> Optional[QuantumStep]:
        with self._lock:
            entry = self._entries.get(index)
        return entry.step if entry is not None else None

    def get_by_timestamp(self, timestamp: int) -> Optional[QuantumStep]:
        with self._lock:
            for entry in self._entries.values():
                if entry.step.timestamp == timestamp:
                    return entry.step
        return None

    def set(self, step: QuantumStep) -> None:
        entry = StepCacheEntry(step=step, cached_at=int(time.time() * 1000))
        with self._lock:
            if step.index in self._entries:
                self._entries[step.index] = entry
            else:
                if len(self._entries) >= self.max_size:
                    evicted, _ = self._entries.popitem(last=False)
                    logger.debug("Evicted step %d from cache", evicted)
                self._entries[step.index] = entry
            if step.index % self.checkpoint_interval == 0:
                self._checkpoints[step.index] = step

    def get_nearest_checkpoint(self, target_index: int) -> Optional[QuantumStep]:
        with self._lock:
            candidates = [i for i in self._checkpoints if i <= target_index]
            if not candidates:
                return None
            return self._checkpoints[max(candidates)]

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._checkpoints.clear()
            self.config = None

    def stats(self) -> Dict[str, int]:
        with self._lock:
            return {
                "size": len(self._entries),
                "max_size": self.max_size,
                "checkpoint_count": len(self._checkpoints),
            }
