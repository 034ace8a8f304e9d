from __future__ import annotations
from typing import Any, Dict, Optional, Tuple
import json
from pathlib import Path

from quantumwalk.core.cache import StepCache
from quantumwalk.core.duration import MAX_INTERVAL_MS, parse_duration
from quantumwalk.core.generator import MAX_STEPS, StepGenerator
from quantumwalk.core.matching import DEFAULT_WINDOW, SequenceMatcher
from quantumwalk.core.step import QuantumConfig, to_millis

def load_config(path: str | Path) -> Dict[str, Any]:
    p = Path(path)
    with p.open("r", encoding="utf-8") as f:
        text = f.read()
    suffix = p.suffix.lower()
    if suffix in (".yaml", ".yml"):
        try:
            import yaml  # type: ignore
        except Exception as e:
            raise ImportError("PyYAML is required to load YAML config files. Install with `pip install pyyaml`.") from e
        try:
            return yaml.safe_load(text) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"invalid YAML in {p}: {e}") from e
    # default to JSON
    return json.loads(text or "{}")

def _as_millis(value: Any, default: int) -> int:
    # Durations may be given as ms or as "7d", "3d 12h", ...
    if value is None:
        return default
    if isinstance(value, str):
        return parse_duration(value)
    return int(value)

def _make_quantum_config(section: Dict[str, Any] | None) -> QuantumConfig:
    if not section:
        return QuantumConfig()
    return QuantumConfig(
        max_interval=_as_millis(section.get("max_interval"), MAX_INTERVAL_MS),
        start_timestamp=to_millis(section.get("start_timestamp", 0)),
    )

def _make_cache(section: Dict[str, Any] | None) -> Optional[StepCache]:
    if section is None:
        return StepCache()
    if not bool(section.get("enabled", True)):
        return None
    return StepCache(
        max_size=int(section.get("max_size", 10_000)),
        checkpoint_interval=int(section.get("checkpoint_interval", 1_000)),
    )

def build_from_config(cfg: Dict[str, Any]) -> Tuple[StepGenerator, SequenceMatcher]:
    chain = cfg.get("chain") or {}
    generator = StepGenerator(
        config=_make_quantum_config(chain),
        cache=_make_cache(cfg.get("cache")),
        max_steps=int(chain.get("max_steps", MAX_STEPS)),
    )
    matcher_cfg = cfg.get("matcher") or {}
    matcher = SequenceMatcher(
        generator=generator,
        default_window=int(matcher_cfg.get("default_window", DEFAULT_WINDOW)),
    )
    return generator, matcher
