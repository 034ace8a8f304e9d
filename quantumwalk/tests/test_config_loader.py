import json
from pathlib import Path
from quantumwalk.io import load_config, build_from_config
from quantumwalk.core.duration import MAX_INTERVAL_MS

def test_build_from_json_config(tmp_path: Path):
    cfg = {
        "chain": {"max_interval": "1d", "start_timestamp": 1000, "max_steps": 500},
        "cache": {"enabled": True, "max_size": 100, "checkpoint_interval": 10},
        "matcher": {"default_window": 50},
    }
    cfg_path = tmp_path / "config.json"
    cfg_path.write_text(json.dumps(cfg), encoding="utf-8")

    generator, matcher = build_from_config(load_config(cfg_path))
    assert generator.config.max_interval == 86_400_000
    assert generator.config.start_timestamp == 1000
    assert generator.max_steps == 500
    assert generator.cache is not None
    assert generator.cache.max_size == 100
    assert generator.cache.checkpoint_interval == 10
    assert matcher.generator is generator
    assert matcher.default_window == 50
    assert generator.initial_step().timestamp == 1000

def test_build_from_yaml_config(tmp_path: Path):
    cfg_path = tmp_path / "config.yaml"
    cfg_path.write_text(
        "chain:\n"
        "  max_interval: 3600000\n"
        "cache:\n"
        "  enabled: false\n",
        encoding="utf-8",
    )
    generator, matcher = build_from_config(load_config(cfg_path))
    assert generator.config.max_interval == 3_600_000
    assert generator.cache is None
    assert matcher.default_window == 10_000

def test_defaults_from_empty_config(tmp_path: Path):
    cfg_path = tmp_path / "empty.json"
    cfg_path.write_text("", encoding="utf-8")
    generator, _ = build_from_config(load_config(cfg_path))
    assert generator.config.max_interval == MAX_INTERVAL_MS
    assert generator.config.start_timestamp == 0
    assert generator.cache is not None
