import json
import pytest
from pathlib import Path
from quantumwalk import __version__
from quantumwalk.cli import main

def test_version(capsys):
    assert main(["version"]) == 0
    assert capsys.readouterr().out.strip() == __version__

def test_steps_to_json(tmp_path: Path):
    out = tmp_path / "steps.json"
    assert main(["steps", "--count", "3", "--from-index", "2", "--out", str(out)]) == 0
    data = json.loads(out.read_text(encoding="utf-8"))
    assert [s["index"] for s in data["steps"]] == [2, 3, 4]

def test_match_with_config(tmp_path: Path):
    cfg = tmp_path / "cfg.json"
    cfg.write_text(json.dumps({"matcher": {"default_window": 100}}), encoding="utf-8")
    out = tmp_path / "report.json"
    code = main(["--config", str(cfg), "match", "--intervals", "3d 14h, 2d, 5h 30m", "--out", str(out)])
    assert code == 0
    report = json.loads(out.read_text(encoding="utf-8"))
    assert report["userIntervals"] == [309_600_000, 172_800_000, 19_800_000]
    assert 0.0 <= report["similarityScore"] <= 1.0

def test_match_range_too_small_is_invalid_input(capsys):
    code = main(["match", "--intervals", "1d, 2d", "--start", "0", "--end", "1000"])
    assert code == 2
    assert "error:" in capsys.readouterr().err

def test_unknown_log_level_is_a_usage_error(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--log-level", "LOUD", "version"])
    assert exc.value.code == 2
    assert "--log-level" in capsys.readouterr().err

def test_log_level_is_case_insensitive(capsys):
    assert main(["--log-level", "debug", "version"]) == 0

def test_missing_config_reports_error(tmp_path: Path, capsys):
    code = main(["--config", str(tmp_path / "absent.json"), "steps", "--count", "1"])
    assert code == 1
    assert "error:" in capsys.readouterr().err

def test_malformed_config_reports_error(tmp_path: Path, capsys):
    cfg = tmp_path / "cfg.yaml"
    cfg.write_text("chain: [unclosed\n", encoding="utf-8")
    assert main(["--config", str(cfg), "steps", "--count", "1"]) == 1
    assert "invalid YAML" in capsys.readouterr().err
