from __future__ import annotations
import json
from typing import Any, Dict, List
from pathlib import Path
from quantumwalk.core.matching import MatchResult
from quantumwalk.core.step import QuantumStep

def steps_to_dict(steps: List[QuantumStep]) -> Dict[str, Any]:
    return {
        "schema_version": "1",
        "stepCount": len(steps),
        "steps": [s.to_dict() for s in steps],
    }

def match_result_to_dict(result: MatchResult) -> Dict[str, Any]:
    return {
        "schema_version": "1",
        "similarityScore": result.similarity_score,
        "alignment": {"offset": result.alignment.offset, "length": result.alignment.length},
        "statistics": result.statistics.to_dict(),
        "userIntervals": list(result.user_intervals),
        "quantumIntervals": list(result.quantum_intervals),
        "matchedSteps": [s.to_dict() for s in result.matched_steps],
    }

def save_steps(path: str | Path, steps: List[QuantumStep]) -> None:
    save_json(path, steps_to_dict(steps))

def load_steps(path: str | Path) -> List[QuantumStep]:
    p = Path(path)
    with p.open("r", encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict) and "steps" in data:
        items = data["steps"]
    elif isinstance(data, list):
        items = data
    else:
        raise ValueError("Unrecognized steps JSON format")
    return [QuantumStep.from_dict(item) for item in items]

def save_json(path: str | Path, obj: Dict[str, Any]) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", encoding="utf-8") as f:
        json.dump(obj, f, ensure_ascii=False, indent=2)
