from __future__ import annotations
from typing import Any, Dict, List, Optional

from quantumwalk.core.duration import format_duration
from quantumwalk.core.matching import MatchResult
from quantumwalk.core.step import QuantumStep
from quantumwalk.io.json_io import match_result_to_dict


def build_interval_rows(result: MatchResult) -> List[Dict[str, Any]]:
    """
    One row per compared interval: user value, chain value, absolute and relative
    difference, and the chain step it was aligned with.
    """
    rows: List[Dict[str, Any]] = []
    for i, (u, q) in enumerate(zip(result.user_intervals, result.quantum_intervals)):
        diff = abs(float(u) - float(q))
        denom = max(abs(float(u)), abs(float(q)))
        step = result.matched_steps[i]
        rows.append(
            {
                "index": i,
                "user": u,
                "quantum": q,
                "diff": diff,
                "diff_pct": (diff / denom * 100.0) if denom else 0.0,
                "step_index": step.index,
                "step_timestamp": step.timestamp,
                "step_iso": step.iso_string,
            }
        )
    return rows


def _trim(s: str, width: int) -> str:
    return s if len(s) <= width else (s[: max(0, width - 1)] + "…")


def format_interval_table(rows: List[Dict[str, Any]], *, max_rows: int = 50) -> str:
    """
    Columns:
      IDX | USER | QUANTUM | DIFF | DIFF% | STEP | STEP.time
    """
    widths = {"idx": 4, "user": 16, "quantum": 16, "diff": 16, "pct": 7, "step": 8, "iso": 24}
    header = (
        f"{'IDX':>{widths['idx']}} | {'USER':<{widths['user']}} | {'QUANTUM':<{widths['quantum']}} | "
        f"{'DIFF':<{widths['diff']}} | {'DIFF%':>{widths['pct']}} | {'STEP':>{widths['step']}} | "
        f"{'STEP.time':<{widths['iso']}}"
    )
    out_lines = [header, "-" * len(header)]
    for r in rows[:max_rows]:
        out_lines.append(
            f"{r['index']:>{widths['idx']}} | "
            f"{_trim(format_duration(int(r['user'])), widths['user']):<{widths['user']}} | "
            f"{_trim(format_duration(int(r['quantum'])), widths['quantum']):<{widths['quantum']}} | "
            f"{_trim(format_duration(int(r['diff'])), widths['diff']):<{widths['diff']}} | "
            f"{r['diff_pct']:>{widths['pct']}.2f} | {r['step_index']:>{widths['step']}} | "
            f"{r['step_iso']:<{widths['iso']}}"
        )
    if len(rows) > max_rows:
        out_lines.append(f"... ({len(rows) - max_rows} more rows)")
    return "\n".join(out_lines)


def format_steps_table(steps: List[QuantumStep], *, max_rows: int = 50) -> str:
    header = f"{'IDX':>8} | {'TIMESTAMP':>16} | {'ISO':<24} | {'INTERVAL':<16} | HASH"
    out_lines = [header, "-" * len(header)]
    for s in steps[:max_rows]:
        out_lines.append(
            f"{s.index:>8} | {s.timestamp:>16} | {s.iso_string:<24} | "
            f"{format_duration(s.interval):<16} | {s.hash[:16]}…"
        )
    if len(steps) > max_rows:
        out_lines.append(f"... ({len(steps) - max_rows} more rows)")
    return "\n".join(out_lines)


def build_json_report(result: MatchResult) -> Dict[str, Any]:
    report = match_result_to_dict(result)
    report["rows"] = build_interval_rows(result)
    return report


def format_text_report(result: MatchResult, *, max_rows: int = 50, title: Optional[str] = None) -> str:
    st = result.statistics
    lines: List[str] = []
    lines.append("=" * 80)
    lines.append(title or "QuantumWalk Match Report")
    lines.append("=" * 80)
    lines.append(f"Similarity: {result.similarity_score:.4f}")
    lines.append(f"Offset:     {result.alignment.offset} (length {result.alignment.length})")
    lines.append("")
    lines.append("Statistics:")
    lines.append(f"  · mean_error={st.mean_error:.2f} ms ({format_duration(int(st.mean_error))})")
    lines.append(f"  · std_deviation={st.std_deviation:.2f} ms")
    lines.append(f"  · rmse={st.rmse:.2f} ms")
    lines.append(f"  · max_error={st.max_error:.2f} ms, min_error={st.min_error:.2f} ms")
    lines.append(f"  · correlation={st.correlation:.4f}")
    lines.append("")
    lines.append("Intervals:")
    lines.append(format_interval_table(build_interval_rows(result), max_rows=max_rows))
    lines.append("=" * 80)
    return "\n".join(lines)
