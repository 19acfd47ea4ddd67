from __future__ import annotations

import json
from pathlib import Path
from typing import Dict


def write_validation_report(report: Dict[str, object], outputs_dir: Path) -> None:
    outputs_dir.mkdir(parents=True, exist_ok=True)
    with (outputs_dir / "validation.json").open("w", encoding="utf-8") as f:
        json.dump(report, f, indent=2)


def format_validation_report(report: Dict[str, object]) -> str:
    lines: list[str] = []
    lines.append(f"entry_count: {report.get('entry_count')}")
    lines.append(f"clash_count: {report.get('clash_count')}")
    for key in ("qualification_violations", "lab_violations"):
        lines.append(f"{key}: {len(report.get(key, []))}")
    over = report.get("over_quota", {})
    lines.append(f"over_quota: {len(over)} subjects")
    lines.append("unmet_weekly_hours:")
    unmet = report.get("unmet_weekly_hours", {})
    if isinstance(unmet, dict):
        for k, v in unmet.items():
            lines.append(f"  - {k}: {v}")
    return "\n".join(lines)
