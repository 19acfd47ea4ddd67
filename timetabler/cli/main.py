from __future__ import annotations

import json
import logging
import random
from pathlib import Path
from typing import Optional

import typer

from ..config import AppConfig, load_config
from ..data.loader import load_data
from ..errors import TimetablerError
from ..models.timetable import ScheduleResult
from ..render.csv_out import entries_csv, grid_csv, write_csv_blocks
from ..scheduler import generate_timetable
from ..solvers import solve_cpsat
from ..validate.checks import validate_all
from ..validate.report import format_validation_report, write_validation_report

SOLVERS = ("greedy", "cpsat")


def _setup_logging(project_root: Path) -> None:
    logs_dir = project_root / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[
            logging.FileHandler(logs_dir / "engine.log", encoding="utf-8"),
            logging.StreamHandler(),
        ],
    )


def build_schedule(
    project_root: Path,
    *,
    seed: int | None = None,
    solver: str = "greedy",
    max_attempts: int | None = None,
    enforce_daily_limit: bool | None = None,
    config: AppConfig | None = None,
) -> tuple[ScheduleResult, list]:
    """Load inputs and config under project_root and run one solver.

    Explicit arguments win over configs/scheduler.toml. Returns the result and
    the subject list it was built from.
    """
    if solver not in SOLVERS:
        raise TimetablerError(f"Unknown solver {solver!r}; choose one of {', '.join(SOLVERS)}")
    cfg = config or load_config(project_root)
    loaded = load_data(project_root)
    sched = cfg.scheduler
    daily = sched.enforce_daily_limit if enforce_daily_limit is None else enforce_daily_limit

    if solver == "cpsat":
        result = solve_cpsat(
            loaded.teachers,
            loaded.subjects,
            loaded.classrooms,
            config=cfg.solver,
            lunch_period=sched.lunch_period,
            enforce_daily_limit=daily,
        )
        return result, loaded.subjects

    run_seed = seed if seed is not None else sched.seed
    if run_seed is None:
        run_seed = random.SystemRandom().randrange(2**32)
    logging.getLogger(__name__).info(f"Greedy run with seed={run_seed}")
    result = generate_timetable(
        loaded.teachers,
        loaded.subjects,
        loaded.classrooms,
        rng=random.Random(run_seed),
        max_attempts=max_attempts if max_attempts is not None else (sched.max_attempts or None),
        lunch_period=sched.lunch_period,
        enforce_daily_limit=daily,
    )
    result.audit.insert(0, f"seed={run_seed}")
    return result, loaded.subjects


def run_pipeline(
    project_root: Path,
    *,
    log_level: int | None = None,
    seed: int | None = None,
    solver: str = "greedy",
    max_attempts: int | None = None,
    enforce_daily_limit: bool | None = None,
) -> tuple[str, str, str]:
    _setup_logging(project_root)
    if log_level is not None:
        logging.getLogger().setLevel(log_level)
    cfg = load_config(project_root)
    result, subjects = build_schedule(
        project_root,
        config=cfg,
        seed=seed,
        solver=solver,
        max_attempts=max_attempts,
        enforce_daily_limit=enforce_daily_limit,
    )
    tt = result.timetable
    lunch = cfg.scheduler.lunch_period

    report = validate_all(tt, subjects)
    report["outcomes"] = {
        o.subject: {
            "status": o.status.value,
            "hours_scheduled": o.hours_scheduled,
            "hours_required": o.hours_required,
            "shortfall": o.shortfall,
            "reason": o.reason,
        }
        for o in result.outcomes
    }

    outputs_dir = project_root / "outputs"
    write_validation_report(report, outputs_dir)
    grid = grid_csv(tt, lunch)
    write_csv_blocks(grid, entries_csv(tt), outputs_dir)
    json_dir = outputs_dir / "json"
    json_dir.mkdir(parents=True, exist_ok=True)
    schedule_json = [
        {
            "day": e.timeslot.day,
            "period": e.timeslot.period,
            "subject": e.subject.name,
            "teacher": e.teacher.name,
            "room": e.classroom.room_id,
        }
        for e in tt.entries()
    ]
    with (json_dir / "schedule.json").open("w", encoding="utf-8") as f:
        json.dump(schedule_json, f, indent=2)

    audit_text = "\n".join(["Subjects:"] + result.audit)
    with (outputs_dir / "audit.txt").open("w", encoding="utf-8") as f:
        f.write(audit_text)

    return grid, format_validation_report(report), audit_text


app = typer.Typer(add_completion=False, help="Automatic timetable generator")


def _run_or_exit(root: Optional[Path], **kwargs) -> tuple[str, str, str]:
    try:
        return run_pipeline(root or Path.cwd(), **kwargs)
    except TimetablerError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=1)


@app.command("generate")
def cli_generate(
    root: Optional[Path] = typer.Option(None, help="Project directory holding data/ and configs/"),
    seed: Optional[int] = typer.Option(None, help="Random seed (overrides config)"),
    solver: str = typer.Option("greedy", help="greedy or cpsat"),
    max_attempts: Optional[int] = typer.Option(None, min=0, help="Cap on triples inspected per hour (0 = no cap)"),
    daily_limit: Optional[bool] = typer.Option(
        None, "--daily-limit/--no-daily-limit", help="Enforce teacher max hours per day"
    ),
    log_level: str = typer.Option("INFO", help="Log level"),
) -> None:
    level = getattr(logging, log_level.upper(), logging.INFO)
    grid, validation, audit = _run_or_exit(
        root,
        log_level=level,
        seed=seed,
        solver=solver,
        max_attempts=max_attempts,
        enforce_daily_limit=daily_limit,
    )
    print(grid)
    print(validation)
    print(audit)


@app.command("validate")
def cli_validate(
    root: Optional[Path] = typer.Option(None, help="Project directory holding data/ and configs/"),
) -> None:
    _, validation, _ = _run_or_exit(root)
    print(validation)


@app.command("export-csv")
def cli_export_csv(
    root: Optional[Path] = typer.Option(None, help="Project directory holding data/ and configs/"),
) -> None:
    grid, _, _ = _run_or_exit(root)
    print(grid)


if __name__ == "__main__":  # pragma: no cover
    app()
