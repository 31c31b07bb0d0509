"""
Command-line interface

Subcommands:
- run: simulate and print the desk recommendation summary
- list / show / delete: manage saved runs
"""

from typing import Optional
import argparse
import sys

from .config import configure_logging, get_settings
from .core.errors import DeskPlannerError
from .simulation import ProgressSnapshot, SimulationConfig, SimulationResult, coverage_table, run_sync
from .storage import RunStore

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def format_remaining(remaining_ms: Optional[float]) -> str:
    """Human-readable time remaining for the progress line."""
    if remaining_ms is None or remaining_ms <= 0:
        return "Finishing up..."
    if remaining_ms < 1000:
        return "< 1s remaining"
    seconds = -(-remaining_ms // 1000)
    return f"~{int(seconds)}s remaining"


def print_progress(snapshot: ProgressSnapshot) -> None:
    percent = min(round(snapshot.fraction_complete * 100), 100)
    line = f"\r  {percent:3d}%  {format_remaining(snapshot.estimated_remaining_ms):<20}"
    sys.stderr.write(line)
    if snapshot.is_complete:
        sys.stderr.write("\n")
    sys.stderr.flush()


def print_summary(result: SimulationResult, percents: list[float]) -> None:
    print(f"{'Average daily occupancy':<32} {round(result.avg_daily_occupancy):>8}")
    print(f"{'Average peak desks':<32} {round(result.avg_peak):>8}")
    print(f"{'Recommended desks (95%)':<32} {result.p95:>8}")
    print(f"{'Max observed':<32} {result.max_observed:>8}")
    for percent, desks in coverage_table(result, percents):
        label = f"Recommended desks ({percent:g}%)"
        print(f"{label:<32} {desks:>8}  covers {percent:g}% of scenarios")


def _percent(value: str) -> float:
    p = float(value)
    if not 0 < p < 100:
        raise argparse.ArgumentTypeError("percentage must be between 0 and 100")
    return p


def build_argparser() -> argparse.ArgumentParser:
    defaults = get_settings().defaults

    ap = argparse.ArgumentParser(
        prog="desk-planner",
        description="Monte Carlo estimate of desks needed under a hybrid work policy"
    )
    ap.add_argument(
        "--log-level",
        default=None,
        type=str.upper,
        choices=LOG_LEVELS,
        help="Override the configured log level"
    )
    ap.add_argument("--store", default=None, help="Path of the saved-runs JSON file")
    sub = ap.add_subparsers(dest="command", required=True)

    run_p = sub.add_parser("run", help="Run a simulation")
    run_p.add_argument("--employees", type=int, default=defaults.employee_count, help="Number of employees")
    run_p.add_argument("--days", type=int, default=defaults.days_in_office, help="Scheduled office days per week (0-5)")
    run_p.add_argument("--absenteeism", type=float, default=defaults.absenteeism_percent, help="Absenteeism rate (%%)")
    run_p.add_argument("--trials", type=int, default=defaults.trial_count, help="Number of simulated weeks")
    run_p.add_argument("--chunk-size", type=int, default=None, help="Trials per batch")
    run_p.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")
    run_p.add_argument("--percentile", type=_percent, action="append", default=[], help="Extra coverage percentage (repeatable)")
    run_p.add_argument("--save", metavar="NAME", nargs="?", const="", default=None, help="Save the run, optionally named")
    run_p.add_argument("--quiet", action="store_true", help="Hide the progress line")

    sub.add_parser("list", help="List saved runs")

    show_p = sub.add_parser("show", help="Show a saved run")
    show_p.add_argument("timestamp")
    show_p.add_argument("--percentile", type=_percent, action="append", default=[], help="Extra coverage percentage (repeatable)")

    del_p = sub.add_parser("delete", help="Delete a saved run")
    del_p.add_argument("timestamp")

    return ap


def cmd_run(args, store: RunStore) -> int:
    config = SimulationConfig.from_percentage(
        employee_count=args.employees,
        absenteeism_percent=args.absenteeism,
        trial_count=args.trials,
        days_in_office=args.days
    )
    print(f"Simulating {config.trial_count} weeks for {config.employee_count} employees...")
    result = run_sync(
        config,
        on_progress=None if args.quiet else print_progress,
        chunk_size=args.chunk_size,
        seed=args.seed
    )
    print()
    print_summary(result, args.percentile)

    if args.save is not None:
        saved = store.save_result(config, result, name=args.save or None)
        print()
        print(f"Saved as {saved.name!r} ({saved.timestamp})")
    return 0


def cmd_list(args, store: RunStore) -> int:
    runs = store.list_runs()
    if not runs:
        print("No saved simulations found.")
        return 0
    for run in runs:
        print(f"{run.timestamp}  {run.name}")
    return 0


def cmd_show(args, store: RunStore) -> int:
    config, result = store.load_result(args.timestamp)
    print(
        f"{config.employee_count} employees, {config.days_in_office} days/week, "
        f"{config.absenteeism_percent:g}% absenteeism, {result.trial_count} trials"
    )
    print()
    print_summary(result, args.percentile)
    return 0


def cmd_delete(args, store: RunStore) -> int:
    if not store.delete(args.timestamp):
        print(f"No saved run at {args.timestamp}", file=sys.stderr)
        return 1
    print(f"Deleted {args.timestamp}")
    return 0


COMMANDS = {
    "run": cmd_run,
    "list": cmd_list,
    "show": cmd_show,
    "delete": cmd_delete
}


def main(argv: list[str] = None) -> int:
    """Main entry point."""
    args = build_argparser().parse_args(argv)
    settings = get_settings()
    try:
        configure_logging(args.log_level or settings.log_level)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    store = RunStore(path=args.store, settings=settings)
    try:
        return COMMANDS[args.command](args, store)
    except DeskPlannerError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
