"""Workout log report — print workout logs, workout details and history.

Usage:
    python -m log_viewer.report log <workout_log_id> [--client-id ID] [--json]
    python -m log_viewer.report details <assignment_id> [--json]
    python -m log_viewer.report history <client_id> [--limit N] [--weekly]
"""

from __future__ import annotations

import argparse
import logging
import sys

import pandas as pd

from coach_store import CoachStoreClient, StoreConfigError
from workout_engine.formatting.durations import format_number
from workout_engine.history import history_totals, weekly_volume
from workout_engine.models.view import TemplateView, WorkoutView
from workout_engine.serialization import to_view_json

from log_viewer.config import HISTORY_LIMIT, LOG_LEVEL, SUPABASE_KEY, SUPABASE_URL
from log_viewer.loader import WorkoutLogLoader

logger = logging.getLogger(__name__)


def render_workout_text(view: WorkoutView) -> str:
    """Plain-text rendering of a workout-log page."""
    totals = view.totals
    lines = [view.workout_name]
    if view.completed_at is not None:
        lines.append(f"Completed {view.completed_at:%a %d %b %Y %H:%M}")
    if totals.duration_minutes > 0:
        lines.append(f"Duration: {totals.duration_minutes} minutes")
    lines.append(
        f"{totals.total_sets} sets | {totals.total_reps} reps | "
        f"{format_number(totals.total_weight_volume)} kg | "
        f"{totals.unique_exercises} exercises"
    )
    for block in view.blocks:
        lines.append("")
        header = block.block_label
        if block.has_sets:
            header += (
                f"  ({block.totals.total_sets} sets, "
                f"{format_number(block.totals.total_weight_volume)} kg)"
            )
        lines.append(header)
        if block.exercise_groups:
            for group in block.exercise_groups:
                lines.append(f"  {group.exercise_name}")
                lines.extend(f"    {line.text}" for line in group.lines)
        else:
            lines.extend(f"  {line.text}" for line in block.display_lines)
    return "\n".join(lines)


def render_template_text(view: TemplateView) -> str:
    """Plain-text rendering of a workout-details page."""
    lines = [
        view.workout_name,
        f"{view.total_exercises} exercises | {view.total_sets} sets",
    ]
    for block in view.blocks:
        lines.append("")
        lines.append(block.block_label)
        if block.parameters:
            lines.append("  " + " • ".join(f"{f.label}: {f.value}" for f in block.parameters))
        if block.notes:
            lines.append(f"  Notes: {block.notes}")
        for exercise in block.exercises:
            lines.append(f"  - {exercise.name}")
            for f in exercise.fields:
                lines.append(f"      {f.label}: {f.value}")
    return "\n".join(lines)


def render_history_text(frame: pd.DataFrame, weekly: bool = False) -> str:
    """Plain-text rendering of the workout history list."""
    totals = history_totals(frame)
    lines = [
        f"{totals.workouts} workouts | {totals.total_sets} sets | "
        f"{format_number(totals.total_weight_volume)} kg | "
        f"avg {totals.average_duration_minutes} min",
        "",
    ]
    if weekly:
        for week, row in weekly_volume(frame).iterrows():
            lines.append(
                f"Week ending {week:%Y-%m-%d}: {int(row['workouts'])} workouts, "
                f"{int(row['total_sets'])} sets, "
                f"{format_number(float(row['total_weight_volume']))} kg"
            )
        return "\n".join(lines)

    for _, row in frame.iterrows():
        date = row["date"]
        when = f"{date:%Y-%m-%d}" if not pd.isna(date) else "----------"
        duration = row["duration_minutes"]
        minutes = f"{int(duration)} min" if not pd.isna(duration) else "-"
        lines.append(
            f"{when}  {row['workout_name']}  {row['total_sets']} sets  "
            f"{format_number(float(row['total_weight_volume']))} kg  {minutes}"
        )
    return "\n".join(lines)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Coaching app workout log report")
    sub = parser.add_subparsers(dest="command", required=True)

    log_cmd = sub.add_parser("log", help="Show one logged workout session")
    log_cmd.add_argument("workout_log_id")
    log_cmd.add_argument("--client-id", default=None, help="Restrict to this client's rows")
    log_cmd.add_argument("--json", action="store_true", help="Print the view as JSON")

    details_cmd = sub.add_parser("details", help="Show the planned workout of an assignment")
    details_cmd.add_argument("assignment_id")
    details_cmd.add_argument("--json", action="store_true", help="Print the view as JSON")

    history_cmd = sub.add_parser("history", help="List a client's completed workouts")
    history_cmd.add_argument("client_id")
    history_cmd.add_argument("--limit", type=int, default=HISTORY_LIMIT)
    history_cmd.add_argument("--weekly", action="store_true", help="Summarize per week")
    return parser


def run(args: argparse.Namespace, loader: WorkoutLogLoader) -> int:
    """Execute a parsed command. Returns the process exit code."""
    if args.command == "log":
        view = loader.load_workout_log(args.workout_log_id, args.client_id)
        if view is None:
            print(f"Workout log {args.workout_log_id} not found", file=sys.stderr)
            return 1
        print(to_view_json(view) if args.json else render_workout_text(view))
    elif args.command == "details":
        view = loader.load_template_view(args.assignment_id)
        if view is None:
            print(f"No workout template for assignment {args.assignment_id}", file=sys.stderr)
            return 1
        print(to_view_json(view) if args.json else render_template_text(view))
    else:
        frame = loader.load_history(args.client_id, limit=args.limit)
        print(render_history_text(frame, weekly=args.weekly))
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        store = CoachStoreClient(SUPABASE_URL, SUPABASE_KEY)
    except StoreConfigError as exc:
        logger.error("%s", exc)
        return 2
    return run(args, WorkoutLogLoader(store))


if __name__ == "__main__":
    sys.exit(main())
