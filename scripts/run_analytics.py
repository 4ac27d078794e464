#!/usr/bin/env python3
"""
Progress Analytics Script

Run the analytics engine over an exported day log and print the result.

The log file is a JSON object mapping ISO dates to day entries, the same
shape the tracking app stores:

    {
        "2024-01-01": {"status": 8},
        "2024-01-02": {"status": 5, "subjects": [{"subject": "Math", "topics": ["Algebra"], "hours": 6}]}
    }

Usage:
    # Last 7 days ending on a given day, productivity criterion
    python scripts/run_analytics.py --log days.json --preset lastweek --today 2024-01-10

    # Explicit range, hours criterion with an 8h daily cap
    python scripts/run_analytics.py --log days.json --start 2024-01-01 --end 2024-01-31 \\
        --criterion hours --max-hours 8

    # Full report as JSON
    python scripts/run_analytics.py --log days.json --preset lastmonth --today 2024-01-31 --format json

    # List available presets
    python scripts/run_analytics.py presets

Environment Variables (set in .env or environment):
    Optional:
    - PRODUCTIVITY_HIGH_THRESHOLD, HOURS_HIGH_RATIO, ...: Bucket thresholds
    - DEBUG: Enable verbose logging
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

# Add backend to path for imports (must be before nitya.* imports)
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

from dotenv import load_dotenv

# Load environment variables from project root .env
project_root = Path(__file__).parent.parent
if (project_root / ".env").exists():
    load_dotenv(project_root / ".env")

# App imports (after sys.path setup and env loading)
from nitya.config import settings
from nitya.models.analytics import AnalyticsReport, DateRange
from nitya.services.analytics import AnalyticsService, list_presets

logger = logging.getLogger("run_analytics")


def setup_logging(debug: bool = False) -> None:
    """Configure logging based on debug flag."""
    level = logging.DEBUG if debug else getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )


def load_log(path: Path) -> dict[str, Any]:
    """Load a day log export from a JSON file."""
    with open(path) as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a JSON object keyed by ISO date")
    return data


def print_summary(report: AnalyticsReport) -> None:
    """Print a human-readable report."""
    summary = report.summary
    rng = report.date_range

    print(f"\n📅 {rng.label}: {rng.start_date} → {rng.end_date}")
    print(f"   Criterion: {report.criterion.type}")
    print(
        f"   Days with data: {summary.days_with_data}/{summary.total_days} "
        f"({summary.completion_rate}% completion)"
    )
    print(f"   Average score: {summary.average_score} (total {summary.total_score})")
    print(f"   Hours: {summary.total_hours} total, {summary.average_hours_per_day}/day")
    print(
        f"   Productivity: 🟢 {summary.high_productivity_days}  "
        f"🟡 {summary.medium_productivity_days}  🔴 {summary.low_productivity_days}"
    )
    print(
        f"   Hours:        🟢 {summary.high_hours_days}  "
        f"🟡 {summary.medium_hours_days}  🔴 {summary.low_hours_days}"
    )
    if summary.best_day:
        print(f"   Best day: {summary.best_day.date} ({summary.best_day.day_name})")
    if summary.worst_day:
        print(f"   Worst day: {summary.worst_day.date} ({summary.worst_day.day_name})")

    streaks = report.streak_report
    if streaks.longest:
        print(
            f"\n🔥 Longest streak: {streaks.longest.length} days "
            f"({streaks.longest.start_date} → {streaks.longest.end_date})"
        )
    print(f"   Current streak: {streaks.current_streak} days")
    if streaks.next_milestone:
        print(f"   Next milestone: {streaks.next_milestone} days")

    if report.subject_stats:
        print("\n📚 Subjects:")
        for subject in report.subject_stats:
            print(
                f"   {subject.name}: {subject.total_hours}h over {subject.total_days} days, "
                f"avg score {subject.average_score}"
            )
            for topic in subject.topics:
                print(f"      - {topic.name}: {topic.total_hours}h, {topic.total_days} days")


def run(args: argparse.Namespace) -> int:
    """Build and print the report for parsed arguments."""
    try:
        log = load_log(Path(args.log))
    except (OSError, ValueError) as e:
        logger.error(f"Could not read log file: {e}")
        return 1

    criterion: dict[str, Any] = {"type": args.criterion}
    if args.max_hours is not None:
        criterion["maxHours"] = args.max_hours
    service = AnalyticsService(criterion)

    if args.start and args.end:
        report = service.build_report(
            log, DateRange(start_date=args.start, end_date=args.end)
        )
    elif args.today:
        report = service.build_report_for_preset(log, args.preset, args.today)
    else:
        logger.error("Provide either --today (with an optional --preset) or --start/--end")
        return 2

    if args.format == "json":
        print(report.model_dump_json(indent=2))
    else:
        print_summary(report)
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Compute progress analytics for a day log export",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("command", nargs="?", choices=["report", "presets"], default="report")
    parser.add_argument("--log", help="JSON file mapping ISO date to day entry")
    parser.add_argument(
        "--preset",
        help=f"Range preset id (see 'presets', default: {settings.DEFAULT_PRESET})",
    )
    parser.add_argument("--today", help="Reference date for presets (YYYY-MM-DD)")
    parser.add_argument("--start", help="Range start (YYYY-MM-DD)")
    parser.add_argument("--end", help="Range end, inclusive (YYYY-MM-DD)")
    parser.add_argument(
        "--criterion", choices=["productivity", "hours"], default="productivity"
    )
    parser.add_argument("--max-hours", type=int, choices=[8, 14, 18], default=None)
    parser.add_argument("--format", choices=["summary", "json"], default="summary")
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    args = parser.parse_args()

    setup_logging(args.debug or settings.DEBUG)

    if args.command == "presets":
        for preset in list_presets():
            span = f"{preset.days} days" if preset.days else f"{preset.months} months"
            print(f"  {preset.id:<12} {preset.label:<16} {span}")
        return 0

    if not args.log:
        parser.error("--log is required")
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
