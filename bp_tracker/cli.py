"""
Command-line front end for the readings API.

Usage:
    bp-tracker readings
    bp-tracker stats
    bp-tracker submit 120 80 70 125 82 72 118 78 68
    bp-tracker delete 42
"""

import argparse
import asyncio
import sys
from typing import List, Optional

from dotenv import load_dotenv

from bp_tracker.client.api_client import BPApiClient
from bp_tracker.client.errors import NetworkError
from bp_tracker.models.reading import READING_INPUT_FIELDS, Reading
from bp_tracker.models.stats import AveragePeriod, Stats
from bp_tracker.state.coordinator import ReadingCoordinator
from bp_tracker.trends import sort_by_timestamp
from bp_tracker.utils.config import get_settings, setup_logging
from bp_tracker.utils.validation import FormValidationError


def format_reading(reading: Reading) -> str:
    when = reading.timestamp.strftime("%Y-%m-%d %H:%M")
    return (
        f"#{reading.id:<6} {when}  {reading.systolic}/{reading.diastolic}  "
        f"pulse {reading.pulse} bpm  [{reading.classification}]"
    )


def format_stats(stats: Stats) -> List[str]:
    lines = []
    if stats.last_reading is not None:
        lines.append(f"Last reading: {format_reading(stats.last_reading)}")
    else:
        lines.append("Last reading: none")
    for period in AveragePeriod:
        average, count = stats.average_for(period)
        if average is None:
            lines.append(f"{period.value}: N/A ({count} readings)")
        else:
            lines.append(
                f"{period.value}: {average.systolic}/{average.diastolic} "
                f"pulse {average.pulse} bpm ({count} readings) [{average.classification}]"
            )
    return lines


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="bp-tracker", description="Blood pressure readings client")
    parser.add_argument("--base-url", default=None, help="API base URL (defaults to API_BASE_URL)")
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("readings", help="List readings, oldest first")
    sub.add_parser("stats", help="Show last reading and averages")
    submit = sub.add_parser("submit", help="Submit three consecutive measurements")
    submit.add_argument("values", nargs=len(READING_INPUT_FIELDS), metavar="N",
                        help="systolic diastolic pulse, three times")
    delete = sub.add_parser("delete", help="Delete a reading by id")
    delete.add_argument("reading_id", type=int)
    return parser


async def run(args: argparse.Namespace) -> int:
    async with BPApiClient(args.base_url) as client:
        coordinator = ReadingCoordinator(client)
        if args.command == "submit":
            fields = dict(zip(READING_INPUT_FIELDS, args.values))
            try:
                ok = await coordinator.submit_form(fields)
            except FormValidationError as exc:
                print(f"Error: {exc.message} ({', '.join(exc.fields)})", file=sys.stderr)
                return 1
            except NetworkError:
                print(f"Error: {coordinator.error_message}", file=sys.stderr)
                return 1
            print("Reading submitted.")
        elif args.command == "delete":
            ok = await coordinator.delete(args.reading_id)
            if ok:
                print(f"Deleted reading {args.reading_id}.")
        elif args.command == "readings":
            ok = await coordinator.refresh_readings()
            if ok:
                for reading in sort_by_timestamp(coordinator.readings):
                    print(format_reading(reading))
                if not coordinator.readings:
                    print("No readings recorded yet.")
        else:
            ok = await coordinator.refresh_stats()
            if ok:
                print("\n".join(format_stats(coordinator.stats)))
        if not ok:
            print(f"Error: {coordinator.error_message}", file=sys.stderr)
            return 1
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    args = build_parser().parse_args(argv)
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
