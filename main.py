from pathlib import Path
import argparse
import logging

from syllabus_calendar import make_calendar
from syllabus_calendar.utils.logging import setup_logging
from syllabus_calendar.utils.tools import CONFIG_PATH, DEFAULT_DUMP_DIRECTORY


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Register dumped syllabus courses as recurring Google Calendar events"
    )
    parser.add_argument(
        "dump_dir",
        nargs="?",
        type=Path,
        default=DEFAULT_DUMP_DIRECTORY,
        help="Directory holding <year>/*.json syllabus dumps",
    )
    parser.add_argument(
        "--year",
        type=int,
        default=None,
        help="Academic year to register (defaults to the current school year)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=CONFIG_PATH,
        help="Academic calendar YAML",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Compile events and write them to build/ without calling Google",
    )
    parser.add_argument(
        "--skip-errors",
        action="store_true",
        help="Skip courses that cannot be compiled instead of aborting",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Where to write the resulting JSON",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    setup_logging(verbose=args.verbose)

    make_calendar(
        args.dump_dir,
        year=args.year,
        config_path=args.config,
        dry_run=args.dry_run,
        skip_errors=args.skip_errors,
        output_path=args.output,
    )
    logging.getLogger(__name__).info("done")


if __name__ == "__main__":
    main()
