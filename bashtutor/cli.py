"""
Command line entry point for bashtutor.

Usage:
  bashtutor                          # run every bundled lesson
  bashtutor --list                   # show the table of contents and exit
  bashtutor --start 5                # begin at section 5
  bashtutor --lessons-dir my_lessons --workdir /tmp/tutor
  bashtutor -- arg1 arg2             # args become $1, $2 in demo commands
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from pydantic import ValidationError

from bashtutor.classroom import CatalogError, SectionCatalog, SectionRunner
from bashtutor.utils import LessonLoadError, TutorConfig, load_config, setup_logging
from bashtutor.viewer import Console

logger = logging.getLogger(__name__)

EXIT_LESSON_ERROR = 2
EXIT_INTERRUPTED = 130  # 128 + SIGINT, as a shell reports Ctrl-C


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bashtutor",
        description="Interactive Bash scripting tutorial",
        epilog=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--lessons-dir",
        type=Path,
        default=None,
        help="Directory of lesson YAML files (default: bundled lessons)"
    )
    parser.add_argument(
        "--workdir",
        type=Path,
        default=None,
        help="Directory where demo commands run and create files"
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="Print the table of contents and exit"
    )
    parser.add_argument(
        "--start",
        type=int,
        default=None,
        help="Section number to begin at"
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable ANSI colours"
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: WARNING)"
    )
    parser.add_argument(
        "script_args",
        nargs="*",
        help="Arguments passed to demo commands as $1..$n"
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    overrides = {}
    if args.lessons_dir:
        overrides["lessons_dir"] = args.lessons_dir
    if args.workdir:
        overrides["workdir"] = args.workdir
    if args.log_level:
        overrides["log_level"] = args.log_level
    if args.no_color:
        overrides["color"] = False

    try:
        config = load_config()
        config = TutorConfig.model_validate({**config.model_dump(), **overrides})
    except ValidationError as e:
        parser.error(str(e))
    setup_logging(config.log_level)

    try:
        catalog = SectionCatalog.from_directory(config.lessons_dir)
    except (LessonLoadError, CatalogError) as e:
        logger.error(f"Cannot load lessons from {config.lessons_dir}: {e}")
        return EXIT_LESSON_ERROR
    logger.info(f"Loaded {len(catalog)} lessons from {config.lessons_dir}")

    console = Console(color=config.color)
    runner = SectionRunner(
        catalog,
        console=console,
        workdir=config.workdir,
        script_args=args.script_args,
    )

    if args.list:
        runner.show_catalog()
        return 0

    try:
        return runner.run(start=args.start)
    except KeyboardInterrupt:
        # run() has already cleaned up on the way out
        console.echo()
        console.cecho("RED", "Aborting as requested.")
        return EXIT_INTERRUPTED


if __name__ == "__main__":
    sys.exit(main())
