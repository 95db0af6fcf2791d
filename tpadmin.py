#!/usr/bin/env python
"""tpadmin - TypingChild admin tool.

Uploads lessons and the client config document to the document store.

Usage:
    python tpadmin.py uploadLessons --filePath ./data/lessons.txt
    python tpadmin.py uploadLessons --emulator true --concurrent
    python tpadmin.py updateConfig --downloadAll true --newLessonIds 1,2,3
    python tpadmin.py updateConfig --totalLessonCount 50
    python tpadmin.py words
"""

import argparse
import logging
import os
import sys
from typing import Optional

from config.settings import get_settings, refresh_settings
from core.config_writer import (
    build_config,
    parse_bool,
    parse_lesson_count,
    parse_lesson_ids,
    read_config,
    write_config,
)
from core.document_store import DocumentStore
from core.exceptions import TpAdminError
from core.lesson_parser import parse_lessons, parse_words, sort_words
from core.lesson_syncer import LessonSyncer, SyncOrdering
from core.word_groups import format_word_blocks, render_word_blocks
from utils.logging_utils import configure_logging, log_success
from utils.run_count_store import RunCountStore

__version__ = "1.0.0"

logger = logging.getLogger("tpadmin")


def set_emulator(enabled: bool) -> None:
    """Point the document store at the local emulator."""
    if enabled:
        os.environ["USE_EMULATOR"] = "true"
        refresh_settings()
        logger.info(f"Using emulator at {get_settings().emulator_host}")


def upload_lessons(args: argparse.Namespace) -> int:
    """Parse the lesson file and replace the remote lessons collection."""
    set_emulator(parse_bool(args.emulator))
    settings = get_settings()
    file_path = args.filePath or settings.lessons_file_path

    logger.info(f"Reading lessons from {file_path}")
    lessons = parse_lessons(file_path)
    log_success(logger, f"All {len(lessons)} lessons are successfully read.")

    ordering = SyncOrdering.CONCURRENT if args.concurrent else SyncOrdering.SEQUENTIAL
    result = LessonSyncer(DocumentStore()).sync_lessons(lessons, ordering=ordering)
    RunCountStore(settings.app_name).save_count(len(lessons))

    log_success(
        logger,
        f"All lessons are uploaded successfully "
        f"({result.inserted} written, {result.deleted} replaced, {result.duration_ms}ms).",
    )
    return 0


def update_config(args: argparse.Namespace) -> int:
    """Write the client config document."""
    set_emulator(parse_bool(args.emulator))
    settings = get_settings()

    total = None
    if args.totalLessonCount is not None:
        total = parse_lesson_count(args.totalLessonCount)

    config = build_config(
        download_all=parse_bool(args.downloadAll),
        total_lesson_count=total,
        new_lesson_ids=parse_lesson_ids(args.newLessonIds),
        run_counts=RunCountStore(settings.app_name),
    )
    store = DocumentStore()
    previous = read_config(store)
    if previous is not None:
        logger.info(f"Replacing config: {previous}")
    write_config(store, config)
    log_success(logger, f"Config updated: {config.to_document()}")
    return 0


def show_words(args: argparse.Namespace) -> int:
    """Print the word list grouped by letter and length."""
    file_path = args.filePath or get_settings().words_file_path
    words = sort_words(parse_words(file_path))
    logger.info(f"Read {len(words)} words from {file_path}")
    print(render_word_blocks(format_word_blocks(words)))
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    parser = argparse.ArgumentParser(
        prog="tpadmin",
        description="TypingChild Admin app to upload data to the document store.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    upload = subparsers.add_parser(
        "uploadLessons", help="Upload lessons from the lesson file to the document store."
    )
    upload.add_argument(
        "-e", "--emulator", nargs="?", const="true", default=None,
        metavar="BOOLEAN", help="Run against the local emulator",
    )
    upload.add_argument(
        "-f", "--filePath", default=None,
        help="Lesson file path (default: ./data/lessons.txt)",
    )
    upload.add_argument(
        "--concurrent", action="store_true",
        help="Run the delete and insert phases concurrently",
    )
    upload.set_defaults(handler=upload_lessons)

    config = subparsers.add_parser(
        "updateConfig", help="Update config document in the document store."
    )
    config.add_argument(
        "-e", "--emulator", nargs="?", const="true", default=None,
        metavar="BOOLEAN", help="Run against the local emulator",
    )
    config.add_argument(
        "-d", "--downloadAll", nargs="?", const="true", default=None,
        metavar="BOOLEAN", help="Force clients to download all lessons",
    )
    config.add_argument(
        "--totalLessonCount", default=None, metavar="NUMBER",
        help="Total count of all lessons (default: last uploaded count)",
    )
    config.add_argument(
        "--newLessonIds", default="", metavar="IDS",
        help="Comma-separated ids of new lessons",
    )
    config.set_defaults(handler=update_config)

    words = subparsers.add_parser("words", help="Print the word list grouped for display.")
    words.add_argument(
        "-f", "--filePath", default=None,
        help="Word list path (default: ./data/words.txt)",
    )
    words.set_defaults(handler=show_words)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(get_settings().log_level)

    try:
        return args.handler(args)
    except TpAdminError as e:
        logger.error(str(e))
        return 1
    except Exception as e:
        logger.exception(f"{args.command} failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
