"""
Main Entry Point - Feed Cache CLI

Provides simple interfaces to fetch the remote feed, refresh the local cache,
read it back, clear it, or keep it refreshed on a schedule.
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from .coreutils.env import STORE_KINDS, load_settings
from .coreutils.logging import setup_logging
from .extract.remote_feed_loader import FeedLoaderError
from .orchestration.pipeline import build_local_loader, build_pipeline
from .orchestration.scheduler import FeedRefreshScheduler
from .transformation.models import FeedItem

logger = logging.getLogger("feedcache")

COMMANDS = ["fetch", "refresh", "load", "show", "invalidate", "schedule"]

# the memory store lives only as long as the process
MEMORY_STORE_COMMANDS = {"fetch", "load", "schedule"}


def format_items(items: List[FeedItem]) -> str:
    """One line per item: id, image URL and whichever text fields are set"""
    if not items:
        return "(no items)"

    lines = []
    for item in items:
        extras = " | ".join(v for v in (item.description, item.location) if v)
        line = f"{item.id}  {item.image_url}"
        lines.append(f"{line}  {extras}" if extras else line)
    return "\n".join(lines)


async def run_command(command: str, settings) -> Optional[List[FeedItem]]:
    """
    Run a single (non-scheduled) command

    Args:
        command: One of COMMANDS except "schedule"
        settings: Resolved Settings

    Returns:
        Optional[List[FeedItem]]: Items for read commands, None otherwise
    """
    if command == "fetch":
        return await build_pipeline(settings).remote.load()

    elif command == "refresh":
        return await build_pipeline(settings).refresh()

    elif command == "load":
        return await build_pipeline(settings).load_with_fallback()

    elif command == "show":
        return await build_local_loader(settings).load()

    elif command == "invalidate":
        await build_local_loader(settings).invalidate()
        return None

    else:
        raise ValueError(f"Unknown command: {command}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Remote feed loader with local cache")
    parser.add_argument("command", choices=COMMANDS, help="Command to run")
    parser.add_argument("--url", default=None, help="Feed URL (defaults to FEED_URL)")
    parser.add_argument(
        "--store",
        choices=STORE_KINDS,
        default=None,
        help="Cache store (defaults to FEED_STORE or json); memory does not persist between runs",
    )
    parser.add_argument(
        "--cache-path", default=None, help="Cache file path (defaults to FEED_CACHE_PATH)"
    )
    parser.add_argument(
        "--every",
        type=int,
        default=None,
        metavar="MINUTES",
        help="Refresh interval for 'schedule' (defaults to FEED_REFRESH_MINUTES)",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--no-log-file", action="store_true", help="Log to the console only"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    args = build_parser().parse_args(argv)
    log_dir = None if args.no_log_file else "logs"

    try:
        settings = load_settings(
            url=args.url,
            store=args.store,
            cache_path=args.cache_path,
            refresh_minutes=args.every,
            log_level="DEBUG" if args.verbose else None,
        )
    except ValueError as e:
        setup_logging(log_dir=log_dir)
        logger.error(f"❌ Invalid configuration: {e}")
        return 1

    setup_logging(
        level=getattr(logging, settings.log_level, logging.INFO),
        log_dir=log_dir,
    )

    if settings.store == "memory" and args.command not in MEMORY_STORE_COMMANDS:
        logger.error(
            f"❌ The memory store does not persist between runs; "
            f"'{args.command}' needs --store json or parquet"
        )
        return 1

    if args.command == "schedule":
        try:
            scheduler = FeedRefreshScheduler(
                build_pipeline(settings), interval_minutes=settings.refresh_minutes
            )
        except ValueError as e:
            logger.error(f"❌ schedule failed: {e}")
            return 1
        scheduler.run_now()
        scheduler.start()
        return 0

    try:
        items = asyncio.run(run_command(args.command, settings))
    except FeedLoaderError as e:
        logger.error(f"❌ Feed load failed ({e.kind.value}): {e}")
        return 1
    except Exception as e:
        logger.error(f"❌ {args.command} failed: {e}")
        return 1

    if items is not None:
        print(format_items(items))
    else:
        print(f"✅ {args.command} completed")
    return 0


if __name__ == "__main__":
    sys.exit(main())
