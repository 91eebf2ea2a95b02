"""
Scheduler - Orchestration Layer

Runs the feed refresh on a fixed cadence.
"""

import asyncio
import logging
import time

import schedule

from .pipeline import FeedPipeline

logger = logging.getLogger(__name__)

POLL_SECONDS = 30


class FeedRefreshScheduler:
    """Refreshes the feed cache every `interval_minutes`"""

    def __init__(self, pipeline: FeedPipeline, interval_minutes: int = 60):
        if interval_minutes <= 0:
            raise ValueError("interval_minutes must be positive")
        self.pipeline = pipeline
        self.interval_minutes = interval_minutes
        self.scheduler = schedule.Scheduler()
        self.running = False

    def run_refresh(self) -> bool:
        """One refresh; failures are logged so the schedule keeps going"""
        try:
            asyncio.run(self.pipeline.refresh())
            return True
        except Exception as e:
            logger.error(f"❌ Scheduled feed refresh failed: {e}")
            return False

    def start(self, poll_seconds: float = POLL_SECONDS):
        """Start the scheduler (blocks until stop() or Ctrl+C)"""
        logger.info("🚀 Starting feed refresh scheduler...")

        self.scheduler.every(self.interval_minutes).minutes.do(self.run_refresh)

        self.running = True
        logger.info(f"📅 Scheduler started - refresh every {self.interval_minutes} minutes")

        try:
            while self.running:
                self.scheduler.run_pending()
                time.sleep(poll_seconds)

        except KeyboardInterrupt:
            logger.info("🛑 Scheduler stopped by user")
            self.running = False
        finally:
            self.scheduler.clear()

    def stop(self):
        """Stop the scheduler"""
        logger.info("🛑 Stopping scheduler...")
        self.running = False

    def run_now(self) -> bool:
        """Run a refresh immediately"""
        logger.info("🔄 Running feed refresh now...")
        return self.run_refresh()
