"""Content scheduler - runs scraping and generation on a fixed cadence."""

import asyncio
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime
from typing import Any

import schedule
import structlog

from app.config import Settings
from app.schemas.article import WeeklyTrend
from app.schemas.pipeline import JobInfo, RunSummary, StageResult
from app.services.content_generator import ContentGenerator
from app.services.feed_scraper import FeedScraper
from app.services.trend_analyzer import TrendAnalyzer

logger = structlog.get_logger(__name__)

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")

SCRAPE_JOB = "scrape"
GENERATE_JOB = "generate"
WEEKLY_JOB = "weekly_analysis"
INITIAL_RUN = "initial_run"


class ContentScheduler:
    """
    Three independent timers on a private `schedule.Scheduler`:

    - feed scrape every `scrape_interval_hours` on the hour (00:00, 02:00, ...)
    - content generation at each of `generation_times`
    - weekly trend analysis on `weekly_analysis_day` at `weekly_analysis_time`

    Pending jobs are polled from an asyncio task. Each firing runs as its
    own task with its own error guard, so a failing job never affects the
    others. A job still running from its previous firing is skipped.
    """

    def __init__(
        self,
        scraper: FeedScraper,
        generator: ContentGenerator,
        trends: TrendAnalyzer,
        settings: Settings,
    ) -> None:
        self.scraper = scraper
        self.generator = generator
        self.trends = trends
        self.settings = settings
        self._scheduler = schedule.Scheduler()
        self._loop_task: asyncio.Task[None] | None = None
        self._running: dict[str, asyncio.Task[Any]] = {}

    @property
    def is_running(self) -> bool:
        return self._loop_task is not None and not self._loop_task.done()

    def start(self) -> None:
        """Register the timers and start polling. Must run inside an event loop."""
        if self.is_running:
            logger.warning("Content scheduler already running")
            return

        logger.info("Starting content scheduler")
        self.register_jobs()
        self._loop_task = asyncio.get_running_loop().create_task(self._run_loop())

        if self.settings.run_pipeline_on_start:
            self._spawn(INITIAL_RUN, self.run_now)

        logger.info("Content scheduler started", jobs=len(self._scheduler.get_jobs()))

    async def stop(self, wait: bool = False) -> None:
        """Stop future firings. In-flight runs are not cancelled."""
        if self._loop_task is not None:
            self._loop_task.cancel()
            try:
                await self._loop_task
            except asyncio.CancelledError:
                pass
            self._loop_task = None
        self._scheduler.clear()
        if wait:
            await self.drain()
        logger.info("Content scheduler stopped")

    async def drain(self) -> None:
        """Wait for every in-flight job to finish."""
        while self._running:
            await asyncio.gather(*list(self._running.values()), return_exceptions=True)

    def register_jobs(self) -> None:
        interval = self.settings.scrape_interval_hours
        if interval < 1 or 24 % interval:
            raise ValueError(f"scrape_interval_hours must divide 24, got {interval}")
        day = self.settings.weekly_analysis_day.lower()
        if day not in WEEKDAYS:
            raise ValueError(f"weekly_analysis_day must be a weekday name, got {day!r}")

        self._scheduler.clear()

        for hour in range(0, 24, interval):
            self._scheduler.every().day.at(f"{hour:02d}:00").do(
                self._spawn, SCRAPE_JOB, self.scraper.scrape_all
            ).tag(SCRAPE_JOB)

        for at_time in self.settings.generation_times:
            self._scheduler.every().day.at(at_time).do(
                self._spawn, GENERATE_JOB, self.generator.generate_daily_content
            ).tag(GENERATE_JOB)

        getattr(self._scheduler.every(), day).at(self.settings.weekly_analysis_time).do(
            self._spawn, WEEKLY_JOB, self.weekly_analysis
        ).tag(WEEKLY_JOB)

    def jobs(self) -> list[JobInfo]:
        infos = []
        for job in self._scheduler.get_jobs():
            name = next(iter(job.tags), "job")
            when = job.at_time.strftime("%H:%M") if job.at_time else "?"
            cadence = f"every {job.start_day} at {when}" if job.start_day else f"daily at {when}"
            infos.append(
                JobInfo(
                    name=name,
                    schedule=cadence,
                    next_run=job.next_run,
                    running=name in self._running,
                )
            )
        return infos

    async def run_now(self) -> RunSummary:
        """Scrape, then generate. Stage errors are logged and reported, not raised."""
        logger.info("Running immediate content update")
        started_at = datetime.now(UTC)
        summary = RunSummary(started_at=started_at, finished_at=started_at)

        try:
            stored = await self.scraper.scrape_all()
        except Exception as e:
            logger.exception("Immediate scrape failed")
            summary.stages.append(StageResult(stage=SCRAPE_JOB, ok=False, error=str(e)))
        else:
            summary.articles_stored = stored
            summary.stages.append(StageResult(stage=SCRAPE_JOB, ok=True, count=stored))

        try:
            posts = await self.generator.generate_daily_content()
        except Exception as e:
            logger.exception("Immediate content generation failed")
            summary.stages.append(StageResult(stage=GENERATE_JOB, ok=False, error=str(e)))
        else:
            summary.posts_created = len(posts)
            summary.stages.append(StageResult(stage=GENERATE_JOB, ok=True, count=len(posts)))

        summary.finished_at = datetime.now(UTC)
        logger.info(
            "Immediate update completed",
            articles_stored=summary.articles_stored,
            posts_created=summary.posts_created,
        )
        return summary

    async def weekly_analysis(self) -> dict[str, WeeklyTrend]:
        """Summarize the past week's trends per category into the log."""
        logger.info("Performing weekly trend analysis")
        report = await self.trends.weekly_report()
        for category, trend in report.items():
            logger.info(
                "Weekly trend",
                category=category,
                articles=trend.article_count,
                topic=trend.top_topic,
            )
        return report

    def _spawn(self, name: str, job: Callable[[], Awaitable[Any]]) -> None:
        if name in self._running:
            logger.warning("Previous run still in progress, skipping", job=name)
            return
        logger.info("Running scheduled job", job=name)
        task = asyncio.get_running_loop().create_task(self._guarded(name, job))
        self._running[name] = task

    async def _guarded(self, name: str, job: Callable[[], Awaitable[Any]]) -> None:
        try:
            await job()
        except Exception:
            logger.exception("Scheduled job failed", job=name)
        finally:
            self._running.pop(name, None)

    async def _run_loop(self) -> None:
        while True:
            self._scheduler.run_pending()
            await asyncio.sleep(self.settings.scheduler_poll_seconds)
