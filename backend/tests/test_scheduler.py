"""Tests for job registration and pipeline runs."""

import asyncio
from collections import Counter

import pytest

from app.schemas.article import WeeklyTrend
from app.services.scheduler import ContentScheduler


class RecordingScraper:
    def __init__(self, log: list[str], error: Exception | None = None) -> None:
        self.log = log
        self.error = error

    async def scrape_all(self) -> int:
        self.log.append("scrape")
        if self.error is not None:
            raise self.error
        return 4


class RecordingGenerator:
    def __init__(self, log: list[str], error: Exception | None = None) -> None:
        self.log = log
        self.error = error

    async def generate_daily_content(self) -> list[object]:
        self.log.append("generate")
        if self.error is not None:
            raise self.error
        return [object(), object()]


class RecordingTrends:
    def __init__(self, log: list[str]) -> None:
        self.log = log

    async def weekly_report(self) -> dict[str, WeeklyTrend]:
        self.log.append("weekly")
        return {"ai": WeeklyTrend(category="ai", article_count=4, top_topic="agents")}


def make_scheduler(settings, log, scrape_error=None, generate_error=None) -> ContentScheduler:
    return ContentScheduler(
        RecordingScraper(log, scrape_error),
        RecordingGenerator(log, generate_error),
        RecordingTrends(log),
        settings,
    )


class TestRegisterJobs:
    def test_default_cadence(self, settings) -> None:
        scheduler = make_scheduler(settings, [])
        scheduler.register_jobs()

        jobs = scheduler.jobs()
        counts = Counter(job.name for job in jobs)
        assert counts == {"scrape": 12, "generate": 2, "weekly_analysis": 1}

        scrape_times = sorted(job.schedule for job in jobs if job.name == "scrape")
        assert scrape_times == sorted(f"daily at {hour:02d}:00" for hour in range(0, 24, 2))

        generate_times = sorted(job.schedule for job in jobs if job.name == "generate")
        assert generate_times == ["daily at 08:00", "daily at 18:00"]

        weekly = [job for job in jobs if job.name == "weekly_analysis"]
        assert weekly[0].schedule == "every sunday at 00:00"
        assert all(job.next_run is not None for job in jobs)

    def test_custom_interval(self, settings) -> None:
        settings.scrape_interval_hours = 6
        scheduler = make_scheduler(settings, [])
        scheduler.register_jobs()

        assert sum(1 for job in scheduler.jobs() if job.name == "scrape") == 4

    def test_reregistering_replaces_jobs(self, settings) -> None:
        scheduler = make_scheduler(settings, [])
        scheduler.register_jobs()
        scheduler.register_jobs()

        assert len(scheduler.jobs()) == 15

    @pytest.mark.parametrize("interval", [0, 5, 7])
    def test_rejects_interval_not_dividing_day(self, settings, interval: int) -> None:
        settings.scrape_interval_hours = interval

        with pytest.raises(ValueError):
            make_scheduler(settings, []).register_jobs()

    def test_rejects_unknown_weekday(self, settings) -> None:
        settings.weekly_analysis_day = "someday"

        with pytest.raises(ValueError):
            make_scheduler(settings, []).register_jobs()


class TestRunNow:
    @pytest.mark.asyncio
    async def test_scrapes_then_generates(self, settings) -> None:
        log: list[str] = []

        summary = await make_scheduler(settings, log).run_now()

        assert log == ["scrape", "generate"]
        assert summary.articles_stored == 4
        assert summary.posts_created == 2
        assert [stage.ok for stage in summary.stages] == [True, True]
        assert summary.finished_at >= summary.started_at

    @pytest.mark.asyncio
    async def test_scrape_failure_still_generates(self, settings) -> None:
        log: list[str] = []
        scheduler = make_scheduler(settings, log, scrape_error=RuntimeError("feed host down"))

        summary = await scheduler.run_now()

        assert log == ["scrape", "generate"]
        assert summary.stages[0].ok is False
        assert summary.stages[0].error == "feed host down"
        assert summary.posts_created == 2

    @pytest.mark.asyncio
    async def test_generate_failure_is_reported(self, settings) -> None:
        scheduler = make_scheduler(settings, [], generate_error=RuntimeError("no providers"))

        summary = await scheduler.run_now()

        assert summary.articles_stored == 4
        assert summary.stages[1].ok is False


class TestScheduledJobs:
    @pytest.mark.asyncio
    async def test_jobs_run_independently(self, settings) -> None:
        log: list[str] = []
        scheduler = make_scheduler(settings, log, scrape_error=RuntimeError("boom"))
        scheduler.register_jobs()

        scheduler._scheduler.run_all()
        await scheduler.drain()

        # Overlapping firings of the same job collapse into one run.
        assert Counter(log) == {"scrape": 1, "generate": 1, "weekly": 1}

    @pytest.mark.asyncio
    async def test_weekly_analysis_returns_report(self, settings) -> None:
        report = await make_scheduler(settings, []).weekly_analysis()

        assert report["ai"].top_topic == "agents"

    @pytest.mark.asyncio
    async def test_start_and_stop(self, settings) -> None:
        scheduler = make_scheduler(settings, [])

        scheduler.start()
        assert scheduler.is_running
        assert len(scheduler.jobs()) == 15

        await scheduler.stop()
        assert not scheduler.is_running
        assert scheduler.jobs() == []

    @pytest.mark.asyncio
    async def test_initial_run_on_start(self, settings) -> None:
        settings.run_pipeline_on_start = True
        log: list[str] = []
        scheduler = make_scheduler(settings, log)

        scheduler.start()
        await asyncio.sleep(0)
        await scheduler.stop(wait=True)

        assert log == ["scrape", "generate"]
