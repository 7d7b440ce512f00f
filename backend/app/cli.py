"""Command line entry points for running the pipeline without the API."""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Annotated, TypeVar

import typer
from rich.console import Console
from rich.table import Table

from app.config import get_settings
from app.container import Services, build_services
from app.observability import setup_logging

T = TypeVar("T")

app = typer.Typer(
    name="trendpress",
    help="Scrape feeds, detect trends and publish LLM-written posts.",
    no_args_is_help=True,
)

console = Console()


def _run(action: Callable[[Services], Awaitable[T]]) -> T:
    """Build services, run one async action, always clean up."""
    settings = get_settings()
    setup_logging(settings)

    async def runner() -> T:
        services = build_services(settings)
        try:
            if services.database is not None:
                await services.database.init_db()
            return await action(services)
        finally:
            await services.close()

    return asyncio.run(runner())


@app.command("init-db")
def init_db() -> None:
    """Create the pipeline tables."""

    async def action(services: Services) -> None:
        return None

    _run(action)
    console.print("[green]Database tables initialized[/green]")


@app.command()
def scrape() -> None:
    """Scrape every configured feed once."""

    async def action(services: Services) -> int:
        return await services.scraper.scrape_all()

    stored = _run(action)
    console.print(f"[green]Stored {stored} new articles[/green]")


@app.command()
def generate() -> None:
    """Generate posts from the current trends."""

    async def action(services: Services) -> list[tuple[str, str, int]]:
        posts = await services.generator.generate_daily_content()
        return [(p.category, p.title, p.seo_score) for p in posts]

    rows = _run(action)
    table = Table(title=f"Generated {len(rows)} posts")
    table.add_column("Category")
    table.add_column("Title")
    table.add_column("SEO", justify="right")
    for category, title, seo_score in rows:
        table.add_row(category, title, str(seo_score))
    console.print(table)


@app.command("run-now")
def run_now() -> None:
    """Scrape, then generate, like the scheduled pipeline."""

    async def action(services: Services):
        return await services.scheduler.run_now()

    summary = _run(action)
    for stage in summary.stages:
        status = "[green]ok[/green]" if stage.ok else f"[red]failed[/red] ({stage.error})"
        console.print(f"{stage.stage}: {status} count={stage.count}")


@app.command()
def trends(
    window_hours: Annotated[int, typer.Option("--window-hours", "-w", help="Look-back window.")] = 24,
) -> None:
    """Show trending articles per category."""

    async def action(services: Services):
        return await services.trends.latest_trends(window_hours=window_hours)

    by_category = _run(action)
    if not by_category:
        console.print("[yellow]No trends available[/yellow]")
        return
    for category, articles in by_category.items():
        table = Table(title=category)
        table.add_column("Score", justify="right")
        table.add_column("Title")
        table.add_column("Source")
        for article in articles:
            table.add_row(str(article.trending_score), article.title, article.source)
        console.print(table)


@app.command("serve-scheduler")
def serve_scheduler() -> None:
    """Run the scheduler in the foreground until interrupted."""

    async def action(services: Services) -> None:
        services.scheduler.start()
        for job in services.scheduler.jobs():
            console.print(f"{job.name}: {job.schedule} (next {job.next_run})")
        await asyncio.Event().wait()

    try:
        _run(action)
    except KeyboardInterrupt:
        console.print("Scheduler stopped")


if __name__ == "__main__":
    app()
