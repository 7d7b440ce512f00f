"""Pipeline API endpoints - on-demand runs, trends and schedule status."""

from fastapi import APIRouter, Depends, Query

from app.api.dependencies import get_services
from app.container import Services
from app.schemas.pipeline import RunSummary, ScheduleResponse, ScrapeResponse, TrendsResponse
from app.schemas.post import PostResponse

router = APIRouter()


@router.post("/run", response_model=RunSummary)
async def run_pipeline(services: Services = Depends(get_services)) -> RunSummary:
    """
    Scrape all feeds, then generate posts.

    Waits for both stages. Stage failures are reported in the summary.
    """
    return await services.scheduler.run_now()


@router.post("/scrape", response_model=ScrapeResponse)
async def scrape_feeds(services: Services = Depends(get_services)) -> ScrapeResponse:
    """Scrape all configured feeds."""
    stored = await services.scraper.scrape_all()
    return ScrapeResponse(articles_stored=stored)


@router.post("/generate", response_model=list[PostResponse])
async def generate_posts(services: Services = Depends(get_services)) -> list[PostResponse]:
    """Generate posts from the current trends."""
    posts = await services.generator.generate_daily_content()
    return [PostResponse.model_validate(post) for post in posts]


@router.get("/trends", response_model=TrendsResponse)
async def get_trends(
    window_hours: int = Query(default=24, ge=1, le=24 * 30),
    services: Services = Depends(get_services),
) -> TrendsResponse:
    """Trending articles per category for the given window."""
    categories = await services.trends.latest_trends(window_hours=window_hours)
    return TrendsResponse(window_hours=window_hours, categories=categories)


@router.get("/schedule", response_model=ScheduleResponse)
async def get_schedule(services: Services = Depends(get_services)) -> ScheduleResponse:
    """Registered scheduler jobs and their next run."""
    scheduler = services.scheduler
    return ScheduleResponse(running=scheduler.is_running, jobs=scheduler.jobs())
