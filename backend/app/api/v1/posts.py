"""Generated posts API endpoints (read-only, published posts only)."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.api.dependencies import get_services
from app.container import Services
from app.schemas.post import PostListResponse, PostResponse

router = APIRouter()


@router.get("", response_model=PostListResponse)
async def list_posts(
    category: str | None = None,
    limit: int = Query(default=20, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    services: Services = Depends(get_services),
) -> PostListResponse:
    """List published posts, newest first."""
    posts = await services.posts.list_published(limit=limit, offset=offset, category=category)
    return PostListResponse(
        posts=[PostResponse.model_validate(post) for post in posts],
        total=len(posts),
        limit=limit,
        offset=offset,
    )


@router.get("/{slug}", response_model=PostResponse)
async def get_post(slug: str, services: Services = Depends(get_services)) -> PostResponse:
    """Get a published post by slug."""
    post = await services.posts.get_by_slug(slug)
    if post is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Post {slug} not found",
        )
    return PostResponse.model_validate(post)
