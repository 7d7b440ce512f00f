"""API v1 main router - aggregates all endpoint routers."""

from fastapi import APIRouter

from app.api.v1 import credentials, pipeline, posts

api_router = APIRouter()

api_router.include_router(pipeline.router, prefix="/pipeline", tags=["pipeline"])
api_router.include_router(posts.router, prefix="/posts", tags=["posts"])
api_router.include_router(credentials.router, prefix="/credentials", tags=["credentials"])
