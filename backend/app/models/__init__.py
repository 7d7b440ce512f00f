"""Models package - SQLModel database models."""

from app.models.article import ScrapedArticle
from app.models.credential import Credential, ProviderName
from app.models.post import GeneratedPost, PostStatus

__all__ = ["Credential", "ProviderName", "ScrapedArticle", "GeneratedPost", "PostStatus"]
