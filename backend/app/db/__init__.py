"""Database connections package."""

from app.db.postgres import Database
from app.db.repositories import ArticleRepository, CredentialRepository, PostRepository

__all__ = ["Database", "CredentialRepository", "ArticleRepository", "PostRepository"]
