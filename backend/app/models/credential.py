"""Credential model for LLM provider API keys."""

from datetime import UTC, datetime
from enum import StrEnum
from uuid import UUID, uuid4

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel


class ProviderName(StrEnum):
    """LLM backends that can hold a credential."""

    OPENAI = "openai"
    CLAUDE = "claude"
    GEMINI = "gemini"


class Credential(SQLModel, table=True):
    """
    Provider API key managed by operators.

    Several rows per provider are allowed; only active ones are used.
    """

    __tablename__ = "credentials"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    provider: str = Field(max_length=20, index=True)
    secret: str = Field(max_length=500)
    active: bool = Field(default=True, index=True)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_type=DateTime(timezone=True),
    )
