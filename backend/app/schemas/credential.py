"""Credential schemas for the admin API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.models import ProviderName


class CredentialCreate(BaseModel):
    """Schema for registering a provider API key."""

    provider: ProviderName
    secret: str = Field(..., min_length=1, max_length=500)
    active: bool = True


class CredentialUpdate(BaseModel):
    """Schema for activating or deactivating a key."""

    active: bool


class CredentialResponse(BaseModel):
    """Credential with the secret masked."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    provider: str
    secret_hint: str
    active: bool
    created_at: datetime

    @classmethod
    def from_model(cls, credential) -> "CredentialResponse":
        secret = credential.secret or ""
        hint = f"...{secret[-4:]}" if len(secret) > 8 else "****"
        return cls(
            id=credential.id,
            provider=credential.provider,
            secret_hint=hint,
            active=credential.active,
            created_at=credential.created_at,
        )


class ProvidersResponse(BaseModel):
    providers: list[str]
