"""Credentials API endpoints - provider key administration."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status

from app.api.dependencies import get_services
from app.container import Services
from app.schemas.credential import (
    CredentialCreate,
    CredentialResponse,
    CredentialUpdate,
    ProvidersResponse,
)

router = APIRouter()


@router.get("", response_model=list[CredentialResponse])
async def list_credentials(services: Services = Depends(get_services)) -> list[CredentialResponse]:
    """List all credentials with masked secrets."""
    credentials = await services.credentials.list_all()
    return [CredentialResponse.from_model(c) for c in credentials]


@router.post("", response_model=CredentialResponse, status_code=status.HTTP_201_CREATED)
async def create_credential(
    credential_in: CredentialCreate,
    services: Services = Depends(get_services),
) -> CredentialResponse:
    """Register a provider API key."""
    credential = await services.credentials.create(
        provider=credential_in.provider.value,
        secret=credential_in.secret,
        active=credential_in.active,
    )
    services.key_cache.invalidate()
    return CredentialResponse.from_model(credential)


@router.get("/providers", response_model=ProvidersResponse)
async def list_providers(services: Services = Depends(get_services)) -> ProvidersResponse:
    """Providers that can currently generate content."""
    return ProvidersResponse(providers=await services.gateway.list_available())


@router.post("/cache/invalidate", status_code=status.HTTP_204_NO_CONTENT)
async def invalidate_cache(services: Services = Depends(get_services)) -> None:
    """Force the next key lookup to reload from the database."""
    services.key_cache.invalidate()


@router.patch("/{credential_id}", response_model=CredentialResponse)
async def update_credential(
    credential_id: UUID,
    update: CredentialUpdate,
    services: Services = Depends(get_services),
) -> CredentialResponse:
    """Activate or deactivate a credential."""
    credential = await services.credentials.set_active(credential_id, update.active)
    if credential is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Credential {credential_id} not found",
        )
    services.key_cache.invalidate()
    return CredentialResponse.from_model(credential)


@router.delete("/{credential_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_credential(
    credential_id: UUID,
    services: Services = Depends(get_services),
) -> None:
    """Delete a credential."""
    if not await services.credentials.delete(credential_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Credential {credential_id} not found",
        )
    services.key_cache.invalidate()
