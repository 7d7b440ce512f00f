"""FastAPI dependencies."""

from fastapi import HTTPException, Request, status

from app.container import Services


def get_services(request: Request) -> Services:
    """Service container created by the application lifespan."""
    services = getattr(request.app.state, "services", None)
    if services is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Pipeline services are not initialized",
        )
    return services
