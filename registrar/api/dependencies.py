"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes.
"""

from fastapi import Depends, Header, HTTPException, Request, status

from registrar.adapters.clock import SystemClock
from registrar.adapters.events.console import ConsoleEventPublisher
from registrar.config.settings import Settings, get_settings
from registrar.domain.ports import AccountStore
from registrar.domain.registrar import RegistrarService

# Module-level singletons - both adapters are stateless
_clock = SystemClock()
_event_publisher = ConsoleEventPublisher()


def get_store(request: Request) -> AccountStore:
    """
    Get account store from app state.

    The store is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.store


def get_clock() -> SystemClock:
    """Get system clock (singleton)."""
    return _clock


def get_event_publisher() -> ConsoleEventPublisher:
    """Get console event publisher (singleton)."""
    return _event_publisher


def get_registrar_service(request: Request) -> RegistrarService:
    """
    Create registrar service with injected dependencies.

    Wires together the store, clock, event publisher and registry policy
    from settings.
    """
    settings = get_settings()
    return RegistrarService(
        store=get_store(request),
        clock=get_clock(),
        events=get_event_publisher(),
        program_id=settings.program_id.encode(),
        default_fee_lamports=settings.default_fee_lamports,
        lease_seconds=settings.lease_seconds,
        min_name_length=settings.min_name_length,
        max_name_length=settings.max_name_length,
        max_renewal_years=settings.max_renewal_years,
    )


def get_caller_identity(
    x_identity: str | None = Header(default=None, alias="X-Identity"),
) -> str:
    """
    Extract the calling identity from the X-Identity header.

    Signing and key management happen upstream; the header value is
    trusted as the identity of the caller.

    Returns:
        Identity string with surrounding whitespace removed

    Raises:
        HTTPException: 401 if the header is missing or blank
    """
    identity = (x_identity or "").strip()
    if not identity:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"code": "MissingIdentity", "message": "X-Identity header is required"},
        )
    return identity


def require_faucet(settings: Settings = Depends(get_settings)) -> None:
    """
    Guard development-only endpoints behind the enable_faucet setting.

    Raises:
        HTTPException: 404 when the faucet is disabled
    """
    if not settings.enable_faucet:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"code": "FaucetDisabled", "message": "Deposits are disabled"},
        )
