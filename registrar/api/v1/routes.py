"""
API v1 routes.

Defines REST endpoints for the Name Registrar API. The calling identity
is read from the X-Identity header; domain errors are returned as
``{"detail": {"code": <ErrorKind>, "message": ...}}`` so clients can
branch on the error kind.
"""

from typing import NoReturn

from fastapi import APIRouter, Depends, HTTPException, status

from registrar.api.dependencies import (
    get_caller_identity,
    get_registrar_service,
    require_faucet,
)
from registrar.api.models import (
    BalanceResponse,
    DepositRequest,
    ErrorResponse,
    NameRecordResponse,
    RegisterNameRequest,
    RegistryResponse,
    RenewNameRequest,
    SetResolverRequest,
    TransferNameRequest,
    UpdateFeeRequest,
)
from registrar.domain.exceptions import (
    AlreadyInitialized,
    AlreadyRegistered,
    InsufficientFunds,
    InvalidNameCharacters,
    InvalidNameLength,
    InvalidRenewalPeriod,
    NameExpired,
    NotFound,
    NotInitialized,
    RegistrarError,
    Unauthorized,
)
from registrar.domain.registrar import RegistrarService

router = APIRouter(tags=["v1"])

_STATUS_BY_ERROR: dict[type[RegistrarError], int] = {
    InvalidNameLength: status.HTTP_400_BAD_REQUEST,
    InvalidNameCharacters: status.HTTP_400_BAD_REQUEST,
    InvalidRenewalPeriod: status.HTTP_400_BAD_REQUEST,
    InsufficientFunds: status.HTTP_402_PAYMENT_REQUIRED,
    Unauthorized: status.HTTP_403_FORBIDDEN,
    NotFound: status.HTTP_404_NOT_FOUND,
    NotInitialized: status.HTTP_404_NOT_FOUND,
    AlreadyRegistered: status.HTTP_409_CONFLICT,
    AlreadyInitialized: status.HTTP_409_CONFLICT,
    NameExpired: status.HTTP_410_GONE,
}


def _raise_http(error: RegistrarError) -> NoReturn:
    """Translate a domain error into an HTTPException carrying its kind."""
    status_code = _STATUS_BY_ERROR.get(type(error), status.HTTP_500_INTERNAL_SERVER_ERROR)
    raise HTTPException(
        status_code=status_code,
        detail={"code": error.code, "message": str(error)},
    ) from error


@router.post(
    "/registry",
    response_model=RegistryResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        401: {"model": ErrorResponse, "description": "Missing caller identity"},
        409: {"model": ErrorResponse, "description": "Registry already initialized"},
    },
    summary="Initialize the registry",
    description="Create the registry singleton with the caller as its authority.",
)
async def initialize_registry(
    caller: str = Depends(get_caller_identity),
    service: RegistrarService = Depends(get_registrar_service),
) -> RegistryResponse:
    try:
        registry = service.initialize(caller)
    except RegistrarError as e:
        _raise_http(e)
    return RegistryResponse.from_record(registry)


@router.get(
    "/registry",
    response_model=RegistryResponse,
    responses={404: {"model": ErrorResponse, "description": "Registry not initialized"}},
    summary="Get registry state",
)
async def get_registry(
    service: RegistrarService = Depends(get_registrar_service),
) -> RegistryResponse:
    try:
        registry = service.get_registry()
    except RegistrarError as e:
        _raise_http(e)
    return RegistryResponse.from_record(registry)


@router.put(
    "/registry/fee",
    response_model=RegistryResponse,
    responses={
        403: {"model": ErrorResponse, "description": "Caller is not the authority"},
        404: {"model": ErrorResponse, "description": "Registry not initialized"},
    },
    summary="Update the registration fee",
)
async def update_fee(
    request_data: UpdateFeeRequest,
    caller: str = Depends(get_caller_identity),
    service: RegistrarService = Depends(get_registrar_service),
) -> RegistryResponse:
    try:
        registry = service.update_fee(caller, request_data.fee_lamports)
    except RegistrarError as e:
        _raise_http(e)
    return RegistryResponse.from_record(registry)


@router.post(
    "/names",
    response_model=NameRecordResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid name"},
        402: {"model": ErrorResponse, "description": "Insufficient funds for the fee"},
        404: {"model": ErrorResponse, "description": "Registry not initialized"},
        409: {"model": ErrorResponse, "description": "Name already registered"},
    },
    summary="Register a name",
    description="Register a name to the caller for one lease period. "
    "The registry fee is moved from the caller to the treasury.",
)
async def register_name(
    request_data: RegisterNameRequest,
    caller: str = Depends(get_caller_identity),
    service: RegistrarService = Depends(get_registrar_service),
) -> NameRecordResponse:
    """
    Register a name to the calling identity.

    - **name**: 3-12 characters of lowercase letters, digits and underscore
    - **treasury**: Identity receiving the registration fee
    """
    try:
        record = service.register_name(request_data.name, caller, request_data.treasury)
    except RegistrarError as e:
        _raise_http(e)
    return NameRecordResponse.from_record(record)


@router.get(
    "/names/{name}",
    response_model=NameRecordResponse,
    responses={404: {"model": ErrorResponse, "description": "Name not registered"}},
    summary="Get a name record",
)
async def get_name(
    name: str,
    service: RegistrarService = Depends(get_registrar_service),
) -> NameRecordResponse:
    try:
        record = service.get_name(name)
    except RegistrarError as e:
        _raise_http(e)
    return NameRecordResponse.from_record(record)


@router.post(
    "/names/{name}/transfer",
    response_model=NameRecordResponse,
    responses={
        403: {"model": ErrorResponse, "description": "Caller does not own the name"},
        404: {"model": ErrorResponse, "description": "Name not registered"},
        410: {"model": ErrorResponse, "description": "Name lease expired"},
    },
    summary="Transfer a name",
)
async def transfer_name(
    name: str,
    request_data: TransferNameRequest,
    caller: str = Depends(get_caller_identity),
    service: RegistrarService = Depends(get_registrar_service),
) -> NameRecordResponse:
    try:
        record = service.transfer_name(name, caller, request_data.new_owner)
    except RegistrarError as e:
        _raise_http(e)
    return NameRecordResponse.from_record(record)


@router.post(
    "/names/{name}/renew",
    response_model=NameRecordResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid renewal period"},
        402: {"model": ErrorResponse, "description": "Insufficient funds for the fee"},
        403: {"model": ErrorResponse, "description": "Caller does not own the name"},
        404: {"model": ErrorResponse, "description": "Name not registered"},
    },
    summary="Renew a name",
    description="Extend a lease by whole 365-day years. "
    "The fee is the registration fee multiplied by the number of years.",
)
async def renew_name(
    name: str,
    request_data: RenewNameRequest,
    caller: str = Depends(get_caller_identity),
    service: RegistrarService = Depends(get_registrar_service),
) -> NameRecordResponse:
    try:
        record = service.renew_name(name, request_data.years, caller, request_data.treasury)
    except RegistrarError as e:
        _raise_http(e)
    return NameRecordResponse.from_record(record)


@router.put(
    "/names/{name}/resolver",
    response_model=NameRecordResponse,
    responses={
        403: {"model": ErrorResponse, "description": "Caller does not own the name"},
        404: {"model": ErrorResponse, "description": "Name not registered"},
    },
    summary="Set a name's resolver",
)
async def set_resolver(
    name: str,
    request_data: SetResolverRequest,
    caller: str = Depends(get_caller_identity),
    service: RegistrarService = Depends(get_registrar_service),
) -> NameRecordResponse:
    try:
        record = service.set_resolver(name, caller, request_data.resolver)
    except RegistrarError as e:
        _raise_http(e)
    return NameRecordResponse.from_record(record)


@router.post(
    "/balances/{identity}/deposit",
    response_model=BalanceResponse,
    responses={404: {"model": ErrorResponse, "description": "Faucet disabled"}},
    dependencies=[Depends(require_faucet)],
    summary="Deposit lamports",
    description="Credit lamports to an identity. Only available when the "
    "enable_faucet setting is on.",
)
async def deposit(
    identity: str,
    request_data: DepositRequest,
    service: RegistrarService = Depends(get_registrar_service),
) -> BalanceResponse:
    lamports = service.deposit(identity, request_data.lamports)
    return BalanceResponse(identity=identity, lamports=lamports)


@router.get(
    "/balances/{identity}",
    response_model=BalanceResponse,
    summary="Get an identity's balance",
)
async def get_balance(
    identity: str,
    service: RegistrarService = Depends(get_registrar_service),
) -> BalanceResponse:
    return BalanceResponse(identity=identity, lamports=service.balance_of(identity))
