"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
"""

from pydantic import BaseModel, Field

from registrar.domain.records import U64_MAX, NameRecord, Registry


class RegisterNameRequest(BaseModel):
    """Request model for name registration."""

    name: str = Field(..., description="Name to register (3-12 chars, [a-z0-9_])")
    treasury: str = Field(..., min_length=1, description="Identity receiving the fee")


class TransferNameRequest(BaseModel):
    """Request model for name transfer."""

    new_owner: str = Field(..., min_length=1)


class RenewNameRequest(BaseModel):
    """Request model for lease renewal."""

    years: int = Field(..., description="Years to extend the lease by")
    treasury: str = Field(..., min_length=1, description="Identity receiving the fee")


class SetResolverRequest(BaseModel):
    """Request model for setting or clearing a name's resolver."""

    resolver: str | None = None


class UpdateFeeRequest(BaseModel):
    """Request model for changing the registration fee."""

    fee_lamports: int = Field(..., ge=0, le=U64_MAX)


class DepositRequest(BaseModel):
    """Request model for crediting an identity."""

    lamports: int = Field(..., gt=0, le=U64_MAX)


class RegistryResponse(BaseModel):
    """Registry singleton state."""

    authority: str
    total_registered: int
    fee_lamports: int

    @classmethod
    def from_record(cls, registry: Registry) -> "RegistryResponse":
        return cls(
            authority=registry.authority,
            total_registered=registry.total_registered,
            fee_lamports=registry.fee_lamports,
        )


class NameRecordResponse(BaseModel):
    """Name record state."""

    name: str
    owner: str
    expires_at: int
    registered_at: int
    resolver: str | None

    @classmethod
    def from_record(cls, record: NameRecord) -> "NameRecordResponse":
        return cls(
            name=record.name,
            owner=record.owner,
            expires_at=record.expires_at,
            registered_at=record.registered_at,
            resolver=record.resolver,
        )


class BalanceResponse(BaseModel):
    """Balance of an identity."""

    identity: str
    lamports: int


class ErrorDetail(BaseModel):
    """Error kind and human-readable message."""

    code: str
    message: str


class ErrorResponse(BaseModel):
    """Standard error response model."""

    detail: ErrorDetail
