"""
Unit tests for API request/response models.

Tests Pydantic model validation for registrar endpoints.
"""

import pytest
from pydantic import ValidationError

from registrar.api.models import (
    DepositRequest,
    ErrorResponse,
    NameRecordResponse,
    RegisterNameRequest,
    RegistryResponse,
    RenewNameRequest,
    SetResolverRequest,
    UpdateFeeRequest,
)
from registrar.domain.records import NameRecord, Registry


class TestRegisterNameRequest:
    """Tests for RegisterNameRequest model."""

    def test_valid_request(self) -> None:
        request = RegisterNameRequest(name="testname", treasury="treasury")
        assert request.name == "testname"
        assert request.treasury == "treasury"

    def test_name_rules_left_to_domain(self) -> None:
        """Short names pass the model so the domain can report InvalidNameLength."""
        assert RegisterNameRequest(name="ab", treasury="t").name == "ab"

    def test_empty_treasury_rejected(self) -> None:
        with pytest.raises(ValidationError):
            RegisterNameRequest(name="testname", treasury="")

    def test_missing_treasury_rejected(self) -> None:
        with pytest.raises(ValidationError):
            RegisterNameRequest(name="testname")  # type: ignore[call-arg]


class TestRenewNameRequest:
    """Tests for RenewNameRequest model."""

    def test_valid_request(self) -> None:
        assert RenewNameRequest(years=2, treasury="t").years == 2

    def test_non_integer_years_rejected(self) -> None:
        with pytest.raises(ValidationError):
            RenewNameRequest(years="two", treasury="t")  # type: ignore[arg-type]


class TestFeeAndDepositRequests:
    """Tests for amount bounds."""

    def test_fee_zero_allowed(self) -> None:
        assert UpdateFeeRequest(fee_lamports=0).fee_lamports == 0

    def test_fee_negative_rejected(self) -> None:
        with pytest.raises(ValidationError):
            UpdateFeeRequest(fee_lamports=-1)

    def test_fee_above_u64_rejected(self) -> None:
        with pytest.raises(ValidationError):
            UpdateFeeRequest(fee_lamports=1 << 64)

    def test_deposit_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            DepositRequest(lamports=0)

    def test_resolver_defaults_to_none(self) -> None:
        assert SetResolverRequest().resolver is None


class TestResponses:
    """Tests for response construction from domain records."""

    def test_registry_response_from_record(self) -> None:
        response = RegistryResponse.from_record(
            Registry(authority="auth", total_registered=2, fee_lamports=9)
        )
        assert response.model_dump() == {
            "authority": "auth",
            "total_registered": 2,
            "fee_lamports": 9,
        }

    def test_name_record_response_from_record(self) -> None:
        response = NameRecordResponse.from_record(
            NameRecord(name="abc", owner="alice", expires_at=10, registered_at=1)
        )
        assert response.model_dump() == {
            "name": "abc",
            "owner": "alice",
            "expires_at": 10,
            "registered_at": 1,
            "resolver": None,
        }

    def test_error_response(self) -> None:
        response = ErrorResponse(detail={"code": "NotFound", "message": "missing"})
        assert response.detail.code == "NotFound"
