"""
Unit tests for address derivation.

Tests verify derivation is deterministic, collision-free over the seed
space the registrar uses, and rejects malformed input.
"""

import hashlib

import pytest

from registrar.domain.addresses import (
    ADDRESS_SIZE,
    derive_address,
    name_address,
    registry_address,
)

PROGRAM_ID = b"MNS1111111111111111111111111111111111111111"


class TestDeriveAddress:
    """Tests for derive_address()."""

    def test_address_is_32_bytes(self) -> None:
        """Derived addresses are 32 bytes long."""
        assert len(derive_address(PROGRAM_ID, b"registry")) == ADDRESS_SIZE

    def test_derivation_is_deterministic(self) -> None:
        """Same program id and seeds always give the same address."""
        first = derive_address(PROGRAM_ID, b"name", b"testname")
        second = derive_address(PROGRAM_ID, b"name", b"testname")
        assert first == second

    def test_matches_length_prefixed_sha256(self) -> None:
        """Address is sha256 over length-prefixed seeds, program id and tag."""
        expected = hashlib.sha256(
            b"\x04name" + b"\x03abc" + PROGRAM_ID + b"ProgramDerivedAddress"
        ).digest()
        assert derive_address(PROGRAM_ID, b"name", b"abc") == expected

    def test_program_id_separates_address_space(self) -> None:
        """Different programs derive different addresses for the same seeds."""
        assert derive_address(b"program-a", b"registry") != derive_address(
            b"program-b", b"registry"
        )

    def test_seed_boundaries_do_not_collide(self) -> None:
        """Moving bytes between seeds changes the address."""
        assert derive_address(PROGRAM_ID, b"name", b"ab") != derive_address(
            PROGRAM_ID, b"nam", b"eab"
        )
        assert derive_address(PROGRAM_ID, b"name", b"ab") != derive_address(
            PROGRAM_ID, b"nameab"
        )

    def test_rejects_empty_program_id(self) -> None:
        with pytest.raises(ValueError):
            derive_address(b"", b"registry")

    def test_rejects_missing_seeds(self) -> None:
        with pytest.raises(ValueError):
            derive_address(PROGRAM_ID)

    def test_rejects_non_bytes_seed(self) -> None:
        with pytest.raises(ValueError):
            derive_address(PROGRAM_ID, "registry")  # type: ignore[arg-type]

    def test_rejects_oversized_seed(self) -> None:
        """Seeds longer than 32 bytes are rejected."""
        with pytest.raises(ValueError):
            derive_address(PROGRAM_ID, b"x" * 33)

    def test_accepts_seed_at_max_length(self) -> None:
        assert len(derive_address(PROGRAM_ID, b"x" * 32)) == ADDRESS_SIZE


class TestRegistrarAddresses:
    """Tests for the registry and name address helpers."""

    def test_registry_address_uses_registry_seed(self) -> None:
        assert registry_address(PROGRAM_ID) == derive_address(PROGRAM_ID, b"registry")

    def test_name_address_uses_name_seed(self) -> None:
        assert name_address(PROGRAM_ID, "testname") == derive_address(
            PROGRAM_ID, b"name", b"testname"
        )

    def test_registry_and_names_never_collide(self) -> None:
        """The registry address differs from every name address, including 'registry'."""
        names = ["registry", "abc", "testname", "transfer", "renewable", "a_b_c_1234"]
        addresses = {name_address(PROGRAM_ID, name) for name in names}

        assert len(addresses) == len(names)
        assert registry_address(PROGRAM_ID) not in addresses

    def test_many_names_are_distinct(self) -> None:
        """A few thousand distinct names map to distinct addresses."""
        names = [f"name_{i}" for i in range(5000)]
        addresses = {name_address(PROGRAM_ID, name) for name in names}
        assert len(addresses) == len(names)
