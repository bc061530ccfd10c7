"""
Address derivation - Deterministic storage keys from seeds.

Every persisted record lives at an address computed from the program id
and a short list of seeds:

    registry     -> derive_address(program_id, b"registry")
    name record  -> derive_address(program_id, b"name", name.encode())

Each seed is length-prefixed before hashing, so ``(b"name", b"ab")`` and
``(b"nam", b"eab")`` hash different preimages.
"""

import hashlib

ADDRESS_SIZE = 32
MAX_SEED_LENGTH = 32
MAX_SEEDS = 16

REGISTRY_SEED = b"registry"
NAME_SEED = b"name"

_DOMAIN_TAG = b"ProgramDerivedAddress"


def derive_address(program_id: bytes, *seeds: bytes) -> bytes:
    """
    Compute the 32-byte address for a program id and seed list.

    Args:
        program_id: Identifier of the owning program (non-empty bytes)
        *seeds: One or more seeds, each at most 32 bytes

    Returns:
        SHA-256 digest identifying the storage location

    Raises:
        ValueError: If the program id or any seed is malformed
    """
    if not isinstance(program_id, (bytes, bytearray)) or not program_id:
        raise ValueError("program_id must be non-empty bytes")
    if not seeds:
        raise ValueError("at least one seed is required")
    if len(seeds) > MAX_SEEDS:
        raise ValueError(f"at most {MAX_SEEDS} seeds are allowed")

    digest = hashlib.sha256()
    for seed in seeds:
        if not isinstance(seed, (bytes, bytearray)):
            raise ValueError(f"seed must be bytes, got {type(seed).__name__}")
        if len(seed) > MAX_SEED_LENGTH:
            raise ValueError(f"seed length {len(seed)} exceeds max {MAX_SEED_LENGTH}")
        digest.update(bytes([len(seed)]))
        digest.update(seed)
    digest.update(bytes(program_id))
    digest.update(_DOMAIN_TAG)
    return digest.digest()


def registry_address(program_id: bytes) -> bytes:
    """Address of the registry singleton."""
    return derive_address(program_id, REGISTRY_SEED)


def name_address(program_id: bytes, name: str) -> bytes:
    """Address of the record for ``name``."""
    return derive_address(program_id, NAME_SEED, name.encode("utf-8"))
