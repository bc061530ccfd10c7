"""
Persisted records - Registry singleton and per-name lease records.

Records are stored as bytes at their derived address. The layout is an
8-byte type discriminator followed by the fields in declaration order:

    u64 / i64   8 bytes, little-endian
    string      u32 little-endian length, then UTF-8 bytes
    option      1 tag byte (0 = none, 1 = some), then the value

Decoding rejects a foreign discriminator, truncated input and trailing
bytes with CorruptRecord.
"""

import hashlib
import struct
from dataclasses import dataclass, replace

from .exceptions import CorruptRecord

U64_MAX = (1 << 64) - 1
I64_MIN = -(1 << 63)
I64_MAX = (1 << 63) - 1

DEFAULT_FEE_LAMPORTS = 100_000_000
SECONDS_PER_YEAR = 365 * 24 * 60 * 60
DEFAULT_LEASE_SECONDS = SECONDS_PER_YEAR


def discriminator(type_name: str) -> bytes:
    """First 8 bytes of sha256("account:<TypeName>")."""
    return hashlib.sha256(f"account:{type_name}".encode()).digest()[:8]


class _Writer:
    def __init__(self, type_name: str) -> None:
        self._buf = bytearray(discriminator(type_name))

    def u64(self, value: int) -> "_Writer":
        if not 0 <= value <= U64_MAX:
            raise ValueError(f"u64 out of range: {value}")
        self._buf += struct.pack("<Q", value)
        return self

    def i64(self, value: int) -> "_Writer":
        if not I64_MIN <= value <= I64_MAX:
            raise ValueError(f"i64 out of range: {value}")
        self._buf += struct.pack("<q", value)
        return self

    def string(self, value: str) -> "_Writer":
        raw = value.encode("utf-8")
        self._buf += struct.pack("<I", len(raw))
        self._buf += raw
        return self

    def optional_string(self, value: str | None) -> "_Writer":
        if value is None:
            self._buf.append(0)
            return self
        self._buf.append(1)
        return self.string(value)

    def getvalue(self) -> bytes:
        return bytes(self._buf)


class _Reader:
    def __init__(self, type_name: str, data: bytes) -> None:
        self._type_name = type_name
        self._data = data
        self._pos = 0
        if self._take(8) != discriminator(type_name):
            raise CorruptRecord(f"Not a {type_name} record")

    def _take(self, size: int) -> bytes:
        end = self._pos + size
        if end > len(self._data):
            raise CorruptRecord(f"Truncated {self._type_name} record")
        chunk = self._data[self._pos : end]
        self._pos = end
        return chunk

    def u64(self) -> int:
        return struct.unpack("<Q", self._take(8))[0]

    def i64(self) -> int:
        return struct.unpack("<q", self._take(8))[0]

    def string(self) -> str:
        (length,) = struct.unpack("<I", self._take(4))
        try:
            return self._take(length).decode("utf-8")
        except UnicodeDecodeError as e:
            raise CorruptRecord(f"Invalid UTF-8 in {self._type_name} record") from e

    def optional_string(self) -> str | None:
        tag = self._take(1)[0]
        if tag == 0:
            return None
        if tag != 1:
            raise CorruptRecord(f"Invalid option tag {tag} in {self._type_name} record")
        return self.string()

    def finish(self) -> None:
        if self._pos != len(self._data):
            raise CorruptRecord(f"Trailing bytes after {self._type_name} record")


@dataclass(frozen=True)
class Registry:
    """
    Registry singleton.

    Tracks the administrative authority, the number of registrations ever
    made and the current per-registration fee.
    """

    authority: str
    total_registered: int = 0
    fee_lamports: int = DEFAULT_FEE_LAMPORTS

    def record_registration(self) -> "Registry":
        """Return a copy with the registration counter advanced by one."""
        if self.total_registered >= U64_MAX:
            raise OverflowError("total_registered overflow")
        return replace(self, total_registered=self.total_registered + 1)

    def renewal_fee(self, years: int) -> int:
        """Fee for extending a lease by ``years``: the registration fee per year."""
        fee = self.fee_lamports * years
        if fee > U64_MAX:
            raise OverflowError("renewal fee overflow")
        return fee

    def to_bytes(self) -> bytes:
        return (
            _Writer("Registry")
            .string(self.authority)
            .u64(self.total_registered)
            .u64(self.fee_lamports)
            .getvalue()
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> "Registry":
        reader = _Reader("Registry", data)
        record = cls(
            authority=reader.string(),
            total_registered=reader.u64(),
            fee_lamports=reader.u64(),
        )
        reader.finish()
        return record


@dataclass(frozen=True)
class NameRecord:
    """
    Leased ownership of a single name.

    ``expires_at`` is an absolute unix timestamp; a record whose expiry is
    at or before the current time is expired and may be reclaimed.
    """

    name: str
    owner: str
    expires_at: int
    registered_at: int
    resolver: str | None = None

    def is_expired(self, now: int) -> bool:
        return self.expires_at <= now

    def extended(self, years: int) -> "NameRecord":
        """Return a copy with the lease pushed out by ``years`` 365-day years."""
        expires_at = self.expires_at + years * SECONDS_PER_YEAR
        if expires_at > I64_MAX:
            raise OverflowError("expires_at overflow")
        return replace(self, expires_at=expires_at)

    def to_bytes(self) -> bytes:
        return (
            _Writer("NameRecord")
            .string(self.name)
            .string(self.owner)
            .i64(self.expires_at)
            .i64(self.registered_at)
            .optional_string(self.resolver)
            .getvalue()
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> "NameRecord":
        reader = _Reader("NameRecord", data)
        record = cls(
            name=reader.string(),
            owner=reader.string(),
            expires_at=reader.i64(),
            registered_at=reader.i64(),
            resolver=reader.optional_string(),
        )
        reader.finish()
        return record
