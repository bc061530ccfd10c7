"""
Domain exceptions - Semantic error types for the name registrar.

Every error carries a ``code`` naming its kind. The code is surfaced
verbatim to callers so client code can branch on it without parsing
messages.
"""


class RegistrarError(Exception):
    """Base class for registrar domain errors."""

    code = "RegistrarError"


class InvalidNameLength(RegistrarError):
    """Name is shorter or longer than the permitted bounds."""

    code = "InvalidNameLength"


class InvalidNameCharacters(RegistrarError):
    """Name contains characters outside [a-z0-9_]."""

    code = "InvalidNameCharacters"


class AlreadyRegistered(RegistrarError):
    """A live record already exists for the name."""

    code = "AlreadyRegistered"


class NotFound(RegistrarError):
    """No record exists for the name."""

    code = "NotFound"


class Unauthorized(RegistrarError):
    """Caller is not the name owner or the registry authority."""

    code = "Unauthorized"


class InsufficientFunds(RegistrarError):
    """Fee payer balance is below the required fee."""

    code = "InsufficientFunds"


class AlreadyInitialized(RegistrarError):
    """The registry singleton already exists."""

    code = "AlreadyInitialized"


class NotInitialized(RegistrarError):
    """The registry singleton has not been created yet."""

    code = "NotInitialized"


class InvalidRenewalPeriod(RegistrarError):
    """Renewal years outside the permitted range."""

    code = "InvalidRenewalPeriod"


class NameExpired(RegistrarError):
    """The name's lease has run out."""

    code = "NameExpired"


class CorruptRecord(RegistrarError):
    """Stored bytes do not decode to the expected record type."""

    code = "CorruptRecord"
