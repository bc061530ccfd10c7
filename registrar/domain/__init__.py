"""
Domain layer - Pure business logic with zero framework imports.

This package contains the name registrar state machine: address
derivation, name validation, lease records, fee accounting and the
orchestrating service. It defines its own port interfaces for
infrastructure abstraction, keeping storage and delivery swappable.
"""

from .exceptions import (
    AlreadyInitialized,
    AlreadyRegistered,
    CorruptRecord,
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
from .ports import AccountStore, AccountTransaction, Clock, EventPublisher
from .records import NameRecord, Registry
from .registrar import RegistrarService

__all__ = [
    "AccountStore",
    "AccountTransaction",
    "AlreadyInitialized",
    "AlreadyRegistered",
    "Clock",
    "CorruptRecord",
    "EventPublisher",
    "InsufficientFunds",
    "InvalidNameCharacters",
    "InvalidNameLength",
    "InvalidRenewalPeriod",
    "NameExpired",
    "NameRecord",
    "NotFound",
    "NotInitialized",
    "RegistrarError",
    "RegistrarService",
    "Registry",
    "Unauthorized",
]
