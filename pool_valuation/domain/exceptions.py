from __future__ import annotations


class DomainError(Exception):
    """Base for domain errors."""


class InvalidAddressError(DomainError, ValueError):
    """Address is not a 0x-prefixed hex string."""
