from __future__ import annotations

import re

from pool_valuation.domain.exceptions import InvalidAddressError

_ADDRESS_RE = re.compile(r"^0x[0-9a-f]+$")


def canonical_address(value: str) -> str:
    return value.strip().lower()


def normalize_address(value: str, *, field_name: str = "address") -> str:
    address = canonical_address(value)
    if not _ADDRESS_RE.match(address):
        raise InvalidAddressError(f"{field_name} must be a 0x-prefixed hex string.")
    return address
