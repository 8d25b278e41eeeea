from __future__ import annotations

from typing import Protocol

from pool_valuation.domain.entities.token import Token


class TokenPort(Protocol):
    def get_token(self, *, address: str) -> Token | None:
        ...

    def get_or_create_token(self, *, address: str) -> Token:
        ...

    def save_token(self, token: Token) -> None:
        ...
