from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Protocol


class UnitOfWorkPort(Protocol):
    def transaction(self) -> AbstractContextManager[None]:
        """Group every store call made inside the block into one atomic write.

        Nested calls join the outer transaction.
        """
        ...
