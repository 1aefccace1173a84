"""Repository implementations.

Only an in-memory store is provided: durable storage is outside the scope of
the project, and the registration flow depends on the `Repository` protocol,
not on this class.
"""

from __future__ import annotations

from typing import Iterable

from core.domain.models import UserAccount
from core.errors import RepositoryError


class InMemoryUserRepository:
    """Stores accounts by id for the lifetime of the process.

    `fail_ids` makes `save` raise for specific ids, which lets callers and
    tests exercise the persistence-failure path without a real backend.
    """

    def __init__(self, *, fail_ids: Iterable[int] = ()) -> None:
        self._accounts: dict[int, UserAccount] = {}
        self._fail_ids = frozenset(fail_ids)

    def save(self, entity: UserAccount) -> None:
        if entity.id in self._fail_ids:
            raise RepositoryError(f"Storage rejected user {entity.id}.")
        if entity.id in self._accounts:
            raise RepositoryError(f"User {entity.id} already exists.")
        self._accounts[entity.id] = entity.model_copy(deep=True)

    def get(self, user_id: int) -> UserAccount | None:
        return self._accounts.get(user_id)

    def __len__(self) -> int:
        return len(self._accounts)
