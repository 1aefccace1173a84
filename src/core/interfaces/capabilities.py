"""Collaborator contracts.

Why Protocol:
- Structural contracts (duck typing) without a rigid base class.
- Every capability exposes only the method every implementer can provide;
  a notifier is never asked to persist and a repository is never asked to
  log.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from core.domain.models import UserAccount


@runtime_checkable
class Validator(Protocol):
    """Vets an entity before anything is persisted.

    Contract:
    - Returns `None` for a valid entity.
    - Raises for an invalid one. Returning quietly on invalid input breaks the
      contract (see `core.services.conformance`).
    """

    def validate(self, entity: UserAccount) -> None: ...


@runtime_checkable
class Repository(Protocol):
    """Persists an entity; raises on storage errors."""

    def save(self, entity: UserAccount) -> None: ...


@runtime_checkable
class Notifier(Protocol):
    """Tells the entity's owner about the operation. Best-effort."""

    def notify(self, entity: UserAccount) -> None: ...


@runtime_checkable
class ActivityLogger(Protocol):
    """Records that an action happened. Best-effort."""

    def log(self, action: str) -> None: ...


@runtime_checkable
class ReportHandler(Protocol):
    """Turns report data into one output format.

    `generate` is a pure transformation: no writes to shared state. It raises
    `MalformedReportData` when the input does not fit `ReportData`.
    """

    def generate(self, data: Any) -> Any: ...
