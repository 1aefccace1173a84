"""Error taxonomy shared by the registry, the registration service and adapters.

Fatal errors (`StepFailed` and the registry/wiring errors) are raised to the
caller. Best-effort steps produce `StepWarning` objects that travel inside the
result instead of being raised.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from core.domain.models import ExecutionState


class SolidKitError(Exception):
    """Base class for every error raised by solid-kit."""


class StepFailed(SolidKitError):
    """A fatal step of a composite operation failed.

    `transitions` lists the states visited before the failure, ending with
    `ExecutionState.FAILED`.
    """

    step: str = "unknown"

    def __init__(
        self,
        message: str,
        *,
        transitions: Sequence["ExecutionState"] = (),
    ) -> None:
        super().__init__(message)
        self.transitions = list(transitions)

    @property
    def state(self) -> "ExecutionState | None":
        return self.transitions[-1] if self.transitions else None


class ValidationFailed(StepFailed):
    step = "validate"


class PersistenceFailed(StepFailed):
    step = "save"


class DuplicateKeyError(SolidKitError):
    def __init__(self, key: str) -> None:
        super().__init__(f"A handler is already registered for {key!r}.")
        self.key = key


class UnknownKeyError(SolidKitError, KeyError):
    def __init__(self, key: str, available: Sequence[str] = ()) -> None:
        self.key = key
        self.available = sorted(available)
        super().__init__(f"No handler registered for {key!r}. Available: {self.available}")

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message.
        return str(self.args[0])


class MissingDependencyError(SolidKitError):
    def __init__(self, missing: Sequence[str]) -> None:
        self.missing = list(missing)
        super().__init__(f"Missing required capabilities: {', '.join(self.missing)}")


class CapabilityMismatchError(SolidKitError, TypeError):
    """An injected object does not provide the capability it was bound to."""


class MalformedReportData(SolidKitError, ValueError):
    pass


class ContractViolation(SolidKitError):
    """An implementer broke the documented behaviour of its capability."""


class RepositoryError(SolidKitError):
    pass


class StepWarning(UserWarning):
    """Non-fatal failure of a best-effort step."""

    step: str = "unknown"

    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"{self.step} failed: {cause}")
        self.cause = cause


class NotificationWarning(StepWarning):
    step = "notify"


class LoggingWarning(StepWarning):
    step = "log"
