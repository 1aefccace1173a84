"""User registration orchestration.

`RegistrationService` sequences the composite "register" operation over four
injected capabilities and implements none of the steps itself:

    start -> validating -> persisting -> notifying -> logging -> done

Validation and persistence are fatal: the first failure aborts the run and is
raised. Notification and logging are best-effort and one-shot: their failures
are recorded as warnings on an otherwise successful result, never retried, and
never undo a committed save.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from core.domain.models import ExecutionState, RegistrationResult, UserAccount
from core.errors import (
    LoggingWarning,
    MissingDependencyError,
    NotificationWarning,
    PersistenceFailed,
    StepWarning,
    ValidationFailed,
)
from core.interfaces.capabilities import ActivityLogger, Notifier, Repository, Validator
from core.logging import get_logger
from core.services.conformance import check_capability

logger = get_logger(__name__)


class RegistrationService:
    """Registers a user through validator, repository, notifier and activity logger."""

    _CAPABILITIES: tuple[tuple[str, type], ...] = (
        ("validator", Validator),
        ("repository", Repository),
        ("notifier", Notifier),
        ("activity_logger", ActivityLogger),
    )

    def __init__(
        self,
        *,
        validator: Validator | None,
        repository: Repository | None,
        notifier: Notifier | None,
        activity_logger: ActivityLogger | None,
    ) -> None:
        provided = {
            "validator": validator,
            "repository": repository,
            "notifier": notifier,
            "activity_logger": activity_logger,
        }
        missing = [name for name, _ in self._CAPABILITIES if provided[name] is None]
        if missing:
            raise MissingDependencyError(missing)
        for name, capability in self._CAPABILITIES:
            check_capability(provided[name], capability)

        self._validator = validator
        self._repository = repository
        self._notifier = notifier
        self._activity_logger = activity_logger

    @property
    def validator(self) -> Validator:
        return self._validator

    @property
    def repository(self) -> Repository:
        return self._repository

    @property
    def notifier(self) -> Notifier:
        return self._notifier

    @property
    def activity_logger(self) -> ActivityLogger:
        return self._activity_logger

    def execute(self, entity: UserAccount | Mapping[str, Any]) -> RegistrationResult:
        """Run the registration sequence for one entity.

        Raises:
            ValidationFailed: the entity does not fit `UserAccount` or the
                validator rejected it. Nothing else was called.
            PersistenceFailed: the repository raised. Notifier and activity
                logger were not called.
        """

        transitions = [ExecutionState.START]
        warnings: list[StepWarning] = []

        transitions.append(ExecutionState.VALIDATING)
        try:
            account = self._coerce(entity)
            self._validator.validate(account)
        except ValidationFailed as exc:
            transitions.append(ExecutionState.FAILED)
            exc.transitions = transitions
            logger.info("registration_step_failed", step="validate", error=str(exc))
            raise
        except Exception as exc:
            transitions.append(ExecutionState.FAILED)
            logger.info("registration_step_failed", step="validate", error=str(exc))
            raise ValidationFailed(str(exc), transitions=transitions) from exc

        transitions.append(ExecutionState.PERSISTING)
        try:
            self._repository.save(account)
        except Exception as exc:
            transitions.append(ExecutionState.FAILED)
            logger.error("registration_step_failed", step="save", id=account.id, error=str(exc))
            raise PersistenceFailed(str(exc), transitions=transitions) from exc

        transitions.append(ExecutionState.NOTIFYING)
        try:
            self._notifier.notify(account)
        except Exception as exc:
            warnings.append(self._warn(NotificationWarning(exc), account))

        transitions.append(ExecutionState.LOGGING)
        try:
            self._activity_logger.log(f"registered user {account.id}")
        except Exception as exc:
            warnings.append(self._warn(LoggingWarning(exc), account))

        transitions.append(ExecutionState.DONE)
        return RegistrationResult(
            entity=account,
            state=ExecutionState.DONE,
            transitions=transitions,
            warnings=warnings,
        )

    register = execute

    @staticmethod
    def _coerce(entity: UserAccount | Mapping[str, Any]) -> UserAccount:
        if isinstance(entity, UserAccount):
            return entity
        if isinstance(entity, Mapping):
            try:
                return UserAccount.model_validate(dict(entity))
            except ValidationError as exc:
                raise ValidationFailed(f"Entity does not match UserAccount: {exc}") from exc
        raise ValidationFailed(f"Unsupported entity type: {type(entity).__name__}")

    @staticmethod
    def _warn(warning: StepWarning, account: UserAccount) -> StepWarning:
        logger.warning(
            "registration_warning",
            step=warning.step,
            id=account.id,
            error=str(warning.cause),
        )
        return warning
