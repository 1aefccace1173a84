"""Tests for the registration orchestrator."""

from __future__ import annotations

import pytest

from conftest import (
    CountingLogger,
    CountingNotifier,
    CountingRepository,
    CountingValidator,
    EmailRequiredFake,
)
from core.domain.models import ExecutionState, UserAccount
from core.errors import (
    CapabilityMismatchError,
    LoggingWarning,
    MissingDependencyError,
    NotificationWarning,
    PersistenceFailed,
    RepositoryError,
    ValidationFailed,
)
from core.services.registration import RegistrationService

ALICE = UserAccount(id=7, email="alice@example.com")


def make_service(validator, repository, notifier, activity_logger) -> RegistrationService:
    return RegistrationService(
        validator=validator,
        repository=repository,
        notifier=notifier,
        activity_logger=activity_logger,
    )


class TestConstruction:
    def test_missing_dependencies_are_all_reported(self, validator, notifier):
        with pytest.raises(MissingDependencyError) as excinfo:
            RegistrationService(
                validator=validator,
                repository=None,
                notifier=notifier,
                activity_logger=None,
            )

        assert excinfo.value.missing == ["repository", "activity_logger"]

    def test_wrong_capability_is_rejected(self, validator, notifier, activity_logger):
        with pytest.raises(CapabilityMismatchError):
            make_service(validator, notifier, notifier, activity_logger)

    def test_collaborators_are_exposed_read_only(self, validator, repository, notifier, activity_logger):
        service = make_service(validator, repository, notifier, activity_logger)

        assert service.repository is repository
        with pytest.raises(AttributeError):
            service.repository = CountingRepository()  # type: ignore[misc]


class TestExecute:
    def test_happy_path(self, validator, repository, notifier, activity_logger):
        service = make_service(validator, repository, notifier, activity_logger)

        result = service.execute(ALICE)

        assert result.ok
        assert result.state is ExecutionState.DONE
        assert result.warnings == []
        assert result.transitions == [
            ExecutionState.START,
            ExecutionState.VALIDATING,
            ExecutionState.PERSISTING,
            ExecutionState.NOTIFYING,
            ExecutionState.LOGGING,
            ExecutionState.DONE,
        ]
        assert repository.saved == [ALICE]
        assert notifier.calls == 1
        assert activity_logger.actions == ["registered user 7"]

    def test_register_is_an_alias(self, validator, repository, notifier, activity_logger):
        service = make_service(validator, repository, notifier, activity_logger)

        assert service.register(ALICE).ok

    def test_validation_failure_stops_everything(self, repository, notifier, activity_logger):
        validator = CountingValidator(reject=True)
        service = make_service(validator, repository, notifier, activity_logger)

        with pytest.raises(ValidationFailed) as excinfo:
            service.execute(ALICE)

        assert repository.calls == 0
        assert notifier.calls == 0
        assert activity_logger.actions == []
        assert excinfo.value.state is ExecutionState.FAILED
        assert excinfo.value.transitions == [
            ExecutionState.START,
            ExecutionState.VALIDATING,
            ExecutionState.FAILED,
        ]

    def test_foreign_validator_errors_become_validation_failed(self, repository, notifier, activity_logger):
        service = make_service(EmailRequiredFake(), repository, notifier, activity_logger)

        with pytest.raises(ValidationFailed) as excinfo:
            service.execute(UserAccount(id=3))

        assert isinstance(excinfo.value.__cause__, ValueError)
        assert excinfo.value.step == "validate"

    def test_mapping_without_email_is_rejected_before_save(self, repository, notifier, activity_logger):
        validator = EmailRequiredFake()
        service = make_service(validator, repository, notifier, activity_logger)

        with pytest.raises(ValidationFailed):
            service.execute({"id": 1})

        assert validator.calls == 1
        assert repository.calls == 0

    def test_mapping_not_matching_schema_fails_validation(self, validator, repository, notifier, activity_logger):
        service = make_service(validator, repository, notifier, activity_logger)

        with pytest.raises(ValidationFailed):
            service.execute({"id": "not-a-number"})

        assert validator.calls == []
        assert repository.calls == 0

    def test_persistence_failure_skips_best_effort_steps(self, validator, notifier, activity_logger):
        repository = CountingRepository(fail=True)
        service = make_service(validator, repository, notifier, activity_logger)

        with pytest.raises(PersistenceFailed) as excinfo:
            service.execute(ALICE)

        assert isinstance(excinfo.value.__cause__, RepositoryError)
        assert excinfo.value.step == "save"
        assert excinfo.value.transitions[-2:] == [ExecutionState.PERSISTING, ExecutionState.FAILED]
        assert notifier.calls == 0
        assert activity_logger.actions == []

    def test_notifier_failure_is_a_warning(self, validator, repository, activity_logger):
        notifier = CountingNotifier(fail=True)
        service = make_service(validator, repository, notifier, activity_logger)

        result = service.execute(ALICE)

        assert result.ok
        assert repository.saved == [ALICE]
        assert activity_logger.actions == ["registered user 7"]
        assert len(result.warnings) == 1
        warning = result.warnings[0]
        assert isinstance(warning, NotificationWarning)
        assert isinstance(warning.cause, ConnectionError)
        assert warning.step == "notify"

    def test_logger_failure_is_a_warning(self, validator, repository, notifier):
        activity_logger = CountingLogger(fail=True)
        service = make_service(validator, repository, notifier, activity_logger)

        result = service.execute(ALICE)

        assert result.ok
        assert [type(w) for w in result.warnings] == [LoggingWarning]

    def test_both_best_effort_steps_failing(self, validator, repository):
        service = make_service(
            validator,
            repository,
            CountingNotifier(fail=True),
            CountingLogger(fail=True),
        )

        result = service.execute(ALICE)

        assert result.ok
        assert [type(w) for w in result.warnings] == [NotificationWarning, LoggingWarning]
        assert repository.saved == [ALICE]

    def test_notifier_is_not_retried(self, validator, repository, activity_logger):
        notifier = CountingNotifier(fail=True)
        service = make_service(validator, repository, notifier, activity_logger)

        service.execute(ALICE)

        assert notifier.calls == 1

    def test_independent_calls_do_not_share_state(self, validator, repository, notifier, activity_logger):
        service = make_service(validator, repository, notifier, activity_logger)

        first = service.execute(UserAccount(id=1, email="a@example.com"))
        second = service.execute(UserAccount(id=2, email="b@example.com"))

        assert first.entity.id == 1
        assert second.entity.id == 2
        assert first.transitions is not second.transitions
        assert [a.id for a in repository.saved] == [1, 2]
