"""Shared fixtures and call-counting fakes."""

from __future__ import annotations

import logging
import os

import pytest
import structlog

from core.domain.models import UserAccount
from core.errors import RepositoryError, ValidationFailed


class CountingValidator:
    def __init__(self, *, reject: bool = False) -> None:
        self.reject = reject
        self.calls: list[UserAccount] = []

    def validate(self, entity: UserAccount) -> None:
        self.calls.append(entity)
        if self.reject:
            raise ValidationFailed(f"rejected {entity.id}")


class EmailRequiredFake:
    def __init__(self) -> None:
        self.calls = 0

    def validate(self, entity: UserAccount) -> None:
        self.calls += 1
        if not entity.email:
            raise ValueError("email is required")


class CountingRepository:
    def __init__(self, *, fail: bool = False) -> None:
        self.fail = fail
        self.saved: list[UserAccount] = []
        self.calls = 0

    def save(self, entity: UserAccount) -> None:
        self.calls += 1
        if self.fail:
            raise RepositoryError("disk full")
        self.saved.append(entity)


class CountingNotifier:
    def __init__(self, *, fail: bool = False) -> None:
        self.fail = fail
        self.calls = 0

    def notify(self, entity: UserAccount) -> None:
        self.calls += 1
        if self.fail:
            raise ConnectionError("smtp down")


class CountingLogger:
    def __init__(self, *, fail: bool = False) -> None:
        self.fail = fail
        self.actions: list[str] = []

    def log(self, action: str) -> None:
        self.actions.append(action)
        if self.fail:
            raise OSError("log sink unavailable")


class CountingHandler:
    def __init__(self, name: str) -> None:
        self.name = name
        self.calls: list[object] = []

    def generate(self, data: object) -> str:
        self.calls.append(data)
        return f"{self.name}:{data!r}"


@pytest.fixture
def validator() -> CountingValidator:
    return CountingValidator()


@pytest.fixture
def repository() -> CountingRepository:
    return CountingRepository()


@pytest.fixture
def notifier() -> CountingNotifier:
    return CountingNotifier()


@pytest.fixture
def activity_logger() -> CountingLogger:
    return CountingLogger()


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    structlog.reset_defaults()
    for handler in list(logging.root.handlers):
        if isinstance(handler.formatter, structlog.stdlib.ProcessorFormatter):
            logging.root.removeHandler(handler)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    """Keep settings independent of the developer's `.env` files and env vars."""

    for key in list(os.environ):
        if key.startswith("SOLID_KIT_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("HOME", str(tmp_path))
