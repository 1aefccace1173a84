"""Composition root.

Every collaborator is built here from `AppSettings` and handed to its
consumer explicitly. Nothing is looked up from module-level state later on.
"""

from __future__ import annotations

from typing import Callable

from rich.console import Console

from adapters.activity_loggers import StructlogActivityLogger
from adapters.notifiers import ConsoleNotifier
from adapters.report_handlers import (
    CsvReportHandler,
    HtmlReportHandler,
    JsonReportHandler,
    PdfReportHandler,
)
from adapters.repositories import InMemoryUserRepository
from adapters.validators import ActiveStatusValidator, CompositeValidator, RequiredEmailValidator
from core.config import AppSettings
from core.errors import UnknownKeyError
from core.interfaces.capabilities import ReportHandler, Repository
from core.services.registration import RegistrationService
from core.services.report_registry import ReportRegistry


def _handler_factories(settings: AppSettings) -> dict[str, Callable[[], ReportHandler]]:
    def html() -> HtmlReportHandler:
        return HtmlReportHandler(templates_dir=settings.templates_dir)

    return {
        "json": JsonReportHandler,
        "csv": lambda: CsvReportHandler(delimiter=settings.csv_delimiter),
        "html": html,
        "pdf": lambda: PdfReportHandler(html=html()),
    }


def available_report_formats(settings: AppSettings) -> list[str]:
    return sorted(_handler_factories(settings))


def build_report_registry(settings: AppSettings) -> ReportRegistry:
    """Registry with one handler per key in `settings.report_formats`.

    Raises:
        UnknownKeyError: a configured key has no built-in handler.
    """

    factories = _handler_factories(settings)
    registry = ReportRegistry(allow_override=settings.allow_handler_override)
    for key in settings.report_formats:
        factory = factories.get(key)
        if factory is None:
            raise UnknownKeyError(key, factories)
        registry.register(key, factory())
    return registry


def build_registration_service(
    settings: AppSettings,
    *,
    repository: Repository | None = None,
    console: Console | None = None,
) -> RegistrationService:
    """Registration service wired with the built-in stand-in collaborators."""

    return RegistrationService(
        validator=CompositeValidator([RequiredEmailValidator(), ActiveStatusValidator()]),
        repository=repository if repository is not None else InMemoryUserRepository(),
        notifier=ConsoleNotifier(console),
        activity_logger=StructlogActivityLogger(settings.activity_logger_name),
    )
