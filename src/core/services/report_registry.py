"""Strategy registry for report handlers.

Adding a format means registering a new key -> handler pair; `dispatch`
itself never changes and never branches on the key beyond the lookup.
"""

from __future__ import annotations

from typing import Any, Iterator

from core.errors import DuplicateKeyError, UnknownKeyError
from core.interfaces.capabilities import ReportHandler
from core.logging import get_logger
from core.services.conformance import check_capability

# Handler used for unknown keys, only when something is registered under it.
DEFAULT_KEY = "*"

logger = get_logger(__name__)


class ReportRegistry:
    """Maps report keys to `ReportHandler` implementations.

    Duplicate keys are rejected unless `override=True` is passed to
    `register`; `allow_override=True` flips that default for the whole
    registry.
    """

    def __init__(self, *, allow_override: bool = False) -> None:
        self._handlers: dict[str, ReportHandler] = {}
        self._allow_override = allow_override

    def register(
        self,
        key: str,
        handler: ReportHandler,
        *,
        override: bool | None = None,
    ) -> ReportHandler:
        check_capability(handler, ReportHandler)
        allowed = self._allow_override if override is None else override
        existing = self._handlers.get(key)
        if existing is not None:
            if not allowed:
                raise DuplicateKeyError(key)
            logger.warning(
                "report_handler_overridden",
                key=key,
                old=type(existing).__name__,
                new=type(handler).__name__,
            )
        self._handlers[key] = handler
        logger.debug("report_handler_registered", key=key, handler=type(handler).__name__)
        return handler

    def unregister(self, key: str) -> ReportHandler:
        try:
            return self._handlers.pop(key)
        except KeyError:
            raise UnknownKeyError(key, self._handlers) from None

    def get(self, key: str) -> ReportHandler | None:
        return self._handlers.get(key)

    def keys(self) -> list[str]:
        return sorted(self._handlers)

    def dispatch(self, key: str, data: Any) -> Any:
        """Run the handler bound to `key` and return its output unchanged.

        Errors raised by the handler propagate as-is.
        """

        handler = self._handlers.get(key)
        if handler is None:
            handler = self._handlers.get(DEFAULT_KEY)
        if handler is None:
            raise UnknownKeyError(key, self._handlers)
        logger.debug("report_dispatched", key=key, handler=type(handler).__name__)
        return handler.generate(data)

    def __contains__(self, key: object) -> bool:
        return key in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)

    def __iter__(self) -> Iterator[tuple[str, ReportHandler]]:
        return iter(sorted(self._handlers.items()))
