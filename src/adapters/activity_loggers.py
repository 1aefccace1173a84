"""`ActivityLogger` backed by structlog."""

from __future__ import annotations

from core.logging import get_logger


class StructlogActivityLogger:
    def __init__(self, name: str = "solid_kit.activity") -> None:
        self._logger = get_logger(name)

    def log(self, action: str) -> None:
        self._logger.info("activity", action=action)
