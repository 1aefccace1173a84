"""Notifier implementations.

`ConsoleNotifier` prints the message it would send instead of delivering it;
there is no mail transport in this project.
"""

from __future__ import annotations

from rich.console import Console

from core.domain.models import UserAccount
from core.errors import SolidKitError


class ConsoleNotifier:
    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console(stderr=True)

    def notify(self, entity: UserAccount) -> None:
        if not entity.email:
            raise SolidKitError(f"User {entity.id} has no contact address.")
        name = entity.display_name or entity.email
        self._console.print(
            f"[cyan]notify[/cyan] {entity.email}: Welcome aboard, {name}!",
            highlight=False,
        )
