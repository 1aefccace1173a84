"""Rich UI components for the CLI.

Why separate:
- Keeps command logic apart from presentation details.
- Tables/panels can be reused across commands.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import RegistrationResult
from core.services.report_registry import ReportRegistry


def print_banner(console: Console) -> None:
    title = Text("solid-kit", style="bold cyan")
    subtitle = Text("Pluggable reports • Injected collaborators", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_formats_table(registry: ReportRegistry) -> Table:
    """Table of registered report keys and their handlers."""

    table = Table(title="Report Formats")
    table.add_column("Key", style="cyan", no_wrap=True)
    table.add_column("Handler", style="white")
    for key, handler in registry:
        table.add_row(key, type(handler).__name__)
    return table


def build_registration_panel(result: RegistrationResult) -> Panel:
    """Panel summarising a registration run, warnings included."""

    account = result.entity
    body = Text()
    body.append(f"User {account.id}", style="bold")
    if account.email:
        body.append(f" <{account.email}>")
    body.append(f"\nStatus: {account.status.value}")
    body.append("\nSteps: " + " → ".join(state.value for state in result.transitions), style="dim")

    border = "green"
    if result.warnings:
        border = "yellow"
        body.append("\n\nWarnings:\n", style="bold yellow")
        for warning in result.warnings:
            body.append(f"- {warning}\n")

    return Panel(body, title=Text("Registration", style=f"bold {border}"), border_style=border)
