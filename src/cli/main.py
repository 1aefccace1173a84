"""solid-kit command line interface.

The CLI is a thin edge: it parses options, builds collaborators through
`core.services.wiring` and renders results with Rich. No step logic lives here.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from cli import doctor
from cli.ui_components import build_formats_table, build_registration_panel, print_banner
from core.config import AppSettings
from core.domain.models import AccountStatus, ReportData, UserAccount
from core.errors import MalformedReportData, StepFailed, UnknownKeyError
from core.logging import configure_logging
from core.services.wiring import build_registration_service, build_report_registry

app = typer.Typer(no_args_is_help=True, help="Pluggable report generation and user registration.")
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)


def sanitize_for_filename(value: str) -> str:
    """Generate a filesystem-friendly slug for report files."""

    out: list[str] = []
    for ch in value.strip():
        if ch.isalnum() or ch in ("-", "_", "."):
            out.append(ch)
        else:
            out.append("-")
    cleaned = "".join(out).strip("-_.")
    return cleaned or "report"


def parse_row(raw: str) -> dict[str, str]:
    """Parse `key=value,key=value` into a row mapping."""

    row: dict[str, str] = {}
    for part in raw.split(","):
        if not part.strip():
            continue
        if "=" not in part:
            raise typer.BadParameter(f"Expected key=value, got {part!r}", param_hint="--row")
        key, value = part.split("=", 1)
        key = key.strip()
        if not key:
            raise typer.BadParameter(f"Empty column name in {raw!r}", param_hint="--row")
        row[key] = value.strip()
    return row


@app.callback()
def main(
    ctx: typer.Context,
    banner: bool = typer.Option(False, "--banner", help="Print the banner before running."),
) -> None:
    settings = AppSettings()
    configure_logging(settings)
    ctx.obj = settings
    if banner:
        print_banner(_console)


@app.command()
def formats(ctx: typer.Context) -> None:
    """List the registered report formats."""

    registry = build_report_registry(ctx.obj)
    _console.print(build_formats_table(registry))


@app.command()
def report(
    ctx: typer.Context,
    fmt: str = typer.Argument(..., metavar="FORMAT", help="Report key, e.g. json, csv, html, pdf."),
    title: str = typer.Option(..., "--title", "-t", help="Report title."),
    rows: list[str] = typer.Option([], "--row", "-r", help="Row as key=value,key=value (repeatable)."),
    notes: list[str] = typer.Option([], "--note", help="Note line (repeatable)."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write the report to this file."),
) -> None:
    """Generate a report through the registered handler for FORMAT.

    Exit codes: 2 for an unknown format or malformed data, 3 when the handler
    fails to render (for example WeasyPrint without Pango).
    """

    settings: AppSettings = ctx.obj
    registry = build_report_registry(settings)
    data = {
        "title": title,
        "rows": [parse_row(raw) for raw in rows],
        "notes": list(notes),
        "generated_at": datetime.now(timezone.utc),
    }

    try:
        rendered = registry.dispatch(fmt.lower(), data)
    except UnknownKeyError as exc:
        _err_console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc
    except MalformedReportData as exc:
        _err_console.print(f"[red]Malformed report data:[/red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc
    except Exception as exc:
        _err_console.print(f"[red]Rendering {escape(fmt.lower())} failed:[/red] {escape(str(exc))}")
        _err_console.print(
            "[yellow]Note:[/yellow] Run `solid-kit doctor run`; for PDF, install Pango for WeasyPrint"
            " or remove `pdf` from SOLID_KIT_REPORT_FORMATS."
        )
        raise typer.Exit(code=3) from exc

    if output is None and isinstance(rendered, bytes):
        name = f"{sanitize_for_filename(ReportData.coerce(data).title)}.{fmt.lower()}"
        output = settings.reports_dir / name

    if output is None:
        typer.echo(rendered, nl=False)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(rendered, bytes):
        output.write_bytes(rendered)
    else:
        output.write_text(str(rendered), encoding="utf-8")
    _err_console.print(f"[green]Report written to:[/green] {output}")


@app.command()
def register(
    ctx: typer.Context,
    user_id: int = typer.Option(..., "--id", min=0, help="Account id."),
    email: str | None = typer.Option(None, "--email", help="Contact address."),
    status: AccountStatus = typer.Option(AccountStatus.PENDING, "--status", help="Account status."),
    display_name: str | None = typer.Option(None, "--name", help="Display name."),
) -> None:
    """Register a user through validate → save → notify → log."""

    service = build_registration_service(ctx.obj, console=_err_console)
    account = UserAccount(id=user_id, email=email, status=status, display_name=display_name)

    try:
        result = service.execute(account)
    except StepFailed as exc:
        _err_console.print(f"[red]Registration failed at {exc.step}:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    _console.print(build_registration_panel(result))


def run() -> None:
    app()
