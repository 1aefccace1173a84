"""Doctor command for environment diagnostics."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from adapters.report_handlers import HtmlReportHandler, PdfReportHandler
from core.config import AppSettings
from core.domain.models import ReportData
from core.services.wiring import available_report_formats

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()

_SAMPLE = ReportData(title="doctor", rows=[{"check": "ok"}])


def _check_html(settings: AppSettings) -> tuple[bool, str]:
    try:
        html = HtmlReportHandler(templates_dir=settings.templates_dir).generate(_SAMPLE)
        return True, f"{len(html)} characters"
    except Exception as exc:
        return False, str(exc)


def _check_pdf(settings: AppSettings) -> tuple[bool, str]:
    """Attempt to render a minimal PDF to detect WeasyPrint issues."""

    try:
        html = HtmlReportHandler(templates_dir=settings.templates_dir)
        pdf = PdfReportHandler(html=html).generate(_SAMPLE)
        return True, f"{len(pdf)} bytes"
    except Exception as exc:
        return False, str(exc)


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="solid-kit Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    built_in = available_report_formats(settings)
    unknown = [key for key in settings.report_formats if key not in built_in]
    if unknown:
        table.add_row("Report formats", "FAIL", f"no built-in handler for: {', '.join(unknown)}")
    else:
        table.add_row("Report formats", "OK", ", ".join(settings.report_formats))
    table.add_row("Built-in formats", "OK", ", ".join(built_in))
    table.add_row("Handler override", "ON" if settings.allow_handler_override else "OFF", "")

    ok_html, detail_html = _check_html(settings)
    table.add_row("HTML template", "OK" if ok_html else "FAIL", detail_html)

    if "pdf" in settings.report_formats:
        ok_pdf, detail_pdf = _check_pdf(settings)
        table.add_row("WeasyPrint PDF", "OK" if ok_pdf else "FAIL", detail_pdf)
    else:
        ok_pdf = True
        table.add_row("WeasyPrint PDF", "SKIPPED", "pdf not in report formats")

    _console.print(table)

    if not ok_pdf:
        _console.print(
            "\n[yellow]Note:[/yellow] Remove `pdf` from SOLID_KIT_REPORT_FORMATS or install Pango for WeasyPrint."
        )
    if unknown or not (ok_html and ok_pdf):
        raise typer.Exit(code=1)
