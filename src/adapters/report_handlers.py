"""Report handlers, one per output format.

Why in adapters:
- JSON/CSV/HTML/PDF are output details (Jinja2, WeasyPrint).
- Services only know the `ReportHandler` protocol and `ReportData`.

Every handler is a pure transformation: it takes report data and returns the
rendered document (str, or bytes for PDF). Writing to disk is the caller's job.
"""

from __future__ import annotations

import csv
import io
import json
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape

from core.domain.models import ReportData

_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"


def _get_env(templates_dir: Path | None = None) -> Environment:
    return Environment(
        loader=FileSystemLoader(str(templates_dir or _TEMPLATES_DIR)),
        autoescape=select_autoescape(["html", "xml"]),
    )


class JsonReportHandler:
    """Stable UTF-8 JSON (sorted keys, two-space indent)."""

    def generate(self, data: Any) -> str:
        report = ReportData.coerce(data)
        payload = report.model_dump(mode="json")
        return json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n"


class CsvReportHandler:
    """One header row built from the union of row keys, then one line per row.

    The title is not part of the CSV body so the output stays loadable by
    spreadsheet tools.
    """

    def __init__(self, *, delimiter: str = ",") -> None:
        self._delimiter = delimiter

    def generate(self, data: Any) -> str:
        report = ReportData.coerce(data)
        columns = report.columns()
        buffer = io.StringIO()
        writer = csv.DictWriter(
            buffer,
            fieldnames=columns,
            delimiter=self._delimiter,
            restval="",
            lineterminator="\n",
        )
        if columns:
            writer.writeheader()
            for row in report.rows:
                writer.writerow({str(k): v for k, v in row.items()})
        return buffer.getvalue()


class HtmlReportHandler:
    """Self-contained HTML rendered from `report.html`."""

    def __init__(self, *, templates_dir: Path | None = None) -> None:
        self._templates_dir = templates_dir
        self._env = _get_env(templates_dir)

    @property
    def base_url(self) -> str:
        return str(self._templates_dir or _TEMPLATES_DIR)

    def generate(self, data: Any) -> str:
        report = ReportData.coerce(data)
        template = self._env.get_template("report.html")
        return template.render(
            report=report,
            columns=report.columns(),
        )


class PdfReportHandler:
    """PDF bytes rendered from the HTML report with WeasyPrint.

    Design:
    - Synchronous: WeasyPrint is local CPU/IO work.
    - WeasyPrint is imported on first use because it loads native libraries
      (Pango) that other formats do not need.
    """

    def __init__(self, *, html: HtmlReportHandler | None = None) -> None:
        self._html = html or HtmlReportHandler()

    def generate(self, data: Any) -> bytes:
        html = self._html.generate(data)

        from weasyprint import HTML  # noqa: PLC0415

        return HTML(string=html, base_url=self._html.base_url).write_pdf()
