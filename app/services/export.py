"""Export a list of users as a downloadable PDF table or Excel sheet."""

from __future__ import annotations

import html
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from app.core.errors import InvalidArgumentError
from app.models import User
from app.services.renderers import (
    PageSettings,
    SheetSettings,
    render_html_to_pdf,
    render_rows_to_spreadsheet,
)

if TYPE_CHECKING:
    from app.core.config import Settings

FORMAT_PDF = "pdf"
FORMAT_EXCEL = "excel"
SUPPORTED_FORMATS = (FORMAT_PDF, FORMAT_EXCEL)

PDF_MEDIA_TYPE = "application/pdf"
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

# Columns shared by both formats, in output order.
EXPORT_COLUMNS = ("ID", "Username", "Age")

STYLESHEET_HREF = "export.css"


@dataclass(frozen=True)
class ExportFile:
    content: bytes
    media_type: str
    filename: str


def normalize_format(fmt: str | None) -> str:
    """Lowercase and validate the requested format; raise InvalidArgumentError if unsupported."""
    value = (fmt or "").strip().lower()
    if value not in SUPPORTED_FORMATS:
        raise InvalidArgumentError("Invalid export format. Supported formats: PDF, Excel.")
    return value


def user_rows(users: Sequence[User]) -> list[tuple[Any, ...]]:
    """Data rows (without header) in EXPORT_COLUMNS order."""
    return [(u.id, u.username, u.age) for u in users]


def render_users_html(users: Sequence[User]) -> str:
    """HTML document with a bordered table: header row plus one row per user."""
    parts = [
        "<html><head>",
        '<meta charset="utf-8">',
        f'<link rel="stylesheet" type="text/css" href="{STYLESHEET_HREF}">',
        "</head><body>",
        '<table border="1" cellpadding="5" cellspacing="0">',
        "<tr>" + "".join(f"<th>{name}</th>" for name in EXPORT_COLUMNS) + "</tr>",
    ]
    for row in user_rows(users):
        cells = "".join(f"<td>{html.escape(str(value))}</td>" for value in row)
        parts.append(f"<tr>{cells}</tr>")
    parts.append("</table></body></html>")
    return "".join(parts)


def page_settings_from(settings: Settings) -> PageSettings:
    return PageSettings(
        size=settings.EXPORT_PAGE_SIZE,
        orientation=settings.EXPORT_PAGE_ORIENTATION,
        margin_mm=settings.EXPORT_MARGIN_MM,
    )


def sheet_settings_from(settings: Settings) -> SheetSettings:
    return SheetSettings(title=settings.EXPORT_SHEET_TITLE)


def export_users(users: Sequence[User], fmt: str, settings: Settings) -> ExportFile:
    """
    Render users in the requested format.

    Raises InvalidArgumentError for an unknown format and RenderError when the
    renderer fails; never returns an empty file.
    """
    kind = normalize_format(fmt)
    if kind == FORMAT_PDF:
        content = render_html_to_pdf(render_users_html(users), page_settings_from(settings))
        return ExportFile(content=content, media_type=PDF_MEDIA_TYPE, filename="users_export.pdf")

    rows = [EXPORT_COLUMNS, *user_rows(users)]
    content = render_rows_to_spreadsheet(rows, sheet_settings_from(settings))
    return ExportFile(content=content, media_type=XLSX_MEDIA_TYPE, filename="users_export.xlsx")
