"""Document renderers: HTML -> PDF (xhtml2pdf) and rows -> XLSX (openpyxl).

Both take their settings per call; neither keeps module-level renderer state.
"""

from __future__ import annotations

import io
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter
from xhtml2pdf import pisa

from app.core.errors import RenderError

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).resolve().parent.parent / "static"

# Height reserved below the content frame for the page-number footer.
FOOTER_HEIGHT_MM = 8

# Excel column width is measured in characters; keep very long values readable.
MAX_COLUMN_WIDTH = 60


@dataclass(frozen=True)
class PageSettings:
    """Paper, orientation and uniform margin for PDF output."""

    size: str = "A4"
    orientation: str = "portrait"
    margin_mm: int = 10


@dataclass(frozen=True)
class SheetSettings:
    """Worksheet options for spreadsheet output."""

    title: str = "Users"
    auto_fit: bool = True
    bold_header: bool = True


def _page_css(page: PageSettings) -> str:
    margin = page.margin_mm
    return (
        "<style>"
        "@page {"
        f" size: {page.size.lower()} {page.orientation};"
        f" margin: {margin}mm;"
        f" margin-bottom: {margin + FOOTER_HEIGHT_MM}mm;"
        " @frame footer_frame {"
        " -pdf-frame-content: page_footer;"
        f" bottom: {max(margin // 2, 1)}mm;"
        f" margin-left: {margin}mm;"
        f" margin-right: {margin}mm;"
        f" height: {FOOTER_HEIGHT_MM}mm;"
        " }"
        "}"
        "</style>"
    )


_PAGE_FOOTER = (
    '<div id="page_footer">Page <pdf:pagenumber> of <pdf:pagecount></div>'
)


def _with_page_layout(html: str, page: PageSettings) -> str:
    """Inject @page rules into <head> and the footer block before </body>."""
    css = _page_css(page)
    if "<head>" in html:
        html = html.replace("<head>", "<head>" + css, 1)
    else:
        html = css + html
    if "</body>" in html:
        return html.replace("</body>", _PAGE_FOOTER + "</body>", 1)
    return html + _PAGE_FOOTER


def _static_link_callback(uri: str, rel: str | None) -> str:
    """Resolve relative stylesheet links to the bundled static directory."""
    if "://" in uri:
        return uri
    candidate = (STATIC_DIR / uri).resolve()
    if candidate.is_file() and STATIC_DIR in candidate.parents:
        return str(candidate)
    return uri


def render_html_to_pdf(html: str, page_settings: PageSettings) -> bytes:
    """Convert an HTML document to paginated PDF bytes. Raises RenderError on failure."""
    buffer = io.BytesIO()
    try:
        status = pisa.CreatePDF(
            src=_with_page_layout(html, page_settings),
            dest=buffer,
            encoding="utf-8",
            link_callback=_static_link_callback,
        )
    except Exception as e:
        raise RenderError("PDF rendering failed") from e
    if status.err:
        logger.error("xhtml2pdf reported errors", extra={"error_count": status.err})
        raise RenderError("PDF rendering failed")
    content = buffer.getvalue()
    if not content:
        raise RenderError("PDF rendering produced no output")
    return content


def _cell_width(value: Any) -> int:
    return len(str(value)) if value is not None else 0


def render_rows_to_spreadsheet(
    rows: Sequence[Sequence[Any]],
    sheet_settings: SheetSettings,
) -> bytes:
    """
    Write rows (first row is the header) to a single-sheet XLSX workbook.
    Raises RenderError on failure.
    """
    try:
        workbook = Workbook()
        sheet = workbook.active
        sheet.title = sheet_settings.title
        for row in rows:
            sheet.append(list(row))

        if sheet_settings.bold_header and rows:
            for cell in sheet[1]:
                cell.font = Font(bold=True)

        if sheet_settings.auto_fit:
            widths: dict[int, int] = {}
            for row in rows:
                for idx, value in enumerate(row, start=1):
                    widths[idx] = max(widths.get(idx, 0), _cell_width(value))
            for idx, width in widths.items():
                sheet.column_dimensions[get_column_letter(idx)].width = min(
                    width + 2, MAX_COLUMN_WIDTH
                )

        buffer = io.BytesIO()
        workbook.save(buffer)
    except Exception as e:
        raise RenderError("Spreadsheet rendering failed") from e
    return buffer.getvalue()
