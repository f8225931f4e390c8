"""Unit tests for app.services.export and app.services.renderers: formats, layout, failures."""

import io
import unittest
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

from openpyxl import load_workbook

from app.core.config import settings
from app.core.errors import InvalidArgumentError, RenderError
from app.services.export import (
    EXPORT_COLUMNS,
    PDF_MEDIA_TYPE,
    XLSX_MEDIA_TYPE,
    export_users,
    normalize_format,
    render_users_html,
)
from app.services.renderers import (
    PageSettings,
    SheetSettings,
    render_html_to_pdf,
    render_rows_to_spreadsheet,
)


def _user(id: str = "0d6f8e0e-1111-4a6f-9d7a-2b1c3d4e5f60", username: str = "rahul@gmail.com", age: int = 30) -> SimpleNamespace:
    """Stand-in with the attributes the exporter reads."""
    return SimpleNamespace(id=id, username=username, age=age)


class TestNormalizeFormat(unittest.TestCase):
    def test_accepts_known_formats_case_insensitively(self) -> None:
        self.assertEqual(normalize_format("PDF"), "pdf")
        self.assertEqual(normalize_format(" Excel "), "excel")

    def test_rejects_unknown_format(self) -> None:
        for value in ("csv", "xlsx", "", None):
            with self.assertRaises(InvalidArgumentError):
                normalize_format(value)


class TestRenderUsersHtml(unittest.TestCase):
    def test_header_only_for_empty_set(self) -> None:
        html = render_users_html([])
        self.assertIn("<tr><th>ID</th><th>Username</th><th>Age</th></tr>", html)
        self.assertNotIn("<td>", html)
        self.assertIn('href="export.css"', html)

    def test_one_row_per_user_with_escaping(self) -> None:
        html = render_users_html([_user(), _user(username="<b>x</b>&co", age=41)])
        self.assertEqual(html.count("<td>"), 6)
        self.assertIn("&lt;b&gt;x&lt;/b&gt;&amp;co", html)
        self.assertNotIn("<b>x</b>", html)


class TestPdfExport(unittest.TestCase):
    def test_empty_set_produces_non_empty_pdf(self) -> None:
        exported = export_users([], "pdf", settings)
        self.assertEqual(exported.media_type, PDF_MEDIA_TYPE)
        self.assertEqual(exported.filename, "users_export.pdf")
        self.assertTrue(exported.content.startswith(b"%PDF"))

    def test_rows_produce_pdf(self) -> None:
        content = render_html_to_pdf(
            render_users_html([_user(), _user(username="shubham@gmail.com", age=27)]),
            PageSettings(size="A4", orientation="landscape", margin_mm=15),
        )
        self.assertTrue(content.startswith(b"%PDF"))

    @patch("app.services.renderers.pisa.CreatePDF")
    def test_renderer_error_status_raises(self, mock_create: MagicMock) -> None:
        mock_create.return_value = SimpleNamespace(err=1)
        with self.assertRaises(RenderError):
            render_html_to_pdf("<html><body></body></html>", PageSettings())

    @patch("app.services.renderers.pisa.CreatePDF")
    def test_renderer_exception_raises(self, mock_create: MagicMock) -> None:
        mock_create.side_effect = RuntimeError("boom")
        with self.assertRaises(RenderError):
            export_users([_user()], "pdf", settings)


class TestExcelExport(unittest.TestCase):
    def test_sheet_has_header_and_rows(self) -> None:
        users = [_user(), _user(id="b7c1c9a2-2222-4b1e-8f00-000000000002", username="shubham@gmail.com", age=27)]
        exported = export_users(users, "excel", settings)
        self.assertEqual(exported.media_type, XLSX_MEDIA_TYPE)
        self.assertEqual(exported.filename, "users_export.xlsx")

        workbook = load_workbook(io.BytesIO(exported.content))
        self.assertEqual(workbook.sheetnames, [settings.EXPORT_SHEET_TITLE])
        rows = list(workbook.active.iter_rows(values_only=True))
        self.assertEqual(rows[0], EXPORT_COLUMNS)
        self.assertEqual(rows[1], (users[0].id, "rahul@gmail.com", 30))
        self.assertEqual(rows[2], (users[1].id, "shubham@gmail.com", 27))
        self.assertEqual(len(rows), 3)

    def test_columns_are_auto_fit(self) -> None:
        content = render_rows_to_spreadsheet(
            [("ID", "Username"), ("1", "a-rather-long-username@example.com")],
            SheetSettings(title="Report"),
        )
        sheet = load_workbook(io.BytesIO(content))["Report"]
        self.assertGreaterEqual(sheet.column_dimensions["B"].width, len("a-rather-long-username@example.com"))
        self.assertTrue(sheet["A1"].font.bold)

    def test_settings_are_per_call(self) -> None:
        first = load_workbook(io.BytesIO(render_rows_to_spreadsheet([("ID",)], SheetSettings(title="One"))))
        second = load_workbook(io.BytesIO(render_rows_to_spreadsheet([("ID",)], SheetSettings(title="Two"))))
        self.assertEqual(first.sheetnames, ["One"])
        self.assertEqual(second.sheetnames, ["Two"])

    @patch("app.services.renderers.Workbook")
    def test_renderer_failure_propagates(self, mock_workbook: MagicMock) -> None:
        mock_workbook.return_value.save.side_effect = OSError("disk full")
        with self.assertRaises(RenderError):
            export_users([_user()], "excel", settings)


if __name__ == "__main__":
    unittest.main()
