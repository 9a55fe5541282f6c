import os
import shutil
import tempfile
from unittest.mock import MagicMock, Mock, patch

from django.test import SimpleTestCase
from googleapiclient.errors import HttpError

from apps.voucher.exceptions import DriveUploadError, SheetsServiceError
from apps.voucher.services.google_drive_service import GoogleDriveService
from apps.voucher.services.google_sheet_service import GoogleSheetsService


def http_error(status=403, reason="Forbidden"):
    return HttpError(resp=Mock(status=status, reason=reason), content=b"denied")


class GoogleSheetsServiceTest(SimpleTestCase):
    def setUp(self):
        self.api = MagicMock()
        self.service = GoogleSheetsService(sheets_service=self.api)
        self.values = self.api.spreadsheets.return_value.values.return_value

    def test_read_column_pads_blank_rows(self):
        self.values.get.return_value.execute.return_value = {
            "values": [["Pay to"], ["Acme"], [], ["Blue Dart"]]
        }

        column = self.service.read_column("sheet-1", "Contentstack", "D")

        self.assertEqual(column, ["Pay to", "Acme", "", "Blue Dart"])
        self.values.get.assert_called_once_with(
            spreadsheetId="sheet-1", range="Contentstack!D:D"
        )

    def test_read_of_empty_range(self):
        self.values.get.return_value.execute.return_value = {}
        self.assertEqual(self.service.read_spreadsheet("sheet-1", "Tab!A:A"), [])

    def test_http_error_becomes_service_error(self):
        self.values.get.return_value.execute.side_effect = http_error()

        with self.assertRaises(SheetsServiceError):
            self.service.read_spreadsheet("sheet-1", "Tab!A:A")

    def test_transport_error_becomes_service_error(self):
        self.values.append.return_value.execute.side_effect = OSError("connection reset")

        with self.assertRaises(SheetsServiceError):
            self.service.append_rows("sheet-1", "Tab!A:L", [["x"]])

    def test_list_tab_titles(self):
        self.api.spreadsheets.return_value.get.return_value.execute.return_value = {
            "sheets": [
                {"properties": {"title": "Sheet1"}},
                {"properties": {"title": "Surfboard"}},
            ]
        }

        self.assertEqual(self.service.list_tab_titles("sheet-1"), ["Sheet1", "Surfboard"])

    def test_add_tab_requests_capacity(self):
        self.service.add_tab("sheet-1", "Surfboard")

        body = self.api.spreadsheets.return_value.batchUpdate.call_args[1]["body"]
        properties = body["requests"][0]["addSheet"]["properties"]
        self.assertEqual(properties["title"], "Surfboard")
        self.assertEqual(
            properties["gridProperties"], {"rowCount": 1000, "columnCount": 14}
        )

    def test_writes_and_appends_raw_values(self):
        self.values.update.return_value.execute.return_value = {"updatedCells": 12}
        self.values.append.return_value.execute.return_value = {
            "updates": {"updatedRange": "Tab!A2:L2"}
        }

        self.assertEqual(self.service.write_to_spreadsheet("sheet-1", "Tab!A1:L1", [["h"]]), 12)
        self.assertEqual(self.service.append_rows("sheet-1", "Tab!A:L", [["v"]]), "Tab!A2:L2")
        self.assertEqual(self.values.update.call_args[1]["valueInputOption"], "RAW")
        self.assertEqual(self.values.append.call_args[1]["valueInputOption"], "RAW")

    def test_missing_credentials_becomes_service_error(self):
        service = GoogleSheetsService()
        with patch(
            "apps.voucher.services.google_sheet_service.build_service",
            side_effect=RuntimeError("key file not found"),
        ):
            with self.assertRaises(SheetsServiceError):
                service.read_spreadsheet("sheet-1", "Tab!A:A")


class GoogleDriveServiceTest(SimpleTestCase):
    def setUp(self):
        self.tmp_dir = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, self.tmp_dir, True)
        self.pdf_path = os.path.join(self.tmp_dir, "Contentstack_CO-2024-001.pdf")
        with open(self.pdf_path, "wb") as pdf:
            pdf.write(b"%PDF-1.4 test")

        self.api = MagicMock()
        self.files = self.api.files.return_value
        self.service = GoogleDriveService(drive_service=self.api)

    def test_upload_returns_id_and_link(self):
        self.files.create.return_value.execute.return_value = {
            "id": "file-1",
            "webViewLink": "https://drive.google.com/file/d/file-1/view",
        }

        file_id, link = self.service.upload_file(
            self.pdf_path, "Contentstack_CO-2024-001.pdf", folder_id="folder-1"
        )

        self.assertEqual(file_id, "file-1")
        self.assertEqual(link, "https://drive.google.com/file/d/file-1/view")
        kwargs = self.files.create.call_args[1]
        self.assertEqual(
            kwargs["body"], {"name": "Contentstack_CO-2024-001.pdf", "parents": ["folder-1"]}
        )
        self.assertEqual(kwargs["fields"], "id, webViewLink")

    def test_http_error_becomes_upload_error(self):
        self.files.create.return_value.execute.side_effect = http_error(500, "Backend Error")

        with self.assertRaises(DriveUploadError):
            self.service.upload_file(self.pdf_path, "x.pdf", folder_id="folder-1")

    def test_missing_file_becomes_upload_error(self):
        with self.assertRaises(DriveUploadError):
            self.service.upload_file(os.path.join(self.tmp_dir, "gone.pdf"), "gone.pdf")
        self.files.create.assert_not_called()
