"""
Voucher Submission Service

Runs one form submission end to end:

1. validate the category
2. make sure the category's tab exists and has its header row
3. render the PDF receipt and park it in a temporary file
4. upload the file to the Drive folder, then delete it locally
5. append the voucher row (with the PDF link) to the tab
6. email the approver, best effort

A failure in steps 1-5 aborts the submission. The row is only appended after
a successful upload, so a failed upload never leaves a row behind. The email
goes out after the row is durable and its failure is only logged.
"""

import logging
import os
import threading
from collections import defaultdict
from dataclasses import dataclass
from typing import Optional

from django.conf import settings

from apps.voucher.domain import Voucher
from apps.voucher.exceptions import (
    NotificationError,
    SheetsServiceError,
    VoucherRenderError,
)
from apps.voucher.layouts import VoucherLayout, get_layout, get_sheet_url, resolve_category
from apps.voucher.services import notification_service
from apps.voucher.services.google_drive_service import GoogleDriveService
from apps.voucher.services.google_sheet_service import GoogleSheetsService
from apps.voucher.services.voucher_number_service import VoucherNumberAllocator
from apps.voucher.services.voucher_pdf_service import create_voucher_pdf

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Data submitted successfully and PDF uploaded!"

STAGE_PREPARE_TAB = "prepare_tab"
STAGE_APPEND_ROW = "append_row"


@dataclass
class SubmissionResult:
    message: str
    sheet_url: str
    pdf_file_id: str
    pdf_link: str
    voucher_no: str
    notified: bool


class VoucherSubmissionService:
    def __init__(
        self,
        sheets: Optional[GoogleSheetsService] = None,
        drive: Optional[GoogleDriveService] = None,
        allocator: Optional[VoucherNumberAllocator] = None,
        notifier=None,
    ):
        self.sheets = sheets or GoogleSheetsService()
        self.drive = drive or GoogleDriveService()
        self.allocator = allocator or VoucherNumberAllocator(self.sheets)
        self.notifier = notifier or notification_service.send_approval_request
        self._tab_locks = defaultdict(threading.Lock)
        self._tab_locks_guard = threading.Lock()

    def ensure_tab(self, spreadsheet_id: str, layout: VoucherLayout) -> bool:
        """
        Create the category's tab with its header row unless both already exist.

        A tab whose first row is blank (left behind by an interrupted setup)
        gets its header written before any data row can land in row 1.

        Returns:
            bool: True if this call created the tab or wrote its header.
        """
        title = layout.category.value
        header_range = f"{title}!A1:{layout.last_column}1"
        with self._tab_locks_guard:
            lock = self._tab_locks[title]

        with lock:
            if title in self.sheets.list_tab_titles(spreadsheet_id):
                first_row = self.sheets.read_spreadsheet(spreadsheet_id, header_range)
                if first_row and any(str(cell).strip() for cell in first_row[0]):
                    return False
                logger.warning(f"Tab '{title}' in {spreadsheet_id} has no header row")
            else:
                self.sheets.add_tab(spreadsheet_id, title)
                logger.info(f"Created tab '{title}' in {spreadsheet_id}")

            self.sheets.write_to_spreadsheet(spreadsheet_id, header_range, [layout.headers])
            logger.info(f"Wrote header row to '{title}' in {spreadsheet_id}")
            return True

    def write_pdf(self, voucher: Voucher) -> str:
        """Render the voucher into the temporary directory and return the path."""
        buffer = create_voucher_pdf(voucher)
        os.makedirs(settings.VOUCHER_TMP_DIR, exist_ok=True)
        pdf_path = os.path.join(settings.VOUCHER_TMP_DIR, voucher.pdf_filename)
        try:
            with open(pdf_path, "wb") as pdf_file:
                pdf_file.write(buffer.getvalue())
        except OSError as e:
            self._remove(pdf_path)
            raise VoucherRenderError(f"Failed to write {pdf_path}: {str(e)}")
        return pdf_path

    @staticmethod
    def _remove(path: str) -> None:
        try:
            os.remove(path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"Could not remove temporary file {path}: {str(e)}")

    def upload_pdf(self, voucher: Voucher, pdf_path: str):
        try:
            return self.drive.upload_file(
                pdf_path, voucher.pdf_filename, folder_id=settings.DRIVE_FOLDER_ID
            )
        finally:
            self._remove(pdf_path)

    def notify(self, voucher: Voucher, sheet_url: str) -> bool:
        try:
            self.notifier(voucher.voucher_no, sheet_url, voucher.pdf_link)
        except NotificationError as e:
            # the row is already saved, so the submission still counts
            logger.error(f"Approval email for voucher {voucher.voucher_no} failed: {str(e)}")
            return False
        return True

    def submit(self, voucher: Voucher) -> SubmissionResult:
        """
        Submit a voucher.

        Args:
            voucher: The voucher built from the form data.

        Returns:
            SubmissionResult with the sheet URL and Drive file id.

        Raises:
            InvalidCategoryError: Before anything else is touched.
            SheetsServiceError: If the tab could not be prepared or the row not saved.
            VoucherRenderError: If the PDF could not be produced.
            DriveUploadError: If the PDF could not be uploaded.
        """
        category, spreadsheet_id = resolve_category(voucher.category)
        voucher.category = category
        layout = get_layout(category)
        sheet_url = get_sheet_url(spreadsheet_id)

        if not voucher.voucher_no:
            voucher.voucher_no = self.allocator.next_voucher_number(category.value)

        logger.info(f"Submitting voucher {voucher.voucher_no} for {category.value}")

        try:
            self.ensure_tab(spreadsheet_id, layout)
        except SheetsServiceError as e:
            raise SheetsServiceError(str(e), stage=STAGE_PREPARE_TAB) from e

        pdf_path = self.write_pdf(voucher)
        pdf_file_id, voucher.pdf_link = self.upload_pdf(voucher, pdf_path)

        try:
            self.sheets.append_rows(
                spreadsheet_id,
                f"{category.value}!A:{layout.last_column}",
                [voucher.to_row(layout)],
            )
        except SheetsServiceError as e:
            raise SheetsServiceError(str(e), stage=STAGE_APPEND_ROW) from e
        logger.info(f"Voucher {voucher.voucher_no} saved to {sheet_url}")

        notified = self.notify(voucher, sheet_url)

        return SubmissionResult(
            message=SUCCESS_MESSAGE,
            sheet_url=sheet_url,
            pdf_file_id=pdf_file_id,
            pdf_link=voucher.pdf_link,
            voucher_no=voucher.voucher_no,
            notified=notified,
        )
