"""
Voucher number allocation.

Numbers look like ``SU-2024-007``: the category prefix, the calendar year and
a per-category sequence. The spreadsheet is the source of truth; when it
cannot be read, an in-process counter keeps the form usable.
"""

import logging
import threading
from collections import defaultdict
from typing import Optional

from django.utils import timezone

from apps.voucher.exceptions import SheetsServiceError
from apps.voucher.layouts import get_layout, resolve_category
from apps.voucher.services.google_sheet_service import GoogleSheetsService

logger = logging.getLogger(__name__)

VOUCHER_NO_SEPARATOR = "-"


def format_voucher_number(prefix: str, year: int, sequence: int) -> str:
    return f"{prefix}-{year}-{sequence:03d}"


def parse_sequence(voucher_no: str, year: int) -> int:
    """
    Return the sequence part of ``voucher_no``, or 0 when it should restart.

    Unparseable values count as 0. A number issued in an earlier year also
    counts as 0 so the new year starts again at 001.
    """
    parts = str(voucher_no).strip().split(VOUCHER_NO_SEPARATOR)
    if len(parts) < 3:
        return 0
    try:
        sequence = int(parts[2])
    except ValueError:
        return 0
    try:
        issued_year = int(parts[1])
    except ValueError:
        return sequence
    return sequence if issued_year == year else 0


class VoucherNumberAllocator:
    """Hands out the next voucher number per category."""

    def __init__(self, sheets: Optional[GoogleSheetsService] = None):
        self.sheets = sheets or GoogleSheetsService()
        self.fallback_counters = defaultdict(int)
        self._locks = defaultdict(threading.Lock)
        self._locks_guard = threading.Lock()

    def _lock_for(self, category) -> threading.Lock:
        with self._locks_guard:
            return self._locks[category.value]

    def last_voucher_number(self, spreadsheet_id: str, tab: str) -> Optional[str]:
        """Return the voucher number in the tab's last row, if it has data rows."""
        column = self.sheets.read_column(spreadsheet_id, tab, "A")
        # first row is the header
        if len(column) > 1:
            return column[-1]
        return None

    def next_voucher_number(self, category_name: str, year: Optional[int] = None) -> str:
        """
        Allocate the next voucher number for a category.

        Args:
            category_name: The ``filter`` value sent by the caller.
            year: Calendar year to stamp, defaults to the current year in TIME_ZONE.

        Returns:
            The formatted voucher number.

        Raises:
            InvalidCategoryError: If the category is not usable.
        """
        category, spreadsheet_id = resolve_category(category_name)
        layout = get_layout(category)
        year = year or timezone.localdate().year

        with self._lock_for(category):
            try:
                last = self.last_voucher_number(spreadsheet_id, category.value)
            except SheetsServiceError as e:
                self.fallback_counters[category.value] += 1
                sequence = self.fallback_counters[category.value]
                logger.warning(
                    f"Falling back to in-memory counter for {category.value} "
                    f"(sequence {sequence}): {str(e)}"
                )
            else:
                sequence = (parse_sequence(last, year) if last else 0) + 1

        voucher_no = format_voucher_number(layout.prefix, year, sequence)
        logger.info(f"Allocated voucher number {voucher_no}")
        return voucher_no
