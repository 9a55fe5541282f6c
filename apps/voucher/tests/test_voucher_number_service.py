import threading
from datetime import datetime, timezone
from unittest.mock import Mock, patch

from django.test import SimpleTestCase, override_settings

from apps.voucher.exceptions import InvalidCategoryError, SheetsServiceError
from apps.voucher.services.google_sheet_service import GoogleSheetsService
from apps.voucher.services.voucher_number_service import (
    VoucherNumberAllocator,
    format_voucher_number,
    parse_sequence,
)
from apps.voucher.tests.helpers import TEST_SPREADSHEET_IDS


class ParseSequenceTest(SimpleTestCase):
    def test_same_year_keeps_sequence(self):
        self.assertEqual(parse_sequence("SU-2024-007", 2024), 7)

    def test_previous_year_restarts(self):
        self.assertEqual(parse_sequence("SU-2024-007", 2025), 0)

    def test_unparseable_values_count_as_zero(self):
        for value in ["", "12", "SU-2024", "SU-2024-abc", "Voucher No."]:
            with self.subTest(value=value):
                self.assertEqual(parse_sequence(value, 2024), 0)

    def test_sequences_past_three_digits(self):
        self.assertEqual(parse_sequence("CO-2024-1204", 2024), 1204)
        self.assertEqual(format_voucher_number("CO", 2024, 1205), "CO-2024-1205")

    def test_format_pads_to_three_digits(self):
        self.assertEqual(format_voucher_number("RA", 2024, 8), "RA-2024-008")


@override_settings(VOUCHER_SPREADSHEET_IDS=TEST_SPREADSHEET_IDS)
class VoucherNumberAllocatorTest(SimpleTestCase):
    def setUp(self):
        self.sheets = Mock(spec=GoogleSheetsService)
        self.allocator = VoucherNumberAllocator(sheets=self.sheets)

    def test_next_number_follows_last_row(self):
        self.sheets.read_column.return_value = ["Voucher No.", "SU-2024-006", "SU-2024-007"]

        self.assertEqual(self.allocator.next_voucher_number("Surfboard", year=2024), "SU-2024-008")
        self.sheets.read_column.assert_called_once_with("sheet-surfboard", "Surfboard", "A")

    def test_year_rollover_restarts_sequence(self):
        self.sheets.read_column.return_value = ["Voucher No.", "SU-2024-007"]

        self.assertEqual(self.allocator.next_voucher_number("Surfboard", year=2025), "SU-2025-001")

    def test_header_only_tab_starts_at_one(self):
        self.sheets.read_column.return_value = ["Voucher No."]
        self.assertEqual(self.allocator.next_voucher_number("Contentstack", year=2024), "CO-2024-001")

    def test_empty_tab_starts_at_one(self):
        self.sheets.read_column.return_value = []
        self.assertEqual(
            self.allocator.next_voucher_number("RawEngineering", year=2024), "RA-2024-001"
        )

    def test_increases_by_one_as_rows_are_added(self):
        rows = ["Voucher No."]

        def read_column(*args):
            return list(rows)

        self.sheets.read_column.side_effect = read_column
        issued = []
        for _ in range(3):
            voucher_no = self.allocator.next_voucher_number("Contentstack", year=2024)
            issued.append(voucher_no)
            rows.append(voucher_no)

        self.assertEqual(issued, ["CO-2024-001", "CO-2024-002", "CO-2024-003"])

    def test_defaults_to_current_year(self):
        self.sheets.read_column.return_value = ["Voucher No."]
        with patch(
            "apps.voucher.services.voucher_number_service.timezone.now",
            return_value=datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc),
        ):
            voucher_no = self.allocator.next_voucher_number("Contentstack")
        self.assertEqual(voucher_no, "CO-2026-001")

    @override_settings(TIME_ZONE="Asia/Kolkata")
    def test_new_year_starts_at_local_midnight(self):
        self.sheets.read_column.return_value = ["Voucher No.", "SU-2024-007"]
        # 01:30 on 1 January in Kolkata, still 31 December in UTC
        with patch(
            "apps.voucher.services.voucher_number_service.timezone.now",
            return_value=datetime(2024, 12, 31, 20, 0, tzinfo=timezone.utc),
        ):
            voucher_no = self.allocator.next_voucher_number("Surfboard")
        self.assertEqual(voucher_no, "SU-2025-001")

    @override_settings(TIME_ZONE="Asia/Kolkata")
    def test_last_evening_of_year_keeps_sequence(self):
        self.sheets.read_column.return_value = ["Voucher No.", "SU-2024-007"]
        with patch(
            "apps.voucher.services.voucher_number_service.timezone.now",
            return_value=datetime(2024, 12, 31, 18, 0, tzinfo=timezone.utc),
        ):
            voucher_no = self.allocator.next_voucher_number("Surfboard")
        self.assertEqual(voucher_no, "SU-2024-008")

    def test_read_failure_uses_in_memory_counter(self):
        self.sheets.read_column.side_effect = SheetsServiceError("quota exceeded")

        first = self.allocator.next_voucher_number("Contentstack", year=2024)
        second = self.allocator.next_voucher_number("Contentstack", year=2024)
        other = self.allocator.next_voucher_number("Surfboard", year=2024)

        self.assertEqual([first, second, other], ["CO-2024-001", "CO-2024-002", "SU-2024-001"])

    def test_fallback_counter_is_not_used_when_sheet_reads(self):
        self.sheets.read_column.side_effect = [
            SheetsServiceError("timeout"),
            ["Voucher No.", "CO-2024-010"],
        ]

        self.allocator.next_voucher_number("Contentstack", year=2024)
        self.assertEqual(self.allocator.next_voucher_number("Contentstack", year=2024), "CO-2024-011")

    def test_concurrent_fallback_allocations_are_unique(self):
        self.sheets.read_column.side_effect = SheetsServiceError("offline")
        issued = []
        issued_lock = threading.Lock()

        def allocate():
            voucher_no = self.allocator.next_voucher_number("Surfboard", year=2024)
            with issued_lock:
                issued.append(voucher_no)

        threads = [threading.Thread(target=allocate) for _ in range(20)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(len(set(issued)), 20)
        self.assertEqual(self.allocator.fallback_counters["Surfboard"], 20)

    def test_unknown_category_is_rejected_before_reading(self):
        with self.assertRaises(InvalidCategoryError):
            self.allocator.next_voucher_number("Unknown")
        self.sheets.read_column.assert_not_called()

    def test_missing_category_is_rejected(self):
        with self.assertRaises(InvalidCategoryError):
            self.allocator.next_voucher_number(None)

    @override_settings(VOUCHER_SPREADSHEET_IDS={"Contentstack": "sheet-contentstack"})
    def test_unconfigured_spreadsheet_is_rejected(self):
        with self.assertRaises(InvalidCategoryError):
            self.allocator.next_voucher_number("Surfboard")
        self.sheets.read_column.assert_not_called()
