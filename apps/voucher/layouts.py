"""
Per-category voucher layouts.

Each deployment used to carry its own copy of the submission code with a
slightly different column set. The differences are described here instead:
the header row written to the category's tab, the order values are appended
in, the optional rows printed on the PDF and the signer roles at the bottom
of the page.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from django.conf import settings

from apps.voucher.enums import SignerRole, VoucherCategory
from apps.voucher.exceptions import InvalidCategoryError

logger = logging.getLogger(__name__)

SHEET_URL_TEMPLATE = "https://docs.google.com/spreadsheets/d/{spreadsheet_id}/edit"

# (header label, Voucher attribute)
BASE_COLUMNS: List[Tuple[str, str]] = [
    ("Voucher No.", "voucher_no"),
    ("Date", "date"),
    ("Filter", "category"),
    ("Pay to", "pay_to"),
    ("Account Head", "account_head"),
    ("Towards", "towards"),
    ("The Sum", "amount"),
    ("Amount Rs.", "amount_in_words"),
    ("Checked By", "checked_by"),
    ("Approved By", "approved_by"),
    ("Receiver Signature", "receiver_signature"),
    ("PDF Link", "pdf_link"),
]

DEFAULT_SIGNERS = [
    SignerRole.CHECKED_BY,
    SignerRole.APPROVED_BY,
    SignerRole.RECEIVER,
]


@dataclass(frozen=True)
class VoucherLayout:
    category: VoucherCategory
    logo_filename: str
    columns: List[Tuple[str, str]] = field(default_factory=lambda: list(BASE_COLUMNS))
    signers: List[SignerRole] = field(default_factory=lambda: list(DEFAULT_SIGNERS))
    show_paid_by: bool = False

    @property
    def prefix(self) -> str:
        return self.category.value[:2].upper()

    @property
    def headers(self) -> List[str]:
        return [header for header, _ in self.columns]

    @property
    def last_column(self) -> str:
        return column_letter(len(self.columns) - 1)

    def column_for(self, attribute: str) -> str:
        """Return the A1 column letter holding ``attribute``."""
        for index, (_, name) in enumerate(self.columns):
            if name == attribute:
                return column_letter(index)
        raise KeyError(f"{self.category} layout has no column for {attribute}")

    def logo_path(self) -> str:
        return os.path.join(settings.VOUCHER_LOGO_DIR, self.logo_filename)


def column_letter(index: int) -> str:
    """Convert a zero-based column index to its A1 letter(s)."""
    letters = ""
    index += 1
    while index:
        index, remainder = divmod(index - 1, 26)
        letters = chr(ord("A") + remainder) + letters
    return letters


def _with_column(columns, new_column, after=None, before=None):
    result = list(columns)
    anchor = after or before
    position = [name for _, name in result].index(anchor)
    result.insert(position + 1 if after else position, new_column)
    return result


LAYOUTS: Dict[VoucherCategory, VoucherLayout] = {
    VoucherCategory.CONTENTSTACK: VoucherLayout(
        category=VoucherCategory.CONTENTSTACK,
        logo_filename="contentstack.png",
    ),
    VoucherCategory.SURFBOARD: VoucherLayout(
        category=VoucherCategory.SURFBOARD,
        logo_filename="surfboard.png",
        columns=_with_column(BASE_COLUMNS, ("Paid by", "paid_by"), after="account_head"),
        show_paid_by=True,
    ),
    VoucherCategory.RAW_ENGINEERING: VoucherLayout(
        category=VoucherCategory.RAW_ENGINEERING,
        logo_filename="raw.png",
        columns=_with_column(
            BASE_COLUMNS, ("Prepared By", "prepared_by"), before="checked_by"
        ),
        signers=[SignerRole.PREPARED_BY] + DEFAULT_SIGNERS,
    ),
}


def resolve_category(value: Optional[str]) -> Tuple[VoucherCategory, str]:
    """
    Validate a category sent by the caller.

    Args:
        value: The raw ``filter`` value.

    Returns:
        Tuple of the category and its spreadsheet id.

    Raises:
        InvalidCategoryError: If the name is unknown or no spreadsheet is configured.
    """
    if not value or value not in VoucherCategory.values:
        raise InvalidCategoryError(value)

    category = VoucherCategory(value)
    spreadsheet_id = settings.VOUCHER_SPREADSHEET_IDS.get(category.value)
    if not spreadsheet_id:
        logger.warning(f"No spreadsheet configured for category {category.value}")
        raise InvalidCategoryError(value)
    return category, spreadsheet_id


def get_layout(category: VoucherCategory) -> VoucherLayout:
    return LAYOUTS[VoucherCategory(category)]


def get_sheet_url(spreadsheet_id: str) -> str:
    return SHEET_URL_TEMPLATE.format(spreadsheet_id=spreadsheet_id)
