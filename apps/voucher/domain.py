from dataclasses import dataclass
from decimal import Decimal
from typing import Any, List, Optional

from apps.voucher.enums import VoucherCategory
from apps.voucher.layouts import VoucherLayout

SIGNED_MARKER = "Signed"


@dataclass
class Voucher:
    """One payment voucher as submitted from the form."""

    category: VoucherCategory
    voucher_no: str
    date: str
    pay_to: str
    account_head: str = ""
    towards: str = ""
    amount: Optional[Decimal] = None
    amount_in_words: str = ""
    checked_by: str = ""
    approved_by: str = ""
    paid_by: str = ""
    prepared_by: str = ""
    receiver_signature: str = ""
    pdf_link: str = ""

    @property
    def is_signed(self) -> bool:
        return bool(self.receiver_signature)

    @property
    def amount_display(self) -> str:
        return "" if self.amount is None else str(self.amount)

    @property
    def pdf_filename(self) -> str:
        return f"{self.category.value}_{self.voucher_no}.pdf"

    def cell_value(self, attribute: str) -> Any:
        # Never put the image payload in the sheet, only a marker
        if attribute == "receiver_signature":
            return SIGNED_MARKER if self.is_signed else ""
        if attribute == "category":
            return self.category.value
        if attribute == "amount":
            return self.amount_display
        return getattr(self, attribute) or ""

    def to_row(self, layout: VoucherLayout) -> List[Any]:
        """Return the values for one sheet row, in the layout's column order."""
        return [self.cell_value(attribute) for _, attribute in layout.columns]
