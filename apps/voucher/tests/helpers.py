import base64
from decimal import Decimal
from io import BytesIO

from PIL import Image

from apps.voucher.domain import Voucher
from apps.voucher.enums import VoucherCategory

TEST_SPREADSHEET_IDS = {
    "Contentstack": "sheet-contentstack",
    "Surfboard": "sheet-surfboard",
    "RawEngineering": "sheet-raw",
}


def png_bytes(size=(40, 20), color=(0, 0, 0)):
    buffer = BytesIO()
    Image.new("RGB", size, color).save(buffer, format="PNG")
    return buffer.getvalue()


def signature_data_url():
    return "data:image/png;base64," + base64.b64encode(png_bytes()).decode("ascii")


def make_voucher(**overrides):
    fields = {
        "category": VoucherCategory.CONTENTSTACK,
        "voucher_no": "CO-2024-004",
        "date": "2024-06-12",
        "pay_to": "Acme Supplies",
        "account_head": "Office",
        "towards": "Printer paper",
        "amount": Decimal("1250.00"),
        "amount_in_words": "One thousand two hundred fifty only",
        "checked_by": "Priya",
        "approved_by": "Rahul",
    }
    fields.update(overrides)
    return Voucher(**fields)
