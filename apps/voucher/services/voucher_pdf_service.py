import base64
import binascii
import logging
import os
from io import BytesIO

from PIL import ImageFile
from reportlab.lib.pagesizes import letter
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from apps.voucher.domain import Voucher
from apps.voucher.enums import SignerRole
from apps.voucher.exceptions import VoucherRenderError
from apps.voucher.layouts import VoucherLayout, get_layout

logger = logging.getLogger(__name__)

# Letter page, positions below are measured from the top-left corner
PAGE_WIDTH, PAGE_HEIGHT = letter
MARGIN = 30
FONT_NAME = "Helvetica"
FONT_SIZE = 12
LINE_END_X = 550

LOGO_WIDTH = 100
HEADER_LABEL_X = 400
FIRST_ROW_Y = 160
ROW_GAP = 40
VALUE_X = 130
UNDERLINE_START_X = 120
SIGNATURE_GAP = 65
SIGNATURE_LINE_WIDTH = 100
SIGNATURE_IMAGE_WIDTH = 100

ImageFile.LOAD_TRUNCATED_IMAGES = True


def decode_signature(data_url: str) -> bytes:
    """Decode the base64 payload of a ``data:image/...;base64,`` URL."""
    try:
        _, payload = data_url.split(",", 1)
    except ValueError:
        raise VoucherRenderError("Receiver signature is not a data URL")
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise VoucherRenderError(f"Receiver signature is not valid base64: {str(e)}")


class VoucherPDFGenerator:
    """
    Generator class for single-page voucher receipts.
    """

    def __init__(self, voucher: Voucher, layout: VoucherLayout = None):
        """
        Initialize the PDF generator with a voucher.

        Args:
            voucher: The voucher to render
            layout: Layout for the voucher's category, looked up when omitted
        """
        self.voucher = voucher
        self.layout = layout or get_layout(voucher.category)
        self.buffer = BytesIO()
        self.pdf = canvas.Canvas(self.buffer, pagesize=letter)
        self.pdf.setTitle(f"Voucher {voucher.voucher_no}")

    def generate(self):
        """
        Generate the complete PDF document.
        Returns:
            BytesIO: Buffer containing the generated PDF
        Raises:
            VoucherRenderError: If any part of the document could not be drawn
        """
        try:
            self.pdf.setFont(FONT_NAME, FONT_SIZE)
            self.add_logo()
            self.add_header_info()
            y_position = self.add_detail_rows(FIRST_ROW_Y)
            y_position = self.add_amounts(y_position)
            self.add_signatures(y_position - ROW_GAP + SIGNATURE_GAP)

            self.pdf.showPage()
            self.pdf.save()
            self.buffer.seek(0)
            return self.buffer
        except VoucherRenderError:
            raise
        except Exception as e:
            logger.exception(
                f"Error generating PDF for voucher {self.voucher.voucher_no}: {str(e)}"
            )
            raise VoucherRenderError(f"Failed to create PDF: {str(e)}")

    def _text(self, value, x, top):
        # reportlab draws from the baseline, measured from the bottom
        self.pdf.drawString(x, PAGE_HEIGHT - top - FONT_SIZE * 0.8, str(value or ""))

    def _line(self, x1, x2, top):
        self.pdf.line(x1, PAGE_HEIGHT - top, x2, PAGE_HEIGHT - top)

    def _image(self, image, x, top, width):
        image_width, image_height = image.getSize()
        height = width * image_height / image_width
        self.pdf.drawImage(
            image,
            x,
            PAGE_HEIGHT - top - height,
            width=width,
            height=height,
            mask="auto",
        )

    def add_logo(self):
        """Add the category logo to the top-left corner, if the asset exists."""
        logo_path = self.layout.logo_path()
        if not os.path.exists(logo_path):
            logger.warning(f"Logo file not found at {logo_path}")
            return

        try:
            self._image(ImageReader(logo_path), MARGIN, MARGIN, LOGO_WIDTH)
        except Exception as e:
            logger.warning(f"Failed to add logo: {str(e)}")

    def add_header_info(self):
        """Date and voucher number, each with an underline, at the top right."""
        self._text("Date:", HEADER_LABEL_X, 20)
        self._text(self.voucher.date, 440, 20)
        self._line(440, LINE_END_X, 35)

        self._text("Voucher No:", HEADER_LABEL_X, 40)
        self._text(self.voucher.voucher_no, 470, 40)
        self._line(440, LINE_END_X, 55)

    def _labeled_row(self, label, value, top):
        self._text(label, MARGIN, top)
        self._line(UNDERLINE_START_X, LINE_END_X, top + FONT_SIZE)
        self._text(value, VALUE_X, top)

    def add_detail_rows(self, top):
        rows = [
            ("Pay to:", self.voucher.pay_to),
            ("Account Head:", self.voucher.account_head),
        ]
        if self.layout.show_paid_by:
            rows.append(("Paid by:", self.voucher.paid_by))
        rows.append(("Towards:", self.voucher.towards))

        for label, value in rows:
            self._labeled_row(label, value, top)
            top += ROW_GAP
        return top

    def add_amounts(self, top):
        self._labeled_row("Amount Rs.", self.voucher.amount_display, top)
        top += ROW_GAP
        self._labeled_row("The Sum.", self.voucher.amount_in_words, top)
        return top + ROW_GAP

    def signature_positions(self):
        """X position of each signer's line, the receiver always last."""
        signers = self.layout.signers
        if len(signers) == 1:
            return [LINE_END_X - SIGNATURE_LINE_WIDTH]
        first_x = 50 if len(signers) <= 3 else MARGIN
        last_x = LINE_END_X - SIGNATURE_LINE_WIDTH
        step = (last_x - first_x) / (len(signers) - 1)
        return [first_x + step * index for index in range(len(signers))]

    def add_signatures(self, top):
        for role, x in zip(self.layout.signers, self.signature_positions()):
            self._line(x, x + SIGNATURE_LINE_WIDTH, top)
            self._text(SignerRole(role).label, x, top + 5)

            if role == SignerRole.RECEIVER and self.voucher.is_signed:
                self.add_signature_image(x, top - 20)

    def add_signature_image(self, x, top):
        signature = decode_signature(self.voucher.receiver_signature)
        try:
            image = ImageReader(BytesIO(signature))
            self._image(image, x, top, SIGNATURE_IMAGE_WIDTH)
        except Exception as e:
            raise VoucherRenderError(f"Receiver signature could not be drawn: {str(e)}")


def create_voucher_pdf(voucher: Voucher) -> BytesIO:
    """
    Render a voucher receipt.

    Args:
        voucher: The voucher to render

    Returns:
        BytesIO: The PDF document, positioned at the start
    """
    generator = VoucherPDFGenerator(voucher)
    return generator.generate()
