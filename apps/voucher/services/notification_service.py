import logging

from django.conf import settings
from django.core.mail import send_mail

from apps.voucher.exceptions import NotificationError

logger = logging.getLogger(__name__)


def send_approval_request(voucher_no: str, sheet_url: str, pdf_link: str) -> None:
    """
    Email the approver that a voucher is waiting for them.

    Raises:
        NotificationError: If the message could not be sent.
    """
    recipient = settings.APPROVER_EMAIL
    try:
        send_mail(
            subject=f"Voucher {voucher_no} Submitted for Approval",
            message=(
                "A new voucher has been submitted.\n"
                f"Sheet: {sheet_url}\n"
                f"PDF: {pdf_link}"
            ),
            from_email=settings.DEFAULT_FROM_EMAIL,
            recipient_list=[recipient],
            fail_silently=False,
        )
    except Exception as e:
        raise NotificationError(f"Failed to email {recipient}: {str(e)}")

    logger.info(f"Approval email for voucher {voucher_no} sent to {recipient}")
