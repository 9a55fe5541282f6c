from django.db import models


class VoucherCategory(models.TextChoices):
    CONTENTSTACK = "Contentstack"
    SURFBOARD = "Surfboard"
    RAW_ENGINEERING = "RawEngineering"


class SignerRole(models.TextChoices):
    PREPARED_BY = "prepared_by", "Prepared By"
    CHECKED_BY = "checked_by", "Checked By"
    APPROVED_BY = "approved_by", "Approved By"
    RECEIVER = "receiver_signature", "Receiver Signature"
