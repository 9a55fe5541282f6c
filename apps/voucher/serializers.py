from rest_framework import serializers

from apps.voucher.domain import Voucher
from apps.voucher.enums import VoucherCategory


class VoucherSubmissionSerializer(serializers.Serializer):
    """Validates the voucher form. Field names follow the form's own keys."""

    filter = serializers.ChoiceField(choices=VoucherCategory.choices)
    date = serializers.CharField(max_length=32)
    # becomes part of the PDF file name
    voucherNo = serializers.RegexField(
        r"^[A-Za-z0-9-]*$",
        max_length=32,
        required=False,
        allow_blank=True,
        error_messages={"invalid": "Use letters, digits and hyphens only."},
    )
    payTo = serializers.CharField(max_length=255)
    accountHead = serializers.CharField(max_length=255, required=False, allow_blank=True)
    account = serializers.CharField(required=False, allow_blank=True)
    amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    amountRs = serializers.CharField(required=False, allow_blank=True)
    checkedBy = serializers.CharField(max_length=255, required=False, allow_blank=True)
    approvedBy = serializers.CharField(max_length=255, required=False, allow_blank=True)
    paidBy = serializers.CharField(max_length=255, required=False, allow_blank=True)
    preparedBy = serializers.CharField(max_length=255, required=False, allow_blank=True)
    receiverSignature = serializers.CharField(
        required=False, allow_blank=True, trim_whitespace=False
    )

    def validate_receiverSignature(self, value):
        if value and not value.startswith("data:image/"):
            raise serializers.ValidationError("Expected an image data URL.")
        return value

    def to_voucher(self) -> Voucher:
        data = self.validated_data
        return Voucher(
            category=VoucherCategory(data["filter"]),
            voucher_no=data.get("voucherNo", "").strip(),
            date=data["date"],
            pay_to=data["payTo"],
            account_head=data.get("accountHead", ""),
            towards=data.get("account", ""),
            amount=data["amount"],
            amount_in_words=data.get("amountRs", ""),
            checked_by=data.get("checkedBy", ""),
            approved_by=data.get("approvedBy", ""),
            paid_by=data.get("paidBy", ""),
            prepared_by=data.get("preparedBy", ""),
            receiver_signature=data.get("receiverSignature", ""),
        )
