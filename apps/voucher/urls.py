from django.urls import path

from apps.voucher.views.voucher_views import (
    PingView,
    SubmitVoucherView,
    SuggestionsView,
    VoucherNumberView,
)

app_name = "voucher"

urlpatterns = [
    path("ping", PingView.as_view(), name="ping"),
    path("get-voucher-no", VoucherNumberView.as_view(), name="get_voucher_no"),
    path("get-suggestions", SuggestionsView.as_view(), name="get_suggestions"),
    path("submit", SubmitVoucherView.as_view(), name="submit"),
]
