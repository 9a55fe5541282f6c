"""
URL configuration for voucher_backend project.

The voucher endpoints live at the site root so the existing form keeps
calling ``/submit``, ``/get-voucher-no`` and friends unchanged.
"""

from django.urls import include, path

urlpatterns = [
    path("", include("apps.voucher.urls")),
]
