"""
Voucher Views

REST endpoints used by the voucher form:
- liveness ping
- next voucher number for a category
- "Pay to" autocomplete suggestions
- voucher submission (PDF + spreadsheet row + approval email)
"""

import logging
from collections.abc import Mapping
from functools import lru_cache

from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.voucher.exceptions import (
    DriveUploadError,
    InvalidCategoryError,
    SheetsServiceError,
    VoucherRenderError,
)
from apps.voucher.layouts import resolve_category
from apps.voucher.serializers import VoucherSubmissionSerializer
from apps.voucher.services.suggestion_service import SuggestionService
from apps.voucher.services.voucher_number_service import VoucherNumberAllocator
from apps.voucher.services.voucher_submission_service import (
    STAGE_APPEND_ROW,
    VoucherSubmissionService,
)

logger = logging.getLogger(__name__)

INVALID_FILTER_MESSAGE = "Invalid filter option"

STAGE_ERROR_MESSAGES = {
    VoucherRenderError.stage: "Failed to create PDF",
    DriveUploadError.stage: "Failed to upload PDF",
    STAGE_APPEND_ROW: "Failed to save voucher to spreadsheet",
}
DEFAULT_ERROR_MESSAGE = "Failed to submit data"


@lru_cache(maxsize=None)
def get_submission_service() -> VoucherSubmissionService:
    return VoucherSubmissionService()


def get_allocator() -> VoucherNumberAllocator:
    # one allocator per process, shared with submissions
    return get_submission_service().allocator


@lru_cache(maxsize=None)
def get_suggestion_service() -> SuggestionService:
    return SuggestionService(get_submission_service().sheets)


def invalid_filter_response() -> Response:
    return Response(
        {"error": INVALID_FILTER_MESSAGE}, status=status.HTTP_400_BAD_REQUEST
    )


class PingView(APIView):
    def get(self, request: Request) -> Response:
        return Response({"message": "Server is active"}, status=status.HTTP_200_OK)


class VoucherNumberView(APIView):
    """
    GET /get-voucher-no?filter=<Category>

    Returns:
    {
        "voucherNo": "SU-2024-008"
    }
    """

    def get(self, request: Request) -> Response:
        try:
            voucher_no = get_allocator().next_voucher_number(
                request.query_params.get("filter")
            )
        except InvalidCategoryError:
            return invalid_filter_response()
        return Response({"voucherNo": voucher_no})


class SuggestionsView(APIView):
    """
    GET /get-suggestions?filter=<Category>

    Returns:
    {
        "payToSuggestions": ["Acme Supplies", ...]
    }
    """

    def get(self, request: Request) -> Response:
        try:
            suggestions = get_suggestion_service().pay_to_suggestions(
                request.query_params.get("filter")
            )
        except InvalidCategoryError:
            return invalid_filter_response()
        except SheetsServiceError as e:
            logger.error(f"Error fetching suggestions: {str(e)}")
            return Response(
                {"error": "Failed to fetch suggestions"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
        return Response({"payToSuggestions": suggestions})


class SubmitVoucherView(APIView):
    """
    POST /submit

    Form fields: filter, date, voucherNo, payTo, accountHead, account, amount,
    amountRs, checkedBy, approvedBy, paidBy, preparedBy, receiverSignature.

    Returns:
    {
        "message": "Data submitted successfully and PDF uploaded!",
        "sheetURL": "https://docs.google.com/spreadsheets/d/.../edit",
        "pdfFileId": "drive_file_id"
    }
    """

    def post(self, request: Request) -> Response:
        data = request.data if isinstance(request.data, Mapping) else {}
        try:
            resolve_category(data.get("filter"))
        except InvalidCategoryError:
            return invalid_filter_response()

        serializer = VoucherSubmissionSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(
                {"error": "Invalid voucher data", "details": serializer.errors},
                status=status.HTTP_400_BAD_REQUEST,
            )
        voucher = serializer.to_voucher()
        logger.info(
            f"Received voucher {voucher.voucher_no or '(unnumbered)'} for {voucher.category}"
        )

        try:
            result = get_submission_service().submit(voucher)
        except InvalidCategoryError:
            return invalid_filter_response()
        except (SheetsServiceError, VoucherRenderError, DriveUploadError) as e:
            logger.error(f"Voucher submission failed at {e.stage}: {str(e)}")
            return Response(
                {"error": STAGE_ERROR_MESSAGES.get(e.stage, DEFAULT_ERROR_MESSAGE)},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
        except Exception as e:
            logger.exception(f"Unexpected error submitting voucher: {str(e)}")
            return Response(
                {"error": DEFAULT_ERROR_MESSAGE},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        return Response(
            {
                "message": result.message,
                "sheetURL": result.sheet_url,
                "pdfFileId": result.pdf_file_id,
            },
            status=status.HTTP_200_OK,
        )
