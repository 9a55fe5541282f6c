class VoucherError(Exception):
    """Base class for every error raised while handling a voucher."""


class InvalidCategoryError(VoucherError):
    """Raised when a category is unknown or has no spreadsheet configured.

    Args:
        category: The category name sent by the caller.
    """

    def __init__(self, category):
        self.category = category
        super().__init__(f"Invalid filter option: {category!r}")


class VoucherServiceError(VoucherError):
    """A downstream step of a submission failed.

    Args:
        message: Short description of the failure.
        stage: Name of the step that failed, such as "upload".
    """

    stage = "submit"

    def __init__(self, message, stage=None):
        if stage is not None:
            self.stage = stage
        super().__init__(message)


class SheetsServiceError(VoucherServiceError):
    stage = "sheets"


class VoucherRenderError(VoucherServiceError):
    stage = "render"


class DriveUploadError(VoucherServiceError):
    stage = "upload"


class NotificationError(VoucherServiceError):
    stage = "notify"
