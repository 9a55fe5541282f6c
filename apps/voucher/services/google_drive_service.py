import logging
from typing import Optional, Tuple

from googleapiclient.errors import HttpError
from googleapiclient.http import MediaFileUpload

from apps.voucher.exceptions import DriveUploadError
from apps.voucher.services.google_auth import build_service

logger = logging.getLogger(__name__)

PDF_MIME_TYPE = "application/pdf"


class GoogleDriveService:
    """Uploads rendered vouchers to the shared Drive folder."""

    def __init__(self, drive_service=None):
        self._drive_service = drive_service

    @property
    def drive_service(self):
        if self._drive_service is None:
            try:
                self._drive_service = build_service("drive", "v3")
            except RuntimeError as e:
                raise DriveUploadError(str(e))
        return self._drive_service

    def upload_file(
        self,
        file_path: str,
        name: str,
        folder_id: Optional[str] = None,
        mimetype: str = PDF_MIME_TYPE,
    ) -> Tuple[str, str]:
        """
        Upload a local file to Google Drive.

        Args:
            file_path: Path of the file on local disk.
            name: File name in Drive.
            folder_id: Optional parent folder ID.
            mimetype: MIME type of the upload.

        Returns:
            tuple[str, str]: (file_id, web_view_link)

        Raises:
            DriveUploadError: If the upload fails
        """
        file_metadata = {"name": name}
        if folder_id:
            file_metadata["parents"] = [folder_id]

        media = None
        try:
            media = MediaFileUpload(file_path, mimetype=mimetype)
            uploaded = (
                self.drive_service.files()
                .create(body=file_metadata, media_body=media, fields="id, webViewLink")
                .execute()
            )
        except HttpError as e:
            logger.error(f"Google Drive API error uploading '{name}': {e.reason}")
            raise DriveUploadError(f"Failed to upload '{name}': {e.reason}")
        except DriveUploadError:
            raise
        except Exception as e:
            logger.error(f"Unexpected error uploading '{name}': {str(e)}")
            raise DriveUploadError(f"Unexpected error uploading '{name}': {str(e)}")
        finally:
            # release the handle so the caller can delete the file
            if media is not None:
                media.stream().close()

        file_id = uploaded.get("id")
        link = uploaded.get("webViewLink")
        logger.info(f"Uploaded '{name}' to Drive with ID: {file_id}")
        return file_id, link
