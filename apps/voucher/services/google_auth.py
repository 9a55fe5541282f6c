"""
Google API client factory.

Loads the service account credentials once per process and builds
Sheets/Drive clients from them.
"""

import logging
import os

from django.conf import settings
from google.oauth2 import service_account
from googleapiclient.discovery import build

logger = logging.getLogger(__name__)

# Scopes required for the voucher spreadsheet and PDF folder
SCOPES = [
    "https://www.googleapis.com/auth/spreadsheets",
    "https://www.googleapis.com/auth/drive",
]

# Global credentials - initialized on first use
CREDS = None


def _get_credentials():
    """
    Get Google API credentials from service account file.

    Returns:
        service_account.Credentials: Authenticated credentials

    Raises:
        RuntimeError: If credentials file not found or invalid
    """
    global CREDS

    if CREDS is None:
        key_file = settings.GOOGLE_CREDENTIALS_PATH
        if not key_file:
            raise RuntimeError("GOOGLE_CREDENTIALS_PATH is not set")

        if not os.path.exists(key_file):
            raise RuntimeError(f"Google service account key file not found: {key_file}")

        try:
            CREDS = service_account.Credentials.from_service_account_file(
                key_file, scopes=SCOPES
            )
        except Exception as e:
            raise RuntimeError(f"Failed to load Google API credentials: {str(e)}")

        logger.info(f"Google API credentials loaded from {key_file}")
        logger.info(f"Using service account: {CREDS.service_account_email}")

    return CREDS


def build_service(api: str, version: str):
    """
    Create a Google API service client.

    Args:
        api: API name (e.g., 'drive', 'sheets')
        version: API version (e.g., 'v3', 'v4')

    Returns:
        googleapiclient.discovery.Resource: Service client

    Raises:
        RuntimeError: If service creation fails
    """
    try:
        credentials = _get_credentials()
        service = build(api, version, credentials=credentials, cache_discovery=False)
        logger.debug(f"Created {api} {version} service client")
        return service
    except Exception as e:
        raise RuntimeError(f"Failed to create {api} {version} service: {str(e)}")
