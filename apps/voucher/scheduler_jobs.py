"""
Standalone job functions for APScheduler.
These functions must be independent to ensure they can be properly serialized.
"""

import logging
from datetime import datetime

import requests
from django.conf import settings

scheduler_logger = logging.getLogger("apscheduler.voucher")

KEEP_WARM_TIMEOUT_SECONDS = 10


def keep_warm_job() -> bool:
    """
    Pings the local health endpoint so the host does not idle the process.
    """
    scheduler_logger.debug(f"Attempting keep-warm ping at {datetime.now()}.")
    try:
        response = requests.get(settings.KEEP_WARM_URL, timeout=KEEP_WARM_TIMEOUT_SECONDS)
        response.raise_for_status()
    except requests.RequestException as e:
        scheduler_logger.error(f"Error pinging the server: {e}")
        return False

    scheduler_logger.info("Pinged server to keep it warm.")
    return True
