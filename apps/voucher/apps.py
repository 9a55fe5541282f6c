import logging
import os

from django.apps import AppConfig
from django.conf import settings

from apps.voucher.scheduler_jobs import keep_warm_job

logger = logging.getLogger(__name__)


class VoucherConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.voucher"
    verbose_name = "Voucher"

    def ready(self):
        if not settings.KEEP_WARM_ENABLED:
            return

        # RUN_MAIN is set by Django in the autoreloaded child process.
        if settings.DEBUG and os.environ.get("RUN_MAIN") != "true":
            logger.info("Skipping APScheduler setup in debug parent process.")
            return

        from apscheduler.schedulers.background import BackgroundScheduler

        if not hasattr(self, "keep_warm_scheduler"):
            scheduler = BackgroundScheduler(timezone=settings.TIME_ZONE)
            scheduler.add_job(
                keep_warm_job,
                trigger="interval",
                seconds=settings.KEEP_WARM_INTERVAL_SECONDS,
                id="keep_warm",
                max_instances=1,
                replace_existing=True,
                coalesce=True,
            )
            logger.info("Added 'keep_warm' job to scheduler.")

            try:
                scheduler.start()
                self.keep_warm_scheduler = scheduler
                logger.info("APScheduler started successfully (keep-warm ping).")
            except Exception as e:
                logger.error(f"Error starting APScheduler: {e}", exc_info=True)
