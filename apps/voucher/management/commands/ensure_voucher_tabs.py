from django.core.management.base import BaseCommand

from apps.voucher.enums import VoucherCategory
from apps.voucher.exceptions import InvalidCategoryError, SheetsServiceError
from apps.voucher.layouts import get_layout, resolve_category
from apps.voucher.services.voucher_submission_service import VoucherSubmissionService


class Command(BaseCommand):
    help = "Create the voucher tab and header row in every configured spreadsheet"

    def add_arguments(self, parser):
        parser.add_argument(
            "categories",
            nargs="*",
            help=f"Categories to prepare, any of {', '.join(VoucherCategory.values)} (default: all)",
        )

    def handle(self, *args, **options):
        service = VoucherSubmissionService()
        categories = options["categories"] or VoucherCategory.values

        for name in categories:
            try:
                category, spreadsheet_id = resolve_category(name)
            except InvalidCategoryError:
                self.stdout.write(self.style.WARNING(f"{name}: unknown or unconfigured category, skipped"))
                continue

            try:
                created = service.ensure_tab(spreadsheet_id, get_layout(category))
            except SheetsServiceError as e:
                self.stdout.write(self.style.ERROR(f"{name}: {str(e)}"))
                continue

            if created:
                self.stdout.write(self.style.SUCCESS(f"{name}: tab and header row written"))
            else:
                self.stdout.write(f"{name}: tab already present")
