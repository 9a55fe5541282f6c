import logging
from typing import List, Optional

from apps.voucher.layouts import get_layout, resolve_category
from apps.voucher.services.google_sheet_service import GoogleSheetsService

logger = logging.getLogger(__name__)


class SuggestionService:
    """Autocomplete values taken from earlier vouchers."""

    def __init__(self, sheets: Optional[GoogleSheetsService] = None):
        self.sheets = sheets or GoogleSheetsService()

    def pay_to_suggestions(self, category_name: str) -> List[str]:
        """
        Return the distinct "Pay to" values already recorded for a category.

        Raises:
            InvalidCategoryError: If the category is not usable.
            SheetsServiceError: If the column could not be read.
        """
        category, spreadsheet_id = resolve_category(category_name)
        column = get_layout(category).column_for("pay_to")

        values = self.sheets.read_column(spreadsheet_id, category.value, column)

        suggestions = []
        seen = set()
        for value in values[1:]:
            value = str(value).strip()
            if value and value not in seen:
                seen.add(value)
                suggestions.append(value)

        logger.debug(f"{len(suggestions)} pay-to suggestions for {category.value}")
        return suggestions
