"""Sheet columns repository - persisted header sets per spreadsheet tab."""

from src.repositories.base_repository import BaseRepository
from src.models.sheet_columns import SheetColumns


class SheetColumnsRepository(BaseRepository):
    """Repository for the append-only header column sets."""

    def get_columns(self, sheet_title: str) -> list[str]:
        """Columns recorded for a tab (empty list if none yet)."""
        record = self.db.get(SheetColumns, sheet_title)
        self.end_read_transaction()
        return list(record.columns) if record else []

    def extend_columns(self, sheet_title: str, names: list[str]) -> tuple[list[str], bool]:
        """
        Append unseen column names, preserving existing order.

        Returns:
            (all columns, whether anything was added)
        """
        record = self.db.get(SheetColumns, sheet_title)
        existing = list(record.columns) if record else []

        added = [name for name in dict.fromkeys(names) if name not in existing]
        if not added and record is not None:
            self.end_read_transaction()
            return existing, False

        columns = existing + added
        if record is None:
            self.db.add(SheetColumns(sheet_title=sheet_title, columns=columns))
        else:
            record.columns = columns
        self.commit()
        return columns, True
