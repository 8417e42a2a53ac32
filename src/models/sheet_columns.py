"""Sheet columns model - append-only header set per spreadsheet tab."""
from sqlalchemy import Column, String, DateTime, JSON
from datetime import datetime

from src.config.database import Base


class SheetColumns(Base):
    """
    Header columns written to one Google Sheets tab.

    columns only ever grows; a column added for one report stays for all
    later rows even if those reports lack the field.
    """

    __tablename__ = "sheet_columns"

    sheet_title = Column(String(255), primary_key=True)
    columns = Column(JSON, nullable=False, default=list)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<SheetColumns {self.sheet_title} ({len(self.columns or [])})>"
