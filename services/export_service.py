"""
services/export_service.py
--------------------------
Generates CSV and Excel exports of the transaction history.
"""

import io
from datetime import datetime
from typing import Iterable, Optional

import pandas as pd

from models.transaction import Transaction
from services.ledger import get_current_month_transactions
from utils.logger import get_logger

logger = get_logger(__name__)

_COLUMNS = ["Date", "Type", "Amount", "Currency", "Category", "Description"]


class ExportService:
    """Generates downloadable financial reports in CSV and Excel formats."""

    def __init__(self, currency: str = "USD"):
        self.currency = currency

    def _select(
        self, transactions: Iterable[Transaction], year: Optional[int], month: Optional[int]
    ) -> list[Transaction]:
        if year is None or month is None:
            return list(transactions)
        return get_current_month_transactions(transactions, datetime(year, month, 1))

    def to_frame(
        self,
        transactions: Iterable[Transaction],
        year: Optional[int] = None,
        month: Optional[int] = None,
    ) -> pd.DataFrame:
        """
        Build a DataFrame of transactions, optionally limited to one month.

        Amounts keep their sign: expenses are negative.
        """
        selected = sorted(self._select(transactions, year, month), key=lambda t: t.date)
        data = [
            {
                "Date": t.date.date().isoformat(),
                "Type": t.type,
                "Amount": t.amount,
                "Currency": self.currency,
                "Category": t.category,
                "Description": t.description or "",
            }
            for t in selected
        ]
        return pd.DataFrame(data, columns=_COLUMNS)

    def export_csv(
        self,
        transactions: Iterable[Transaction],
        year: Optional[int] = None,
        month: Optional[int] = None,
    ) -> io.BytesIO:
        """
        Export transactions as a CSV file.

        Args:
            transactions: Transactions to export.
            year: Year number (with `month`, limits the export to that month).
            month: Month number (1-12).

        Returns:
            A BytesIO buffer containing the CSV data.
        """
        df = self.to_frame(transactions, year, month)
        buffer = io.BytesIO()
        df.to_csv(buffer, index=False, encoding="utf-8-sig")
        buffer.seek(0)
        logger.info(f"Exported {len(df)} records as CSV")
        return buffer

    def export_excel(
        self,
        transactions: Iterable[Transaction],
        year: Optional[int] = None,
        month: Optional[int] = None,
    ) -> io.BytesIO:
        """
        Export transactions as an Excel (.xlsx) file with a per-category
        summary sheet.

        Returns:
            A BytesIO buffer containing the Excel data.
        """
        df = self.to_frame(transactions, year, month)

        buffer = io.BytesIO()
        with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
            df.to_excel(writer, sheet_name="Transactions", index=False)

            if not df.empty:
                summary = df.groupby("Category")["Amount"].sum().reset_index()
                summary.columns = ["Category", "Total"]
                summary.to_excel(writer, sheet_name="Summary", index=False)

        buffer.seek(0)
        logger.info(f"Exported {len(df)} records as Excel")
        return buffer
