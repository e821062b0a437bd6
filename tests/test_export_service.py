from datetime import datetime

import pandas as pd

from conftest import make_tx
from services.export_service import ExportService


def sample_transactions():
    return [
        make_tx(-12.5, "Food & Dining", when=datetime(2026, 10, 3), description="Lunch"),
        make_tx(3000, "Salary", when=datetime(2026, 10, 1), description="Paycheck"),
        make_tx(-40, "Food & Dining", when=datetime(2026, 10, 9), description="Groceries run"),
        make_tx(-99, "Travel", when=datetime(2026, 9, 20), description="Train"),
    ]


def test_export_csv_for_one_month():
    buffer = ExportService("EUR").export_csv(sample_transactions(), 2026, 10)
    df = pd.read_csv(buffer, encoding="utf-8-sig")

    assert list(df.columns) == ["Date", "Type", "Amount", "Currency", "Category", "Description"]
    assert list(df["Description"]) == ["Paycheck", "Lunch", "Groceries run"]
    assert list(df["Type"]) == ["income", "expense", "expense"]
    assert set(df["Currency"]) == {"EUR"}


def test_export_csv_all_history():
    df = pd.read_csv(ExportService().export_csv(sample_transactions()), encoding="utf-8-sig")
    assert len(df) == 4
    assert df.iloc[0]["Description"] == "Train"


def test_export_excel_has_summary_sheet():
    buffer = ExportService().export_excel(sample_transactions(), 2026, 10)
    sheets = pd.read_excel(buffer, sheet_name=None)

    assert set(sheets) == {"Transactions", "Summary"}
    summary = dict(zip(sheets["Summary"]["Category"], sheets["Summary"]["Total"]))
    assert summary == {"Food & Dining": -52.5, "Salary": 3000}


def test_export_excel_empty_month():
    buffer = ExportService().export_excel(sample_transactions(), 2020, 1)
    sheets = pd.read_excel(buffer, sheet_name=None)
    assert list(sheets) == ["Transactions"]
    assert sheets["Transactions"].empty
