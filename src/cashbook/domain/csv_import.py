"""CSV import domain service."""

import csv
import logging
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from typing import Any, Iterable, Optional

from cashbook.database.base import Database
from cashbook.domain.account import AccountService, normalize_account_type
from cashbook.domain.entities import ASSET, CREDIT, DEBIT
from cashbook.domain.errors import NotFoundError, ValidationError
from cashbook.domain.transaction import TransactionService
from cashbook.utils.amount_parser import parse_amount
from cashbook.utils.date_parser import parse_datetime

logger = logging.getLogger(__name__)

# CSV header for each import field
COLUMNS = {
    "date": "Date",
    "time": "Time",
    "category": "Category",
    "cash_in": "Cash In",
    "cash_out": "Cash Out",
    "remark": "Remark",
}
REQUIRED_COLUMNS = ("date", "category")


@dataclass(frozen=True)
class ImportRow:
    """One spreadsheet row, before parsing."""

    date: Optional[str]
    time: Optional[str]
    category: Optional[str]
    cash_in: Optional[str]
    cash_out: Optional[str]
    remark: Optional[str]
    # Line in the source file, when read from one
    line_num: Optional[int] = None


def _parse_cash(value: Optional[str]) -> Decimal:
    if value is None or not value.strip():
        return Decimal(0)
    return parse_amount(value)


class CSVImportService:
    """Service for bulk-importing transactions from a cash book export."""

    def __init__(self, db: Database):
        """Initialize CSV import service.

        Args:
            db: Database instance
        """
        self.db = db
        self.transaction_service = TransactionService(db)
        self.account_service = AccountService(db)

    def read_csv(self, csv_file_path: str) -> list[ImportRow]:
        """Read import rows from a CSV file.

        Raises:
            FileNotFoundError: If CSV file doesn't exist
            ValidationError: If required columns are missing
        """
        csv_path = Path(csv_file_path)
        if not csv_path.exists():
            raise FileNotFoundError(f"CSV file not found: {csv_file_path}")

        with open(csv_path, "r", encoding="utf-8-sig", newline="") as f:
            # Try to detect delimiter
            sample = f.read(1024)
            f.seek(0)
            try:
                delimiter = csv.Sniffer().sniff(sample, delimiters=",;\t").delimiter
            except csv.Error:
                delimiter = ","

            reader = csv.DictReader(f, delimiter=delimiter)
            csv_columns = [c.strip() for c in (reader.fieldnames or [])]
            if not csv_columns:
                raise ValidationError("CSV file has no columns")

            missing_columns = [COLUMNS[field] for field in REQUIRED_COLUMNS if COLUMNS[field] not in csv_columns]
            if missing_columns:
                raise ValidationError(f"CSV file missing required columns: {', '.join(missing_columns)}")

            rows = []
            for raw in reader:
                values = {(k or "").strip(): v for k, v in raw.items()}
                if not any((v or "").strip() for v in values.values() if isinstance(v, str)):
                    # Skip empty lines
                    continue
                fields = {field: values.get(column) for field, column in COLUMNS.items()}
                rows.append(ImportRow(**fields, line_num=reader.line_num))
            return rows

    def import_csv(self, user_id: str, csv_file_path: str, account_type: str = ASSET) -> dict[str, Any]:
        """Import transactions from a CSV file.

        Args:
            user_id: Owner of the imported data
            csv_file_path: Path to CSV file
            account_type: Type given to accounts created for unknown categories

        Returns:
            Import statistics, see import_rows
        """
        return self.import_rows(user_id, self.read_csv(csv_file_path), account_type=account_type)

    def import_rows(self, user_id: str, rows: Iterable[ImportRow], account_type: str = ASSET) -> dict[str, Any]:
        """Import rows, creating an account for every unknown category.

        Categories are matched to account names ignoring case. A row becomes a
        credit when its cash-in amount is positive and a debit otherwise.

        Returns:
            Dict with import statistics:
            - imported: number of transactions imported
            - created_accounts: names of accounts that were created
            - errors: list of error messages

        Raises:
            ValidationError: If account_type is not a known account type
        """
        account_type = normalize_account_type(account_type)
        rows = list(rows)

        # Build category -> account ID map, creating missing accounts first
        account_map: dict[str, int] = {}
        created_accounts: list[str] = []
        for row in rows:
            category = (row.category or "").strip()
            if not category or category.lower() in account_map:
                continue
            account = self.account_service.find_account_by_name(user_id, category)
            if account is None:
                account_map[category.lower()] = self.account_service.create_account(
                    user_id, name=category, type=account_type
                )
                created_accounts.append(category)
            else:
                account_map[category.lower()] = account.id

        imported = 0
        errors = []
        for position, row in enumerate(rows, start=2):  # Start at 2 (header is row 1)
            row_num = row.line_num or position
            category = (row.category or "").strip()
            if not category:
                errors.append(f"Row {row_num}: Missing category")
                continue
            if not row.date or not row.date.strip():
                errors.append(f"Row {row_num}: Missing date")
                continue

            try:
                created_at = parse_datetime(row.date, row.time)
                cash_in = _parse_cash(row.cash_in)
                cash_out = _parse_cash(row.cash_out)
            except ValueError as e:
                errors.append(f"Row {row_num}: {e}")
                continue

            txn_type = CREDIT if cash_in > 0 else DEBIT
            amount = cash_in if cash_in > 0 else cash_out

            try:
                self.transaction_service.add_transaction(
                    user_id,
                    account_id=account_map[category.lower()],
                    type=txn_type,
                    amount=amount,
                    note=(row.remark or "").strip(),
                    created_at=created_at,
                )
            except (ValidationError, NotFoundError) as e:
                errors.append(f"Row {row_num}: {e}")
                continue
            imported += 1

        logger.info(
            "Imported %d of %d rows for user %s (%d accounts created, %d errors)",
            imported,
            len(rows),
            user_id,
            len(created_accounts),
            len(errors),
        )
        return {
            "imported": imported,
            "created_accounts": created_accounts,
            "errors": errors,
        }
