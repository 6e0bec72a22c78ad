"""Domain layer for cashbook application."""

# Services are imported lazily: the database layer imports domain.entities,
# and the services import the database layer.
_EXPORTS = {
    "TransactionService": "cashbook.domain.transaction",
    "CSVImportService": "cashbook.domain.csv_import",
    "AccountService": "cashbook.domain.account",
    "SummaryService": "cashbook.domain.summary",
    "resolve_secondary_effect": "cashbook.domain.balance",
}

__all__ = list(_EXPORTS)


def __getattr__(name):
    if name in _EXPORTS:
        import importlib

        return getattr(importlib.import_module(_EXPORTS[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
