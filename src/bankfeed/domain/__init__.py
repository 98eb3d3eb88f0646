"""Domain layer for bankfeed application."""

# Services import the database layer, which imports domain entities; load
# them lazily so importing ``bankfeed.domain.entities`` stays cycle-free.
_SERVICES = {
    "AccountService": "bankfeed.domain.account",
    "TransactionService": "bankfeed.domain.transaction",
    "FileImportService": "bankfeed.domain.file_import",
    "ReconciliationEngine": "bankfeed.domain.reconcile",
}

__all__ = list(_SERVICES)


def __getattr__(name):
    if name in _SERVICES:
        import importlib

        return getattr(importlib.import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
