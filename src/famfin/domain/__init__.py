"""Domain layer for famfin application."""

_SERVICES = {
    "AccountService": "famfin.domain.account",
    "CategoryService": "famfin.domain.category",
    "CSVImportService": "famfin.domain.csv_import",
    "TransactionService": "famfin.domain.transaction",
    "WorkspaceService": "famfin.domain.workspace",
}

__all__ = list(_SERVICES)


# Services import the database layer, which imports domain entities; load
# them lazily so importing famfin.domain.entities never pulls them in.
def __getattr__(name):
    if name in _SERVICES:
        from importlib import import_module

        return getattr(import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
