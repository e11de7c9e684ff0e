"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class StoreError(DomainError):
    """The persistence layer rejected a write."""


class ImportPipelineError(DomainError):
    """Base class for failures of the bulk import pipeline."""


class NoImportInProgressError(ImportPipelineError):
    """No batch is staged for the current session."""

    def __init__(self, message: str = "Nenhuma importação em andamento. Por favor, importe um arquivo CSV."):
        super().__init__(message)


class MappingIncompleteError(ImportPipelineError):
    """Commit attempted while some missing categories are still unmapped."""


class NothingToImportError(ImportPipelineError):
    """The staged batch holds no importable transaction."""


class InvalidTransitionError(ImportPipelineError):
    """An import session action is not allowed in its current state."""


class CommitFailedError(ImportPipelineError):
    """The store failed while applying a batch. The staged batch is kept."""


def account_not_found(account_id: int | str) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def category_not_found(category_id: int | str) -> str:
    """Return message for missing category."""
    return f"Category {category_id} not found"


def duplicate_account_name(name: str) -> str:
    return f"Account with name '{name}' already exists"


def duplicate_category_name(name: str, kind: str) -> str:
    return f"Category '{name}' ({kind}) already exists"


def category_kind_mismatch(name: str, expected: str, actual: str) -> str:
    """Return message when a category is used for the wrong kind of transaction."""
    return f"Category '{name}' is a {actual} category, expected {expected}"


def unmapped_categories(names: list[str]) -> str:
    """Return message listing categories still waiting for a mapping."""
    return (
        "Mapeie todas as categorias ausentes antes de confirmar a importação: "
        + ", ".join(names)
    )


NOTHING_TO_IMPORT = "Nenhuma transação válida encontrada para importação."
NOTHING_IMPORTABLE = (
    "Nenhuma transação pode ser importada. Revise os erros encontrados no arquivo."
)
