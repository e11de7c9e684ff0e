"""Category domain service."""

from typing import Optional
from famfin.database.base import Database
from famfin.domain.entities import Category as CategoryEntity, TransactionKind, category_key
from famfin.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    category_kind_mismatch,
    category_not_found,
    duplicate_category_name,
)


class CategoryService:
    """Service for managing income and expense categories."""

    def __init__(self, db: Database):
        """Initialize category service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_category(self, workspace_id: int, name: str, kind: TransactionKind) -> int:
        """Create a category.

        Args:
            workspace_id: Workspace the category belongs to
            name: Category name
            kind: income or expense

        Returns:
            Category ID

        Raises:
            ValidationError: If name is empty
            ConflictError: If the workspace already has this name for this kind
        """
        kind = TransactionKind(kind)
        name = name.strip()
        if not name:
            raise ValidationError("Category name must not be empty")

        if self.find_category(workspace_id, name, kind) is not None:
            raise ConflictError(duplicate_category_name(name, kind.value))

        return self.db.create_category(workspace_id=workspace_id, name=name, kind=kind)

    def get_category(self, category_id: int) -> Optional[CategoryEntity]:
        """Get category by ID.

        Args:
            category_id: Category ID

        Returns:
            Category entity or None if not found
        """
        return self.db.get_category(category_id)

    def list_categories(
        self, workspace_id: int, kind: Optional[TransactionKind] = None
    ) -> list[CategoryEntity]:
        """List categories of a workspace.

        Args:
            workspace_id: Workspace ID
            kind: Optional kind to filter by

        Returns:
            List of category entities
        """
        return self.db.list_categories(workspace_id, kind=kind)

    def find_category(
        self, workspace_id: int, name: str, kind: TransactionKind
    ) -> Optional[CategoryEntity]:
        """Find a category by name (ignoring case) among categories of one kind."""
        wanted = category_key(name, TransactionKind(kind))
        for cat in self.db.list_categories(workspace_id, kind=kind):
            if category_key(cat.name, cat.kind) == wanted:
                return cat
        return None

    def resolve_category(
        self, workspace_id: int, category: str | int, kind: TransactionKind
    ) -> CategoryEntity:
        """Resolve a category name or ID that must be usable for kind.

        Raises:
            NotFoundError: If no such category exists in the workspace
            ValidationError: If the category exists but has another kind
        """
        kind = TransactionKind(kind)
        found = None
        try:
            category_id = int(category)
        except (ValueError, TypeError):
            category_id = None

        if category_id is not None:
            found = self.db.get_category(category_id)
            if found is not None and found.workspace_id != workspace_id:
                found = None
        else:
            found = self.find_category(workspace_id, str(category), kind)
            if found is None:
                other = TransactionKind.INCOME if kind == TransactionKind.EXPENSE else TransactionKind.EXPENSE
                found = self.find_category(workspace_id, str(category), other)

        if found is None:
            raise NotFoundError(category_not_found(category))
        if found.kind != kind:
            raise ValidationError(category_kind_mismatch(found.name, kind.value, found.kind.value))
        return found
