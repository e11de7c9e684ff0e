"""Workspace domain service."""

from famfin.database.base import Database
from famfin.domain.entities import Workspace as WorkspaceEntity
from famfin.domain.errors import ValidationError


class WorkspaceService:
    """Service for looking up the workspace data is scoped to."""

    def __init__(self, db: Database):
        self.db = db

    def get_or_create(self, name: str) -> WorkspaceEntity:
        """Return the workspace called name, creating it on first use."""
        name = name.strip()
        if not name:
            raise ValidationError("Workspace name must not be empty")

        workspace = self.db.get_workspace_by_name(name)
        if workspace is None:
            self.db.create_workspace(name)
            workspace = self.db.get_workspace_by_name(name)
        return workspace

    def list_workspaces(self) -> list[WorkspaceEntity]:
        return self.db.list_workspaces()
