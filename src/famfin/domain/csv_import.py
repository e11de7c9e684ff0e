"""CSV import domain service."""

import logging
from pathlib import Path
from typing import Optional

from famfin.database.base import Database
from famfin.domain.account import AccountService
from famfin.domain.category import CategoryService
from famfin.domain.commit import CommitEngine, CommitResult
from famfin.domain.entities import ImportBatch, TransactionKind
from famfin.domain.errors import NotFoundError, account_not_found
from famfin.domain.import_session import ImportSession
from famfin.domain.mapping import MappingResolver
from famfin.domain.staging import StagingStore

logger = logging.getLogger(__name__)


class CSVImportService:
    """Service for importing CSV files through the staging pipeline.

    Uploading parses the file and stages the batch. Every later step
    (reviewing, mapping categories, confirming, cancelling) starts from the
    staged batch, never from in-memory state of the upload step.
    """

    def __init__(self, db: Database, staging: StagingStore):
        """Initialize CSV import service.

        Args:
            db: Database instance
            staging: Staging store of the importing session
        """
        self.db = db
        self.staging = staging
        self.account_service = AccountService(db)
        self.category_service = CategoryService(db)
        self.engine = CommitEngine(db, staging)

    def _session(self) -> ImportSession:
        return ImportSession(self.staging, self.engine)

    def stage_file(self, workspace_id: int, account_id: int, csv_file_path: str) -> ImportBatch:
        """Parse a CSV file and stage it for confirmation.

        Args:
            workspace_id: Workspace to import into
            account_id: Account every row is imported into
            csv_file_path: Path to CSV file

        Returns:
            The staged batch

        Raises:
            NotFoundError: If the account doesn't exist in the workspace
            FileNotFoundError: If CSV file doesn't exist
        """
        csv_path = Path(csv_file_path)
        if not csv_path.exists():
            raise FileNotFoundError(f"CSV file not found: {csv_file_path}")

        content = csv_path.read_text(encoding="utf-8-sig")
        logger.debug("Read %d characters from %s", len(content), csv_path)
        return self.stage_content(workspace_id, account_id, content, source_name=csv_path.name)

    def stage_content(
        self,
        workspace_id: int,
        account_id: int,
        content: str,
        source_name: Optional[str] = None,
    ) -> ImportBatch:
        """Parse CSV text and stage it, replacing any previously staged batch."""
        account = self.account_service.get_account(account_id)
        if account is None or account.workspace_id != workspace_id:
            raise NotFoundError(account_not_found(account_id))

        accounts = self.account_service.list_accounts(workspace_id)
        categories = self.category_service.list_categories(workspace_id)

        return self._session().stage(
            content,
            account,
            accounts,
            categories,
            workspace_id=workspace_id,
            source_name=source_name,
        )

    def pending(self) -> ImportBatch:
        """Return the staged batch.

        Raises:
            NoImportInProgressError: If nothing is staged
        """
        return self._session().resume()

    def effective_categories(self, batch: ImportBatch) -> list[Optional[str]]:
        """Name of the category each staged row will be committed with.

        Rows whose category is still unmapped give None.
        """
        resolver = MappingResolver(batch)
        names = []
        for txn in batch.transactions:
            category_id = resolver.category_for(txn)
            category = self.category_service.get_category(category_id) if category_id is not None else None
            names.append(category.name if category is not None else None)
        return names

    def map_category(
        self,
        workspace_id: int,
        category_name: str,
        kind: TransactionKind,
        target: str | int,
    ) -> bool:
        """Map a missing category of the staged batch to an existing category.

        Args:
            workspace_id: Workspace ID
            category_name: Category name as written in the file
            kind: Kind of the rows using that name
            target: Existing category name or ID of the same kind

        Returns:
            True if the batch had such a missing category, False if the call
            changed nothing

        Raises:
            NoImportInProgressError: If nothing is staged
            NotFoundError: If target doesn't exist
            ValidationError: If target has another kind
        """
        kind = TransactionKind(kind)
        session = self._session()
        session.resume()
        category = self.category_service.resolve_category(workspace_id, target, kind)
        return session.set_mapping(category_name, kind, category.id)

    def confirm(self, workspace_id: int, user_id: str) -> CommitResult:
        """Commit the staged batch.

        Raises:
            NoImportInProgressError: If nothing is staged
            MappingIncompleteError: If a missing category is unmapped
            NothingToImportError: If the batch has no importable row
            CommitFailedError: If the store rejected the write
        """
        session = self._session()
        session.resume()
        return session.commit(user_id=user_id, workspace_id=workspace_id)

    def cancel(self) -> None:
        """Discard the staged batch, if any."""
        self._session().cancel()
