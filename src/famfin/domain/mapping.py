"""User-assisted mapping of missing categories."""

import logging
from typing import Optional

from famfin.domain.entities import (
    CandidateTransaction,
    ImportBatch,
    MissingCategory,
    TransactionKind,
    category_key,
)

logger = logging.getLogger(__name__)


class MappingResolver:
    """Binds each missing category of a batch to an existing category.

    Rows are never rewritten: a row without a resolved category looks up its
    MissingCategory entry, so one choice applies to every row sharing the
    original category name.
    """

    def __init__(self, batch: ImportBatch):
        self.batch = batch

    def _find(self, name: str, kind: TransactionKind) -> Optional[int]:
        key = category_key(name, TransactionKind(kind))
        for index, missing in enumerate(self.batch.missing_categories):
            if missing.key == key:
                return index
        return None

    def set_mapping(self, category_name: str, kind: TransactionKind, category_id: int) -> bool:
        """Map the missing category (category_name, kind) to category_id.

        Unknown pairs are ignored.

        Returns:
            True if an entry was updated
        """
        index = self._find(category_name, kind)
        if index is None:
            logger.debug("Ignoring mapping for unknown category %r (%s)", category_name, kind)
            return False

        missing = list(self.batch.missing_categories)
        current = missing[index]
        missing[index] = MissingCategory(name=current.name, kind=current.kind, mapped_to_id=category_id)
        self.batch = self.batch.with_missing_categories(missing)
        logger.info("Mapped category %r (%s) to %s", current.name, current.kind.value, category_id)
        return True

    def is_complete(self) -> bool:
        """True when every missing category has been mapped."""
        return self.batch.is_commit_ready()

    def unmapped(self) -> list[MissingCategory]:
        return [m for m in self.batch.missing_categories if m.mapped_to_id is None]

    def category_for(self, txn: CandidateTransaction) -> Optional[int]:
        """Return the category a row will be committed with, or None if still unmapped."""
        if txn.resolved_category_id is not None:
            return txn.resolved_category_id

        index = self._find(txn.original_category_name, txn.kind)
        if index is None:
            return None
        return self.batch.missing_categories[index].mapped_to_id
