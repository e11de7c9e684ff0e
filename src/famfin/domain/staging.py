"""Staging stores for parsed-but-uncommitted import batches.

A staging store holds at most one ImportBatch. It is the only channel between
the upload step and the confirmation step, so both steps receive the same
store instance instead of reaching for shared module state.
"""

import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from decimal import InvalidOperation
from pathlib import Path
from typing import Optional

from famfin.domain.entities import ImportBatch

logger = logging.getLogger(__name__)

STAGING_KEY = "pending_import"


class StagingStore(ABC):
    """Holds the single in-flight import batch of one session."""

    @abstractmethod
    def save(self, batch: ImportBatch) -> None:
        """Store batch, replacing any batch already staged."""
        pass

    @abstractmethod
    def load(self) -> Optional[ImportBatch]:
        """Return the staged batch, or None if nothing is staged."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Discard the staged batch. Clearing an empty store is a no-op."""
        pass


class InMemoryStagingStore(StagingStore):
    """Staging store kept in process memory, serialized like the file store."""

    def __init__(self):
        self._blob: Optional[str] = None

    def save(self, batch: ImportBatch) -> None:
        self._blob = json.dumps(batch.to_dict())

    def load(self) -> Optional[ImportBatch]:
        if self._blob is None:
            return None
        return ImportBatch.from_dict(json.loads(self._blob))

    def clear(self) -> None:
        self._blob = None


class FileStagingStore(StagingStore):
    """Staging store writing one JSON blob under a well-known key."""

    def __init__(self, directory: Path | str, key: str = STAGING_KEY):
        """Initialize file staging store.

        Args:
            directory: Directory holding the blob; created on first save
            key: Blob name, the file is ``<directory>/<key>.json``
        """
        self.directory = Path(directory)
        self.key = key

    @property
    def path(self) -> Path:
        return self.directory / f"{self.key}.json"

    def save(self, batch: ImportBatch) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        payload = json.dumps(batch.to_dict(), ensure_ascii=False, indent=2)

        # Readers see either the old blob or the new one
        fd, tmp_path = tempfile.mkstemp(dir=self.directory, prefix=f".{self.key}-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_path, self.path)
        except OSError:
            try:
                os.unlink(tmp_path)
            except FileNotFoundError:
                pass
            except OSError as cleanup_error:
                logger.warning("Could not remove temporary file %s: %s", tmp_path, cleanup_error)
            raise
        logger.debug("Staged import batch at %s", self.path)

    def load(self) -> Optional[ImportBatch]:
        if not self.path.exists():
            return None

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            return ImportBatch.from_dict(data)
        except (ValueError, KeyError, TypeError, AttributeError, InvalidOperation) as e:
            # An unreadable blob is treated as "nothing staged" and dropped
            logger.warning("Discarding unreadable staged import at %s: %s", self.path, e)
            self.clear()
            return None

    def clear(self) -> None:
        try:
            self.path.unlink()
        except FileNotFoundError:
            return
        logger.debug("Cleared staged import batch at %s", self.path)
