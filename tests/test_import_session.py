"""Tests for the import session state machine."""

from decimal import Decimal

import pytest

from famfin.domain.commit import CommitEngine
from famfin.domain.entities import TransactionKind
from famfin.domain.errors import (
    CommitFailedError,
    InvalidTransitionError,
    MappingIncompleteError,
    NoImportInProgressError,
    StoreError,
)
from famfin.domain.import_session import ImportSession, ImportState, TRANSITIONS

HEADER = "date,name,amount,type,category,account,description\n"
KNOWN = HEADER + "2023-01-15,Salário,3000.00,income,Salário,,\n"
UNKNOWN = HEADER + "2023-02-01,Netflix,39.90,expense,Assinaturas,,\n"


@pytest.fixture
def new_session(temp_db, staging):
    def factory():
        return ImportSession(staging, CommitEngine(temp_db, staging))

    return factory


@pytest.fixture
def session(new_session):
    return new_session()


@pytest.fixture
def refs(account_service, category_service, workspace, sample_account, sample_categories):
    return {
        "account": sample_account,
        "accounts": account_service.list_accounts(workspace.id),
        "categories": category_service.list_categories(workspace.id),
        "workspace_id": workspace.id,
    }


def test_starts_uploaded(session):
    assert session.state == ImportState.UPLOADED
    assert not session.is_complete()


def test_no_transition_leaves_committed():
    assert TRANSITIONS[ImportState.COMMITTED] == frozenset()


def test_fully_resolved_upload_is_ready(session, refs):
    session.stage(KNOWN, **refs)
    assert session.state == ImportState.READY
    assert session.is_complete()


def test_missing_categories_go_to_mapping(session, refs):
    session.stage(UNKNOWN, **refs)
    assert session.state == ImportState.MAPPING
    assert not session.is_complete()


def test_mapping_moves_to_ready(session, refs, sample_categories):
    session.stage(UNKNOWN, **refs)

    assert session.set_mapping("Assinaturas", TransactionKind.EXPENSE, sample_categories["Lazer"])
    assert session.state == ImportState.READY


def test_mapping_is_persisted(session, new_session, refs, sample_categories):
    session.stage(UNKNOWN, **refs)
    session.set_mapping("Assinaturas", TransactionKind.EXPENSE, sample_categories["Lazer"])

    resumed = new_session()
    resumed.resume()

    assert resumed.state == ImportState.READY
    assert resumed.batch.missing_categories[0].mapped_to_id == sample_categories["Lazer"]


def test_resume_without_staged_batch(session):
    with pytest.raises(NoImportInProgressError):
        session.resume()


def test_mapping_before_upload_rejected(session):
    with pytest.raises(InvalidTransitionError):
        session.set_mapping("Assinaturas", TransactionKind.EXPENSE, 1)


def test_commit_requires_mapping(session, refs):
    session.stage(UNKNOWN, **refs)

    with pytest.raises(MappingIncompleteError):
        session.commit(user_id="local", workspace_id=refs["workspace_id"])
    assert session.state == ImportState.MAPPING


def test_commit(session, refs, account_service):
    session.stage(KNOWN, **refs)

    result = session.commit(user_id="local", workspace_id=refs["workspace_id"])

    assert result.imported == 1
    assert session.state == ImportState.COMMITTED
    assert account_service.get_account(refs["account"].id).balance == Decimal("4000.00")


def test_committed_session_is_final(session, refs):
    session.stage(KNOWN, **refs)
    session.commit(user_id="local", workspace_id=refs["workspace_id"])

    with pytest.raises(InvalidTransitionError):
        session.cancel()
    with pytest.raises(InvalidTransitionError):
        session.stage(KNOWN, **refs)


def test_store_failure_then_retry(session, refs, temp_db, staging, monkeypatch):
    session.stage(KNOWN, **refs)

    def fail(drafts, balance_deltas):
        raise StoreError("disk I/O error")

    monkeypatch.setattr(temp_db, "apply_import", fail)
    with pytest.raises(CommitFailedError):
        session.commit(user_id="local", workspace_id=refs["workspace_id"])
    assert session.state == ImportState.FAILED
    assert staging.load() is not None

    monkeypatch.undo()
    result = session.commit(user_id="local", workspace_id=refs["workspace_id"])

    assert result.imported == 1
    assert session.state == ImportState.COMMITTED


def test_cancel_clears_staging(session, refs, staging):
    session.stage(UNKNOWN, **refs)
    session.cancel()

    assert session.state == ImportState.UPLOADED
    assert session.batch is None
    assert staging.load() is None


def test_new_upload_replaces_staged_batch(session, refs):
    session.stage(UNKNOWN, **refs)
    batch = session.stage(KNOWN, **refs)

    assert session.state == ImportState.READY
    assert [t.name for t in batch.transactions] == ["Salário"]
