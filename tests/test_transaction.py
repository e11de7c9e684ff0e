"""Tests for transaction commands."""

from datetime import date, timedelta
from decimal import Decimal

import pytest
from famfin.cli.main import cli
from famfin.domain.entities import TransactionKind
from famfin.domain.errors import NotFoundError, ValidationError


def add_args(account, *extra):
    return [
        "transaction",
        "add",
        "--account",
        account,
        "--name",
        "Mercado",
        "--amount",
        "52,30",
        "--type",
        "expense",
        "--category",
        "Alimentação",
        *extra,
    ]


def test_add_transaction(cli_runner, cli_args, sample_account, sample_categories,
                         account_service, transaction_service, workspace):
    """Test adding an expense by account name."""
    result = cli_runner.invoke(
        cli, cli_args + add_args("Conta Corrente", "--date", "2024-01-15")
    )

    assert result.exit_code == 0
    assert "Created transaction" in result.output
    assert "-52.30" in result.output
    assert account_service.get_account(sample_account.id).balance == Decimal("947.70")

    txn = transaction_service.list_transactions(workspace.id)[0]
    assert txn.date == date(2024, 1, 15)
    assert txn.user_id == "local"


def test_add_transaction_with_account_id(cli_runner, cli_args, sample_account, sample_categories):
    result = cli_runner.invoke(cli, cli_args + add_args(str(sample_account.id)))

    assert result.exit_code == 0


def test_add_transaction_records_user(cli_runner, cli_args, sample_account, sample_categories,
                                      transaction_service, workspace):
    result = cli_runner.invoke(
        cli, cli_args + ["--user", "ana"] + add_args("Conta Corrente", "--date", "yesterday")
    )

    assert result.exit_code == 0
    txn = transaction_service.list_transactions(workspace.id)[0]
    assert txn.user_id == "ana"
    assert txn.date == date.today() - timedelta(days=1)


def test_add_transaction_invalid_account(cli_runner, cli_args, sample_categories):
    result = cli_runner.invoke(cli, cli_args + add_args("Inexistente"))

    assert result.exit_code == 1
    assert "not found" in result.output


def test_add_transaction_wrong_category_kind(cli_runner, cli_args, sample_account,
                                             sample_categories, transaction_service, workspace):
    result = cli_runner.invoke(
        cli, cli_args + add_args("Conta Corrente")[:-2] + ["--category", "Salário"]
    )

    assert result.exit_code == 1
    assert transaction_service.list_transactions(workspace.id) == []


def test_list_transactions_empty(cli_runner, cli_args):
    result = cli_runner.invoke(cli, cli_args + ["transaction", "list"])

    assert result.exit_code == 0
    assert "No transactions found" in result.output


def test_list_transactions(cli_runner, cli_args, sample_account, sample_categories,
                           transaction_service, workspace):
    transaction_service.add_transaction(
        workspace_id=workspace.id, user_id="local", account_id=sample_account.id,
        name="Cinema", amount="45", kind=TransactionKind.EXPENSE,
        category="Lazer", date=date(2024, 1, 20),
    )

    result = cli_runner.invoke(cli, cli_args + ["transaction", "list", "--account", "Conta Corrente"])

    assert result.exit_code == 0
    assert "Cinema" in result.output
    assert "Lazer" in result.output
    assert "-45.00" in result.output


class TestTransactionService:
    @pytest.mark.parametrize("amount", ["0", "-10", "abc", "0.001", "9.999"])
    def test_invalid_amount(self, transaction_service, workspace, sample_account,
                            sample_categories, amount):
        with pytest.raises(ValidationError):
            transaction_service.add_transaction(
                workspace_id=workspace.id, user_id="local", account_id=sample_account.id,
                name="X", amount=amount, kind=TransactionKind.EXPENSE,
                category="Lazer", date=date(2024, 1, 1),
            )

    def test_invalid_kind(self, transaction_service, workspace, sample_account, sample_categories):
        with pytest.raises(ValidationError):
            transaction_service.add_transaction(
                workspace_id=workspace.id, user_id="local", account_id=sample_account.id,
                name="X", amount="10", kind="transfer", category="Lazer", date=date(2024, 1, 1),
            )

    def test_unknown_account(self, transaction_service, workspace, sample_categories):
        with pytest.raises(NotFoundError):
            transaction_service.add_transaction(
                workspace_id=workspace.id, user_id="local", account_id=999,
                name="X", amount="10", kind=TransactionKind.EXPENSE,
                category="Lazer", date=date(2024, 1, 1),
            )

    def test_income_is_positive(self, transaction_service, workspace, sample_account,
                                sample_categories, account_service):
        txn_id = transaction_service.add_transaction(
            workspace_id=workspace.id, user_id="local", account_id=sample_account.id,
            name="Freela", amount="200", kind=TransactionKind.INCOME,
            category="Serviços", date=date(2024, 1, 1),
        )

        assert transaction_service.get_transaction(txn_id).amount == Decimal("200")
        assert account_service.get_account(sample_account.id).balance == Decimal("1200.00")
