"""Tests for CSV import commands."""

from decimal import Decimal

from famfin.cli.main import cli
from famfin.domain.csv_template import template_header


def stage(cli_runner, cli_args, csv_file, account="Conta Corrente"):
    return cli_runner.invoke(cli, cli_args + ["import", "stage", str(csv_file), "--account", account])


def test_template(cli_runner, cli_args, tmp_path):
    output = tmp_path / "modelo.csv"

    result = cli_runner.invoke(cli, cli_args + ["import", "template", str(output)])

    assert result.exit_code == 0
    assert "Template written to" in result.output
    assert output.read_text(encoding="utf-8").splitlines()[0] == template_header()


def test_stage_and_confirm(cli_runner, cli_args, sample_account, sample_categories,
                           account_service, fixtures_dir):
    """Test a clean import from upload to confirmation."""
    result = stage(cli_runner, cli_args, fixtures_dir / "sample_transactions.csv")

    assert result.exit_code == 0
    assert "Import staged" in result.output
    assert "Transactions: 4" in result.output
    assert "Projected balance: 2504.50" in result.output
    assert "famfin import confirm" in result.output
    # Nothing is saved before confirmation
    assert account_service.get_account(sample_account.id).balance == Decimal("1000.00")

    result = cli_runner.invoke(cli, cli_args + ["import", "confirm"])

    assert result.exit_code == 0
    assert "Importação concluída! 4 transações adicionadas." in result.output
    assert "+1504.50" in result.output
    assert account_service.get_account(sample_account.id).balance == Decimal("2504.50")


def test_stage_unknown_account(cli_runner, cli_args, sample_account, fixtures_dir):
    result = stage(cli_runner, cli_args, fixtures_dir / "sample_transactions.csv", account="Nope")

    assert result.exit_code == 1
    assert "not found" in result.output


def test_stage_reports_errors(cli_runner, cli_args, sample_account, sample_categories,
                              fixtures_dir):
    result = stage(cli_runner, cli_args, fixtures_dir / "with_errors.csv")

    assert result.exit_code == 0
    assert "Errors (4)" in result.output
    assert "Linha 2: Valor inválido para 'amount'." in result.output
    assert "Linha 3: Tipo de transação inválido" in result.output


def test_header_only_file(cli_runner, cli_args, sample_account, fixtures_dir):
    result = stage(cli_runner, cli_args, fixtures_dir / "headers_only.csv")
    assert "Nothing to import." in result.output

    result = cli_runner.invoke(cli, cli_args + ["import", "confirm"])

    assert result.exit_code == 1
    assert "Nenhuma transação válida encontrada para importação." in result.output


def test_map_missing_categories(cli_runner, cli_args, sample_account, sample_categories,
                                account_service, transaction_service, workspace, fixtures_dir):
    result = stage(cli_runner, cli_args, fixtures_dir / "with_missing_categories.csv")

    assert result.exit_code == 0
    assert "Missing categories (2)" in result.output
    assert "famfin import map" in result.output

    result = cli_runner.invoke(cli, cli_args + ["import", "confirm"])
    assert result.exit_code == 1
    assert "Assinaturas" in result.output
    assert transaction_service.list_transactions(workspace.id) == []

    result = cli_runner.invoke(
        cli, cli_args + ["import", "map", "assinaturas", "--type", "expense", "--to", "Lazer"]
    )
    assert result.exit_code == 0
    assert "1 missing category left to map." in result.output

    result = cli_runner.invoke(
        cli, cli_args + ["import", "map", "Bônus", "--type", "income", "--to", "Serviços"]
    )
    assert result.exit_code == 0
    assert "All categories mapped" in result.output

    result = cli_runner.invoke(cli, cli_args + ["import", "confirm"])
    assert result.exit_code == 0
    assert "4 transações adicionadas" in result.output
    assert account_service.get_account(sample_account.id).balance == Decimal("1426.20")


def test_map_to_wrong_kind(cli_runner, cli_args, sample_account, sample_categories, fixtures_dir):
    stage(cli_runner, cli_args, fixtures_dir / "with_missing_categories.csv")

    result = cli_runner.invoke(
        cli, cli_args + ["import", "map", "Bônus", "--type", "income", "--to", "Lazer"]
    )

    assert result.exit_code == 1
    assert "expense category" in result.output


def test_map_unknown_name(cli_runner, cli_args, sample_account, sample_categories, fixtures_dir):
    stage(cli_runner, cli_args, fixtures_dir / "with_missing_categories.csv")

    result = cli_runner.invoke(
        cli, cli_args + ["import", "map", "Viagem", "--type", "expense", "--to", "Lazer"]
    )

    assert result.exit_code == 0
    assert "No missing category 'Viagem'" in result.output


def test_status(cli_runner, cli_args, sample_account, sample_categories, fixtures_dir):
    stage(cli_runner, cli_args, fixtures_dir / "with_missing_categories.csv")
    cli_runner.invoke(
        cli, cli_args + ["import", "map", "Assinaturas", "--type", "expense", "--to", "Lazer"]
    )

    result = cli_runner.invoke(cli, cli_args + ["import", "status"])

    assert result.exit_code == 0
    assert "from with_missing_categories.csv" in result.output
    assert "Assinaturas [expense] -> Lazer" in result.output
    assert "Bônus [income] (not mapped)" in result.output
    assert "? Bônus" in result.output
    assert "Netflix" in result.output


def test_status_without_upload(cli_runner, cli_args):
    result = cli_runner.invoke(cli, cli_args + ["import", "status"])

    assert result.exit_code == 1
    assert "Nenhuma importação em andamento" in result.output


def test_confirm_reports_skipped_rows(cli_runner, cli_args, sample_account, sample_categories,
                                      fixtures_dir):
    stage(cli_runner, cli_args, fixtures_dir / "with_errors.csv")

    result = cli_runner.invoke(cli, cli_args + ["import", "confirm"])

    assert result.exit_code == 0
    assert "1 transações adicionadas" in result.output
    assert "Rows not imported (4)" in result.output


def test_cancel(cli_runner, cli_args, sample_account, sample_categories, fixtures_dir):
    stage(cli_runner, cli_args, fixtures_dir / "sample_transactions.csv")

    result = cli_runner.invoke(cli, cli_args + ["import", "cancel"])
    assert result.exit_code == 0
    assert "Staged import discarded." in result.output

    result = cli_runner.invoke(cli, cli_args + ["import", "confirm"])
    assert result.exit_code == 1
    assert "Nenhuma importação em andamento" in result.output


def test_staging_is_per_user(cli_runner, cli_args, sample_account, sample_categories,
                             fixtures_dir):
    stage(cli_runner, cli_args, fixtures_dir / "sample_transactions.csv")

    result = cli_runner.invoke(cli, cli_args + ["--user", "bruno", "import", "confirm"])

    assert result.exit_code == 1
    assert "Nenhuma importação em andamento" in result.output
