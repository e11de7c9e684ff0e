"""Downloadable template for transaction uploads."""

from famfin.domain.csv_parser import OPTIONAL_COLUMNS, REQUIRED_COLUMNS

TEMPLATE_FILENAME = "template_transacoes.csv"

TEMPLATE_ROWS = [
    "2023-01-01,Salário,3000.00,income,Salário,Conta Corrente,Pagamento mensal",
    "2023-01-05,Aluguel,1200.00,expense,Moradia,Conta Corrente,Aluguel do apartamento",
    "2023-01-10,Supermercado,250.50,expense,Alimentação,Conta Corrente,Compras da semana",
    "2023-01-15,Freelance,500.00,income,Serviços,Conta Poupança,Projeto X",
    "2023-01-20,Cinema,45.00,expense,Lazer,Conta Corrente,Filme com amigos",
]


def template_header() -> str:
    return ",".join(REQUIRED_COLUMNS + OPTIONAL_COLUMNS)


def template_content() -> str:
    """Return the template file content, header first."""
    return "\n".join([template_header(), *TEMPLATE_ROWS]) + "\n"
