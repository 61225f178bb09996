"""SQLAlchemy ORM models."""

from treasury_bot.models.allowed_user import AllowedUser
from treasury_bot.models.cheque_valor import ChequeValor
from treasury_bot.models.saldo_contable import SaldoContable

__all__ = [
    "AllowedUser",
    "ChequeValor",
    "SaldoContable",
]
