"""Cheque model - checks held or delivered by the treasury."""

from datetime import date
from decimal import Decimal

from sqlalchemy import Date, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from treasury_bot.database import Base


class ChequeValor(Base):
    """
    One financial instrument from the `cheques_valores` table.

    The table is populated by the ERP sync; this service only reads it.
    A check is in portfolio while `delivery_date` (fecden) is NULL.
    """

    __tablename__ = "cheques_valores"

    id: Mapped[int] = mapped_column(primary_key=True)
    issuer_tax_id: Mapped[str | None] = mapped_column("cuitfirm", String(20), nullable=True)
    counterparty_name: Mapped[str | None] = mapped_column("origen", String(255), nullable=True)
    amount_local: Mapped[Decimal | None] = mapped_column("implocal", Numeric(18, 2), nullable=True)
    due_date: Mapped[date] = mapped_column("fvto", Date)
    delivery_date: Mapped[date | None] = mapped_column("fecden", Date, nullable=True)
    company: Mapped[str | None] = mapped_column("empresa", String(50), nullable=True)

    def __repr__(self) -> str:
        return f"<ChequeValor({self.id} {self.amount_local} due {self.due_date})>"
