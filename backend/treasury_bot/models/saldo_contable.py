"""Treasury account balance model."""

from decimal import Decimal

from sqlalchemy import Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from treasury_bot.database import Base


class SaldoContable(Base):
    """Account balance snapshot from the `saldos_contables_sync` table."""

    __tablename__ = "saldos_contables_sync"

    account_code: Mapped[str] = mapped_column("codigo_cuenta", String(50), primary_key=True)
    account_name: Mapped[str | None] = mapped_column("nombre_cuenta", String(255), nullable=True)
    total_balance: Mapped[Decimal | None] = mapped_column(
        "saldo_total", Numeric(18, 2), nullable=True
    )

    def __repr__(self) -> str:
        return f"<SaldoContable({self.account_code} {self.total_balance})>"
