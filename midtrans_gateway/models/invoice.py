from decimal import Decimal

from sqlalchemy import Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from midtrans_gateway.models.base import Base, TimestampMixin


class Invoice(TimestampMixin, Base):
    """Billing platform invoice. Read-only from this service."""

    __tablename__ = "invoices"

    id: Mapped[str] = mapped_column(String(50), primary_key=True)
    client_id: Mapped[str] = mapped_column(String(50), index=True)
    currency: Mapped[str | None] = mapped_column(String(3), nullable=True)
    total: Mapped[Decimal | None] = mapped_column(Numeric(19, 4), nullable=True)

    def __repr__(self) -> str:
        return f"<Invoice {self.id} client={self.client_id}>"
