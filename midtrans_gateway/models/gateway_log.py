from sqlalchemy import Boolean, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from midtrans_gateway.models.base import Base, TimestampMixin, generate_prefixed_id


def generate_gateway_log_id() -> str:
    return generate_prefixed_id("gwlog")


class GatewayLog(TimestampMixin, Base):
    __tablename__ = "gateway_logs"

    id: Mapped[str] = mapped_column(
        String(50), primary_key=True, default=generate_gateway_log_id
    )
    gateway: Mapped[str] = mapped_column(String(50), index=True, default="midtrans")
    url: Mapped[str] = mapped_column(Text, nullable=False)
    direction: Mapped[str] = mapped_column(String(10), nullable=False)
    data: Mapped[str] = mapped_column(Text, nullable=False)
    success: Mapped[bool] = mapped_column(Boolean, nullable=False)

    def __repr__(self) -> str:
        return f"<GatewayLog {self.id} {self.direction} success={self.success}>"
