from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import DateTime, Index, String, func
from sqlalchemy.orm import Mapped, mapped_column

from app.custlookup.models import Base


class Customer(Base):
    """
    Customer record as stored upstream.
    Table and column names match the existing schema (singular `Customer`).
    """
    __tablename__ = "Customer"
    __table_args__ = (
        Index("idx_customer_created_at", "created_at"),
    )

    id: Mapped[str] = mapped_column("id", String(64), primary_key=True)
    name: Mapped[str] = mapped_column("name", String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        "created_at",
        DateTime(timezone=False),
        nullable=False,
        server_default=func.current_timestamp(),
    )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self) -> str:
        return f"<Customer id={self.id!r}>"
