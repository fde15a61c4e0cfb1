from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from frostline.db.base import Base
from frostline.models.enums import SOWING_METHOD_VALUES


class Plant(Base):
    __tablename__ = "plants"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    name: Mapped[str] = mapped_column(String(200))
    variety: Mapped[Optional[str]] = mapped_column(String(200))
    notes: Mapped[Optional[str]] = mapped_column(Text)

    sowing_method: Mapped[str] = mapped_column(Enum(*SOWING_METHOD_VALUES, name="sowing_method_enum"))

    # Signed day offsets from the frost date (negative = before)
    seed_start_offset_days: Mapped[Optional[int]] = mapped_column(Integer)
    hardening_offset_days: Mapped[Optional[int]] = mapped_column(Integer)
    transplant_offset_days: Mapped[Optional[int]] = mapped_column(Integer)

    # Growing details, free text
    days_to_sprout: Mapped[Optional[str]] = mapped_column(String(50))
    seed_depth: Mapped[Optional[str]] = mapped_column(String(50))
    plant_spacing: Mapped[Optional[str]] = mapped_column(String(50))

    muted_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), index=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    user: Mapped["User"] = relationship(back_populates="plants")
    tasks: Mapped[list["Task"]] = relationship(
        back_populates="plant", cascade="all", passive_deletes=True
    )
