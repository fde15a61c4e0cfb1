from datetime import date, datetime, timezone
from typing import Optional

from sqlalchemy import Date, DateTime, Enum, ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from frostline.db.base import Base
from frostline.models.enums import TASK_STATUS_VALUES, TASK_TYPE_VALUES


class Task(Base):
    __tablename__ = "tasks"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    # NULL for general tasks, which regeneration never touches
    plant_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("plants.id", ondelete="CASCADE"), index=True
    )

    task_type: Mapped[str] = mapped_column(Enum(*TASK_TYPE_VALUES, name="task_type_enum"))
    due_date: Mapped[date] = mapped_column(Date, index=True)
    end_date: Mapped[Optional[date]] = mapped_column(Date)
    status: Mapped[str] = mapped_column(
        Enum(*TASK_STATUS_VALUES, name="task_status_enum"), default="pending"
    )
    notes: Mapped[Optional[str]] = mapped_column(Text)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    user: Mapped["User"] = relationship(back_populates="tasks")
    plant: Mapped[Optional["Plant"]] = relationship(back_populates="tasks")
