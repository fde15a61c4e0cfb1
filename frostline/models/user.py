from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from frostline.db.base import Base


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)
    first_name: Mapped[str] = mapped_column(String(100))
    last_name: Mapped[Optional[str]] = mapped_column(String(100))
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )

    # Relationships
    plants: Mapped[list["Plant"]] = relationship(
        back_populates="user", cascade="all", passive_deletes=True
    )
    tasks: Mapped[list["Task"]] = relationship(
        back_populates="user", cascade="all", passive_deletes=True
    )
    settings: Mapped[list["Setting"]] = relationship(
        back_populates="user", cascade="all", passive_deletes=True
    )
    garden_entries: Mapped[list["GardenEntry"]] = relationship(
        back_populates="user", cascade="all", passive_deletes=True
    )
