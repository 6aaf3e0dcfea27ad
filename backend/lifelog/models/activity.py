"""Activity ORM model."""

from datetime import date, datetime

from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    Date,
    ForeignKey,
    Index,
    SmallInteger,
    String,
    TIMESTAMP,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from lifelog.database import Base


class Activity(Base):
    """A single logged life event with mood / energy metadata.

    ``category`` holds the short code chosen by the client
    (``belajar``, ``kerja``, ``olahraga``, ``santai``, ``lainnya``);
    display labels are resolved at read time.
    """

    __tablename__ = "activities"
    __table_args__ = (
        CheckConstraint(
            "energy >= 1 AND energy <= 5",
            name="ck_activities_energy_range",
        ),
        Index("ix_activities_user_date", "user_id", "activity_date"),
    )

    id: Mapped[int] = mapped_column(
        BigInteger,
        primary_key=True,
        autoincrement=True,
    )
    user_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    category: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
    )
    mood: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
    )
    energy: Mapped[int] = mapped_column(
        SmallInteger,
        nullable=False,
    )
    note: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    activity_date: Mapped[date] = mapped_column(
        Date,
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    # --- Relationships ---
    user: Mapped["User"] = relationship(  # noqa: F821
        back_populates="activities",
    )

    def __repr__(self) -> str:
        return (
            f"<Activity(id={self.id}, user_id={self.user_id}, "
            f"title={self.title!r}, date={self.activity_date})>"
        )
