"""SQLAlchemy adapter – ORM mapping for the ``todos`` table."""
from __future__ import annotations

import datetime

from sqlalchemy import Boolean, DateTime, Index, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class TodoRecord(Base):
    """One row per Todo aggregate; ``priority`` holds the integer enum value."""

    __tablename__ = "todos"
    __table_args__ = (
        Index("ix_todos_is_completed", "is_completed"),
        Index("ix_todos_priority", "priority"),
        Index("ix_todos_created_at", "created_at"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    priority: Mapped[int] = mapped_column(Integer, nullable=False)
    is_completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    completed_at: Mapped[datetime.datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)


__all__ = ["Base", "TodoRecord"]
