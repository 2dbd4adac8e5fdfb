"""Todo model - the core entity of TodoDash."""

import enum
from datetime import date, datetime

from sqlalchemy import String, Text, Integer, Boolean, Date, DateTime, Enum, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tododash.models.base import Base, new_id, utcnow


class Priority(str, enum.Enum):
    """Fixed three-level priority."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class TodoTag(Base):
    """Association table for Todo-Tag many-to-many relationship."""

    __tablename__ = "todo_tags"

    todo_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("todos.id", ondelete="CASCADE"),
        primary_key=True,
    )
    tag_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("tags.id", ondelete="CASCADE"),
        primary_key=True,
    )


class Todo(Base):
    """A single todo item owned by one user."""

    __tablename__ = "todos"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    completed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    priority: Mapped[Priority] = mapped_column(
        Enum(
            Priority,
            name="priority",
            values_callable=lambda e: [member.value for member in e],
            validate_strings=True,
        ),
        default=Priority.MEDIUM,
        nullable=False,
    )
    due_date: Mapped[date | None] = mapped_column(Date)
    position: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    category_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("categories.id", ondelete="SET NULL"),
        index=True,
    )

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    # Relationships
    category: Mapped["Category | None"] = relationship(  # noqa: F821
        back_populates="todos",
    )
    tags: Mapped[list["Tag"]] = relationship(  # noqa: F821
        secondary="todo_tags",
        back_populates="todos",
        order_by="Tag.name",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        status = "done" if self.completed else "pending"
        return f"<Todo(content={self.content!r}, status={status})>"
