"""Task model."""

from datetime import datetime, timezone

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, Query, mapped_column, relationship

from taskboard.extensions import db


TASK_STATUSES = ("pending", "in-progress", "completed")


def utcnow() -> datetime:
    """Current UTC time as a naive datetime, the form stored in the database."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Task(db.Model):
    """A user-owned unit of work moving through the three board columns."""

    __tablename__ = "tasks"

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(Text, default="")
    status: Mapped[str] = mapped_column(String(20), default="pending", index=True)
    due_date: Mapped[datetime] = mapped_column(nullable=False)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=utcnow, onupdate=utcnow)

    # Relationships
    owner: Mapped["User"] = relationship("User", back_populates="tasks")  # noqa: F821

    @classmethod
    def for_user(cls, user_id: int, status: str | None = None) -> Query:
        """Build the owner-scoped task query, newest first.

        Args:
            user_id: Owner of the tasks.
            status: Optional status filter. Values outside TASK_STATUSES
                are ignored and the full list is returned.

        Returns:
            SQLAlchemy query over the user's tasks.
        """
        query = db.session.query(cls).filter(cls.user_id == user_id)

        if status in TASK_STATUSES:
            query = query.filter(cls.status == status)

        return query.order_by(cls.created_at.desc(), cls.id.desc())

    def is_owned_by(self, user_id: int) -> bool:
        return self.user_id == user_id

    def __repr__(self) -> str:
        return f"<Task {self.id} {self.status}>"
