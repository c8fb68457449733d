"""Task model."""
from enum import Enum

from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, Text, Enum as SQLEnum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid
from worktracker.database import Base
from worktracker.db.types import GUID


class TaskStatus(str, Enum):
    """Task status."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    ON_HOLD = "on_hold"


class TaskPriority(str, Enum):
    """Task priority."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Task(Base):
    """Work item assigned to a user.

    ``pending_*`` columns hold at most one status change requested by a
    non-admin; they are all NULL while the task is settled.
    """

    __tablename__ = "tasks"

    id = Column(GUID(), primary_key=True, default=uuid.uuid4, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    priority = Column(SQLEnum(TaskPriority), default=TaskPriority.MEDIUM, nullable=False, index=True)
    status = Column(SQLEnum(TaskStatus), default=TaskStatus.PENDING, nullable=False, index=True)
    start_date = Column(DateTime(timezone=True), nullable=True)
    due_date = Column(DateTime(timezone=True), nullable=True, index=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)

    created_by_id = Column(GUID(), ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    assigned_to_id = Column(GUID(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    pending_requested_status = Column(SQLEnum(TaskStatus), nullable=True)
    pending_requested_by_id = Column(GUID(), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    pending_requested_at = Column(DateTime(timezone=True), nullable=True)

    version = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)

    __mapper_args__ = {"version_id_col": version}

    # Relationships
    created_by = relationship("User", foreign_keys=[created_by_id], lazy="selectin")
    assigned_to = relationship("User", foreign_keys=[assigned_to_id], lazy="selectin")
    pending_requested_by = relationship("User", foreign_keys=[pending_requested_by_id], lazy="selectin")

    @property
    def pending_status(self):
        """Pending request as a mapping, or None when settled."""
        if self.pending_requested_status is None:
            return None
        return {
            "requested_status": self.pending_requested_status,
            "requested_by": self.pending_requested_by,
            "requested_at": self.pending_requested_at,
        }
