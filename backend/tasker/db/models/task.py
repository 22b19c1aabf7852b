"""Task ORM model."""
from __future__ import annotations

from uuid import uuid4

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String, Text, func, text as sa_text
from sqlalchemy.orm import relationship

from tasker.db.base import Base
from tasker.db.types import GUID


class Task(Base):
    __tablename__ = "tasks"
    __table_args__ = (
        Index("ix_tasks_project_id", "project_id"),
        Index("ix_tasks_status", "status"),
    )

    id = Column(GUID, primary_key=True, default=uuid4)
    project_id = Column(GUID, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    estimated_minutes = Column(Integer, nullable=False, server_default=sa_text("30"))
    priority = Column(String(length=20), nullable=False, server_default=sa_text("'medium'"))
    position = Column(Integer, nullable=False, server_default=sa_text("0"))
    status = Column(String(length=50), nullable=False, server_default=sa_text("'todo'"))
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    project = relationship("Project", back_populates="tasks")
    fields = relationship(
        "TaskField",
        back_populates="task",
        order_by="TaskField.field_order",
        cascade="all, delete-orphan",
    )
