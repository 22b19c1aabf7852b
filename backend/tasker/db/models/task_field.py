"""Input field attached to a generated task."""
from __future__ import annotations

from uuid import uuid4

from sqlalchemy import Boolean, Column, ForeignKey, Index, Integer, String, Text, text as sa_text
from sqlalchemy.orm import relationship

from tasker.db.base import Base
from tasker.db.types import GUID


class TaskField(Base):
    __tablename__ = "task_fields"
    __table_args__ = (Index("ix_task_fields_task_id", "task_id"),)

    id = Column(GUID, primary_key=True, default=uuid4)
    task_id = Column(GUID, ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False)
    name = Column(String(length=100), nullable=False)
    label = Column(Text, nullable=False)
    field_type = Column(String(length=20), nullable=False, server_default=sa_text("'text'"))
    required = Column(Boolean, nullable=False, server_default=sa_text("false"))
    field_order = Column(Integer, nullable=False, server_default=sa_text("0"))
    value = Column(Text, nullable=True)

    task = relationship("Task", back_populates="fields")
