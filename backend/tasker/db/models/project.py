"""Project ORM model."""
from __future__ import annotations

from uuid import uuid4

from sqlalchemy import Column, DateTime, Index, String, Text, func, text as sa_text
from sqlalchemy.orm import relationship

from tasker.db.base import Base
from tasker.db.types import GUID, JSONBCompat


class Project(Base):
    __tablename__ = "projects"
    __table_args__ = (Index("ix_projects_created_at", "created_at"),)

    id = Column(GUID, primary_key=True, default=uuid4)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    goal = Column(Text, nullable=False)
    category = Column(String(length=50), nullable=False, server_default=sa_text("'other'"))
    status = Column(String(length=50), nullable=False, server_default=sa_text("'active'"))
    # Column named "metadata" but attribute renamed to avoid Base.metadata collisions.
    metadata_json = Column("metadata", JSONBCompat, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    tasks = relationship(
        "Task",
        back_populates="project",
        order_by="Task.position",
        cascade="all, delete-orphan",
    )
