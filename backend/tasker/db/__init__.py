"""Persistence layer: declarative base and the project/task/field models."""

from tasker.db.base import Base
from tasker.db.models import Project, Task, TaskField

__all__ = ["Base", "Project", "Task", "TaskField"]
