"""ORM models exposed for metadata discovery."""
from tasker.db.models.project import Project
from tasker.db.models.task import Task
from tasker.db.models.task_field import TaskField

__all__ = [
    "Project",
    "Task",
    "TaskField",
]
