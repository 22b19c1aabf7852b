"""Store generated plans as projects, tasks, and task fields."""
from __future__ import annotations

import logging
from typing import Mapping, Protocol
from uuid import UUID

from sqlalchemy.orm import Session

from tasker.db.models.project import Project
from tasker.db.models.task import Task
from tasker.db.models.task_field import TaskField
from tasker.llm.records import TaskPlan
from tasker.services.project_intake import derive_project_fields

logger = logging.getLogger(__name__)


class TaskSink(Protocol):
    def save_plan(self, goal: str, answers: Mapping[str, str], plan: TaskPlan) -> UUID:
        ...


class SqlAlchemyTaskSink:
    """Writes one project per plan in a single transaction."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def save_plan(self, goal: str, answers: Mapping[str, str], plan: TaskPlan) -> UUID:
        derived = derive_project_fields(goal, plan.project_title)
        project = Project(
            title=derived.title,
            description=plan.project_description,
            goal=goal.strip(),
            category=derived.category,
            status="active",
            metadata_json={"answers": dict(answers)},
        )
        for position, generated in enumerate(plan.tasks):
            task = Task(
                title=generated.title,
                description=generated.description,
                estimated_minutes=generated.estimated_minutes,
                priority=generated.priority.value,
                position=position,
                status="todo",
            )
            for definition in generated.fields:
                task.fields.append(
                    TaskField(
                        name=definition.name,
                        label=definition.label,
                        field_type=definition.type.value,
                        required=definition.required,
                        field_order=definition.order,
                    )
                )
            project.tasks.append(task)

        self.db.add(project)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(project)

        logger.info("Saved project %s with %d tasks", project.id, len(plan.tasks))
        return project.id
