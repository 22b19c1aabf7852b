"""Stored project API routes."""
from __future__ import annotations

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from sqlalchemy import desc
from sqlalchemy.orm import Session, selectinload

from tasker.api.schemas.projects import (
    FieldValueUpdateRequest,
    ProjectDetail,
    ProjectSummary,
    ProjectTaskSummary,
    TaskFieldSummary,
    TaskStatusUpdateRequest,
)
from tasker.db.deps import get_db
from tasker.db.models.project import Project
from tasker.db.models.task import Task
from tasker.db.models.task_field import TaskField
from tasker.observability.metrics import log_metric
from tasker.observability.tracing import trace

router = APIRouter(prefix="/projects", tags=["projects"])


@router.get("", response_model=List[ProjectSummary])
def list_projects(
    http_request: Request,
    limit: int = Query(50, ge=1, le=200),
    db: Session = Depends(get_db),
) -> List[ProjectSummary]:
    """List stored projects, newest first."""
    request_id = getattr(http_request.state, "request_id", None)
    with trace("projects.list", metadata={"route": "/projects", "limit": limit}, request_id=request_id):
        projects = (
            db.query(Project)
            .options(selectinload(Project.tasks))
            .order_by(desc(Project.created_at))
            .limit(limit)
            .all()
        )
    return [_serialize_summary(project) for project in projects]


@router.get("/{project_id}", response_model=ProjectDetail)
def get_project(
    project_id: UUID,
    http_request: Request,
    db: Session = Depends(get_db),
) -> ProjectDetail:
    """Return a project with its tasks and their input fields."""
    request_id = getattr(http_request.state, "request_id", None)
    with trace("projects.get", metadata={"project_id": str(project_id)}, request_id=request_id):
        project = (
            db.query(Project)
            .options(selectinload(Project.tasks).selectinload(Task.fields))
            .filter(Project.id == project_id)
            .one_or_none()
        )
    if not project:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")

    metadata = dict(project.metadata_json or {})
    summary = _serialize_summary(project)
    return ProjectDetail(
        **summary.model_dump(),
        answers=dict(metadata.get("answers") or {}),
        tasks=[_serialize_task(task) for task in project.tasks],
        request_id=request_id or "",
    )


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_project(
    project_id: UUID,
    http_request: Request,
    db: Session = Depends(get_db),
) -> Response:
    """Delete a project together with its tasks and field values."""
    project = db.get(Project, project_id)
    if not project:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")

    request_id = getattr(http_request.state, "request_id", None)
    try:
        with trace("projects.delete", metadata={"project_id": str(project_id)}, request_id=request_id):
            db.delete(project)
            db.commit()
    except Exception:
        db.rollback()
        raise

    log_metric("projects.delete.success", 1, metadata={"project_id": str(project_id)})
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/{project_id}/tasks/{task_id}", response_model=ProjectTaskSummary)
def update_task_status(
    project_id: UUID,
    task_id: UUID,
    payload: TaskStatusUpdateRequest,
    http_request: Request,
    db: Session = Depends(get_db),
) -> ProjectTaskSummary:
    """Mark a task done or reopen it."""
    task = _get_task(db, project_id, task_id)
    request_id = getattr(http_request.state, "request_id", None)
    changed = task.status != payload.status
    try:
        with trace(
            "projects.task.status",
            metadata={"task_id": str(task_id), "status": payload.status, "changed": changed},
            request_id=request_id,
        ):
            task.status = payload.status
            db.add(task)
            db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(task)

    log_metric("projects.task.status.changed", 1 if changed else 0, metadata={"task_id": str(task_id)})
    return _serialize_task(task)


@router.delete("/{project_id}/tasks/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(
    project_id: UUID,
    task_id: UUID,
    http_request: Request,
    db: Session = Depends(get_db),
) -> Response:
    task = _get_task(db, project_id, task_id)
    request_id = getattr(http_request.state, "request_id", None)
    try:
        with trace("projects.task.delete", metadata={"task_id": str(task_id)}, request_id=request_id):
            db.delete(task)
            db.commit()
    except Exception:
        db.rollback()
        raise
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/{project_id}/tasks/{task_id}/fields/{field_id}", response_model=TaskFieldSummary)
def update_field_value(
    project_id: UUID,
    task_id: UUID,
    field_id: UUID,
    payload: FieldValueUpdateRequest,
    http_request: Request,
    db: Session = Depends(get_db),
) -> TaskFieldSummary:
    """Save the user's input for one task field; a blank value clears it."""
    _get_task(db, project_id, task_id)
    field = db.get(TaskField, field_id)
    if not field or field.task_id != task_id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Field not found")

    request_id = getattr(http_request.state, "request_id", None)
    try:
        with trace(
            "projects.field.value",
            metadata={"field_id": str(field_id), "cleared": payload.value is None},
            request_id=request_id,
        ):
            field.value = payload.value
            db.add(field)
            db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(field)
    return _serialize_field(field)


def _get_task(db: Session, project_id: UUID, task_id: UUID) -> Task:
    task = db.get(Task, task_id)
    if not task or task.project_id != project_id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
    return task


def _serialize_summary(project: Project) -> ProjectSummary:
    return ProjectSummary(
        id=project.id,
        title=project.title,
        description=project.description,
        goal=project.goal,
        category=project.category,
        status=project.status,
        task_count=len(project.tasks),
        created_at=project.created_at,
    )


def _serialize_task(task: Task) -> ProjectTaskSummary:
    return ProjectTaskSummary(
        id=task.id,
        title=task.title,
        description=task.description,
        estimated_minutes=task.estimated_minutes,
        priority=task.priority,
        position=task.position,
        status=task.status,
        fields=[_serialize_field(field) for field in task.fields],
    )


def _serialize_field(field: TaskField) -> TaskFieldSummary:
    return TaskFieldSummary(
        id=field.id,
        name=field.name,
        label=field.label,
        type=field.field_type,
        required=field.required,
        order=field.field_order,
        value=field.value,
    )
