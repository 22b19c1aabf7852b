"""Planning API routes: clarifying questions and task generation."""
from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.exc import SQLAlchemyError

from tasker.api.deps import get_planner, get_task_sink
from tasker.api.schemas.planning import (
    PlanResponse,
    QuestionPayload,
    QuestionsRequest,
    QuestionsResponse,
    QuickTasksRequest,
    QuickTasksResponse,
    TaskPayload,
    TasksFromAnswersRequest,
)
from tasker.observability.metrics import log_metric
from tasker.observability.tracing import annotate, trace
from tasker.services.persistence import TaskSink
from tasker.services.planner import TaskPlanner
from tasker.services.project_intake import derive_project_fields

router = APIRouter(prefix="/planning", tags=["planning"])


@router.post("/questions", response_model=QuestionsResponse)
def generate_questions_endpoint(
    payload: QuestionsRequest,
    http_request: Request,
    planner: TaskPlanner = Depends(get_planner),
) -> QuestionsResponse:
    """Ask the model for clarifying questions about a goal."""
    request_id = getattr(http_request.state, "request_id", None)
    metadata: Dict[str, Any] = {"route": "/planning/questions", "goal_length": len(payload.goal)}

    success = False
    try:
        with trace("planning.questions", metadata=metadata, request_id=request_id):
            questions = planner.generate_questions(payload.goal)
            success = True
    finally:
        log_metric("planning.questions.success", 1 if success else 0, metadata=metadata)

    log_metric("planning.questions.count", len(questions), metadata=metadata)
    return QuestionsResponse(
        questions=[QuestionPayload.from_record(question) for question in questions],
        request_id=request_id or "",
    )


@router.post("/tasks", response_model=PlanResponse, status_code=status.HTTP_201_CREATED)
def generate_plan_endpoint(
    payload: TasksFromAnswersRequest,
    http_request: Request,
    planner: TaskPlanner = Depends(get_planner),
    sink: TaskSink = Depends(get_task_sink),
) -> PlanResponse:
    """Generate tasks from the goal plus answers and store them as a project."""
    request_id = getattr(http_request.state, "request_id", None)
    metadata: Dict[str, Any] = {
        "route": "/planning/tasks",
        "goal_length": len(payload.goal),
        "answers": len(payload.answers),
    }

    success = False
    try:
        with trace("planning.tasks", metadata=metadata, request_id=request_id) as span:
            plan = planner.generate_tasks_from_answers(payload.goal, payload.answers)
            try:
                project_id = sink.save_plan(payload.goal, payload.answers, plan)
            except SQLAlchemyError as exc:
                raise HTTPException(
                    status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                    detail="Failed to save project",
                ) from exc
            annotate(span, project_id=str(project_id), tasks=len(plan.tasks))
            success = True
    finally:
        log_metric("planning.tasks.success", 1 if success else 0, metadata=metadata)

    log_metric("planning.tasks.count", len(plan.tasks), metadata=metadata)
    derived = derive_project_fields(payload.goal, plan.project_title)
    return PlanResponse(
        project_id=project_id,
        project_title=derived.title,
        project_description=plan.project_description,
        category=derived.category,
        tasks=[TaskPayload.from_record(task) for task in plan.tasks],
        request_id=request_id or "",
    )


@router.post("/quick-tasks", response_model=QuickTasksResponse)
def generate_quick_tasks_endpoint(
    payload: QuickTasksRequest,
    http_request: Request,
    planner: TaskPlanner = Depends(get_planner),
) -> QuickTasksResponse:
    """Break a goal straight into a short task list without storing it."""
    request_id = getattr(http_request.state, "request_id", None)
    metadata: Dict[str, Any] = {
        "route": "/planning/quick-tasks",
        "goal_length": len(payload.goal),
        "time_available_hours": payload.time_available_hours,
        "priority": payload.priority,
    }

    with trace("planning.quick_tasks", metadata=metadata, request_id=request_id):
        tasks = planner.generate_tasks(
            payload.goal,
            time_available_hours=payload.time_available_hours,
            category=payload.category,
            priority=payload.priority,
        )

    log_metric("planning.quick_tasks.count", len(tasks), metadata=metadata)
    return QuickTasksResponse(
        tasks=[TaskPayload.from_record(task) for task in tasks],
        request_id=request_id or "",
    )
